"""Client-facing shapes of bookings and quotes.

Money leaves the engine as Decimal with two places, which the JSON renderer
writes as a plain number; dates as ISO strings.
"""

from __future__ import annotations

from typing import Any, Optional

from shared.domain.value_objects import Money

from .domain.entities import AmendmentResult, Booking, PaymentSnapshot
from .domain.pricing import PriceBreakdown


def money(value: Optional[Money]):
    return value.amount if value is not None else None


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def present_original_payment(snapshot: PaymentSnapshot) -> dict[str, Any]:
    return {
        "total_amount": money(snapshot.total),
        "transaction_id": snapshot.transaction_id or None,
        "payment_screenshot": snapshot.proof_ref or None,
        "payment_status": snapshot.status.value,
        "captured_at": _iso(snapshot.captured_at),
    }


def present_payment_history(booking: Booking) -> Optional[dict[str, Any]]:
    """None until the first amendment"""
    if not booking.has_been_modified or booking.payment_original is None:
        return None
    return {
        "original_payment": present_original_payment(booking.payment_original),
        "has_additional_payment": booking.has_been_modified,
        "last_modified": _iso(booking.updated_at),
    }


def present_booking(booking: Booking) -> dict[str, Any]:
    return {
        "id": str(booking.id),
        "user_id": booking.user_id,
        "status": booking.status.value,
        "guest": {
            "name": booking.guest.name,
            "mobile_number": booking.guest.mobile_number,
            "whatsapp_number": booking.guest.whatsapp_number or None,
            "state": booking.guest.state,
            "district": booking.guest.district,
            "college_name": booking.guest.college_name,
            "college_address": booking.guest.college_address,
        },
        "stay": {
            "stay_id": str(booking.stay.stay_id),
            "check_in_date": _iso(booking.stay.check_in),
            "check_out_date": _iso(booking.stay.check_out),
            "number_of_nights": booking.nights,
            "total_stay_price": money(booking.stay_price),
        },
        "meals": {
            "selected_meals": [str(meal_id) for meal_id in booking.meal_ids],
            "total_meal_price": money(booking.meal_price),
        },
        "total_price": money(booking.total_price),
        "payment": {
            "transaction_id": booking.transaction_id or None,
            "payment_screenshot": booking.proof_ref or None,
            "upi_id": booking.payment_handle or None,
            "payment_status": booking.payment_status.value,
            "verified_at": _iso(booking.verified_at),
        },
        "has_been_modified": booking.has_been_modified,
        "payment_history": present_payment_history(booking),
        "created_at": _iso(booking.created_at),
        "updated_at": _iso(booking.updated_at),
    }


def present_amendment(result: AmendmentResult) -> dict[str, Any]:
    data = present_booking(result.booking)
    data["previous_total"] = money(result.previous_total)
    data["additional_amount"] = money(result.additional_amount)
    return data


def present_review(booking: Booking) -> dict[str, Any]:
    """Admin view: payment history is always present, with every proof on file"""
    data = present_booking(booking)
    original = booking.payment_original
    screenshots = []
    if original is not None and original.proof_ref:
        screenshots.append({"kind": "original", "key": original.proof_ref})
    if booking.proof_ref and (original is None or booking.proof_ref != original.proof_ref):
        screenshots.append({"kind": "current", "key": booking.proof_ref})

    data["payment_history"] = {
        "original_payment": present_original_payment(original) if original else None,
        "has_additional_payment": booking.has_been_modified,
        "last_modified": _iso(booking.updated_at),
        "screenshots": screenshots,
    }
    data["payment"]["verified_by"] = booking.verified_by
    data["cancellation"] = {
        "cancelled_at": _iso(booking.cancelled_at),
        "reason": booking.cancellation_reason or None,
    }
    return data


def present_quote(breakdown: PriceBreakdown) -> dict[str, Any]:
    return {
        "number_of_nights": breakdown.nights,
        "total_stay_price": money(breakdown.stay_price),
        "total_meal_price": money(breakdown.meal_price),
        "total_price": money(breakdown.total),
    }
