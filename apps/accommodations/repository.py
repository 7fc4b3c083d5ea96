"""Maps the Booking aggregate to AccommodationBooking rows."""

from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import F  # type: ignore

from shared.domain.value_objects import Money
from shared.infrastructure.db import lock_queryset_if_possible

from .domain.entities import (
    Booking,
    BookingStatus,
    GuestDetails,
    PaymentSnapshot,
    PaymentStatus,
    StaySelection,
)
from .domain.errors import ConcurrentModificationError, DuplicateBookingError, StorageUnavailableError
from .models import AccommodationBooking

logger = logging.getLogger(__name__)


def booking_from_row(row: AccommodationBooking) -> Booking:
    original = None
    if row.has_been_modified and row.original_total_price is not None:
        original = PaymentSnapshot(
            total=Money.from_decimal(row.original_total_price),
            transaction_id=row.original_transaction_id,
            proof_ref=row.original_payment_screenshot,
            status=PaymentStatus(row.original_payment_status or PaymentStatus.PENDING.value),
            captured_at=row.original_captured_at or row.updated_at,
        )

    return Booking(
        id=row.id,
        user_id=row.user_id,
        guest=GuestDetails(
            name=row.name,
            mobile_number=row.mobile_number,
            whatsapp_number=row.whatsapp_number,
            state=row.state,
            district=row.district,
            college_name=row.college_name,
            college_address=row.college_address,
        ),
        stay=StaySelection(
            stay_id=row.stay_id,
            check_in=row.check_in_date,
            check_out=row.check_out_date,
        ),
        nights=row.number_of_nights,
        stay_price=Money.from_decimal(row.total_stay_price),
        meal_ids=tuple(UUID(str(meal_id)) for meal_id in row.selected_meals or ()),
        meal_price=Money.from_decimal(row.total_meal_price),
        total_price=Money.from_decimal(row.total_price),
        transaction_id=row.transaction_id,
        proof_ref=row.payment_screenshot,
        payment_handle=row.upi_id,
        payment_status=PaymentStatus(row.payment_status),
        verified_at=row.verified_at,
        verified_by=row.verified_by_id,
        payment_original=original,
        has_been_modified=row.has_been_modified,
        status=BookingStatus(row.status),
        cancelled_at=row.cancelled_at,
        cancellation_reason=row.cancellation_reason,
        version=row.version,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _row_values(booking: Booking) -> dict:
    """Column values for every field the aggregate may change"""
    original = booking.payment_original
    return {
        "name": booking.guest.name,
        "mobile_number": booking.guest.mobile_number,
        "whatsapp_number": booking.guest.whatsapp_number,
        "state": booking.guest.state,
        "district": booking.guest.district,
        "college_name": booking.guest.college_name,
        "college_address": booking.guest.college_address,
        "stay_id": booking.stay.stay_id,
        "check_in_date": booking.stay.check_in,
        "check_out_date": booking.stay.check_out,
        "number_of_nights": booking.nights,
        "total_stay_price": booking.stay_price.amount,
        "selected_meals": [str(meal_id) for meal_id in booking.meal_ids],
        "total_meal_price": booking.meal_price.amount,
        "total_price": booking.total_price.amount,
        "transaction_id": booking.transaction_id,
        "payment_screenshot": booking.proof_ref,
        "upi_id": booking.payment_handle,
        "payment_status": booking.payment_status.value,
        "verified_at": booking.verified_at,
        "verified_by_id": booking.verified_by,
        "original_total_price": original.total.amount if original else None,
        "original_transaction_id": original.transaction_id if original else "",
        "original_payment_screenshot": original.proof_ref if original else "",
        "original_payment_status": original.status.value if original else "",
        "original_captured_at": original.captured_at if original else None,
        "has_been_modified": booking.has_been_modified,
        "status": booking.status.value,
        "cancelled_at": booking.cancelled_at,
        "cancellation_reason": booking.cancellation_reason,
        "updated_at": booking.updated_at,
    }


class DjangoAccommodationRepository:
    """
    Record store for Booking aggregates

    Updates are conditional on the version that was loaded, so a writer that
    read a stale booking fails instead of overwriting a newer one.
    """

    def get(self, booking_id: UUID, lock: bool = False) -> Optional[Booking]:
        queryset = AccommodationBooking.objects.filter(pk=booking_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        row = queryset.first()
        return booking_from_row(row) if row else None

    def get_for_owner(self, booking_id: UUID, user_id: int, lock: bool = False) -> Optional[Booking]:
        queryset = AccommodationBooking.objects.filter(pk=booking_id, user_id=user_id)
        if lock:
            queryset = lock_queryset_if_possible(queryset)
        row = queryset.first()
        return booking_from_row(row) if row else None

    def get_confirmed_for_user(self, user_id: int) -> Optional[Booking]:
        row = (
            AccommodationBooking.objects.filter(user_id=user_id, status=BookingStatus.CONFIRMED.value)
            .order_by("-created_at")
            .first()
        )
        return booking_from_row(row) if row else None

    def has_confirmed(self, user_id: int) -> bool:
        return AccommodationBooking.objects.filter(
            user_id=user_id, status=BookingStatus.CONFIRMED.value
        ).exists()

    def add(self, booking: Booking) -> None:
        """Insert a new booking; the partial unique index settles concurrent creates"""
        values = _row_values(booking)
        try:
            with transaction.atomic():
                AccommodationBooking.objects.create(
                    id=booking.id,
                    user_id=booking.user_id,
                    version=booking.version,
                    created_at=booking.created_at,
                    **values,
                )
        except IntegrityError as exc:
            if self.has_confirmed(booking.user_id):
                logger.info(f"Rejected second confirmed booking for user {booking.user_id}")
                raise DuplicateBookingError() from exc
            logger.error(f"Integrity error while inserting booking {booking.id}: {exc}")
            raise StorageUnavailableError() from exc

    def save(self, booking: Booking) -> None:
        """UPDATE ... WHERE id = ? AND version = ?; bumps the version on success"""
        updated = AccommodationBooking.objects.filter(
            pk=booking.id,
            version=booking.version,
        ).update(version=F("version") + 1, **_row_values(booking))

        if updated == 0:
            logger.warning(
                f"Concurrent modification of booking {booking.id} "
                f"(expected version {booking.version})"
            )
            raise ConcurrentModificationError()
        booking.version += 1
