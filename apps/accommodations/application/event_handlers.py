"""
Accommodation Event Handlers

Audit trail of the booking lifecycle. Each handler writes one structured
record; delivery of emails or notifications is left to other subscribers.
"""

import structlog

from apps.accommodations.domain.events import (
    AccommodationBookingAmended,
    AccommodationBookingCancelled,
    AccommodationBookingCreated,
    AccommodationPaymentStatusChanged,
)

audit_logger = structlog.get_logger("apps.accommodations.audit")


def audit_booking_created(event: AccommodationBookingCreated):
    audit_logger.info("accommodation.booking_created", **event.to_dict())


def audit_booking_amended(event: AccommodationBookingAmended):
    audit_logger.info("accommodation.booking_amended", **event.to_dict())


def audit_payment_status_changed(event: AccommodationPaymentStatusChanged):
    audit_logger.info("accommodation.payment_status_changed", **event.to_dict())


def audit_booking_cancelled(event: AccommodationBookingCancelled):
    audit_logger.info("accommodation.booking_cancelled", **event.to_dict())


EVENT_HANDLERS = {
    AccommodationBookingCreated: [audit_booking_created],
    AccommodationBookingAmended: [audit_booking_amended],
    AccommodationPaymentStatusChanged: [audit_payment_status_changed],
    AccommodationBookingCancelled: [audit_booking_cancelled],
}
