"""
Accommodation Command Handlers

Use cases of the booking engine. Each handler runs one unit of work:
load, mutate the aggregate, save, and let the unit of work publish the
collected events after commit.

Commands:
- CreateAccommodationBookingCommand: first booking for a user
- AmendAccommodationBookingCommand: partial edit with payment reconciliation
- UpdatePaymentStatusCommand: admin verdict on the current payment
- CancelAccommodationBookingCommand: admin cancellation
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Tuple
from uuid import UUID
import logging

from apps.accommodations.domain.entities import (
    AmendmentResult,
    Booking,
    BookingChanges,
    GuestDetails,
    PaymentStatus,
    StaySelection,
)
from apps.accommodations.domain.errors import BookingNotFoundError, DuplicateBookingError, ValidationError
from apps.accommodations.domain.payments import PaymentSubmission, normalize_payment
from shared.application.uow import DjangoUnitOfWork
from shared.domain.value_objects import Money
from shared.infrastructure.db import storage_guard

logger = logging.getLogger(__name__)


# ===== Commands =====

@dataclass
class CreateAccommodationBookingCommand:
    """
    Create the user's booking

    client_total is what the client displayed; it is compared with the
    computed total and logged when they differ, never stored.
    """
    user_id: int
    guest: GuestDetails
    stay_id: UUID
    check_in: date
    check_out: date
    meal_ids: Tuple[UUID, ...] = ()
    payment: Optional[PaymentSubmission] = None
    client_total: Optional[Decimal] = None


@dataclass
class AmendAccommodationBookingCommand:
    """
    Edit a booking; None means "keep the stored value"

    The stay is replaced as a whole: stay_id, check_in and check_out are
    given together or not at all.
    """
    booking_id: UUID
    user_id: int
    guest: Optional[GuestDetails] = None
    stay_id: Optional[UUID] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    meal_ids: Optional[Tuple[UUID, ...]] = None
    payment: Optional[PaymentSubmission] = None
    client_total: Optional[Decimal] = None


@dataclass
class UpdatePaymentStatusCommand:
    booking_id: UUID
    status: PaymentStatus
    admin_id: Optional[int] = None


@dataclass
class CancelAccommodationBookingCommand:
    booking_id: UUID
    admin_id: Optional[int] = None
    reason: str = ''


def _stay_selection(stay_id, check_in, check_out) -> StaySelection:
    if stay_id is None or check_in is None or check_out is None:
        raise ValidationError('Stay, check-in date and check-out date are required')
    return StaySelection(stay_id=stay_id, check_in=check_in, check_out=check_out)


def _check_client_total(booking: Booking, client_total: Optional[Decimal]):
    """Log when the client displayed a different total; the computed one always wins"""
    if client_total is None:
        return
    try:
        hinted = Money.from_decimal(client_total)
    except (InvalidOperation, ValueError, TypeError):
        logger.warning(f"Ignoring malformed client total {client_total!r} for booking {booking.id}")
        return
    if hinted != booking.total_price:
        logger.warning(
            f"Client total {hinted} differs from computed total {booking.total_price} "
            f"for booking {booking.id}; using computed total"
        )


# ===== Command Handlers =====

class CreateAccommodationBookingHandler:
    """
    Handler for CreateAccommodationBooking

    The "one confirmed booking per user" rule is checked up front for a
    clear error and enforced by the partial unique index on insert, which
    is what settles two concurrent creates.
    """

    def __init__(self, booking_repo, catalog_repo):
        self.booking_repo = booking_repo
        self.catalog_repo = catalog_repo

    def handle(self, command: CreateAccommodationBookingCommand) -> Booking:
        logger.info(
            f"Creating accommodation booking for user {command.user_id}, "
            f"stay {command.stay_id}, dates {command.check_in} - {command.check_out}"
        )
        stay = _stay_selection(command.stay_id, command.check_in, command.check_out)
        submitted = command.payment is not None and not command.payment.is_blank
        payment = normalize_payment(command.payment) if submitted else None

        with storage_guard(), DjangoUnitOfWork() as uow:
            if self.booking_repo.has_confirmed(command.user_id):
                raise DuplicateBookingError()

            catalog = self.catalog_repo.load_snapshot(
                stay_ids=[stay.stay_id],
                meal_ids=command.meal_ids,
            )
            booking = Booking.create(
                user_id=command.user_id,
                guest=command.guest,
                stay=stay,
                meal_ids=command.meal_ids,
                catalog=catalog,
                payment=payment,
            )
            _check_client_total(booking, command.client_total)

            uow.collect_events(booking)
            self.booking_repo.add(booking)

        logger.info(f"Accommodation booking {booking.id} created, total {booking.total_price}")
        return booking


class AmendAccommodationBookingHandler:
    """
    Handler for AmendAccommodationBooking

    The row is locked where the backend supports it and saved with a
    version check; a concurrent writer gets ConcurrentModificationError
    and the transaction rolls back with the booking untouched.
    """

    def __init__(self, booking_repo, catalog_repo):
        self.booking_repo = booking_repo
        self.catalog_repo = catalog_repo

    def handle(self, command: AmendAccommodationBookingCommand) -> AmendmentResult:
        logger.info(f"Amending accommodation booking {command.booking_id} for user {command.user_id}")

        stay_given = any(v is not None for v in (command.stay_id, command.check_in, command.check_out))
        new_stay = _stay_selection(command.stay_id, command.check_in, command.check_out) if stay_given else None

        with storage_guard(), DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get_for_owner(command.booking_id, command.user_id, lock=True)
            if booking is None:
                raise BookingNotFoundError()

            stay = new_stay or booking.stay
            meal_ids = command.meal_ids if command.meal_ids is not None else booking.meal_ids
            catalog = self.catalog_repo.load_snapshot(stay_ids=[stay.stay_id], meal_ids=meal_ids)

            result = booking.amend(
                BookingChanges(
                    guest=command.guest,
                    stay=new_stay,
                    meal_ids=command.meal_ids,
                    payment=command.payment,
                ),
                catalog,
            )
            _check_client_total(booking, command.client_total)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        logger.info(
            f"Accommodation booking {booking.id} amended: {result.previous_total} -> "
            f"{booking.total_price}, additional {result.additional_amount}"
        )
        return result


class UpdatePaymentStatusHandler:
    """Handler for an admin payment verdict"""

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: UpdatePaymentStatusCommand) -> Booking:
        logger.info(f"Setting payment status of booking {command.booking_id} to {command.status}")

        with storage_guard(), DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            if booking is None:
                raise BookingNotFoundError('Booking not found')

            booking.update_payment_status(command.status, changed_by=command.admin_id)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        return booking


class CancelAccommodationBookingHandler:
    """Handler for admin cancellation"""

    def __init__(self, booking_repo):
        self.booking_repo = booking_repo

    def handle(self, command: CancelAccommodationBookingCommand) -> Booking:
        logger.info(f"Cancelling accommodation booking {command.booking_id}, reason: {command.reason}")

        with storage_guard(), DjangoUnitOfWork() as uow:
            booking = self.booking_repo.get(command.booking_id, lock=True)
            if booking is None:
                raise BookingNotFoundError('Booking not found')

            booking.cancel(command.reason, cancelled_by=command.admin_id)

            uow.collect_events(booking)
            self.booking_repo.save(booking)

        return booking
