"""
Accommodation Domain Entities

- Booking: aggregate root for one participant's stay + meals + payment state
- BookingStatus / PaymentStatus: lifecycle enumerations
- GuestDetails, StaySelection, PaymentSnapshot: value objects held by Booking
- BookingChanges / AmendmentResult: input and output of an amendment
"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Tuple
from uuid import UUID

from apps.catalog.domain import CatalogSnapshot
from shared.domain.base import Aggregate, ValueObject, utc_now
from shared.domain.value_objects import Money

from .errors import PaymentProofRequiredError, ValidationError
from .events import (
    AccommodationBookingAmended,
    AccommodationBookingCancelled,
    AccommodationBookingCreated,
    AccommodationPaymentStatusChanged,
)
from .payments import PaymentProof, PaymentSubmission, normalize_payment
from .pricing import meal_cost, meals_outside_window, nights_between, stay_cost

MAX_STAY_NIGHTS = 60


class BookingStatus(str, Enum):
    """
    Booking lifecycle

    - CONFIRMED: created; the only status amendments are accepted in
    - CANCELLED: cancelled by an admin; frees the user to book again
    """
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'


class PaymentStatus(str, Enum):
    PENDING = 'PENDING'
    VERIFIED = 'VERIFIED'
    FAILED = 'FAILED'


@dataclass(frozen=True)
class GuestDetails(ValueObject):
    """Guest details captured at booking time, independent of the user profile"""
    name: str
    mobile_number: str
    state: str
    district: str
    college_name: str
    college_address: str
    whatsapp_number: str = ''

    REQUIRED = ('name', 'mobile_number', 'state', 'district', 'college_name', 'college_address')

    def missing_fields(self) -> list:
        return [name for name in self.REQUIRED if not (getattr(self, name) or '').strip()]

    def cleaned(self) -> 'GuestDetails':
        return GuestDetails(**{f.name: (getattr(self, f.name) or '').strip() for f in fields(self)})


@dataclass(frozen=True)
class StaySelection(ValueObject):
    stay_id: UUID
    check_in: date
    check_out: date

    @property
    def nights(self) -> int:
        return nights_between(self.check_in, self.check_out)


@dataclass(frozen=True)
class PaymentSnapshot(ValueObject):
    """Payment state as it was before the first amendment; written once"""
    total: Money
    transaction_id: str
    proof_ref: str
    status: 'PaymentStatus'
    captured_at: datetime


@dataclass(frozen=True)
class BookingChanges:
    """
    Partial amendment input

    Every part is optional; None keeps the stored value. meal_ids=() clears
    the meal selection. The payment is normalized only when the edit costs
    more than what was already paid.
    """
    guest: GuestDetails | None = None
    stay: StaySelection | None = None
    meal_ids: Tuple[UUID, ...] | None = None
    payment: PaymentSubmission | PaymentProof | None = None


@dataclass(frozen=True)
class AmendmentResult:
    booking: 'Booking'
    previous_total: Money
    additional_amount: Money


def unique_meal_ids(meal_ids: Iterable[UUID]) -> Tuple[UUID, ...]:
    """Drop repeated ids, keeping first-seen order"""
    return tuple(dict.fromkeys(meal_ids))


def validate_guest(guest: GuestDetails) -> GuestDetails:
    guest = guest.cleaned()
    missing = guest.missing_fields()
    if missing:
        raise ValidationError(
            f"Missing required guest details: {', '.join(missing)}",
            details={'missing_fields': missing},
        )
    return guest


def validate_selection(stay: StaySelection, meal_ids: Tuple[UUID, ...], catalog: CatalogSnapshot):
    """Dates, stay and meals must agree with each other and with the catalog"""
    if stay.check_out <= stay.check_in:
        raise ValidationError('Check-out date must be after check-in date')
    if stay.nights > MAX_STAY_NIGHTS:
        raise ValidationError(
            f'A stay can be at most {MAX_STAY_NIGHTS} nights',
            details={'number_of_nights': stay.nights},
        )

    if catalog.stay(stay.stay_id) is None:
        raise ValidationError('Selected stay does not exist', details={'stay_id': str(stay.stay_id)})

    unknown = [str(meal_id) for meal_id in meal_ids if catalog.meal(meal_id) is None]
    if unknown:
        raise ValidationError('Selected meals do not exist', details={'meal_ids': unknown})

    outside = meals_outside_window(meal_ids, catalog, stay.check_in, stay.check_out)
    if outside:
        raise ValidationError(
            'Selected meals must be served on days within your stay',
            details={'meal_ids': [str(meal_id) for meal_id in outside]},
        )


@dataclass(eq=False, kw_only=True)
class Booking(Aggregate):
    """
    Accommodation Booking Aggregate Root

    Invariants:
    - total_price == stay_price + meal_price whenever the booking is at rest
    - payment_original is written once, on the first amendment, and never again
    - has_been_modified only ever goes from False to True
    - every selected meal is served on a weekday within [check_in, check_out)
    """

    user_id: int
    guest: GuestDetails
    stay: StaySelection
    nights: int
    stay_price: Money
    meal_ids: Tuple[UUID, ...] = ()
    meal_price: Money = field(default_factory=Money.zero)
    total_price: Money = field(default_factory=Money.zero)

    # Current payment
    transaction_id: str = ''
    proof_ref: str = ''
    payment_handle: str = ''
    payment_status: PaymentStatus = PaymentStatus.PENDING
    verified_at: datetime | None = None
    verified_by: int | None = None

    # Audit trail
    payment_original: PaymentSnapshot | None = None
    has_been_modified: bool = False

    status: BookingStatus = BookingStatus.CONFIRMED
    cancelled_at: datetime | None = None
    cancellation_reason: str = ''

    @classmethod
    def create(
        cls,
        *,
        user_id: int,
        guest: GuestDetails,
        stay: StaySelection,
        meal_ids: Iterable[UUID],
        catalog: CatalogSnapshot,
        payment: PaymentProof | None = None,
        now: datetime | None = None,
    ) -> 'Booking':
        """
        Start a booking in CONFIRMED / PENDING, not yet modified

        Prices come from the catalog only.
        Events: AccommodationBookingCreated
        """
        guest = validate_guest(guest)
        meal_ids = unique_meal_ids(meal_ids)
        validate_selection(stay, meal_ids, catalog)

        now = now or utc_now()
        nights = stay.nights
        stay_price = stay_cost(catalog.stay(stay.stay_id), nights)
        meal_price = meal_cost(meal_ids, catalog)

        booking = cls(
            user_id=user_id,
            guest=guest,
            stay=stay,
            nights=nights,
            stay_price=stay_price,
            meal_ids=meal_ids,
            meal_price=meal_price,
            total_price=stay_price + meal_price,
            created_at=now,
            updated_at=now,
        )
        if payment is not None:
            booking._apply_payment(payment)

        booking.add_event(AccommodationBookingCreated(
            aggregate_id=booking.id,
            booking_id=booking.id,
            user_id=user_id,
            total_price=booking.total_price,
        ))
        return booking

    @property
    def is_confirmed(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    def amend(self, changes: BookingChanges, catalog: CatalogSnapshot, now: datetime | None = None) -> AmendmentResult:
        """
        Apply a partial edit

        Everything is validated before the booking is touched, so a rejected
        amendment leaves it exactly as it was. Prices are re-read from the
        catalog only for the parts that changed.

        Events: AccommodationBookingAmended
        """
        if not self.is_confirmed:
            raise ValidationError('Only confirmed bookings can be edited')

        guest = validate_guest(changes.guest) if changes.guest is not None else self.guest
        stay = changes.stay if changes.stay is not None else self.stay
        meal_ids = unique_meal_ids(changes.meal_ids) if changes.meal_ids is not None else self.meal_ids

        if changes.stay is not None or changes.meal_ids is not None:
            validate_selection(stay, meal_ids, catalog)

        if changes.stay is not None:
            nights = stay.nights
            stay_price = stay_cost(catalog.stay(stay.stay_id), nights)
        else:
            nights, stay_price = self.nights, self.stay_price
        meal_price = meal_cost(meal_ids, catalog) if changes.meal_ids is not None else self.meal_price

        previous_total = self.total_price
        new_total = stay_price + meal_price
        additional = new_total.surplus_over(previous_total)
        payment = changes.payment
        if isinstance(payment, PaymentSubmission) and payment.is_blank:
            payment = None
        proof = None
        if additional:
            if payment is None:
                raise PaymentProofRequiredError(details={'additional_amount': str(additional.amount)})
            proof = normalize_payment(payment)

        now = now or utc_now()
        first_amendment = not self.has_been_modified
        if first_amendment:
            self.payment_original = PaymentSnapshot(
                total=self.total_price,
                transaction_id=self.transaction_id,
                proof_ref=self.proof_ref,
                status=self.payment_status,
                captured_at=now,
            )
            self.has_been_modified = True

        self.guest = guest
        self.stay = stay
        self.nights = nights
        self.stay_price = stay_price
        self.meal_ids = meal_ids
        self.meal_price = meal_price

        if proof is not None:
            self._apply_payment(proof)

        self.total_price = new_total
        self.touch(now)

        self.add_event(AccommodationBookingAmended(
            aggregate_id=self.id,
            booking_id=self.id,
            user_id=self.user_id,
            previous_total=previous_total,
            new_total=new_total,
            additional_amount=additional,
            first_amendment=first_amendment,
        ))
        return AmendmentResult(booking=self, previous_total=previous_total, additional_amount=additional)

    def update_payment_status(self, status: PaymentStatus, changed_by: int | None = None,
                              now: datetime | None = None):
        """
        Admin review of the current payment

        VERIFIED stamps who verified it and when; any other status clears
        that stamp. The original payment snapshot is never touched.
        """
        status = PaymentStatus(status)
        now = now or utc_now()
        old_status = self.payment_status

        self.payment_status = status
        if status == PaymentStatus.VERIFIED:
            self.verified_at = now
            self.verified_by = changed_by
        else:
            self.verified_at = None
            self.verified_by = None
        self.touch(now)

        self.add_event(AccommodationPaymentStatusChanged(
            aggregate_id=self.id,
            booking_id=self.id,
            old_status=old_status.value,
            new_status=status.value,
            changed_by=changed_by,
        ))

    def cancel(self, reason: str = '', cancelled_by: int | None = None, now: datetime | None = None):
        """CONFIRMED -> CANCELLED"""
        if not self.is_confirmed:
            raise ValidationError('Booking is already cancelled')

        now = now or utc_now()
        self.status = BookingStatus.CANCELLED
        self.cancelled_at = now
        self.cancellation_reason = reason or ''
        self.touch(now)

        self.add_event(AccommodationBookingCancelled(
            aggregate_id=self.id,
            booking_id=self.id,
            user_id=self.user_id,
            cancelled_by=cancelled_by,
            reason=self.cancellation_reason,
        ))

    def _apply_payment(self, payment: PaymentProof):
        """New proof becomes current and has to be verified again"""
        self.transaction_id = payment.transaction_id
        self.proof_ref = payment.proof_ref
        self.payment_handle = payment.payment_handle
        self.payment_status = PaymentStatus.PENDING
        self.verified_at = None
        self.verified_by = None
