"""Unit tests for the Booking aggregate: creation, amendment and admin transitions."""

from __future__ import annotations

import copy
from dataclasses import replace
from datetime import timedelta

import pytest

from apps.accommodations.domain.entities import (
    MAX_STAY_NIGHTS,
    Booking,
    BookingChanges,
    BookingStatus,
    PaymentStatus,
    StaySelection,
)
from apps.accommodations.domain.errors import PaymentProofRequiredError, ValidationError
from apps.accommodations.domain.events import (
    AccommodationBookingAmended,
    AccommodationBookingCancelled,
    AccommodationBookingCreated,
    AccommodationPaymentStatusChanged,
)
from apps.accommodations.domain.payments import PaymentSubmission, normalize_payment
from shared.domain.value_objects import Money

from .factories import (
    CATALOG,
    DORM,
    HOSTEL,
    MONDAY_BREAKFAST,
    MONDAY_DINNER,
    SUNDAY,
    TUESDAY_LUNCH,
    WEDNESDAY,
    WEDNESDAY_LUNCH,
    guest,
    new_booking,
    proof,
    three_night_stay,
)


def assert_total_invariant(booking: Booking):
    assert booking.total_price == booking.stay_price + booking.meal_price


# ===== Create =====

def test_scenario_a_create_three_nights_no_meals():
    booking = Booking.create(
        user_id=7,
        guest=guest(),
        stay=three_night_stay(),
        meal_ids=[],
        catalog=CATALOG,
        payment=proof("original"),
    )

    assert booking.total_price == Money.from_decimal("3000")
    assert booking.nights == 3
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.has_been_modified is False
    assert booking.payment_original is None
    assert booking.status == BookingStatus.CONFIRMED
    assert booking.transaction_id == "UPI-TXN-original"
    assert [type(event) for event in booking.events] == [AccommodationBookingCreated]


def test_create_without_payment_is_allowed():
    booking = Booking.create(
        user_id=7, guest=guest(), stay=three_night_stay(), meal_ids=[], catalog=CATALOG,
    )
    assert booking.transaction_id == ""
    assert booking.payment_status == PaymentStatus.PENDING


def test_create_prices_meals_and_drops_duplicate_ids():
    booking = new_booking(meal_ids=[MONDAY_DINNER.id, MONDAY_DINNER.id, TUESDAY_LUNCH.id])

    assert booking.meal_ids == (MONDAY_DINNER.id, TUESDAY_LUNCH.id)
    assert booking.meal_price == Money.from_decimal("270.35")
    assert booking.total_price == Money.from_decimal("3270.35")
    assert_total_invariant(booking)


def test_create_rejects_checkout_before_checkin():
    stay = StaySelection(stay_id=HOSTEL.id, check_in=WEDNESDAY, check_out=SUNDAY)
    with pytest.raises(ValidationError):
        Booking.create(user_id=7, guest=guest(), stay=stay, meal_ids=[], catalog=CATALOG)


def test_stay_length_is_capped():
    longest = StaySelection(stay_id=HOSTEL.id, check_in=SUNDAY, check_out=SUNDAY + timedelta(days=MAX_STAY_NIGHTS))
    booking = Booking.create(user_id=7, guest=guest(), stay=longest, meal_ids=[], catalog=CATALOG)
    assert booking.nights == MAX_STAY_NIGHTS

    years = StaySelection(stay_id=HOSTEL.id, check_in=SUNDAY, check_out=SUNDAY + timedelta(days=3 * 365))
    with pytest.raises(ValidationError) as excinfo:
        Booking.create(user_id=7, guest=guest(), stay=years, meal_ids=[], catalog=CATALOG)
    assert excinfo.value.details["number_of_nights"] == 3 * 365

    existing = new_booking()
    with pytest.raises(ValidationError):
        existing.amend(BookingChanges(stay=years), CATALOG)
    assert existing.nights == 3


def test_create_rejects_meal_outside_stay_days():
    with pytest.raises(ValidationError) as excinfo:
        new_booking(meal_ids=[WEDNESDAY_LUNCH.id])
    assert str(WEDNESDAY_LUNCH.id) in excinfo.value.details["meal_ids"]


def test_create_rejects_missing_guest_fields():
    with pytest.raises(ValidationError) as excinfo:
        Booking.create(
            user_id=7, guest=guest(district="  ", college_name=""),
            stay=three_night_stay(), meal_ids=[], catalog=CATALOG,
        )
    assert excinfo.value.details["missing_fields"] == ["district", "college_name"]


def test_create_rejects_unknown_stay():
    from uuid import uuid4

    stay = StaySelection(stay_id=uuid4(), check_in=SUNDAY, check_out=WEDNESDAY)
    with pytest.raises(ValidationError):
        Booking.create(user_id=7, guest=guest(), stay=stay, meal_ids=[], catalog=CATALOG)


# ===== Amend =====

def test_scenario_b_adding_meals_snapshots_and_requires_new_proof():
    booking = new_booking()

    result = booking.amend(
        BookingChanges(meal_ids=(MONDAY_BREAKFAST.id, MONDAY_DINNER.id), payment=proof("extra")),
        CATALOG,
    )

    assert booking.payment_original is not None
    assert booking.payment_original.total == Money.from_decimal("3000")
    assert booking.payment_original.transaction_id == "UPI-TXN-original"
    assert booking.payment_original.status == PaymentStatus.PENDING
    assert booking.has_been_modified is True
    assert booking.total_price == Money.from_decimal("3300")
    assert result.additional_amount == Money.from_decimal("300")
    assert result.previous_total == Money.from_decimal("3000")
    assert booking.transaction_id == "UPI-TXN-extra"
    assert booking.proof_ref == "payments/proof_extra.png"
    assert booking.payment_status == PaymentStatus.PENDING
    assert_total_invariant(booking)


def test_scenario_c_removing_meals_keeps_payment_and_snapshot():
    booking = new_booking()
    booking.amend(
        BookingChanges(meal_ids=(MONDAY_BREAKFAST.id, MONDAY_DINNER.id), payment=proof("extra")),
        CATALOG,
    )
    snapshot = booking.payment_original

    result = booking.amend(BookingChanges(meal_ids=()), CATALOG)

    assert booking.total_price == Money.from_decimal("3000")
    assert result.additional_amount == Money.zero()
    assert booking.transaction_id == "UPI-TXN-extra"
    assert booking.proof_ref == "payments/proof_extra.png"
    assert booking.payment_original is snapshot
    assert booking.payment_original.total == Money.from_decimal("3000")
    assert booking.payment_original.status == PaymentStatus.PENDING
    assert_total_invariant(booking)


def test_scenario_e_invalid_dates_leave_booking_untouched():
    booking = new_booking(meal_ids=[MONDAY_DINNER.id])
    before = copy.deepcopy(booking)

    with pytest.raises(ValidationError):
        booking.amend(
            BookingChanges(stay=StaySelection(stay_id=HOSTEL.id, check_in=WEDNESDAY, check_out=WEDNESDAY)),
            CATALOG,
        )

    assert booking.has_been_modified is False
    assert booking.payment_original is None
    assert booking.stay == before.stay
    assert booking.total_price == before.total_price
    assert booking.updated_at == before.updated_at
    assert booking.events == []


def test_first_amendment_snapshots_even_without_price_change():
    booking = new_booking()

    result = booking.amend(BookingChanges(guest=guest(name="Asha R.")), CATALOG)

    assert booking.has_been_modified is True
    assert booking.payment_original is not None
    assert booking.payment_original.total == Money.from_decimal("3000")
    assert result.additional_amount == Money.zero()
    assert booking.guest.name == "Asha R."


def test_snapshot_is_written_once():
    booking = new_booking()
    booking.amend(BookingChanges(guest=guest(name="First")), CATALOG)
    first_snapshot = booking.payment_original

    booking.amend(
        BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=proof("second")),
        CATALOG,
        now=first_snapshot.captured_at + timedelta(hours=1),
    )
    booking.update_payment_status(PaymentStatus.VERIFIED, changed_by=1)
    booking.amend(BookingChanges(stay=three_night_stay(DORM)), CATALOG)

    assert booking.payment_original == first_snapshot
    assert booking.has_been_modified is True


def test_additional_amount_is_relative_to_last_total():
    booking = new_booking()
    booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=proof("2")), CATALOG)

    result = booking.amend(
        BookingChanges(meal_ids=(MONDAY_DINNER.id, MONDAY_BREAKFAST.id), payment=proof("3")),
        CATALOG,
    )

    assert result.previous_total == Money.from_decimal("3150")
    assert result.additional_amount == Money.from_decimal("150")
    assert booking.payment_original.total == Money.from_decimal("3000")


def test_cheaper_stay_never_yields_negative_amount():
    booking = new_booking()

    result = booking.amend(BookingChanges(stay=three_night_stay(DORM)), CATALOG)

    assert result.additional_amount == Money.zero()
    assert booking.total_price == Money.from_decimal("1500")
    assert booking.transaction_id == "UPI-TXN-original"
    assert_total_invariant(booking)


def test_costlier_edit_without_proof_is_rejected_untouched():
    booking = new_booking()

    with pytest.raises(PaymentProofRequiredError) as excinfo:
        booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,)), CATALOG)

    assert excinfo.value.details["additional_amount"] == "150.00"
    assert booking.has_been_modified is False
    assert booking.meal_ids == ()
    assert booking.total_price == Money.from_decimal("3000")


def test_proof_without_additional_amount_is_ignored():
    booking = new_booking()
    booking.update_payment_status(PaymentStatus.VERIFIED, changed_by=1)

    booking.amend(BookingChanges(guest=guest(name="New"), payment=proof("unneeded")), CATALOG)

    assert booking.transaction_id == "UPI-TXN-original"
    assert booking.payment_status == PaymentStatus.VERIFIED


def test_blank_submission_counts_as_no_proof():
    booking = new_booking()
    blank = PaymentSubmission(transaction_id="", proof_ref="  ", payment_handle=None)

    with pytest.raises(PaymentProofRequiredError):
        booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=blank), CATALOG)

    booking.amend(BookingChanges(guest=guest(name="New"), payment=blank), CATALOG)
    assert booking.transaction_id == "UPI-TXN-original"


def test_malformed_submission_is_only_checked_when_payment_is_due():
    booking = new_booking(meal_ids=(MONDAY_DINNER.id,))
    malformed = PaymentSubmission(transaction_id="UPI-2", proof_ref="")

    result = booking.amend(BookingChanges(meal_ids=(), payment=malformed), CATALOG)
    assert result.additional_amount == Money.zero()

    with pytest.raises(ValidationError):
        booking.amend(BookingChanges(meal_ids=(MONDAY_BREAKFAST.id, MONDAY_DINNER.id), payment=malformed), CATALOG)
    assert booking.meal_ids == ()


def test_raw_submission_is_normalized_when_payment_is_due():
    booking = new_booking()
    submission = PaymentSubmission(transaction_id=" UPI-2 ", proof_ref="payments/second.png ")

    booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=submission), CATALOG)

    assert booking.transaction_id == "UPI-2"
    assert booking.proof_ref == "payments/second.png"
    assert booking.payment_handle == ""


def test_new_proof_resets_verified_payment():
    booking = new_booking()
    booking.update_payment_status(PaymentStatus.VERIFIED, changed_by=1)

    booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=proof("extra")), CATALOG)

    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.verified_at is None
    assert booking.verified_by is None
    assert booking.payment_original.status == PaymentStatus.VERIFIED


def test_changing_dates_revalidates_existing_meals():
    booking = new_booking(meal_ids=[MONDAY_DINNER.id])
    shorter = StaySelection(stay_id=HOSTEL.id, check_in=SUNDAY, check_out=SUNDAY + timedelta(days=1))

    with pytest.raises(ValidationError):
        booking.amend(BookingChanges(stay=shorter), CATALOG)

    result = booking.amend(BookingChanges(stay=shorter, meal_ids=()), CATALOG)
    assert booking.nights == 1
    assert booking.total_price == Money.from_decimal("1000")
    assert result.additional_amount == Money.zero()


def test_guest_only_edit_keeps_locked_prices():
    booking = new_booking(meal_ids=[MONDAY_DINNER.id])
    repriced = replace(CATALOG, stays={HOSTEL.id: replace(HOSTEL, nightly_price=Money.from_decimal("5000"))})

    result = booking.amend(BookingChanges(guest=guest(name="Renamed")), repriced)

    assert result.additional_amount == Money.zero()
    assert booking.stay_price == Money.from_decimal("3000")
    assert_total_invariant(booking)


def test_amend_emits_event_with_amounts():
    booking = new_booking()
    booking.amend(BookingChanges(meal_ids=(MONDAY_DINNER.id,), payment=proof("x")), CATALOG)

    (event,) = booking.events
    assert isinstance(event, AccommodationBookingAmended)
    assert event.first_amendment is True
    assert event.additional_amount == Money.from_decimal("150")
    assert event.to_dict()["new_total"] == "3150.00"


def test_many_amendments_keep_total_exact():
    booking = new_booking()
    for i in range(25):
        meals = (TUESDAY_LUNCH.id,) if i % 2 == 0 else ()
        booking.amend(BookingChanges(meal_ids=meals, payment=proof(str(i))), CATALOG)
        assert_total_invariant(booking)

    assert booking.total_price.minor == 300000 + 12035
    assert booking.payment_original.total == Money.from_decimal("3000")


def test_cancelled_booking_cannot_be_amended():
    booking = new_booking()
    booking.cancel("Duplicate registration", cancelled_by=1)

    with pytest.raises(ValidationError):
        booking.amend(BookingChanges(guest=guest(name="Late")), CATALOG)


# ===== Admin transitions =====

def test_verify_and_fail_payment():
    booking = new_booking()

    booking.update_payment_status(PaymentStatus.VERIFIED, changed_by=42)
    assert booking.payment_status == PaymentStatus.VERIFIED
    assert booking.verified_by == 42
    assert booking.verified_at is not None

    booking.update_payment_status(PaymentStatus.FAILED, changed_by=42)
    assert booking.payment_status == PaymentStatus.FAILED
    assert booking.verified_at is None
    assert booking.payment_original is None
    assert [type(e) for e in booking.events] == [AccommodationPaymentStatusChanged] * 2


def test_cancel_once():
    booking = new_booking()
    booking.cancel("No show", cancelled_by=1)

    assert booking.status == BookingStatus.CANCELLED
    assert booking.cancellation_reason == "No show"
    assert isinstance(booking.events[-1], AccommodationBookingCancelled)
    with pytest.raises(ValidationError):
        booking.cancel()


# ===== Payment adapter =====

def test_normalize_payment_trims_fields():
    payment = normalize_payment(PaymentSubmission(
        transaction_id="  T123 ", proof_ref=" payments/a.png ", payment_handle=" asha@okbank ",
    ))
    assert payment.transaction_id == "T123"
    assert payment.proof_ref == "payments/a.png"
    assert payment.payment_handle == "asha@okbank"


def test_normalize_payment_handle_is_optional():
    payment = normalize_payment(PaymentSubmission(transaction_id="T1", proof_ref="payments/a.png"))
    assert payment.payment_handle == ""


@pytest.mark.parametrize(
    "submission, field",
    [
        (PaymentSubmission(transaction_id="", proof_ref="payments/a.png"), "transaction_id"),
        (PaymentSubmission(transaction_id="T1", proof_ref="   "), "proof_ref"),
        (PaymentSubmission(transaction_id="T1", proof_ref="k", payment_handle="not-a-upi"), "payment_handle"),
    ],
)
def test_normalize_payment_rejects(submission, field):
    with pytest.raises(ValidationError) as excinfo:
        normalize_payment(submission)
    assert field in excinfo.value.details
