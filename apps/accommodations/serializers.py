"""Request serializers for the accommodation API.

They check the shape of the input only. Business rules (dates, meal days,
totals, payment proof) are enforced by the domain so that every entry
point fails the same way.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain.entities import GuestDetails, PaymentStatus, StaySelection
from .domain.payments import PaymentSubmission
from .models import AccommodationBooking


class GuestDetailsSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    mobile_number = serializers.CharField(max_length=20)
    whatsapp_number = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    state = serializers.CharField(max_length=100)
    district = serializers.CharField(max_length=100)
    college_name = serializers.CharField(max_length=255)
    college_address = serializers.CharField(max_length=500)

    def to_guest(self, data: dict) -> GuestDetails:
        return GuestDetails(
            name=data["name"],
            mobile_number=data["mobile_number"],
            whatsapp_number=data.get("whatsapp_number") or "",
            state=data["state"],
            district=data["district"],
            college_name=data["college_name"],
            college_address=data["college_address"],
        )


class StaySelectionSerializer(serializers.Serializer):
    stay_id = serializers.UUIDField()
    check_in_date = serializers.DateField()
    check_out_date = serializers.DateField()


class MealSelectionSerializer(serializers.Serializer):
    selected_meals = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


class PaymentSerializer(serializers.Serializer):
    transaction_id = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    payment_screenshot = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    upi_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, trim_whitespace=False)


def to_payment_submission(data: dict | None) -> PaymentSubmission | None:
    if data is None:
        return None
    submission = PaymentSubmission(
        transaction_id=data.get("transaction_id"),
        proof_ref=data.get("payment_screenshot"),
        payment_handle=data.get("upi_id"),
    )
    return None if submission.is_blank else submission


def to_stay_selection(data: dict) -> StaySelection:
    return StaySelection(
        stay_id=data["stay_id"],
        check_in=data["check_in_date"],
        check_out=data["check_out_date"],
    )


class BookingCreateSerializer(serializers.Serializer):
    user_details = GuestDetailsSerializer()
    stay = StaySelectionSerializer()
    meals = MealSelectionSerializer(required=False)
    payment = PaymentSerializer(required=False, allow_null=True)
    total_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, required=False, allow_null=True,
        help_text="Total shown to the user; only compared with the computed total.",
    )


class BookingAmendSerializer(serializers.Serializer):
    user_details = GuestDetailsSerializer(required=False)
    stay = StaySelectionSerializer(required=False)
    meals = MealSelectionSerializer(required=False)
    payment = PaymentSerializer(required=False, allow_null=True)
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)


class QuoteSerializer(serializers.Serializer):
    stay = StaySelectionSerializer()
    meals = MealSelectionSerializer(required=False)


class MealOptionsQuerySerializer(serializers.Serializer):
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate(self, attrs):  # type: ignore
        if attrs["check_out"] <= attrs["check_in"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date"})
        return attrs


class PaymentProofUploadSerializer(serializers.Serializer):
    file = serializers.FileField()


class PaymentStatusSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=[status.value for status in PaymentStatus])


class CancelBookingSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, default="")


class PaymentReviewListSerializer(serializers.ModelSerializer):
    """Row of the admin payments table"""

    email = serializers.ReadOnlyField(source="user.email")
    stay_place = serializers.ReadOnlyField(source="stay.place")
    total_price = serializers.DecimalField(max_digits=12, decimal_places=2, coerce_to_string=False)
    original_total_price = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False, allow_null=True
    )

    class Meta:
        model = AccommodationBooking
        fields = [
            "id",
            "name",
            "email",
            "mobile_number",
            "stay_place",
            "check_in_date",
            "check_out_date",
            "number_of_nights",
            "total_price",
            "original_total_price",
            "transaction_id",
            "payment_status",
            "status",
            "has_been_modified",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields
