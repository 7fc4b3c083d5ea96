"""API views for accommodation bookings and the admin payment review."""

from __future__ import annotations

import logging
from uuid import UUID

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.parsers import FormParser, MultiPartParser  # type: ignore

from apps.catalog.permissions import IsAdmin
from apps.catalog.serializers import MealOfferingSerializer
from apps.catalog.models import MealOffering
from shared.application.message_bus import message_bus
from shared.infrastructure.api import success
from shared.infrastructure.storage import ArtifactRejected, upload_artifact

from .application.command_handlers import (
    AmendAccommodationBookingCommand,
    CancelAccommodationBookingCommand,
    CreateAccommodationBookingCommand,
    UpdatePaymentStatusCommand,
)
from .application.queries import get_booking_for_review, get_current_booking, meal_options_for_stay, quote_selection
from .application.session import require_user
from .domain.entities import PaymentStatus
from .domain.errors import ValidationError
from .filters import PaymentReviewFilter
from .models import AccommodationBooking
from .presenters import present_amendment, present_booking, present_quote, present_review
from .serializers import (
    BookingAmendSerializer,
    BookingCreateSerializer,
    CancelBookingSerializer,
    GuestDetailsSerializer,
    MealOptionsQuerySerializer,
    PaymentProofUploadSerializer,
    PaymentReviewListSerializer,
    PaymentStatusSerializer,
    QuoteSerializer,
    to_payment_submission,
    to_stay_selection,
)

logger = logging.getLogger(__name__)

UUID_REGEX = r"[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}"


class AccommodationBookingViewSet(viewsets.ViewSet):
    """A participant's own accommodation booking."""

    permission_classes = [permissions.IsAuthenticated]
    lookup_value_regex = UUID_REGEX

    def create(self, request):  # type: ignore
        identity = require_user(request.user)
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        booking = message_bus.handle_command(CreateAccommodationBookingCommand(
            user_id=identity.user_id,
            guest=GuestDetailsSerializer().to_guest(data["user_details"]),
            stay_id=data["stay"]["stay_id"],
            check_in=data["stay"]["check_in_date"],
            check_out=data["stay"]["check_out_date"],
            meal_ids=tuple(data.get("meals", {}).get("selected_meals", ())),
            payment=to_payment_submission(data.get("payment")),
            client_total=data.get("total_price"),
        ))
        return success(present_booking(booking), "Booking created successfully", status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        identity = require_user(request.user)
        serializer = BookingAmendSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        stay = data.get("stay")
        meals = data.get("meals")
        guest = data.get("user_details")
        result = message_bus.handle_command(AmendAccommodationBookingCommand(
            booking_id=UUID(str(pk)),
            user_id=identity.user_id,
            guest=GuestDetailsSerializer().to_guest(guest) if guest is not None else None,
            stay_id=stay["stay_id"] if stay else None,
            check_in=stay["check_in_date"] if stay else None,
            check_out=stay["check_out_date"] if stay else None,
            meal_ids=tuple(meals["selected_meals"]) if meals is not None else None,
            payment=to_payment_submission(data.get("payment")),
            client_total=data.get("total_price"),
        ))
        return success(present_amendment(result), "Booking updated successfully")

    @action(detail=False, methods=["get"])
    def me(self, request):  # type: ignore
        identity = require_user(request.user)
        booking = get_current_booking(identity.user_id)
        return success(present_booking(booking) if booking else None)

    @action(detail=False, methods=["post"])
    def quote(self, request):  # type: ignore
        require_user(request.user)
        serializer = QuoteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        breakdown = quote_selection(
            to_stay_selection(data["stay"]),
            data.get("meals", {}).get("selected_meals", ()),
        )
        return success(present_quote(breakdown))

    @action(detail=False, methods=["get"], url_path="meal-options")
    def meal_options(self, request):  # type: ignore
        require_user(request.user)
        serializer = MealOptionsQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        entries = meal_options_for_stay(
            serializer.validated_data["check_in"],
            serializer.validated_data["check_out"],
        )
        by_id = {meal.id: meal for meal in MealOffering.objects.filter(id__in=[e.id for e in entries])}
        ordered = [by_id[entry.id] for entry in entries if entry.id in by_id]
        return success(MealOfferingSerializer(ordered, many=True).data)

    @action(
        detail=False,
        methods=["post"],
        url_path="payment-proofs",
        parser_classes=[MultiPartParser, FormParser],
    )
    def payment_proofs(self, request):  # type: ignore
        identity = require_user(request.user)
        serializer = PaymentProofUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            key = upload_artifact(serializer.validated_data["file"])
        except ArtifactRejected as exc:
            raise ValidationError(str(exc), details={"file": str(exc)})
        logger.info(f"User {identity.user_id} uploaded payment proof {key}")
        return success({"key": key}, "Payment screenshot uploaded", status.HTTP_201_CREATED)


class AdminPaymentViewSet(viewsets.ReadOnlyModelViewSet):
    """Payment review for administrators."""

    queryset = AccommodationBooking.objects.select_related("user", "stay").order_by("-created_at")
    serializer_class = PaymentReviewListSerializer
    permission_classes = [IsAdmin]
    filterset_class = PaymentReviewFilter
    lookup_value_regex = UUID_REGEX

    def list(self, request, *args, **kwargs):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        return success(self.get_serializer(queryset, many=True).data)

    def retrieve(self, request, pk=None, *args, **kwargs):  # type: ignore
        return success(present_review(get_booking_for_review(UUID(str(pk)))))

    @action(detail=True, methods=["post"], url_path="status")
    def update_status(self, request, pk=None):  # type: ignore
        identity = require_user(request.user)
        serializer = PaymentStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = message_bus.handle_command(UpdatePaymentStatusCommand(
            booking_id=UUID(str(pk)),
            status=PaymentStatus(serializer.validated_data["payment_status"]),
            admin_id=identity.user_id,
        ))
        return success(present_review(booking), "Payment status updated")

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        identity = require_user(request.user)
        serializer = CancelBookingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = message_bus.handle_command(CancelAccommodationBookingCommand(
            booking_id=UUID(str(pk)),
            admin_id=identity.user_id,
            reason=serializer.validated_data.get("reason", ""),
        ))
        return success(present_review(booking), "Booking cancelled")
