"""Persistence model for accommodation bookings."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import F, Q  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from .domain.entities import BookingStatus, PaymentStatus


def _choices(enum_cls):
    return [(member.value, member.value.title()) for member in enum_cls]


class AccommodationBooking(models.Model):
    """One participant's stay + meals + payment state.

    Rows are written only through the accommodations repository, which
    recomputes prices and bumps ``version`` on every update.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="accommodation_bookings",
    )

    # Guest details
    name = models.CharField(max_length=255)
    mobile_number = models.CharField(max_length=20)
    whatsapp_number = models.CharField(max_length=20, blank=True)
    state = models.CharField(max_length=100)
    district = models.CharField(max_length=100)
    college_name = models.CharField(_("Institution name"), max_length=255)
    college_address = models.CharField(_("Institution address"), max_length=500)

    # Stay
    stay = models.ForeignKey(
        "catalog.Stay",
        on_delete=models.PROTECT,
        related_name="accommodation_bookings",
    )
    check_in_date = models.DateField()
    check_out_date = models.DateField()
    number_of_nights = models.PositiveIntegerField()
    total_stay_price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))]
    )

    # Meals
    selected_meals = models.JSONField(default=list, blank=True)
    total_meal_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00"),
        validators=[MinValueValidator(Decimal("0.00"))],
    )

    total_price = models.DecimalField(
        max_digits=12, decimal_places=2, validators=[MinValueValidator(Decimal("0.00"))]
    )

    # Current payment
    transaction_id = models.CharField(max_length=100, blank=True)
    payment_screenshot = models.CharField(max_length=255, blank=True)
    upi_id = models.CharField(_("UPI ID"), max_length=320, blank=True)
    payment_status = models.CharField(
        max_length=10,
        choices=_choices(PaymentStatus),
        default=PaymentStatus.PENDING.value,
    )
    verified_at = models.DateTimeField(null=True, blank=True)
    verified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="verified_accommodation_payments",
    )

    # Original payment, captured on the first amendment
    original_total_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    original_transaction_id = models.CharField(max_length=100, blank=True)
    original_payment_screenshot = models.CharField(max_length=255, blank=True)
    original_payment_status = models.CharField(
        max_length=10, choices=_choices(PaymentStatus), blank=True
    )
    original_captured_at = models.DateTimeField(null=True, blank=True)
    has_been_modified = models.BooleanField(default=False)

    status = models.CharField(
        max_length=10,
        choices=_choices(BookingStatus),
        default=BookingStatus.CONFIRMED.value,
        db_index=True,
    )
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.TextField(blank=True)

    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Accommodation booking")
        verbose_name_plural = _("Accommodation bookings")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["payment_status"], name="accommodation_paystatus_idx"),
            models.Index(fields=["user", "status"], name="accommodation_user_status_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["user"],
                condition=Q(status=BookingStatus.CONFIRMED.value),
                name="one_confirmed_accommodation_per_user",
            ),
            models.CheckConstraint(
                condition=Q(check_out_date__gt=F("check_in_date")),
                name="accommodation_checkout_after_checkin",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} {self.check_in_date} - {self.check_out_date} ({self.status})"
