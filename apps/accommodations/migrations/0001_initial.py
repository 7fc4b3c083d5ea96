import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

PAYMENT_STATUS_CHOICES = [("PENDING", "Pending"), ("VERIFIED", "Verified"), ("FAILED", "Failed")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="AccommodationBooking",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("mobile_number", models.CharField(max_length=20)),
                ("whatsapp_number", models.CharField(blank=True, max_length=20)),
                ("state", models.CharField(max_length=100)),
                ("district", models.CharField(max_length=100)),
                ("college_name", models.CharField(max_length=255, verbose_name="Institution name")),
                ("college_address", models.CharField(max_length=500, verbose_name="Institution address")),
                ("check_in_date", models.DateField()),
                ("check_out_date", models.DateField()),
                ("number_of_nights", models.PositiveIntegerField()),
                (
                    "total_stay_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("selected_meals", models.JSONField(blank=True, default=list)),
                (
                    "total_meal_price",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0.00"),
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=12,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                    ),
                ),
                ("transaction_id", models.CharField(blank=True, max_length=100)),
                ("payment_screenshot", models.CharField(blank=True, max_length=255)),
                ("upi_id", models.CharField(blank=True, max_length=320, verbose_name="UPI ID")),
                (
                    "payment_status",
                    models.CharField(choices=PAYMENT_STATUS_CHOICES, default="PENDING", max_length=10),
                ),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                (
                    "original_total_price",
                    models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True),
                ),
                ("original_transaction_id", models.CharField(blank=True, max_length=100)),
                ("original_payment_screenshot", models.CharField(blank=True, max_length=255)),
                (
                    "original_payment_status",
                    models.CharField(blank=True, choices=PAYMENT_STATUS_CHOICES, max_length=10),
                ),
                ("original_captured_at", models.DateTimeField(blank=True, null=True)),
                ("has_been_modified", models.BooleanField(default=False)),
                (
                    "status",
                    models.CharField(
                        choices=[("CONFIRMED", "Confirmed"), ("CANCELLED", "Cancelled")],
                        db_index=True,
                        default="CONFIRMED",
                        max_length=10,
                    ),
                ),
                ("cancelled_at", models.DateTimeField(blank=True, null=True)),
                ("cancellation_reason", models.TextField(blank=True)),
                ("version", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "stay",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accommodation_bookings",
                        to="catalog.stay",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="accommodation_bookings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "verified_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="verified_accommodation_payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Accommodation booking",
                "verbose_name_plural": "Accommodation bookings",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["payment_status"], name="accommodation_paystatus_idx"),
                    models.Index(fields=["user", "status"], name="accommodation_user_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "CONFIRMED")),
                        fields=("user",),
                        name="one_confirmed_accommodation_per_user",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("check_out_date__gt", models.F("check_in_date"))),
                        name="accommodation_checkout_after_checkin",
                    ),
                ],
            },
        ),
    ]
