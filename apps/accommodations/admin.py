"""Django admin for accommodation bookings (read-mostly)."""

from __future__ import annotations

from django.contrib import admin

from .models import AccommodationBooking


@admin.register(AccommodationBooking)
class AccommodationBookingAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "user",
        "stay",
        "check_in_date",
        "check_out_date",
        "total_price",
        "payment_status",
        "status",
        "has_been_modified",
    )
    list_filter = ("status", "payment_status", "has_been_modified")
    search_fields = ("name", "user__email", "transaction_id", "mobile_number")
    date_hierarchy = "created_at"
    # Prices and the payment audit trail are only changed through the API
    readonly_fields = (
        "id",
        "number_of_nights",
        "total_stay_price",
        "selected_meals",
        "total_meal_price",
        "total_price",
        "original_total_price",
        "original_transaction_id",
        "original_payment_screenshot",
        "original_payment_status",
        "original_captured_at",
        "has_been_modified",
        "version",
        "created_at",
        "updated_at",
    )

    def has_delete_permission(self, request, obj=None):  # type: ignore
        return False
