"""Admin registrations for the catalog."""

from __future__ import annotations

from django.contrib import admin

from .models import MealOffering, Stay


@admin.register(Stay)
class StayAdmin(admin.ModelAdmin):
    list_display = ("place", "nightly_price", "created_at")
    search_fields = ("place",)


@admin.register(MealOffering)
class MealOfferingAdmin(admin.ModelAdmin):
    list_display = ("weekday", "meal_type", "price_per_day", "created_at")
    list_filter = ("weekday", "meal_type")
