"""Serializers for the catalog domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .domain import WeekDay
from .models import MealOffering, Stay


class StaySerializer(serializers.ModelSerializer):
    nightly_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, coerce_to_string=False
    )

    class Meta:
        model = Stay
        fields = ["id", "place", "nightly_price", "image_key", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]


class StayEntrySerializer(serializers.Serializer):
    """Read-only shape of a stay as the booking form lists it."""

    id = serializers.UUIDField()
    place = serializers.CharField()
    nightly_price = serializers.DecimalField(
        source="nightly_price.amount", max_digits=10, decimal_places=2, coerce_to_string=False
    )
    image_key = serializers.CharField()


class MealOfferingSerializer(serializers.ModelSerializer):
    price_per_day = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=0, coerce_to_string=False
    )
    food_items = serializers.ListField(
        child=serializers.CharField(max_length=120), allow_empty=True, required=False
    )

    class Meta:
        model = MealOffering
        fields = [
            "id",
            "weekday",
            "meal_type",
            "food_items",
            "price_per_day",
            "image_key",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]


class WeekdayListField(serializers.Field):
    """Comma separated weekday names, e.g. ``MONDAY,TUESDAY``."""

    def to_internal_value(self, data):  # type: ignore
        if isinstance(data, str):
            data = [part for part in data.split(",") if part.strip()]
        try:
            return [WeekDay(str(part).strip().upper()) for part in data]
        except ValueError:
            raise serializers.ValidationError(
                f"Unknown weekday. Use one of: {', '.join(day.value for day in WeekDay)}."
            )

    def to_representation(self, value):  # type: ignore
        return [day.value for day in value]


class MealFilterSerializer(serializers.Serializer):
    weekdays = WeekdayListField(required=False)
