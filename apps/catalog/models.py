"""Catalog models: bookable stays and meal offerings."""

from __future__ import annotations

import uuid
from decimal import Decimal

from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import Money

from .domain import MealEntry, MealType, StayEntry, WeekDay


class Stay(models.Model):
    """Accommodation unit that can be booked per night."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    place = models.CharField(_("Location"), max_length=255)
    nightly_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    image_key = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Stay")
        verbose_name_plural = _("Stays")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.place} ({self.nightly_price}/night)"

    def to_entry(self) -> StayEntry:
        return StayEntry(
            id=self.id,
            place=self.place,
            nightly_price=Money.from_decimal(self.nightly_price),
            image_key=self.image_key,
        )


class MealOffering(models.Model):
    """Meal served on one weekday; priced per day."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    weekday = models.CharField(max_length=10, choices=WeekDay.choices())
    meal_type = models.CharField(max_length=10, choices=MealType.choices())
    food_items = models.JSONField(default=list, blank=True)
    price_per_day = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    image_key = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Meal offering")
        verbose_name_plural = _("Meal offerings")
        ordering = ["weekday", "meal_type"]
        indexes = [
            models.Index(fields=["weekday"], name="catalog_meal_weekday_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.get_weekday_display()} {self.get_meal_type_display()}"

    def to_entry(self) -> MealEntry:
        return MealEntry(
            id=self.id,
            weekday=WeekDay(self.weekday),
            meal_type=MealType(self.meal_type),
            price_per_day=Money.from_decimal(self.price_per_day),
            food_items=tuple(self.food_items or ()),
            image_key=self.image_key,
        )
