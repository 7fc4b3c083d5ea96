"""Read access to the catalog for the pricing calculator and the API."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, List
from uuid import UUID

from django.db.models import Avg  # type: ignore

from .domain import CatalogSnapshot, MealEntry, StayEntry, WeekDay
from .models import MealOffering, Stay


class DjangoCatalogRepository:
    """Catalog reads; nothing here is cached between requests."""

    def load_snapshot(
        self,
        stay_ids: Iterable[UUID] = (),
        meal_ids: Iterable[UUID] = (),
    ) -> CatalogSnapshot:
        """Fetch just the entries a Create/Amend call refers to."""
        stay_ids = [stay_id for stay_id in stay_ids if stay_id is not None]
        meal_ids = list(meal_ids)
        stays = [stay.to_entry() for stay in Stay.objects.filter(id__in=stay_ids)] if stay_ids else []
        meals = [meal.to_entry() for meal in MealOffering.objects.filter(id__in=meal_ids)] if meal_ids else []
        return CatalogSnapshot.of(stays=stays, meals=meals)

    def list_stays(self) -> List[StayEntry]:
        return [stay.to_entry() for stay in Stay.objects.order_by("-created_at")]

    def list_meals_for_days(self, weekdays: Iterable[WeekDay]) -> List[MealEntry]:
        """Meals served on any of the given weekdays, ordered by weekday then meal type."""
        values = {WeekDay(day).value for day in weekdays}
        if not values:
            return []
        meals = [meal.to_entry() for meal in MealOffering.objects.filter(weekday__in=values)]
        return sorted(meals, key=lambda meal: meal.sort_key)

    def statistics(self) -> dict:
        average = Stay.objects.aggregate(avg=Avg("nightly_price"))["avg"] or Decimal("0")
        return {
            "total_stays": Stay.objects.count(),
            "total_meals": MealOffering.objects.count(),
            "avg_stay_price": int(Decimal(average).quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        }
