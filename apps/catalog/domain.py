"""
Catalog Domain

Framework-free view of the catalog used by the pricing calculator:
- WeekDay / MealType: enumerations shared by the catalog and bookings
- StayEntry / MealEntry: immutable catalog entries with prices as Money
- CatalogSnapshot: the catalog as read once for a single request
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Tuple
from uuid import UUID

from shared.domain.base import ValueObject
from shared.domain.value_objects import Money


class WeekDay(str, Enum):
    """Day of week, Sunday-indexed (declaration order is the index)"""
    SUNDAY = 'SUNDAY'
    MONDAY = 'MONDAY'
    TUESDAY = 'TUESDAY'
    WEDNESDAY = 'WEDNESDAY'
    THURSDAY = 'THURSDAY'
    FRIDAY = 'FRIDAY'
    SATURDAY = 'SATURDAY'

    @property
    def index(self) -> int:
        return list(WeekDay).index(self)

    @classmethod
    def choices(cls):
        return [(day.value, day.value.title()) for day in cls]


class MealType(str, Enum):
    BREAKFAST = 'BREAKFAST'
    LUNCH = 'LUNCH'
    DINNER = 'DINNER'

    @property
    def index(self) -> int:
        return list(MealType).index(self)

    @classmethod
    def choices(cls):
        return [(meal.value, meal.value.title()) for meal in cls]


@dataclass(frozen=True)
class StayEntry(ValueObject):
    """A bookable stay with its nightly price"""
    id: UUID
    place: str
    nightly_price: Money
    image_key: str = ''


@dataclass(frozen=True)
class MealEntry(ValueObject):
    """A meal offering tied to one weekday"""
    id: UUID
    weekday: WeekDay
    meal_type: MealType
    price_per_day: Money
    food_items: Tuple[str, ...] = ()
    image_key: str = ''

    @property
    def sort_key(self) -> tuple:
        return (self.weekday.index, self.meal_type.index)


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Catalog entries loaded for one request

    Logically immutable: the pricing calculator never sees the catalog change
    underneath a single Create/Amend call.
    """
    stays: Mapping[UUID, StayEntry] = field(default_factory=dict)
    meals: Mapping[UUID, MealEntry] = field(default_factory=dict)

    @classmethod
    def of(cls, stays: Iterable[StayEntry] = (), meals: Iterable[MealEntry] = ()) -> 'CatalogSnapshot':
        return cls(
            stays={stay.id: stay for stay in stays},
            meals={meal.id: meal for meal in meals},
        )

    def stay(self, stay_id: UUID) -> StayEntry | None:
        return self.stays.get(stay_id)

    def meal(self, meal_id: UUID) -> MealEntry | None:
        return self.meals.get(meal_id)
