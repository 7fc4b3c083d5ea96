"""
Pricing Calculator

Pure functions that turn raw selections into prices. No I/O: catalog
entries are passed in by the caller (see CatalogSnapshot).

Nights are counted in calendar days (midnight to midnight), so a stay that
crosses a timezone or DST boundary still costs exactly one night per date.
Meals are charged for every date in [check_in, check_out); the departure
day itself is not included.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List
from uuid import UUID

from apps.catalog.domain import CatalogSnapshot, StayEntry, WeekDay
from shared.domain.value_objects import Money

ONE_DAY = timedelta(days=1)


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def nights_between(check_in: date, check_out: date) -> int:
    """
    Calendar nights between two dates

    Callers validate check_out > check_in first; zero or negative values are
    returned as-is for reversed input.
    """
    return (_as_date(check_out) - _as_date(check_in)).days


class DateSequence:
    """
    Dates in [start, end), generated lazily

    Iterating twice yields the same dates again; nothing is materialized.
    """

    def __init__(self, start: date, end: date):
        self.start = _as_date(start)
        self.end = _as_date(end)

    def __iter__(self) -> Iterator[date]:
        current = self.start
        while current < self.end:
            yield current
            current += ONE_DAY

    def __len__(self) -> int:
        return max(0, (self.end - self.start).days)

    def __contains__(self, value) -> bool:
        return isinstance(value, date) and self.start <= _as_date(value) < self.end

    def __repr__(self):
        return f"DateSequence({self.start}, {self.end})"


def dates_in_range(check_in: date, check_out: date) -> DateSequence:
    return DateSequence(check_in, check_out)


def weekday_of(value: date) -> WeekDay:
    """Sunday-indexed weekday of a calendar date"""
    return list(WeekDay)[_as_date(value).isoweekday() % 7]


def weekdays_in_range(check_in: date, check_out: date) -> List[WeekDay]:
    """Distinct weekdays covered by the stay, in order of first occurrence"""
    seen: List[WeekDay] = []
    for day in dates_in_range(check_in, check_out):
        weekday = weekday_of(day)
        if weekday not in seen:
            seen.append(weekday)
        if len(seen) == len(WeekDay):
            break
    return seen


def stay_cost(stay: StayEntry, nights: int) -> Money:
    return stay.nightly_price * nights


def meal_cost(meal_ids: Iterable[UUID], catalog: CatalogSnapshot) -> Money:
    """Sum of per-day prices; raises KeyError for an id missing from the catalog"""
    total = Money.zero()
    for meal_id in meal_ids:
        total = total + catalog.meals[meal_id].price_per_day
    return total


def meals_outside_window(
    meal_ids: Iterable[UUID],
    catalog: CatalogSnapshot,
    check_in: date,
    check_out: date,
) -> List[UUID]:
    """Selected meals whose weekday is not served during the stay"""
    weekdays = set(weekdays_in_range(check_in, check_out))
    return [
        meal_id for meal_id in meal_ids
        if catalog.meals[meal_id].weekday not in weekdays
    ]


@dataclass(frozen=True)
class PriceBreakdown:
    nights: int
    stay_price: Money
    meal_price: Money

    @property
    def total(self) -> Money:
        return self.stay_price + self.meal_price


def quote(
    stay: StayEntry,
    check_in: date,
    check_out: date,
    meal_ids: Iterable[UUID],
    catalog: CatalogSnapshot,
) -> PriceBreakdown:
    nights = nights_between(check_in, check_out)
    return PriceBreakdown(
        nights=nights,
        stay_price=stay_cost(stay, nights),
        meal_price=meal_cost(meal_ids, catalog),
    )
