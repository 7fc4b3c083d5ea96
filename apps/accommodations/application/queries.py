"""
Accommodation Queries

Read side of the engine. Absence is a normal answer here: a user without
a booking gets None, not an error.
"""

from typing import Optional
from uuid import UUID

from apps.accommodations.domain.entities import Booking, StaySelection, unique_meal_ids, validate_selection
from apps.accommodations.domain.errors import BookingNotFoundError
from apps.accommodations.domain.pricing import PriceBreakdown, quote, weekdays_in_range
from apps.accommodations.repository import DjangoAccommodationRepository
from apps.catalog.repository import DjangoCatalogRepository
from shared.infrastructure.db import storage_guard


def get_current_booking(user_id: int, repo=None) -> Optional[Booking]:
    """The user's CONFIRMED booking, or None"""
    repo = repo or DjangoAccommodationRepository()
    with storage_guard():
        return repo.get_confirmed_for_user(user_id)


def get_booking_for_review(booking_id: UUID, repo=None) -> Booking:
    """Any booking by id, for the admin payment review"""
    repo = repo or DjangoAccommodationRepository()
    with storage_guard():
        booking = repo.get(booking_id)
    if booking is None:
        raise BookingNotFoundError('Booking not found')
    return booking


def quote_selection(stay: StaySelection, meal_ids, catalog_repo=None) -> PriceBreakdown:
    """Price a selection without storing anything; same rules as Create"""
    catalog_repo = catalog_repo or DjangoCatalogRepository()
    meal_ids = unique_meal_ids(meal_ids)
    with storage_guard():
        catalog = catalog_repo.load_snapshot(stay_ids=[stay.stay_id], meal_ids=meal_ids)
    validate_selection(stay, meal_ids, catalog)
    return quote(catalog.stay(stay.stay_id), stay.check_in, stay.check_out, meal_ids, catalog)


def meal_options_for_stay(check_in, check_out, catalog_repo=None):
    """Meals served on the weekdays of [check_in, check_out)"""
    catalog_repo = catalog_repo or DjangoCatalogRepository()
    with storage_guard():
        return catalog_repo.list_meals_for_days(weekdays_in_range(check_in, check_out))
