"""Integration tests for catalog endpoints and repository reads."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.domain import MealType, WeekDay
from apps.catalog.models import MealOffering, Stay
from apps.catalog.repository import DjangoCatalogRepository
from apps.users.models import User
from shared.domain.value_objects import Money


class CatalogAPITests(APITestCase):
    def setUp(self) -> None:
        self.participant = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hostel = Stay.objects.create(place="Hostel Block A", nightly_price=Decimal("1000.00"))
        self.hotel = Stay.objects.create(place="City Hotel", nightly_price=Decimal("2500.50"))
        self.monday_dinner = MealOffering.objects.create(
            weekday=WeekDay.MONDAY.value,
            meal_type=MealType.DINNER.value,
            food_items=["Rice", "Sambar"],
            price_per_day=Decimal("150.00"),
        )
        self.monday_breakfast = MealOffering.objects.create(
            weekday=WeekDay.MONDAY.value,
            meal_type=MealType.BREAKFAST.value,
            food_items=["Idli"],
            price_per_day=Decimal("80.00"),
        )
        self.sunday_lunch = MealOffering.objects.create(
            weekday=WeekDay.SUNDAY.value,
            meal_type=MealType.LUNCH.value,
            food_items=["Biryani"],
            price_per_day=Decimal("200.00"),
        )

    def test_participant_can_list_stays_with_numeric_prices(self) -> None:
        self.client.force_authenticate(self.participant)
        response = self.client.get(reverse("stay-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data), 2)
        prices = sorted(item["nightly_price"] for item in response.data)
        self.assertEqual(prices, [Decimal("1000.00"), Decimal("2500.50")])
        self.assertEqual(
            {item["id"] for item in response.data}, {str(self.hostel.id), str(self.hotel.id)}
        )

    def test_list_stays_reads_catalog_entries(self) -> None:
        entries = DjangoCatalogRepository().list_stays()

        self.assertEqual({entry.place for entry in entries}, {"Hostel Block A", "City Hotel"})
        by_place = {entry.place: entry.nightly_price for entry in entries}
        self.assertEqual(by_place["City Hotel"], Money.from_decimal("2500.50"))

    def test_participant_cannot_create_stay(self) -> None:
        self.client.force_authenticate(self.participant)
        response = self.client.post(
            reverse("stay-list"), {"place": "Tent", "nightly_price": "10.00"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_can_create_meal(self) -> None:
        self.client.force_authenticate(self.admin)
        payload = {
            "weekday": "TUESDAY",
            "meal_type": "LUNCH",
            "food_items": ["Chapati", "Dal"],
            "price_per_day": "120.00",
        }
        response = self.client.post(reverse("meal-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertTrue(MealOffering.objects.filter(weekday="TUESDAY").exists())

    def test_meals_filtered_by_weekdays_are_ordered(self) -> None:
        self.client.force_authenticate(self.participant)
        response = self.client.get(reverse("meal-list"), {"weekdays": "MONDAY,SUNDAY"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        ids = [item["id"] for item in response.data]
        self.assertEqual(
            ids,
            [str(self.sunday_lunch.id), str(self.monday_breakfast.id), str(self.monday_dinner.id)],
        )

    def test_unknown_weekday_is_rejected(self) -> None:
        self.client.force_authenticate(self.participant)
        response = self.client.get(reverse("meal-list"), {"weekdays": "FUNDAY"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_statistics_for_admin_only(self) -> None:
        self.client.force_authenticate(self.participant)
        self.assertEqual(self.client.get(reverse("catalog-statistics")).status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("catalog-statistics"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["total_stays"], 2)
        self.assertEqual(response.data["total_meals"], 3)
        self.assertEqual(response.data["avg_stay_price"], 1750)


class CatalogRepositoryTests(APITestCase):
    def test_snapshot_contains_only_requested_entries(self) -> None:
        stay = Stay.objects.create(place="Hostel", nightly_price=Decimal("999.99"))
        Stay.objects.create(place="Other", nightly_price=Decimal("10.00"))
        meal = MealOffering.objects.create(
            weekday="FRIDAY", meal_type="DINNER", price_per_day=Decimal("75.50")
        )

        snapshot = DjangoCatalogRepository().load_snapshot(stay_ids=[stay.id], meal_ids=[meal.id])

        self.assertEqual(list(snapshot.stays), [stay.id])
        self.assertEqual(snapshot.stay(stay.id).nightly_price, Money(99999))
        self.assertEqual(snapshot.meal(meal.id).price_per_day, Money(7550))
        self.assertEqual(snapshot.meal(meal.id).weekday, WeekDay.FRIDAY)

    def test_no_weekdays_means_no_meals(self) -> None:
        MealOffering.objects.create(weekday="FRIDAY", meal_type="DINNER", price_per_day=Decimal("75.50"))
        self.assertEqual(DjangoCatalogRepository().list_meals_for_days([]), [])
