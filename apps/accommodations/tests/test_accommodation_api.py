"""Integration tests for accommodation booking API endpoints."""

from __future__ import annotations

import io
from datetime import date
from decimal import Decimal

from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from PIL import Image
from rest_framework import status
from rest_framework.test import APITestCase

from apps.accommodations.models import AccommodationBooking
from apps.catalog.models import MealOffering, Stay
from apps.users.models import User

# 2025-01-05 is a Sunday
CHECK_IN = date(2025, 1, 5)
CHECK_OUT = date(2025, 1, 8)


class AccommodationAPITestCase(APITestCase):
    def setUp(self) -> None:
        self.participant = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.hostel = Stay.objects.create(place="Hostel Block A", nightly_price=Decimal("1000.00"))
        self.dorm = Stay.objects.create(place="Dormitory", nightly_price=Decimal("500.00"))
        self.monday_breakfast = MealOffering.objects.create(
            weekday="MONDAY", meal_type="BREAKFAST", price_per_day=Decimal("150.00"), food_items=["Idli"]
        )
        self.monday_dinner = MealOffering.objects.create(
            weekday="MONDAY", meal_type="DINNER", price_per_day=Decimal("150.00"), food_items=["Rice"]
        )
        self.wednesday_lunch = MealOffering.objects.create(
            weekday="WEDNESDAY", meal_type="LUNCH", price_per_day=Decimal("100.00")
        )
        self.client.force_authenticate(self.participant)
        self.list_url = reverse("accommodation-list")
        self.me_url = reverse("accommodation-me")

    def _payload(self, stay=None, meals=(), transaction_id="UPI-1", total_price=None) -> dict:
        payload = {
            "user_details": {
                "name": "Asha Rao",
                "mobile_number": "9876543210",
                "whatsapp_number": "",
                "state": "Kerala",
                "district": "Ernakulam",
                "college_name": "Model Engineering College",
                "college_address": "Thrikkakara, Kochi",
            },
            "stay": {
                "stay_id": str((stay or self.hostel).id),
                "check_in_date": str(CHECK_IN),
                "check_out_date": str(CHECK_OUT),
            },
            "meals": {"selected_meals": [str(meal.id) for meal in meals]},
            "payment": {
                "transaction_id": transaction_id,
                "payment_screenshot": "payments/first.png",
                "upi_id": "asha@okbank",
            },
        }
        if total_price is not None:
            payload["total_price"] = total_price
        return payload

    def _create(self, **kwargs):
        response = self.client.post(self.list_url, self._payload(**kwargs), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        return response.data["data"]

    def _detail_url(self, booking_id) -> str:
        return reverse("accommodation-detail", args=[booking_id])


class BookingLifecycleAPITests(AccommodationAPITestCase):
    """Covers creation, amendment and the current-booking view."""

    def test_scenario_a_create_computes_total(self) -> None:
        data = self._create()

        self.assertEqual(data["total_price"], Decimal("3000.00"))
        self.assertEqual(data["stay"]["number_of_nights"], 3)
        self.assertEqual(data["payment"]["payment_status"], "PENDING")
        self.assertFalse(data["has_been_modified"])
        self.assertIsNone(data["payment_history"])
        booking = AccommodationBooking.objects.get()
        self.assertEqual(booking.user, self.participant)
        self.assertEqual(booking.status, "CONFIRMED")

    def test_client_total_is_never_stored(self) -> None:
        data = self._create(meals=[self.monday_dinner], total_price="1.00")

        self.assertEqual(data["total_price"], Decimal("3150.00"))
        self.assertEqual(AccommodationBooking.objects.get().total_price, Decimal("3150.00"))

    def test_scenario_d_duplicate_booking_rejected(self) -> None:
        self._create()

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["status"], "error")
        self.assertEqual(response.data["code"], "duplicate_booking")
        self.assertIn("You already have an active accommodation booking", response.data["message"])
        self.assertEqual(AccommodationBooking.objects.count(), 1)

    def test_meal_outside_stay_is_rejected(self) -> None:
        response = self.client.post(
            self.list_url, self._payload(meals=[self.wednesday_lunch]), format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")
        self.assertFalse(AccommodationBooking.objects.exists())

    def test_missing_guest_field_is_rejected(self) -> None:
        payload = self._payload()
        del payload["user_details"]["district"]

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["status"], "error")

    def test_anonymous_request_requires_authentication(self) -> None:
        self.client.force_authenticate(None)

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "authentication_required")

    def test_me_returns_null_without_booking(self) -> None:
        response = self.client.get(self.me_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"status": "success", "data": None})

    def test_scenarios_b_and_c_through_the_api(self) -> None:
        booking_id = self._create()["id"]
        url = self._detail_url(booking_id)

        add_meals = self.client.patch(
            url,
            {
                "meals": {"selected_meals": [str(self.monday_breakfast.id), str(self.monday_dinner.id)]},
                "payment": {
                    "transaction_id": "UPI-2",
                    "payment_screenshot": "payments/second.png",
                    "upi_id": "asha@okbank",
                },
            },
            format="json",
        )
        self.assertEqual(add_meals.status_code, status.HTTP_200_OK, add_meals.data)
        data = add_meals.data["data"]
        self.assertEqual(data["total_price"], Decimal("3300.00"))
        self.assertEqual(data["additional_amount"], Decimal("300.00"))
        self.assertEqual(data["payment"]["transaction_id"], "UPI-2")
        self.assertEqual(data["payment_history"]["original_payment"]["total_amount"], Decimal("3000.00"))

        remove_meals = self.client.patch(url, {"meals": {"selected_meals": []}}, format="json")
        self.assertEqual(remove_meals.status_code, status.HTTP_200_OK, remove_meals.data)
        data = remove_meals.data["data"]
        self.assertEqual(data["total_price"], Decimal("3000.00"))
        self.assertEqual(data["additional_amount"], Decimal("0.00"))
        self.assertEqual(data["payment"]["transaction_id"], "UPI-2")

        current = self.client.get(self.me_url).data["data"]
        history = current["payment_history"]
        self.assertTrue(history["has_additional_payment"])
        self.assertEqual(history["original_payment"]["total_amount"], Decimal("3000.00"))
        self.assertEqual(history["original_payment"]["transaction_id"], "UPI-1")
        self.assertEqual(history["original_payment"]["payment_status"], "PENDING")

    def test_costlier_amend_without_proof_is_rejected(self) -> None:
        booking_id = self._create()["id"]

        response = self.client.patch(
            self._detail_url(booking_id),
            {"meals": {"selected_meals": [str(self.monday_dinner.id)]}},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "payment_proof_required")
        row = AccommodationBooking.objects.get(pk=booking_id)
        self.assertFalse(row.has_been_modified)
        self.assertEqual(row.total_price, Decimal("3000.00"))

    def test_blank_payment_on_cheaper_edit_keeps_current_payment(self) -> None:
        booking_id = self._create(meals=[self.monday_dinner])["id"]

        response = self.client.patch(
            self._detail_url(booking_id),
            {
                "meals": {"selected_meals": []},
                "payment": {"transaction_id": "", "payment_screenshot": "", "upi_id": ""},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        data = response.data["data"]
        self.assertEqual(data["total_price"], Decimal("3000.00"))
        self.assertEqual(data["additional_amount"], Decimal("0.00"))
        self.assertEqual(data["payment"]["transaction_id"], "UPI-1")
        self.assertEqual(data["payment"]["payment_screenshot"], "payments/first.png")

    def test_blank_payment_on_costlier_edit_requires_proof(self) -> None:
        booking_id = self._create()["id"]

        response = self.client.patch(
            self._detail_url(booking_id),
            {
                "meals": {"selected_meals": [str(self.monday_dinner.id)]},
                "payment": {"transaction_id": "", "payment_screenshot": "", "upi_id": ""},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "payment_proof_required")
        row = AccommodationBooking.objects.get(pk=booking_id)
        self.assertFalse(row.has_been_modified)
        self.assertEqual(row.total_price, Decimal("3000.00"))

    def test_partial_payment_on_costlier_edit_is_validated(self) -> None:
        booking_id = self._create()["id"]

        response = self.client.patch(
            self._detail_url(booking_id),
            {
                "meals": {"selected_meals": [str(self.monday_dinner.id)]},
                "payment": {"transaction_id": "UPI-2", "payment_screenshot": ""},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")
        self.assertIn("proof_ref", response.data["details"])
        self.assertEqual(AccommodationBooking.objects.get(pk=booking_id).version, 0)

    def test_scenario_e_reversed_dates_leave_booking_untouched(self) -> None:
        booking_id = self._create()["id"]

        response = self.client.patch(
            self._detail_url(booking_id),
            {
                "stay": {
                    "stay_id": str(self.hostel.id),
                    "check_in_date": str(CHECK_OUT),
                    "check_out_date": str(CHECK_IN),
                }
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")
        row = AccommodationBooking.objects.get(pk=booking_id)
        self.assertEqual(row.check_in_date, CHECK_IN)
        self.assertFalse(row.has_been_modified)
        self.assertEqual(row.version, 0)

    def test_other_users_booking_is_not_found(self) -> None:
        booking_id = self._create()["id"]
        other = User.objects.create_user(email="other@example.com", password="OtherPass123")
        self.client.force_authenticate(other)

        response = self.client.patch(self._detail_url(booking_id), {"meals": {"selected_meals": []}}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)
        self.assertEqual(response.data["message"], "Booking not found or unauthorized")


class QuoteAndMealOptionsAPITests(AccommodationAPITestCase):
    def test_quote_prices_selection(self) -> None:
        response = self.client.post(
            reverse("accommodation-quote"),
            {
                "stay": {
                    "stay_id": str(self.hostel.id),
                    "check_in_date": str(CHECK_IN),
                    "check_out_date": str(CHECK_OUT),
                },
                "meals": {"selected_meals": [str(self.monday_dinner.id)]},
            },
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(
            response.data["data"],
            {
                "number_of_nights": 3,
                "total_stay_price": Decimal("3000.00"),
                "total_meal_price": Decimal("150.00"),
                "total_price": Decimal("3150.00"),
            },
        )
        self.assertFalse(AccommodationBooking.objects.exists())

    def test_meal_options_cover_stay_weekdays_only(self) -> None:
        response = self.client.get(
            reverse("accommodation-meal-options"),
            {"check_in": str(CHECK_IN), "check_out": str(CHECK_OUT)},
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        ids = [item["id"] for item in response.data["data"]]
        self.assertEqual(ids, [str(self.monday_breakfast.id), str(self.monday_dinner.id)])

    def test_meal_options_reject_reversed_dates(self) -> None:
        response = self.client.get(
            reverse("accommodation-meal-options"),
            {"check_in": str(CHECK_OUT), "check_out": str(CHECK_IN)},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class PaymentProofUploadAPITests(AccommodationAPITestCase):
    def _png(self) -> SimpleUploadedFile:
        buffer = io.BytesIO()
        Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
        return SimpleUploadedFile("proof.png", buffer.getvalue(), content_type="image/png")

    def test_upload_returns_opaque_key(self) -> None:
        response = self.client.post(
            reverse("accommodation-payment-proofs"), {"file": self._png()}, format="multipart"
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        key = response.data["data"]["key"]
        self.assertTrue(key.startswith("payments/"))
        self.assertTrue(key.endswith(".png"))

    def test_non_image_is_rejected(self) -> None:
        upload = SimpleUploadedFile("proof.png", b"not an image", content_type="image/png")

        response = self.client.post(
            reverse("accommodation-payment-proofs"), {"file": upload}, format="multipart"
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(response.data["code"], "validation_error")


class AdminPaymentAPITests(AccommodationAPITestCase):
    def setUp(self) -> None:
        super().setUp()
        self.booking_id = self._create()["id"]
        self.client.force_authenticate(self.admin)

    def test_participant_cannot_review_payments(self) -> None:
        self.client.force_authenticate(self.participant)
        response = self.client.get(reverse("accommodation-payment-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters_by_payment_status(self) -> None:
        pending = self.client.get(reverse("accommodation-payment-list"), {"payment_status": "PENDING"})
        verified = self.client.get(reverse("accommodation-payment-list"), {"payment_status": "VERIFIED"})

        self.assertEqual(pending.status_code, status.HTTP_200_OK, pending.data)
        self.assertEqual([row["id"] for row in pending.data["data"]], [self.booking_id])
        self.assertEqual(pending.data["data"][0]["email"], "guest@example.com")
        self.assertEqual(verified.data["data"], [])

    def test_verify_payment(self) -> None:
        url = reverse("accommodation-payment-update-status", args=[self.booking_id])

        response = self.client.post(url, {"payment_status": "VERIFIED"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        row = AccommodationBooking.objects.get(pk=self.booking_id)
        self.assertEqual(row.payment_status, "VERIFIED")
        self.assertEqual(row.verified_by, self.admin)
        self.assertIsNone(row.original_total_price)

    def test_review_detail_lists_screenshots(self) -> None:
        self.client.force_authenticate(self.participant)
        self.client.patch(
            self._detail_url(self.booking_id),
            {
                "meals": {"selected_meals": [str(self.monday_dinner.id)]},
                "payment": {"transaction_id": "UPI-2", "payment_screenshot": "payments/second.png"},
            },
            format="json",
        )
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("accommodation-payment-detail", args=[self.booking_id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        screenshots = response.data["data"]["payment_history"]["screenshots"]
        self.assertEqual(
            screenshots,
            [
                {"kind": "original", "key": "payments/first.png"},
                {"kind": "current", "key": "payments/second.png"},
            ],
        )

    def test_cancel_frees_user_to_book_again(self) -> None:
        url = reverse("accommodation-payment-cancel", args=[self.booking_id])

        response = self.client.post(url, {"reason": "Duplicate registration"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        again = self.client.post(url, {}, format="json")
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)

        self.client.force_authenticate(self.participant)
        self.assertIsNone(self.client.get(self.me_url).data["data"])
        self._create(transaction_id="UPI-NEW")
        self.assertEqual(
            AccommodationBooking.objects.filter(user=self.participant, status="CONFIRMED").count(), 1
        )
