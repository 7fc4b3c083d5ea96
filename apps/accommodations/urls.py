"""URL routing for the accommodations domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import SimpleRouter  # type: ignore

from .views import AccommodationBookingViewSet, AdminPaymentViewSet

router = SimpleRouter()
router.register(r"admin/payments", AdminPaymentViewSet, basename="accommodation-payment")
router.register(r"", AccommodationBookingViewSet, basename="accommodation")

urlpatterns = [
    path("", include(router.urls)),
]
