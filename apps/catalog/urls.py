"""URL routing for the catalog domain."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import CatalogStatisticsView, MealOfferingViewSet, StayViewSet

router = DefaultRouter()
router.register(r"stays", StayViewSet, basename="stay")
router.register(r"meals", MealOfferingViewSet, basename="meal")

urlpatterns = [
    path("", include(router.urls)),
    path("statistics/", CatalogStatisticsView.as_view(), name="catalog-statistics"),
]
