"""Catalog API views."""

from __future__ import annotations

from rest_framework import viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .models import MealOffering, Stay
from .permissions import IsAdmin, IsAdminOrReadOnly
from .repository import DjangoCatalogRepository
from .serializers import MealFilterSerializer, MealOfferingSerializer, StayEntrySerializer, StaySerializer


class StayViewSet(viewsets.ModelViewSet):
    """Stays: read for participants, full CRUD for administrators."""

    queryset = Stay.objects.all().order_by("-created_at")
    serializer_class = StaySerializer
    permission_classes = [IsAdminOrReadOnly]

    def list(self, request, *args, **kwargs):  # type: ignore
        entries = DjangoCatalogRepository().list_stays()
        return Response(StayEntrySerializer(entries, many=True).data)


class MealOfferingViewSet(viewsets.ModelViewSet):
    """Meal offerings; ``?weekdays=MONDAY,TUESDAY`` narrows the list."""

    queryset = MealOffering.objects.all()
    serializer_class = MealOfferingSerializer
    permission_classes = [IsAdminOrReadOnly]

    def list(self, request, *args, **kwargs):  # type: ignore
        filters = MealFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        weekdays = filters.validated_data.get("weekdays")
        if weekdays is None:
            return super().list(request, *args, **kwargs)

        entries = DjangoCatalogRepository().list_meals_for_days(weekdays)
        by_id = {meal.id: meal for meal in MealOffering.objects.filter(id__in=[e.id for e in entries])}
        ordered = [by_id[entry.id] for entry in entries]
        return Response(self.get_serializer(ordered, many=True).data)


class CatalogStatisticsView(APIView):
    permission_classes = [IsAdmin]

    def get(self, request):  # type: ignore
        return Response(DjangoCatalogRepository().statistics())
