"""Filters for the admin payments list."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .domain.entities import BookingStatus, PaymentStatus
from .models import AccommodationBooking


class PaymentReviewFilter(django_filters.FilterSet):
    payment_status = django_filters.ChoiceFilter(
        choices=[(status.value, status.value.title()) for status in PaymentStatus]
    )
    status = django_filters.ChoiceFilter(
        choices=[(status.value, status.value.title()) for status in BookingStatus]
    )
    has_been_modified = django_filters.BooleanFilter()
    check_in_after = django_filters.DateFilter(field_name="check_in_date", lookup_expr="gte")
    check_in_before = django_filters.DateFilter(field_name="check_in_date", lookup_expr="lte")
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = AccommodationBooking
        fields = ["payment_status", "status", "has_been_modified"]

    def filter_search(self, queryset, name, value):  # type: ignore
        return queryset.filter(
            Q(name__icontains=value)
            | Q(user__email__icontains=value)
            | Q(transaction_id__icontains=value)
            | Q(mobile_number__icontains=value)
        )
