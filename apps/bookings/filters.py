"""FilterSet definitions for booking listings."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=Booking.Status.choices)
    hotel = django_filters.NumberFilter(field_name="hotel_id")
    # Hotel name, confirmation code or hotel location
    search = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Booking
        fields = ["status", "hotel"]

    def filter_search(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            Q(hotel_name__icontains=value)
            | Q(confirmation_code__icontains=value)
            | Q(hotel__location__icontains=value)
            | Q(hotel__city__icontains=value)
        )
