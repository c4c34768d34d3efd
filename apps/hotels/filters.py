"""FilterSet definitions for hotel search and listing."""

from __future__ import annotations

import django_filters  # type: ignore
from django.db.models import Q  # type: ignore

from .models import Hotel

SORT_ORDERING = {
    "rating": ("-rating", "-review_count"),
    "price-low": ("price_min",),
    "price-high": ("-price_max",),
}
DEFAULT_ORDERING = ("-updated_at",)


class HotelFilterSet(django_filters.FilterSet):
    """Search filters for the hotel list."""

    # City search is a case-insensitive prefix match
    city = django_filters.CharFilter(field_name="city", lookup_expr="istartswith")
    location = django_filters.CharFilter(method="filter_location")
    price_min = django_filters.NumberFilter(field_name="price_min", lookup_expr="gte")
    price_max = django_filters.NumberFilter(field_name="price_max", lookup_expr="lte")
    rating = django_filters.NumberFilter(field_name="rating", lookup_expr="gte")
    featured = django_filters.BooleanFilter(field_name="is_featured")

    # CSV of amenity names, requires all selected amenities
    amenities = django_filters.CharFilter(method="filter_amenities")
    sort_by = django_filters.CharFilter(method="filter_sort_by")

    class Meta:
        model = Hotel
        fields = ["city", "location", "price_min", "price_max", "rating", "featured"]

    def filter_location(self, queryset, name, value):  # type: ignore
        if not value:
            return queryset
        return queryset.filter(
            Q(city__istartswith=value)
            | Q(location__icontains=value)
        )

    def filter_amenities(self, queryset, name, value):  # type: ignore
        wanted = [item.strip() for item in str(value).split(",") if item.strip()]
        if not wanted:
            return queryset
        # JSON containment lookups are not available on SQLite
        matching = [
            hotel_id
            for hotel_id, amenities in queryset.values_list("id", "amenities")
            if all(item in (amenities or []) for item in wanted)
        ]
        return queryset.filter(id__in=matching)

    def filter_sort_by(self, queryset, name, value):  # type: ignore
        return queryset.order_by(*SORT_ORDERING.get(value, DEFAULT_ORDERING))
