"""FilterSet definitions for review listings."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Review

SORT_ORDERING = {
    'newest': ('-created_at',),
    'oldest': ('created_at',),
    'highest': ('-rating', '-created_at'),
    'lowest': ('rating', '-created_at'),
}


class ReviewFilterSet(django_filters.FilterSet):
    hotel = django_filters.NumberFilter(field_name='hotel_id')
    user = django_filters.NumberFilter(field_name='user_id')
    verified = django_filters.BooleanFilter(field_name='is_verified')
    sort_by = django_filters.CharFilter(method='filter_sort_by')

    class Meta:
        model = Review
        fields = ['hotel', 'user', 'verified']

    def filter_sort_by(self, queryset, name, value):  # type: ignore
        return queryset.order_by(*SORT_ORDERING.get(value, SORT_ORDERING['newest']))
