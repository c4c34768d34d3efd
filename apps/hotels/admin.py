"""Admin registrations for the hotels domain."""

from __future__ import annotations

from django.contrib import admin

from .models import Hotel, HotelRoom


class HotelRoomInline(admin.TabularInline):
    model = HotelRoom
    extra = 0
    fields = ("name", "price", "capacity", "is_available")


@admin.register(Hotel)
class HotelAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "city",
        "rating",
        "review_count",
        "price_min",
        "price_max",
        "owner",
        "is_active",
        "is_featured",
    )
    list_filter = ("is_active", "is_featured", "city", "country")
    search_fields = ("name", "city", "location", "owner__email")
    readonly_fields = ("rating", "review_count", "price_min", "price_max", "created_at", "updated_at")
    inlines = [HotelRoomInline]
