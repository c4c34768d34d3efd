"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "confirmation_code",
        "hotel_name",
        "user",
        "status",
        "payment_status",
        "check_in",
        "check_out",
        "total",
        "created_at",
    )
    list_filter = ("status", "payment_status", "check_in", "check_out")
    search_fields = ("confirmation_code", "hotel_name", "user__email", "email", "payment_intent_id")
    readonly_fields = (
        "id",
        "confirmation_code",
        "created_at",
        "updated_at",
        "total",
        "nights",
        "room_rate",
        "taxes",
        "service_fee",
        "payment_intent_id",
        "confirmed_at",
        "cancellation_deadline",
    )
