"""Admin registrations for reviews."""

from __future__ import annotations

from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ("hotel", "user", "rating", "is_verified", "is_active", "created_at")
    list_filter = ("rating", "is_verified", "is_active")
    search_fields = ("hotel__name", "user__email", "title", "comment")
    readonly_fields = ("created_at", "updated_at", "response_at")
