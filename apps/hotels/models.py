"""Hotel catalogue models for Tripnest.

A hotel is listed by a partner (or created by an admin) and offers rooms.
The hotel's price range always follows its rooms, and its rating follows
its active reviews (see ``apps.reviews.services``).
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MaxValueValidator, MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.db.models import Max, Min  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class Hotel(models.Model):
    """Hotel listed on the platform."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    location = models.CharField(
        max_length=255,
        blank=True,
        help_text=_("Free-form area shown in listings, e.g. 'Patong Beach'."),
    )
    address = models.CharField(max_length=255, blank=True)
    city = models.CharField(max_length=120, db_index=True)
    country = models.CharField(max_length=120, default="Thailand")
    latitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)
    longitude = models.DecimalField(max_digits=9, decimal_places=6, null=True, blank=True)

    rating = models.DecimalField(
        max_digits=2,
        decimal_places=1,
        default=Decimal("0"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("5"))],
    )
    review_count = models.PositiveIntegerField(default=0)
    price_min = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))
    price_max = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0"))

    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    contact = models.JSONField(default=dict, blank=True, help_text=_("phone, email, website"))
    policies = models.JSONField(
        default=dict,
        blank=True,
        help_text=_("check_in, check_out, cancellation and similar rules"),
    )

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="hotels",
    )
    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Hotel")
        verbose_name_plural = _("Hotels")
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["is_active", "city"], name="hotel_active_city_idx"),
            models.Index(fields=["is_active", "is_featured", "rating"], name="hotel_featured_rating_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"

    @property
    def cover_image(self) -> str:
        return self.images[0] if self.images else ""

    def recompute_price_range(self) -> None:
        """Set ``price_min``/``price_max`` from the rooms; no rooms, no change."""
        bounds = self.rooms.aggregate(low=Min("price"), high=Max("price"))
        if bounds["low"] is None:
            return
        self.price_min = bounds["low"]
        self.price_max = bounds["high"]
        self.save(update_fields=["price_min", "price_max", "updated_at"])


class HotelRoom(models.Model):
    """Room type offered by a hotel."""

    hotel = models.ForeignKey(Hotel, on_delete=models.CASCADE, related_name="rooms")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
        help_text=_("Price per night"),
    )
    capacity = models.PositiveSmallIntegerField(default=2)
    amenities = models.JSONField(default=list, blank=True)
    images = models.JSONField(default=list, blank=True)
    is_available = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["price", "id"]

    def __str__(self) -> str:
        return f"{self.hotel.name}: {self.name}"
