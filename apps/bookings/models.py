"""Booking domain models for Tripnest."""

from __future__ import annotations

import secrets
import string
import time
import uuid
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

CODE_ALPHABET = string.ascii_uppercase + string.digits
CANCELLATION_WINDOW = timedelta(hours=24)
CENTS = Decimal("0.01")


class BookingPolicyError(Exception):
    """The requested change is not allowed for this booking."""


class Booking(models.Model):
    """Hotel room reservation."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        PAYMENT_FAILED = "payment_failed", _("Payment failed")
        CANCELLED = "cancelled", _("Cancelled")

    class PaymentStatus(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        FAILED = "failed", _("Failed")
        REFUNDED = "refunded", _("Refunded")

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    confirmation_code = models.CharField(max_length=14, unique=True, editable=False)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    hotel = models.ForeignKey(
        "hotels.Hotel",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    room = models.ForeignKey(
        "hotels.HotelRoom",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
    )
    hotel_name = models.CharField(max_length=255, help_text=_("Hotel name at booking time."))
    room_name = models.CharField(max_length=255, blank=True)

    check_in = models.DateField()
    check_out = models.DateField()
    adults = models.PositiveSmallIntegerField(default=1)
    children = models.PositiveSmallIntegerField(default=0)
    rooms = models.PositiveSmallIntegerField(default=1)

    first_name = models.CharField(max_length=150)
    last_name = models.CharField(max_length=150)
    email = models.EmailField()
    phone = models.CharField(max_length=32, blank=True)
    special_requests = models.TextField(blank=True)

    room_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Price per room per night at booking time."),
    )
    nights = models.PositiveSmallIntegerField(default=1)
    taxes = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    service_fee = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    total = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    currency = models.CharField(max_length=3, default="THB")

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )
    payment_intent_id = models.CharField(max_length=255, blank=True, db_index=True)
    payment_method = models.CharField(max_length=64, blank=True)
    confirmed_at = models.DateTimeField(null=True, blank=True)

    cancellation_deadline = models.DateTimeField()
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancellation_reason = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="booking_user_created_idx"),
            models.Index(fields=["hotel", "status"], name="booking_hotel_status_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking {self.confirmation_code} at {self.hotel_name}"

    def save(self, *args, **kwargs):  # type: ignore
        if self._state.adding:
            if not self.confirmation_code:
                self.confirmation_code = self.generate_confirmation_code()
            self.apply_pricing()
            if not self.cancellation_deadline:
                self.cancellation_deadline = self.deadline_for(self.check_in)
        super().save(*args, **kwargs)

    @staticmethod
    def generate_confirmation_code() -> str:
        """``BK`` + last six digits of a millisecond timestamp + six random characters."""
        while True:
            millis = str(int(time.time() * 1000))
            suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(6))
            code = f"BK{millis[-6:]}{suffix}"
            if not Booking.objects.filter(confirmation_code=code).exists():
                return code

    @staticmethod
    def deadline_for(check_in) -> datetime:
        start = timezone.make_aware(datetime.combine(check_in, datetime.min.time()))
        return start - CANCELLATION_WINDOW

    def apply_pricing(self) -> None:
        self.nights = (self.check_out - self.check_in).days
        subtotal = self.subtotal
        self.taxes = (subtotal * Decimal(str(settings.BOOKING_TAX_RATE))).quantize(
            CENTS, rounding=ROUND_HALF_UP
        )
        self.service_fee = Decimal(str(settings.BOOKING_SERVICE_FEE))
        self.total = subtotal + self.taxes + self.service_fee

    @property
    def guest_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def subtotal(self) -> Decimal:
        return Decimal(self.room_rate) * self.nights * self.rooms

    def can_cancel(self, now: datetime | None = None) -> bool:
        now = now or timezone.now()
        return self.status != self.Status.CANCELLED and now <= self.cancellation_deadline

    def cancel(self, reason: str = "") -> None:
        if self.status == self.Status.CANCELLED:
            raise BookingPolicyError("This booking is already cancelled.")
        if timezone.now() > self.cancellation_deadline:
            raise BookingPolicyError("Cancellation deadline has passed.")

        self.status = self.Status.CANCELLED
        if self.payment_status == self.PaymentStatus.CONFIRMED:
            self.payment_status = self.PaymentStatus.REFUNDED
        self.cancelled_at = timezone.now()
        self.cancellation_reason = reason[:255]
        self.save(
            update_fields=[
                "status",
                "payment_status",
                "cancelled_at",
                "cancellation_reason",
                "updated_at",
            ]
        )

    def mark_payment_confirmed(self, payment_method: str = "", payment_intent_id: str = "") -> None:
        self.status = self.Status.CONFIRMED
        self.payment_status = self.PaymentStatus.CONFIRMED
        self.payment_method = payment_method or self.payment_method
        self.payment_intent_id = payment_intent_id or self.payment_intent_id
        self.confirmed_at = timezone.now()
        self.save(
            update_fields=[
                "status",
                "payment_status",
                "payment_method",
                "payment_intent_id",
                "confirmed_at",
                "updated_at",
            ]
        )

    def mark_payment_failed(self, payment_intent_id: str = "") -> None:
        self.status = self.Status.PAYMENT_FAILED
        self.payment_status = self.PaymentStatus.FAILED
        self.payment_intent_id = payment_intent_id or self.payment_intent_id
        self.save(update_fields=["status", "payment_status", "payment_intent_id", "updated_at"])
