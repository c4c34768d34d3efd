"""Serializers for payment endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from rest_framework import serializers  # type: ignore


class CreatePaymentIntentSerializer(serializers.Serializer):
    """Payload sent by the checkout page; names follow the client's casing."""

    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    currency = serializers.CharField(max_length=3, required=False)
    bookingId = serializers.UUIDField()
    hotelName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    guestName = serializers.CharField(max_length=255, required=False, allow_blank=True)
    guestEmail = serializers.EmailField()
    checkIn = serializers.CharField(max_length=32, required=False, allow_blank=True)
    checkOut = serializers.CharField(max_length=32, required=False, allow_blank=True)
    rooms = serializers.IntegerField(min_value=1, required=False)
    guests = serializers.IntegerField(min_value=1, required=False)

    def validate_amount(self, value: Decimal) -> Decimal:
        minimum = Decimal(settings.PAYMENT_MIN_AMOUNT)
        if value < minimum:
            raise serializers.ValidationError(f"Amount must be at least {minimum} THB.")
        return value

    def validate_currency(self, value: str) -> str:
        return value.lower()
