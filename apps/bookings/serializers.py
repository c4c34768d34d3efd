"""Serializers for the booking domain."""

from __future__ import annotations

from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.hotels.models import Hotel, HotelRoom
from .models import Booking


class BookingCreateSerializer(serializers.ModelSerializer):
    """Booking request from a signed-in user; pricing is computed server-side."""

    hotel = serializers.PrimaryKeyRelatedField(queryset=Hotel.objects.filter(is_active=True))
    room = serializers.PrimaryKeyRelatedField(
        queryset=HotelRoom.objects.filter(is_available=True),
        required=False,
        allow_null=True,
    )
    adults = serializers.IntegerField(min_value=1, default=1)
    children = serializers.IntegerField(min_value=0, default=0)
    rooms = serializers.IntegerField(min_value=1, max_value=10, default=1)

    class Meta:
        model = Booking
        fields = [
            "hotel",
            "room",
            "check_in",
            "check_out",
            "adults",
            "children",
            "rooms",
            "first_name",
            "last_name",
            "email",
            "phone",
            "special_requests",
        ]
        extra_kwargs = {
            "phone": {"required": False, "allow_blank": True},
            "special_requests": {"required": False, "allow_blank": True},
        }

    def validate(self, attrs):  # type: ignore
        check_in = attrs["check_in"]
        check_out = attrs["check_out"]
        if check_in >= check_out:
            raise serializers.ValidationError({"check_out": "Check-out must be after check-in."})
        if check_in < timezone.localdate():
            raise serializers.ValidationError({"check_in": "Check-in cannot be in the past."})

        hotel = attrs["hotel"]
        room = attrs.get("room")
        if room is not None and room.hotel_id != hotel.pk:
            raise serializers.ValidationError({"room": "This room belongs to another hotel."})
        if room is None and not hotel.price_min:
            raise serializers.ValidationError({"room": "Choose a room for this hotel."})
        return attrs

    def create(self, validated_data):  # type: ignore
        hotel = validated_data["hotel"]
        room = validated_data.get("room")
        return Booking.objects.create(
            user=self.context["request"].user,
            hotel_name=hotel.name,
            room_name=room.name if room else "",
            room_rate=room.price if room else hotel.price_min,
            **validated_data,
        )

    def to_representation(self, instance):  # type: ignore
        return BookingSerializer(instance, context=self.context).data


class BookingSerializer(serializers.ModelSerializer):
    """Detailed booking representation."""

    user_id = serializers.ReadOnlyField(source="user.id")
    hotel_id = serializers.ReadOnlyField(source="hotel.id")
    room_id = serializers.ReadOnlyField(source="room.id")
    guest_name = serializers.ReadOnlyField()
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    can_cancel = serializers.SerializerMethodField()

    class Meta:
        model = Booking
        fields = [
            "id",
            "confirmation_code",
            "user_id",
            "hotel_id",
            "hotel_name",
            "room_id",
            "room_name",
            "check_in",
            "check_out",
            "adults",
            "children",
            "rooms",
            "first_name",
            "last_name",
            "guest_name",
            "email",
            "phone",
            "special_requests",
            "room_rate",
            "nights",
            "subtotal",
            "taxes",
            "service_fee",
            "total",
            "currency",
            "status",
            "payment_status",
            "payment_method",
            "confirmed_at",
            "cancellation_deadline",
            "can_cancel",
            "cancelled_at",
            "cancellation_reason",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_can_cancel(self, obj: Booking) -> bool:
        return obj.can_cancel()


class BookingCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class BookingStatsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    confirmed = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    pending = serializers.IntegerField()
    payment_failed = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
