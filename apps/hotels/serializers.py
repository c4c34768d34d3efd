"""Serializers for the hotels domain."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import Hotel, HotelRoom


def _string_list(value, field: str) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise serializers.ValidationError({field: "Expected a list of strings."})
    return [item.strip() for item in value if item.strip()]


class HotelRoomSerializer(serializers.ModelSerializer):
    class Meta:
        model = HotelRoom
        fields = [
            "id",
            "name",
            "description",
            "price",
            "capacity",
            "amenities",
            "images",
            "is_available",
        ]

    def validate_amenities(self, value):  # type: ignore
        return _string_list(value, "amenities")

    def validate_images(self, value):  # type: ignore
        return _string_list(value, "images")


class HotelSerializer(serializers.ModelSerializer):
    rooms = HotelRoomSerializer(many=True, read_only=True)
    owner = serializers.ReadOnlyField(source="owner_id")
    price_range = serializers.SerializerMethodField()

    class Meta:
        model = Hotel
        fields = [
            "id",
            "name",
            "description",
            "location",
            "address",
            "city",
            "country",
            "latitude",
            "longitude",
            "rating",
            "review_count",
            "price_range",
            "amenities",
            "images",
            "contact",
            "policies",
            "rooms",
            "owner",
            "is_active",
            "is_featured",
            "created_at",
            "updated_at",
        ]

    def get_price_range(self, obj: Hotel) -> dict[str, str]:
        return {"min": str(obj.price_min), "max": str(obj.price_max)}


class HotelWriteSerializer(serializers.ModelSerializer):
    """Create/update payload; rating and price range are derived fields."""

    class Meta:
        model = Hotel
        fields = [
            "name",
            "description",
            "location",
            "address",
            "city",
            "country",
            "latitude",
            "longitude",
            "amenities",
            "images",
            "contact",
            "policies",
            "is_active",
            "is_featured",
        ]

    def validate_amenities(self, value):  # type: ignore
        return _string_list(value, "amenities")

    def validate_images(self, value):  # type: ignore
        return _string_list(value, "images")

    def validate_is_featured(self, value: bool) -> bool:
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if value and not (user and user.is_admin()):
            raise serializers.ValidationError("Only administrators can feature hotels.")
        return value

    def to_representation(self, instance):  # type: ignore
        return HotelSerializer(instance, context=self.context).data


class DestinationSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    count = serializers.IntegerField()
    image = serializers.CharField(allow_blank=True)
    starting_price = serializers.DecimalField(max_digits=10, decimal_places=2)
