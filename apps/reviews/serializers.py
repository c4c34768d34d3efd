"""Serializers for reviews.

The creating user is inferred from the request in the view; verification
and the hotel's rating are derived, never accepted from the client.
"""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from apps.hotels.models import Hotel
from .models import Review


class ReviewCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating a new review."""

    hotel = serializers.PrimaryKeyRelatedField(queryset=Hotel.objects.filter(is_active=True))

    class Meta:
        model = Review
        fields = ['hotel', 'rating', 'title', 'comment', 'pros', 'cons']

    def validate_rating(self, value: int) -> int:  # type: ignore
        if value < 1 or value > 5:
            raise serializers.ValidationError('Rating must be between 1 and 5.')
        return value

    def validate(self, attrs):  # type: ignore
        user = self.context['request'].user
        if Review.objects.filter(user=user, hotel=attrs['hotel'], is_active=True).exists():
            raise serializers.ValidationError(
                {'hotel': 'You have already reviewed this hotel.'}
            )
        return attrs

    def to_representation(self, instance):  # type: ignore
        return ReviewSerializer(instance, context=self.context).data


class ReviewUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Review
        fields = ['rating', 'title', 'comment', 'pros', 'cons']

    def to_representation(self, instance):  # type: ignore
        return ReviewSerializer(instance, context=self.context).data


class ReviewSerializer(serializers.ModelSerializer):
    """Read serializer for reviews including related ids."""

    user_id = serializers.ReadOnlyField(source='user.id')
    user_name = serializers.ReadOnlyField(source='user.display_name')
    user_photo = serializers.ReadOnlyField(source='user.photo_url')
    hotel_id = serializers.ReadOnlyField(source='hotel.id')
    hotel_name = serializers.ReadOnlyField(source='hotel.name')

    class Meta:
        model = Review
        fields = [
            'id',
            'user_id',
            'user_name',
            'user_photo',
            'hotel_id',
            'hotel_name',
            'rating',
            'title',
            'comment',
            'pros',
            'cons',
            'is_verified',
            'response',
            'response_at',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class ReviewResponseSerializer(serializers.Serializer):
    response = serializers.CharField(max_length=2000)


class ReviewStatsQuerySerializer(serializers.Serializer):
    hotel = serializers.IntegerField(min_value=1)
