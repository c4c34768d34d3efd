"""API views for managing reviews."""

from __future__ import annotations

import logging

from django.db import transaction  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django.utils import timezone  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.access import rules
from apps.access.permissions import IsRegisteredUser
from apps.hotels.models import Hotel
from .filters import ReviewFilterSet
from .models import Review
from .serializers import (
    ReviewCreateSerializer,
    ReviewResponseSerializer,
    ReviewSerializer,
    ReviewStatsQuerySerializer,
    ReviewUpdateSerializer,
)
from .services import has_confirmed_stay, rating_summary, recompute_hotel_rating

logger = logging.getLogger(__name__)


class IsReviewerOrAdmin(permissions.BasePermission):
    """Allow authors to manage their reviews and admins to manage all."""

    def has_object_permission(self, request, view, obj: Review) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        if rules.has_role(request.user, rules.ADMIN):
            return True
        return obj.user_id == request.user.id


class ReviewViewSet(viewsets.ModelViewSet):
    """Viewset for creating, retrieving, editing and deleting reviews."""

    queryset = Review.objects.select_related('hotel', 'user').filter(is_active=True)
    permission_classes = [permissions.IsAuthenticatedOrReadOnly, IsReviewerOrAdmin]
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    filter_backends = [DjangoFilterBackend]
    filterset_class = ReviewFilterSet

    def get_permissions(self):  # type: ignore
        if self.action == 'create':
            return [permissions.IsAuthenticated(), IsRegisteredUser()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == 'create':
            return ReviewCreateSerializer
        if self.action in {'update', 'partial_update'}:
            return ReviewUpdateSerializer
        if self.action == 'respond':
            return ReviewResponseSerializer
        return ReviewSerializer

    @transaction.atomic
    def perform_create(self, serializer):  # type: ignore
        user = self.request.user
        hotel = serializer.validated_data['hotel']
        review = serializer.save(user=user, is_verified=has_confirmed_stay(user, hotel))
        recompute_hotel_rating(hotel)
        logger.info("Review %s created for hotel %s", review.pk, hotel.pk)

    @transaction.atomic
    def perform_update(self, serializer):  # type: ignore
        review = serializer.save()
        if 'rating' in serializer.validated_data:
            recompute_hotel_rating(review.hotel)

    @transaction.atomic
    def perform_destroy(self, instance):  # type: ignore
        instance.is_active = False
        instance.save(update_fields=['is_active', 'updated_at'])
        recompute_hotel_rating(instance.hotel)
        logger.info("Review %s removed by user %s", instance.pk, self.request.user.pk)

    @action(detail=True, methods=['post'], permission_classes=[permissions.IsAuthenticated])
    def respond(self, request, pk=None):  # type: ignore
        """Reply from the hotel's partner or an administrator."""
        review = self.get_object()
        user = request.user
        if not (rules.has_role(user, rules.ADMIN) or review.hotel.owner_id == user.id):
            return Response(
                {"detail": "Only the hotel's partner can reply to its reviews."},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = ReviewResponseSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review.response = serializer.validated_data['response']
        review.response_at = timezone.now()
        review.save(update_fields=['response', 'response_at'])
        return Response(ReviewSerializer(review).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=['get'], permission_classes=[permissions.AllowAny])
    def stats(self, request):  # type: ignore
        """Rating summary for ``?hotel=<id>``."""
        query = ReviewStatsQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        hotel = get_object_or_404(Hotel, pk=query.validated_data['hotel'], is_active=True)
        summary = rating_summary(hotel)
        summary['average_rating'] = str(summary['average_rating'])
        return Response(summary)
