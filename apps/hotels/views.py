"""Hotel API views."""

from __future__ import annotations

import logging

from django.db.models import Count, Min, Q  # type: ignore
from django.shortcuts import get_object_or_404  # type: ignore
from django.utils.text import slugify  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.access import rules
from .filters import HotelFilterSet
from .models import Hotel, HotelRoom
from .permissions import IsHotelManager
from .serializers import (
    DestinationSerializer,
    HotelRoomSerializer,
    HotelSerializer,
    HotelWriteSerializer,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50


def _limit_param(request, default: int = DEFAULT_LIMIT) -> int:
    try:
        value = int(request.query_params.get("limit", default))
    except (TypeError, ValueError):
        return default
    return max(1, min(value, MAX_LIMIT))


class HotelViewSet(viewsets.ModelViewSet):
    """Hotel catalogue.

    Everyone can browse active hotels. Partners manage their own hotels and
    see them even when inactive; administrators manage all of them.
    """

    queryset = Hotel.objects.select_related("owner").prefetch_related("rooms")
    permission_classes = [IsHotelManager]
    filter_backends = [DjangoFilterBackend]
    filterset_class = HotelFilterSet

    def get_queryset(self):  # type: ignore
        qs = super().get_queryset()
        user = self.request.user
        if rules.has_role(user, rules.ADMIN):
            return qs
        if rules.has_role(user, rules.PARTNER):
            return qs.filter(Q(is_active=True) | Q(owner=user))
        return qs.filter(is_active=True)

    def get_serializer_class(self):  # type: ignore
        if self.action in {"create", "update", "partial_update"}:
            return HotelWriteSerializer
        if self.action == "rooms":
            return HotelRoomSerializer
        return HotelSerializer

    def perform_create(self, serializer):  # type: ignore
        hotel = serializer.save(owner=self.request.user)
        logger.info("Hotel %s created by user %s", hotel.pk, self.request.user.pk)

    def perform_destroy(self, instance):  # type: ignore
        logger.info("Hotel %s deleted by user %s", instance.pk, self.request.user.pk)
        instance.delete()

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def featured(self, request):
        """Active featured hotels, best rated first."""
        hotels = (
            Hotel.objects.filter(is_active=True, is_featured=True)
            .prefetch_related("rooms")
            .order_by("-rating", "-review_count")[: _limit_param(request)]
        )
        return Response(HotelSerializer(hotels, many=True).data)

    @action(detail=False, methods=["get"], permission_classes=[permissions.AllowAny])
    def destinations(self, request):
        """Cities ranked by number of active hotels."""
        active = Hotel.objects.filter(is_active=True)
        groups = (
            active.values("city")
            .annotate(count=Count("id"), starting_price=Min("price_min"))
            .order_by("-count", "city")[: _limit_param(request)]
        )
        destinations = []
        for group in groups:
            cover = next(
                (
                    hotel.cover_image
                    for hotel in active.filter(city=group["city"]).order_by("-rating", "id")
                    if hotel.cover_image
                ),
                "",
            )
            destinations.append(
                {
                    "id": slugify(group["city"]),
                    "name": group["city"],
                    "count": group["count"],
                    "image": cover,
                    "starting_price": group["starting_price"],
                }
            )
        return Response(DestinationSerializer(destinations, many=True).data)

    @action(detail=True, methods=["post"])
    def rooms(self, request, pk=None):
        """Add a room and refresh the hotel's price range."""
        hotel = self.get_object()
        serializer = HotelRoomSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        room = serializer.save(hotel=hotel)
        hotel.recompute_price_range()
        return Response(HotelRoomSerializer(room).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["delete"], url_path=r"rooms/(?P<room_id>\d+)")
    def remove_room(self, request, pk=None, room_id=None):
        hotel = self.get_object()
        room = get_object_or_404(HotelRoom, pk=room_id, hotel=hotel)
        room.delete()
        hotel.recompute_price_range()
        return Response(status=status.HTTP_204_NO_CONTENT)
