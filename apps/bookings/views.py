"""API views for the booking domain."""

from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404  # type: ignore
from django_filters.rest_framework import DjangoFilterBackend  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.access import rules
from apps.access.permissions import HasRolePermission, IsAdminRole
from .filters import BookingFilterSet
from .models import Booking, BookingPolicyError
from .serializers import (
    BookingCancelSerializer,
    BookingCreateSerializer,
    BookingSerializer,
    BookingStatsSerializer,
)
from .services import booking_stats, bookings_visible_to

logger = logging.getLogger(__name__)


class BookingViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """Create and manage bookings.

    The visible set depends on the role: users see their own bookings,
    partners the bookings of their hotels, admins everything.
    """

    queryset = Booking.objects.select_related("hotel", "room", "user").all()
    permission_classes = [permissions.IsAuthenticated, HasRolePermission]
    required_permissions = {"create": "create_booking"}
    filter_backends = [DjangoFilterBackend]
    filterset_class = BookingFilterSet

    def get_permissions(self):  # type: ignore
        if self.action == "destroy":
            return [permissions.IsAuthenticated(), IsAdminRole()]
        return super().get_permissions()

    def get_serializer_class(self):  # type: ignore
        if self.action == "create":
            return BookingCreateSerializer
        if self.action == "cancel":
            return BookingCancelSerializer
        return BookingSerializer

    def get_queryset(self):  # type: ignore
        return bookings_visible_to(self.request.user, super().get_queryset())

    def perform_create(self, serializer):  # type: ignore
        booking = serializer.save()
        logger.info(
            "Booking %s (%s) created by user %s for hotel %s",
            booking.pk,
            booking.confirmation_code,
            self.request.user.pk,
            booking.hotel_id,
        )

    def perform_destroy(self, instance):  # type: ignore
        logger.info("Booking %s deleted by admin %s", instance.pk, self.request.user.pk)
        instance.delete()

    @action(detail=False, methods=["get"], url_path=r"by-code/(?P<code>[A-Za-z0-9]+)")
    def by_code(self, request, code=None):  # type: ignore
        booking = get_object_or_404(self.get_queryset(), confirmation_code=code.upper())
        return Response(BookingSerializer(booking).data)

    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):  # type: ignore
        booking: Booking = self.get_object()  # type: ignore
        user = request.user
        if not (booking.user_id == user.id or rules.has_role(user, rules.ADMIN)):
            return Response(
                {"detail": "Only the guest or an administrator can cancel this booking."},
                status=status.HTTP_403_FORBIDDEN,
            )

        serializer = BookingCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            booking.cancel(serializer.validated_data["reason"])
        except BookingPolicyError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        logger.info("Booking %s cancelled by user %s", booking.pk, user.pk)
        return Response(BookingSerializer(booking).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def stats(self, request):  # type: ignore
        return Response(BookingStatsSerializer(booking_stats(self.get_queryset())).data)
