"""User API views."""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model  # type: ignore
from django.db.models import Count, Q  # type: ignore
from rest_framework import mixins, permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.access.permissions import IsAdminRole
from .serializers import RoleAssignmentSerializer, UserSerializer

User = get_user_model()

logger = logging.getLogger(__name__)


class UserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """User management.

    - `me` returns or updates the current user's profile
    - listing, role assignment and deactivation are admin-only
    """

    serializer_class = UserSerializer
    queryset = User.objects.all()

    def get_permissions(self):  # type: ignore
        if self.action == "me":
            return [permissions.IsAuthenticated()]
        return [permissions.IsAuthenticated(), IsAdminRole()]

    def get_queryset(self):  # type: ignore
        queryset = super().get_queryset()
        params = self.request.query_params
        role = params.get("role")
        if role:
            queryset = queryset.filter(role=role)
        is_active = params.get("is_active")
        if is_active in {"true", "false"}:
            queryset = queryset.filter(is_active=is_active == "true")
        search = params.get("search")
        if search:
            queryset = queryset.filter(
                Q(email__icontains=search)
                | Q(first_name__icontains=search)
                | Q(last_name__icontains=search)
                | Q(username__icontains=search)
            )
        return queryset

    @action(detail=False, methods=["get", "patch"])
    def me(self, request):
        """Current user's profile."""
        if request.method == "PATCH":
            serializer = UserSerializer(request.user, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)
            serializer.save()
            return Response(serializer.data)
        return Response(UserSerializer(request.user).data)

    @action(detail=True, methods=["post"])
    def role(self, request, pk=None):
        user = self.get_object()
        serializer = RoleAssignmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        previous = user.role
        user.assign_role(serializer.validated_data["role"])
        logger.info(
            "Role changed for user %s: %s -> %s (by %s)",
            user.pk,
            previous,
            user.role,
            request.user.pk,
        )
        return Response(UserSerializer(user).data)

    @action(detail=True, methods=["post"])
    def deactivate(self, request, pk=None):
        user = self.get_object()
        if user.pk == request.user.pk:
            return Response(
                {"detail": "You cannot deactivate your own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        user.is_active = False
        user.save(update_fields=["is_active"])
        return Response(UserSerializer(user).data)

    @action(detail=True, methods=["post"])
    def activate(self, request, pk=None):
        user = self.get_object()
        user.is_active = True
        user.save(update_fields=["is_active"])
        return Response(UserSerializer(user).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        """Account counts by role and status."""
        totals = User.objects.aggregate(
            total=Count("id"),
            active=Count("id", filter=Q(is_active=True)),
            google=Count("id", filter=Q(auth_provider=User.AuthProvider.GOOGLE)),
        )
        by_role = {
            row["role"]: row["count"]
            for row in User.objects.values("role").annotate(count=Count("id"))
        }
        totals["by_role"] = {role: by_role.get(role, 0) for role in User.RoleChoices.values}
        return Response(totals)
