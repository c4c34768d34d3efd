"""Permissions for hotel management."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from apps.access import rules


class IsHotelManager(permissions.BasePermission):
    """Read for everyone; writes for admins and the partner owning the hotel."""

    message = "Only the hotel's partner or an administrator can change it."

    def has_permission(self, request, view) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        return rules.has_role(request.user, (rules.ADMIN, rules.PARTNER)) and rules.has_permission(
            request.user, "manage_hotels"
        )

    def has_object_permission(self, request, view, obj) -> bool:  # type: ignore
        if request.method in permissions.SAFE_METHODS:
            return True
        if rules.has_role(request.user, rules.ADMIN):
            return True
        return obj.owner_id == request.user.id
