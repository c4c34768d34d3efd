"""DRF permission classes backed by ``apps.access.rules``."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore

from . import rules


class RolePermission(permissions.BasePermission):
    """Grants access when the user's role is in ``allowed_roles``."""

    allowed_roles: tuple[str, ...] = ()

    def has_permission(self, request, view) -> bool:  # type: ignore
        return rules.has_role(request.user, self.allowed_roles)


class IsAdminRole(RolePermission):
    allowed_roles = (rules.ADMIN,)


class IsPartnerOrAdmin(RolePermission):
    allowed_roles = (rules.ADMIN, rules.PARTNER)


class IsRegisteredUser(RolePermission):
    """Any signed-in account except the ``guest`` role."""

    allowed_roles = rules.REGISTERED_ROLES


class HasRolePermission(permissions.BasePermission):
    """Checks the permission a view declares.

    Views set either ``required_permission`` or a ``required_permissions``
    mapping of action name to permission. Views without a declaration are
    not restricted by this class.
    """

    def has_permission(self, request, view) -> bool:  # type: ignore
        required = self.required_for(view)
        if required is None:
            return True
        return rules.has_permission(request.user, required)

    @staticmethod
    def required_for(view) -> str | None:  # type: ignore
        by_action = getattr(view, "required_permissions", None)
        action = getattr(view, "action", None)
        if by_action and action in by_action:
            return by_action[action]
        return getattr(view, "required_permission", None)
