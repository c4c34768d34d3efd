"""Route and permission rules for Tripnest.

Every access decision in the project goes through this module: the
request middleware guarding page routes, the DRF permission classes
guarding the API and the access-check endpoint used by clients to decide
what to render. Nothing here touches the database; callers pass any object
exposing ``role``, ``permissions`` and ``is_authenticated`` (a
``CustomUser``, ``AnonymousUser`` or ``None``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable
from urllib.parse import urlencode, urlsplit

from django.conf import settings  # type: ignore

ADMIN = "admin"
PARTNER = "partner"
USER = "user"
GUEST = "guest"

ROLES = (ADMIN, PARTNER, USER, GUEST)

ALL_PERMISSIONS = "*"

ROLE_HIERARCHY: dict[str, int] = {
    GUEST: 0,
    USER: 1,
    PARTNER: 2,
    ADMIN: 3,
}

DEFAULT_PERMISSIONS: dict[str, list[str]] = {
    GUEST: ["view_public"],
    USER: ["view_public", "create_booking", "view_own_bookings", "update_profile"],
    PARTNER: ["view_public", "manage_hotels", "view_bookings", "update_profile"],
    ADMIN: [ALL_PERMISSIONS],
}

REGISTERED_ROLES = (ADMIN, PARTNER, USER)


@dataclass(frozen=True)
class RouteRule:
    """Allow-list for every path under ``prefix``; ``None`` means public."""

    prefix: str
    allowed_roles: tuple[str, ...] | None = None

    @property
    def is_public(self) -> bool:
        return self.allowed_roles is None

    def matches(self, path: str) -> bool:
        if self.prefix == "/":
            return path == "/"
        return path == self.prefix or path.startswith(self.prefix + "/")


# First match wins.
ROUTE_RULES: tuple[RouteRule, ...] = (
    RouteRule("/admin", (ADMIN,)),
    RouteRule("/partner", (ADMIN, PARTNER)),
    RouteRule("/profile", REGISTERED_ROLES),
    RouteRule("/bookings", REGISTERED_ROLES),
    RouteRule("/booking", REGISTERED_ROLES),
    RouteRule("/account", REGISTERED_ROLES),
    RouteRule("/"),
    RouteRule("/search"),
    RouteRule("/hotel"),
    RouteRule("/auth"),
    RouteRule("/unauthorized"),
    RouteRule("/offline"),
)

PUBLIC_ROUTE = RouteRule("")

AUTH_PAGES = ("/auth/signin", "/auth/signup", "/auth/forgot-password")

LANDING_PAGES: dict[str, str] = {
    ADMIN: "/admin",
    PARTNER: "/partner",
    USER: "/profile",
}


@dataclass(frozen=True)
class AccessDecision:
    allowed: bool
    redirect_to: str | None = None
    reason: str = ""


def is_authenticated(user: Any) -> bool:
    return bool(user is not None and getattr(user, "is_authenticated", False))


def role_of(user: Any) -> str | None:
    if not is_authenticated(user):
        return None
    return getattr(user, "role", None) or USER


def has_role(user: Any, roles: str | Iterable[str]) -> bool:
    role = role_of(user)
    if role is None:
        return False
    if isinstance(roles, str):
        roles = (roles,)
    return role in tuple(roles)


def default_permissions(role: str) -> list[str]:
    return list(DEFAULT_PERMISSIONS.get(role, DEFAULT_PERMISSIONS[GUEST]))


def has_permission(user: Any, permission: str) -> bool:
    """Admins hold every permission; everyone else needs it stored."""
    role = role_of(user)
    if role is None:
        return False
    if role == ADMIN:
        return True
    stored = getattr(user, "permissions", None) or []
    return ALL_PERMISSIONS in stored or permission in stored


def is_role_higher_or_equal(role: str, required_role: str) -> bool:
    return ROLE_HIERARCHY.get(role, -1) >= ROLE_HIERARCHY[required_role]


def find_route_rule(path: str) -> RouteRule:
    for rule in ROUTE_RULES:
        if rule.matches(path):
            return rule
    return PUBLIC_ROUTE


def can_access_route(user: Any, path: str, required_roles: Iterable[str] | None = None) -> bool:
    rule = find_route_rule(path)
    if rule.is_public and not required_roles:
        return True
    if not is_authenticated(user):
        return False
    if not rule.is_public and not has_role(user, rule.allowed_roles):
        return False
    if required_roles:
        return has_role(user, required_roles)
    return True


def default_landing(user: Any) -> str:
    return LANDING_PAGES.get(role_of(user) or "", "/")


def signin_url(next_path: str) -> str:
    return f"{settings.ACCESS_SIGNIN_URL}?{urlencode({'redirect': next_path})}"


def get_redirect_url(user: Any, intended_path: str | None = None) -> str:
    """Where to send ``user`` after sign-in or after a denied request."""
    if not is_authenticated(user):
        return settings.ACCESS_SIGNIN_URL
    if intended_path and can_access_route(user, intended_path):
        return intended_path
    return default_landing(user)


def safe_redirect_target(value: str | None) -> str | None:
    """Return ``value`` only when it is a site-relative path."""
    if not value or not value.startswith("/") or value.startswith("//"):
        return None
    parts = urlsplit(value)
    if parts.scheme or parts.netloc or "\\" in value:
        return None
    return value


def authorize(
    user: Any,
    path: str,
    required_roles: Iterable[str] | None = None,
    redirect_to: str | None = None,
) -> AccessDecision:
    """Decide whether ``user`` may open ``path`` and where to send them if not."""
    if can_access_route(user, path, required_roles):
        return AccessDecision(allowed=True, reason="allowed")
    if not is_authenticated(user):
        return AccessDecision(
            allowed=False,
            redirect_to=signin_url(path),
            reason="authentication_required",
        )
    return AccessDecision(
        allowed=False,
        redirect_to=redirect_to or settings.ACCESS_UNAUTHORIZED_URL,
        reason="role_not_allowed",
    )


def is_auth_page(path: str) -> bool:
    return any(path == page or path.startswith(page + "/") for page in AUTH_PAGES)
