"""Request-level route protection driven by the auth cookies."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.http import HttpResponseRedirect  # type: ignore
from rest_framework.exceptions import AuthenticationFailed  # type: ignore
from rest_framework_simplejwt.authentication import JWTAuthentication  # type: ignore
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError  # type: ignore

from . import rules

logger = logging.getLogger(__name__)


class RouteAccessMiddleware:
    """Redirects page requests the current visitor may not open.

    The visitor is resolved from the ``auth-token`` cookie (a SimpleJWT access
    token). The role always comes from the stored account; the ``user-role``
    cookie is only compared against it so that tampering shows up in the logs.
    API, static and Django admin paths are left to their own authentication.
    """

    def __init__(self, get_response):
        self.get_response = get_response
        self.jwt_auth = JWTAuthentication()

    def __call__(self, request):
        path = request.path_info
        if self.is_exempt(path):
            return self.get_response(request)

        user = self.user_from_cookies(request)
        request.access_user = user

        if rules.is_auth_page(path) and rules.is_authenticated(user):
            target = rules.safe_redirect_target(request.GET.get("redirect"))
            destination = rules.get_redirect_url(user, target) if target else "/"
            return HttpResponseRedirect(destination)

        decision = rules.authorize(user, path)
        if not decision.allowed:
            logger.info(
                "Route access denied: path=%s reason=%s redirect=%s",
                path,
                decision.reason,
                decision.redirect_to,
            )
            return HttpResponseRedirect(decision.redirect_to)

        return self.get_response(request)

    @staticmethod
    def is_exempt(path: str) -> bool:
        return any(path.startswith(prefix) for prefix in settings.ACCESS_EXEMPT_PREFIXES)

    def user_from_cookies(self, request):
        raw_token = request.COOKIES.get(settings.AUTH_TOKEN_COOKIE)
        if not raw_token:
            return None
        try:
            validated = self.jwt_auth.get_validated_token(raw_token)
            user = self.jwt_auth.get_user(validated)
        except (InvalidToken, TokenError, AuthenticationFailed) as exc:
            logger.info("Ignoring invalid auth cookie: %s", exc)
            return None

        cookie_role = request.COOKIES.get(settings.USER_ROLE_COOKIE)
        if cookie_role and cookie_role != user.role:
            logger.warning(
                "Role cookie mismatch for user %s: cookie=%s stored=%s",
                user.pk,
                cookie_role,
                user.role,
            )
        return user
