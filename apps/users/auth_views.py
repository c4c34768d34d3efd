"""Views for authentication flows (register, login, Google sign-in, logout, password reset)."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.tokens import RefreshToken  # type: ignore

from .auth_serializers import (
    GoogleSignInSerializer,
    LoginSerializer,
    PasswordResetConfirmSerializer,
    PasswordResetRequestSerializer,
    RegisterSerializer,
)
from .google_auth import GoogleAuthUnavailable
from .serializers import UserSerializer

logger = logging.getLogger(__name__)


def _tokens_for_user(user) -> dict[str, str]:
    refresh = RefreshToken.for_user(user)
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


def set_auth_cookies(response: Response, user, access_token: str) -> None:
    """Cookies consumed by ``RouteAccessMiddleware`` before a page renders."""
    for name, value in (
        (settings.AUTH_TOKEN_COOKIE, access_token),
        (settings.USER_ROLE_COOKIE, user.role),
    ):
        response.set_cookie(
            name,
            value,
            max_age=settings.AUTH_COOKIE_MAX_AGE,
            path="/",
            secure=settings.AUTH_COOKIE_SECURE,
            samesite=settings.AUTH_COOKIE_SAMESITE,
        )


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(settings.AUTH_TOKEN_COOKIE, path="/", samesite=settings.AUTH_COOKIE_SAMESITE)
    response.delete_cookie(settings.USER_ROLE_COOKIE, path="/", samesite=settings.AUTH_COOKIE_SAMESITE)


def _signed_in_response(user, status_code: int) -> Response:
    tokens = _tokens_for_user(user)
    data = {
        "user": UserSerializer(user).data,
        "tokens": tokens,
    }
    response = Response(data, status=status_code)
    set_auth_cookies(response, user, tokens["access"])
    return response


class RegisterView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        user.record_login()
        return _signed_in_response(user, status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        user.record_login()
        return _signed_in_response(user, status.HTTP_200_OK)


class GoogleSignInView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = GoogleSignInSerializer(data=request.data)
        try:
            serializer.is_valid(raise_exception=True)
        except GoogleAuthUnavailable:
            return Response(
                {"detail": "Google sign-in is temporarily unavailable."},
                status=status.HTTP_503_SERVICE_UNAVAILABLE,
            )
        user = serializer.validated_data["user"]
        user.record_login()
        return _signed_in_response(user, status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        response = Response(status=status.HTTP_204_NO_CONTENT)
        clear_auth_cookies(response)
        return response


class PasswordResetRequestView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = PasswordResetRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        if serializer.validated_data["user"] is None:
            logger.info("Password reset requested for an unknown account")
        else:
            serializer.save()
        return Response(
            {"detail": "If the account exists, a reset code has been sent."},
            status=status.HTTP_202_ACCEPTED,
        )


class PasswordResetConfirmView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        serializer = PasswordResetConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({"detail": "Password updated."}, status=status.HTTP_200_OK)
