"""Serializers for authentication flows (register, login, Google, password reset)."""

from __future__ import annotations

import logging
import random
from datetime import timedelta
from typing import Any

from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from apps.notifications.services import send_email_notification
from . import google_auth
from .models import PHONE_VALIDATOR, PasswordResetToken


User = get_user_model()

logger = logging.getLogger(__name__)


def _find_user(identifier: str):
    if "@" in identifier:
        return User.objects.get(email__iexact=identifier)
    return User.objects.get(phone=identifier)


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(min_length=8, write_only=True)
    password_confirm = serializers.CharField(min_length=8, write_only=True)
    first_name = serializers.CharField(required=False, allow_blank=True)
    last_name = serializers.CharField(required=False, allow_blank=True)
    username = serializers.CharField(required=False, allow_blank=True)
    phone = serializers.CharField(required=False, allow_blank=True, validators=[PHONE_VALIDATOR])

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("password") != attrs.get("password_confirm"):
            raise serializers.ValidationError({"password_confirm": "Passwords do not match."})
        email = attrs.get("email")
        phone = attrs.get("phone") or None
        if User.objects.filter(email__iexact=email).exists():
            raise serializers.ValidationError({"email": "A user with this email already exists."})
        if phone and User.objects.filter(phone=phone).exists():
            raise serializers.ValidationError({"phone": "A user with this phone already exists."})
        attrs["phone"] = phone
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        password = validated_data.pop("password")
        validated_data.pop("password_confirm", None)
        return User.objects.create_user(password=password, **validated_data)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        email = attrs.get("email", "")
        password = attrs.get("password", "")

        try:
            user = User.objects.get(email__iexact=email)
        except User.DoesNotExist:
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if not user.is_active:
            raise serializers.ValidationError({"non_field_errors": ["This account is disabled."]})

        if user.is_locked:
            raise serializers.ValidationError(
                {"non_field_errors": ["Account temporarily locked. Try again later."]}
            )

        if not user.check_password(password):
            user.register_failed_attempt(threshold=5)
            raise serializers.ValidationError({"email": "Invalid email or password."})

        if user.failed_login_attempts or user.locked_until:
            user.unlock()

        attrs["user"] = user
        return attrs


class GoogleSignInSerializer(serializers.Serializer):
    id_token = serializers.CharField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        # GoogleAuthUnavailable propagates to the view
        try:
            claims = google_auth.verify_google_id_token(attrs["id_token"])
            attrs["user"] = google_auth.get_or_create_google_user(claims)
        except google_auth.GoogleTokenError as exc:
            logger.info("Google sign-in rejected: %s", exc)
            raise serializers.ValidationError({"id_token": "Invalid Google ID token."})
        return attrs


class PasswordResetRequestSerializer(serializers.Serializer):
    identifier = serializers.CharField()

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        # Unknown accounts get the same answer as known ones
        try:
            attrs["user"] = _find_user(attrs.get("identifier", ""))
        except User.DoesNotExist:
            attrs["user"] = None
        return attrs

    @transaction.atomic
    def create(self, validated_data: dict[str, Any]):  # type: ignore
        user = validated_data["user"]
        PasswordResetToken.objects.filter(user=user, is_used=False).update(is_used=True)

        code = f"{random.randint(0, 999999):06d}"
        token = PasswordResetToken.objects.create(
            user=user,
            code=code,
            expires_at=timezone.now() + timedelta(minutes=15),
            attempts_left=3,
            is_used=False,
        )

        # send_email_notification logs and reports failures itself
        send_email_notification(
            recipient_email=user.email,
            subject="Your password reset code",
            template_name=None,
            context={"message": f"Your password reset code: {code}"},
        )
        return token


class PasswordResetConfirmSerializer(serializers.Serializer):
    identifier = serializers.CharField()
    code = serializers.CharField()
    new_password = serializers.CharField(min_length=8)
    new_password_confirm = serializers.CharField(min_length=8)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:  # type: ignore
        if attrs.get("new_password") != attrs.get("new_password_confirm"):
            raise serializers.ValidationError({"new_password_confirm": "Passwords do not match."})
        try:
            attrs["user"] = _find_user(attrs.get("identifier", ""))
        except User.DoesNotExist:
            raise serializers.ValidationError({"code": "Code not found. Request a new one."})
        return attrs

    def create(self, validated_data: dict[str, Any]):  # type: ignore
        # Not atomic: a rejected code must still consume an attempt
        user = validated_data["user"]
        code = validated_data["code"]

        try:
            token = PasswordResetToken.objects.filter(
                user=user,
                is_used=False,
            ).latest("created_at")
        except PasswordResetToken.DoesNotExist:
            raise serializers.ValidationError({"code": "Code not found. Request a new one."})

        if token.is_expired:
            token.mark_used()
            raise serializers.ValidationError({"code": "The code has expired."})

        if token.attempts_left == 0:
            token.mark_used()
            raise serializers.ValidationError({"code": "Too many attempts. Request a new code."})

        if token.code != code:
            token.decrement_attempt()
            raise serializers.ValidationError({"code": "Invalid code."})

        user.set_password(validated_data["new_password"])
        user.save(update_fields=["password"])
        token.mark_used()
        return user
