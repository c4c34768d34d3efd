"""Serializers for the access-check endpoint."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from . import rules


class AccessCheckQuerySerializer(serializers.Serializer):
    path = serializers.CharField()
    roles = serializers.CharField(required=False, allow_blank=True)

    def validate_path(self, value: str) -> str:
        if not value.startswith("/"):
            raise serializers.ValidationError("Path must start with '/'.")
        return value

    def validate_roles(self, value: str) -> list[str]:
        roles = [role.strip() for role in value.split(",") if role.strip()]
        unknown = [role for role in roles if role not in rules.ROLES]
        if unknown:
            raise serializers.ValidationError(f"Unknown roles: {', '.join(unknown)}")
        return roles


class AccessDecisionSerializer(serializers.Serializer):
    allowed = serializers.BooleanField()
    redirect_to = serializers.CharField(allow_null=True)
    reason = serializers.CharField()
    landing = serializers.CharField()
