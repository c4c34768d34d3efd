"""Serializers for user-related API endpoints."""

from __future__ import annotations

from django.contrib.auth import get_user_model  # type: ignore
from rest_framework import serializers  # type: ignore

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    """Main user serializer."""

    display_name = serializers.ReadOnlyField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "username",
            "display_name",
            "first_name",
            "last_name",
            "phone",
            "photo_url",
            "role",
            "permissions",
            "auth_provider",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "email",
            "role",
            "permissions",
            "auth_provider",
            "is_active",
            "last_login",
            "created_at",
            "updated_at",
        ]


class RoleAssignmentSerializer(serializers.Serializer):
    role = serializers.ChoiceField(choices=User.RoleChoices.choices)
