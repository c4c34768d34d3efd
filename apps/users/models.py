"""User domain models for Tripnest.

The platform differentiates four roles (guest, user, partner, admin). Each
account stores its role together with an explicit permission list; the
defaults for each role and every decision built on them live in
``apps.access.rules``. Accounts come either from email/password
registration or from Google sign-in.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.contrib.auth.models import update_last_login  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from apps.access import rules


PHONE_VALIDATOR = RegexValidator(
    regex=r"^\+?\d{7,15}$",
    message=_("Invalid phone format. Use the international format without spaces."),
)


class CustomUserManager(BaseUserManager):
    """User manager that uses the email address as the login."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("An email address is required to create a user.")
        email = self.normalize_email(email)

        phone = extra_fields.get("phone")
        if phone:
            extra_fields["phone"] = self.normalize_phone(phone)

        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)

    @staticmethod
    def normalize_phone(phone: str) -> str:
        """Strip spaces and dashes so phones are stored uniformly."""
        return phone.replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Platform account with a role and an explicit permission list."""

    class RoleChoices(models.TextChoices):
        ADMIN = rules.ADMIN, _("Admin")
        PARTNER = rules.PARTNER, _("Partner")
        USER = rules.USER, _("User")
        GUEST = rules.GUEST, _("Guest")

    class AuthProvider(models.TextChoices):
        PASSWORD = "password", _("Email and password")
        GOOGLE = "google", _("Google")

    username = models.CharField(
        _("Display name"),
        max_length=150,
        blank=True,
        help_text=_("Optional, shown in the interface and in notifications."),
    )
    email = models.EmailField(_("Email"), unique=True)
    phone = models.CharField(
        _("Phone"),
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        validators=[PHONE_VALIDATOR],
    )
    photo_url = models.URLField(_("Photo URL"), max_length=500, blank=True)
    role = models.CharField(
        _("Role"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.USER,
    )
    permissions = models.JSONField(
        _("Permissions"),
        default=list,
        blank=True,
        help_text=_("Permission names; filled with the role defaults when empty."),
    )
    auth_provider = models.CharField(
        max_length=20,
        choices=AuthProvider.choices,
        default=AuthProvider.PASSWORD,
    )
    google_uid = models.CharField(max_length=128, unique=True, null=True, blank=True)
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(_("Locked until"), null=True, blank=True)
    role_updated_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def save(self, *args, **kwargs):  # type: ignore
        if not self.permissions:
            self.permissions = rules.default_permissions(self.role)
            update_fields = kwargs.get("update_fields")
            if update_fields is not None and "permissions" not in update_fields:
                kwargs["update_fields"] = [*update_fields, "permissions"]
        super().save(*args, **kwargs)

    # --- Domain helpers ------------------------------------------------------
    @property
    def display_name(self) -> str:
        full_name = self.get_full_name()
        return full_name or self.username or self.email

    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN

    def has_app_permission(self, permission: str) -> bool:
        return rules.has_permission(self, permission)

    def assign_role(self, role: str) -> None:
        """Change the role and reset the stored permissions to its defaults."""
        self.role = role
        self.permissions = rules.default_permissions(role)
        self.role_updated_at = timezone.now()
        self.save(update_fields=["role", "permissions", "role_updated_at"])

    def record_login(self) -> None:
        update_last_login(None, self)

    @property
    def is_locked(self) -> bool:
        return bool(self.locked_until and self.locked_until > timezone.now())

    def lock(self, minutes: int = 15) -> None:
        self.locked_until = timezone.now() + timezone.timedelta(minutes=minutes)
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def unlock(self) -> None:
        self.locked_until = None
        self.failed_login_attempts = 0
        self.save(update_fields=["locked_until", "failed_login_attempts"])

    def register_failed_attempt(self, threshold: int = 5) -> None:
        self.failed_login_attempts += 1
        update_fields = ["failed_login_attempts"]
        if self.failed_login_attempts >= threshold:
            self.lock()
            return
        self.save(update_fields=update_fields)


class PasswordResetToken(models.Model):
    """Time-limited password reset code with a bounded number of attempts."""

    user = models.ForeignKey(
        CustomUser,
        on_delete=models.CASCADE,
        related_name="password_reset_tokens",
    )
    code = models.CharField(max_length=6)
    expires_at = models.DateTimeField()
    attempts_left = models.PositiveSmallIntegerField(default=3)
    is_used = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Password reset token")
        verbose_name_plural = _("Password reset tokens")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["code", "expires_at"], name="reset_code_expires_idx"),
        ]

    def __str__(self) -> str:
        return f"Reset token for {self.user_id}"

    @property
    def is_expired(self) -> bool:
        return timezone.now() >= self.expires_at

    def mark_used(self) -> None:
        self.is_used = True
        self.save(update_fields=["is_used"])

    def decrement_attempt(self) -> None:
        if self.attempts_left > 0:
            self.attempts_left -= 1
            self.save(update_fields=["attempts_left"])


User = CustomUser
