"""API tests for authentication endpoints."""

from __future__ import annotations

from datetime import timedelta
from unittest.mock import patch

from django.core import mail
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.google_auth import GoogleAuthUnavailable, GoogleTokenError
from apps.users.models import PasswordResetToken, User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens_and_cookies(self) -> None:
        payload = {
            "email": "guest@example.com",
            "phone": "+66812345678",
            "first_name": "Guest",
            "last_name": "User",
            "password": "StrongPass123",
            "password_confirm": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("tokens", response.data)
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], "user")
        self.assertEqual(
            response.data["user"]["permissions"],
            ["view_public", "create_booking", "view_own_bookings", "update_profile"],
        )

        token_cookie = response.cookies["auth-token"]
        self.assertEqual(token_cookie.value, response.data["tokens"]["access"])
        self.assertEqual(token_cookie["samesite"], "Strict")
        self.assertTrue(token_cookie["secure"])
        self.assertEqual(response.cookies["user-role"].value, "user")

    def test_register_rejects_password_mismatch(self) -> None:
        payload = {
            "email": "mismatch@example.com",
            "password": "StrongPass123",
            "password_confirm": "OtherPass123",
        }
        response = self.client.post(reverse("auth:register"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password_confirm", response.data)

    def test_login_updates_last_login(self) -> None:
        user = User.objects.create_user(email="login@example.com", password="CorrectPassword1")
        self.assertIsNone(user.last_login)

        response = self.client.post(
            reverse("auth:login"),
            {"email": user.email, "password": "CorrectPassword1"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user.refresh_from_db()
        self.assertIsNotNone(user.last_login)
        self.assertEqual(response.cookies["user-role"].value, "user")

    def test_login_limited_attempts(self) -> None:
        user = User.objects.create_user(
            email="lock@example.com",
            phone="+66800000001",
            password="CorrectPassword1",
        )

        url = reverse("auth:login")
        wrong_payload = {"email": user.email, "password": "wrong"}
        for _ in range(5):
            response = self.client.post(url, wrong_payload, format="json")

        user.refresh_from_db()
        self.assertTrue(user.is_locked)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        # After lock expires user can login again
        user.locked_until = timezone.now() - timedelta(minutes=1)
        user.save(update_fields=["locked_until"])
        response = self.client.post(
            url, {"email": user.email, "password": "CorrectPassword1"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)

    def test_logout_clears_cookies(self) -> None:
        response = self.client.post(reverse("auth:logout"))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(response.cookies["auth-token"].value, "")
        self.assertEqual(response.cookies["user-role"].value, "")

    def test_password_reset_flow(self) -> None:
        user = User.objects.create_user(
            email="reset@example.com",
            phone="+66800000002",
            password="OldPassword1",
        )

        request_resp = self.client.post(
            reverse("auth:password-reset-request"),
            {"identifier": user.email},
            format="json",
        )
        self.assertEqual(request_resp.status_code, status.HTTP_202_ACCEPTED, request_resp.data)
        self.assertEqual(len(mail.outbox), 1)

        token = PasswordResetToken.objects.get(user=user)
        confirm_payload = {
            "identifier": user.email,
            "code": token.code,
            "new_password": "NewPassword1",
            "new_password_confirm": "NewPassword1",
        }
        confirm_resp = self.client.post(
            reverse("auth:password-reset-confirm"),
            confirm_payload,
            format="json",
        )
        self.assertEqual(confirm_resp.status_code, status.HTTP_200_OK, confirm_resp.data)
        user.refresh_from_db()
        self.assertTrue(user.check_password("NewPassword1"))

    def test_wrong_reset_code_consumes_attempt(self) -> None:
        user = User.objects.create_user(email="attempts@example.com", password="OldPassword1")
        self.client.post(
            reverse("auth:password-reset-request"), {"identifier": user.email}, format="json"
        )
        token = PasswordResetToken.objects.get(user=user)
        wrong_code = "000000" if token.code != "000000" else "111111"

        response = self.client.post(
            reverse("auth:password-reset-confirm"),
            {
                "identifier": user.email,
                "code": wrong_code,
                "new_password": "NewPassword1",
                "new_password_confirm": "NewPassword1",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        token.refresh_from_db()
        self.assertEqual(token.attempts_left, 2)

    def test_reset_request_does_not_reveal_accounts(self) -> None:
        User.objects.create_user(email="known@example.com", password="OldPassword1")
        url = reverse("auth:password-reset-request")

        known = self.client.post(url, {"identifier": "known@example.com"}, format="json")
        unknown = self.client.post(url, {"identifier": "nobody@example.com"}, format="json")

        self.assertEqual(known.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(unknown.status_code, status.HTTP_202_ACCEPTED)
        self.assertEqual(known.data, unknown.data)
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(PasswordResetToken.objects.count(), 1)

    def test_reset_confirm_for_unknown_account(self) -> None:
        response = self.client.post(
            reverse("auth:password-reset-confirm"),
            {
                "identifier": "nobody@example.com",
                "code": "123456",
                "new_password": "NewPassword1",
                "new_password_confirm": "NewPassword1",
            },
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("code", response.data)
        self.assertNotIn("identifier", response.data)


class GoogleSignInTests(APITestCase):
    url = "auth:google"

    def claims(self, **overrides):
        data = {
            "uid": "google-uid-1",
            "email": "traveller@gmail.com",
            "name": "Ann Traveller",
            "picture": "https://example.com/ann.png",
        }
        data.update(overrides)
        return data

    @patch("apps.users.google_auth.verify_google_id_token")
    def test_creates_user_with_default_role(self, verify) -> None:
        verify.return_value = self.claims()

        response = self.client.post(reverse(self.url), {"id_token": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        user = User.objects.get(email="traveller@gmail.com")
        self.assertEqual(user.role, User.RoleChoices.USER)
        self.assertEqual(user.auth_provider, User.AuthProvider.GOOGLE)
        self.assertEqual(user.google_uid, "google-uid-1")
        self.assertIsNotNone(user.last_login)
        self.assertEqual(response.cookies["user-role"].value, "user")

    @patch("apps.users.google_auth.verify_google_id_token")
    def test_links_existing_account_by_email(self, verify) -> None:
        existing = User.objects.create_user(
            email="traveller@gmail.com",
            password="Password123",
            role=User.RoleChoices.PARTNER,
        )
        verify.return_value = self.claims()

        response = self.client.post(reverse(self.url), {"id_token": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        existing.refresh_from_db()
        self.assertEqual(existing.google_uid, "google-uid-1")
        self.assertEqual(existing.role, User.RoleChoices.PARTNER)
        self.assertEqual(User.objects.count(), 1)

    @patch("apps.users.google_auth.verify_google_id_token")
    def test_invalid_token_is_rejected(self, verify) -> None:
        verify.side_effect = GoogleTokenError("expired")

        response = self.client.post(reverse(self.url), {"id_token": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("id_token", response.data)

    @patch("apps.users.google_auth.verify_google_id_token")
    def test_backend_failure_returns_503(self, verify) -> None:
        verify.side_effect = GoogleAuthUnavailable("certificates unavailable")

        response = self.client.post(reverse(self.url), {"id_token": "abc"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
