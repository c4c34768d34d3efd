from __future__ import annotations

from django.test import TestCase
from rest_framework_simplejwt.tokens import RefreshToken

from apps.users.models import User


class RouteAccessMiddlewareTests(TestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(email="user@example.com", password="UserPass123")
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass123", role=User.RoleChoices.ADMIN
        )

    def sign_in(self, user, role_cookie: str | None = None) -> None:
        self.client.cookies["auth-token"] = str(RefreshToken.for_user(user).access_token)
        if role_cookie:
            self.client.cookies["user-role"] = role_cookie

    def test_anonymous_is_sent_to_signin(self) -> None:
        response = self.client.get("/admin")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response["Location"], "/auth/signin?redirect=%2Fadmin")

    def test_wrong_role_is_sent_to_unauthorized(self) -> None:
        self.sign_in(self.user)
        response = self.client.get("/admin/users")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response["Location"], "/unauthorized")

    def test_role_cookie_cannot_escalate(self) -> None:
        self.sign_in(self.user, role_cookie="admin")
        response = self.client.get("/admin")
        self.assertEqual(response["Location"], "/unauthorized")

    def test_allowed_route_passes_through(self) -> None:
        self.sign_in(self.admin)
        response = self.client.get("/admin")
        # no page is mounted there; the request reaches URL resolution
        self.assertEqual(response.status_code, 404)

    def test_signed_in_user_leaves_auth_pages(self) -> None:
        self.sign_in(self.user)

        to_target = self.client.get("/auth/signin", {"redirect": "/bookings"})
        to_landing = self.client.get("/auth/signin", {"redirect": "/admin"})
        to_home = self.client.get("/auth/signup")
        offsite = self.client.get("/auth/signin", {"redirect": "https://evil.example"})

        self.assertEqual(to_target["Location"], "/bookings")
        self.assertEqual(to_landing["Location"], "/profile")
        self.assertEqual(to_home["Location"], "/")
        self.assertEqual(offsite["Location"], "/")

    def test_invalid_cookie_counts_as_anonymous(self) -> None:
        self.client.cookies["auth-token"] = "not-a-jwt"
        response = self.client.get("/profile")
        self.assertEqual(response["Location"], "/auth/signin?redirect=%2Fprofile")

    def test_api_paths_are_exempt(self) -> None:
        response = self.client.get("/api/v1/hotels/")
        self.assertEqual(response.status_code, 200)

    def test_unauthorized_page(self) -> None:
        self.sign_in(self.user)
        response = self.client.get("/unauthorized")
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["landing"], "/profile")
