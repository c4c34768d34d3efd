"""Google sign-in through the Firebase Admin SDK.

The client signs in with Google (through Firebase Authentication) and sends
the resulting ID token. The token is verified here and mapped onto a local
account, which is created on first sign-in.
"""

from __future__ import annotations

import logging
from typing import Any

import firebase_admin  # type: ignore
from django.conf import settings  # type: ignore
from django.contrib.auth import get_user_model  # type: ignore
from django.db import transaction  # type: ignore
from firebase_admin import auth as firebase_auth  # type: ignore
from firebase_admin import credentials  # type: ignore

logger = logging.getLogger(__name__)


class GoogleTokenError(Exception):
    """The ID token was rejected or does not describe a usable account."""


class GoogleAuthUnavailable(Exception):
    """Token verification could not be performed (configuration or network)."""


def get_firebase_app():
    try:
        return firebase_admin.get_app()
    except ValueError:
        if settings.FIREBASE_CREDENTIALS:
            cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS)
        else:
            cred = credentials.ApplicationDefault()
        return firebase_admin.initialize_app(cred)


def verify_google_id_token(id_token: str) -> dict[str, Any]:
    try:
        return firebase_auth.verify_id_token(id_token, app=get_firebase_app())
    except (firebase_auth.InvalidIdTokenError, firebase_auth.UserDisabledError) as exc:
        raise GoogleTokenError(str(exc)) from exc
    except (firebase_auth.CertificateFetchError, ValueError) as exc:
        logger.error("Google token verification unavailable: %s", exc, exc_info=True)
        raise GoogleAuthUnavailable(str(exc)) from exc


@transaction.atomic
def get_or_create_google_user(claims: dict[str, Any]):
    """Find the account for verified ``claims`` or create a new one.

    Lookup order: Google uid, then email (linking the existing account).
    """
    User = get_user_model()
    uid = claims.get("uid") or claims.get("sub")
    email = claims.get("email")
    if not uid or not email:
        raise GoogleTokenError("Token does not carry a uid and an email address.")

    user = User.objects.filter(google_uid=uid).first()
    if user is None:
        user = User.objects.filter(email__iexact=email).first()
        if user is not None:
            user.google_uid = uid
            user.save(update_fields=["google_uid"])
            logger.info("Linked Google account to existing user %s", user.pk)

    if user is None:
        first_name, _, last_name = (claims.get("name") or "").partition(" ")
        user = User.objects.create_user(
            email=email,
            password=None,
            first_name=first_name,
            last_name=last_name,
            photo_url=claims.get("picture") or "",
            auth_provider=User.AuthProvider.GOOGLE,
            google_uid=uid,
        )
        logger.info("Created user %s from Google sign-in", user.pk)

    if not user.is_active:
        raise GoogleTokenError("This account is disabled.")
    return user
