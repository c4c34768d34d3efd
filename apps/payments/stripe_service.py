"""Thin wrapper over the Stripe SDK.

Only two calls are made: creating a payment intent for a booking and
verifying incoming webhook payloads. Stripe errors are translated into
``PaymentProviderError`` carrying the HTTP status the API should answer with.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import stripe  # type: ignore
from django.conf import settings  # type: ignore

logger = logging.getLogger(__name__)


class PaymentProviderError(Exception):
    """A Stripe call failed; ``status_code`` is the status to answer with."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WebhookVerificationError(Exception):
    """The webhook payload or its signature could not be verified."""


# Checked in order, first match wins
STRIPE_ERROR_MAP: tuple[tuple[type[Exception], int, str], ...] = (
    (stripe.CardError, 400, "Your card was declined."),
    (stripe.RateLimitError, 429, "Too many requests made to the payment provider."),
    (stripe.InvalidRequestError, 400, "Invalid parameters were supplied to the payment provider."),
    (stripe.AuthenticationError, 401, "Payment provider authentication failed."),
    (stripe.APIConnectionError, 500, "Could not reach the payment provider."),
    (stripe.APIError, 500, "The payment provider reported an internal error."),
)


def _configure() -> None:
    stripe.api_key = settings.STRIPE_SECRET_KEY
    stripe.api_version = settings.STRIPE_API_VERSION


def to_minor_units(amount: Decimal) -> int:
    """THB 1234.565 -> 123457 satang."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def create_payment_intent(
    *,
    amount: Decimal,
    currency: str,
    booking_id: str,
    hotel_name: str,
    guest_name: str,
    guest_email: str,
    check_in: str = "",
    check_out: str = "",
    rooms: int | None = None,
    guests: int | None = None,
) -> dict[str, Any]:
    _configure()
    metadata = {
        "bookingId": booking_id,
        "hotelName": hotel_name,
        "guestName": guest_name,
        "guestEmail": guest_email,
        "checkIn": check_in,
        "checkOut": check_out,
        "rooms": "" if rooms is None else str(rooms),
        "guests": "" if guests is None else str(guests),
    }
    try:
        intent = stripe.PaymentIntent.create(
            amount=to_minor_units(amount),
            currency=currency.lower(),
            automatic_payment_methods={"enabled": True},
            metadata=metadata,
            description=f"Hotel booking: {hotel_name}",
            receipt_email=guest_email,
        )
    except stripe.StripeError as exc:
        for error_class, status_code, message in STRIPE_ERROR_MAP:
            if isinstance(exc, error_class):
                break
        else:
            status_code, message = 500, "An unexpected payment error occurred."
        logger.error(
            "Stripe payment intent failed for booking %s: %s",
            booking_id,
            exc,
            exc_info=True,
        )
        raise PaymentProviderError(message, status_code) from exc

    logger.info("Payment intent %s created for booking %s", intent["id"], booking_id)
    return {"id": intent["id"], "client_secret": intent["client_secret"]}


def construct_event(payload: bytes, signature: str):
    """Verify ``payload`` against the Stripe-Signature header and parse it."""
    _configure()
    try:
        return stripe.Webhook.construct_event(payload, signature, settings.STRIPE_WEBHOOK_SECRET)
    except (ValueError, stripe.SignatureVerificationError) as exc:
        raise WebhookVerificationError(str(exc)) from exc
