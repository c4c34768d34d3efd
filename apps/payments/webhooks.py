"""Stripe event handlers.

``EVENT_HANDLERS`` maps an event type to the function applying it. Every
handler receives the verified event; booking updates go through
``apps.bookings.services`` so they run locked and inside a transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from django.db import DatabaseError  # type: ignore

from apps.bookings import services as booking_services

logger = logging.getLogger(__name__)


def field(obj, key: str, default: Any = None) -> Any:
    """Read ``key`` from a Stripe object or a dict, ``default`` when absent."""
    if obj is None:
        return default
    try:
        return obj[key]
    except KeyError:
        return default


def _payment_intent(event) -> Any:
    return event["data"]["object"]


def _booking_id(intent) -> str | None:
    return field(field(intent, "metadata"), "bookingId")


def _apply(update: Callable, booking_id: str, **kwargs: Any) -> None:
    # A failed update is logged; the event is still acknowledged
    try:
        update(booking_id, **kwargs)
    except DatabaseError:
        logger.exception("Could not update booking %s from webhook", booking_id)


def handle_payment_succeeded(event) -> None:
    intent = _payment_intent(event)
    booking_id = _booking_id(intent)
    if not booking_id:
        logger.error("No bookingId in payment intent %s metadata", field(intent, "id"))
        return

    method_types = field(intent, "payment_method_types") or []
    logger.info("Payment succeeded for booking %s", booking_id)
    _apply(
        booking_services.confirm_booking_payment,
        booking_id,
        payment_intent_id=field(intent, "id") or "",
        payment_method=method_types[0] if method_types else "",
    )


def handle_payment_failed(event) -> None:
    intent = _payment_intent(event)
    booking_id = _booking_id(intent)
    if not booking_id:
        logger.error("No bookingId in payment intent %s metadata", field(intent, "id"))
        return

    logger.info("Payment %s for booking %s", event["type"].rsplit(".", 1)[-1], booking_id)
    _apply(
        booking_services.fail_booking_payment,
        booking_id,
        payment_intent_id=field(intent, "id") or "",
    )


def handle_requires_action(event) -> None:
    intent = _payment_intent(event)
    logger.info("Payment requires action for booking %s", _booking_id(intent))


def handle_dispute_created(event) -> None:
    dispute = event["data"]["object"]
    logger.warning("Dispute %s created for charge %s", field(dispute, "id"), field(dispute, "charge"))


def handle_invoice_payment_failed(event) -> None:
    invoice = event["data"]["object"]
    logger.warning("Invoice payment failed: %s", field(invoice, "id"))


def handle_unhandled(event) -> None:
    logger.info("Unhandled Stripe event type: %s", event["type"])


EVENT_HANDLERS: dict[str, Callable[[Any], None]] = {
    "payment_intent.succeeded": handle_payment_succeeded,
    "payment_intent.payment_failed": handle_payment_failed,
    "payment_intent.canceled": handle_payment_failed,
    "payment_intent.requires_action": handle_requires_action,
    "charge.dispute.created": handle_dispute_created,
    "invoice.payment_failed": handle_invoice_payment_failed,
}


def dispatch(event) -> None:
    EVENT_HANDLERS.get(event["type"], handle_unhandled)(event)
