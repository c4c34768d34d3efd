"""Celery tasks sending notification email."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore

from .services import (
    send_booking_confirmation_email,
    send_new_booking_to_partner_email,
    send_payment_failed_email,
)

logger = logging.getLogger(__name__)


def _get_booking(booking_id: str):
    from apps.bookings.models import Booking

    try:
        return Booking.objects.select_related("hotel__owner").get(pk=booking_id)
    except Booking.DoesNotExist:
        logger.warning("Notification skipped: booking %s no longer exists", booking_id)
        return None


@shared_task(name="notifications.send_booking_confirmation")
def send_booking_confirmation(booking_id: str) -> bool:
    """Confirmation to the guest and a heads-up to the hotel's partner."""
    booking = _get_booking(booking_id)
    if booking is None:
        return False
    sent = send_booking_confirmation_email(booking)
    send_new_booking_to_partner_email(booking)
    return sent


@shared_task(name="notifications.send_payment_failed")
def send_payment_failed(booking_id: str) -> bool:
    booking = _get_booking(booking_id)
    if booking is None:
        return False
    return send_payment_failed_email(booking)
