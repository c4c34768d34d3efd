"""Domain services for booking workflows."""

from __future__ import annotations

import logging
from decimal import Decimal

from django.core.exceptions import ValidationError  # type: ignore
from django.db import transaction  # type: ignore
from django.db.models import Count, Q, Sum  # type: ignore

from apps.access import rules
from .models import Booking

logger = logging.getLogger(__name__)


def bookings_visible_to(user, queryset=None):
    """Admins see every booking, partners their hotels' bookings, users their own."""
    qs = queryset if queryset is not None else Booking.objects.all()
    if not rules.is_authenticated(user):
        return qs.none()
    if rules.has_role(user, rules.ADMIN):
        return qs
    if rules.has_role(user, rules.PARTNER):
        return qs.filter(hotel__owner=user)
    return qs.filter(user=user)


def booking_stats(queryset) -> dict:
    totals = queryset.aggregate(
        count=Count("id"),
        confirmed=Count("id", filter=Q(status=Booking.Status.CONFIRMED)),
        cancelled=Count("id", filter=Q(status=Booking.Status.CANCELLED)),
        pending=Count("id", filter=Q(status=Booking.Status.PENDING)),
        payment_failed=Count("id", filter=Q(status=Booking.Status.PAYMENT_FAILED)),
        revenue=Sum("total", filter=Q(payment_status=Booking.PaymentStatus.CONFIRMED)),
    )
    # "total" cannot be an aggregate alias, it is a model field
    totals["total"] = totals.pop("count")
    totals["revenue"] = totals["revenue"] or Decimal("0.00")
    return totals


def _queue_notification(task, booking_pk: str) -> None:
    # The booking is already committed; a broker outage only costs the email
    try:
        task.delay(booking_pk)
    except Exception:
        logger.exception("Could not queue %s for booking %s", task.name, booking_pk)


def _locked_booking(booking_id) -> Booking | None:
    try:
        return Booking.objects.select_for_update().get(pk=booking_id)
    except (Booking.DoesNotExist, ValidationError, ValueError):
        return None


@transaction.atomic
def confirm_booking_payment(
    booking_id, payment_intent_id: str = "", payment_method: str = ""
) -> Booking | None:
    """Mark the booking paid and queue the confirmation email; ``None`` if unknown."""
    booking = _locked_booking(booking_id)
    if booking is None:
        logger.warning("Payment confirmed for unknown booking %s", booking_id)
        return None

    booking.mark_payment_confirmed(payment_method, payment_intent_id)
    logger.info("Booking %s confirmed (payment method: %s)", booking.pk, booking.payment_method or "n/a")

    from apps.notifications.tasks import send_booking_confirmation

    booking_pk = str(booking.pk)
    transaction.on_commit(lambda: _queue_notification(send_booking_confirmation, booking_pk))
    return booking


@transaction.atomic
def fail_booking_payment(booking_id, payment_intent_id: str = "") -> Booking | None:
    booking = _locked_booking(booking_id)
    if booking is None:
        logger.warning("Payment failure for unknown booking %s", booking_id)
        return None

    booking.mark_payment_failed(payment_intent_id)
    logger.info("Booking %s marked as payment_failed", booking.pk)

    from apps.notifications.tasks import send_payment_failed

    booking_pk = str(booking.pk)
    transaction.on_commit(lambda: _queue_notification(send_payment_failed, booking_pk))
    return booking
