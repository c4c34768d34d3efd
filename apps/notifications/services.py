"""Notification services for sending emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.template.loader import render_to_string  # type: ignore
from django.utils.html import strip_tags  # type: ignore

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


def send_email_notification(
    recipient_email: str,
    subject: str,
    template_name: str | None,
    context: dict,
    *,
    html_message: str | None = None,
) -> bool:
    """
    Send a single email.

    Args:
        recipient_email: recipient address
        subject: subject line
        template_name: optional Django template rendered with ``context``
        context: template context; ``context["message"]`` is the plain body
            when neither a template nor ``html_message`` is given
        html_message: ready HTML body (optional)

    Returns:
        bool: True when the message was handed to the email backend
    """
    try:
        if html_message:
            text_message = strip_tags(html_message)
        elif template_name:
            html_message = render_to_string(template_name, context)
            text_message = strip_tags(html_message)
        else:
            text_message = context.get("message", "")
            html_message = None

        send_mail(
            subject=subject,
            message=text_message,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _booking_lines(booking: "Booking") -> str:
    return f"""
        <ul>
            <li><strong>Confirmation code:</strong> {booking.confirmation_code}</li>
            <li><strong>Hotel:</strong> {booking.hotel_name}</li>
            <li><strong>Room:</strong> {booking.room_name or '-'} x {booking.rooms}</li>
            <li><strong>Check-in:</strong> {booking.check_in:%d %b %Y}</li>
            <li><strong>Check-out:</strong> {booking.check_out:%d %b %Y}</li>
            <li><strong>Nights:</strong> {booking.nights}</li>
            <li><strong>Total:</strong> {booking.total} {booking.currency}</li>
        </ul>
    """


def send_booking_confirmation_email(booking: "Booking") -> bool:
    """Confirmation for the guest once the payment went through."""
    subject = f"Booking {booking.confirmation_code} confirmed"

    html_message = f"""
    <html>
    <body>
        <h2>Hello, {booking.guest_name or booking.email}!</h2>
        <p>Your payment was received and your booking is confirmed.</p>
        {_booking_lines(booking)}
        <p>Free cancellation until {booking.cancellation_deadline:%d %b %Y %H:%M}.</p>
        <p>Best regards,<br>The Tripnest team</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=booking.email,
        subject=subject,
        template_name=None,
        context={"booking": booking},
        html_message=html_message,
    )


def send_new_booking_to_partner_email(booking: "Booking") -> bool:
    """Tell the hotel's partner about a paid booking."""
    owner = booking.hotel.owner
    if owner is None or not owner.email:
        return False

    html_message = f"""
    <html>
    <body>
        <h2>New confirmed booking</h2>
        <p>{booking.guest_name} booked {booking.hotel_name}.</p>
        {_booking_lines(booking)}
        <p>Guests: {booking.adults} adults, {booking.children} children.</p>
        <p>Special requests: {booking.special_requests or '-'}</p>
    </body>
    </html>
    """

    return send_email_notification(
        recipient_email=owner.email,
        subject=f"New booking {booking.confirmation_code} at {booking.hotel_name}",
        template_name=None,
        context={"booking": booking},
        html_message=html_message,
    )


def send_payment_failed_email(booking: "Booking") -> bool:
    return send_email_notification(
        recipient_email=booking.email,
        subject=f"Payment for booking {booking.confirmation_code} failed",
        template_name=None,
        context={
            "message": (
                f"We could not process the payment for your booking at {booking.hotel_name} "
                f"({booking.confirmation_code}). You can retry the payment from your bookings page."
            )
        },
    )
