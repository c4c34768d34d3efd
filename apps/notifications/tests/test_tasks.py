from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
from unittest.mock import patch

from django.core import mail
from django.test import TestCase
from django.utils import timezone

from apps.bookings.models import Booking
from apps.hotels.models import Hotel
from apps.notifications import tasks
from apps.notifications.services import send_email_notification
from apps.users.models import User


class NotificationTaskTests(TestCase):
    def setUp(self) -> None:
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.partner = User.objects.create_user(
            email="owner@example.com", password="OwnerPass123", role=User.RoleChoices.PARTNER
        )
        self.hotel = Hotel.objects.create(
            name="Old Town Lodge", city="Chiang Mai", owner=self.partner, price_min=Decimal("800.00")
        )
        check_in = timezone.localdate() + timedelta(days=5)
        self.booking = Booking.objects.create(
            user=self.guest,
            hotel=self.hotel,
            hotel_name=self.hotel.name,
            room_rate=Decimal("800.00"),
            check_in=check_in,
            check_out=check_in + timedelta(days=1),
            first_name="Anna",
            last_name="Lee",
            email="anna@example.com",
        )

    def test_confirmation_goes_to_guest_and_partner(self) -> None:
        self.assertTrue(tasks.send_booking_confirmation(str(self.booking.pk)))

        self.assertEqual(len(mail.outbox), 2)
        guest_mail, partner_mail = mail.outbox
        self.assertEqual(guest_mail.to, ["anna@example.com"])
        self.assertIn(self.booking.confirmation_code, guest_mail.subject)
        self.assertIn("Old Town Lodge", guest_mail.body)
        self.assertEqual(partner_mail.to, ["owner@example.com"])
        self.assertIn("Anna Lee", partner_mail.body)

    def test_hotel_without_owner_only_emails_guest(self) -> None:
        Hotel.objects.filter(pk=self.hotel.pk).update(owner=None)

        tasks.send_booking_confirmation(str(self.booking.pk))

        self.assertEqual([message.to for message in mail.outbox], [["anna@example.com"]])

    def test_payment_failed_email(self) -> None:
        self.assertTrue(tasks.send_payment_failed(str(self.booking.pk)))

        self.assertEqual(len(mail.outbox), 1)
        self.assertIn("failed", mail.outbox[0].subject)
        self.assertIn(self.booking.confirmation_code, mail.outbox[0].body)

    def test_missing_booking_is_skipped(self) -> None:
        booking_id = str(self.booking.pk)
        self.booking.delete()

        self.assertFalse(tasks.send_booking_confirmation(booking_id))
        self.assertFalse(tasks.send_payment_failed(booking_id))
        self.assertEqual(mail.outbox, [])

    def test_backend_failure_is_reported_not_raised(self) -> None:
        with patch("apps.notifications.services.send_mail", side_effect=OSError("smtp down")):
            sent = send_email_notification(
                recipient_email="anna@example.com",
                subject="Hello",
                template_name=None,
                context={"message": "Hi"},
            )
        self.assertFalse(sent)
