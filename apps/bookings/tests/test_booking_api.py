"""Integration tests for booking API endpoints."""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.hotels.models import Hotel, HotelRoom
from apps.users.models import User


def make_booking(user, hotel, room, days_ahead: int = 5, nights: int = 2, **extra) -> Booking:
    check_in = timezone.localdate() + timedelta(days=days_ahead)
    return Booking.objects.create(
        user=user,
        hotel=hotel,
        room=room,
        hotel_name=hotel.name,
        room_name=room.name,
        room_rate=room.price,
        check_in=check_in,
        check_out=check_in + timedelta(days=nights),
        first_name="Somchai",
        last_name="Dee",
        email=user.email,
        **extra,
    )


class BookingAPITests(APITestCase):
    """Covers creation, visibility, cancellation and statistics."""

    def setUp(self) -> None:
        self.user = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.partner = User.objects.create_user(
            email="partner@example.com", password="PartnerPass123", role=User.RoleChoices.PARTNER
        )
        self.admin = User.objects.create_user(
            email="admin@example.com", password="AdminPass123", role=User.RoleChoices.ADMIN
        )
        self.hotel = Hotel.objects.create(name="Riverside Palace", city="Bangkok", owner=self.partner)
        self.room = HotelRoom.objects.create(hotel=self.hotel, name="Deluxe", price=Decimal("1200.00"))
        self.hotel.recompute_price_range()
        self.list_url = reverse("booking-list")

    def _payload(self, days_ahead: int = 3, nights: int = 3, rooms: int = 1) -> dict:
        check_in = timezone.localdate() + timedelta(days=days_ahead)
        return {
            "hotel": self.hotel.pk,
            "room": self.room.pk,
            "check_in": str(check_in),
            "check_out": str(check_in + timedelta(days=nights)),
            "adults": 2,
            "rooms": rooms,
            "first_name": "Somchai",
            "last_name": "Dee",
            "email": "guest@example.com",
        }

    def test_user_can_create_booking(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.post(self.list_url, self._payload(nights=3, rooms=2), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        booking = Booking.objects.get()
        self.assertEqual(booking.user, self.user)
        self.assertEqual(booking.status, Booking.Status.PENDING)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.PENDING)
        self.assertEqual(booking.currency, "THB")
        self.assertEqual(booking.nights, 3)
        self.assertEqual(booking.taxes, Decimal("720.00"))
        self.assertEqual(booking.total, Decimal("8020.00"))
        self.assertEqual(response.data["subtotal"], "7200.00")
        self.assertRegex(booking.confirmation_code, r"^BK\d{6}[A-Z0-9]{6}$")
        self.assertEqual(response.data["confirmation_code"], booking.confirmation_code)

    def test_cancellation_deadline_is_a_day_before_check_in(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room)
        check_in_start = timezone.make_aware(
            timezone.datetime.combine(booking.check_in, timezone.datetime.min.time())
        )
        self.assertEqual(booking.cancellation_deadline, check_in_start - timedelta(hours=24))

    def test_partner_cannot_create_booking(self) -> None:
        self.client.force_authenticate(self.partner)
        response = self.client.post(self.list_url, self._payload(), format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_rejects_inverted_dates(self) -> None:
        self.client.force_authenticate(self.user)
        payload = self._payload()
        payload["check_out"], payload["check_in"] = payload["check_in"], payload["check_out"]
        response = self.client.post(self.list_url, payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_visibility_by_role(self) -> None:
        other_user = User.objects.create_user(email="other@example.com", password="OtherPass123")
        other_hotel = Hotel.objects.create(name="Elsewhere", city="Krabi")
        other_room = HotelRoom.objects.create(hotel=other_hotel, name="Std", price=Decimal("500"))
        mine = make_booking(self.user, self.hotel, self.room)
        make_booking(other_user, other_hotel, other_room)

        self.client.force_authenticate(self.user)
        ids = [row["id"] for row in self.client.get(self.list_url).data]
        self.assertEqual(ids, [str(mine.pk)])

        self.client.force_authenticate(self.partner)
        ids = [row["id"] for row in self.client.get(self.list_url).data]
        self.assertEqual(ids, [str(mine.pk)])

        self.client.force_authenticate(self.admin)
        self.assertEqual(len(self.client.get(self.list_url).data), 2)

    def test_lookup_by_confirmation_code(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room)
        self.client.force_authenticate(self.user)
        response = self.client.get(
            reverse("booking-by-code", kwargs={"code": booking.confirmation_code.lower()})
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(booking.pk))

    def test_search_filter(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room)
        self.client.force_authenticate(self.user)
        response = self.client.get(self.list_url, {"search": booking.confirmation_code[:8]})
        self.assertEqual(len(response.data), 1)
        response = self.client.get(self.list_url, {"search": "nowhere"})
        self.assertEqual(len(response.data), 0)

    def test_cancel_before_deadline_refunds_confirmed_payment(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room, days_ahead=5)
        booking.mark_payment_confirmed("card")

        self.client.force_authenticate(self.user)
        response = self.client.post(
            reverse("booking-cancel", args=[booking.pk]), {"reason": "Plans changed"}, format="json"
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.CANCELLED)
        self.assertEqual(booking.payment_status, Booking.PaymentStatus.REFUNDED)
        self.assertIsNotNone(booking.cancelled_at)

    def test_cancel_after_deadline_is_rejected(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room, days_ahead=1)

        self.client.force_authenticate(self.user)
        response = self.client.post(reverse("booking-cancel", args=[booking.pk]))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        booking.refresh_from_db()
        self.assertEqual(booking.status, Booking.Status.PENDING)

    def test_cancel_twice_is_rejected(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room, days_ahead=5)
        self.client.force_authenticate(self.user)
        self.client.post(reverse("booking-cancel", args=[booking.pk]))
        response = self.client.post(reverse("booking-cancel", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_partner_cannot_cancel_guest_booking(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room, days_ahead=5)
        self.client.force_authenticate(self.partner)
        response = self.client.post(reverse("booking-cancel", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_only_admin_deletes(self) -> None:
        booking = make_booking(self.user, self.hotel, self.room)
        self.client.force_authenticate(self.user)
        response = self.client.delete(reverse("booking-detail", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.delete(reverse("booking-detail", args=[booking.pk]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.exists())

    def test_stats(self) -> None:
        paid = make_booking(self.user, self.hotel, self.room)
        paid.mark_payment_confirmed("card")
        make_booking(self.user, self.hotel, self.room)
        failed = make_booking(self.user, self.hotel, self.room)
        failed.mark_payment_failed()

        self.client.force_authenticate(self.admin)
        response = self.client.get(reverse("booking-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 3)
        self.assertEqual(response.data["confirmed"], 1)
        self.assertEqual(response.data["pending"], 1)
        self.assertEqual(response.data["payment_failed"], 1)
        self.assertEqual(Decimal(response.data["revenue"]), paid.total)

    def test_stats_follow_visibility(self) -> None:
        other_user = User.objects.create_user(email="other@example.com", password="OtherPass123")
        other_hotel = Hotel.objects.create(name="Elsewhere", city="Krabi")
        other_room = HotelRoom.objects.create(hotel=other_hotel, name="Std", price=Decimal("500"))
        make_booking(self.user, self.hotel, self.room).mark_payment_confirmed("card")
        make_booking(other_user, other_hotel, other_room)

        self.client.force_authenticate(self.partner)
        partner_stats = self.client.get(reverse("booking-stats")).data
        self.client.force_authenticate(other_user)
        user_stats = self.client.get(reverse("booking-stats")).data

        self.assertEqual(partner_stats["total"], 1)
        self.assertEqual(partner_stats["confirmed"], 1)
        self.assertEqual(user_stats["total"], 1)
        self.assertEqual(user_stats["pending"], 1)
        self.assertEqual(Decimal(user_stats["revenue"]), Decimal("0"))

    def test_stats_without_bookings(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.get(reverse("booking-stats"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["total"], 0)
        self.assertEqual(Decimal(response.data["revenue"]), Decimal("0"))

    def test_list_filters(self) -> None:
        pending = make_booking(self.user, self.hotel, self.room)
        make_booking(self.user, self.hotel, self.room).mark_payment_failed()
        self.client.force_authenticate(self.user)

        by_status = self.client.get(self.list_url, {"status": "pending"})
        by_hotel = self.client.get(self.list_url, {"hotel": self.hotel.pk + 1})

        self.assertEqual([row["id"] for row in by_status.data], [str(pending.pk)])
        self.assertEqual(by_hotel.data, [])

    def test_malformed_filters_are_rejected(self) -> None:
        self.client.force_authenticate(self.user)
        for params in ({"hotel": "abc"}, {"status": "lost"}):
            response = self.client.get(self.list_url, params)
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, params)
