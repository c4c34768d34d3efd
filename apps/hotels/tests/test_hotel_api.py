"""Tests for hotel search, featured hotels, destinations and management."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.hotels.models import Hotel, HotelRoom
from apps.users.models import User


class HotelSearchTests(APITestCase):
    def setUp(self) -> None:
        self.bangkok_pool = Hotel.objects.create(
            name="Riverside Palace",
            city="Bangkok",
            location="Riverside",
            rating=Decimal("4.6"),
            price_min=Decimal("2500"),
            price_max=Decimal("6000"),
            amenities=["wifi", "pool", "spa"],
            images=["https://img.example.com/riverside.jpg"],
            is_featured=True,
        )
        self.bangkok_budget = Hotel.objects.create(
            name="Sukhumvit Inn",
            city="Bangkok",
            location="Sukhumvit",
            rating=Decimal("3.9"),
            price_min=Decimal("900"),
            price_max=Decimal("1500"),
            amenities=["wifi"],
        )
        self.phuket = Hotel.objects.create(
            name="Patong Bay Resort",
            city="Phuket",
            location="Patong Beach",
            rating=Decimal("4.2"),
            price_min=Decimal("1800"),
            price_max=Decimal("4000"),
            amenities=["wifi", "pool"],
            images=["https://img.example.com/patong.jpg"],
            is_featured=True,
        )
        self.hidden = Hotel.objects.create(
            name="Closed Hotel", city="Bangkok", is_active=False, is_featured=True
        )

    def names(self, response) -> list[str]:
        return [row["name"] for row in response.data]

    def test_city_prefix_is_case_insensitive(self) -> None:
        response = self.client.get(reverse("hotel-list"), {"city": "bang"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertCountEqual(self.names(response), ["Riverside Palace", "Sukhumvit Inn"])

    def test_inactive_hotels_are_hidden_from_guests(self) -> None:
        response = self.client.get(reverse("hotel-list"))
        self.assertNotIn("Closed Hotel", self.names(response))
        detail = self.client.get(reverse("hotel-detail", args=[self.hidden.pk]))
        self.assertEqual(detail.status_code, status.HTTP_404_NOT_FOUND)

    def test_amenities_require_every_item(self) -> None:
        response = self.client.get(reverse("hotel-list"), {"amenities": "wifi,pool"})
        self.assertCountEqual(self.names(response), ["Riverside Palace", "Patong Bay Resort"])

    def test_price_and_rating_filters(self) -> None:
        response = self.client.get(
            reverse("hotel-list"), {"price_min": 1000, "price_max": 5000, "rating": 4}
        )
        self.assertEqual(self.names(response), ["Patong Bay Resort"])

    def test_sort_by_price(self) -> None:
        low = self.client.get(reverse("hotel-list"), {"sort_by": "price-low"})
        self.assertEqual(
            self.names(low), ["Sukhumvit Inn", "Patong Bay Resort", "Riverside Palace"]
        )
        best = self.client.get(reverse("hotel-list"), {"sort_by": "rating"})
        self.assertEqual(self.names(best)[0], "Riverside Palace")

    def test_featured_respects_limit(self) -> None:
        response = self.client.get(reverse("hotel-featured"), {"limit": 1})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(self.names(response), ["Riverside Palace"])

    def test_destinations_grouped_by_city(self) -> None:
        response = self.client.get(reverse("hotel-destinations"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        first, second = response.data
        self.assertEqual(first["id"], "bangkok")
        self.assertEqual(first["count"], 2)
        self.assertEqual(first["image"], "https://img.example.com/riverside.jpg")
        self.assertEqual(first["starting_price"], "900.00")
        self.assertEqual(second["name"], "Phuket")


class HotelManagementTests(APITestCase):
    def setUp(self) -> None:
        self.partner = User.objects.create_user(
            email="partner@example.com", password="Password123", role=User.RoleChoices.PARTNER
        )
        self.other_partner = User.objects.create_user(
            email="other@example.com", password="Password123", role=User.RoleChoices.PARTNER
        )
        self.user = User.objects.create_user(email="user@example.com", password="Password123")
        self.hotel = Hotel.objects.create(name="Old Town Lodge", city="Chiang Mai", owner=self.partner)

    def test_user_cannot_create_hotel(self) -> None:
        self.client.force_authenticate(self.user)
        response = self.client.post(
            reverse("hotel-list"), {"name": "Nope", "city": "Krabi"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_partner_creates_hotel_they_own(self) -> None:
        self.client.force_authenticate(self.partner)
        response = self.client.post(
            reverse("hotel-list"),
            {"name": "Ao Nang Villas", "city": "Krabi", "amenities": ["wifi"]},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["owner"], self.partner.pk)

    def test_partner_cannot_feature_hotel(self) -> None:
        self.client.force_authenticate(self.partner)
        response = self.client.patch(
            reverse("hotel-detail", args=[self.hotel.pk]), {"is_featured": True}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_partner_cannot_edit(self) -> None:
        self.client.force_authenticate(self.other_partner)
        response = self.client.patch(
            reverse("hotel-detail", args=[self.hotel.pk]), {"name": "Mine"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_rooms_drive_price_range(self) -> None:
        self.client.force_authenticate(self.partner)
        url = reverse("hotel-rooms", args=[self.hotel.pk])
        self.client.post(url, {"name": "Standard", "price": "1200.00"}, format="json")
        response = self.client.post(url, {"name": "Suite", "price": "3500.00"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)

        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.price_min, Decimal("1200.00"))
        self.assertEqual(self.hotel.price_max, Decimal("3500.00"))

        suite = HotelRoom.objects.get(name="Suite")
        response = self.client.delete(
            reverse("hotel-remove-room", args=[self.hotel.pk, suite.pk])
        )
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.price_max, Decimal("1200.00"))

    def test_removing_last_room_keeps_price_range(self) -> None:
        room = HotelRoom.objects.create(hotel=self.hotel, name="Only", price=Decimal("800"))
        self.hotel.recompute_price_range()
        room.delete()
        self.hotel.recompute_price_range()
        self.hotel.refresh_from_db()
        self.assertEqual(self.hotel.price_min, Decimal("800"))
