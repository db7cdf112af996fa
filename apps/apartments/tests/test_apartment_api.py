"""API tests for the apartment catalog."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.apartments.models import Apartment, ApartmentPhoto
from apps.bookings.models import BlockedDate, Booking


class ApartmentAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = get_user_model().objects.create_user(
            username="admin",
            password="AdminPass123",
            is_staff=True,
        )
        self.apartment = Apartment.objects.create(
            name="Harbour Loft",
            description="Bright loft above the marina.",
            location="Old Town",
            price_per_night=Decimal("120.00"),
            max_guests=3,
            amenities=["Wi-Fi", "Kitchen"],
        )
        self.list_url = reverse("apartment-list")
        self.detail_url = reverse("apartment-detail", args=[self.apartment.id])

    def _payload(self, **overrides) -> dict:
        payload = {
            "name": "Garden Studio",
            "description": "Quiet studio with a terrace.",
            "location": "Riverside",
            "price_per_night": "85.50",
            "max_guests": 2,
            "amenities": ["Terrace"],
        }
        payload.update(overrides)
        return payload

    def test_public_listing(self) -> None:
        ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/loft-1.jpg")
        ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/loft-2.jpg", is_primary=True)

        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        item = response.data[0]
        self.assertEqual(item["name"], "Harbour Loft")
        self.assertEqual(item["amenities"], ["Wi-Fi", "Kitchen"])
        self.assertEqual(item["primary_photo"], "/media/loft-2.jpg")
        self.assertEqual(len(item["photos"]), 2)

    def test_primary_photo_falls_back_to_first_photo(self) -> None:
        ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/loft-1.jpg")

        response = self.client.get(self.detail_url)

        self.assertEqual(response.data["primary_photo"], "/media/loft-1.jpg")

    def test_guests_cannot_modify_catalog(self) -> None:
        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertIn(response.status_code, {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN})
        self.assertEqual(Apartment.objects.count(), 1)

    def test_admin_creates_apartment(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(self.list_url, self._payload(), format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        apartment = Apartment.objects.get(pk=response.data["id"])
        self.assertEqual(apartment.price_per_night, Decimal("85.50"))
        self.assertEqual(apartment.amenities, ["Terrace"])
        self.assertIsNone(response.data["primary_photo"])

    def test_rejects_invalid_price_and_capacity(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.post(
            self.list_url,
            self._payload(price_per_night="0", max_guests=0, amenities="Terrace"),
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("price_per_night", response.data)
        self.assertIn("max_guests", response.data)
        self.assertIn("amenities", response.data)

    def test_price_change_keeps_existing_totals(self) -> None:
        booking = Booking.objects.create(
            apartment=self.apartment,
            guest_name="Ada Guest",
            guest_email="ada@example.com",
            guest_phone="+15550001111",
            check_in=date(2024, 6, 10),
            check_out=date(2024, 6, 12),
            num_guests=2,
            total_amount=Decimal("240.00"),
        )
        self.client.force_authenticate(self.admin)

        response = self.client.patch(self.detail_url, {"price_per_night": "300.00"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        booking.refresh_from_db()
        self.assertEqual(booking.total_amount, Decimal("240.00"))

    def test_delete_cascades(self) -> None:
        Booking.objects.create(
            apartment=self.apartment,
            guest_name="Ada Guest",
            guest_email="ada@example.com",
            guest_phone="+15550001111",
            check_in=date(2024, 6, 10),
            check_out=date(2024, 6, 12),
            num_guests=2,
            total_amount=Decimal("240.00"),
        )
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 20))
        ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/loft-1.jpg")
        self.client.force_authenticate(self.admin)

        response = self.client.delete(self.detail_url)

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Booking.objects.exists())
        self.assertFalse(BlockedDate.objects.exists())
        self.assertFalse(ApartmentPhoto.objects.exists())


class ApartmentPhotoAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = get_user_model().objects.create_user(
            username="admin",
            password="AdminPass123",
            is_staff=True,
        )
        self.apartment = Apartment.objects.create(
            name="Harbour Loft",
            location="Old Town",
            price_per_night=Decimal("120.00"),
            max_guests=3,
        )
        self.client.force_authenticate(self.admin)

    def test_new_primary_photo_replaces_old_one(self) -> None:
        url = reverse("apartment-photos", args=[self.apartment.id])

        first = self.client.post(url, {"url": "/media/a.jpg", "is_primary": True}, format="json")
        second = self.client.post(url, {"url": "/media/b.jpg", "is_primary": True}, format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_201_CREATED, second.data)
        primary = list(self.apartment.photos.filter(is_primary=True).values_list("url", flat=True))
        self.assertEqual(primary, ["/media/b.jpg"])

    def test_set_primary_and_remove(self) -> None:
        first = ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/a.jpg", is_primary=True)
        second = ApartmentPhoto.objects.create(apartment=self.apartment, url="/media/b.jpg")

        response = self.client.post(reverse("apartment-photo-primary", args=[self.apartment.id, second.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        first.refresh_from_db()
        second.refresh_from_db()
        self.assertFalse(first.is_primary)
        self.assertTrue(second.is_primary)

        removed = self.client.delete(reverse("apartment-photo-detail", args=[self.apartment.id, first.id]))
        missing = self.client.delete(reverse("apartment-photo-detail", args=[self.apartment.id, first.id]))

        self.assertEqual(removed.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing.data, {"error": "Photo not found"})
