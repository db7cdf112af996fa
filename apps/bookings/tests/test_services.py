"""Tests for the availability resolver and the booking admission service."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction
from django.test import TestCase, override_settings

from apps.apartments.models import Apartment
from apps.bookings import services
from apps.bookings.models import BlockedDate, BlockedDateQuerySet, Booking, BookingQuerySet
from apps.bookings.services import BookingRequest
from shared.domain.exceptions import (
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
    ValidationError,
)

TODAY = date(2024, 6, 1)


def make_apartment(**overrides) -> Apartment:
    fields = {
        "name": "Harbour Loft",
        "location": "Old Town",
        "price_per_night": Decimal("100.00"),
        "max_guests": 4,
    }
    fields.update(overrides)
    return Apartment.objects.create(**fields)


def make_request(apartment, check_in: date, check_out: date, **overrides) -> BookingRequest:
    fields = {
        "apartment_id": apartment.pk if apartment is not None else None,
        "guest_name": "Ada Guest",
        "guest_email": "ada@example.com",
        "guest_phone": "+15550001111",
        "check_in": check_in,
        "check_out": check_out,
        "num_guests": 2,
    }
    fields.update(overrides)
    return BookingRequest(**fields)


def add_booking(apartment, check_in: date, check_out: date, status=Booking.Status.CONFIRMED) -> Booking:
    return Booking.objects.create(
        apartment=apartment,
        guest_name="Existing Guest",
        guest_email="existing@example.com",
        guest_phone="+15550002222",
        check_in=check_in,
        check_out=check_out,
        num_guests=2,
        total_amount=Decimal("0.00"),
        status=status,
    )


class AvailabilityTests(TestCase):
    def setUp(self) -> None:
        self.apartment = make_apartment()

    def unavailable(self, apartment_id=None):
        return services.get_unavailable_dates(apartment_id, today=TODAY)

    def test_empty_calendar(self) -> None:
        self.assertEqual(self.unavailable(self.apartment.pk), [])

    def test_booking_blocks_check_in_through_check_out_inclusive(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 13))

        self.assertEqual(
            self.unavailable(self.apartment.pk),
            ["2024-06-10", "2024-06-11", "2024-06-12", "2024-06-13"],
        )

    def test_only_confirmed_bookings_count(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12), status=Booking.Status.CANCELLED)
        add_booking(self.apartment, date(2024, 6, 20), date(2024, 6, 22), status=Booking.Status.COMPLETED)

        self.assertEqual(self.unavailable(self.apartment.pk), [])

    def test_past_days_are_dropped(self) -> None:
        add_booking(self.apartment, date(2024, 5, 28), date(2024, 6, 2))
        add_booking(self.apartment, date(2024, 5, 20), date(2024, 5, 31))

        self.assertEqual(self.unavailable(self.apartment.pk), ["2024-06-01", "2024-06-02"])

    def test_blocked_date_listed_without_bookings(self) -> None:
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 15), reason="Maintenance")

        self.assertEqual(self.unavailable(self.apartment.pk), ["2024-06-15"])

    def test_past_blocked_dates_are_dropped(self) -> None:
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 5, 31))
        BlockedDate.objects.create(apartment=self.apartment, date=TODAY)

        self.assertEqual(self.unavailable(self.apartment.pk), ["2024-06-01"])

    def test_blocked_and_booked_days_are_merged_without_duplicates(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 11))
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 11))
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 3))

        self.assertEqual(
            self.unavailable(self.apartment.pk),
            ["2024-06-03", "2024-06-10", "2024-06-11"],
        )

    def test_apartments_do_not_share_calendars(self) -> None:
        other = make_apartment(name="Garden Studio")
        add_booking(other, date(2024, 6, 10), date(2024, 6, 11))
        BlockedDate.objects.create(apartment=other, date=date(2024, 6, 20))

        self.assertEqual(self.unavailable(self.apartment.pk), [])
        self.assertEqual(self.unavailable(other.pk), ["2024-06-10", "2024-06-11", "2024-06-20"])

    def test_global_blocked_date_applies_to_every_apartment(self) -> None:
        other = make_apartment(name="Garden Studio")
        BlockedDate.objects.create(apartment=None, date=date(2024, 7, 1))

        self.assertEqual(self.unavailable(self.apartment.pk), ["2024-07-01"])
        self.assertEqual(self.unavailable(other.pk), ["2024-07-01"])

    def test_without_apartment_covers_all_apartments(self) -> None:
        other = make_apartment(name="Garden Studio")
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 11))
        add_booking(other, date(2024, 6, 20), date(2024, 6, 21))

        self.assertEqual(
            self.unavailable(),
            ["2024-06-10", "2024-06-11", "2024-06-20", "2024-06-21"],
        )

    def test_unknown_apartment_has_empty_calendar(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 11))

        self.assertEqual(self.unavailable(self.apartment.pk + 1000), [])

    def test_repeated_reads_are_identical(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 14))
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 20))

        self.assertEqual(self.unavailable(self.apartment.pk), self.unavailable(self.apartment.pk))

    def test_storage_failure_is_reported(self) -> None:
        with mock.patch.object(BlockedDateQuerySet, "from_day", side_effect=DatabaseError("disk I/O error")):
            with self.assertRaises(StorageError) as ctx:
                self.unavailable(self.apartment.pk)

        self.assertEqual(ctx.exception.message, "Failed to fetch availability")
        self.assertIsInstance(ctx.exception.__cause__, DatabaseError)


class AdmissionTests(TestCase):
    def setUp(self) -> None:
        self.apartment = make_apartment()

    def test_accepts_free_dates(self) -> None:
        result = services.admit_booking(make_request(self.apartment, date(2024, 1, 1), date(2024, 1, 4)))

        self.assertEqual(result.nights, 3)
        self.assertEqual(result.total_amount, Decimal("300.00"))
        booking = Booking.objects.get(pk=result.booking.pk)
        self.assertEqual(booking.status, Booking.Status.CONFIRMED)
        self.assertEqual(booking.total_amount, Decimal("300.00"))
        self.assertEqual(booking.check_in, date(2024, 1, 1))
        self.assertEqual(booking.check_out, date(2024, 1, 4))
        self.assertEqual(booking.special_requests, "")

    def test_total_keeps_currency_precision(self) -> None:
        self.apartment.price_per_night = Decimal("99.99")
        self.apartment.save()

        result = services.admit_booking(make_request(self.apartment, date(2024, 1, 1), date(2024, 1, 4)))

        self.assertEqual(result.total_amount, Decimal("299.97"))

    def test_end_to_end_scenario(self) -> None:
        first = services.admit_booking(make_request(self.apartment, date(2024, 3, 1), date(2024, 3, 3)))
        self.assertEqual(first.nights, 2)
        self.assertEqual(first.total_amount, Decimal("200.00"))

        with self.assertRaises(ConflictError) as ctx:
            services.admit_booking(make_request(self.apartment, date(2024, 3, 2), date(2024, 3, 4)))

        self.assertEqual(ctx.exception.message, "Selected dates are not available")
        self.assertEqual(Booking.objects.count(), 1)

    def test_back_to_back_stays_are_admitted_although_calendar_hides_turnover_day(self) -> None:
        services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        # The calendar treats the check-out day as taken.
        calendar = services.get_unavailable_dates(self.apartment.pk, today=TODAY)
        self.assertIn("2024-06-12", calendar)

        # Admission uses [check_in, check_out), so a stay starting that day fits.
        result = services.admit_booking(make_request(self.apartment, date(2024, 6, 12), date(2024, 6, 14)))
        self.assertEqual(result.nights, 2)
        self.assertEqual(Booking.objects.confirmed().count(), 2)

    def test_stay_ending_on_existing_check_in_is_admitted(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12))

        services.admit_booking(make_request(self.apartment, date(2024, 6, 8), date(2024, 6, 10)))

        self.assertEqual(Booking.objects.count(), 2)

    def test_enclosing_stay_conflicts(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12))

        with self.assertRaises(ConflictError):
            services.admit_booking(make_request(self.apartment, date(2024, 6, 5), date(2024, 6, 20)))

    def test_cancelled_and_completed_bookings_do_not_conflict(self) -> None:
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12), status=Booking.Status.CANCELLED)
        add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12), status=Booking.Status.COMPLETED)

        services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.assertEqual(Booking.objects.confirmed().count(), 1)

    def test_other_apartments_bookings_do_not_conflict(self) -> None:
        other = make_apartment(name="Garden Studio")
        add_booking(other, date(2024, 6, 10), date(2024, 6, 12))

        services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.assertEqual(Booking.objects.filter(apartment=self.apartment).count(), 1)

    def test_blocked_dates_do_not_stop_admission(self) -> None:
        BlockedDate.objects.create(apartment=self.apartment, date=date(2024, 6, 11))

        services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.assertEqual(Booking.objects.count(), 1)

    def test_missing_fields_are_rejected(self) -> None:
        for field, value in [
            ("guest_name", ""),
            ("guest_email", None),
            ("guest_phone", ""),
            ("check_in", None),
            ("check_out", None),
            ("num_guests", None),
            ("apartment_id", None),
        ]:
            with self.subTest(field=field):
                request = make_request(
                    self.apartment, **{"check_in": date(2024, 6, 10), "check_out": date(2024, 6, 12), field: value}
                )
                with self.assertRaises(ValidationError) as ctx:
                    services.admit_booking(request)
                self.assertEqual(ctx.exception.message, "All required fields must be filled")

        self.assertFalse(Booking.objects.exists())

    def test_missing_field_reported_before_unknown_apartment(self) -> None:
        request = make_request(None, date(2024, 6, 10), date(2024, 6, 12), apartment_id=999999, guest_email="")

        with self.assertRaises(ValidationError) as ctx:
            services.admit_booking(request)

        self.assertEqual(ctx.exception.message, "All required fields must be filled")

    def test_check_out_must_follow_check_in(self) -> None:
        for check_out in (date(2024, 6, 10), date(2024, 6, 9)):
            with self.subTest(check_out=check_out):
                with self.assertRaises(ValidationError) as ctx:
                    services.admit_booking(make_request(self.apartment, date(2024, 6, 10), check_out))
                self.assertEqual(ctx.exception.message, "Check-out date must be after check-in date")

    def test_unknown_apartment(self) -> None:
        request = make_request(None, date(2024, 6, 10), date(2024, 6, 12), apartment_id=999999)

        with self.assertRaises(NotFoundError) as ctx:
            services.admit_booking(request)

        self.assertEqual(ctx.exception.message, "Invalid apartment")

    def test_party_larger_than_apartment(self) -> None:
        request = make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12), num_guests=5)

        with self.assertRaises(ValidationError) as ctx:
            services.admit_booking(request)

        self.assertEqual(ctx.exception.message, "Number of guests exceeds apartment capacity")

    def test_total_is_frozen_when_price_changes(self) -> None:
        result = services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.apartment.price_per_night = Decimal("250.00")
        self.apartment.save()

        result.booking.refresh_from_db()
        self.assertEqual(result.booking.total_amount, Decimal("200.00"))

    def test_new_bookings_use_current_price(self) -> None:
        self.apartment.price_per_night = Decimal("150.00")
        self.apartment.save()

        result = services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.assertEqual(result.total_amount, Decimal("300.00"))

    def test_storage_failure_rolls_back(self) -> None:
        request = make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12))

        with mock.patch.object(BookingQuerySet, "create", side_effect=DatabaseError("database is locked")):
            with self.assertRaises(StorageError) as ctx:
                services.admit_booking(request)

        self.assertEqual(ctx.exception.message, "Failed to create booking")
        self.assertFalse(Booking.objects.exists())


class LedgerConstraintTests(TestCase):
    def test_database_rejects_reversed_stay(self) -> None:
        apartment = make_apartment()

        with self.assertRaises(IntegrityError), transaction.atomic():
            add_booking(apartment, date(2024, 6, 12), date(2024, 6, 12))

    def test_database_rejects_non_positive_price(self) -> None:
        with self.assertRaises(IntegrityError), transaction.atomic():
            make_apartment(price_per_night=Decimal("0.00"))


class BookingLookupTests(TestCase):
    def test_get_booking(self) -> None:
        booking = add_booking(make_apartment(), date(2024, 6, 10), date(2024, 6, 12))

        self.assertEqual(services.get_booking(booking.pk), booking)

    def test_missing_booking(self) -> None:
        with self.assertRaises(NotFoundError) as ctx:
            services.get_booking(424242)

        self.assertEqual(ctx.exception.message, "Booking not found")


class BackOfficeServiceTests(TestCase):
    def setUp(self) -> None:
        User = get_user_model()
        self.admin = User.objects.create_user(username="admin", password="AdminPass123", is_staff=True)
        self.visitor = User.objects.create_user(username="visitor", password="VisitorPass123")
        self.apartment = make_apartment()
        self.booking = add_booking(self.apartment, date(2024, 6, 10), date(2024, 6, 12))

    def test_confirmed_booking_can_be_completed_or_cancelled(self) -> None:
        other = add_booking(self.apartment, date(2024, 7, 10), date(2024, 7, 12))

        services.update_booking_status(self.booking.pk, "completed", actor=self.admin)
        services.update_booking_status(other.pk, "cancelled", actor=self.admin)

        self.booking.refresh_from_db()
        other.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.COMPLETED)
        self.assertEqual(other.status, Booking.Status.CANCELLED)

    def test_terminal_states_cannot_change(self) -> None:
        services.update_booking_status(self.booking.pk, "cancelled", actor=self.admin)

        for target in ("confirmed", "completed"):
            with self.subTest(target=target):
                with self.assertRaises(ValidationError) as ctx:
                    services.update_booking_status(self.booking.pk, target, actor=self.admin)
                self.assertEqual(ctx.exception.message, "Invalid status transition")

    def test_same_status_is_a_no_op(self) -> None:
        booking = services.update_booking_status(self.booking.pk, "confirmed", actor=self.admin)

        self.assertEqual(booking.status, Booking.Status.CONFIRMED)

    def test_unknown_status(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            services.update_booking_status(self.booking.pk, "pending", actor=self.admin)

        self.assertEqual(ctx.exception.message, "Invalid status")

    def test_status_change_requires_admin(self) -> None:
        with self.assertRaises(PermissionDeniedError):
            services.update_booking_status(self.booking.pk, "cancelled", actor=self.visitor)

        self.booking.refresh_from_db()
        self.assertEqual(self.booking.status, Booking.Status.CONFIRMED)

    def test_cancelling_frees_dates_for_admission(self) -> None:
        services.update_booking_status(self.booking.pk, "cancelled", actor=self.admin)

        services.admit_booking(make_request(self.apartment, date(2024, 6, 10), date(2024, 6, 12)))

        self.assertEqual(Booking.objects.confirmed().count(), 1)

    def test_delete_booking(self) -> None:
        services.delete_booking(self.booking.pk, actor=self.admin)

        self.assertFalse(Booking.objects.exists())
        with self.assertRaises(NotFoundError):
            services.delete_booking(self.booking.pk, actor=self.admin)

    @override_settings(BOOKING_DEFAULT_BLOCK_REASON="Owner stay")
    def test_block_date_defaults_reason(self) -> None:
        blocked = services.block_date(date(2024, 6, 20), apartment_id=self.apartment.pk, actor=self.admin)

        self.assertEqual(blocked.reason, "Owner stay")
        self.assertEqual(blocked.apartment, self.apartment)

    def test_block_date_for_unknown_apartment(self) -> None:
        with self.assertRaises(NotFoundError):
            services.block_date(date(2024, 6, 20), apartment_id=999999, actor=self.admin)

    def test_block_date_requires_admin(self) -> None:
        with self.assertRaises(PermissionDeniedError):
            services.block_date(date(2024, 6, 20), actor=self.visitor)

        self.assertFalse(BlockedDate.objects.exists())

    def test_unblock_date(self) -> None:
        blocked = services.block_date(date(2024, 6, 20), reason="Painting", actor=self.admin)

        services.unblock_date(blocked.pk, actor=self.admin)

        self.assertFalse(BlockedDate.objects.exists())
        with self.assertRaises(NotFoundError):
            services.unblock_date(blocked.pk, actor=self.admin)
