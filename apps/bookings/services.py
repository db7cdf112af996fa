"""Domain services for booking workflows.

Two read/write paths touch the booking ledger:

* ``get_unavailable_dates`` builds the advisory calendar shown to guests.
  It blocks every day from check-in through check-out *inclusive*, so a
  turnover day never shows as free.
* ``admit_booking`` is the only way a booking is created. It re-checks the
  ledger itself with the half-open test ``[check_in, check_out)``, so
  back-to-back stays are accepted even though the calendar hides the
  turnover day.

Both are built on ``DateRange`` so the overlap rule lives in one place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal

from django.conf import settings  # type: ignore
from django.db import DatabaseError, transaction  # type: ignore
from django.utils import timezone  # type: ignore

from apps.apartments.models import Apartment
from apps.users.permissions import ensure_admin
from shared.application.uow import DjangoUnitOfWork
from shared.domain.exceptions import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from shared.domain.value_objects import DateRange

from .models import BlockedDate, Booking

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All required fields must be filled"
INVALID_DATES_MESSAGE = "Check-out date must be after check-in date"
INVALID_APARTMENT_MESSAGE = "Invalid apartment"
CAPACITY_MESSAGE = "Number of guests exceeds apartment capacity"
CONFLICT_MESSAGE = "Selected dates are not available"
BOOKING_FAILED_MESSAGE = "Failed to create booking"
AVAILABILITY_FAILED_MESSAGE = "Failed to fetch availability"
BOOKING_NOT_FOUND_MESSAGE = "Booking not found"

CENTS = Decimal("0.01")


@dataclass
class BookingRequest:
    """A guest's booking request as received; any field may still be missing."""

    apartment_id: int | None = None
    guest_name: str | None = None
    guest_email: str | None = None
    guest_phone: str | None = None
    check_in: date | None = None
    check_out: date | None = None
    num_guests: int | None = None
    special_requests: str | None = ""

    OPTIONAL_FIELDS = frozenset({"special_requests"})

    def missing_fields(self) -> list[str]:
        missing = []
        for field in fields(self):
            if field.name in self.OPTIONAL_FIELDS:
                continue
            value = getattr(self, field.name)
            if value is None or value == "" or value == 0:
                missing.append(field.name)
        return missing


@dataclass(frozen=True)
class AdmissionResult:
    booking: Booking
    total_amount: Decimal
    nights: int


def calculate_total_amount(price_per_night: Decimal, dates: DateRange) -> Decimal:
    """Nights × nightly price, rounded to currency precision."""
    return (Decimal(dates.nights) * Decimal(price_per_night)).quantize(CENTS)


def get_unavailable_dates(apartment_id: int | None = None, *, today: date | None = None) -> list[str]:
    """
    ISO dates, from ``today`` on, on which a new stay cannot start.

    Merges confirmed bookings that have not checked out before ``today``
    with the blocked-date register. ``apartment_id=None`` covers every
    apartment, which is what a single-apartment site asks for. Either read
    failing fails the whole call; partial calendars are never returned.
    """
    today = today or timezone.localdate()

    try:
        stays = list(
            Booking.objects.confirmed()
            .for_apartment(apartment_id)
            .checking_out_on_or_after(today)
            .values_list("check_in", "check_out")
        )
        blocked = list(
            BlockedDate.objects.for_apartment(apartment_id)
            .from_day(today)
            .values_list("date", flat=True)
        )
    except DatabaseError as exc:
        logger.error("Availability lookup failed for apartment %s", apartment_id, exc_info=True)
        raise StorageError(AVAILABILITY_FAILED_MESSAGE) from exc

    unavailable: set[date] = set(blocked)
    for check_in, check_out in stays:
        for day in DateRange(check_in, check_out).days(include_end=True):
            if day >= today:
                unavailable.add(day)

    return [day.isoformat() for day in sorted(unavailable)]


def _coerce_apartment_id(apartment_id) -> int:
    try:
        return int(apartment_id)
    except (TypeError, ValueError):
        raise NotFoundError(INVALID_APARTMENT_MESSAGE)


def admit_booking(request: BookingRequest) -> AdmissionResult:
    """
    Validate a booking request and, if the dates are free, record it.

    Checks run in a fixed order and the first failure wins:

    1. every required field is present, and check-out is after check-in
       (``ValidationError``);
    2. the apartment exists (``NotFoundError``), and can host the party
       (``ValidationError``);
    3. no confirmed booking of the apartment overlaps ``[check_in, check_out)``
       (``ConflictError``).

    Steps 2 and 3 and the insert run in one transaction holding a lock on
    the apartment row, so two overlapping requests for the same apartment
    are serialized and the second one sees the first one's booking.
    """
    missing = request.missing_fields()
    if missing:
        logger.info("Booking rejected, missing fields: %s", ", ".join(missing))
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    if request.check_out <= request.check_in:
        logger.info("Booking rejected, check-out %s not after check-in %s", request.check_out, request.check_in)
        raise ValidationError(INVALID_DATES_MESSAGE)

    dates = DateRange(request.check_in, request.check_out)
    apartment_id = _coerce_apartment_id(request.apartment_id)

    with DjangoUnitOfWork(failure_message=BOOKING_FAILED_MESSAGE) as uow:
        apartment = uow.lock(Apartment.objects.filter(pk=apartment_id)).first()
        if apartment is None:
            logger.info("Booking rejected, apartment %s does not exist", apartment_id)
            raise NotFoundError(INVALID_APARTMENT_MESSAGE)

        if request.num_guests > apartment.max_guests:
            logger.info(
                "Booking rejected, %s guests for apartment %s (max %s)",
                request.num_guests,
                apartment.pk,
                apartment.max_guests,
            )
            raise ValidationError(CAPACITY_MESSAGE)

        conflicts = Booking.objects.confirmed().for_apartment(apartment.pk).overlapping(dates).count()
        if conflicts:
            logger.info("Booking rejected, %s overlaps %d booking(s) of apartment %s", dates, conflicts, apartment.pk)
            raise ConflictError(CONFLICT_MESSAGE)

        total_amount = calculate_total_amount(apartment.price_per_night, dates)
        booking = Booking.objects.create(
            apartment=apartment,
            guest_name=request.guest_name,
            guest_email=request.guest_email,
            guest_phone=request.guest_phone,
            check_in=dates.start_date,
            check_out=dates.end_date,
            num_guests=request.num_guests,
            total_amount=total_amount,
            status=Booking.Status.CONFIRMED,
            special_requests=request.special_requests or "",
        )
        uow.on_commit(
            lambda: logger.info(
                "Booking %s created for apartment %s, %s, %d night(s), total %s",
                booking.pk,
                apartment.pk,
                dates,
                dates.nights,
                total_amount,
            )
        )

    return AdmissionResult(booking=booking, total_amount=total_amount, nights=dates.nights)


def get_booking(booking_id) -> Booking:
    try:
        return Booking.objects.select_related("apartment").get(pk=booking_id)
    except (Booking.DoesNotExist, ValueError):
        raise NotFoundError(BOOKING_NOT_FOUND_MESSAGE)


# --- Back-office operations --------------------------------------------------


def update_booking_status(booking_id, new_status: str, *, actor) -> Booking:
    """Move a confirmed booking to completed or cancelled."""

    ensure_admin(actor)
    if new_status not in Booking.Status.values:
        raise ValidationError("Invalid status")

    with transaction.atomic():
        try:
            booking = Booking.objects.select_for_update().get(pk=booking_id)
        except (Booking.DoesNotExist, ValueError):
            raise NotFoundError(BOOKING_NOT_FOUND_MESSAGE)

        if booking.status == new_status:
            return booking
        if not booking.can_transition_to(new_status):
            raise ValidationError("Invalid status transition")

        previous = booking.status
        booking.status = new_status
        booking.save(update_fields=["status"])

    logger.info(
        "Booking %s moved from %s to %s by %s",
        booking.pk,
        previous,
        new_status,
        actor.get_username(),
    )
    return booking


def delete_booking(booking_id, *, actor) -> None:
    ensure_admin(actor)
    deleted, _ = Booking.objects.filter(pk=booking_id).delete()
    if not deleted:
        raise NotFoundError(BOOKING_NOT_FOUND_MESSAGE)
    logger.info("Booking %s deleted by %s", booking_id, actor.get_username())


def block_date(day: date, *, apartment_id: int | None = None, reason: str = "", actor) -> BlockedDate:
    """Take ``day`` off sale for one apartment, or for all when ``apartment_id`` is None."""

    ensure_admin(actor)
    if apartment_id is not None and not Apartment.objects.filter(pk=apartment_id).exists():
        raise NotFoundError(INVALID_APARTMENT_MESSAGE)

    blocked = BlockedDate.objects.create(
        apartment_id=apartment_id,
        date=day,
        reason=reason or settings.BOOKING_DEFAULT_BLOCK_REASON,
    )
    logger.info(
        "Date %s blocked for apartment %s by %s",
        day,
        apartment_id if apartment_id is not None else "all",
        actor.get_username(),
    )
    return blocked


def unblock_date(blocked_date_id, *, actor) -> None:
    ensure_admin(actor)
    deleted, _ = BlockedDate.objects.filter(pk=blocked_date_id).delete()
    if not deleted:
        raise NotFoundError("Blocked date not found")
    logger.info("Blocked date %s removed by %s", blocked_date_id, actor.get_username())
