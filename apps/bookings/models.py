"""Booking domain models."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.db import models  # type: ignore
from django.db.models import Q  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.value_objects import DateRange


class BookingQuerySet(models.QuerySet):
    def confirmed(self):
        return self.filter(status=Booking.Status.CONFIRMED)

    def for_apartment(self, apartment_id):
        if apartment_id is None:
            return self
        return self.filter(apartment_id=apartment_id)

    def overlapping(self, dates: DateRange):
        """Bookings whose [check_in, check_out) overlaps ``dates``."""
        return self.filter(**dates.overlap_lookup("check_in", "check_out"))

    def checking_out_on_or_after(self, day: date):
        return self.filter(check_out__gte=day)


class Booking(models.Model):
    """A guest reservation of one apartment for a run of nights."""

    class Status(models.TextChoices):
        CONFIRMED = "confirmed", _("Confirmed")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    # Both outcomes are terminal; nothing returns to confirmed.
    ALLOWED_TRANSITIONS = {
        Status.CONFIRMED: {Status.COMPLETED, Status.CANCELLED},
        Status.CANCELLED: set(),
        Status.COMPLETED: set(),
    }

    apartment = models.ForeignKey(
        "apartments.Apartment",
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    guest_name = models.CharField(max_length=255)
    guest_email = models.EmailField()
    guest_phone = models.CharField(max_length=50)
    check_in = models.DateField()
    check_out = models.DateField(help_text=_("Exclusive: the guest's last night is the day before."))
    num_guests = models.PositiveSmallIntegerField()
    total_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
        help_text=_("Nights × price per night, fixed when the booking was made."),
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.CONFIRMED,
    )
    special_requests = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(check_out__gt=models.F("check_in")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["apartment", "status", "check_in", "check_out"], name="booking_apartment_range_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} for apartment {self.apartment_id}"

    @property
    def date_range(self) -> DateRange:
        return DateRange(self.check_in, self.check_out)

    @property
    def nights(self) -> int:
        return self.date_range.nights

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, set())


class BlockedDateQuerySet(models.QuerySet):
    def for_apartment(self, apartment_id):
        """Dates blocked for ``apartment_id`` plus dates blocked for every apartment."""
        if apartment_id is None:
            return self
        return self.filter(Q(apartment_id=apartment_id) | Q(apartment__isnull=True))

    def from_day(self, day: date):
        return self.filter(date__gte=day)


class BlockedDate(models.Model):
    """A single day an admin has taken off sale, independent of bookings."""

    apartment = models.ForeignKey(
        "apartments.Apartment",
        on_delete=models.CASCADE,
        related_name="blocked_dates",
        null=True,
        blank=True,
        help_text=_("Leave empty to block the date for every apartment."),
    )
    date = models.DateField()
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = BlockedDateQuerySet.as_manager()

    class Meta:
        verbose_name = _("Blocked date")
        verbose_name_plural = _("Blocked dates")
        ordering = ["date", "id"]
        indexes = [
            models.Index(fields=["apartment", "date"], name="blocked_date_apartment_idx"),
        ]

    def __str__(self) -> str:
        scope = self.apartment_id if self.apartment_id else "all"
        return f"{self.date} blocked ({scope})"
