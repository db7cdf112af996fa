"""Aggregate figures for the back-office dashboard."""

from __future__ import annotations

import calendar
from dataclasses import asdict, dataclass
from datetime import date, timedelta
from decimal import Decimal

from django.db.models import Sum  # type: ignore
from django.utils import timezone  # type: ignore

from apps.apartments.models import Apartment
from apps.bookings.models import Booking
from shared.domain.value_objects import DateRange


@dataclass(frozen=True)
class DashboardStats:
    totalBookings: int
    upcomingBookings: int
    totalRevenue: Decimal
    occupancyRate: int

    def as_dict(self) -> dict:
        return asdict(self)


def month_range(day: date) -> DateRange:
    days_in_month = calendar.monthrange(day.year, day.month)[1]
    start = day.replace(day=1)
    return DateRange(start, start + timedelta(days=days_in_month))


def booked_nights_in(period: DateRange) -> int:
    """Nights of confirmed or completed stays that fall inside ``period``."""

    stays = (
        Booking.objects.filter(status__in=[Booking.Status.CONFIRMED, Booking.Status.COMPLETED])
        .filter(**period.overlap_lookup())
        .values_list("check_in", "check_out")
    )
    nights = 0
    for check_in, check_out in stays:
        start = max(check_in, period.start_date)
        end = min(check_out, period.end_date)
        nights += (end - start).days
    return nights


def occupancy_rate(period: DateRange) -> int:
    """Booked share of the apartment-nights in ``period``, as a whole percentage."""

    capacity = period.nights * Apartment.objects.count()
    if not capacity:
        return 0
    return min(100, round(booked_nights_in(period) * 100 / capacity))


def dashboard_stats(*, today: date | None = None) -> DashboardStats:
    today = today or timezone.localdate()
    revenue = Booking.objects.filter(status=Booking.Status.COMPLETED).aggregate(total=Sum("total_amount"))["total"]
    return DashboardStats(
        totalBookings=Booking.objects.count(),
        upcomingBookings=Booking.objects.confirmed().filter(check_in__gte=today).count(),
        totalRevenue=revenue or Decimal("0.00"),
        occupancyRate=occupancy_rate(month_range(today)),
    )
