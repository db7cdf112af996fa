"""
Common Value Objects

Value objects used across the booking domain:
- DateRange: a stay from check-in (inclusive) to check-out (exclusive)
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterator


@dataclass(frozen=True)
class DateRange:
    """
    Date range value object

    Represents a range from start_date (inclusive) to end_date (exclusive).
    Used for booking periods, conflict checks and availability calendars.
    """
    start_date: date
    end_date: date

    def __post_init__(self):
        if self.start_date >= self.end_date:
            raise ValueError(f"Start date ({self.start_date}) must be before end date ({self.end_date})")

    def overlaps_with(self, other: 'DateRange') -> bool:
        """
        Check if this range overlaps with another

        Two ranges overlap unless one ends on or before the other starts.
        end_date is exclusive, so adjacent ranges don't overlap.

        Examples:
            - DateRange(10, 12) overlaps with DateRange(11, 13) -> True
            - DateRange(10, 12) overlaps with DateRange(12, 14) -> False (turnover)
        """
        if not isinstance(other, DateRange):
            raise TypeError("Can only check overlap with another DateRange")

        return not (self.end_date <= other.start_date or self.start_date >= other.end_date)

    def overlap_lookup(self, start_field: str = "check_in", end_field: str = "check_out") -> dict:
        """
        ORM lookup kwargs expressing ``overlaps_with`` against stored rows.

        ``{start_field}__lt=end_date`` and ``{end_field}__gt=start_date`` is the
        negation of ``end <= start OR start >= end``.
        """
        return {
            f"{start_field}__lt": self.end_date,
            f"{end_field}__gt": self.start_date,
        }

    def contains(self, check_date: date) -> bool:
        """start_date is inclusive, end_date is exclusive."""
        return self.start_date <= check_date < self.end_date

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    def days(self, include_end: bool = False) -> Iterator[date]:
        """
        Iterate over the calendar days of the range.

        With ``include_end`` the check-out day itself is yielded too, which
        is how the availability calendar blocks turnover days.
        """
        last = self.end_date if include_end else self.end_date - timedelta(days=1)
        current = self.start_date
        while current <= last:
            yield current
            current += timedelta(days=1)

    def __len__(self) -> int:
        return self.nights

    def __str__(self):
        return f"{self.start_date.isoformat()} - {self.end_date.isoformat()}"

    def __repr__(self):
        return f"DateRange({self.start_date}, {self.end_date})"
