"""Inclusive calendar date ranges."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, UTC
from typing import Optional

from dateutil.relativedelta import relativedelta

from fintrack.domain.errors import InvalidRangeError, ValidationError
from fintrack.domain.validation import as_date


def _current_date(today: Optional[date]) -> date:
    if today is not None:
        return as_date(today)
    return datetime.now(UTC).date()


@dataclass(frozen=True)
class DateRange:
    """Date interval including both endpoints.

    Datetimes are truncated to their date. Presets are anchored on the
    current UTC date unless a ``today`` date is passed in.
    """

    start_date: date
    end_date: date

    def __post_init__(self):
        start = as_date(self.start_date)
        end = as_date(self.end_date)
        if start > end:
            raise InvalidRangeError(
                f"Start date ({start:%Y-%m-%d}) cannot be after end date ({end:%Y-%m-%d})."
            )
        object.__setattr__(self, "start_date", start)
        object.__setattr__(self, "end_date", end)

    @property
    def duration(self) -> timedelta:
        return self.end_date - self.start_date

    @property
    def duration_in_days(self) -> int:
        """Number of days covered, counting both endpoints."""
        return self.duration.days + 1

    def contains(self, value: date | datetime) -> bool:
        day = as_date(value)
        return self.start_date <= day <= self.end_date

    def __contains__(self, value: date | datetime) -> bool:
        return self.contains(value)

    def overlaps(self, other: "DateRange") -> bool:
        """Return True if the ranges share at least one day."""
        return self.start_date <= other.end_date and self.end_date >= other.start_date

    def is_within(self, other: "DateRange") -> bool:
        return self.start_date >= other.start_date and self.end_date <= other.end_date

    @classmethod
    def today(cls, today: Optional[date] = None) -> "DateRange":
        day = _current_date(today)
        return cls(day, day)

    @classmethod
    def yesterday(cls, today: Optional[date] = None) -> "DateRange":
        day = _current_date(today) - timedelta(days=1)
        return cls(day, day)

    @classmethod
    def this_week(cls, today: Optional[date] = None) -> "DateRange":
        """Sunday through Saturday of the current week."""
        day = _current_date(today)
        # weekday() is Monday=0; weeks here start on Sunday
        start = day - timedelta(days=(day.weekday() + 1) % 7)
        return cls(start, start + timedelta(days=6))

    @classmethod
    def last_week(cls, today: Optional[date] = None) -> "DateRange":
        this_week = cls.this_week(today)
        start = this_week.start_date - timedelta(days=7)
        return cls(start, start + timedelta(days=6))

    @classmethod
    def this_month(cls, today: Optional[date] = None) -> "DateRange":
        start = _current_date(today).replace(day=1)
        return cls(start, start + relativedelta(months=1) - timedelta(days=1))

    @classmethod
    def last_month(cls, today: Optional[date] = None) -> "DateRange":
        start = _current_date(today).replace(day=1) - relativedelta(months=1)
        return cls(start, start + relativedelta(months=1) - timedelta(days=1))

    @classmethod
    def this_year(cls, today: Optional[date] = None) -> "DateRange":
        year = _current_date(today).year
        return cls(date(year, 1, 1), date(year, 12, 31))

    @classmethod
    def last_year(cls, today: Optional[date] = None) -> "DateRange":
        year = _current_date(today).year - 1
        return cls(date(year, 1, 1), date(year, 12, 31))

    @classmethod
    def last_30_days(cls, today: Optional[date] = None) -> "DateRange":
        day = _current_date(today)
        return cls(day - timedelta(days=29), day)

    @classmethod
    def last_90_days(cls, today: Optional[date] = None) -> "DateRange":
        day = _current_date(today)
        return cls(day - timedelta(days=89), day)

    @classmethod
    def for_period(cls, period: str, today: Optional[date] = None) -> "DateRange":
        """Resolve a named period such as 'this-month' or 'last-30-days'.

        Raises:
            ValidationError: If the period name is not recognized
        """
        key = period.strip().lower().replace("-", "_")
        if key not in PERIODS:
            supported = ", ".join(name.replace("_", "-") for name in PERIODS)
            raise ValidationError(
                f"Unknown period: '{period}'. Supported periods: {supported}"
            )
        return getattr(cls, key)(today)

    def __str__(self) -> str:
        return f"{self.start_date:%Y-%m-%d} to {self.end_date:%Y-%m-%d}"


PERIODS = (
    "today",
    "yesterday",
    "this_week",
    "last_week",
    "this_month",
    "last_month",
    "this_year",
    "last_year",
    "last_30_days",
    "last_90_days",
)
