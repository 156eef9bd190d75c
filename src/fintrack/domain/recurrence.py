"""Recurrence rules for scheduled transactions."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

from dateutil.relativedelta import relativedelta

from fintrack.domain.errors import InvalidIntervalError, ValidationError


class RecurrenceType(str, Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    YEARLY = "Yearly"


_UNIT_NAMES = {
    RecurrenceType.DAILY: "days",
    RecurrenceType.WEEKLY: "weeks",
    RecurrenceType.MONTHLY: "months",
    RecurrenceType.YEARLY: "years",
}


@dataclass(frozen=True)
class RecurrencePeriod:
    """How often a recurring transaction repeats.

    Months and years follow calendar arithmetic, so a date that does not
    exist in the target month is clamped to its last day (Jan 31 + 1 month
    is Feb 29 in a leap year).
    """

    recurrence_type: RecurrenceType
    interval: int = 1

    def __post_init__(self):
        try:
            recurrence_type = RecurrenceType(self.recurrence_type)
        except ValueError as e:
            raise ValidationError(
                f"Unknown recurrence type: {self.recurrence_type!r}"
            ) from e
        if (
            not isinstance(self.interval, int)
            or isinstance(self.interval, bool)
            or self.interval <= 0
        ):
            raise InvalidIntervalError("Recurrence interval must be positive.")
        object.__setattr__(self, "recurrence_type", recurrence_type)

    @classmethod
    def daily(cls, interval: int = 1) -> "RecurrencePeriod":
        return cls(RecurrenceType.DAILY, interval)

    @classmethod
    def weekly(cls, interval: int = 1) -> "RecurrencePeriod":
        return cls(RecurrenceType.WEEKLY, interval)

    @classmethod
    def biweekly(cls) -> "RecurrencePeriod":
        return cls(RecurrenceType.WEEKLY, 2)

    @classmethod
    def monthly(cls, interval: int = 1) -> "RecurrencePeriod":
        return cls(RecurrenceType.MONTHLY, interval)

    @classmethod
    def quarterly(cls) -> "RecurrencePeriod":
        return cls(RecurrenceType.MONTHLY, 3)

    @classmethod
    def yearly(cls, interval: int = 1) -> "RecurrencePeriod":
        return cls(RecurrenceType.YEARLY, interval)

    def calculate_next_occurrence(self, from_date: date) -> date:
        """Return the date one period after from_date."""
        if self.recurrence_type is RecurrenceType.DAILY:
            return from_date + relativedelta(days=self.interval)
        if self.recurrence_type is RecurrenceType.WEEKLY:
            return from_date + relativedelta(days=self.interval * 7)
        if self.recurrence_type is RecurrenceType.MONTHLY:
            return from_date + relativedelta(months=self.interval)
        if self.recurrence_type is RecurrenceType.YEARLY:
            return from_date + relativedelta(years=self.interval)
        raise RuntimeError(f"Unknown recurrence type: {self.recurrence_type}")

    def __str__(self) -> str:
        if self.interval == 1:
            return self.recurrence_type.value
        return f"Every {self.interval} {_UNIT_NAMES[self.recurrence_type]}"
