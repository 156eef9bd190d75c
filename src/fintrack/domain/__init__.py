"""Domain layer for fintrack application.

Only value objects and entities are re-exported here. Services depend on
the database layer, which itself imports the entities, so they are
imported from their own modules (e.g. ``fintrack.domain.account``).
"""

from fintrack.domain.date_range import DateRange
from fintrack.domain.entities import (
    Account,
    AccountType,
    Category,
    RecurringTransaction,
    RecurringTransactionType,
    Transaction,
    TransactionType,
    User,
)
from fintrack.domain.money import Currency, Money
from fintrack.domain.recurrence import RecurrencePeriod, RecurrenceType

__all__ = [
    "Account",
    "AccountType",
    "Category",
    "Currency",
    "DateRange",
    "Money",
    "RecurrencePeriod",
    "RecurrenceType",
    "RecurringTransaction",
    "RecurringTransactionType",
    "Transaction",
    "TransactionType",
    "User",
]
