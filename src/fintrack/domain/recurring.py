"""Recurring transaction domain service."""

import logging
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from fintrack.database.base import Database
from fintrack.domain.date_range import DateRange
from fintrack.domain.entities import (
    RecurringTransaction,
    RecurringTransactionType,
    Transaction,
    TransactionType,
)
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    recurring_transaction_not_found,
    user_not_found,
)
from fintrack.domain.money import Money
from fintrack.domain.recurrence import RecurrencePeriod
from fintrack.domain.transaction import (
    TransactionService,
    require_account_for,
    require_category_for,
)

logger = logging.getLogger(__name__)

# Upper bound on occurrences generated per request
DEFAULT_OCCURRENCE_LIMIT = 1000


class RecurringTransactionService:
    """Service for recurring transaction templates and their occurrences."""

    def __init__(self, db: Database):
        """Initialize recurring transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_recurring(
        self,
        user_id: UUID,
        transaction_type: RecurringTransactionType,
        amount: Money,
        description: str,
        account_id: UUID,
        category_id: UUID,
        start_date: date | datetime,
        recurrence_period: RecurrencePeriod,
    ) -> RecurringTransaction:
        """Create and store a recurring income or expense.

        Raises:
            NotFoundError: If the user, account or category doesn't exist
            ValidationError: If the account or category belongs to another user
            CurrencyMismatchError: If amount is not in the account's currency
        """
        recurring = RecurringTransaction.create(
            transaction_type,
            amount,
            description,
            account_id,
            category_id,
            user_id,
            start_date,
            recurrence_period,
        )
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        require_account_for(self.db, account_id, user_id, recurring.amount)
        require_category_for(self.db, category_id, user_id)

        self.db.save_recurring_transaction(recurring)
        logger.info(
            "Created recurring %s %s (%s from %s)",
            recurring.transaction_type.value.lower(),
            recurring.id,
            recurring.recurrence_period,
            recurring.start_date,
        )
        return recurring

    def get_recurring(self, recurring_id: UUID) -> Optional[RecurringTransaction]:
        return self.db.get_recurring_transaction(recurring_id)

    def require_recurring(self, recurring_id: UUID) -> RecurringTransaction:
        """Get a recurring transaction or raise NotFoundError."""
        recurring = self.db.get_recurring_transaction(recurring_id)
        if recurring is None:
            raise NotFoundError(recurring_transaction_not_found(recurring_id))
        return recurring

    def list_recurring(
        self, user_id: Optional[UUID] = None, active_only: bool = False
    ) -> list[RecurringTransaction]:
        return self.db.list_recurring_transactions(user_id=user_id, active_only=active_only)

    def update_amount(self, recurring_id: UUID, amount: Money) -> RecurringTransaction:
        recurring = self.require_recurring(recurring_id)
        require_account_for(self.db, recurring.account_id, recurring.user_id, amount)
        recurring.update_amount(amount)
        self.db.save_recurring_transaction(recurring)
        return recurring

    def update_description(self, recurring_id: UUID, description: str) -> RecurringTransaction:
        recurring = self.require_recurring(recurring_id)
        recurring.update_description(description)
        self.db.save_recurring_transaction(recurring)
        return recurring

    def update_category(self, recurring_id: UUID, category_id: UUID) -> RecurringTransaction:
        recurring = self.require_recurring(recurring_id)
        require_category_for(self.db, category_id, recurring.user_id)
        recurring.update_category(category_id)
        self.db.save_recurring_transaction(recurring)
        return recurring

    def reschedule(
        self,
        recurring_id: UUID,
        recurrence_period: Optional[RecurrencePeriod] = None,
        start_date: Optional[date] = None,
    ) -> RecurringTransaction:
        """Change the recurrence rule and/or the anchor date."""
        recurring = self.require_recurring(recurring_id)
        if recurrence_period is not None:
            recurring.update_recurrence_period(recurrence_period)
        if start_date is not None:
            recurring.update_start_date(start_date)
        self.db.save_recurring_transaction(recurring)
        return recurring

    def activate(self, recurring_id: UUID) -> RecurringTransaction:
        recurring = self.require_recurring(recurring_id)
        recurring.activate()
        self.db.save_recurring_transaction(recurring)
        return recurring

    def deactivate(self, recurring_id: UUID) -> RecurringTransaction:
        recurring = self.require_recurring(recurring_id)
        recurring.deactivate()
        self.db.save_recurring_transaction(recurring)
        return recurring

    def occurrences(
        self,
        recurring_id: UUID,
        date_range: DateRange,
        limit: int = DEFAULT_OCCURRENCE_LIMIT,
    ) -> list[date]:
        """Occurrence dates of one template inside a date range.

        Args:
            recurring_id: Recurring transaction ID
            date_range: Inclusive window to search
            limit: Maximum number of dates returned

        Returns:
            Dates in increasing order
        """
        recurring = self.require_recurring(recurring_id)
        return recurring.get_occurrences_between(
            date_range.start_date, date_range.end_date, limit=limit
        )

    def upcoming(
        self,
        user_id: UUID,
        date_range: DateRange,
        limit: int = DEFAULT_OCCURRENCE_LIMIT,
    ) -> list[tuple[date, RecurringTransaction]]:
        """All occurrences of a user's active templates in a range, by date."""
        scheduled = []
        for recurring in self.db.list_recurring_transactions(user_id=user_id, active_only=True):
            for day in recurring.get_occurrences_between(
                date_range.start_date, date_range.end_date, limit=limit
            ):
                scheduled.append((day, recurring))
        scheduled.sort(key=lambda item: (item[0], item[1].description))
        return scheduled[:limit]

    def post_occurrence(self, recurring_id: UUID, occurrence_date: date) -> Transaction:
        """Store the concrete transaction for one occurrence of a template.

        An occurrence counts as posted when a live transaction with the
        template's type, account, category, amount and description exists
        on that date.

        Raises:
            ValidationError: If the date is not an occurrence of the template
            InvalidOperationError: If the template is deactivated
            ConflictError: If the occurrence was already posted
        """
        recurring = self.require_recurring(recurring_id)
        if not recurring.get_occurrences_between(occurrence_date, occurrence_date):
            raise ValidationError(
                f"{occurrence_date:%Y-%m-%d} is not an occurrence of recurring "
                f"transaction {recurring_id}."
            )
        transaction = recurring.build_transaction(occurrence_date)
        if self._is_posted(recurring, transaction.date):
            raise ConflictError(
                f"Occurrence {transaction.date:%Y-%m-%d} of recurring transaction "
                f"{recurring_id} is already posted."
            )
        stored = TransactionService(self.db).store_transaction(transaction)
        logger.info("Posted occurrence %s of %s as %s", occurrence_date, recurring_id, stored.id)
        return stored

    def _is_posted(self, recurring: RecurringTransaction, day: date) -> bool:
        existing = self.db.list_transactions(
            user_id=recurring.user_id,
            start_date=day,
            end_date=day,
            account_id=recurring.account_id,
            category_id=recurring.category_id,
            transaction_type=TransactionType(recurring.transaction_type.value),
        )
        return any(
            txn.amount == recurring.amount and txn.description == recurring.description
            for txn in existing
        )
