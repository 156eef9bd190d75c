"""Transaction domain service."""

import logging
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from fintrack.database.base import Database
from fintrack.domain.date_range import DateRange
from fintrack.domain.entities import Account, Category, Transaction, TransactionType
from fintrack.domain.errors import (
    CurrencyMismatchError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    transaction_not_found,
    user_not_found,
)
from fintrack.domain.money import Money

logger = logging.getLogger(__name__)


def require_account_for(
    db: Database, account_id: UUID, user_id: UUID, amount: Money
) -> Account:
    """Load an account that a user's amount is booked against.

    Raises:
        NotFoundError: If the account doesn't exist
        ValidationError: If the account belongs to another user
        CurrencyMismatchError: If amount is not in the account's currency
    """
    account = db.get_account(account_id)
    if account is None:
        raise NotFoundError(account_not_found(account_id))
    if account.user_id != user_id:
        raise ValidationError(f"Account {account.id} belongs to another user.")
    if account.currency != amount.currency:
        raise CurrencyMismatchError(
            f"Cannot record {amount.currency.value} on account "
            f"'{account.name}' with {account.currency.value} currency."
        )
    return account


def require_category_for(db: Database, category_id: UUID, user_id: UUID) -> Category:
    """Load a category owned by the given user.

    Raises:
        NotFoundError: If the category doesn't exist
        ValidationError: If the category belongs to another user
    """
    category = db.get_category(category_id)
    if category is None:
        raise NotFoundError(category_not_found(category_id))
    if category.user_id != user_id:
        raise ValidationError("Category belongs to another user.")
    return category


class TransactionService:
    """Service for recording and managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def record_income(
        self,
        user_id: UUID,
        account_id: UUID,
        category_id: UUID,
        amount: Money,
        date: date | datetime,
        description: str,
    ) -> Transaction:
        """Record money coming into an account.

        Args:
            user_id: Owner of the transaction
            account_id: Receiving account
            category_id: Income category
            amount: Positive amount in the account's currency
            date: Transaction date
            description: Description text

        Returns:
            The stored transaction

        Raises:
            NotFoundError: If the user, account or category doesn't exist
            CurrencyMismatchError: If amount is not in the account's currency
        """
        transaction = Transaction.create_income(
            amount, date, description, account_id, user_id, category_id
        )
        return self.store_transaction(transaction)

    def record_expense(
        self,
        user_id: UUID,
        account_id: UUID,
        category_id: UUID,
        amount: Money,
        date: date | datetime,
        description: str,
    ) -> Transaction:
        """Record money leaving an account. Same checks as record_income."""
        transaction = Transaction.create_expense(
            amount, date, description, account_id, user_id, category_id
        )
        return self.store_transaction(transaction)

    def record_transfer(
        self,
        user_id: UUID,
        from_account_id: UUID,
        to_account_id: UUID,
        amount: Money,
        date: date | datetime,
        description: str,
    ) -> Transaction:
        """Record money moving between two accounts of the same currency.

        Raises:
            SameAccountTransferError: If both accounts are the same
            NotFoundError: If the user or either account doesn't exist
            CurrencyMismatchError: If either account uses another currency
        """
        transaction = Transaction.create_transfer(
            amount, date, description, from_account_id, to_account_id, user_id
        )
        return self.store_transaction(transaction)

    def store_transaction(self, transaction: Transaction) -> Transaction:
        """Check references of a new transaction and save it."""
        if self.db.get_user(transaction.user_id) is None:
            raise NotFoundError(user_not_found(transaction.user_id))

        require_account_for(
            self.db, transaction.account_id, transaction.user_id, transaction.amount
        )
        if transaction.to_account_id is not None:
            require_account_for(
                self.db, transaction.to_account_id, transaction.user_id, transaction.amount
            )
        if transaction.category_id is not None:
            require_category_for(self.db, transaction.category_id, transaction.user_id)

        self.db.save_transaction(transaction)
        logger.info(
            "Recorded %s %s of %s",
            transaction.transaction_type.value.lower(),
            transaction.id,
            transaction.amount,
        )
        return transaction

    def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: UUID) -> Transaction:
        """Get a transaction or raise NotFoundError."""
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        user_id: Optional[UUID] = None,
        date_range: Optional[DateRange] = None,
        account_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        transaction_type: Optional[TransactionType] = None,
        include_deleted: bool = False,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            user_id: Optional owner filter
            date_range: Optional inclusive date range
            account_id: Optional account filter (source or destination)
            category_id: Optional category filter
            transaction_type: Optional type filter
            include_deleted: If True, soft-deleted transactions are included

        Returns:
            Transactions ordered by date
        """
        return self.db.list_transactions(
            user_id=user_id,
            start_date=date_range.start_date if date_range else None,
            end_date=date_range.end_date if date_range else None,
            account_id=account_id,
            category_id=category_id,
            transaction_type=transaction_type,
            include_deleted=include_deleted,
        )

    def update_description(self, transaction_id: UUID, description: str) -> Transaction:
        transaction = self.require_transaction(transaction_id)
        transaction.update_description(description)
        self.db.save_transaction(transaction)
        return transaction

    def delete_transaction(self, transaction_id: UUID) -> Transaction:
        """Soft-delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
            AlreadyDeletedError: If it is already deleted
        """
        transaction = self.require_transaction(transaction_id)
        transaction.delete()
        self.db.save_transaction(transaction)
        logger.info("Deleted transaction %s", transaction_id)
        return transaction

    def restore_transaction(self, transaction_id: UUID) -> Transaction:
        """Undo a soft delete.

        Raises:
            NotFoundError: If the transaction doesn't exist
            NotDeletedError: If it is not deleted
        """
        transaction = self.require_transaction(transaction_id)
        transaction.restore()
        self.db.save_transaction(transaction)
        logger.info("Restored transaction %s", transaction_id)
        return transaction
