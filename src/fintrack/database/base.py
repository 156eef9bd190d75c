"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from uuid import UUID

from fintrack.domain.entities import (
    User,
    Account,
    Category,
    Transaction,
    RecurringTransaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for fintrack.

    Entities are saved whole and loaded by id. Saving an entity that already
    exists overwrites the stored record. The store, not the domain, checks
    that referenced users, accounts and categories exist.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # User operations
    @abstractmethod
    def save_user(self, user: User) -> None:
        """Insert or update a user."""
        pass

    @abstractmethod
    def get_user(self, user_id: UUID) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by (normalized) email."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def delete_user(self, user_id: UUID) -> None:
        """Delete a user together with everything the user owns."""
        pass

    # Account operations
    @abstractmethod
    def save_account(self, account: Account) -> None:
        """Insert or update an account."""
        pass

    @abstractmethod
    def get_account(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, user_id: UUID, name: str) -> Optional[Account]:
        """Get a user's account by name."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: Optional[UUID] = None) -> list[Account]:
        """List accounts, optionally filtered by user."""
        pass

    @abstractmethod
    def delete_account(self, account_id: UUID) -> None:
        """Delete an account that no transaction references."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: UUID) -> int:
        """Count transactions that use the account as source or destination."""
        pass

    @abstractmethod
    def get_account_recurring_count(self, account_id: UUID) -> int:
        """Count recurring transactions that use the account."""
        pass

    # Category operations
    @abstractmethod
    def save_category(self, category: Category) -> None:
        """Insert or update a category."""
        pass

    @abstractmethod
    def get_category(self, category_id: UUID) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def list_categories(
        self, user_id: Optional[UUID] = None, parent_category_id: Optional[UUID] = None
    ) -> list[Category]:
        """List categories, optionally filtered by user and parent."""
        pass

    @abstractmethod
    def delete_category(self, category_id: UUID) -> None:
        """Delete a category that nothing references."""
        pass

    @abstractmethod
    def get_category_transaction_count(self, category_id: UUID) -> int:
        """Count transactions in a category."""
        pass

    @abstractmethod
    def get_category_recurring_count(self, category_id: UUID) -> int:
        """Count recurring transactions in a category."""
        pass

    # Transaction operations
    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> None:
        """Insert or update a transaction."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        user_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[UUID] = None,
        category_id: Optional[UUID] = None,
        transaction_type: Optional[TransactionType] = None,
        include_deleted: bool = False,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            user_id: Optional owner filter
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            account_id: Optional account filter, matching source or destination
            category_id: Optional category ID filter
            transaction_type: Optional type filter
            include_deleted: If True, also return soft-deleted transactions
        """
        pass

    # Recurring transaction operations
    @abstractmethod
    def save_recurring_transaction(self, recurring: RecurringTransaction) -> None:
        """Insert or update a recurring transaction."""
        pass

    @abstractmethod
    def get_recurring_transaction(self, recurring_id: UUID) -> Optional[RecurringTransaction]:
        """Get recurring transaction by ID."""
        pass

    @abstractmethod
    def list_recurring_transactions(
        self, user_id: Optional[UUID] = None, active_only: bool = False
    ) -> list[RecurringTransaction]:
        """List recurring transactions."""
        pass
