"""Account domain service."""

import logging
from typing import Optional
from uuid import UUID

from fintrack.database.base import Database
from fintrack.domain.entities import Account, AccountType
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    account_not_found,
    user_not_found,
)
from fintrack.domain.money import Currency, Money

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts and their balances."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        user_id: UUID,
        name: str,
        account_type: AccountType,
        currency: Currency,
    ) -> Account:
        """Create a new account with a zero balance.

        Args:
            user_id: Owner of the account
            name: Account name
            account_type: Kind of account
            currency: Currency of the balance, fixed for the account's lifetime

        Returns:
            The stored account

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the user already has an account with this name
        """
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))

        account = Account.create(name, account_type, currency, user_id)
        if self.db.get_account_by_name(user_id, account.name) is not None:
            raise ConflictError(f"Account with name '{account.name}' already exists")

        self.db.save_account(account)
        logger.info("Created %s account %s for user %s", account.account_type.value, account.id, user_id)
        return account

    def get_account(self, account_id: UUID) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: UUID) -> Account:
        """Get an account or raise NotFoundError."""
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: Optional[UUID] = None) -> list[Account]:
        return self.db.list_accounts(user_id=user_id)

    def deposit(self, account_id: UUID, amount: Money) -> Account:
        """Add money to an account and store the new balance."""
        account = self.require_account(account_id)
        account.deposit(amount)
        self.db.save_account(account)
        logger.info("Deposited %s to account %s", amount, account_id)
        return account

    def withdraw(self, account_id: UUID, amount: Money) -> Account:
        """Take money from an account and store the new balance.

        Raises:
            NotFoundError: If the account does not exist
            InsufficientFundsError: If a non-credit account lacks the funds
        """
        account = self.require_account(account_id)
        account.withdraw(amount)
        self.db.save_account(account)
        logger.info("Withdrew %s from account %s", amount, account_id)
        return account

    def rename_account(self, account_id: UUID, name: str) -> Account:
        """Rename an account.

        Raises:
            NotFoundError: If the account does not exist
            ConflictError: If another account of the same user has the name
        """
        account = self.require_account(account_id)
        account.update_name(name)

        existing = self.db.get_account_by_name(account.user_id, account.name)
        if existing is not None and existing.id != account_id:
            raise ConflictError(f"Account with name '{account.name}' already exists")

        self.db.save_account(account)
        return account

    def activate_account(self, account_id: UUID) -> Account:
        account = self.require_account(account_id)
        account.activate()
        self.db.save_account(account)
        logger.info("Activated account %s", account_id)
        return account

    def deactivate_account(self, account_id: UUID) -> Account:
        account = self.require_account(account_id)
        account.deactivate()
        self.db.save_account(account)
        logger.info("Deactivated account %s", account_id)
        return account

    def delete_account(self, account_id: UUID) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If transactions still reference the account
        """
        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)
