"""Mapper functions to convert between domain models and SQLAlchemy models.

Loading goes through the plain dataclass constructors, so rows that were
valid when first saved are rebuilt without re-running business rules.
Saving copies domain state onto a new or existing ORM row.
"""

from datetime import datetime, UTC
from typing import Optional

from fintrack.domain import entities as domain
from fintrack.domain.money import Money
from fintrack.domain.recurrence import RecurrencePeriod
from fintrack.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    RecurringTransaction as ORMRecurringTransaction,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        email=orm_user.email,
        password_hash=orm_user.password_hash,
        first_name=orm_user.first_name,
        last_name=orm_user.last_name,
        created_at=_as_utc(orm_user.created_at),
        is_active=orm_user.is_active,
        email_confirmed=orm_user.email_confirmed,
        updated_at=_as_utc(orm_user.updated_at),
        last_login_at=_as_utc(orm_user.last_login_at),
    )


def user_to_orm(user: domain.User, orm_user: Optional[ORMUser] = None) -> ORMUser:
    """Copy a domain User onto an ORM row, creating the row if needed."""
    if orm_user is None:
        orm_user = ORMUser(id=user.id)
    orm_user.email = user.email
    orm_user.password_hash = user.password_hash
    orm_user.first_name = user.first_name
    orm_user.last_name = user.last_name
    orm_user.is_active = user.is_active
    orm_user.email_confirmed = user.email_confirmed
    orm_user.created_at = user.created_at
    orm_user.updated_at = user.updated_at
    orm_user.last_login_at = user.last_login_at
    return orm_user


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=orm_account.account_type,
        # Credit card balances may be negative
        balance=Money.signed(orm_account.balance_amount, orm_account.balance_currency),
        user_id=orm_account.user_id,
        created_at=_as_utc(orm_account.created_at),
        is_active=orm_account.is_active,
        updated_at=_as_utc(orm_account.updated_at),
    )


def account_to_orm(
    account: domain.Account, orm_account: Optional[ORMAccount] = None
) -> ORMAccount:
    """Copy a domain Account onto an ORM row, creating the row if needed."""
    if orm_account is None:
        orm_account = ORMAccount(id=account.id)
    orm_account.name = account.name
    orm_account.account_type = account.account_type
    orm_account.balance_amount = account.balance.amount
    orm_account.balance_currency = account.balance.currency
    orm_account.user_id = account.user_id
    orm_account.is_active = account.is_active
    orm_account.created_at = account.created_at
    orm_account.updated_at = account.updated_at
    return orm_account


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        user_id=orm_category.user_id,
        created_at=_as_utc(orm_category.created_at),
        description=orm_category.description,
        parent_category_id=orm_category.parent_category_id,
        icon=orm_category.icon,
        color=orm_category.color,
        is_active=orm_category.is_active,
        updated_at=_as_utc(orm_category.updated_at),
    )


def category_to_orm(
    category: domain.Category, orm_category: Optional[ORMCategory] = None
) -> ORMCategory:
    """Copy a domain Category onto an ORM row, creating the row if needed."""
    if orm_category is None:
        orm_category = ORMCategory(id=category.id)
    orm_category.name = category.name
    orm_category.description = category.description
    orm_category.user_id = category.user_id
    orm_category.parent_category_id = category.parent_category_id
    orm_category.icon = category.icon
    orm_category.color = category.color
    orm_category.is_active = category.is_active
    orm_category.created_at = category.created_at
    orm_category.updated_at = category.updated_at
    return orm_category


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        transaction_type=orm_transaction.transaction_type,
        amount=Money(orm_transaction.amount, orm_transaction.currency),
        date=orm_transaction.date,
        description=orm_transaction.description,
        account_id=orm_transaction.account_id,
        user_id=orm_transaction.user_id,
        created_at=_as_utc(orm_transaction.created_at),
        category_id=orm_transaction.category_id,
        to_account_id=orm_transaction.to_account_id,
        updated_at=_as_utc(orm_transaction.updated_at),
        is_deleted=orm_transaction.is_deleted,
        deleted_at=_as_utc(orm_transaction.deleted_at),
    )


def transaction_to_orm(
    transaction: domain.Transaction, orm_transaction: Optional[ORMTransaction] = None
) -> ORMTransaction:
    """Copy a domain Transaction onto an ORM row, creating the row if needed."""
    if orm_transaction is None:
        orm_transaction = ORMTransaction(id=transaction.id)
    orm_transaction.transaction_type = transaction.transaction_type
    orm_transaction.amount = transaction.amount.amount
    orm_transaction.currency = transaction.amount.currency
    orm_transaction.date = transaction.date
    orm_transaction.description = transaction.description
    orm_transaction.account_id = transaction.account_id
    orm_transaction.user_id = transaction.user_id
    orm_transaction.category_id = transaction.category_id
    orm_transaction.to_account_id = transaction.to_account_id
    orm_transaction.created_at = transaction.created_at
    orm_transaction.updated_at = transaction.updated_at
    orm_transaction.is_deleted = transaction.is_deleted
    orm_transaction.deleted_at = transaction.deleted_at
    return orm_transaction


def recurring_transaction_to_domain(
    orm_recurring: ORMRecurringTransaction,
) -> domain.RecurringTransaction:
    """Convert SQLAlchemy RecurringTransaction model to domain entity."""
    return domain.RecurringTransaction(
        id=orm_recurring.id,
        transaction_type=orm_recurring.transaction_type,
        amount=Money(orm_recurring.amount, orm_recurring.currency),
        description=orm_recurring.description,
        account_id=orm_recurring.account_id,
        category_id=orm_recurring.category_id,
        user_id=orm_recurring.user_id,
        start_date=orm_recurring.start_date,
        recurrence_period=RecurrencePeriod(
            orm_recurring.recurrence_type, orm_recurring.recurrence_interval
        ),
        created_at=_as_utc(orm_recurring.created_at),
        is_active=orm_recurring.is_active,
        updated_at=_as_utc(orm_recurring.updated_at),
    )


def recurring_transaction_to_orm(
    recurring: domain.RecurringTransaction,
    orm_recurring: Optional[ORMRecurringTransaction] = None,
) -> ORMRecurringTransaction:
    """Copy a domain RecurringTransaction onto an ORM row, creating it if needed."""
    if orm_recurring is None:
        orm_recurring = ORMRecurringTransaction(id=recurring.id)
    orm_recurring.transaction_type = recurring.transaction_type
    orm_recurring.amount = recurring.amount.amount
    orm_recurring.currency = recurring.amount.currency
    orm_recurring.description = recurring.description
    orm_recurring.account_id = recurring.account_id
    orm_recurring.category_id = recurring.category_id
    orm_recurring.user_id = recurring.user_id
    orm_recurring.start_date = recurring.start_date
    orm_recurring.recurrence_type = recurring.recurrence_period.recurrence_type
    orm_recurring.recurrence_interval = recurring.recurrence_period.interval
    orm_recurring.is_active = recurring.is_active
    orm_recurring.created_at = recurring.created_at
    orm_recurring.updated_at = recurring.updated_at
    return orm_recurring
