"""Shared pytest fixtures for fintrack tests."""

import os
import tempfile
from datetime import date
from decimal import Decimal

import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import AccountType
from fintrack.domain.money import Currency, Money
from fintrack.domain.recurring import RecurringTransactionService
from fintrack.domain.transaction import TransactionService
from fintrack.domain.user import UserService

PASSWORD_HASH = "a" * 64


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    """Create a UserService with a temporary database."""
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    """Create a RecurringTransactionService with a temporary database."""
    return RecurringTransactionService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    return user_service.register_user("jane@example.com", PASSWORD_HASH, "Jane", "Doe")


@pytest.fixture
def other_user(user_service):
    return user_service.register_user("john@example.com", PASSWORD_HASH, "John", "Roe")


@pytest.fixture
def sample_account(account_service, sample_user):
    """Create a USD checking account for the sample user."""
    return account_service.create_account(
        sample_user.id, "Checking", AccountType.CHECKING, Currency.USD
    )


@pytest.fixture
def savings_account(account_service, sample_user):
    return account_service.create_account(
        sample_user.id, "Savings", AccountType.SAVINGS, Currency.USD
    )


@pytest.fixture
def credit_card(account_service, sample_user):
    return account_service.create_account(
        sample_user.id, "Visa", AccountType.CREDIT_CARD, Currency.USD
    )


@pytest.fixture
def sample_categories(category_service, sample_user):
    """Create a small category tree and return categories by path."""
    food = category_service.create_category(sample_user.id, "Food & Dining", color="#FF8800")
    groceries = category_service.create_category(
        sample_user.id, "Groceries", parent_category_id=food.id
    )
    salary = category_service.create_category(sample_user.id, "Salary")
    return {
        "Food & Dining": food,
        "Food & Dining > Groceries": groceries,
        "Salary": salary,
    }


@pytest.fixture
def sample_transactions(transaction_service, sample_user, sample_account, savings_account, sample_categories):
    """Record one income, one expense and one transfer in January 2024."""
    income = transaction_service.record_income(
        sample_user.id,
        sample_account.id,
        sample_categories["Salary"].id,
        Money(Decimal("2500.00"), Currency.USD),
        date(2024, 1, 5),
        "January salary",
    )
    expense = transaction_service.record_expense(
        sample_user.id,
        sample_account.id,
        sample_categories["Food & Dining > Groceries"].id,
        Money(Decimal("84.20"), Currency.USD),
        date(2024, 1, 12),
        "Weekly shop",
    )
    transfer = transaction_service.record_transfer(
        sample_user.id,
        sample_account.id,
        savings_account.id,
        Money(Decimal("500"), Currency.USD),
        date(2024, 1, 20),
        "Monthly saving",
    )
    return {"income": income, "expense": expense, "transfer": transfer}


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
