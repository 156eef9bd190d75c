"""Tests for Database interface returning domain models."""

from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from fintrack.database.factories import create_database, create_sqlite_database
from fintrack.domain import entities
from fintrack.domain.errors import ConflictError, DependencyError, NotFoundError
from fintrack.domain.money import Currency, Money
from fintrack.domain.recurrence import RecurrencePeriod

PASSWORD_HASH = "a" * 64


def make_user(email="jane@example.com") -> entities.User:
    return entities.User.create(email, PASSWORD_HASH, "Jane", "Doe")


class TestUsers:
    def test_save_and_get(self, temp_db):
        user = make_user()
        temp_db.save_user(user)

        loaded = temp_db.get_user(user.id)
        assert isinstance(loaded, entities.User)
        assert loaded == user

    def test_get_by_email_is_case_insensitive(self, temp_db):
        user = make_user()
        temp_db.save_user(user)
        assert temp_db.get_user_by_email(" JANE@example.com ").id == user.id

    def test_get_missing(self, temp_db):
        assert temp_db.get_user(uuid4()) is None

    def test_duplicate_email(self, temp_db):
        temp_db.save_user(make_user())
        with pytest.raises(ConflictError):
            temp_db.save_user(make_user())

    def test_update(self, temp_db):
        user = make_user()
        temp_db.save_user(user)
        user.confirm_email()
        user.record_login()
        temp_db.save_user(user)

        loaded = temp_db.get_user(user.id)
        assert loaded.email_confirmed
        assert loaded.last_login_at == user.last_login_at

    def test_delete_cascades(self, temp_db, sample_user, sample_transactions, recurring_service,
                             sample_account, sample_categories):
        recurring_service.create_recurring(
            sample_user.id,
            entities.RecurringTransactionType.EXPENSE,
            Money(Decimal("10"), Currency.USD),
            "Gym",
            sample_account.id,
            sample_categories["Salary"].id,
            date(2024, 1, 1),
            RecurrencePeriod.monthly(),
        )

        temp_db.delete_user(sample_user.id)

        assert temp_db.get_user(sample_user.id) is None
        assert temp_db.list_accounts(user_id=sample_user.id) == []
        assert temp_db.list_categories(user_id=sample_user.id) == []
        assert temp_db.list_transactions(user_id=sample_user.id, include_deleted=True) == []
        assert temp_db.list_recurring_transactions(user_id=sample_user.id) == []

    def test_delete_missing(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_user(uuid4())


class TestAccounts:
    def test_negative_credit_balance_survives_reload(self, temp_db, credit_card):
        credit_card.withdraw(Money(Decimal("50"), Currency.USD))
        temp_db.save_account(credit_card)

        loaded = temp_db.get_account(credit_card.id)
        assert loaded.balance.amount == Decimal("-50")
        assert loaded.balance.currency is Currency.USD

    def test_list_by_user(self, temp_db, sample_account, savings_account, other_user, account_service):
        account_service.create_account(
            other_user.id, "Theirs", entities.AccountType.CASH, Currency.EUR
        )
        names = [a.name for a in temp_db.list_accounts(user_id=sample_account.user_id)]
        assert names == ["Checking", "Savings"]
        assert len(temp_db.list_accounts()) == 3

    def test_get_by_name(self, temp_db, sample_account):
        assert temp_db.get_account_by_name(sample_account.user_id, "Checking").id == sample_account.id
        assert temp_db.get_account_by_name(uuid4(), "Checking") is None

    def test_delete_blocked_by_transactions(self, temp_db, sample_transactions, savings_account):
        # Savings only appears as a transfer destination
        assert temp_db.get_account_transaction_count(savings_account.id) == 1
        with pytest.raises(DependencyError, match="1 transaction"):
            temp_db.delete_account(savings_account.id)
        assert temp_db.get_account(savings_account.id) is not None

    def test_delete_unused(self, temp_db, sample_account):
        temp_db.delete_account(sample_account.id)
        assert temp_db.get_account(sample_account.id) is None


class TestCategories:
    def test_list_by_parent(self, temp_db, sample_categories):
        food = sample_categories["Food & Dining"]
        children = temp_db.list_categories(parent_category_id=food.id)
        assert [c.name for c in children] == ["Groceries"]

    def test_delete_blocked_by_subcategory(self, temp_db, sample_categories):
        with pytest.raises(DependencyError, match="subcategory"):
            temp_db.delete_category(sample_categories["Food & Dining"].id)

    def test_delete_blocked_by_transactions(self, temp_db, sample_transactions, sample_categories):
        salary = sample_categories["Salary"]
        assert temp_db.get_category_transaction_count(salary.id) == 1
        with pytest.raises(DependencyError):
            temp_db.delete_category(salary.id)

    def test_delete_missing(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.delete_category(uuid4())


class TestTransactions:
    def test_round_trip(self, temp_db, sample_transactions):
        expense = sample_transactions["expense"]
        loaded = temp_db.get_transaction(expense.id)
        assert isinstance(loaded, entities.Transaction)
        assert loaded.amount == Money(Decimal("84.20"), Currency.USD)
        assert loaded.date == date(2024, 1, 12)
        assert loaded.category_id == expense.category_id

    def test_ordered_by_date(self, temp_db, sample_transactions, sample_user):
        listed = temp_db.list_transactions(user_id=sample_user.id)
        assert [t.description for t in listed] == ["January salary", "Weekly shop", "Monthly saving"]

    def test_date_filter_is_inclusive(self, temp_db, sample_transactions):
        listed = temp_db.list_transactions(start_date=date(2024, 1, 5), end_date=date(2024, 1, 12))
        assert len(listed) == 2

    def test_account_filter_matches_destination(self, temp_db, sample_transactions, savings_account):
        listed = temp_db.list_transactions(account_id=savings_account.id)
        assert [t.id for t in listed] == [sample_transactions["transfer"].id]

    def test_type_filter(self, temp_db, sample_transactions):
        listed = temp_db.list_transactions(transaction_type=entities.TransactionType.TRANSFER)
        assert len(listed) == 1

    def test_soft_deleted_hidden_by_default(self, temp_db, sample_transactions):
        income = sample_transactions["income"]
        income.delete()
        temp_db.save_transaction(income)

        assert income.id not in [t.id for t in temp_db.list_transactions()]
        assert income.id in [t.id for t in temp_db.list_transactions(include_deleted=True)]
        assert temp_db.get_transaction(income.id).is_deleted


class TestFactories:
    def test_in_memory_database(self):
        db = create_sqlite_database(":memory:")
        db.connect()
        db.initialize_schema()
        user = make_user()
        db.save_user(user)
        assert db.get_user(user.id) == user
        db.disconnect()

    def test_path_from_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "env.db"
        monkeypatch.setenv("FINTRACK_DB_PATH", str(path))
        db = create_sqlite_database()
        db.save_user(make_user())
        db.disconnect()
        assert path.exists()

    def test_database_from_url(self, monkeypatch):
        monkeypatch.setenv("FINTRACK_DB_URL", "sqlite://")
        db = create_database()
        assert db.database_url == "sqlite://"
        assert db.list_users() == []
        db.disconnect()
