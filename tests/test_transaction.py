"""Tests for transaction service and commands."""

import re
from datetime import date
from decimal import Decimal
from uuid import uuid4

import pytest

from fintrack.cli.main import cli
from fintrack.domain.date_range import DateRange
from fintrack.domain.entities import AccountType, TransactionType
from fintrack.domain.errors import (
    AlreadyDeletedError,
    CurrencyMismatchError,
    InvalidAmountError,
    NotDeletedError,
    NotFoundError,
    SameAccountTransferError,
    ValidationError,
)
from fintrack.domain.money import Currency, Money


def usd(amount) -> Money:
    return Money(Decimal(str(amount)), Currency.USD)


class TestTransactionService:
    def test_record_income(self, transaction_service, sample_user, sample_account, sample_categories):
        txn = transaction_service.record_income(
            sample_user.id, sample_account.id, sample_categories["Salary"].id,
            usd("100"), date(2024, 2, 1), "Bonus",
        )
        stored = transaction_service.get_transaction(txn.id)
        assert stored.is_income
        assert stored.amount == usd("100")

    def test_amount_round_trips_through_storage(
        self, transaction_service, temp_db, sample_user, sample_account, sample_categories
    ):
        txn = transaction_service.record_expense(
            sample_user.id, sample_account.id, sample_categories["Salary"].id,
            usd("10.05"), date(2024, 2, 1), "Lunch",
        )
        temp_db.disconnect()
        assert transaction_service.get_transaction(txn.id).amount == usd("10.05")

    def test_sub_cent_amount_never_reaches_storage(
        self, transaction_service, sample_user, sample_account, sample_categories
    ):
        with pytest.raises(InvalidAmountError):
            transaction_service.record_income(
                sample_user.id, sample_account.id, sample_categories["Salary"].id,
                usd("0.001"), date(2024, 2, 1), "Interest",
            )
        assert transaction_service.list_transactions(user_id=sample_user.id) == []

    def test_recording_leaves_balance_alone(
        self, transaction_service, account_service, sample_transactions, sample_account
    ):
        assert account_service.get_account(sample_account.id).balance.is_zero

    def test_currency_must_match_account(self, transaction_service, sample_user, sample_account, sample_categories):
        with pytest.raises(CurrencyMismatchError):
            transaction_service.record_expense(
                sample_user.id, sample_account.id, sample_categories["Salary"].id,
                Money(Decimal("5"), Currency.EUR), date(2024, 2, 1), "Coffee",
            )

    def test_transfer_between_currencies(self, transaction_service, account_service, sample_user, sample_account):
        euro = account_service.create_account(sample_user.id, "Euro", AccountType.SAVINGS, Currency.EUR)
        with pytest.raises(CurrencyMismatchError):
            transaction_service.record_transfer(
                sample_user.id, sample_account.id, euro.id, usd("5"), date(2024, 2, 1), "Move"
            )

    def test_transfer_to_same_account(self, transaction_service, sample_user, sample_account):
        with pytest.raises(SameAccountTransferError):
            transaction_service.record_transfer(
                sample_user.id, sample_account.id, sample_account.id, usd("5"), date(2024, 2, 1), "Move"
            )

    def test_missing_account(self, transaction_service, sample_user, sample_categories):
        with pytest.raises(NotFoundError):
            transaction_service.record_income(
                sample_user.id, uuid4(), sample_categories["Salary"].id, usd("1"), date(2024, 2, 1), "x"
            )

    def test_other_users_account(self, transaction_service, other_user, sample_account, sample_categories):
        with pytest.raises(ValidationError, match="another user"):
            transaction_service.record_transfer(
                other_user.id, sample_account.id, uuid4(), usd("1"), date(2024, 2, 1), "x"
            )

    def test_list_with_date_range(self, transaction_service, sample_user, sample_transactions):
        listed = transaction_service.list_transactions(
            user_id=sample_user.id,
            date_range=DateRange(date(2024, 1, 10), date(2024, 1, 31)),
        )
        assert [t.description for t in listed] == ["Weekly shop", "Monthly saving"]

    def test_list_by_type(self, transaction_service, sample_user, sample_transactions):
        listed = transaction_service.list_transactions(
            user_id=sample_user.id, transaction_type=TransactionType.INCOME
        )
        assert [t.id for t in listed] == [sample_transactions["income"].id]

    def test_soft_delete_and_restore(self, transaction_service, sample_transactions):
        expense = sample_transactions["expense"]
        transaction_service.delete_transaction(expense.id)
        with pytest.raises(AlreadyDeletedError):
            transaction_service.delete_transaction(expense.id)
        assert expense.id not in [t.id for t in transaction_service.list_transactions()]

        transaction_service.restore_transaction(expense.id)
        with pytest.raises(NotDeletedError):
            transaction_service.restore_transaction(expense.id)
        assert not transaction_service.get_transaction(expense.id).is_deleted

    def test_update_description(self, transaction_service, sample_transactions):
        income = sample_transactions["income"]
        transaction_service.update_description(income.id, "  Pay  ")
        assert transaction_service.get_transaction(income.id).description == "Pay"


class TestTransactionCommands:
    def invoke(self, cli_runner, temp_db, user, *args):
        return cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "transaction", *args, "--user", user.email]
        )

    def test_record_expense(self, cli_runner, temp_db, sample_user, sample_account, sample_categories):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "expense", "Checking", "42.10",
            "--category", "Food & Dining > Groceries", "-d", "Weekly shop", "--date", "2024-03-01",
        )
        assert result.exit_code == 0
        assert "Recorded expense of 42.10 USD on 'Checking'" in result.output

    def test_record_income_requires_category(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "income", "Checking", "10", "-d", "Pay")
        assert result.exit_code == 2
        assert "--category" in result.output

    def test_record_zero_amount(self, cli_runner, temp_db, sample_user, sample_account, sample_categories):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "income", "Checking", "0", "--category", "Salary", "-d", "Pay"
        )
        assert result.exit_code == 1
        assert "must be positive" in result.output

    def test_record_invalid_amount(self, cli_runner, temp_db, sample_user, sample_account, sample_categories):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "income", "Checking", "-5", "--category", "Salary", "-d", "Pay"
        )
        assert result.exit_code != 0

    def test_transfer(self, cli_runner, temp_db, sample_user, sample_account, savings_account):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "transfer", "Checking", "Savings", "500", "-d", "Saving"
        )
        assert result.exit_code == 0
        assert "from 'Checking' to 'Savings'" in result.output

    def test_list(self, cli_runner, temp_db, sample_user, sample_transactions):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "list", "--start-date", "2024-01-01", "--end-date", "2024-01-31"
        )
        assert result.exit_code == 0
        assert "Found 3 transaction(s) (2024-01-01 to 2024-01-31)" in result.output
        assert "Food & Dining > Groceries" in result.output
        assert "Checking -> Savings" in result.output
        assert "2,500.00 USD" in result.output

    def test_list_filters(self, cli_runner, temp_db, sample_user, sample_transactions):
        result = self.invoke(cli_runner, temp_db, sample_user, "list", "--account", "Savings")
        assert "Found 1 transaction(s)" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "list", "--type", "expense")
        assert "Weekly shop" in result.output
        assert "January salary" not in result.output

    def test_list_period_outside_data(self, cli_runner, temp_db, sample_user, sample_transactions):
        result = self.invoke(cli_runner, temp_db, sample_user, "list", "--period", "last-30-days")
        assert result.exit_code == 0
        assert "No transactions found" in result.output

    def test_list_period_with_dates(self, cli_runner, temp_db, sample_user):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "list", "--period", "this-year", "--start-date", "2024-01-01"
        )
        assert result.exit_code == 1
        assert "cannot be combined" in result.output

    def test_delete_restore_and_describe(self, cli_runner, temp_db, sample_user, sample_transactions):
        txn_id = str(sample_transactions["expense"].id)
        base = ["--db-path", temp_db.database_path, "transaction"]

        result = cli_runner.invoke(cli, [*base, "delete", txn_id, "--yes"])
        assert result.exit_code == 0
        assert f"Deleted transaction {txn_id}" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "list", "--include-deleted")
        assert "[deleted]" in result.output

        result = cli_runner.invoke(cli, [*base, "delete", txn_id, "--yes"])
        assert result.exit_code == 1
        assert "already deleted" in result.output

        result = cli_runner.invoke(cli, [*base, "restore", txn_id])
        assert result.exit_code == 0

        result = cli_runner.invoke(cli, [*base, "describe", txn_id, "Big shop"])
        assert result.exit_code == 0

        result = self.invoke(cli_runner, temp_db, sample_user, "list")
        assert "Big shop" in result.output

    def test_delete_unknown(self, cli_runner, temp_db):
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "transaction", "delete", str(uuid4()), "--yes"]
        )
        assert result.exit_code == 1
        assert re.search(r"Transaction [0-9a-f-]+ not found", result.output)
