"""Tests for account service and commands."""

from decimal import Decimal
from uuid import uuid4

import pytest

from fintrack.cli.main import cli
from fintrack.domain.entities import AccountType
from fintrack.domain.errors import (
    AccountInactiveError,
    ConflictError,
    CurrencyMismatchError,
    DependencyError,
    InsufficientFundsError,
    NotFoundError,
)
from fintrack.domain.money import Currency, Money


def usd(amount) -> Money:
    return Money(Decimal(str(amount)), Currency.USD)


class TestAccountService:
    def test_create(self, account_service, sample_user):
        account = account_service.create_account(
            sample_user.id, "Wallet", AccountType.CASH, Currency.EUR
        )
        stored = account_service.get_account(account.id)
        assert stored.balance == Money.zero(Currency.EUR)
        assert stored.account_type is AccountType.CASH

    def test_create_for_missing_user(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.create_account(uuid4(), "Wallet", AccountType.CASH, Currency.USD)

    def test_duplicate_name(self, account_service, sample_account):
        with pytest.raises(ConflictError, match="already exists"):
            account_service.create_account(
                sample_account.user_id, "Checking", AccountType.SAVINGS, Currency.USD
            )

    def test_same_name_for_other_user(self, account_service, sample_account, other_user):
        account_service.create_account(other_user.id, "Checking", AccountType.CHECKING, Currency.USD)

    def test_deposit_and_withdraw_persist(self, account_service, sample_account):
        account_service.deposit(sample_account.id, usd("100"))
        account_service.withdraw(sample_account.id, usd("30.25"))
        assert account_service.get_account(sample_account.id).balance == usd("69.75")

    def test_insufficient_funds_keeps_balance(self, account_service, sample_account):
        account_service.deposit(sample_account.id, usd("10"))
        with pytest.raises(InsufficientFundsError):
            account_service.withdraw(sample_account.id, usd("20"))
        assert account_service.get_account(sample_account.id).balance == usd("10")

    def test_credit_card_overdraft_persists(self, account_service, credit_card):
        account_service.withdraw(credit_card.id, usd("50"))
        assert account_service.get_account(credit_card.id).balance.amount == Decimal("-50")

    def test_currency_mismatch(self, account_service, sample_account):
        with pytest.raises(CurrencyMismatchError):
            account_service.deposit(sample_account.id, Money(Decimal("1"), Currency.EUR))

    def test_deactivated_account(self, account_service, sample_account):
        account_service.deactivate_account(sample_account.id)
        with pytest.raises(AccountInactiveError):
            account_service.deposit(sample_account.id, usd("1"))
        account_service.activate_account(sample_account.id)
        account_service.deposit(sample_account.id, usd("1"))

    def test_rename_conflict(self, account_service, sample_account, savings_account):
        with pytest.raises(ConflictError):
            account_service.rename_account(savings_account.id, "Checking")
        assert account_service.rename_account(savings_account.id, " Rainy Day ").name == "Rainy Day"

    def test_delete_with_transactions(self, account_service, sample_account, sample_transactions):
        with pytest.raises(DependencyError):
            account_service.delete_account(sample_account.id)


class TestAccountCommands:
    def invoke(self, cli_runner, temp_db, sample_user, *args, input=None):
        return cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", *args, "--user", sample_user.email],
            input=input,
        )

    def test_create(self, cli_runner, temp_db, sample_user):
        result = self.invoke(
            cli_runner, temp_db, sample_user, "create", "Visa", "--type", "creditcard", "--currency", "eur"
        )
        assert result.exit_code == 0
        assert "Created account 'Visa'" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "list")
        assert "Visa" in result.output
        assert "CreditCard" in result.output
        assert "0.00 EUR" in result.output

    def test_list_empty(self, cli_runner, temp_db, sample_user):
        result = self.invoke(cli_runner, temp_db, sample_user, "list")
        assert result.exit_code == 0
        assert "No accounts found" in result.output

    def test_create_duplicate(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "create", "Checking")
        assert result.exit_code == 1
        assert "already exists" in result.output.lower()

    def test_user_from_environment(self, cli_runner, temp_db, sample_user, monkeypatch):
        monkeypatch.setenv("FINTRACK_USER", sample_user.email)
        result = cli_runner.invoke(
            cli, ["--db-path", temp_db.database_path, "account", "create", "Savings"]
        )
        assert result.exit_code == 0

    def test_missing_user(self, cli_runner, temp_db):
        result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])
        assert result.exit_code == 2
        assert "--user" in result.output

    def test_deposit_withdraw_and_show(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "deposit", "Checking", "1,000")
        assert result.exit_code == 0
        assert "New balance: 1,000.00 USD" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "withdraw", "Checking", "$250.50")
        assert result.exit_code == 0
        assert "New balance: 749.50 USD" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "show", str(sample_account.id))
        assert "Balance:  749.50 USD" in result.output

    def test_withdraw_insufficient(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "withdraw", "Checking", "5")
        assert result.exit_code == 1
        assert "Insufficient funds" in result.output

    def test_rename(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "rename", "Checking", "Main")
        assert result.exit_code == 0
        assert "Renamed account to 'Main'" in result.output

    def test_deactivate_twice(self, cli_runner, temp_db, sample_user, sample_account):
        assert self.invoke(cli_runner, temp_db, sample_user, "deactivate", "Checking").exit_code == 0
        result = self.invoke(cli_runner, temp_db, sample_user, "deactivate", "Checking")
        assert result.exit_code == 1
        assert "already deactivated" in result.output

    def test_delete_confirmation(self, cli_runner, temp_db, sample_user, sample_account):
        result = self.invoke(cli_runner, temp_db, sample_user, "delete", "Checking", input="n\n")
        assert "Deletion cancelled" in result.output

        result = self.invoke(cli_runner, temp_db, sample_user, "delete", "Checking", input="y\n")
        assert result.exit_code == 0
        assert "Deleted account 'Checking'" in result.output

    def test_delete_blocked(self, cli_runner, temp_db, sample_user, sample_transactions):
        result = self.invoke(cli_runner, temp_db, sample_user, "delete", "Checking", "--yes")
        assert result.exit_code == 1
        assert "transactions" in result.output

    def test_other_users_account_by_id(self, cli_runner, temp_db, other_user, sample_account):
        result = cli_runner.invoke(
            cli,
            ["--db-path", temp_db.database_path, "account", "show", str(sample_account.id),
             "--user", other_user.email],
        )
        assert result.exit_code == 1
        assert "belongs to another user" in result.output
