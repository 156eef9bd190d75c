"""Domain model entities for fintrack.

Entities are plain dataclasses. The dataclass constructor is the
rehydration path used by storage and performs no business validation;
new records are built through the ``create*`` classmethods, and state only
changes through the entity's own methods. Each method validates everything
before assigning anything, so a failed call leaves the entity untouched.
"""

import re
from dataclasses import dataclass
from datetime import datetime, date, UTC
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from fintrack.domain.errors import (
    AccountInactiveError,
    AlreadyActiveError,
    AlreadyDeletedError,
    AlreadyInactiveError,
    CurrencyMismatchError,
    EmailAlreadyConfirmedError,
    InsufficientFundsError,
    InvalidOperationError,
    InvalidRangeError,
    LoginNotAllowedError,
    MissingCategoryError,
    MissingDestinationError,
    NonPositiveAmountError,
    NotDeletedError,
    SameAccountTransferError,
    UnexpectedCategoryError,
    UnexpectedDestinationError,
    ValidationError,
)
from fintrack.domain.money import Currency, Money
from fintrack.domain.recurrence import RecurrencePeriod
from fintrack.domain.validation import (
    as_date,
    optional_id,
    optional_text,
    require_id,
    require_text,
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", re.IGNORECASE)
COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
MIN_PASSWORD_HASH_LENGTH = 32


class AccountType(str, Enum):
    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "CreditCard"
    CASH = "Cash"
    INVESTMENT = "Investment"


class TransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"
    TRANSFER = "Transfer"


class RecurringTransactionType(str, Enum):
    INCOME = "Income"
    EXPENSE = "Expense"


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _new_id(value: Optional[UUID], label: str) -> UUID:
    if value is None:
        return uuid4()
    return require_id(value, label)


def _enum_value(enum_cls, value, label: str):
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {label}: {value!r}") from e


def _require_money(value, label: str) -> Money:
    if not isinstance(value, Money):
        raise ValidationError(f"{label} cannot be null.")
    return value


def validate_email(email: str) -> str:
    """Validate an email address and return it trimmed and lowercased."""
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email cannot be empty.")
    if len(email) > 255:
        raise ValidationError("Email cannot exceed 255 characters.")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Email format is invalid.")
    return email.strip().lower()


def validate_password_hash(password_hash: str) -> str:
    if not isinstance(password_hash, str) or not password_hash.strip():
        raise ValidationError("Password hash cannot be empty.")
    if len(password_hash) < MIN_PASSWORD_HASH_LENGTH:
        raise ValidationError("Password hash appears to be invalid (too short).")
    return password_hash


def validate_color(color: Optional[str]) -> Optional[str]:
    """Validate a #RGB or #RRGGBB color code; blank means no color."""
    if color is None:
        return None
    if not isinstance(color, str):
        raise ValidationError("Color must be text.")
    if not color.strip():
        return None
    color = color.strip()
    if not COLOR_PATTERN.match(color):
        raise ValidationError(
            "Color must be a valid hex color code (e.g., #FF5733 or #F73)."
        )
    return color


@dataclass
class User:
    """Registered user of the tracker."""

    id: UUID
    email: str
    password_hash: str
    first_name: str
    last_name: str
    created_at: datetime
    is_active: bool = True
    email_confirmed: bool = False
    updated_at: Optional[datetime] = None
    last_login_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        *,
        user_id: Optional[UUID] = None,
    ) -> "User":
        user_id = _new_id(user_id, "User id")
        email = validate_email(email)
        password_hash = validate_password_hash(password_hash)
        first_name = require_text(first_name, "First name", max_length=100, min_length=2)
        last_name = require_text(last_name, "Last name", max_length=100, min_length=2)
        return cls(
            id=user_id,
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            created_at=_utcnow(),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def update_password(self, new_password_hash: str) -> None:
        self.password_hash = validate_password_hash(new_password_hash)
        self.updated_at = _utcnow()

    def update_name(self, first_name: str, last_name: str) -> None:
        first = require_text(first_name, "First name", max_length=100, min_length=2)
        last = require_text(last_name, "Last name", max_length=100, min_length=2)
        self.first_name = first
        self.last_name = last
        self.updated_at = _utcnow()

    def confirm_email(self) -> None:
        if self.email_confirmed:
            raise EmailAlreadyConfirmedError("Email is already confirmed.")
        self.email_confirmed = True
        self.updated_at = _utcnow()

    def record_login(self) -> None:
        """Stamp the last login time.

        Raises:
            LoginNotAllowedError: If the user is inactive or unconfirmed
        """
        if not self.is_active:
            raise LoginNotAllowedError("Cannot record login for an inactive user.")
        if not self.email_confirmed:
            raise LoginNotAllowedError(
                "Cannot record login for a user with unconfirmed email."
            )
        now = _utcnow()
        self.last_login_at = now
        self.updated_at = now


@dataclass
class Account:
    """Money-holding account owned by a user.

    The balance currency is fixed when the account is created. Only
    credit card balances may go below zero.
    """

    id: UUID
    name: str
    account_type: AccountType
    balance: Money
    user_id: UUID
    created_at: datetime
    is_active: bool = True
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        account_type: AccountType,
        currency: Currency,
        user_id: UUID,
        *,
        account_id: Optional[UUID] = None,
    ) -> "Account":
        account_id = _new_id(account_id, "Account id")
        name = require_text(name, "Account name", max_length=100)
        require_id(user_id, "User id")
        return cls(
            id=account_id,
            name=name,
            account_type=_enum_value(AccountType, account_type, "account type"),
            balance=Money.zero(currency),
            user_id=user_id,
            created_at=_utcnow(),
        )

    @property
    def currency(self) -> Currency:
        return self.balance.currency

    @property
    def is_credit_card(self) -> bool:
        return self.account_type is AccountType.CREDIT_CARD

    def _check_can_move(self, amount: Money, action: str, preposition: str) -> None:
        _require_money(amount, "Amount")
        if not self.is_active:
            raise AccountInactiveError(
                f"Cannot {action} {preposition} an inactive account."
            )
        if amount.currency != self.balance.currency:
            raise CurrencyMismatchError(
                f"Cannot {action} {amount.currency.value} {preposition} an account "
                f"with {self.balance.currency.value} currency."
            )

    def deposit(self, amount: Money) -> None:
        self._check_can_move(amount, "deposit", "to")
        self.balance = self.balance.add(amount)
        self.updated_at = _utcnow()

    def withdraw(self, amount: Money) -> None:
        """Take money out of the account.

        Credit cards are debited unconditionally and may end up with a
        negative balance. Every other account type needs enough funds.

        Raises:
            AccountInactiveError: If the account is deactivated
            CurrencyMismatchError: If amount is in another currency
            InsufficientFundsError: If a non-credit balance is too low
        """
        self._check_can_move(amount, "withdraw", "from")
        if self.is_credit_card:
            self.balance = Money.signed(
                self.balance.amount - amount.amount, self.balance.currency
            )
        else:
            if self.balance < amount:
                raise InsufficientFundsError(
                    f"Insufficient funds. Current balance: {self.balance}, "
                    f"Withdrawal amount: {amount}"
                )
            self.balance = self.balance.subtract(amount)
        self.updated_at = _utcnow()

    def update_name(self, new_name: str) -> None:
        self.name = require_text(new_name, "Account name", max_length=100)
        self.updated_at = _utcnow()

    def activate(self) -> None:
        if self.is_active:
            raise AlreadyActiveError("Account is already active.")
        self.is_active = True
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        if not self.is_active:
            raise AlreadyInactiveError("Account is already deactivated.")
        self.is_active = False
        self.updated_at = _utcnow()


@dataclass
class Category:
    """Category with an optional parent for hierarchical grouping."""

    id: UUID
    name: str
    user_id: UUID
    created_at: datetime
    description: Optional[str] = None
    parent_category_id: Optional[UUID] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        user_id: UUID,
        description: Optional[str] = None,
        parent_category_id: Optional[UUID] = None,
        icon: Optional[str] = None,
        color: Optional[str] = None,
        *,
        category_id: Optional[UUID] = None,
    ) -> "Category":
        category_id = _new_id(category_id, "Category id")
        require_id(user_id, "User id")
        name = _validate_category_name(name)
        description = optional_text(description, "Category description", max_length=500)
        color = validate_color(color)
        parent_category_id = optional_id(parent_category_id, "Parent category id")
        if parent_category_id == category_id:
            raise ValidationError("Category cannot be its own parent.")
        return cls(
            id=category_id,
            name=name,
            user_id=user_id,
            created_at=_utcnow(),
            description=description,
            parent_category_id=parent_category_id,
            icon=_clean_icon(icon),
            color=color,
        )

    @property
    def is_subcategory(self) -> bool:
        return self.parent_category_id is not None

    def update_name(self, new_name: str) -> None:
        self.name = _validate_category_name(new_name)
        self.updated_at = _utcnow()

    def update_description(self, new_description: Optional[str]) -> None:
        self.description = optional_text(
            new_description, "Category description", max_length=500
        )
        self.updated_at = _utcnow()

    def set_parent_category(self, parent_category_id: Optional[UUID]) -> None:
        parent_category_id = optional_id(parent_category_id, "Parent category id")
        if parent_category_id == self.id:
            raise ValidationError("Category cannot be its own parent.")
        self.parent_category_id = parent_category_id
        self.updated_at = _utcnow()

    def update_icon(self, new_icon: Optional[str]) -> None:
        self.icon = _clean_icon(new_icon)
        self.updated_at = _utcnow()

    def update_color(self, new_color: Optional[str]) -> None:
        self.color = validate_color(new_color)
        self.updated_at = _utcnow()

    def update_appearance(self, new_icon: Optional[str], new_color: Optional[str]) -> None:
        color = validate_color(new_color)
        self.icon = _clean_icon(new_icon)
        self.color = color
        self.updated_at = _utcnow()

    def activate(self) -> None:
        if self.is_active:
            raise AlreadyActiveError("Category is already active.")
        self.is_active = True
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        if not self.is_active:
            raise AlreadyInactiveError("Category is already deactivated.")
        self.is_active = False
        self.updated_at = _utcnow()


def _validate_category_name(name: str) -> str:
    return require_text(name, "Category name", max_length=100, min_length=2)


def _clean_icon(icon: Optional[str]) -> Optional[str]:
    if icon is None:
        return None
    if not isinstance(icon, str):
        raise ValidationError("Icon must be text.")
    return icon.strip() or None


def _validate_description(description: str) -> str:
    return require_text(description, "Transaction description", max_length=500)


def validate_transaction_rules(
    transaction_type: TransactionType,
    amount: Money,
    account_id: UUID,
    category_id: Optional[UUID],
    to_account_id: Optional[UUID],
) -> None:
    """Check which optional fields are legal for a transaction type.

    Income and expense need a category and no destination account.
    Transfers need a destination other than the source and no category.
    The amount must be positive for every type.

    Raises:
        NonPositiveAmountError: If the amount is zero
        TransactionRuleError: If the field combination is not allowed
    """
    _require_money(amount, "Transaction amount")
    if amount.amount <= 0:
        raise NonPositiveAmountError("Transaction amount must be positive.")

    if transaction_type in (TransactionType.INCOME, TransactionType.EXPENSE):
        if category_id is None:
            raise MissingCategoryError(
                f"{transaction_type.value} transactions must have a category."
            )
        if to_account_id is not None:
            raise UnexpectedDestinationError(
                f"{transaction_type.value} transactions cannot have a destination account."
            )
    elif transaction_type is TransactionType.TRANSFER:
        if category_id is not None:
            raise UnexpectedCategoryError("Transfer transactions cannot have a category.")
        if to_account_id is None:
            raise MissingDestinationError(
                "Transfer transactions must have a destination account."
            )
        if to_account_id == account_id:
            raise SameAccountTransferError("Cannot transfer to the same account.")
    else:
        raise ValidationError(f"Invalid transaction type: {transaction_type!r}")


@dataclass
class Transaction:
    """Income, expense or transfer between two accounts.

    Transactions are never removed; ``delete`` only flags them.
    """

    id: UUID
    transaction_type: TransactionType
    amount: Money
    date: date
    description: str
    account_id: UUID
    user_id: UUID
    created_at: datetime
    category_id: Optional[UUID] = None
    to_account_id: Optional[UUID] = None
    updated_at: Optional[datetime] = None
    is_deleted: bool = False
    deleted_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        transaction_type: TransactionType,
        amount: Money,
        date: date | datetime,
        description: str,
        account_id: UUID,
        user_id: UUID,
        category_id: Optional[UUID] = None,
        to_account_id: Optional[UUID] = None,
        *,
        transaction_id: Optional[UUID] = None,
    ) -> "Transaction":
        transaction_id = _new_id(transaction_id, "Transaction id")
        require_id(account_id, "Account id")
        require_id(user_id, "User id")
        optional_id(category_id, "Category id")
        optional_id(to_account_id, "Destination account id")
        transaction_type = _enum_value(TransactionType, transaction_type, "transaction type")
        txn_date = as_date(date)
        description = _validate_description(description)
        validate_transaction_rules(
            transaction_type, amount, account_id, category_id, to_account_id
        )
        return cls(
            id=transaction_id,
            transaction_type=transaction_type,
            amount=amount,
            date=txn_date,
            description=description,
            account_id=account_id,
            user_id=user_id,
            created_at=_utcnow(),
            category_id=category_id,
            to_account_id=to_account_id,
        )

    @classmethod
    def create_income(
        cls,
        amount: Money,
        date: date | datetime,
        description: str,
        account_id: UUID,
        user_id: UUID,
        category_id: UUID,
    ) -> "Transaction":
        return cls.create(
            TransactionType.INCOME, amount, date, description, account_id, user_id,
            category_id=category_id,
        )

    @classmethod
    def create_expense(
        cls,
        amount: Money,
        date: date | datetime,
        description: str,
        account_id: UUID,
        user_id: UUID,
        category_id: UUID,
    ) -> "Transaction":
        return cls.create(
            TransactionType.EXPENSE, amount, date, description, account_id, user_id,
            category_id=category_id,
        )

    @classmethod
    def create_transfer(
        cls,
        amount: Money,
        date: date | datetime,
        description: str,
        from_account_id: UUID,
        to_account_id: UUID,
        user_id: UUID,
    ) -> "Transaction":
        return cls.create(
            TransactionType.TRANSFER, amount, date, description, from_account_id, user_id,
            to_account_id=to_account_id,
        )

    @property
    def is_income(self) -> bool:
        return self.transaction_type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type is TransactionType.EXPENSE

    @property
    def is_transfer(self) -> bool:
        return self.transaction_type is TransactionType.TRANSFER

    def update_description(self, new_description: str) -> None:
        self.description = _validate_description(new_description)
        self.updated_at = _utcnow()

    def delete(self) -> None:
        if self.is_deleted:
            raise AlreadyDeletedError("Transaction is already deleted.")
        now = _utcnow()
        self.is_deleted = True
        self.deleted_at = now
        self.updated_at = now

    def restore(self) -> None:
        if not self.is_deleted:
            raise NotDeletedError("Transaction is not deleted.")
        self.is_deleted = False
        self.deleted_at = None
        self.updated_at = _utcnow()


def _validate_recurring_amount(amount: Money) -> Money:
    _require_money(amount, "Amount")
    if amount.amount <= 0:
        raise NonPositiveAmountError("Recurring transaction amount must be positive.")
    return amount


def _validate_recurring_description(description: str) -> str:
    return require_text(description, "Recurring transaction description", max_length=500)


def _require_period(period: RecurrencePeriod) -> RecurrencePeriod:
    if not isinstance(period, RecurrencePeriod):
        raise ValidationError("Recurrence period cannot be null.")
    return period


@dataclass
class RecurringTransaction:
    """Template for an income or expense that repeats on a schedule.

    The template only computes occurrence dates; turning an occurrence into
    a stored transaction is left to the caller.
    """

    id: UUID
    transaction_type: RecurringTransactionType
    amount: Money
    description: str
    account_id: UUID
    category_id: UUID
    user_id: UUID
    start_date: date
    recurrence_period: RecurrencePeriod
    created_at: datetime
    is_active: bool = True
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        transaction_type: RecurringTransactionType,
        amount: Money,
        description: str,
        account_id: UUID,
        category_id: UUID,
        user_id: UUID,
        start_date: date | datetime,
        recurrence_period: RecurrencePeriod,
        *,
        recurring_id: Optional[UUID] = None,
    ) -> "RecurringTransaction":
        recurring_id = _new_id(recurring_id, "Recurring transaction id")
        require_id(account_id, "Account id")
        require_id(category_id, "Category id")
        require_id(user_id, "User id")
        transaction_type = _enum_value(
            RecurringTransactionType, transaction_type, "recurring transaction type"
        )
        amount = _validate_recurring_amount(amount)
        description = _validate_recurring_description(description)
        recurrence_period = _require_period(recurrence_period)
        return cls(
            id=recurring_id,
            transaction_type=transaction_type,
            amount=amount,
            description=description,
            account_id=account_id,
            category_id=category_id,
            user_id=user_id,
            start_date=as_date(start_date),
            recurrence_period=recurrence_period,
            created_at=_utcnow(),
        )

    @classmethod
    def create_income(
        cls,
        amount: Money,
        description: str,
        account_id: UUID,
        category_id: UUID,
        user_id: UUID,
        start_date: date | datetime,
        recurrence_period: RecurrencePeriod,
    ) -> "RecurringTransaction":
        return cls.create(
            RecurringTransactionType.INCOME, amount, description, account_id,
            category_id, user_id, start_date, recurrence_period,
        )

    @classmethod
    def create_expense(
        cls,
        amount: Money,
        description: str,
        account_id: UUID,
        category_id: UUID,
        user_id: UUID,
        start_date: date | datetime,
        recurrence_period: RecurrencePeriod,
    ) -> "RecurringTransaction":
        return cls.create(
            RecurringTransactionType.EXPENSE, amount, description, account_id,
            category_id, user_id, start_date, recurrence_period,
        )

    @property
    def is_income(self) -> bool:
        return self.transaction_type is RecurringTransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.transaction_type is RecurringTransactionType.EXPENSE

    def update_description(self, new_description: str) -> None:
        self.description = _validate_recurring_description(new_description)
        self.updated_at = _utcnow()

    def update_amount(self, new_amount: Money) -> None:
        self.amount = _validate_recurring_amount(new_amount)
        self.updated_at = _utcnow()

    def update_recurrence_period(self, new_period: RecurrencePeriod) -> None:
        self.recurrence_period = _require_period(new_period)
        self.updated_at = _utcnow()

    def update_start_date(self, new_start_date: date | datetime) -> None:
        self.start_date = as_date(new_start_date)
        self.updated_at = _utcnow()

    def update_category(self, new_category_id: UUID) -> None:
        self.category_id = require_id(new_category_id, "Category id")
        self.updated_at = _utcnow()

    def activate(self) -> None:
        if self.is_active:
            raise AlreadyActiveError("Recurring transaction is already active.")
        self.is_active = True
        self.updated_at = _utcnow()

    def deactivate(self) -> None:
        if not self.is_active:
            raise AlreadyInactiveError("Recurring transaction is already deactivated.")
        self.is_active = False
        self.updated_at = _utcnow()

    def calculate_next_occurrence(self, from_date: date | datetime) -> date:
        """Return the occurrence after from_date, or start_date if earlier."""
        from_day = as_date(from_date)
        if from_day < self.start_date:
            return self.start_date
        return self.recurrence_period.calculate_next_occurrence(from_day)

    def get_occurrences_between(
        self,
        range_start: date | datetime,
        range_end: date | datetime,
        limit: Optional[int] = None,
    ) -> list[date]:
        """List occurrence dates falling inside [range_start, range_end].

        The walk always begins at start_date, so the cadence stays anchored
        there even when range_start is later. Occurrences are returned in
        increasing order.

        Args:
            range_start: First date of the window (inclusive)
            range_end: Last date of the window (inclusive)
            limit: Optional maximum number of occurrences to collect

        Raises:
            InvalidRangeError: If range_start is after range_end
        """
        start = as_date(range_start)
        end = as_date(range_end)
        if start > end:
            raise InvalidRangeError("Start date must be before or equal to end date.")
        if limit is not None and limit <= 0:
            raise ValidationError("Occurrence limit must be positive.")

        occurrences: list[date] = []
        current = self.start_date
        while current <= end:
            if current >= start:
                occurrences.append(current)
                if limit is not None and len(occurrences) >= limit:
                    break
            current = self.recurrence_period.calculate_next_occurrence(current)
        return occurrences

    def build_transaction(self, occurrence_date: date | datetime) -> Transaction:
        """Build (but do not store) the transaction for one occurrence.

        Raises:
            InvalidOperationError: If the template is deactivated
        """
        if not self.is_active:
            raise InvalidOperationError(
                "Cannot generate a transaction from an inactive recurring transaction."
            )
        return Transaction.create(
            TransactionType(self.transaction_type.value),
            self.amount,
            occurrence_date,
            self.description,
            self.account_id,
            self.user_id,
            category_id=self.category_id,
        )
