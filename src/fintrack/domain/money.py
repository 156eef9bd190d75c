"""Currency-tagged monetary amounts."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from fintrack.domain.errors import (
    CurrencyMismatchError,
    InvalidAmountError,
    NegativeResultError,
    ValidationError,
)


class Currency(str, Enum):
    """ISO 4217 currency codes supported by the tracker."""

    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"
    CHF = "CHF"
    CNY = "CNY"
    INR = "INR"
    SEK = "SEK"


# Matches the scale of the amount columns in storage
MONEY_PLACES = 2


def _to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, bool):
        raise ValidationError(f"Invalid amount: {amount!r}")
    try:
        # str() keeps floats like 100.5 from picking up binary noise
        return Decimal(str(amount))
    except (InvalidOperation, ValueError) as e:
        raise ValidationError(f"Invalid amount: {amount!r}") from e


def has_cent_precision(amount: Decimal) -> bool:
    """True if amount survives storage with MONEY_PLACES fraction digits."""
    # 10.50 and 10.500 pass, 10.005 does not
    return amount.normalize().as_tuple().exponent >= -MONEY_PLACES


def _to_currency(currency) -> Currency:
    if isinstance(currency, Currency):
        return currency
    try:
        return Currency(str(currency).upper())
    except ValueError as e:
        raise ValidationError(f"Unsupported currency: {currency!r}") from e


@dataclass(frozen=True)
class Money:
    """Immutable non-negative amount in a single currency.

    Arithmetic and ordering are only defined between amounts of the same
    currency. Every operation returns a new instance.
    """

    amount: Decimal
    currency: Currency

    def __post_init__(self):
        amount = _to_decimal(self.amount)
        if not amount.is_finite():
            raise ValidationError(f"Invalid amount: {self.amount!r}")
        if amount < 0:
            raise InvalidAmountError("Amount cannot be negative.")
        if not has_cent_precision(amount):
            raise InvalidAmountError(
                f"Amount cannot have more than {MONEY_PLACES} decimal places."
            )
        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", _to_currency(self.currency))

    @classmethod
    def zero(cls, currency: Currency) -> "Money":
        """Return the additive identity for a currency."""
        return cls(Decimal("0"), currency)

    @classmethod
    def signed(cls, amount, currency: Currency) -> "Money":
        """Build an amount that may be negative.

        Only credit-card balances hold negative amounts; storage uses this
        to reload them. Everything else goes through the constructor.
        """
        money = object.__new__(cls)
        object.__setattr__(money, "amount", _to_decimal(amount))
        object.__setattr__(money, "currency", _to_currency(currency))
        return money

    @property
    def is_zero(self) -> bool:
        return self.amount == 0

    @property
    def is_negative(self) -> bool:
        return self.amount < 0

    def _check_currency(self, other: "Money", action: str) -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Cannot {action} Money and {type(other).__name__}")
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot {action} money with different currencies: "
                f"{self.currency.value} and {other.currency.value}"
            )

    def add(self, other: "Money") -> "Money":
        """Return the sum of two amounts in the same currency."""
        self._check_currency(other, "add")
        # A negative credit balance plus a deposit may still be negative.
        return Money.signed(self.amount + other.amount, self.currency)

    def subtract(self, other: "Money") -> "Money":
        """Return the difference of two amounts in the same currency.

        Raises:
            CurrencyMismatchError: If the currencies differ
            NegativeResultError: If other is larger than self
        """
        self._check_currency(other, "subtract")
        if self.amount < other.amount:
            raise NegativeResultError("Resulting amount cannot be negative.")
        return Money(self.amount - other.amount, self.currency)

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount < other.amount

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount > other.amount

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount <= other.amount

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other, "compare")
        return self.amount >= other.amount

    def __str__(self) -> str:
        return f"{self.amount:,.2f} {self.currency.value}"
