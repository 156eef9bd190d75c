"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from fintrack.domain.money import MONEY_PLACES, Currency, Money, has_cent_precision

_SYMBOLS = {"$": Currency.USD, "€": Currency.EUR, "£": Currency.GBP, "¥": Currency.JPY}


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a non-negative Decimal.

    Handles "123.45", "$123.45" and "1,234.56". Signs are rejected:
    the transaction type, not the sign, says which way money moves.

    Raises:
        ValueError: If amount string cannot be parsed, is negative or has
            fractions of a cent
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = re.sub(r"[$€£¥,\s]", "", amount_str)
    if cleaned.startswith("-") or (cleaned.startswith("(") and cleaned.endswith(")")):
        raise ValueError(f"Amount must not be negative: '{amount_str}'")

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    if not has_cent_precision(amount):
        raise ValueError(
            f"Amount '{amount_str}' has more than {MONEY_PLACES} decimal places"
        )
    return amount


def parse_money(amount_str: str, currency: Currency | str | None = None) -> Money:
    """Parse an amount into Money.

    The currency comes from the argument, else from a leading symbol
    ("£12.50"), else defaults to USD.
    """
    if currency is None:
        stripped = amount_str.strip()
        currency = _SYMBOLS.get(stripped[:1], Currency.USD)
    return Money(parse_amount(amount_str), currency)
