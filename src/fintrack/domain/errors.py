"""Shared domain error messages and error types."""

from uuid import UUID


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Money amount is negative."""


class NonPositiveAmountError(ValidationError):
    """Transaction amount is zero."""


class InvalidIntervalError(ValidationError):
    """Recurrence interval is not a positive integer."""


class InvalidRangeError(ValidationError):
    """Range start falls after range end."""


class CurrencyMismatchError(DomainError):
    """Operation between two amounts of differing currencies."""


class NegativeResultError(DomainError):
    """Subtraction would produce a negative amount."""


class InsufficientFundsError(DomainError):
    """Withdrawal exceeds the balance of a non-credit account."""


class InvalidOperationError(DomainError):
    """State transition is not allowed from the entity's current state."""


class AlreadyActiveError(InvalidOperationError):
    pass


class AlreadyInactiveError(InvalidOperationError):
    pass


class AccountInactiveError(InvalidOperationError):
    pass


class AlreadyDeletedError(InvalidOperationError):
    pass


class NotDeletedError(InvalidOperationError):
    pass


class EmailAlreadyConfirmedError(InvalidOperationError):
    pass


class LoginNotAllowedError(InvalidOperationError):
    pass


class TransactionRuleError(ValidationError):
    """Transaction type and field combination is not allowed."""


class MissingCategoryError(TransactionRuleError):
    pass


class UnexpectedDestinationError(TransactionRuleError):
    pass


class UnexpectedCategoryError(TransactionRuleError):
    pass


class MissingDestinationError(TransactionRuleError):
    pass


class SameAccountTransferError(TransactionRuleError):
    pass


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def user_not_found(user_id: UUID | str) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def account_not_found(account_id: UUID | str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: UUID | str) -> str:
    """Return message for missing category."""
    return f"Category {category_id} not found"


def transaction_not_found(transaction_id: UUID) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def recurring_transaction_not_found(recurring_id: UUID) -> str:
    """Return message for missing recurring transaction."""
    return f"Recurring transaction {recurring_id} not found"


def duplicate_user_email(email: str) -> str:
    """Return message for an email that is already registered."""
    return f"User with email '{email}' already exists"


def delete_blocked(
    kind: str, entity_id: UUID, transaction_count: int, recurring_count: int
) -> str:
    """Return message when an account or category is still referenced."""
    parts = []
    if transaction_count > 0:
        parts.append(
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}"
        )
    if recurring_count > 0:
        parts.append(
            f"{recurring_count} recurring transaction{'s' if recurring_count != 1 else ''}"
        )
    return (
        f"Cannot delete {kind} {entity_id}: it has {', '.join(parts)}. "
        "Please reassign or delete them first."
    )
