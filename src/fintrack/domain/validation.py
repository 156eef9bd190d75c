"""Pure validation helpers shared by the domain entities."""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from fintrack.domain.errors import ValidationError

NIL_UUID = UUID(int=0)


def require_id(value: UUID, label: str) -> UUID:
    """Ensure an identifier is a non-nil UUID.

    Args:
        value: Identifier to check
        label: Human readable field name used in the error message

    Returns:
        The identifier

    Raises:
        ValidationError: If the identifier is missing, not a UUID or nil
    """
    if not isinstance(value, UUID) or value == NIL_UUID:
        raise ValidationError(f"{label} cannot be empty.")
    return value


def optional_id(value: Optional[UUID], label: str) -> Optional[UUID]:
    """Like require_id, but None is allowed."""
    if value is None:
        return None
    return require_id(value, label)


def require_text(
    value: str, label: str, max_length: int, min_length: int = 1
) -> str:
    """Validate a required text field and return it trimmed.

    Length limits apply to the value as given, before trimming.

    Raises:
        ValidationError: If the value is blank or violates the length limits
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} cannot be empty.")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters.")
    if len(value) < min_length:
        raise ValidationError(f"{label} must be at least {min_length} characters.")
    return value.strip()


def optional_text(value: Optional[str], label: str, max_length: int) -> Optional[str]:
    """Validate an optional text field; blank values become None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text.")
    if len(value) > max_length:
        raise ValidationError(f"{label} cannot exceed {max_length} characters.")
    return value.strip() or None


def as_date(value: date | datetime) -> date:
    """Truncate a datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ValidationError(f"Expected a date, got {type(value).__name__}.")
