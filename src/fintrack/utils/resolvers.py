"""Resolve CLI references (UUID, email, name or path) to entities."""

from uuid import UUID

from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Account, Category, User
from fintrack.domain.errors import NotFoundError
from fintrack.domain.user import UserService


def _as_uuid(value: str) -> UUID | None:
    try:
        return UUID(value)
    except ValueError:
        return None


def resolve_user(user_service: UserService, user: str) -> User:
    """Resolve a user ID or email address.

    Raises:
        NotFoundError: If no user matches
    """
    user_id = _as_uuid(user)
    found = user_service.get_user(user_id) if user_id else user_service.get_user_by_email(user)
    if found is None:
        raise NotFoundError(f"User '{user}' not found")
    return found


def resolve_account(account_service: AccountService, user_id: UUID, account: str) -> Account:
    """Resolve an account ID or one of the user's account names.

    Raises:
        NotFoundError: If no account matches
    """
    account_id = _as_uuid(account)
    if account_id is not None:
        found = account_service.get_account(account_id)
        if found is not None:
            return found
        raise NotFoundError(f"Account ID {account_id} not found")

    for acc in account_service.list_accounts(user_id=user_id):
        if acc.name == account:
            return acc

    raise NotFoundError(f"Account '{account}' not found")


def resolve_category(category_service: CategoryService, user_id: UUID, category: str) -> Category:
    """Resolve a category ID, name or path such as "Food > Groceries".

    Raises:
        NotFoundError: If no category matches
    """
    category_id = _as_uuid(category)
    if category_id is not None:
        found = category_service.get_category(category_id)
        if found is not None:
            return found
        raise NotFoundError(f"Category ID {category_id} not found")

    target = " > ".join(part.strip() for part in category.split(">"))
    for cat in category_service.list_categories(user_id=user_id):
        if cat.name == target or category_service.format_category_path(cat.id) == target:
            return cat

    raise NotFoundError(f"Category '{category}' not found")
