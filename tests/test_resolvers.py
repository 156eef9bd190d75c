"""Tests for user, account and category resolution."""

import pytest

from fintrack.domain.errors import NotFoundError
from fintrack.utils.resolvers import resolve_account, resolve_category, resolve_user


def test_resolve_user_by_email_or_id(user_service, sample_user):
    assert resolve_user(user_service, "JANE@example.com").id == sample_user.id
    assert resolve_user(user_service, str(sample_user.id)).id == sample_user.id


def test_resolve_user_missing(user_service):
    with pytest.raises(NotFoundError):
        resolve_user(user_service, "nobody@example.com")


def test_resolve_account_by_name_or_id(account_service, sample_user, sample_account):
    assert resolve_account(account_service, sample_user.id, "Checking").id == sample_account.id
    assert resolve_account(account_service, sample_user.id, str(sample_account.id)).id == sample_account.id


def test_resolve_account_is_scoped_to_user(account_service, other_user, sample_account):
    with pytest.raises(NotFoundError, match="Account 'Checking' not found"):
        resolve_account(account_service, other_user.id, "Checking")


def test_resolve_category_by_path(category_service, sample_user, sample_categories):
    groceries = sample_categories["Food & Dining > Groceries"]
    assert resolve_category(category_service, sample_user.id, "Food & Dining>Groceries").id == groceries.id
    assert resolve_category(category_service, sample_user.id, "Groceries").id == groceries.id
    assert resolve_category(category_service, sample_user.id, str(groceries.id)).id == groceries.id


def test_resolve_category_missing(category_service, sample_user, sample_categories):
    with pytest.raises(NotFoundError):
        resolve_category(category_service, sample_user.id, "Travel")
