"""CLI helpers that resolve references or exit with a CLI error."""

from __future__ import annotations

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Account, Category, User
from fintrack.domain.money import Currency, Money
from fintrack.domain.user import UserService
from fintrack.utils.amount_parser import parse_money
from fintrack.utils.date_parser import parse_date
from fintrack.utils.resolvers import resolve_account, resolve_category, resolve_user

USER_OPTION_HELP = "User email or ID (or set FINTRACK_USER)"


def user_option(func):
    """Add the --user option shared by all user-scoped commands."""
    return click.option(
        "--user", "user_ref", required=True, envvar="FINTRACK_USER", help=USER_OPTION_HELP
    )(func)


def user_or_exit(ctx: click.Context, user: str) -> User:
    try:
        return resolve_user(UserService(ctx.obj["db"]), user)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def account_or_exit(ctx: click.Context, user: User, account: str) -> Account:
    """Resolve account name or ID owned by the user, or exit."""
    try:
        found = resolve_account(AccountService(ctx.obj["db"]), user.id, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
    if found.user_id != user.id:
        handle_domain_error(ctx, ValueError(f"Account '{account}' belongs to another user"))
    return found


def category_or_exit(ctx: click.Context, user: User, category: str) -> Category:
    """Resolve category path or ID owned by the user, or exit."""
    try:
        found = resolve_category(CategoryService(ctx.obj["db"]), user.id, category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
    if found.user_id != user.id:
        handle_domain_error(ctx, ValueError(f"Category '{category}' belongs to another user"))
    return found


def money_or_exit(ctx: click.Context, amount: str, currency: Currency | None) -> Money:
    try:
        return parse_money(amount, currency)
    except ValueError as exc:
        click.echo(f"Error: Invalid amount: {exc}", err=True)
        ctx.exit(1)


def date_or_exit(ctx: click.Context, value: str):
    try:
        return parse_date(value)
    except ValueError as exc:
        click.echo(f"Error: Invalid date: {exc}", err=True)
        ctx.exit(1)
