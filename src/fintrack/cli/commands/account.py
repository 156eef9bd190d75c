"""Account management commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import account_or_exit, money_or_exit, user_option, user_or_exit
from fintrack.domain.account import AccountService
from fintrack.domain.entities import Account, AccountType
from fintrack.domain.money import Currency

ACCOUNT_TYPES = [t.value for t in AccountType]
CURRENCIES = [c.value for c in Currency]


def _format_account(acc: Account) -> str:
    status = "" if acc.is_active else " (inactive)"
    return f"{acc.id} | {acc.name:20s} | {acc.account_type.value:10s} | {str(acc.balance):>18s}{status}"


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default=AccountType.CHECKING.value,
    show_default=True,
    help="Account type",
)
@click.option(
    "--currency",
    type=click.Choice(CURRENCIES, case_sensitive=False),
    default=Currency.USD.value,
    show_default=True,
    help="Balance currency",
)
@user_option
@click.pass_context
def create_account(ctx, name: str, account_type: str, currency: str, user_ref: str):
    """Create a new account with a zero balance.

    Examples:
        fintrack account create "Checking" --user jane@example.com
        fintrack account create "Visa" --type CreditCard --currency EUR --user jane@example.com
    """
    user = user_or_exit(ctx, user_ref)
    service = AccountService(ctx.obj["db"])
    try:
        acc = service.create_account(user.id, name, AccountType(account_type), Currency(currency.upper()))
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{acc.name}' (ID: {acc.id})")


@account_group.command("list")
@user_option
@click.pass_context
def list_accounts(ctx, user_ref: str):
    """List a user's accounts."""
    user = user_or_exit(ctx, user_ref)
    accounts = AccountService(ctx.obj["db"]).list_accounts(user_id=user.id)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 100)
    for acc in accounts:
        click.echo(_format_account(acc))


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@user_option
@click.pass_context
def show_account(ctx, account: str, user_ref: str):
    """Show one account. ACCOUNT can be an account name or ID."""
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    click.echo(f"Name:     {acc.name}")
    click.echo(f"ID:       {acc.id}")
    click.echo(f"Type:     {acc.account_type.value}")
    click.echo(f"Balance:  {acc.balance}")
    click.echo(f"Active:   {'yes' if acc.is_active else 'no'}")
    click.echo(f"Created:  {acc.created_at:%Y-%m-%d %H:%M:%S} UTC")


@account_group.command("deposit")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount")
@user_option
@click.pass_context
def deposit(ctx, account: str, amount: str, user_ref: str):
    """Add money to an account's balance.

    The amount is in the account's currency.
    """
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    money = money_or_exit(ctx, amount, acc.currency)
    try:
        updated = AccountService(ctx.obj["db"]).deposit(acc.id, money)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deposited {money} to '{updated.name}'. New balance: {updated.balance}")


@account_group.command("withdraw")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount")
@user_option
@click.pass_context
def withdraw(ctx, account: str, amount: str, user_ref: str):
    """Take money from an account's balance.

    Only credit card accounts may go below zero.
    """
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    money = money_or_exit(ctx, amount, acc.currency)
    try:
        updated = AccountService(ctx.obj["db"]).withdraw(acc.id, money)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Withdrew {money} from '{updated.name}'. New balance: {updated.balance}")


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@user_option
@click.pass_context
def rename_account(ctx, account: str, new_name: str, user_ref: str) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.
    NEW_NAME is the new name for the account.

    Examples:
        fintrack account rename "Checking" "Main Checking" --user jane@example.com
    """
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    try:
        updated = AccountService(ctx.obj["db"]).rename_account(acc.id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{updated.name}'")


@account_group.command("activate")
@click.argument("account", metavar="ACCOUNT")
@user_option
@click.pass_context
def activate_account(ctx, account: str, user_ref: str) -> None:
    """Reactivate a deactivated account."""
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    try:
        AccountService(ctx.obj["db"]).activate_account(acc.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated account '{acc.name}'")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@user_option
@click.pass_context
def deactivate_account(ctx, account: str, user_ref: str) -> None:
    """Deactivate an account. Deposits and withdrawals are refused until reactivated."""
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    try:
        AccountService(ctx.obj["db"]).deactivate_account(acc.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated account '{acc.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@user_option
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, user_ref: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transaction or recurring
    transaction references it. Deactivate it instead to keep its history.
    """
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)

    if not yes and not click.confirm(f"Are you sure you want to delete account '{acc.name}' (ID: {acc.id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        AccountService(ctx.obj["db"]).delete_account(acc.id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{acc.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
