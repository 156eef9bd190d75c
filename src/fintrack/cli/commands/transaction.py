"""Transaction management commands."""

from uuid import UUID

import click
from fintrack.cli.date_filters import PERIOD_CHOICES, resolve_cli_date_range
from fintrack.cli.error_handling import handle_domain_error
from fintrack.cli.resolution import (
    account_or_exit,
    category_or_exit,
    date_or_exit,
    money_or_exit,
    user_option,
    user_or_exit,
)
from fintrack.domain.account import AccountService
from fintrack.domain.category import CategoryService
from fintrack.domain.entities import Transaction, TransactionType
from fintrack.domain.transaction import TransactionService

TRANSACTION_TYPES = [t.value for t in TransactionType]


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


def _record_categorized(ctx, kind: TransactionType, account, amount, category, date, description, user_ref):
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    cat = category_or_exit(ctx, user, category)
    money = money_or_exit(ctx, amount, acc.currency)
    txn_date = date_or_exit(ctx, date)

    service = TransactionService(ctx.obj["db"])
    record = service.record_income if kind is TransactionType.INCOME else service.record_expense
    try:
        txn = record(user.id, acc.id, cat.id, money, txn_date, description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {kind.value.lower()} of {txn.amount} on '{acc.name}' (ID: {txn.id})")


def _amount_options(func):
    func = click.option("--date", "date", default="today", show_default=True,
                        help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")(func)
    func = click.option("--description", "-d", required=True, help="Transaction description")(func)
    return func


@transaction_group.command("income")
@click.argument("account")
@click.argument("amount")
@click.option("--category", required=True, help="Category path (e.g., 'Income > Salary') or ID")
@_amount_options
@user_option
@click.pass_context
def record_income(ctx, account: str, amount: str, category: str, date: str, description: str, user_ref: str):
    """Record income into ACCOUNT.

    Examples:
        fintrack transaction income Checking 2500 --category Salary -d "March salary" --user jane@example.com
    """
    _record_categorized(ctx, TransactionType.INCOME, account, amount, category, date, description, user_ref)


@transaction_group.command("expense")
@click.argument("account")
@click.argument("amount")
@click.option("--category", required=True, help="Category path (e.g., 'Food & Dining > Groceries') or ID")
@_amount_options
@user_option
@click.pass_context
def record_expense(ctx, account: str, amount: str, category: str, date: str, description: str, user_ref: str):
    """Record an expense paid from ACCOUNT.

    Examples:
        fintrack transaction expense Visa 42.10 --category Groceries -d "Weekly shop" --date yesterday
    """
    _record_categorized(ctx, TransactionType.EXPENSE, account, amount, category, date, description, user_ref)


@transaction_group.command("transfer")
@click.argument("from_account")
@click.argument("to_account")
@click.argument("amount")
@_amount_options
@user_option
@click.pass_context
def record_transfer(ctx, from_account: str, to_account: str, amount: str, date: str, description: str, user_ref: str):
    """Record a transfer between two accounts with the same currency."""
    user = user_or_exit(ctx, user_ref)
    source = account_or_exit(ctx, user, from_account)
    destination = account_or_exit(ctx, user, to_account)
    money = money_or_exit(ctx, amount, source.currency)
    txn_date = date_or_exit(ctx, date)

    try:
        txn = TransactionService(ctx.obj["db"]).record_transfer(
            user.id, source.id, destination.id, money, txn_date, description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded transfer of {txn.amount} from '{source.name}' to '{destination.name}' (ID: {txn.id})")


@transaction_group.command("list")
@click.option("--period", type=click.Choice(PERIOD_CHOICES, case_sensitive=False), help="Named period")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--account", help="Account name or ID (matches source or destination)")
@click.option("--category", help="Category path or ID")
@click.option("--type", "transaction_type", type=click.Choice(TRANSACTION_TYPES, case_sensitive=False), help="Transaction type")
@click.option("--include-deleted", is_flag=True, help="Include soft-deleted transactions")
@user_option
@click.pass_context
def list_transactions(
    ctx,
    period: str | None,
    start_date: str | None,
    end_date: str | None,
    account: str | None,
    category: str | None,
    transaction_type: str | None,
    include_deleted: bool,
    user_ref: str,
):
    """View transactions with optional filters.

    Examples:
        fintrack transaction list --period this-month --user jane@example.com
        fintrack transaction list --start-date 2024-01-01 --end-date 2024-03-31 --type Expense
    """
    db = ctx.obj["db"]
    user = user_or_exit(ctx, user_ref)
    date_range = resolve_cli_date_range(ctx, period=period, start_date=start_date, end_date=end_date)
    account_id = account_or_exit(ctx, user, account).id if account else None
    category_id = category_or_exit(ctx, user, category).id if category else None

    transactions = TransactionService(db).list_transactions(
        user_id=user.id,
        date_range=date_range,
        account_id=account_id,
        category_id=category_id,
        transaction_type=TransactionType(transaction_type) if transaction_type else None,
        include_deleted=include_deleted,
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in AccountService(db).list_accounts(user_id=user.id)}
    category_service = CategoryService(db)

    range_str = f" ({date_range})" if date_range else ""
    click.echo(f"\nFound {len(transactions)} transaction(s){range_str}:")
    click.echo("-" * 120)
    click.echo(
        f"{'Date':<12} {'Type':<9} {'Amount':>16}  {'Account':<25} {'Category':<25} {'Description':<30}"
    )
    click.echo("-" * 120)
    for txn in transactions:
        click.echo(_format_row(txn, accounts, category_service))


def _format_row(txn: Transaction, accounts: dict[UUID, str], category_service: CategoryService) -> str:
    account_name = accounts.get(txn.account_id, "Unknown")
    if txn.is_transfer:
        account_name = f"{account_name} -> {accounts.get(txn.to_account_id, 'Unknown')}"
    category_name = category_service.format_category_path(txn.category_id) if txn.category_id else ""
    deleted = " [deleted]" if txn.is_deleted else ""
    return (
        f"{txn.date:%Y-%m-%d}   {txn.transaction_type.value:<9} {str(txn.amount):>16}  "
        f"{account_name[:25]:<25} {category_name[:25]:<25} {txn.description[:30]}{deleted}"
    )


@transaction_group.command("describe")
@click.argument("transaction_id", type=click.UUID)
@click.argument("description")
@click.pass_context
def describe_transaction(ctx, transaction_id: UUID, description: str) -> None:
    """Change a transaction's description."""
    try:
        TransactionService(ctx.obj["db"]).update_description(transaction_id, description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated description of transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=click.UUID)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: UUID, yes: bool) -> None:
    """Soft-delete a transaction. Use 'transaction restore' to undo.

    Examples:
        fintrack transaction delete 3f1c...
    """
    service = TransactionService(ctx.obj["db"])

    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("restore")
@click.argument("transaction_id", type=click.UUID)
@click.pass_context
def restore_transaction(ctx, transaction_id: UUID) -> None:
    """Restore a soft-deleted transaction."""
    try:
        TransactionService(ctx.obj["db"]).restore_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Restored transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
