"""Recurring transaction commands."""

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
from fintrack.domain.date_range import DateRange
from fintrack.domain.entities import RecurringTransactionType
from fintrack.domain.recurrence import RecurrencePeriod, RecurrenceType
from fintrack.domain.recurring import DEFAULT_OCCURRENCE_LIMIT, RecurringTransactionService

RECURRING_TYPES = [t.value for t in RecurringTransactionType]
RECURRENCE_UNITS = [t.value for t in RecurrenceType]


@click.group()
def recurring_group():
    """Manage recurring income and expenses."""
    pass


@recurring_group.command("create")
@click.argument("kind", type=click.Choice(RECURRING_TYPES, case_sensitive=False))
@click.argument("account")
@click.argument("amount")
@click.option("--category", required=True, help="Category path or ID")
@click.option("--description", "-d", required=True, help="Description")
@click.option("--start", "start_date", default="today", show_default=True, help="First occurrence date")
@click.option(
    "--unit",
    type=click.Choice(RECURRENCE_UNITS, case_sensitive=False),
    default=RecurrenceType.MONTHLY.value,
    show_default=True,
    help="Recurrence unit",
)
@click.option("--every", "interval", type=int, default=1, show_default=True, help="Number of units between occurrences")
@user_option
@click.pass_context
def create_recurring(
    ctx,
    kind: str,
    account: str,
    amount: str,
    category: str,
    description: str,
    start_date: str,
    unit: str,
    interval: int,
    user_ref: str,
):
    """Create a recurring income or expense.

    KIND is Income or Expense.

    Examples:
        fintrack recurring create Expense Checking 1200 --category Rent -d Rent --start 2024-01-01
        fintrack recurring create Income Checking 2500 --category Salary -d Salary --unit Weekly --every 2
    """
    user = user_or_exit(ctx, user_ref)
    acc = account_or_exit(ctx, user, account)
    cat = category_or_exit(ctx, user, category)
    money = money_or_exit(ctx, amount, acc.currency)
    start = date_or_exit(ctx, start_date)

    try:
        period = RecurrencePeriod(RecurrenceType(unit), interval)
        recurring = RecurringTransactionService(ctx.obj["db"]).create_recurring(
            user.id,
            RecurringTransactionType(kind),
            money,
            description,
            acc.id,
            cat.id,
            start,
            period,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Created recurring {recurring.transaction_type.value.lower()} '{recurring.description}' "
        f"({str(recurring.recurrence_period).lower()} from {recurring.start_date}, ID: {recurring.id})"
    )


@recurring_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide deactivated templates")
@user_option
@click.pass_context
def list_recurring(ctx, active_only: bool, user_ref: str):
    """List a user's recurring transactions."""
    user = user_or_exit(ctx, user_ref)
    templates = RecurringTransactionService(ctx.obj["db"]).list_recurring(
        user_id=user.id, active_only=active_only
    )
    if not templates:
        click.echo("No recurring transactions found.")
        return

    click.echo("\nRecurring transactions:")
    click.echo("-" * 110)
    for r in templates:
        status = "" if r.is_active else " (inactive)"
        click.echo(
            f"{r.id} | {r.transaction_type.value:<7} | {str(r.amount):>14} | "
            f"{str(r.recurrence_period):<16} | from {r.start_date} | {r.description}{status}"
        )


@recurring_group.command("occurrences")
@click.argument("recurring_id", type=click.UUID, required=False)
@click.option("--period", type=click.Choice(PERIOD_CHOICES, case_sensitive=False), help="Named period")
@click.option("--start-date", help="Start date")
@click.option("--end-date", help="End date")
@click.option("--limit", type=click.IntRange(min=1), default=DEFAULT_OCCURRENCE_LIMIT, show_default=True)
@click.option("--user", "user_ref", envvar="FINTRACK_USER", help="User email or ID, to list all of a user's occurrences")
@click.pass_context
def list_occurrences(
    ctx,
    recurring_id: UUID | None,
    period: str | None,
    start_date: str | None,
    end_date: str | None,
    limit: int,
    user_ref: str | None,
):
    """Show occurrence dates inside a date range.

    With RECURRING_ID, lists the dates of that template. Otherwise lists
    every active template of --user by date. Defaults to this month.

    Examples:
        fintrack recurring occurrences 3f1c... --start-date 2024-01-01 --end-date 2024-12-31
        fintrack recurring occurrences --period this-month --user jane@example.com
    """
    service = RecurringTransactionService(ctx.obj["db"])
    date_range = resolve_cli_date_range(
        ctx, period=period, start_date=start_date, end_date=end_date
    ) or DateRange.this_month()

    try:
        if recurring_id is not None:
            dates = service.occurrences(recurring_id, date_range, limit=limit)
            recurring = service.require_recurring(recurring_id)
            scheduled = [(day, recurring) for day in dates]
        elif user_ref:
            user = user_or_exit(ctx, user_ref)
            scheduled = service.upcoming(user.id, date_range, limit=limit)
        else:
            click.echo("Error: Provide RECURRING_ID or --user.", err=True)
            ctx.exit(1)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not scheduled:
        click.echo(f"No occurrences between {date_range}.")
        return

    click.echo(f"\nOccurrences {date_range}:")
    for day, r in scheduled:
        click.echo(f"{day:%Y-%m-%d}  {r.transaction_type.value:<7} {str(r.amount):>14}  {r.description}")


@recurring_group.command("post")
@click.argument("recurring_id", type=click.UUID)
@click.argument("occurrence_date")
@click.pass_context
def post_occurrence(ctx, recurring_id: UUID, occurrence_date: str):
    """Record the transaction for one occurrence of a template."""
    day = date_or_exit(ctx, occurrence_date)
    try:
        txn = RecurringTransactionService(ctx.obj["db"]).post_occurrence(recurring_id, day)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Recorded {txn.transaction_type.value.lower()} of {txn.amount} on {txn.date} (ID: {txn.id})")


@recurring_group.command("activate")
@click.argument("recurring_id", type=click.UUID)
@click.pass_context
def activate_recurring(ctx, recurring_id: UUID):
    """Resume a deactivated template."""
    try:
        RecurringTransactionService(ctx.obj["db"]).activate(recurring_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Activated recurring transaction {recurring_id}")


@recurring_group.command("deactivate")
@click.argument("recurring_id", type=click.UUID)
@click.pass_context
def deactivate_recurring(ctx, recurring_id: UUID):
    """Pause a template. Its occurrences can no longer be posted."""
    try:
        RecurringTransactionService(ctx.obj["db"]).deactivate(recurring_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deactivated recurring transaction {recurring_id}")


def register_commands(cli):
    """Register recurring transaction commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
