"""CLI helpers for date range resolution."""

from datetime import date
from typing import Optional

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.date_range import PERIODS, DateRange
from fintrack.utils.date_parser import parse_date

PERIOD_CHOICES = [name.replace("_", "-") for name in PERIODS]


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    period: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
) -> Optional[DateRange]:
    """Resolve a date range from a named period or explicit bounds.

    A missing start bound is open-ended and a missing end bound means
    today. Returns None when no filter was given.
    """
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    try:
        if period:
            return DateRange.for_period(period)

        if not start_date and not end_date:
            return None

        start = _parse_bound(ctx, start_date, "start") if start_date else None
        end = _parse_bound(ctx, end_date, "end") if end_date else None
        if start is None:
            start = date.min
        if end is None:
            end = DateRange.today().end_date
        return DateRange(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)


def _parse_bound(ctx: click.Context, value: str, label: str):
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label} date: {e}", err=True)
        ctx.exit(1)
