"""CLI helpers for date range and filter resolution."""

from datetime import date
from typing import Optional

import click

from ledgerview.domain.entities import FilterCriteria, RecordKind
from ledgerview.utils.date_parser import PERIODS, get_date_range, parse_date


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from a period name or explicit dates."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --from or --to.",
            err=True,
        )
        ctx.exit(1)

    if period:
        return get_date_range(period)

    start = None
    end = None

    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end


def build_criteria(
    ctx,
    *,
    kind: Optional[str],
    category: Optional[str],
    start_date: Optional[str],
    end_date: Optional[str],
    period: Optional[str],
) -> FilterCriteria:
    """Build filter criteria from the shared CLI filter options."""
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )
    return FilterCriteria(
        kind=RecordKind(kind) if kind else None,
        category=category.strip() if category and category.strip() else None,
        date_from=start,
        date_to=end,
    )


def filter_options(func):
    """Decorate a command with the shared record filter options."""
    options = [
        click.option(
            "--kind",
            type=click.Choice([kind.value for kind in RecordKind]),
            help="Only income or only expense records",
        ),
        click.option("--category", help="Category substring (case-insensitive)"),
        click.option(
            "--from",
            "start_date",
            help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')",
        ),
        click.option(
            "--to",
            "end_date",
            help="End date (YYYY-MM-DD or relative like 'today')",
        ),
        click.option(
            "--period",
            type=click.Choice(PERIODS),
            help="Named period instead of --from/--to",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func
