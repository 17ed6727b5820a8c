"""Analytics command."""

import click

from ledgerview.cli.date_filters import resolve_cli_date_range
from ledgerview.cli.error_handling import handle_domain_error
from ledgerview.cli.renderers import get_renderer, style_option
from ledgerview.domain.analytics import AnalyticsService
from ledgerview.domain.csv_export import CSVExportService
from ledgerview.domain.errors import DomainError, StoreError
from ledgerview.utils.date_parser import PERIODS, get_date_range


@click.command("analytics")
@click.option("--from", "start_date", help="First day of the period (YYYY-MM-DD or relative)")
@click.option("--to", "end_date", help="Last day of the period (YYYY-MM-DD or relative)")
@click.option("--period", type=click.Choice(PERIODS), help="Named period instead of --from/--to")
@click.option("--charts/--no-charts", default=True, show_default=True, help="Show category and timeline charts")
@click.option(
    "--export",
    "export_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Also write the details to this CSV file",
)
@style_option
@click.pass_context
def analytics(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    charts: bool,
    export_path: str | None,
    style: str,
):
    """Show sum, average, median and 90th percentile for a period.

    Defaults to today when no period is given.

    Examples:
        ledgerview analytics --period this-month --style dashboard
        ledgerview analytics --from 2024-01-01 --to 2024-01-31 --export january.csv
    """
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period=period,
        default_range=get_date_range("today"),
    )

    service = AnalyticsService(ctx.obj["store"])
    try:
        result = service.fetch(start, end)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)

    get_renderer(style).render_analytics(result, start, end, charts=charts)

    if export_path:
        try:
            count = CSVExportService().export_analytics(result.details, export_path)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Exported {count} record(s) to {export_path}")


def register_commands(cli):
    """Register analytics command with main CLI."""
    cli.add_command(analytics)
