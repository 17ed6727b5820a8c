"""CSV export command."""

from pathlib import Path

import click

from ledgerview.cli.date_filters import build_criteria, filter_options, resolve_cli_date_range
from ledgerview.cli.error_handling import handle_domain_error
from ledgerview.domain.csv_export import CSVExportService, default_filename
from ledgerview.domain.entities import SortOrder
from ledgerview.domain.errors import DomainError, StoreError, ValidationError
from ledgerview.domain.ledger import LedgerController
from ledgerview.utils.date_parser import end_of_day, start_of_day


@click.command("export")
@click.argument("path", required=False, type=click.Path(dir_okay=False, writable=True))
@filter_options
@click.option("--search", "search_term", default="", help="Search term applied before export (3+ characters)")
@click.option("--sort", default=SortOrder.DATE_DESC.value, show_default=True, help="Row order")
@click.option(
    "--server",
    is_flag=True,
    help="Download the backend's own CSV report instead of exporting the filtered records",
)
@click.pass_context
def export_records(
    ctx,
    path: str | None,
    kind: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    search_term: str,
    sort: str,
    server: bool,
):
    """Export records to CSV.

    Without --server every record matching the filters is written (not just
    one page). PATH defaults to ledger_export_<today>.csv.

    Examples:
        ledgerview export --kind expense --period this-month
        ledgerview export report.csv --server --from 2024-01-01 --to 2024-01-31
    """
    store = ctx.obj["store"]

    if server:
        target = Path(path or default_filename("ledger_report"))
        start, end = resolve_cli_date_range(
            ctx, start_date=start_date, end_date=end_date, period=period
        )
        if (start is None) != (end is None):
            handle_domain_error(
                ctx, ValidationError("The server report needs both --from and --to, or --period")
            )
        try:
            content = store.export_csv(
                start_of_day(start) if start else None,
                end_of_day(end) if end else None,
            )
        except StoreError as e:
            handle_domain_error(ctx, e)
        try:
            target.write_bytes(content)
        except OSError as e:
            handle_domain_error(ctx, ValidationError(f"Could not write {target}: {e}"))
        click.echo(f"Saved server report to {target}")
        return

    target = Path(path or default_filename("ledger_export"))
    criteria = build_criteria(
        ctx,
        kind=kind,
        category=category,
        start_date=start_date,
        end_date=end_date,
        period=period,
    )
    controller = LedgerController(store)
    notice = controller.reload()
    if notice.is_error:
        handle_domain_error(ctx, ValueError(f"{notice.message}: {notice.details}"))

    view = controller.view
    view.filter(criteria)
    view.apply_search(search_term)
    view.set_sort(SortOrder.parse(sort))

    try:
        count = CSVExportService().export_records(view.results(), target)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Exported {count} record(s) to {target}")


def register_commands(cli):
    """Register export command with main CLI."""
    cli.add_command(export_records)
