"""Record management commands."""

import click

from ledgerview.cli.date_filters import build_criteria, filter_options
from ledgerview.cli.error_handling import handle_domain_error
from ledgerview.cli.renderers import get_renderer, style_option
from ledgerview.domain.entities import SortOrder
from ledgerview.domain.errors import DomainError, StoreError
from ledgerview.domain.intents import Create, Delete, Update
from ledgerview.domain.ledger import LedgerController
from ledgerview.domain.record_form import build_draft, merge_draft
from ledgerview.domain.record_view import DEFAULT_PAGE_SIZE, RecordView


def _dispatch_or_exit(ctx, controller: LedgerController, intent, renderer) -> None:
    notice = controller.dispatch(intent)
    renderer.render_notice(notice)
    if notice.is_error:
        ctx.exit(1)


@click.command("list")
@filter_options
@click.option("--search", "search_term", default="", help="Search category, description, amount or kind (3+ characters)")
@click.option(
    "--sort",
    default=SortOrder.DATE_DESC.value,
    show_default=True,
    help="date_desc, date_asc, amount_desc or amount_asc",
)
@click.option("--page", "page_number", type=int, default=1, show_default=True, help="Page number")
@click.option(
    "--page-size",
    type=click.IntRange(min=1),
    default=DEFAULT_PAGE_SIZE,
    show_default=True,
    envvar="LEDGERVIEW_PAGE_SIZE",
    help="Records per page",
)
@style_option
@click.pass_context
def list_records(
    ctx,
    kind: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    search_term: str,
    sort: str,
    page_number: int,
    page_size: int,
    style: str,
):
    """List records with optional filters, search, sorting and paging.

    Examples:
        ledgerview list --kind expense --category food
        ledgerview list --period this-month --sort amount_desc --page 2
    """
    criteria = build_criteria(
        ctx,
        kind=kind,
        category=category,
        start_date=start_date,
        end_date=end_date,
        period=period,
    )
    renderer = get_renderer(style)
    controller = LedgerController(ctx.obj["store"], RecordView(page_size=page_size))

    notice = controller.reload()
    if notice.is_error:
        renderer.render_notice(notice)
        ctx.exit(1)

    view = controller.view
    view.filter(criteria)
    view.apply_search(search_term)
    view.set_sort(SortOrder.parse(sort))
    renderer.render_page(view.go_to_page(page_number))


@click.command("show")
@click.argument("record_id", type=int)
@style_option
@click.pass_context
def show_record(ctx, record_id: int, style: str):
    """Show a single record."""
    try:
        record = ctx.obj["store"].get_record(record_id)
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)
    get_renderer(style).render_record(record)


@click.command("add")
@click.option("--kind", required=True, help="income or expense")
@click.option("--amount", required=True, help="Positive amount (e.g., 1500 or 1 500,50)")
@click.option(
    "--date",
    "timestamp",
    default="now",
    show_default=True,
    help="Date and time (e.g., '2024-01-15 10:30'; local time unless an offset is given)",
)
@click.option("--category", help="Category label")
@click.option("--description", help="Free-text description")
@style_option
@click.pass_context
def add_record(
    ctx,
    kind: str,
    amount: str,
    timestamp: str,
    category: str | None,
    description: str | None,
    style: str,
):
    """Add a record.

    Examples:
        ledgerview add --kind expense --amount 350 --category Food --description "Lunch"
        ledgerview add --kind income --amount 50000 --date "2024-01-15 09:00"
    """
    try:
        draft = build_draft(kind, amount, timestamp, category=category, note=description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    controller = LedgerController(ctx.obj["store"])
    _dispatch_or_exit(ctx, controller, Create(draft), get_renderer(style))


@click.command("update")
@click.argument("record_id", type=int)
@click.option("--kind", help="income or expense")
@click.option("--amount", help="Positive amount")
@click.option("--date", "timestamp", help="Date and time")
@click.option("--category", help="Category label, or empty string to clear")
@click.option("--description", help="Description, or empty string to clear")
@style_option
@click.pass_context
def update_record(
    ctx,
    record_id: int,
    kind: str | None,
    amount: str | None,
    timestamp: str | None,
    category: str | None,
    description: str | None,
    style: str,
):
    """Update a record.

    Updates only the fields that are provided; the rest keep their values.

    Examples:
        ledgerview update 7 --amount 420
        ledgerview update 7 --category ""  # Clear category
    """
    store = ctx.obj["store"]
    try:
        record = store.get_record(record_id)
        draft = merge_draft(
            record,
            kind=kind,
            amount=amount,
            timestamp=timestamp,
            category=category,
            note=description,
        )
    except (DomainError, StoreError) as e:
        handle_domain_error(ctx, e)

    controller = LedgerController(store)
    _dispatch_or_exit(ctx, controller, Update(record_id, draft), get_renderer(style))


@click.command("delete")
@click.argument("record_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@style_option
@click.pass_context
def delete_record(ctx, record_id: int, yes: bool, style: str):
    """Delete a record. This cannot be undone."""
    if not yes:
        click.confirm(f"Delete record {record_id}? This cannot be undone.", abort=True)

    controller = LedgerController(ctx.obj["store"])
    _dispatch_or_exit(ctx, controller, Delete(record_id), get_renderer(style))


def register_commands(cli):
    """Register record commands with main CLI."""
    cli.add_command(list_records)
    cli.add_command(show_record)
    cli.add_command(add_record)
    cli.add_command(update_record)
    cli.add_command(delete_record)
