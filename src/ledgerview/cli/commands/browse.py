"""Interactive browse command.

Each line typed by the user is parsed into an intent and dispatched to the
ledger controller; the current page is rendered after every step.
"""

from dataclasses import replace
from typing import Optional

import click

from ledgerview.cli.renderers import Renderer, get_renderer, style_option
from ledgerview.domain.entities import FilterCriteria, RecordKind, SortOrder
from ledgerview.domain.errors import DomainError
from ledgerview.domain.intents import (
    ApplyFilter,
    ChangePage,
    Create,
    Delete,
    Edit,
    GoToPage,
    Intent,
    Reload,
    ResetFilters,
    Search,
    SetPageSize,
    Sort,
    Update,
)
from ledgerview.domain.ledger import LedgerController
from ledgerview.domain.record_form import build_draft, merge_draft
from ledgerview.domain.record_view import DEFAULT_PAGE_SIZE, RecordView
from ledgerview.utils.date_parser import parse_date

QUIT = "quit"
ADD = "add"

HELP_TEXT = """\
Commands:
  n / p              next / previous page
  g N                go to page N
  size N             records per page
  / TEXT             search (3+ characters, empty to clear)
  k income|expense|all
  c TEXT             category filter (empty to clear)
  from DATE | to DATE  date bounds ("-" to clear)
  o ORDER            date_desc, date_asc, amount_desc, amount_asc
  r                  reset filters
  reload             reload records from the server
  a                  add a record
  e ID               edit a record
  x ID               delete a record
  q                  quit"""


def parse_browse_command(line: str, criteria: FilterCriteria) -> Intent | str | None:
    """Parse one input line into an intent.

    Returns:
        An intent, the QUIT/ADD markers, or None for unknown input

    Raises:
        ValueError: If the command's argument is invalid
    """
    command, _, argument = line.strip().partition(" ")
    command = command.lower()
    argument = argument.strip()

    if command in ("q", "quit", "exit"):
        return QUIT
    if command in ("a", "add"):
        return ADD
    if command in ("n", "next"):
        return ChangePage(1)
    if command in ("p", "prev"):
        return ChangePage(-1)
    if command == "g":
        return GoToPage(int(argument))
    if command == "size":
        return SetPageSize(int(argument))
    if command == "/":
        return Search(argument)
    if command.startswith("/"):
        return Search(line.strip()[1:].strip())
    if command == "k":
        kind = None if argument in ("", "all") else RecordKind.parse(argument)
        return ApplyFilter(replace(criteria, kind=kind))
    if command == "c":
        return ApplyFilter(replace(criteria, category=argument or None))
    if command == "from":
        bound = None if argument in ("", "-") else parse_date(argument)
        return ApplyFilter(replace(criteria, date_from=bound))
    if command == "to":
        bound = None if argument in ("", "-") else parse_date(argument)
        return ApplyFilter(replace(criteria, date_to=bound))
    if command == "o":
        return Sort(SortOrder.parse(argument))
    if command == "r":
        return ResetFilters()
    if command == "reload":
        return Reload()
    if command == "e":
        return Edit(int(argument))
    if command == "x":
        return Delete(int(argument))
    return None


def _prompt_new_record() -> Create:
    draft = build_draft(
        click.prompt("Kind (income/expense)"),
        click.prompt("Amount"),
        click.prompt("Date", default="now"),
        category=click.prompt("Category", default="", show_default=False),
        note=click.prompt("Description", default="", show_default=False),
    )
    return Create(draft)


def _prompt_changes(controller: LedgerController) -> Optional[Update]:
    record = controller.editing
    if record is None:
        return None
    draft = merge_draft(
        record,
        kind=click.prompt("Kind", default=record.kind.value),
        amount=click.prompt("Amount", default=str(record.amount)),
        timestamp=click.prompt("Date", default=record.timestamp.isoformat()),
        category=click.prompt("Category", default=record.category or "", show_default=False),
        note=click.prompt("Description", default=record.note or "", show_default=False),
    )
    return Update(record.id, draft)


def run_browser(controller: LedgerController, renderer: Renderer) -> None:
    """Read commands until the user quits."""
    notice = controller.dispatch(Reload())
    renderer.render_notice(notice)
    renderer.render_page(controller.page())

    while True:
        line = click.prompt("ledger", default="q", show_default=False, prompt_suffix="> ")
        try:
            intent = parse_browse_command(line, controller.view.criteria)
            if intent == QUIT:
                return
            if intent == ADD:
                intent = _prompt_new_record()
            elif isinstance(intent, Delete) and not click.confirm(
                f"Delete record {intent.record_id}?"
            ):
                continue
        except (DomainError, ValueError) as e:
            click.echo(f"Error: {e}", err=True)
            continue

        if intent is None:
            click.echo(HELP_TEXT)
            continue

        notice = controller.dispatch(intent)
        if notice is not None:
            renderer.render_notice(notice)

        if isinstance(intent, Edit) and controller.editing is not None:
            renderer.render_record(controller.editing)
            try:
                update = _prompt_changes(controller)
            except DomainError as e:
                click.echo(f"Error: {e}", err=True)
                continue
            if update is not None:
                renderer.render_notice(controller.dispatch(update))

        renderer.render_page(controller.page())


@click.command("browse")
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
def browse(ctx, page_size: int, style: str):
    """Browse, filter and edit records interactively.

    Type ? for the list of commands.
    """
    controller = LedgerController(ctx.obj["store"], RecordView(page_size=page_size))
    run_browser(controller, get_renderer(style))


def register_commands(cli):
    """Register browse command with main CLI."""
    cli.add_command(browse)
