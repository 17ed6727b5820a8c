"""Presentation adapters for the ledger screens.

Both renderers consume the same ``Page``/``Analytics``/``Notice`` values, so
commands can switch between the plain table and the chart-enhanced
dashboard without touching the view logic.
"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

import click

from ledgerview.domain.analytics import AnalyticsService
from ledgerview.domain.entities import Analytics, AnalyticsSummary, Page, Record, RecordKind
from ledgerview.domain.intents import Notice, NoticeLevel
from ledgerview.utils.formatting import category_label, format_currency, format_timestamp

BAR_WIDTH = 30

KIND_COLORS = {
    RecordKind.INCOME: "green",
    RecordKind.EXPENSE: "red",
}

NOTICE_STYLES = {
    NoticeLevel.SUCCESS: ("✔", "green"),
    NoticeLevel.INFO: ("ℹ", "blue"),
    NoticeLevel.ERROR: ("✖", "red"),
}


def _truncate(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[: width - 1] + "…"


def _bar(value: Decimal, maximum: Decimal, width: int = BAR_WIDTH) -> str:
    if maximum <= 0:
        return ""
    return "█" * int((value / maximum) * width)


class Renderer(ABC):
    """Base renderer; subclasses decide how pages and analytics look."""

    @abstractmethod
    def render_page(self, page: Page) -> None:
        """Render one page of records."""
        pass

    @abstractmethod
    def render_analytics(
        self, analytics: Analytics, date_from: date, date_to: date, charts: bool = True
    ) -> None:
        """Render analytics for the period [date_from, date_to]."""
        pass

    def render_record(self, record: Record) -> None:
        click.echo(f"\nRecord #{record.id}")
        click.echo(f"  Kind: {record.kind.label}")
        click.echo(f"  Amount: {format_currency(record.amount)}")
        click.echo(f"  Date: {format_timestamp(record.timestamp)}")
        click.echo(f"  Category: {category_label(record.category)}")
        click.echo(f"  Description: {record.note or '-'}")
        if record.created_at:
            click.echo(f"  Created: {format_timestamp(record.created_at)}")
        if record.updated_at:
            click.echo(f"  Updated: {format_timestamp(record.updated_at)}")

    def render_notice(self, notice: Notice) -> None:
        text = notice.message
        if notice.details:
            text = f"{text}: {notice.details}"
        if notice.is_error:
            click.echo(f"Error: {text}", err=True)
        else:
            click.echo(text)

    def _render_overall(self, analytics: Analytics) -> None:
        if analytics.summary is not None:
            self._render_summary_rows(analytics.summary)
            return
        # Only per-kind sections were reported; sum and count still add up
        click.echo(f"  {'Total':<20} {format_currency(analytics.sum):>20}")
        click.echo(f"  {'Count':<20} {analytics.count:>20}")

    def _render_summary_rows(self, summary: AnalyticsSummary) -> None:
        click.echo(f"  {'Sum':<20} {format_currency(summary.sum):>20}")
        click.echo(f"  {'Average':<20} {format_currency(summary.avg):>20}")
        click.echo(f"  {'Count':<20} {summary.count:>20}")
        click.echo(f"  {'Median':<20} {format_currency(summary.median):>20}")
        click.echo(f"  {'90th percentile':<20} {format_currency(summary.percent90):>20}")


class PlainTableRenderer(Renderer):
    """Fixed-width text table, no colors or charts."""

    def render_page(self, page: Page) -> None:
        if not page.visible:
            click.echo("No records found.")
            return

        click.echo(f"\nTotal records: {page.total}")
        click.echo("-" * 100)
        click.echo(
            f"{'ID':<6} {'Kind':<8} {'Amount':>16}  {'Date':<17} {'Category':<20} {'Description':<28}"
        )
        click.echo("-" * 100)
        for record in page.visible:
            click.echo(
                f"{record.id:<6} {record.kind.label:<8} {format_currency(record.amount):>16}  "
                f"{format_timestamp(record.timestamp):<17} "
                f"{_truncate(record.category or '-', 20):<20} "
                f"{_truncate(record.note or '-', 28):<28}"
            )
        click.echo("-" * 100)
        click.echo(f"Page {page.page_number} of {page.page_count}")

    def render_analytics(
        self, analytics: Analytics, date_from: date, date_to: date, charts: bool = True
    ) -> None:
        click.echo(f"\nAnalytics for {date_from} - {date_to}:")
        click.echo("-" * 80)
        self._render_overall(analytics)
        for kind, summary in analytics.breakdown.items():
            click.echo(f"\n{kind.label}")
            self._render_summary_rows(summary)

        click.echo()
        if not analytics.details:
            click.echo("No records in the selected period.")
            return

        click.echo(f"{'ID':<6} {'Kind':<8} {'Amount':>16}  {'Date':<17} {'Category':<20}")
        click.echo("-" * 80)
        for record in analytics.details:
            click.echo(
                f"{record.id:<6} {record.kind.label:<8} {format_currency(record.amount):>16}  "
                f"{format_timestamp(record.timestamp):<17} {category_label(record.category):<20}"
            )


class DashboardRenderer(Renderer):
    """Colored dashboard with range counters and text charts."""

    def render_page(self, page: Page) -> None:
        if not page.visible:
            click.echo(click.style("No records found", bold=True))
            click.echo("Try changing the filters or adding a new record.")
            return

        click.echo(
            f"\nShowing {page.first_index}-{page.last_index} of "
            f"{click.style(str(page.total), bold=True)}"
        )
        click.echo("=" * 100)
        for record in page.visible:
            color = KIND_COLORS[record.kind]
            arrow = "▲" if record.kind == RecordKind.INCOME else "▼"
            kind = click.style(f"{arrow} {record.kind.label:<7}", fg=color)
            amount = click.style(f"{format_currency(record.amount):>16}", fg=color, bold=True)
            click.echo(
                f"#{record.id:<5} {kind} {amount}  {format_timestamp(record.timestamp):<17} "
                f"[{_truncate(category_label(record.category), 18)}] "
                f"{_truncate(record.note or '-', 30)}"
            )
        click.echo("=" * 100)
        previous = "‹ prev" if page.has_previous else "      "
        following = "next ›" if page.has_next else ""
        click.echo(f"{previous}  page {page.page_number}/{page.page_count}  {following}")

    def render_analytics(
        self, analytics: Analytics, date_from: date, date_to: date, charts: bool = True
    ) -> None:
        click.echo(click.style(f"\nAnalytics {date_from} - {date_to}", bold=True))
        click.echo("=" * 80)
        self._render_overall(analytics)
        for kind, summary in analytics.breakdown.items():
            click.echo(click.style(f"\n{kind.label}", fg=KIND_COLORS[kind], bold=True))
            self._render_summary_rows(summary)

        if not analytics.details:
            click.echo("\nNo data for the selected period.")
            return

        if charts:
            self._render_category_chart(analytics)
            self._render_timeline_chart(analytics)

        click.echo(click.style("\nDetails", bold=True))
        click.echo("-" * 80)
        for record in analytics.details:
            color = KIND_COLORS[record.kind]
            click.echo(
                f"{format_timestamp(record.timestamp):<17} "
                f"{click.style(f'{record.kind.label:<7}', fg=color)} "
                f"{click.style(f'{format_currency(record.amount):>16}', fg=color, bold=True)}  "
                f"{category_label(record.category)}"
            )

    def _render_category_chart(self, analytics: Analytics) -> None:
        totals = AnalyticsService.category_totals(analytics.details)
        grand_total = sum(totals.values(), Decimal("0"))
        largest = max(totals.values())
        click.echo(click.style("\nBy category", bold=True))
        for label, total in totals.items():
            percent = round(total / grand_total * 100) if grand_total else 0
            click.echo(
                f"  {_truncate(label, 18):<18} {_bar(total, largest):<{BAR_WIDTH}} "
                f"{format_currency(total)} ({percent}%)"
            )

    def _render_timeline_chart(self, analytics: Analytics) -> None:
        points = AnalyticsService.timeline(analytics.details)
        largest = max(max(point.income, point.expense) for point in points)
        click.echo(click.style("\nTimeline", bold=True))
        for point in points:
            day = point.day.strftime("%d.%m")
            income_bar = click.style(_bar(point.income, largest), fg="green")
            expense_bar = click.style(_bar(point.expense, largest), fg="red")
            click.echo(f"  {day} + {income_bar} {format_currency(point.income)}")
            click.echo(f"        - {expense_bar} {format_currency(point.expense)}")

    def render_notice(self, notice: Notice) -> None:
        symbol, color = NOTICE_STYLES[notice.level]
        text = click.style(f"{symbol} {notice.message}", fg=color, bold=True)
        if notice.details:
            text = f"{text} {notice.details}"
        click.echo(text, err=notice.is_error)


RENDERERS = {
    "plain": PlainTableRenderer,
    "dashboard": DashboardRenderer,
}


def get_renderer(style: Optional[str]) -> Renderer:
    """Return the renderer for a style name ("plain" or "dashboard")."""
    return RENDERERS.get(style or "plain", PlainTableRenderer)()


def style_option(func):
    """Decorate a command with the --style renderer choice."""
    return click.option(
        "--style",
        type=click.Choice(list(RENDERERS)),
        default="plain",
        show_default=True,
        help="Plain table or colored dashboard",
    )(func)
