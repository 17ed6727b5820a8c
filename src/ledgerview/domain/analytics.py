"""Analytics domain service."""

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from ledgerview.domain.entities import Analytics, Record, RecordKind, TimelinePoint
from ledgerview.domain.record_form import validate_period
from ledgerview.utils.date_parser import end_of_day, start_of_day, to_utc
from ledgerview.utils.formatting import category_label

if TYPE_CHECKING:
    from ledgerview.store.base import RecordStore


class AnalyticsService:
    """Service fetching server-side analytics and shaping them for charts."""

    def __init__(self, store: "RecordStore"):
        """Initialize analytics service.

        Args:
            store: Record store instance
        """
        self.store = store

    def fetch(self, date_from: Optional[date], date_to: Optional[date]) -> Analytics:
        """Fetch analytics for whole days [date_from, date_to].

        Args:
            date_from: First day of the period
            date_to: Last day of the period (inclusive)

        Returns:
            Analytics computed by the store

        Raises:
            ValidationError: If a bound is missing or date_from > date_to
            StoreError: If the store request fails
        """
        date_from, date_to = validate_period(date_from, date_to)
        return self.store.get_analytics(start_of_day(date_from), end_of_day(date_to))

    @staticmethod
    def category_totals(details: Sequence[Record]) -> dict[str, Decimal]:
        """Sum amounts per category label, in order of first appearance."""
        totals: dict[str, Decimal] = {}
        for record in details:
            label = category_label(record.category)
            totals[label] = totals.get(label, Decimal("0")) + record.amount
        return totals

    @staticmethod
    def timeline(details: Sequence[Record]) -> list[TimelinePoint]:
        """Income and expense totals per UTC day, ordered by day."""
        days: dict[date, dict[RecordKind, Decimal]] = {}
        for record in details:
            day = to_utc(record.timestamp).date()
            sums = days.setdefault(
                day, {RecordKind.INCOME: Decimal("0"), RecordKind.EXPENSE: Decimal("0")}
            )
            sums[record.kind] += record.amount

        return [
            TimelinePoint(
                day=day,
                income=sums[RecordKind.INCOME],
                expense=sums[RecordKind.EXPENSE],
            )
            for day, sums in sorted(days.items())
        ]
