"""Domain model entities for ledgerview.

These are pure data classes representing ledger concepts, independent of
the wire format used by the backend. The store layer maps JSON payloads
into these entities (see ``ledgerview.store.mappers``).
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class RecordKind(str, Enum):
    """Kind of a ledger record."""

    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        """Display label used in tables and CSV exports."""
        return KIND_LABELS[self]

    @classmethod
    def parse(cls, value: str) -> "RecordKind":
        """Parse a kind from its wire value or display label.

        Raises:
            ValueError: If value names no known kind
        """
        text = value.strip().lower()
        for kind in cls:
            if text in (kind.value, kind.label.lower()):
                return kind
        raise ValueError(f"Unknown record kind '{value}'")


KIND_LABELS = {
    RecordKind.INCOME: "Доход",
    RecordKind.EXPENSE: "Расход",
}


class SortOrder(str, Enum):
    """Ordering applied to the filtered working set."""

    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"
    AMOUNT_DESC = "amount_desc"
    AMOUNT_ASC = "amount_asc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Parse a sort order, falling back to DATE_DESC for unknown values."""
        if value:
            normalized = value.strip().lower().replace("-", "_")
            for order in cls:
                if order.value == normalized:
                    return order
        return cls.DATE_DESC


@dataclass(frozen=True)
class Record:
    """Income or expense ledger record."""

    id: int
    kind: RecordKind
    amount: Decimal
    timestamp: datetime
    category: Optional[str] = None
    note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class RecordDraft:
    """Record-shaped payload without an ID, sent on create and update."""

    kind: RecordKind
    amount: Decimal
    timestamp: datetime
    category: Optional[str] = None
    note: Optional[str] = None


@dataclass(frozen=True)
class FilterCriteria:
    """Filter applied to the working set.

    All provided fields must match (logical AND). Absent fields match
    everything. Date bounds are inclusive at day granularity.
    """

    kind: Optional[RecordKind] = None
    category: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.kind is None
            and not self.category
            and self.date_from is None
            and self.date_to is None
        )


@dataclass(frozen=True)
class Page:
    """A window over the filtered and sorted working set."""

    visible: tuple[Record, ...]
    total: int
    page_number: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def page_count(self) -> int:
        if self.total == 0:
            return 1
        return -(-self.total // self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.page_number > 1

    @property
    def has_next(self) -> bool:
        return self.page_number * self.page_size < self.total

    @property
    def first_index(self) -> int:
        """1-based position of the first visible record, 0 when empty."""
        return self.offset + 1 if self.visible else 0

    @property
    def last_index(self) -> int:
        """1-based position of the last visible record, 0 when empty."""
        return self.offset + len(self.visible)


@dataclass(frozen=True)
class RecordListing:
    """One page of records as reported by the backend."""

    items: tuple[Record, ...]
    total: int
    page: int
    limit: int


@dataclass(frozen=True)
class AnalyticsSummary:
    """Aggregate statistics computed server-side."""

    sum: Decimal
    avg: Decimal
    count: int
    median: Decimal
    percent90: Decimal


@dataclass(frozen=True)
class Analytics:
    """Analytics over a period: overall summary, per-kind breakdown, details.

    Backends that only report per-kind sections leave ``summary`` unset. Sum
    and count are then added up from the breakdown; average, median and 90th
    percentile cannot be combined and are None.
    """

    summary: Optional[AnalyticsSummary] = None
    details: tuple[Record, ...] = ()
    breakdown: dict[RecordKind, AnalyticsSummary] = field(default_factory=dict)

    @property
    def sum(self) -> Decimal:
        if self.summary is None:
            return sum((part.sum for part in self.breakdown.values()), Decimal("0"))
        return self.summary.sum

    @property
    def avg(self) -> Optional[Decimal]:
        return self.summary.avg if self.summary else None

    @property
    def count(self) -> int:
        if self.summary is None:
            return sum(part.count for part in self.breakdown.values())
        return self.summary.count

    @property
    def median(self) -> Optional[Decimal]:
        return self.summary.median if self.summary else None

    @property
    def percent90(self) -> Optional[Decimal]:
        return self.summary.percent90 if self.summary else None


@dataclass(frozen=True)
class TimelinePoint:
    """Income and expense totals for a single day."""

    day: date
    income: Decimal
    expense: Decimal
