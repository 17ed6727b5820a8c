"""Client-side view over the working set of records.

The view turns the loaded records plus the current filter, search term,
sort order and page request into a ``Page``. The transformation functions
are pure; the ``RecordView`` class only keeps the state a dashboard needs
between interactions (current page, criteria, search term, sort order).
"""

from typing import Iterable, Optional, Sequence

from ledgerview.domain.entities import FilterCriteria, Page, Record, SortOrder
from ledgerview.utils.date_parser import end_of_day, start_of_day, to_utc

DEFAULT_PAGE_SIZE = 25

# Terms of this length are treated as "still typing" and do not re-filter.
MIN_SEARCH_LENGTH = 3


def matches_criteria(record: Record, criteria: FilterCriteria) -> bool:
    """Return True if the record satisfies every provided criterion."""
    if criteria.kind is not None and record.kind != criteria.kind:
        return False

    if criteria.category:
        if not record.category:
            return False
        if criteria.category.lower() not in record.category.lower():
            return False

    if criteria.date_from is not None or criteria.date_to is not None:
        timestamp = to_utc(record.timestamp)
        if criteria.date_from is not None and timestamp < start_of_day(criteria.date_from):
            return False
        if criteria.date_to is not None and timestamp > end_of_day(criteria.date_to):
            return False

    return True


def filter_records(records: Iterable[Record], criteria: FilterCriteria) -> list[Record]:
    """Return the records matching all criteria, in their original order.

    A range whose start is after its end matches nothing.
    """
    if criteria.is_empty:
        return list(records)
    if (
        criteria.date_from is not None
        and criteria.date_to is not None
        and criteria.date_from > criteria.date_to
    ):
        return []
    return [record for record in records if matches_criteria(record, criteria)]


def matches_term(record: Record, term: str) -> bool:
    """Return True if category, note, amount or kind contains the term."""
    needle = term.lower()
    haystacks = (
        record.category or "",
        record.note or "",
        str(record.amount),
        record.kind.value,
        record.kind.label,
    )
    return any(needle in haystack.lower() for haystack in haystacks)


def search_records(term: str, items: Sequence[Record]) -> list[Record]:
    """Apply a free-text search with a debounce-by-length policy.

    An empty term keeps everything; a term shorter than MIN_SEARCH_LENGTH
    leaves the items unchanged.
    """
    if 0 < len(term) < MIN_SEARCH_LENGTH:
        return list(items)
    return [record for record in items if matches_term(record, term)]


def _amount_key(record: Record):
    return record.amount


def _timestamp_key(record: Record):
    return to_utc(record.timestamp)


def sort_records(order: SortOrder, items: Sequence[Record]) -> list[Record]:
    """Stable sort; records with equal keys keep their input order."""
    if order in (SortOrder.AMOUNT_ASC, SortOrder.AMOUNT_DESC):
        key = _amount_key
    else:
        key = _timestamp_key
    descending = order in (SortOrder.DATE_DESC, SortOrder.AMOUNT_DESC)
    # sorted() keeps equal elements in input order even with reverse=True
    return sorted(items, key=key, reverse=descending)


def paginate(number: int, size: int, items: Sequence[Record]) -> Page:
    """Return the requested page, clamping the page number into range."""
    size = max(1, size)
    total = len(items)
    page_count = max(1, -(-total // size))
    number = min(max(1, number), page_count)
    start = (number - 1) * size
    return Page(
        visible=tuple(items[start:start + size]),
        total=total,
        page_number=number,
        page_size=size,
    )


class RecordView:
    """Working set of records plus the state of the table showing them."""

    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE):
        """Initialize an empty view.

        Args:
            page_size: Number of records per page
        """
        self._records: tuple[Record, ...] = ()
        self.criteria = FilterCriteria()
        self.search_term = ""
        self.sort_order = SortOrder.DATE_DESC
        self.page_size = max(1, page_size)
        self.page_number = 1

    @property
    def records(self) -> tuple[Record, ...]:
        """The loaded working set."""
        return self._records

    def load(self, records: Iterable[Record]) -> None:
        """Replace the whole working set and go back to the first page."""
        self._records = tuple(records)
        self.page_number = 1

    def filter(self, criteria: FilterCriteria) -> list[Record]:
        """Apply filter criteria to the working set.

        Stores the criteria for subsequent pages and resets to page 1.

        Args:
            criteria: Filter criteria to apply

        Returns:
            Records of the working set matching all criteria
        """
        self.criteria = criteria
        self.page_number = 1
        return filter_records(self._records, criteria)

    def sort(self, order: SortOrder, items: Sequence[Record]) -> list[Record]:
        return sort_records(order, items)

    def page(self, number: int, size: int, items: Sequence[Record]) -> Page:
        return paginate(number, size, items)

    def search(self, term: str, items: Sequence[Record]) -> list[Record]:
        return search_records(term, items)

    def apply_search(self, term: str) -> bool:
        """Update the search term as the user types.

        Returns:
            True if the term was applied, False if it was too short to search
        """
        if 0 < len(term) < MIN_SEARCH_LENGTH:
            return False
        self.search_term = term
        self.page_number = 1
        return True

    def set_sort(self, order: SortOrder) -> None:
        self.sort_order = order

    def set_page_size(self, size: int) -> None:
        self.page_size = max(1, size)
        self.page_number = 1

    def reset_filters(self) -> None:
        """Clear criteria and search term and go back to the first page."""
        self.criteria = FilterCriteria()
        self.search_term = ""
        self.page_number = 1

    def results(self) -> list[Record]:
        """Run the working set through filter, search and sort."""
        filtered = filter_records(self._records, self.criteria)
        found = search_records(self.search_term, filtered)
        return sort_records(self.sort_order, found)

    def current_page(self) -> Page:
        """Return the page at the current position, clamping it if needed."""
        page = paginate(self.page_number, self.page_size, self.results())
        self.page_number = page.page_number
        return page

    def go_to_page(self, number: int) -> Page:
        self.page_number = number
        return self.current_page()

    def change_page(self, delta: int) -> Page:
        return self.go_to_page(self.page_number + delta)

    def categories(self) -> list[str]:
        """Sorted distinct non-empty categories in the working set."""
        return sorted({record.category for record in self._records if record.category})

    def find(self, record_id: int) -> Optional[Record]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None
