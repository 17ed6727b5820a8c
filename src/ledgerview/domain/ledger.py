"""Ledger controller: the seam between presentation and the record view."""

from typing import TYPE_CHECKING, Optional

from ledgerview.domain.entities import Page, Record
from ledgerview.domain.errors import DomainError, StoreError
from ledgerview.domain.intents import (
    ApplyFilter,
    ChangePage,
    Create,
    Delete,
    Edit,
    GoToPage,
    Intent,
    Notice,
    NoticeLevel,
    Reload,
    ResetFilters,
    Search,
    SetPageSize,
    Sort,
    Update,
)
from ledgerview.domain.record_view import RecordView
from ledgerview.logging_setup import get_logger

if TYPE_CHECKING:
    from ledgerview.store.base import RecordStore

logger = get_logger(__name__)


class LedgerController:
    """Consumes intents, drives the store and keeps the view consistent.

    Every mutation is followed by a full reload. Failures never escape
    ``dispatch``: they are logged and returned as error notices, and the
    working set keeps its last successfully loaded contents.
    """

    def __init__(self, store: "RecordStore", view: Optional[RecordView] = None):
        """Initialize the controller.

        Args:
            store: Record store instance
            view: Record view to drive (a new one by default)
        """
        self.store = store
        self.view = view or RecordView()
        self.editing: Optional[Record] = None
        self.last_notice: Optional[Notice] = None

    def page(self) -> Page:
        """Current page of the view."""
        return self.view.current_page()

    def dispatch(self, intent: Intent) -> Optional[Notice]:
        """Handle one intent.

        Args:
            intent: Intent emitted by the presentation layer

        Returns:
            Notice describing the outcome, or None for pure navigation
        """
        try:
            notice = self._handle(intent)
        except (StoreError, DomainError) as e:
            logger.warning("%s failed: %s", type(intent).__name__, e)
            notice = Notice(NoticeLevel.ERROR, _failure_title(intent), str(e))

        if notice is not None:
            self.last_notice = notice
        return notice

    def _handle(self, intent: Intent) -> Optional[Notice]:
        view = self.view

        if isinstance(intent, Reload):
            return self.reload()

        elif isinstance(intent, ApplyFilter):
            view.filter(intent.criteria)
            return Notice(NoticeLevel.INFO, "Filters applied", f"{len(view.results())} records")

        elif isinstance(intent, ResetFilters):
            view.reset_filters()
            return Notice(NoticeLevel.INFO, "Filters reset", f"{len(view.results())} records")

        elif isinstance(intent, Search):
            if view.apply_search(intent.term):
                return Notice(NoticeLevel.INFO, "Search applied", f"{len(view.results())} records")
            return None

        elif isinstance(intent, Sort):
            view.set_sort(intent.order)
            return None

        elif isinstance(intent, GoToPage):
            view.go_to_page(intent.number)
            return None

        elif isinstance(intent, ChangePage):
            view.change_page(intent.delta)
            return None

        elif isinstance(intent, SetPageSize):
            view.set_page_size(intent.size)
            return None

        elif isinstance(intent, Edit):
            self.editing = None
            self.editing = self.store.get_record(intent.record_id)
            return Notice(NoticeLevel.INFO, f"Editing record #{intent.record_id}")

        elif isinstance(intent, Create):
            record_id = self.store.create_record(intent.draft)
            return self._after_mutation("Record created", f"ID: {record_id}")

        elif isinstance(intent, Update):
            self.store.update_record(intent.record_id, intent.draft)
            self.editing = None
            return self._after_mutation("Record updated", f"ID: {intent.record_id}")

        elif isinstance(intent, Delete):
            self.store.delete_record(intent.record_id)
            if self.editing is not None and self.editing.id == intent.record_id:
                self.editing = None
            return self._after_mutation("Record deleted", f"ID: {intent.record_id}")

        raise TypeError(f"Unsupported intent: {intent!r}")

    def reload(self) -> Notice:
        """Replace the working set with the store's current records.

        A failed load leaves the previous working set in place.
        """
        try:
            records = self.store.list_all_records()
        except StoreError as e:
            logger.warning("Loading records failed: %s", e)
            return Notice(NoticeLevel.ERROR, "Could not load records", str(e))

        self.view.load(records)
        logger.info("Working set replaced with %d records", len(records))
        return Notice(NoticeLevel.SUCCESS, "Records loaded", f"{len(records)} records")

    def _after_mutation(self, message: str, details: str) -> Notice:
        reloaded = self.reload()
        if reloaded.is_error:
            return Notice(
                NoticeLevel.ERROR,
                f"{message}, but reloading failed",
                reloaded.details,
            )
        return Notice(NoticeLevel.SUCCESS, message, details)


def _failure_title(intent: Intent) -> str:
    titles = {
        Edit: "Could not load record",
        Create: "Could not create record",
        Update: "Could not update record",
        Delete: "Could not delete record",
    }
    return titles.get(type(intent), "Request failed")
