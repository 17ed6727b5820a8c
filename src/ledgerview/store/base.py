"""Abstract record store interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerview.domain.entities import Analytics, Record, RecordDraft, RecordListing

# Largest page the backend accepts for GET /items
MAX_PAGE_LIMIT = 100


class RecordStore(ABC):
    """Abstract interface to the external store holding ledger records."""

    @abstractmethod
    def close(self) -> None:
        """Release any resources held by the store."""
        pass

    @abstractmethod
    def list_records(
        self, page: Optional[int] = None, limit: Optional[int] = None
    ) -> RecordListing:
        """List one page of records as paginated by the store."""
        pass

    def list_all_records(self) -> list[Record]:
        """Collect every record by walking the store's pages.

        Stops when ``total`` records have been collected or the store returns
        an empty page.
        """
        records: list[Record] = []
        page = 1
        while True:
            listing = self.list_records(page=page, limit=MAX_PAGE_LIMIT)
            records.extend(listing.items)
            if not listing.items or len(records) >= listing.total:
                return records
            page += 1

    @abstractmethod
    def get_record(self, record_id: int) -> Record:
        """Get record by ID. Raises RecordNotFoundError if missing."""
        pass

    @abstractmethod
    def create_record(self, draft: RecordDraft) -> int:
        """Create a record. Returns the new record ID."""
        pass

    @abstractmethod
    def update_record(self, record_id: int, draft: RecordDraft) -> None:
        """Replace a record's fields."""
        pass

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Delete a record."""
        pass

    @abstractmethod
    def get_analytics(self, date_from: datetime, date_to: datetime) -> Analytics:
        """Get server-computed analytics for records in [date_from, date_to]."""
        pass

    @abstractmethod
    def export_csv(
        self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None
    ) -> bytes:
        """Download the store's own CSV report for the period."""
        pass
