"""Record store layer for ledgerview."""

from ledgerview.store.base import RecordStore
from ledgerview.store.factories import create_http_store

__all__ = ["RecordStore", "create_http_store"]
