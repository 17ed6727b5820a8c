"""Domain layer for ledgerview application."""

from ledgerview.domain.record_view import RecordView
from ledgerview.domain.ledger import LedgerController
from ledgerview.domain.analytics import AnalyticsService
from ledgerview.domain.csv_export import CSVExportService

__all__ = [
    "RecordView",
    "LedgerController",
    "AnalyticsService",
    "CSVExportService",
]
