"""CSV export domain service."""

from datetime import date
from pathlib import Path
from typing import Iterable, Sequence

from ledgerview.domain.entities import Record
from ledgerview.domain.errors import ValidationError
from ledgerview.utils.formatting import format_amount_plain, format_timestamp

RECORD_HEADERS = ("ID", "Тип", "Сумма", "Дата", "Категория", "Описание")
ANALYTICS_HEADERS = ("Дата", "Тип", "Сумма", "Категория")

# Excel needs the BOM to detect UTF-8
CSV_ENCODING = "utf-8-sig"

_SPECIAL_CHARS = (",", '"', "\n", "\r")


def quote_field(value: str) -> str:
    """Wrap a value in quotes, doubling any quotes inside it."""
    return '"' + value.replace('"', '""') + '"'


def escape_field(value: str) -> str:
    """Quote a value only when it contains a separator, quote or newline."""
    if any(char in value for char in _SPECIAL_CHARS):
        return quote_field(value)
    return value


def _join(fields: Iterable[str]) -> str:
    return ",".join(fields)


class CSVExportService:
    """Service rendering records and analytics details as CSV."""

    def render_records(self, records: Sequence[Record]) -> str:
        """Render records with the full table header.

        The description column is always quoted.
        """
        lines = [_join(RECORD_HEADERS)]
        for record in records:
            lines.append(
                _join(
                    [
                        str(record.id),
                        record.kind.label,
                        format_amount_plain(record.amount),
                        escape_field(format_timestamp(record.timestamp, with_seconds=True)),
                        escape_field(record.category or ""),
                        quote_field(record.note or ""),
                    ]
                )
            )
        return "\n".join(lines) + "\n"

    def render_analytics(self, details: Sequence[Record]) -> str:
        """Render analytics details with the short header."""
        lines = [_join(ANALYTICS_HEADERS)]
        for record in details:
            lines.append(
                _join(
                    [
                        escape_field(format_timestamp(record.timestamp, with_seconds=True)),
                        record.kind.label,
                        format_amount_plain(record.amount),
                        escape_field(record.category or ""),
                    ]
                )
            )
        return "\n".join(lines) + "\n"

    def export_records(self, records: Sequence[Record], path: str | Path) -> int:
        """Write records to a CSV file.

        Args:
            records: Records to export
            path: Destination file path

        Returns:
            Number of records written

        Raises:
            ValidationError: If there is nothing to export or the file
                cannot be written
        """
        if not records:
            raise ValidationError("No records to export")
        self._write(path, self.render_records(records))
        return len(records)

    def export_analytics(self, details: Sequence[Record], path: str | Path) -> int:
        """Write analytics details to a CSV file.

        Raises:
            ValidationError: If there are no details to export or the file
                cannot be written
        """
        if not details:
            raise ValidationError("No analytics data to export")
        self._write(path, self.render_analytics(details))
        return len(details)

    @staticmethod
    def _write(path: str | Path, text: str) -> None:
        try:
            with open(path, "w", encoding=CSV_ENCODING, newline="") as f:
                f.write(text)
        except OSError as e:
            raise ValidationError(f"Could not write {path}: {e}")


def default_filename(prefix: str, today: date | None = None) -> str:
    """Build an export filename such as ``ledger_export_2024-01-15.csv``."""
    today = today or date.today()
    return f"{prefix}_{today.isoformat()}.csv"
