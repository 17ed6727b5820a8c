"""Record form validation.

Raw user input is turned into a ``RecordDraft`` here, before anything is
sent to the store. Records in the working set are therefore always
well-formed and the view never has to reject data.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerview.domain.entities import Record, RecordDraft, RecordKind
from ledgerview.domain.errors import (
    ValidationError,
    invalid_amount,
    invalid_date_range,
    missing_field,
)
from ledgerview.utils.amount_parser import parse_amount
from ledgerview.utils.date_parser import parse_timestamp


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_kind(value: Optional[str]) -> RecordKind:
    """Parse a record kind, raising ValidationError when missing or unknown."""
    if value is None or not value.strip():
        raise ValidationError(missing_field("kind"))
    try:
        return RecordKind.parse(value)
    except ValueError as e:
        raise ValidationError(str(e))


def parse_positive_amount(value: Optional[str]) -> Decimal:
    """Parse an amount that must be strictly positive."""
    if value is None or not value.strip():
        raise ValidationError(missing_field("amount"))
    try:
        amount = parse_amount(value)
    except ValueError:
        raise ValidationError(invalid_amount(value))
    if amount <= 0:
        raise ValidationError(invalid_amount(value))
    return amount


def build_draft(
    kind: Optional[str],
    amount: Optional[str],
    timestamp: Optional[str],
    category: Optional[str] = None,
    note: Optional[str] = None,
) -> RecordDraft:
    """Validate raw form fields and build a draft.

    Args:
        kind: "income"/"expense" or their display labels
        amount: Amount string, must parse to a positive number
        timestamp: Timestamp string; naive values are local time
        category: Optional category, blank means none
        note: Optional note, blank means none

    Returns:
        RecordDraft ready to be sent to the store

    Raises:
        ValidationError: If any required field is missing or invalid
    """
    record_kind = parse_kind(kind)
    record_amount = parse_positive_amount(amount)

    if timestamp is None or not timestamp.strip():
        raise ValidationError(missing_field("date"))
    try:
        record_timestamp = parse_timestamp(timestamp)
    except ValueError as e:
        raise ValidationError(f"Invalid date: {e}")

    return RecordDraft(
        kind=record_kind,
        amount=record_amount,
        timestamp=record_timestamp,
        category=_clean_text(category),
        note=_clean_text(note),
    )


def merge_draft(
    record: Record,
    kind: Optional[str] = None,
    amount: Optional[str] = None,
    timestamp: Optional[str] = None,
    category: Optional[str] = None,
    note: Optional[str] = None,
) -> RecordDraft:
    """Build a full draft from an existing record and the changed fields.

    Fields left as None keep the record's value. An empty string clears
    category or note.

    Raises:
        ValidationError: If a changed field is invalid
    """
    return build_draft(
        kind=kind if kind is not None else record.kind.value,
        amount=amount if amount is not None else str(record.amount),
        timestamp=timestamp if timestamp is not None else record.timestamp.isoformat(),
        category=category if category is not None else record.category,
        note=note if note is not None else record.note,
    )


def validate_period(date_from: Optional[date], date_to: Optional[date]) -> tuple[date, date]:
    """Check an analytics period: both bounds required, start not after end.

    Raises:
        ValidationError: If a bound is missing or the range is inverted
    """
    if date_from is None:
        raise ValidationError(missing_field("from"))
    if date_to is None:
        raise ValidationError(missing_field("to"))
    if date_from > date_to:
        raise ValidationError(invalid_date_range(date_from, date_to))
    return date_from, date_to
