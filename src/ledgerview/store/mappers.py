"""Mapper functions to convert between JSON payloads and domain entities.

This layer isolates the wire format, so a change in the backend's JSON
only touches this module. Every malformed payload is reported as
``ResponseShapeError``.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil import parser as date_parser

from ledgerview.domain import entities as domain
from ledgerview.domain.errors import ResponseShapeError
from ledgerview.utils.date_parser import format_rfc3339, to_utc


def _require(payload: dict[str, Any], key: str) -> Any:
    if key not in payload or payload[key] is None:
        raise ResponseShapeError(f"Missing field '{key}' in response")
    return payload[key]


def _to_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool):
        raise ResponseShapeError(f"Field '{key}' is not a number: {value!r}")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ResponseShapeError(f"Field '{key}' is not a number: {value!r}")
    if not number.is_finite():
        raise ResponseShapeError(f"Field '{key}' is not a number: {value!r}")
    return number


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ResponseShapeError(f"Field '{key}' is not an integer: {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ResponseShapeError(f"Field '{key}' is not an integer: {value!r}")


def _to_datetime(value: Any, key: str) -> datetime:
    if not isinstance(value, str):
        raise ResponseShapeError(f"Field '{key}' is not a timestamp: {value!r}")
    try:
        return to_utc(date_parser.isoparse(value))
    except ValueError:
        raise ResponseShapeError(f"Field '{key}' is not a timestamp: {value!r}")


def _optional_datetime(payload: dict[str, Any], key: str) -> Optional[datetime]:
    value = payload.get(key)
    if not value:
        return None
    return _to_datetime(value, key)


def _optional_text(payload: dict[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ResponseShapeError(f"Field '{key}' is not a string: {value!r}")
    return value or None


def _expect_object(payload: Any, what: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ResponseShapeError(f"Expected {what} object, got {type(payload).__name__}")
    return payload


def _expect_list(payload: Any, key: str) -> list[Any]:
    if not isinstance(payload, list):
        raise ResponseShapeError(f"Field '{key}' is not a list")
    return payload


def record_to_domain(payload: Any) -> domain.Record:
    """Convert an item payload to a domain Record."""
    payload = _expect_object(payload, "record")

    raw_kind = _require(payload, "type")
    try:
        kind = domain.RecordKind(raw_kind)
    except ValueError:
        raise ResponseShapeError(f"Unknown record type {raw_kind!r}")

    amount = _to_decimal(_require(payload, "amount"), "amount")
    if amount <= 0:
        raise ResponseShapeError(f"Record amount must be positive, got {amount}")

    return domain.Record(
        id=_to_int(_require(payload, "id"), "id"),
        kind=kind,
        amount=amount,
        timestamp=_to_datetime(_require(payload, "date"), "date"),
        category=_optional_text(payload, "category"),
        note=_optional_text(payload, "description"),
        created_at=_optional_datetime(payload, "created_at"),
        updated_at=_optional_datetime(payload, "updated_at"),
    )


def listing_to_domain(payload: Any, page: int, limit: int) -> domain.RecordListing:
    """Convert a GET /items payload to a RecordListing.

    ``total`` falls back to the number of items when the backend omits it.
    """
    payload = _expect_object(payload, "listing")
    items = tuple(
        record_to_domain(item) for item in _expect_list(_require(payload, "items"), "items")
    )
    total = payload.get("total")
    return domain.RecordListing(
        items=items,
        total=_to_int(total, "total") if total is not None else len(items),
        page=_to_int(payload.get("page") or page, "page"),
        limit=_to_int(payload.get("limit") or limit, "limit"),
    )


_SUMMARY_FIELDS = ("sum", "avg", "count", "median", "percent90")


def summary_to_domain(payload: Any) -> domain.AnalyticsSummary:
    """Convert the aggregate fields of an analytics payload."""
    payload = _expect_object(payload, "analytics")
    return domain.AnalyticsSummary(
        sum=_to_decimal(_require(payload, "sum"), "sum"),
        avg=_to_decimal(_require(payload, "avg"), "avg"),
        count=_to_int(_require(payload, "count"), "count"),
        median=_to_decimal(_require(payload, "median"), "median"),
        percent90=_to_decimal(_require(payload, "percent90"), "percent90"),
    )


def analytics_to_domain(payload: Any) -> domain.Analytics:
    """Convert a GET /analytics payload to Analytics.

    Optional ``income``/``expense`` sections become the per-kind breakdown.
    A payload made only of those sections has no overall summary.
    """
    payload = _expect_object(payload, "analytics")
    details = payload.get("details") or []
    breakdown = {
        kind: summary_to_domain(payload[kind.value])
        for kind in domain.RecordKind
        if isinstance(payload.get(kind.value), dict)
    }
    if breakdown and not any(key in payload for key in _SUMMARY_FIELDS):
        summary = None
    else:
        summary = summary_to_domain(payload)
    return domain.Analytics(
        summary=summary,
        details=tuple(record_to_domain(item) for item in _expect_list(details, "details")),
        breakdown=breakdown,
    )


def draft_to_payload(draft: domain.RecordDraft) -> dict[str, Any]:
    """Convert a draft to the JSON body of POST/PUT /items."""
    return {
        "type": draft.kind.value,
        "amount": float(draft.amount),
        "date": format_rfc3339(draft.timestamp),
        "category": draft.category or "",
        "description": draft.note or "",
    }


def created_id_from_payload(payload: Any) -> int:
    """Extract the new record ID from a POST /items response."""
    payload = _expect_object(payload, "create response")
    return _to_int(_require(payload, "id"), "id")
