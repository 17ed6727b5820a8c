"""Record store backed by the ledger's REST API."""

from datetime import datetime
from typing import Any, Optional

import requests

from ledgerview.domain.entities import Analytics, Record, RecordDraft, RecordListing
from ledgerview.domain.errors import (
    RecordNotFoundError,
    ResponseShapeError,
    ServerError,
    TransportError,
)
from ledgerview.logging_setup import get_logger
from ledgerview.store import mappers
from ledgerview.store.base import RecordStore
from ledgerview.utils.date_parser import format_rfc3339

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpRecordStore(RecordStore):
    """RecordStore talking to ``/items`` and ``/analytics`` over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the HTTP store.

        Args:
            base_url: Backend origin, e.g. "http://localhost:8080"
            timeout: Per-request timeout in seconds
            session: Optional session to reuse (tests inject a fake one)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def _request(
        self,
        method: str,
        path: str,
        record_id: Optional[int] = None,
        **kwargs: Any,
    ) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, kwargs.get("params"))
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e

        if response.status_code == 404 and record_id is not None:
            raise RecordNotFoundError(record_id, _error_message(response))
        if not 200 <= response.status_code < 300:
            message = _error_message(response)
            logger.warning("%s %s returned %s: %s", method, url, response.status_code, message)
            raise ServerError(response.status_code, message)
        return response

    def _json(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ResponseShapeError(f"Response is not valid JSON: {e}") from e

    def list_records(
        self, page: Optional[int] = None, limit: Optional[int] = None
    ) -> RecordListing:
        params = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        response = self._request("GET", "/items", params=params or None)
        listing = mappers.listing_to_domain(self._json(response), page or 1, limit or 0)
        logger.info("Loaded %d of %d records (page %d)", len(listing.items), listing.total, listing.page)
        return listing

    def get_record(self, record_id: int) -> Record:
        response = self._request("GET", f"/items/{record_id}", record_id=record_id)
        return mappers.record_to_domain(self._json(response))

    def create_record(self, draft: RecordDraft) -> int:
        response = self._request("POST", "/items", json=mappers.draft_to_payload(draft))
        record_id = mappers.created_id_from_payload(self._json(response))
        logger.info("Created record %d", record_id)
        return record_id

    def update_record(self, record_id: int, draft: RecordDraft) -> None:
        self._request(
            "PUT",
            f"/items/{record_id}",
            record_id=record_id,
            json=mappers.draft_to_payload(draft),
        )
        logger.info("Updated record %d", record_id)

    def delete_record(self, record_id: int) -> None:
        self._request("DELETE", f"/items/{record_id}", record_id=record_id)
        logger.info("Deleted record %d", record_id)

    def get_analytics(self, date_from: datetime, date_to: datetime) -> Analytics:
        params = {"from": format_rfc3339(date_from), "to": format_rfc3339(date_to)}
        response = self._request("GET", "/analytics", params=params)
        return mappers.analytics_to_domain(self._json(response))

    def export_csv(
        self, date_from: Optional[datetime] = None, date_to: Optional[datetime] = None
    ) -> bytes:
        params = None
        if date_from is not None and date_to is not None:
            params = {"from": format_rfc3339(date_from), "to": format_rfc3339(date_to)}
        response = self._request("GET", "/items/export", params=params)
        return response.content


def _error_message(response: requests.Response) -> str:
    """Extract a readable error from a JSON ``{"error": ...}`` or text body."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    text = (response.text or "").strip()
    return text or response.reason or "request failed"
