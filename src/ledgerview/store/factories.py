"""Store factory functions for creating store instances."""

import os
from typing import Optional

from ledgerview.store.http_store import DEFAULT_TIMEOUT, HttpRecordStore

DEFAULT_API_URL = "http://localhost:8080"


def create_http_store(
    base_url: Optional[str] = None, timeout: Optional[float] = None
) -> HttpRecordStore:
    """Create an HTTP record store.

    Args:
        base_url: Backend origin. If None, checks LEDGERVIEW_API_URL
            environment variable, then defaults to http://localhost:8080
        timeout: Request timeout in seconds. If None, checks
            LEDGERVIEW_TIMEOUT, then defaults to 10 seconds

    Returns:
        HttpRecordStore instance

    Raises:
        ValueError: If LEDGERVIEW_TIMEOUT is not a number
    """
    if base_url is None:
        base_url = os.environ.get("LEDGERVIEW_API_URL") or DEFAULT_API_URL

    if timeout is None:
        raw_timeout = os.environ.get("LEDGERVIEW_TIMEOUT")
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT

    return HttpRecordStore(base_url, timeout=timeout)
