"""Shared pytest fixtures for ledgerview tests."""

import json
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from statistics import median

import pytest
import requests
from click.testing import CliRunner

from ledgerview.domain.entities import (
    Analytics,
    AnalyticsSummary,
    Record,
    RecordKind,
    RecordListing,
)
from ledgerview.domain.errors import RecordNotFoundError, TransportError
from ledgerview.domain.ledger import LedgerController
from ledgerview.domain.record_view import RecordView
from ledgerview.store.base import MAX_PAGE_LIMIT, RecordStore
from ledgerview.store.http_store import HttpRecordStore


def make_record(record_id, kind="expense", amount="100", timestamp=None, category=None, note=None):
    """Build a Record with sensible defaults."""
    return Record(
        id=record_id,
        kind=RecordKind(kind),
        amount=Decimal(amount),
        timestamp=timestamp or datetime(2024, 1, 15, 12, 0, tzinfo=UTC),
        category=category,
        note=note,
    )


class InMemoryStore(RecordStore):
    """RecordStore keeping records in a dict, used instead of the HTTP backend.

    Method names listed in ``failing`` raise TransportError, which lets tests
    simulate an unreachable backend for a single operation.
    """

    def __init__(self, records=()):
        self.records = {record.id: record for record in records}
        self.next_id = max(self.records, default=0) + 1
        self.failing = set()
        self.closed = False
        self.calls = []

    def _check(self, operation):
        self.calls.append(operation)
        if operation in self.failing:
            raise TransportError("Could not reach http://localhost:8080: connection refused")

    def close(self):
        self.closed = True

    def list_records(self, page=None, limit=None):
        self._check("list_records")
        page = page or 1
        limit = min(limit or 25, MAX_PAGE_LIMIT)
        items = list(self.records.values())
        start = (page - 1) * limit
        return RecordListing(
            items=tuple(items[start:start + limit]),
            total=len(items),
            page=page,
            limit=limit,
        )

    def get_record(self, record_id):
        self._check("get_record")
        if record_id not in self.records:
            raise RecordNotFoundError(record_id)
        return self.records[record_id]

    def create_record(self, draft):
        self._check("create_record")
        record_id = self.next_id
        self.next_id += 1
        self.records[record_id] = Record(
            id=record_id,
            kind=draft.kind,
            amount=draft.amount,
            timestamp=draft.timestamp,
            category=draft.category,
            note=draft.note,
        )
        return record_id

    def update_record(self, record_id, draft):
        self._check("update_record")
        if record_id not in self.records:
            raise RecordNotFoundError(record_id)
        self.records[record_id] = Record(
            id=record_id,
            kind=draft.kind,
            amount=draft.amount,
            timestamp=draft.timestamp,
            category=draft.category,
            note=draft.note,
        )

    def delete_record(self, record_id):
        self._check("delete_record")
        if record_id not in self.records:
            raise RecordNotFoundError(record_id)
        del self.records[record_id]

    def get_analytics(self, date_from, date_to):
        self._check("get_analytics")
        self.analytics_period = (date_from, date_to)
        details = tuple(
            record
            for record in self.records.values()
            if date_from <= record.timestamp <= date_to
        )
        amounts = sorted(record.amount for record in details)
        if not amounts:
            zero = Decimal("0")
            return Analytics(summary=AnalyticsSummary(zero, zero, 0, zero, zero))
        total = sum(amounts, Decimal("0"))
        summary = AnalyticsSummary(
            sum=total,
            avg=total / len(amounts),
            count=len(amounts),
            median=median(amounts),
            percent90=amounts[int(0.9 * (len(amounts) - 1))],
        )
        return Analytics(summary=summary, details=details)

    def export_csv(self, date_from=None, date_to=None):
        self._check("export_csv")
        self.export_period = (date_from, date_to)
        return "id,type,amount\n".encode("utf-8") + b"".join(
            f"{r.id},{r.kind.value},{r.amount}\n".encode("utf-8") for r in self.records.values()
        )


def make_response(status_code=200, payload=None, text=None, reason=None):
    """Build a real requests.Response with a JSON or text body."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.encoding = "utf-8"
    if payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    else:
        response._content = (text or "").encode("utf-8")
    return response


class FakeSession:
    """Stand-in for requests.Session replaying queued responses.

    Queued exceptions are raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


def item_payload(record_id=1, **overrides):
    """JSON item as returned by GET /items/{id}."""
    payload = {
        "id": record_id,
        "type": "expense",
        "amount": 350.5,
        "date": "2024-01-15T10:30:00Z",
        "category": "Food",
        "description": "Lunch",
        "created_at": "2024-01-15T10:31:00Z",
        "updated_at": "2024-01-15T10:31:00Z",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def sample_records():
    """A small mixed working set spanning several days."""
    base = datetime(2024, 1, 10, 9, 0, tzinfo=UTC)
    return [
        make_record(1, "income", "50000", base, "Salary", "January salary"),
        make_record(2, "expense", "350.50", base + timedelta(days=1), "Food", "Lunch"),
        make_record(3, "expense", "1200", base + timedelta(days=2), "Transport", None),
        make_record(4, "expense", "89.90", base + timedelta(days=3), None, "Coffee beans"),
        make_record(5, "income", "1500", base + timedelta(days=4), "Freelance", "Logo design"),
        make_record(6, "expense", "350.50", base + timedelta(days=5), "food delivery", None),
    ]


@pytest.fixture
def store(sample_records):
    """In-memory store preloaded with the sample records."""
    return InMemoryStore(sample_records)


@pytest.fixture
def empty_store():
    return InMemoryStore()


@pytest.fixture
def controller(store):
    """Ledger controller over the sample store with the records loaded."""
    controller = LedgerController(store, RecordView())
    controller.reload()
    return controller


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def run_cli(cli_runner, store):
    """Invoke the CLI against the in-memory store."""
    from ledgerview.cli.main import cli

    def run(*args, input=None):
        return cli_runner.invoke(cli, list(args), obj={"store": store}, input=input)

    return run


@pytest.fixture
def http_store_factory():
    """Build an HttpRecordStore over a FakeSession with queued responses."""

    def factory(*responses):
        session = FakeSession(*responses)
        return HttpRecordStore("http://ledger.test/", timeout=5.0, session=session), session

    return factory
