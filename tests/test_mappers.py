"""Tests for JSON payload mappers."""

import pytest
from datetime import datetime, UTC
from decimal import Decimal

from conftest import item_payload
from ledgerview.domain.entities import RecordDraft, RecordKind
from ledgerview.domain.errors import ResponseShapeError
from ledgerview.store.mappers import (
    analytics_to_domain,
    created_id_from_payload,
    draft_to_payload,
    listing_to_domain,
    record_to_domain,
)


def _analytics_payload(**overrides):
    payload = {
        "sum": 1550.5,
        "avg": 516.83,
        "count": 3,
        "median": 350.5,
        "percent90": 1000,
        "details": [item_payload(1), item_payload(2, amount=1000, category="")],
    }
    payload.update(overrides)
    return payload


class TestRecordMapper:
    """Tests for record payload conversion."""

    def test_record_to_domain(self):
        """Test converting an item payload to a domain Record."""
        record = record_to_domain(item_payload(5))

        assert record.id == 5
        assert record.kind == RecordKind.EXPENSE
        assert record.amount == Decimal("350.5")
        assert record.timestamp == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        assert record.category == "Food"
        assert record.note == "Lunch"
        assert record.created_at == datetime(2024, 1, 15, 10, 31, tzinfo=UTC)

    def test_offset_timestamps_are_converted_to_utc(self):
        record = record_to_domain(item_payload(date="2024-01-15T13:30:00+03:00"))

        assert record.timestamp == datetime(2024, 1, 15, 10, 30, tzinfo=UTC)
        assert record.timestamp.tzinfo == UTC

    def test_empty_text_fields_become_none(self):
        record = record_to_domain(
            item_payload(category="", description=None, created_at=None, updated_at="")
        )

        assert record.category is None
        assert record.note is None
        assert record.created_at is None
        assert record.updated_at is None

    def test_amount_keeps_decimal_precision(self):
        assert record_to_domain(item_payload(amount="0.1")).amount == Decimal("0.1")
        assert record_to_domain(item_payload(amount=0.1)).amount == Decimal("0.1")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"type": "transfer"},
            {"amount": 0},
            {"amount": -10},
            {"amount": "lots"},
            {"amount": True},
            {"amount": None},
            {"date": "yesterday"},
            {"date": 1705314600},
            {"id": "seven"},
            {"category": 5},
        ],
    )
    def test_invalid_record_payload(self, overrides):
        with pytest.raises(ResponseShapeError):
            record_to_domain(item_payload(**overrides))

    def test_missing_field(self):
        payload = item_payload()
        del payload["type"]
        with pytest.raises(ResponseShapeError, match="type"):
            record_to_domain(payload)

    def test_not_an_object(self):
        with pytest.raises(ResponseShapeError):
            record_to_domain(["id", 1])


class TestListingMapper:
    """Tests for GET /items payload conversion."""

    def test_listing_to_domain(self):
        payload = {"items": [item_payload(1), item_payload(2)], "total": 40, "page": 2, "limit": 2}

        listing = listing_to_domain(payload, page=1, limit=25)

        assert [record.id for record in listing.items] == [1, 2]
        assert listing.total == 40
        assert listing.page == 2
        assert listing.limit == 2

    def test_listing_defaults_from_request(self):
        listing = listing_to_domain({"items": [item_payload(1)]}, page=3, limit=100)

        assert listing.total == 1
        assert listing.page == 3
        assert listing.limit == 100

    def test_listing_items_must_be_list(self):
        with pytest.raises(ResponseShapeError):
            listing_to_domain({"items": {"id": 1}}, page=1, limit=25)

    def test_listing_requires_items(self):
        with pytest.raises(ResponseShapeError):
            listing_to_domain({"total": 0}, page=1, limit=25)


class TestAnalyticsMapper:
    """Tests for GET /analytics payload conversion."""

    def test_analytics_to_domain(self):
        analytics = analytics_to_domain(_analytics_payload())

        assert analytics.sum == Decimal("1550.5")
        assert analytics.avg == Decimal("516.83")
        assert analytics.count == 3
        assert analytics.median == Decimal("350.5")
        assert analytics.percent90 == Decimal("1000")
        assert [record.id for record in analytics.details] == [1, 2]
        assert analytics.details[1].category is None
        assert analytics.breakdown == {}

    def test_missing_details_means_no_records(self):
        analytics = analytics_to_domain(_analytics_payload(details=None, count=0))

        assert analytics.details == ()

    def test_per_kind_breakdown(self):
        income = {"sum": 5000, "avg": 5000, "count": 1, "median": 5000, "percent90": 5000}
        analytics = analytics_to_domain(_analytics_payload(income=income))

        assert list(analytics.breakdown) == [RecordKind.INCOME]
        assert analytics.breakdown[RecordKind.INCOME].sum == Decimal("5000")

    def test_missing_aggregate(self):
        payload = _analytics_payload()
        del payload["median"]
        with pytest.raises(ResponseShapeError, match="median"):
            analytics_to_domain(payload)


class TestDraftMapper:
    """Tests for request payloads."""

    def test_draft_to_payload(self):
        draft = RecordDraft(
            kind=RecordKind.INCOME,
            amount=Decimal("1500.25"),
            timestamp=datetime(2024, 1, 15, 9, 0, tzinfo=UTC),
            category="Freelance",
        )

        assert draft_to_payload(draft) == {
            "type": "income",
            "amount": 1500.25,
            "date": "2024-01-15T09:00:00Z",
            "category": "Freelance",
            "description": "",
        }

    def test_created_id_from_payload(self):
        assert created_id_from_payload({"id": 42}) == 42

    def test_created_id_missing(self):
        with pytest.raises(ResponseShapeError):
            created_id_from_payload({})


class TestPerKindAnalyticsMapper:
    """Tests for analytics payloads made only of income/expense sections."""

    def test_sections_only_payload(self):
        payload = {
            "income": {"sum": 5000, "avg": 2500, "count": 2, "median": 2500, "percent90": 4000},
            "expense": {"sum": 350.5, "avg": 350.5, "count": 1, "median": 350.5, "percent90": 350.5},
            "details": [item_payload(1)],
        }

        analytics = analytics_to_domain(payload)

        assert analytics.summary is None
        assert analytics.breakdown[RecordKind.INCOME].count == 2
        assert analytics.breakdown[RecordKind.EXPENSE].sum == Decimal("350.5")
        assert analytics.sum == Decimal("5350.5")
        assert analytics.count == 3
        assert analytics.median is None
        assert [record.id for record in analytics.details] == [1]

    def test_sections_only_payload_without_details(self):
        empty = {"sum": 0, "avg": 0, "count": 0, "median": 0, "percent90": 0}

        analytics = analytics_to_domain({"income": empty, "expense": empty, "details": None})

        assert analytics.details == ()
        assert analytics.count == 0

    def test_partial_flat_summary_is_still_an_error(self):
        income = {"sum": 1, "avg": 1, "count": 1, "median": 1, "percent90": 1}

        with pytest.raises(ResponseShapeError, match="avg"):
            analytics_to_domain({"sum": 1, "income": income})

    def test_no_aggregates_at_all(self):
        with pytest.raises(ResponseShapeError, match="sum"):
            analytics_to_domain({"details": []})
