"""Tests for domain entities."""

import pytest
from datetime import date, datetime, UTC
from decimal import Decimal

from conftest import make_record
from ledgerview.domain.entities import (
    Analytics,
    AnalyticsSummary,
    FilterCriteria,
    Page,
    Record,
    RecordKind,
    SortOrder,
)


class TestRecord:
    """Tests for Record entity."""

    def test_create_record(self):
        """Test creating a Record entity."""
        record = Record(
            id=1,
            kind=RecordKind.EXPENSE,
            amount=Decimal("350.50"),
            timestamp=datetime(2024, 1, 15, 10, 30, tzinfo=UTC),
            category="Food",
        )
        assert record.id == 1
        assert record.kind == RecordKind.EXPENSE
        assert record.amount == Decimal("350.50")
        assert record.note is None
        assert record.created_at is None

    def test_record_immutability(self):
        """Test that Record entities are immutable."""
        record = make_record(1)
        with pytest.raises(Exception):  # dataclass frozen raises FrozenInstanceError
            record.amount = Decimal("1")

    def test_record_equality(self):
        """Test Record entity equality."""
        assert make_record(1) == make_record(1)
        assert make_record(1) != make_record(2)


class TestRecordKind:
    """Tests for RecordKind parsing and labels."""

    def test_labels(self):
        assert RecordKind.INCOME.label == "Доход"
        assert RecordKind.EXPENSE.label == "Расход"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("income", RecordKind.INCOME),
            (" Expense ", RecordKind.EXPENSE),
            ("Доход", RecordKind.INCOME),
            ("расход", RecordKind.EXPENSE),
        ],
    )
    def test_parse(self, value, expected):
        assert RecordKind.parse(value) == expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown record kind"):
            RecordKind.parse("transfer")


class TestSortOrder:
    """Tests for SortOrder parsing."""

    def test_parse_known_values(self):
        assert SortOrder.parse("amount_asc") == SortOrder.AMOUNT_ASC
        assert SortOrder.parse("amount-desc") == SortOrder.AMOUNT_DESC
        assert SortOrder.parse("DATE_ASC") == SortOrder.DATE_ASC

    @pytest.mark.parametrize("value", [None, "", "by_name"])
    def test_parse_falls_back_to_date_desc(self, value):
        assert SortOrder.parse(value) == SortOrder.DATE_DESC


class TestFilterCriteria:
    """Tests for FilterCriteria."""

    def test_is_empty(self):
        assert FilterCriteria().is_empty
        assert FilterCriteria(category="").is_empty

    def test_not_empty(self):
        assert not FilterCriteria(kind=RecordKind.INCOME).is_empty
        assert not FilterCriteria(date_to=date(2024, 1, 1)).is_empty


class TestPage:
    """Tests for Page derived values."""

    def test_middle_page(self):
        visible = tuple(make_record(i) for i in range(11, 21))
        page = Page(visible=visible, total=35, page_number=2, page_size=10)

        assert page.offset == 10
        assert page.page_count == 4
        assert page.has_previous
        assert page.has_next
        assert (page.first_index, page.last_index) == (11, 20)

    def test_exact_multiple_has_no_next(self):
        visible = tuple(make_record(i) for i in range(3, 5))
        page = Page(visible=visible, total=4, page_number=2, page_size=2)

        assert page.page_count == 2
        assert not page.has_next


class TestAnalytics:
    """Tests for Analytics shortcuts."""

    def test_summary_shortcuts(self):
        summary = AnalyticsSummary(
            sum=Decimal("300"),
            avg=Decimal("100"),
            count=3,
            median=Decimal("90"),
            percent90=Decimal("150"),
        )
        analytics = Analytics(summary=summary)

        assert analytics.sum == Decimal("300")
        assert analytics.avg == Decimal("100")
        assert analytics.count == 3
        assert analytics.median == Decimal("90")
        assert analytics.percent90 == Decimal("150")
        assert analytics.details == ()
        assert analytics.breakdown == {}

    def test_without_summary_adds_up_breakdown(self):
        income = AnalyticsSummary(Decimal("100"), Decimal("50"), 2, Decimal("50"), Decimal("90"))
        expense = AnalyticsSummary(Decimal("30"), Decimal("30"), 1, Decimal("30"), Decimal("30"))
        analytics = Analytics(breakdown={RecordKind.INCOME: income, RecordKind.EXPENSE: expense})

        assert analytics.summary is None
        assert analytics.sum == Decimal("130")
        assert analytics.count == 3
        assert analytics.avg is None
        assert analytics.median is None
        assert analytics.percent90 is None
