"""Display formatting helpers for amounts and timestamps."""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ledgerview.utils.date_parser import to_utc

CURRENCY_SYMBOL = "₽"
NO_CATEGORY = "Без категории"

_CENT = Decimal("0.01")


def format_number(value: Decimal | int | float) -> str:
    """Format a number with two decimals, space thousands and decimal comma.

    Examples:
        Decimal("1234.5") -> "1 234,50"
    """
    quantized = Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    text = f"{quantized:,.2f}"
    return text.replace(",", " ").replace(".", ",")


def format_currency(value: Optional[Decimal | int | float]) -> str:
    """Format a monetary amount for display, e.g. "1 234,50 ₽"."""
    if value is None:
        value = Decimal("0")
    return f"{format_number(value)} {CURRENCY_SYMBOL}"


def format_amount_plain(value: Decimal) -> str:
    """Format an amount with two decimals and a dot, as written to CSV."""
    return f"{value.quantize(_CENT, rounding=ROUND_HALF_UP):.2f}"


def format_timestamp(value: Optional[datetime], with_seconds: bool = False) -> str:
    """Format a timestamp as "DD.MM.YYYY HH:MM" in UTC, or "-" when absent."""
    if value is None:
        return "-"
    fmt = "%d.%m.%Y %H:%M:%S" if with_seconds else "%d.%m.%Y %H:%M"
    return to_utc(value).strftime(fmt)


def category_label(category: Optional[str]) -> str:
    """Return the category for display, or the placeholder when unset."""
    return category or NO_CATEGORY
