"""Date and timestamp parsing utilities."""

from datetime import UTC, date, datetime, time, timedelta
from typing import Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

PERIODS = (
    "today",
    "this-week",
    "this-month",
    "this-year",
    "last-week",
    "last-month",
    "last-year",
    "past-week",
    "past-month",
    "past-quarter",
)


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    # Handle "last/this" + time period
    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            # Monday of last week
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    if not date_str:
        raise ValueError("Empty date string")

    try:
        return date_parser.parse(date_str).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def parse_timestamp(value: str, now: Optional[datetime] = None) -> datetime:
    """Parse a timestamp string into an aware UTC datetime.

    Accepts RFC 3339 strings ("2024-01-15T10:30:00Z"), local date-times
    ("2024-01-15 10:30", "2024-01-15T10:30") and the keyword "now".
    Values without an offset are interpreted in the local time zone.

    Args:
        value: Timestamp string
        now: Reference time used for "now" (defaults to the current time)

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the string cannot be parsed
    """
    text = value.strip()
    if not text:
        raise ValueError("Empty timestamp string")

    if text.lower() == "now":
        return to_utc(now or datetime.now(UTC))

    try:
        parsed = date_parser.isoparse(text)
    except ValueError:
        try:
            parsed = date_parser.parse(text)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Could not parse timestamp '{text}': {e}")
    return to_utc(parsed)


def to_utc(value: datetime) -> datetime:
    """Convert a datetime to UTC, treating naive values as local time."""
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC)


def start_of_day(day: date) -> datetime:
    """Return the first instant of a UTC day."""
    return datetime.combine(day, time.min, tzinfo=UTC)


def end_of_day(day: date) -> datetime:
    """Return the last representable instant of a UTC day."""
    return datetime.combine(day, time.max, tzinfo=UTC)


def format_rfc3339(value: datetime) -> str:
    """Format a datetime as the RFC 3339 UTC string the backend expects."""
    return to_utc(value).strftime("%Y-%m-%dT%H:%M:%SZ")


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a specified period.

    Calendar periods (this-*, last-*) snap to week/month/year boundaries.
    Rolling periods (past-*) end today and reach back a fixed distance.

    Args:
        period: One of PERIODS
        today: Reference day (defaults to date.today())

    Returns:
        Tuple of (start_date, end_date) for the specified period

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()

    if period == "today":
        return (today, today)

    elif period == "this-week":
        return (today - timedelta(days=today.weekday()), today)

    elif period == "this-month":
        return (today.replace(day=1), today)

    elif period == "this-year":
        return (today.replace(month=1, day=1), today)

    elif period == "last-week":
        start_date = today - timedelta(days=today.weekday() + 7)
        return (start_date, start_date + timedelta(days=6))

    elif period == "last-month":
        start_date = (today - relativedelta(months=1)).replace(day=1)
        end_date = today.replace(day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "last-year":
        start_date = today.replace(month=1, day=1) - relativedelta(years=1)
        end_date = today.replace(month=1, day=1) - timedelta(days=1)
        return (start_date, end_date)

    elif period == "past-week":
        return (today - timedelta(days=7), today)

    elif period == "past-month":
        return (today - relativedelta(months=1), today)

    elif period == "past-quarter":
        return (today - relativedelta(months=3), today)

    else:
        raise ValueError(
            f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}"
        )
