"""Date parsing utilities."""

from datetime import UTC, date, datetime, time, timedelta
from dateutil import parser as date_parser


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware UTC datetime.

    Date-only values ("2024-03-15") are taken as midnight UTC, and values
    without an offset are taken as UTC.

    Args:
        value: ISO-8601 timestamp string

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the value is not a parseable ISO-8601 timestamp
    """
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Could not parse timestamp {value!r}")

    try:
        dt = date_parser.isoparse(value.strip())
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp {value!r}: {e}")

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime the way new transactions are stored.

    Produces ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC.
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    moment = moment.astimezone(UTC)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday" and "tomorrow".

    Raises:
        ValueError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = datetime.now(UTC).date()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def date_to_timestamp(day: date) -> str:
    """Return the stored timestamp for midnight UTC of ``day``."""
    return format_timestamp(datetime.combine(day, time(0, 0), tzinfo=UTC))
