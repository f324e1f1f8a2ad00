"""
Utility functions for safe data access and calendar math in analytics calculations.
"""

from calendar import monthrange
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def safe_get(data: Any, key: str, default: Any = None) -> Any:
    """
    Safely get value from dict, handling None values.

    Args:
        data: Dictionary to read from
        key: Key to retrieve
        default: Default value if key missing or value is None

    Returns:
        Value from dict, or default if missing/None
    """
    if not isinstance(data, dict):
        return default

    value = data.get(key, default)
    return default if value is None else value


def safe_float(value: Any, default: float = 0.0) -> float:
    """
    Safely convert value to float.

    Args:
        value: Value to convert (int, float, Decimal or numeric string)
        default: Default if conversion fails

    Returns:
        Float value, or default
    """
    if value is None or isinstance(value, bool):
        return default

    try:
        if isinstance(value, (int, float, Decimal)):
            return float(value)
        if isinstance(value, str):
            # Remove commas and whitespace
            cleaned = value.replace(",", "").strip()
            return float(cleaned) if cleaned else default
        return default
    except (ValueError, TypeError, InvalidOperation):
        return default


def safe_str(value: Any, default: str = "") -> str:
    """Safely convert value to a stripped string."""
    if value is None:
        return default
    return str(value).strip()


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Parse a document date field into an aware UTC datetime.

    Accepts datetime, date, ISO-8601 strings (including a trailing "Z")
    and epoch milliseconds.

    Returns:
        Aware datetime, or None when the value cannot be interpreted
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(text))
        except ValueError:
            return None

    return None


def month_start(value: datetime) -> datetime:
    """First instant of the calendar month containing value."""
    return value.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(value: datetime, months: int) -> datetime:
    """
    Shift a datetime by whole calendar months.

    The day of month is clamped to the length of the target month,
    so 31 March minus one month is 28/29 February.
    """
    month_index = value.year * 12 + (value.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    _, last_day = monthrange(year, month)
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def month_label(value: datetime) -> str:
    """Format a month as "Mon YYYY" (e.g. "Oct 2026")."""
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.year}"


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_thousands(amount: float) -> str:
    """Format a currency amount in thousands, e.g. 52300 -> "₹52.3K"."""
    return f"₹{amount / 1000:.1f}K"
