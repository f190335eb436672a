"""
Utility functions for record normalization and display formatting.

Provides helpers for:
- Date parsing (ISO timestamps from the backend plus m/d/y form input)
- Currency and date formatting
- Numeric coercion of loosely typed JSON values
"""

from datetime import datetime, timezone
from typing import Any


def parse_date(date_str: str | None) -> datetime | None:
    """
    Parse a date or timestamp string into a naive UTC datetime.

    Args:
        date_str: ISO 8601 text (``2024-03-05``, ``2024-03-05T10:00:00.000Z``)
            or m/d/y text (``3/5/2024``, ``3/5/24``).

    Returns:
        datetime if parsing succeeds, None otherwise. Offsets are converted
        to UTC and dropped so parsed values always compare with each other.
    """
    if date_str:
        date_str = str(date_str).strip()
    if not date_str:
        return None

    iso = date_str[:-1] + "+00:00" if date_str.endswith("Z") else date_str
    try:
        parsed = datetime.fromisoformat(iso)
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in ("%m/%d/%Y", "%m/%d/%y"):
            try:
                parsed = datetime.strptime(date_str, fmt)
                break
            except ValueError:
                continue

    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_float(value: Any, default: float = 0.0) -> float:
    """Coerce a JSON number or numeric string to float."""
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def to_int(value: Any, default: int = 0) -> int:
    """Coerce a JSON number or numeric string to int."""
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def format_currency(value: float, currency: str = "USD") -> str:
    """
    Format a currency amount for table cells.

    Returns:
        ``$1,234.56`` for USD, ``EUR 1,234.56`` for other codes.
    """
    if (currency or "USD").upper() == "USD":
        return f"${value:,.2f}"
    return f"{currency.upper()} {value:,.2f}"


def format_date(value: datetime | None, with_time: bool = False) -> str:
    """Format a datetime for display, or the N/A label."""
    if not value:
        return "N/A"
    if with_time:
        return value.strftime("%b %d, %Y %I:%M %p")
    return value.strftime("%b %d, %Y")


def title_case(value: str | None, default: str = "N/A") -> str:
    """Capitalize a status-like token (``pending`` -> ``Pending``)."""
    if not value:
        return default
    return value[:1].upper() + value[1:]
