"""Input checks run before a request is sent."""

from datetime import date, datetime

from hoops_admin.errors import ValidationError

_DAY_FORMAT = "%Y-%m-%d"


def parse_day(value: str | date | None, label: str) -> date:
    """Parse a YYYY-MM-DD string (or pass a date through) or raise ValidationError."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required.", field=label.lower().replace(" ", "_"))
    try:
        return datetime.strptime(text, _DAY_FORMAT).date()
    except ValueError as exc:
        msg = f"{label} must be a date in YYYY-MM-DD format."
        raise ValidationError(msg, field=label.lower().replace(" ", "_")) from exc


def require_date_range(start: str | date | None, end: str | date | None) -> tuple[date, date]:
    """
    Validate an inclusive date range for date-bounded sync requests.

    Raises:
        ValidationError: A side is missing or malformed, or start is after end.
    """
    start_day = parse_day(start, "Start date")
    end_day = parse_day(end, "End date")
    if start_day > end_day:
        raise ValidationError("Start date must be on or before end date.", field="start_date")
    return start_day, end_day
