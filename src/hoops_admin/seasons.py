"""
Season and year inference for records that do not carry them.

Precedence, first match wins:

1. explicit ``season``/``year`` fields on the record
2. a "<Season> <YYYY>" match in the form title, then the tournament title
3. the month table applied to the purchase/creation date
4. no season, current calendar year
"""

import re
from datetime import date, datetime
from typing import Any, Iterable

SEASONS = ("Spring", "Summer", "Fall", "Winter")

_TITLE_PATTERN = re.compile(r"(Spring|Summer|Fall|Winter|Autumn)\s*(\d{4})", re.IGNORECASE)


def normalize_season(value: Any) -> str:
    """Return the canonical season name, or "" when value is not a season."""
    if not isinstance(value, str):
        return ""
    name = value.strip().capitalize()
    if name == "Autumn":
        return "Fall"
    return name if name in SEASONS else ""


def season_for_month(month: int) -> str:
    """Map a calendar month (1-12) to a season: Mar-May, Jun-Aug, Sep-Nov."""
    if 3 <= month <= 5:
        return "Spring"
    if 6 <= month <= 8:
        return "Summer"
    if 9 <= month <= 11:
        return "Fall"
    return "Winter"


def season_from_title(title: str | None) -> tuple[str, int] | None:
    """Extract ``(season, year)`` from text such as "Spring 2024 Classic"."""
    if not title:
        return None
    match = _TITLE_PATTERN.search(title)
    if not match:
        return None
    return normalize_season(match.group(1)), int(match.group(2))


def _as_year(value: Any) -> int | None:
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    return year if 1900 <= year <= 9999 else None


def infer_season(
    season: Any = None,
    year: Any = None,
    titles: Iterable[str | None] = (),
    when: datetime | date | None = None,
    today: date | None = None,
) -> tuple[str, int]:
    """
    Resolve the season and year of a record.

    Args:
        season: Explicit season field from the backend, if any.
        year: Explicit year field from the backend, if any.
        titles: Free-text titles to search, in priority order.
        when: Purchase or creation timestamp for the month fallback.
        today: Reference date for the final fallback (defaults to today).

    Returns:
        ``(season, year)``; season is "" when nothing could be inferred.
    """
    explicit_season = normalize_season(season)
    explicit_year = _as_year(year)
    if explicit_season and explicit_year:
        return explicit_season, explicit_year

    for title in titles:
        matched = season_from_title(title)
        if matched:
            return explicit_season or matched[0], explicit_year or matched[1]

    if when is not None:
        return explicit_season or season_for_month(when.month), explicit_year or when.year

    return explicit_season, explicit_year or (today or date.today()).year
