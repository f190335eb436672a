"""
Query building for list and export requests.

``build_query`` turns filter state, sort and pagination into an ordered list
of ``(key, value)`` string pairs. The order only depends on the field
declarations (or on sorted field names when none are given), so equal
filter states always yield identical query strings.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Sequence
from urllib.parse import quote, urlencode

from hoops_admin.models.common import DateRange, FilterState, is_blank
from hoops_admin.resources import DATE_RANGE, FilterField

QueryPairs = list[tuple[str, str]]


@dataclass(frozen=True)
class ListQuery:
    """
    Inputs of one list request.

    Attributes:
        filters: Filter values at dispatch time.
        sort: Sort token or None.
        page: Requested page (1-indexed).
        page_size: Rows per page.
        scope: Path parameters (e.g. tournament name and year).
    """

    filters: FilterState = field(default_factory=FilterState)
    sort: str | None = None
    page: int = 1
    page_size: int = 20
    scope: Mapping[str, Any] = field(default_factory=dict)


def format_day(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime("%Y-%m-%d")


def _value_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return format_day(value)
    return str(value).strip()


def build_query(
    filters: FilterState | Mapping[str, Any],
    fields: Sequence[FilterField] | None = None,
    sort: str | None = None,
    page: int | None = None,
    page_size: int | None = None,
) -> QueryPairs:
    """
    Build the ordered query parameters for a list request.

    Rules:
        - a field whose value is None, "" or an empty date range is omitted
        - a date range expands into ``startDate``/``endDate`` (YYYY-MM-DD),
          each only for its non-null side
        - ``sort`` is appended only when set
        - ``page``/``limit`` are appended only when given (exports omit them)

    Args:
        filters: Filter state or a plain mapping of field name to value.
        fields: Field declarations; their order fixes the parameter order.
            Without them, field names are used as keys in sorted order.
        sort: Sort token.
        page: Page number.
        page_size: Page size, sent as ``limit``.
    """
    values = filters.values if isinstance(filters, FilterState) else filters
    if fields is None:
        params = [
            (name, name, DATE_RANGE if isinstance(values[name], DateRange) or name == "dateRange" else None)
            for name in sorted(values)
        ]
    else:
        params = [(f.name, f.query_key, f.kind) for f in fields]

    pairs: QueryPairs = []
    for name, key, kind in params:
        value = values.get(name)
        if is_blank(value):
            continue
        if kind == DATE_RANGE:
            date_range = DateRange.coerce(value)
            if date_range.start is not None:
                pairs.append(("startDate", format_day(date_range.start)))
            if date_range.end is not None:
                pairs.append(("endDate", format_day(date_range.end)))
            continue
        pairs.append((key, _value_text(value)))

    if sort:
        pairs.append(("sort", sort))
    if page is not None:
        pairs.append(("page", str(max(int(page), 1))))
    if page_size is not None:
        pairs.append(("limit", str(max(int(page_size), 1))))
    return pairs


def query_string(pairs: QueryPairs) -> str:
    """URL-encode pairs, preserving their order."""
    return urlencode(pairs)


def expand_path(template: str, scope: Mapping[str, Any]) -> str:
    """Fill ``{name}`` placeholders with URL-encoded scope values."""
    return template.format(**{key: quote(str(value), safe="") for key, value in scope.items()})
