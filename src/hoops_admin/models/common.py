"""
Shared view-state models for the admin list views.

This module defines the state objects owned by a list controller:

- Filter state (free text, enumerated selects, date ranges)
- Pagination and aggregate statistics
- The base ListRow every resource row extends
- ListState, the full snapshot a renderer draws from

All models include to_dict/from_dict methods so a snapshot can round-trip
through Dash's dcc.Store.
"""

import math
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, ClassVar, Iterable, Mapping

from hoops_admin.utils import parse_date


def is_blank(value: Any) -> bool:
    """Return True for values that must not produce a query parameter."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, DateRange):
        return value.is_empty
    return False


@dataclass(frozen=True, slots=True)
class DateRange:
    """Inclusive date interval; either side may be open."""

    start: date | None = None
    end: date | None = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, value: date | datetime | None) -> bool:
        """Return True when value falls inside the range (open sides match all)."""
        if self.is_empty:
            return True
        if value is None:
            return False
        day = value.date() if isinstance(value, datetime) else value
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
        }

    @classmethod
    def coerce(cls, value: Any) -> "DateRange":
        """
        Build a DateRange from the shapes UI widgets hand over.

        Accepts an existing DateRange, a ``{"start", "end"}`` mapping, a
        two-item sequence, or None. Strings are parsed as dates.
        """
        if isinstance(value, DateRange):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            start, end = value.get("start"), value.get("end")
        elif isinstance(value, (list, tuple)) and len(value) == 2:
            start, end = value
        else:
            msg = f"Cannot interpret {value!r} as a date range"
            raise ValueError(msg)
        return cls(start=_as_date(start), end=_as_date(end))


def _as_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_date(str(value))
    if parsed is None:
        msg = f"Invalid date: {value!r}"
        raise ValueError(msg)
    return parsed.date()


@dataclass(frozen=True)
class FilterState:
    """
    Current filter values keyed by filter-field name.

    Instances are immutable; ``merge`` and ``cleared`` return new states so
    a debounced update can never mutate the state a request was built from.
    """

    values: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.values.get(name, default)

    def merge(self, updates: Mapping[str, Any]) -> "FilterState":
        merged = dict(self.values)
        for name, value in updates.items():
            if name == "dateRange" or isinstance(value, DateRange):
                value = DateRange.coerce(value)
            merged[name] = value
        return FilterState(merged)

    def cleared(self) -> "FilterState":
        """Return a state with every field reset to its empty value."""
        return FilterState(
            {
                name: DateRange() if isinstance(value, DateRange) else None
                for name, value in self.values.items()
            }
        )

    def active(self) -> dict[str, Any]:
        """Return only the fields that carry a value."""
        return {name: value for name, value in self.values.items() if not is_blank(value)}

    @property
    def is_empty(self) -> bool:
        return not self.active()

    def to_dict(self) -> dict:
        return {
            name: value.to_dict() if isinstance(value, DateRange) else value
            for name, value in self.values.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "FilterState":
        if not data:
            return cls()
        return cls().merge(
            {
                name: DateRange.coerce(value)
                if isinstance(value, Mapping) and set(value) <= {"start", "end"}
                else value
                for name, value in data.items()
            }
        )


@dataclass
class PaginationState:
    """
    Pagination state of a list view.

    Attributes:
        current_page: Current page number (1-indexed).
        page_size: Number of rows per page.
        total_items: Total number of rows available across all pages.
        total_pages: Number of pages; 0 when there are no rows.
    """

    current_page: int = 1
    page_size: int = 20
    total_items: int = 0
    total_pages: int = 0

    def __post_init__(self) -> None:
        self.page_size = max(int(self.page_size), 1)
        self.total_items = max(int(self.total_items), 0)
        self.total_pages = max(int(self.total_pages), 0)
        self.current_page = min(max(int(self.current_page), 1), max(self.total_pages, 1))

    @classmethod
    def computed(cls, current_page: int, page_size: int, total_items: int) -> "PaginationState":
        """Return pagination with total_pages derived as ceil(total / page_size)."""
        page_size = max(int(page_size), 1)
        return cls(
            current_page=current_page,
            page_size=page_size,
            total_items=total_items,
            total_pages=math.ceil(max(int(total_items), 0) / page_size),
        )

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.page_size

    def without_item(self) -> "PaginationState":
        """Return pagination after one row on the current page was removed."""
        return PaginationState.computed(
            self.current_page, self.page_size, self.total_items - 1
        )

    def to_dict(self) -> dict:
        return {
            "current": self.current_page,
            "pageSize": self.page_size,
            "total": self.total_items,
            "totalPages": self.total_pages,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "PaginationState":
        if not data:
            return cls()
        return cls(
            current_page=data.get("current") or 1,
            page_size=data.get("pageSize") or 20,
            total_items=data.get("total") or 0,
            total_pages=data.get("totalPages") or 0,
        )


class StatsScope(str, Enum):
    """Where a StatsSummary came from."""

    SERVER = "server"  # declared by the backend, covers the whole result set
    FILTERED = "filtered"  # computed over every filtered row held locally
    PAGE = "page"  # computed over the loaded page only


@dataclass
class StatsSummary:
    """
    Aggregate numbers shown above a list.

    Attributes:
        values: Ordered stat name to number mapping (e.g. totalAmount).
        scope: SERVER, FILTERED or PAGE; PAGE stats are not global totals.
    """

    values: dict[str, float] = field(default_factory=dict)
    scope: StatsScope = StatsScope.SERVER

    def __getitem__(self, name: str) -> float:
        return self.values[name]

    def get(self, name: str, default: float = 0) -> float:
        return self.values.get(name, default)

    @property
    def is_partial(self) -> bool:
        """True when the numbers only describe the loaded page."""
        return self.scope == StatsScope.PAGE

    def to_dict(self) -> dict:
        return {"values": dict(self.values), "scope": self.scope.value}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "StatsSummary":
        if not data:
            return cls()
        return cls(
            values=dict(data.get("values", {})),
            scope=StatsScope(data.get("scope", StatsScope.SERVER.value)),
        )


@dataclass(slots=True)
class ListRow:
    """
    Base class for normalized, UI-ready backend records.

    Subclasses list the datetime-valued attributes in DATE_FIELDS so
    from_dict can restore them from ISO strings.
    """

    DATE_FIELDS: ClassVar[tuple[str, ...]] = ()

    id: str = ""
    status: str = ""

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, (datetime, date)):
                value = value.isoformat()
            elif isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ListRow":
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        for name in cls.DATE_FIELDS:
            if isinstance(values.get(name), str):
                values[name] = parse_date(values[name])
        return cls(**values)


@dataclass(slots=True)
class ListPage:
    """One fetched page plus the metadata the reducer derived for it."""

    rows: list[ListRow]
    pagination: PaginationState
    stats: StatsSummary
    metadata: dict[str, Any] | None = None
    dropped: int = 0


@dataclass(slots=True)
class MutationResult:
    """Body of a ``{success, message?, data?}`` mutation response."""

    success: bool
    message: str | None = None
    data: Any = None

    @classmethod
    def from_response(cls, body: Any) -> "MutationResult":
        if not isinstance(body, Mapping):
            # DELETE endpoints may answer 204 or a bare value
            return cls(success=True, data=body)
        message = body.get("message") or body.get("error")
        return cls(
            success=bool(body.get("success", True)),
            message=str(message) if message else None,
            data=body.get("data"),
        )


class ViewStatus(str, Enum):
    """Lifecycle of a list view."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERRORED = "errored"
    CLOSED = "closed"


@dataclass
class ListState:
    """
    Everything a list renderer needs, owned by one controller.

    Attributes:
        status: Current lifecycle state.
        loading: True while a request is in flight.
        rows: Rows of the current page.
        filters: Current filter values.
        sort: Current sort token, or None.
        pagination: Current pagination.
        stats: Aggregate numbers for the list.
        metadata: Filter option lists (seasons, grades, ...).
        error: Banner text for the last failure, or None.
        notice: Banner text for the last successful mutation, or None.
        auth_required: True when the user must log in again.
        scope: Path parameters such as the selected tournament.
        dropped: Records discarded by normalization on the last fetch.
    """

    status: ViewStatus = ViewStatus.IDLE
    loading: bool = False
    rows: list[ListRow] = field(default_factory=list)
    filters: FilterState = field(default_factory=FilterState)
    sort: str | None = None
    pagination: PaginationState = field(default_factory=PaginationState)
    stats: StatsSummary = field(default_factory=StatsSummary)
    metadata: dict[str, list] = field(default_factory=dict)
    error: str | None = None
    notice: str | None = None
    auth_required: bool = False
    scope: dict[str, Any] = field(default_factory=dict)
    dropped: int = 0

    @property
    def row_ids(self) -> list[str]:
        return [row.id for row in self.rows]

    def find(self, row_id: str) -> ListRow | None:
        return next((row for row in self.rows if row.id == row_id), None)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "loading": self.loading,
            "rows": [row.to_dict() for row in self.rows],
            "filters": self.filters.to_dict(),
            "sort": self.sort,
            "pagination": self.pagination.to_dict(),
            "stats": self.stats.to_dict(),
            "metadata": self.metadata,
            "error": self.error,
            "notice": self.notice,
            "auth_required": self.auth_required,
            "scope": self.scope,
            "dropped": self.dropped,
        }

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any] | None, row_type: type[ListRow] = ListRow
    ) -> "ListState":
        if not data:
            return cls()
        return cls(
            status=ViewStatus(data.get("status", ViewStatus.IDLE.value)),
            loading=data.get("loading", False),
            rows=[row_type.from_dict(item) for item in data.get("rows", [])],
            filters=FilterState.from_dict(data.get("filters")),
            sort=data.get("sort"),
            pagination=PaginationState.from_dict(data.get("pagination")),
            stats=StatsSummary.from_dict(data.get("stats")),
            metadata=data.get("metadata") or {},
            error=data.get("error"),
            notice=data.get("notice"),
            auth_required=data.get("auth_required", False),
            scope=data.get("scope") or {},
            dropped=data.get("dropped", 0),
        )


def unique_sorted(values: Iterable[Any], reverse: bool = False) -> list:
    """Return the distinct, non-blank values in sorted order."""
    return sorted({value for value in values if not is_blank(value)}, reverse=reverse)
