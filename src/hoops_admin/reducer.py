"""
Pagination and statistics reduction of list responses.

Server-declared ``pagination`` and ``stats`` blocks always win. When the
backend omits them the numbers are computed here:

- pagination: ``totalPages = ceil(total / pageSize)`` with ``total`` taken
  from a legacy top-level ``total`` or, failing that, the row count; a
  legacy top-level ``pages`` is used as-is
- stats: reduced over the rows held locally. For server-paged lists that is
  only the loaded page, so the summary is marked StatsScope.PAGE and the
  renderer labels it as such.

Resources that are not paged by the backend are filtered, sorted and sliced
locally by ``apply_local``.
"""

from typing import Any, Callable, Mapping, Sequence

from hoops_admin.lib import logs
from hoops_admin.models.common import FilterState, ListRow, PaginationState, StatsScope, StatsSummary
from hoops_admin.utils import to_float, to_int

LOG = logs.logger(__file__)


def reduce_pagination(
    body: Any, page: int, page_size: int, row_count: int
) -> PaginationState:
    """
    Merge server pagination metadata into a PaginationState.

    Args:
        body: Parsed response body.
        page: Page that was requested.
        page_size: Page size that was requested.
        row_count: Number of rows the response carried.
    """
    declared = body.get("pagination") if isinstance(body, Mapping) else None
    if isinstance(declared, Mapping):
        size = to_int(declared.get("pageSize"), page_size) or page_size
        total = to_int(declared.get("total"))
        total_pages = to_int(declared.get("totalPages"))
        if not total_pages and total:
            return PaginationState.computed(to_int(declared.get("current"), page) or page, size, total)
        return PaginationState(
            current_page=to_int(declared.get("current"), page) or page,
            page_size=size,
            total_items=total,
            total_pages=total_pages,
        )

    LOG.warning("Response carried no pagination; computing it locally")
    total = row_count
    legacy_pages = 0
    if isinstance(body, Mapping):
        if body.get("total") is not None:
            total = to_int(body.get("total"), row_count)
        legacy_pages = to_int(body.get("pages"))
    if legacy_pages:
        return PaginationState(page, page_size, total, legacy_pages)
    return PaginationState.computed(page, page_size, total)


def reduce_stats(
    body: Any,
    rows: Sequence[ListRow],
    reducer: Callable[[Sequence[ListRow]], dict[str, float]],
    local_scope: StatsScope = StatsScope.PAGE,
) -> StatsSummary:
    """
    Return server stats when declared, otherwise reduce them from rows.

    Server stats are read for the keys the local reducer produces, so both
    paths yield the same shape; missing server values count as 0.
    """
    local = reducer(rows)
    declared = body.get("stats") if isinstance(body, Mapping) else None
    if isinstance(declared, Mapping):
        return StatsSummary(
            values={key: to_float(declared.get(key)) for key in local},
            scope=StatsScope.SERVER,
        )
    return StatsSummary(values=local, scope=local_scope)


def filter_rows(
    rows: Sequence[ListRow], filters: FilterState, fields: Sequence[Any]
) -> list[ListRow]:
    """Return the rows matching every active filter."""
    active = [(f, filters.get(f.name)) for f in fields]
    return [row for row in rows if all(f.matches(row, value) for f, value in active)]


def sort_rows(rows: Sequence[ListRow], option: Any | None) -> list[ListRow]:
    """Return rows ordered by a SortOption; stable for equal keys."""
    if option is None:
        return list(rows)
    return sorted(rows, key=option.key, reverse=option.reverse)


def paginate(
    rows: Sequence[ListRow], page: int, page_size: int
) -> tuple[list[ListRow], PaginationState]:
    """Slice one page out of rows; out-of-range pages clamp to the last page."""
    pagination = PaginationState.computed(page, page_size, len(rows))
    start = pagination.offset
    return list(rows[start : start + pagination.page_size]), pagination


def apply_local(
    rows: Sequence[ListRow],
    filters: FilterState,
    fields: Sequence[Any],
    sort_option: Any | None,
    page: int,
    page_size: int,
    reducer: Callable[[Sequence[ListRow]], dict[str, float]],
) -> tuple[list[ListRow], PaginationState, StatsSummary]:
    """
    Filter, sort and paginate a full collection held in memory.

    Stats are reduced over every filtered row, not just the page, so they
    are marked StatsScope.FILTERED.
    """
    matched = sort_rows(filter_rows(rows, filters, fields), sort_option)
    page_rows, pagination = paginate(matched, page, page_size)
    stats = StatsSummary(values=reducer(matched), scope=StatsScope.FILTERED)
    return page_rows, pagination, stats


def subtract_stats(
    stats: StatsSummary,
    rows: Sequence[ListRow],
    reducer: Callable[[Sequence[ListRow]], dict[str, float]],
) -> StatsSummary:
    """
    Return stats with the contribution of removed rows taken out.

    Used after an optimistic delete, when the totals cover more rows than
    are held locally. Counts never drop below zero.
    """
    removed = reducer(rows)
    values = {key: max(value - removed.get(key, 0), 0) for key, value in stats.values.items()}
    return StatsSummary(values=values, scope=stats.scope)
