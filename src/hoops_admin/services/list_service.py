"""
Abstract base class defining the admin list data-access contract.

A ListService is bound to one ListResource and provides paged rows,
filter metadata, CSV export and the mutating calls behind row actions.
Every method is synchronous and may block on I/O; the list controller runs
them in an executor.

Implementations:
- RestListService: the club REST backend
- DemoListService: in-memory fixtures for development and tests
"""

import csv
import io
from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

from hoops_admin.errors import ValidationError
from hoops_admin.models.common import ListPage, ListRow, MutationResult, StatsScope
from hoops_admin.query import ListQuery
from hoops_admin.reducer import apply_local, filter_rows, reduce_pagination, reduce_stats, sort_rows
from hoops_admin.resources import ListResource


class ListService(ABC):
    """
    Data access for one admin list.

    Attributes:
        resource: The list this service serves.
    """

    def __init__(self, resource: ListResource) -> None:
        self.resource = resource

    @abstractmethod
    def fetch_page(self, query: ListQuery) -> ListPage:
        """
        Return one page of rows for the query.

        Raises:
            AuthError: No session token, or the backend rejected it.
            HttpError: The backend answered with a non-2xx status.
            NetworkError: The backend could not be reached.
            ValidationError: Required scope parameters are missing.
        """

    @abstractmethod
    def fetch_metadata(self) -> dict[str, list] | None:
        """Return filter option lists, or None when the list has none."""

    @abstractmethod
    def delete_row(self, row_id: str) -> MutationResult:
        """Delete one row on the server."""

    @abstractmethod
    def export_csv(self, query: ListQuery) -> bytes:
        """Return CSV bytes for every row matching the query's filters."""

    @abstractmethod
    def mutate(self, path: str, payload: Mapping[str, Any]) -> MutationResult:
        """POST payload to a mutating endpoint and return its result."""

    def list_tournaments(self) -> list[dict[str, Any]]:
        """Return ``{"id", "name", "year"}`` for every tournament."""
        return []

    def check_scope(self, query: ListQuery) -> None:
        """Raise ValidationError when a required path parameter is missing."""
        missing = [
            name
            for name in self.resource.scope_params
            if query.scope.get(name) in (None, "")
        ]
        if missing:
            if self.resource.name == "registrations":
                raise ValidationError("Select a tournament to see its registrations.", field="tournament")
            raise ValidationError(f"Missing required value: {', '.join(missing)}", field=missing[0])

    def page_from_body(self, body: Any, query: ListQuery) -> ListPage:
        """
        Build a ListPage from a list response body.

        Server-paged resources take pagination and stats from the body (or
        the page-local fallback); all others are filtered, sorted and
        paginated locally over the full collection.
        """
        resource = self.resource
        rows, dropped = resource.normalize(resource.extract_records(body))
        metadata = body.get("metadata") if isinstance(body, Mapping) else None

        if resource.server_paging:
            pagination = reduce_pagination(body, query.page, query.page_size, len(rows))
            stats = reduce_stats(body, rows, resource.stats_reducer, StatsScope.PAGE)
            return ListPage(rows, pagination, stats, metadata, dropped)

        page_rows, pagination, stats = apply_local(
            rows,
            query.filters,
            resource.fields,
            resource.sort_option(query.sort),
            query.page,
            query.page_size,
            resource.stats_reducer,
        )
        return ListPage(page_rows, pagination, stats, metadata, dropped)

    def matching_rows(self, rows: Sequence[ListRow], query: ListQuery) -> list[ListRow]:
        """Return rows filtered and sorted as the query asks, unpaged."""
        matched = filter_rows(rows, query.filters, self.resource.fields)
        return sort_rows(matched, self.resource.sort_option(query.sort))

    def rows_to_csv(self, rows: Sequence[ListRow]) -> bytes:
        """Render rows with the resource's columns as UTF-8 CSV."""
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow([column.label for column in self.resource.columns])
        for row in rows:
            writer.writerow([column.render(row) for column in self.resource.columns])
        return buffer.getvalue().encode("utf-8")
