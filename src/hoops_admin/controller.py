"""
Filtered list controller.

A ListController owns the ListState of one admin list and drives it:

    IDLE -> LOADING -> LOADED | ERRORED
    LOADED -> LOADING   on filter, sort, page or scope change and refresh
    ERRORED -> LOADING  on retry
    any -> CLOSED       on close()

Service calls are blocking, so they run in the default executor. Every load
takes a new token; the previous in-flight load is cancelled and a late result
whose token is no longer the latest is dropped. Failures never escape a
load, they become ``state.error``.
"""

import asyncio
from datetime import date
from functools import partial
from typing import Any, Callable, Mapping

from hoops_admin.actions import ActionFlow
from hoops_admin.debounce import Debouncer
from hoops_admin.errors import AuthError, ValidationError, user_message
from hoops_admin.lib import logs
from hoops_admin.models.common import (
    FilterState,
    ListPage,
    ListState,
    MutationResult,
    PaginationState,
    StatsScope,
    StatsSummary,
    ViewStatus,
)
from hoops_admin.query import ListQuery, format_day
from hoops_admin.reducer import subtract_stats
from hoops_admin.services.list_service import ListService
from hoops_admin.utils import format_currency
from hoops_admin.validation import require_date_range

LOG = logs.logger(__file__)

REFUND_PROCESS_PATH = "/refunds/process"
REFUND_SYNC_PATH = "/payment/sync/refunds"
REFUND_SYNC_BY_DATE_PATH = "/payment/sync/refunds/by-date"


class ListController:
    """
    Drives one list view.

    Attributes:
        service: Data access for the list.
        resource: The list's ListResource.
        state: Current ListState; replaced rows and counters are visible to
            the renderer after every change.
    """

    def __init__(
        self,
        service: ListService,
        page_size: int | None = None,
        debounce_seconds: float | None = None,
        on_change: Callable[[ListState], Any] | None = None,
        filters: Mapping[str, Any] | None = None,
        sort: str | None = None,
        scope: Mapping[str, Any] | None = None,
    ) -> None:
        self.service = service
        self.resource = service.resource
        if sort is not None:
            self.resource.sort_option(sort)
        self.state = ListState(
            filters=self._empty_filters().merge(filters or {}),
            sort=sort or self.resource.default_sort,
            pagination=PaginationState(page_size=page_size or self.resource.page_size),
            scope=dict(scope or {}),
        )
        wait = self.resource.debounce_seconds if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(self._on_debounced, wait)
        self._on_change = on_change
        self._token = 0
        self._task: asyncio.Future | None = None
        self._dispatch: asyncio.Task | None = None

    @classmethod
    def restore(cls, service: ListService, data: Mapping[str, Any] | None) -> "ListController":
        """Rebuild a controller from a serialized ListState (a dcc.Store value)."""
        controller = cls(service)
        if data:
            state = ListState.from_dict(data, service.resource.row_type)
            if state.status in (ViewStatus.LOADING, ViewStatus.CLOSED):
                state.status = ViewStatus.LOADED if state.rows else ViewStatus.IDLE
            state.loading = False
            controller.state = state
        return controller

    @property
    def closed(self) -> bool:
        return self.state.status == ViewStatus.CLOSED

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    def query(self, page: int | None = None) -> ListQuery:
        """Return the ListQuery for the current state."""
        return ListQuery(
            filters=self.state.filters,
            sort=self.state.sort,
            page=page or self.state.pagination.current_page,
            page_size=self.state.pagination.page_size,
            scope=dict(self.state.scope),
        )

    async def load(self, page: int | None = None) -> ListState:
        """Fetch a page for the current filters; never raises service errors."""
        if self.closed:
            LOG.debug("load ignored - %s controller is closed", self.resource.name)
            return self.state

        self._token += 1
        token = self._token
        if self._task is not None and not self._task.done():
            self._task.cancel()

        query = self.query(page)
        state = self.state
        state.status = ViewStatus.LOADING
        state.loading = True
        state.error = None
        self._notify()

        task = asyncio.ensure_future(self._call(self.service.fetch_page, query))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if token != self._token:
                LOG.debug("load %s superseded by %s", token, self._token)
                return self.state
            raise
        except Exception as exc:
            if token == self._token:
                self._fail(exc)
        else:
            if token == self._token:
                self._apply(result)
            else:
                LOG.debug("Discarding stale %s result %s (latest %s)", self.resource.name, token, self._token)
        finally:
            if token == self._token:
                self.state.loading = False
                self._notify()
        return self.state

    async def refresh(self) -> ListState:
        return await self.load()

    async def retry(self) -> ListState:
        """Repeat the last load after a failure."""
        return await self.load()

    async def apply_filters(self, updates: Mapping[str, Any]) -> ListState:
        """
        Queue filter updates and dispatch them at once.

        Used when the input has already gone quiet on the client, as with
        the Dash text inputs.
        """
        self.set_filters(**updates)
        return await self.submit()

    def set_filters(self, **updates: Any) -> None:
        """Queue filter updates; they are dispatched once input goes quiet."""
        self._debouncer.push(updates)

    async def submit(self) -> ListState:
        """Dispatch pending filter updates now, or reload page 1."""
        if self._debouncer.flush() and self._dispatch is not None:
            return await self._dispatch
        return await self.load(page=1)

    async def reset_filters(self) -> ListState:
        self._debouncer.cancel()
        self.state.filters = self._empty_filters()
        self.state.sort = self.resource.default_sort
        return await self.load(page=1)

    async def set_sort(self, token: str | None) -> ListState:
        self.resource.sort_option(token)
        self.state.sort = token
        return await self.load(page=1)

    async def set_page(self, page: int) -> ListState:
        pagination = self.state.pagination
        page = max(int(page), 1)
        if pagination.total_pages:
            page = min(page, pagination.total_pages)
        return await self.load(page=page)

    async def set_scope(self, **scope: Any) -> ListState:
        """Change path parameters (e.g. the selected tournament) and reload."""
        self.state.scope = {**self.state.scope, **scope}
        return await self.load(page=1)

    def request_delete(self, row_id: str) -> ActionFlow:
        """
        Start a confirmed delete of one row.

        On success the row is removed locally and the total decremented;
        nothing is re-fetched.
        """
        self.resource.action("delete")
        row = self._row(row_id)
        label = getattr(row, "name", "") or f"this {self.resource.noun}"

        async def _delete() -> MutationResult:
            return await self._call(self.service.delete_row, row_id)

        def _removed(result: MutationResult) -> None:
            self._remove_row(row_id)
            self.state.notice = result.message or f"{self.resource.noun.capitalize()} deleted"
            self._notify()

        flow = ActionFlow(
            "delete",
            _delete,
            on_success=_removed,
            on_error=self._set_error,
            prompt=f'Are you sure you want to delete "{label}"? This action cannot be undone.',
        )
        return flow.request()

    def request_refund_action(self, row_id: str, action: str, notes: str = "") -> ActionFlow:
        """Start a confirmed approve or reject of one pending refund."""
        if action not in ("approve", "reject"):
            msg = f"Unknown refund action: {action}"
            raise ValueError(msg)
        self.resource.action(action)
        row = self._row(row_id)
        payload = {
            "paymentId": row.payment_id,
            "refundId": row.refund_id,
            "action": action,
            "adminNotes": notes,
        }
        flow = ActionFlow(
            action,
            partial(self._mutate, REFUND_PROCESS_PATH, payload),
            on_success=self._after_mutation,
            on_error=self._set_error,
            prompt=f"{action.capitalize()} the refund of {format_currency(row.amount)}?",
        )
        return flow.request()

    def request_refund_sync(self, start: Any = None, end: Any = None) -> ActionFlow | None:
        """
        Start a refund sync with the payment processor.

        Without dates every refund is synced; with dates both are required
        and the range is validated first. Returns None and sets
        ``state.error`` when validation fails.
        """
        if start in (None, "") and end in (None, ""):
            path, payload, prompt = REFUND_SYNC_PATH, {}, "Sync all refunds?"
        else:
            try:
                start_day, end_day = require_date_range(start, end)
            except ValidationError as exc:
                self._set_error(exc.user_message)
                return None
            path = REFUND_SYNC_BY_DATE_PATH
            payload = {"startDate": format_day(start_day), "endDate": format_day(end_day)}
            prompt = f"Sync refunds from {payload['startDate']} to {payload['endDate']}?"
        flow = ActionFlow(
            "sync",
            partial(self._mutate, path, payload),
            on_success=self._after_mutation,
            on_error=self._set_error,
            prompt=prompt,
        )
        return flow.request()

    async def after_edit(self) -> ListState:
        """Re-fetch after a row was edited elsewhere."""
        return await self.refresh()

    async def export(self) -> tuple[str, bytes] | None:
        """
        Export every row matching the current filters as CSV.

        Returns:
            ``(filename, data)``, or None with ``state.error`` set.
        """
        try:
            data = await self._call(self.service.export_csv, self.query(page=1))
        except Exception as exc:
            LOG.warning("Export of %s failed", self.resource.name, exc_info=True)
            self._auth_check(exc)
            self._set_error(user_message(exc, "Failed to export CSV. Please try again."))
            return None
        filename = f"{self.resource.export_prefix}-{format_day(date.today())}.csv"
        LOG.info("export - resource:%s file:%s bytes:%s", self.resource.name, filename, len(data))
        return filename, data

    async def load_metadata(self) -> dict[str, list]:
        """Load filter options, deriving them from rows when the call fails."""
        try:
            metadata = await self._call(self.service.fetch_metadata)
        except Exception as exc:
            LOG.warning("Metadata for %s unavailable, using fallback", self.resource.name, exc_info=True)
            self._auth_check(exc)
            metadata = None
        if not metadata:
            metadata = self.resource.metadata_for(self.state.rows)
        self.state.metadata = dict(metadata)
        self._notify()
        return self.state.metadata

    async def list_tournaments(self) -> list[dict[str, Any]]:
        try:
            return await self._call(self.service.list_tournaments)
        except Exception as exc:
            LOG.warning("Listing tournaments failed", exc_info=True)
            self._auth_check(exc)
            self._set_error(user_message(exc, "Failed to load tournaments."))
            return []

    def dismiss_error(self) -> None:
        self.state.error = None
        self.state.notice = None
        self._notify()

    def close(self) -> None:
        """Cancel pending work; later loads are ignored."""
        self._debouncer.cancel()
        self._token += 1
        for pending in (self._task, self._dispatch):
            if pending is not None and not pending.done():
                pending.cancel()
        self.state.status = ViewStatus.CLOSED
        self.state.loading = False
        LOG.debug("closed %s controller", self.resource.name)

    async def _call(self, method: Callable[..., Any], *args: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(method, *args))

    async def _mutate(self, path: str, payload: Mapping[str, Any]) -> MutationResult:
        return await self._call(self.service.mutate, path, payload)

    async def _after_mutation(self, result: MutationResult) -> None:
        self.state.notice = result.message
        await self.refresh()

    def _on_debounced(self, updates: dict[str, Any]) -> None:
        self.state.filters = self.state.filters.merge(updates)
        self._dispatch = asyncio.ensure_future(self.load(page=1))

    def _apply(self, page: ListPage) -> None:
        state = self.state
        state.rows = list(page.rows)
        state.pagination = page.pagination
        state.stats = page.stats
        state.dropped = page.dropped
        if page.metadata:
            state.metadata = {k: v for k, v in page.metadata.items() if isinstance(v, list)}
        state.status = ViewStatus.LOADED
        state.error = None
        state.auth_required = False

    def _fail(self, exc: Exception) -> None:
        state = self.state
        if isinstance(exc, ValidationError):
            state.rows = []
            state.pagination = PaginationState(page_size=state.pagination.page_size)
            LOG.info("load of %s skipped: %s", self.resource.name, exc)
        elif isinstance(exc, AuthError):
            LOG.warning("load of %s rejected: %s", self.resource.name, exc, exc_info=True)
        else:
            LOG.error("load of %s failed", self.resource.name, exc_info=exc)
        self._auth_check(exc)
        state.error = user_message(exc, f"Failed to load {self.resource.noun}s. Please try again.")
        state.status = ViewStatus.ERRORED

    def _auth_check(self, exc: BaseException) -> None:
        if isinstance(exc, AuthError):
            self.state.auth_required = True

    def _set_error(self, message: str) -> None:
        self.state.error = message
        self._notify()

    def _remove_row(self, row_id: str) -> None:
        state = self.state
        removed = [row for row in state.rows if row.id == row_id]
        state.rows = [row for row in state.rows if row.id != row_id]
        state.pagination = state.pagination.without_item()
        if state.stats.scope == StatsScope.PAGE:
            state.stats = StatsSummary(self.resource.stats_reducer(state.rows), StatsScope.PAGE)
        else:
            state.stats = subtract_stats(state.stats, removed, self.resource.stats_reducer)

    def _row(self, row_id: str) -> Any:
        row = self.state.find(row_id)
        if row is None:
            msg = f"No {self.resource.noun} with id {row_id} on this page"
            raise KeyError(msg)
        return row

    def _empty_filters(self) -> FilterState:
        return FilterState(self.resource.empty_filters())

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.state)
