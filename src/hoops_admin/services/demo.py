"""
Demo implementation of ListService using in-memory records.

This service is useful for:
- Local development without a running backend
- Testing the controller and renderers with realistic data
- Demonstrating the admin panel

Records are kept in their raw backend shape and normalized on every read, so
deletes and refund decisions made in demo mode show up exactly as they
would against the real backend.
"""

import copy
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from hoops_admin.data.demo_records import (
    DEMO_PAYMENTS,
    DEMO_REGISTRATIONS,
    DEMO_TEAMS,
    DEMO_TICKETS,
    DEMO_TOURNAMENTS,
)
from hoops_admin.errors import AuthError
from hoops_admin.lib import logs
from hoops_admin.models.common import ListPage, MutationResult, StatsScope, StatsSummary
from hoops_admin.query import ListQuery
from hoops_admin.reducer import apply_local
from hoops_admin.resources import ListResource
from hoops_admin.services.list_service import ListService
from hoops_admin.session import AdminSession
from hoops_admin.utils import to_int

LOG = logs.logger(__file__)

_DEMO_RECORDS = {
    "tickets": DEMO_TICKETS,
    "teams": DEMO_TEAMS,
    "refunds": DEMO_PAYMENTS,
}

_REFUND_DECISIONS = {"approve": "completed", "reject": "failed"}


class DemoListService(ListService):
    """
    In-memory list service backed by the demo records.

    Attributes:
        latency: Seconds every fetch sleeps, to make loading states visible.
    """

    def __init__(
        self,
        resource: ListResource,
        records: Sequence[Mapping[str, Any]] | Mapping[Any, Sequence[Mapping[str, Any]]] | None = None,
        latency: float = 0.0,
        session: AdminSession | None = None,
    ) -> None:
        """
        Initialize with raw records.

        Args:
            resource: The list to serve.
            records: Raw records, or for scoped lists a mapping of
                ``(name, year)`` to raw records. None uses the demo data.
            latency: Artificial delay per fetch in seconds.
            session: When given, calls fail with AuthError unless it holds
                a token.
        """
        super().__init__(resource)
        if records is None:
            records = DEMO_REGISTRATIONS if resource.scope_params else _DEMO_RECORDS.get(resource.name, [])
        self._records = copy.deepcopy(records)
        self.latency = latency
        self.session = session
        self.fetch_count = 0

    def fetch_page(self, query: ListQuery) -> ListPage:
        self._authorize()
        self.check_scope(query)
        self.fetch_count += 1
        if self.latency:
            time.sleep(self.latency)

        resource = self.resource
        rows, dropped = resource.normalize(self._scoped_records(query.scope))
        page_rows, pagination, stats = apply_local(
            rows,
            query.filters,
            resource.fields,
            resource.sort_option(query.sort),
            query.page,
            query.page_size,
            resource.stats_reducer,
        )
        if resource.server_paging:
            # a paging backend reports totals for the whole filtered set
            stats = StatsSummary(stats.values, StatsScope.SERVER)
        LOG.info(
            "fetch_page - resource:%s page:%s rows:%s total:%s",
            resource.name,
            pagination.current_page,
            len(page_rows),
            pagination.total_items,
        )
        return ListPage(page_rows, pagination, stats, None, dropped)

    def fetch_metadata(self) -> dict[str, list] | None:
        self._authorize()
        if not self.resource.metadata_endpoint:
            return None
        rows, _ = self.resource.normalize(self._all_records())
        return self.resource.metadata_for(rows)

    def delete_row(self, row_id: str) -> MutationResult:
        self._authorize()
        if not self.resource.delete_endpoint:
            msg = f"{self.resource.name} rows cannot be deleted"
            raise ValueError(msg)
        records = self._records
        remaining = [r for r in records if str(r.get("_id") or r.get("id")) != row_id]
        if len(remaining) == len(records):
            return MutationResult(False, f"No {self.resource.noun} with id {row_id}")
        self._records = remaining
        LOG.info("delete_row - resource:%s id:%s", self.resource.name, row_id)
        return MutationResult(True, f"{self.resource.noun.capitalize()} deleted")

    def export_csv(self, query: ListQuery) -> bytes:
        self._authorize()
        self.check_scope(query)
        rows, _ = self.resource.normalize(self._scoped_records(query.scope))
        return self.rows_to_csv(self.matching_rows(rows, query))

    def mutate(self, path: str, payload: Mapping[str, Any]) -> MutationResult:
        self._authorize()
        LOG.info("mutate - resource:%s path:%s", self.resource.name, path)
        if path == "/refunds/process":
            return self._process_refund(payload)
        if path.startswith("/payment/sync/refunds"):
            synced = sum(len(p.get("refunds") or []) for p in self._all_records())
            return MutationResult(True, f"Synced {synced} refunds", {"synced": synced})
        return MutationResult(False, f"Unsupported demo mutation: {path}")

    def list_tournaments(self) -> list[dict[str, Any]]:
        self._authorize()
        return [
            {"id": t["_id"], "name": t["name"], "year": t["year"]}
            for t in DEMO_TOURNAMENTS
        ]

    def _authorize(self) -> None:
        if self.session is not None and not self.session.is_authenticated:
            raise AuthError()

    def _all_records(self) -> list[Mapping[str, Any]]:
        if isinstance(self._records, Mapping):
            return [r for records in self._records.values() for r in records]
        return list(self._records)

    def _scoped_records(self, scope: Mapping[str, Any]) -> list[Mapping[str, Any]]:
        if not self.resource.scope_params:
            return list(self._records)
        key = (scope.get("name"), to_int(scope.get("year")))
        return list(self._records.get(key, []))

    def _process_refund(self, payload: Mapping[str, Any]) -> MutationResult:
        status = _REFUND_DECISIONS.get(payload.get("action"))
        if status is None:
            return MutationResult(False, "Action must be approve or reject")
        for payment in self._all_records():
            if str(payment.get("_id")) != str(payload.get("paymentId")):
                continue
            for refund in payment.get("refunds") or []:
                if str(refund.get("_id")) == str(payload.get("refundId")):
                    refund["status"] = status
                    refund["processedAt"] = datetime.now(timezone.utc).isoformat()
                    if payload.get("adminNotes"):
                        refund["notes"] = payload["adminNotes"]
                    return MutationResult(True, f"Refund {payload['action']}d")
        return MutationResult(False, "Refund not found")
