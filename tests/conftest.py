"""
Shared pytest fixtures for the admin list tests.

HTTP is faked at the ``requests.Session.request`` seam with real
``requests.Response`` objects, so RestClient runs its own status and body
handling exactly as it does against the backend.
"""

import json
import time
from typing import Any

import pytest
import requests

from hoops_admin.lib.caches import DiskCache
from hoops_admin.models.common import ListPage, MutationResult, StatsScope, StatsSummary
from hoops_admin.query import ListQuery
from hoops_admin.reducer import apply_local
from hoops_admin.resources import ListResource
from hoops_admin.services.list_service import ListService
from hoops_admin.session import AdminSession


def make_response(
    status: int = 200,
    body: Any = None,
    text: str | None = None,
    url: str = "http://api.test/api/resource",
) -> requests.Response:
    """Build a real requests.Response with a JSON or plain-text body."""
    response = requests.Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    else:
        response._content = b""
    return response


class FakeHttp:
    """Stands in for requests.Session: records calls, replays queued responses."""

    def __init__(self, *responses: requests.Response | Exception) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class RecordingService(ListService):
    """
    ListService over raw records with per-call latency and failure hooks.

    Attributes:
        delays: Seconds to sleep for successive fetch_page calls.
        errors: Exceptions to raise for successive fetch_page calls.
        queries: Every ListQuery passed to fetch_page.
    """

    def __init__(
        self,
        resource: ListResource,
        records: list[dict[str, Any]] | None = None,
        delays: list[float] | None = None,
        errors: list[Exception | None] | None = None,
    ) -> None:
        super().__init__(resource)
        self.records = list(records or [])
        self.delays = list(delays or [])
        self.errors = list(errors or [])
        self.queries: list[ListQuery] = []
        self.deleted: list[str] = []
        self.mutations: list[tuple[str, dict]] = []
        self.delete_result = MutationResult(True, "Deleted")
        self.mutation_result = MutationResult(True, "Done")
        self.metadata: dict[str, list] | Exception | None = None

    @property
    def fetch_count(self) -> int:
        return len(self.queries)

    def fetch_page(self, query: ListQuery) -> ListPage:
        self.queries.append(query)
        delay = self.delays.pop(0) if self.delays else 0
        error = self.errors.pop(0) if self.errors else None
        if delay:
            time.sleep(delay)
        if error is not None:
            raise error
        rows, dropped = self.resource.normalize(self.records)
        page_rows, pagination, stats = apply_local(
            rows,
            query.filters,
            self.resource.fields,
            self.resource.sort_option(query.sort),
            query.page,
            query.page_size,
            self.resource.stats_reducer,
        )
        return ListPage(page_rows, pagination, StatsSummary(stats.values, StatsScope.SERVER), None, dropped)

    def fetch_metadata(self) -> dict[str, list] | None:
        if isinstance(self.metadata, Exception):
            raise self.metadata
        return self.metadata

    def delete_row(self, row_id: str) -> MutationResult:
        self.deleted.append(row_id)
        return self.delete_result

    def export_csv(self, query: ListQuery) -> bytes:
        rows, _ = self.resource.normalize(self.records)
        return self.rows_to_csv(self.matching_rows(rows, query))

    def mutate(self, path: str, payload: dict) -> MutationResult:
        self.mutations.append((path, dict(payload)))
        return self.mutation_result


def ticket_record(record_id: str, status: str = "completed", **overrides: Any) -> dict[str, Any]:
    record = {
        "_id": record_id,
        "customerName": f"Customer {record_id}",
        "customerEmail": f"{record_id}@example.com",
        "packageName": "General Admission",
        "quantity": 1,
        "unitPrice": 10,
        "amount": 10,
        "status": status,
        "purchasedAt": "2025-04-12T15:20:00Z",
    }
    record.update(overrides)
    return record


def team_record(record_id: str, name: str, **overrides: Any) -> dict[str, Any]:
    record = {
        "_id": record_id,
        "name": name,
        "year": 2025,
        "grade": "5",
        "gender": "Male",
        "coachIds": ["c1"],
        "playerIds": ["p1", "p2"],
    }
    record.update(overrides)
    return record


@pytest.fixture
def admin_session():
    """Signed-in admin session."""
    return AdminSession(access_token="tok-123", role="admin")


@pytest.fixture
def signed_out_session():
    return AdminSession()


@pytest.fixture
def disabled_cache(tmp_path):
    """Cache that never stores anything."""
    return DiskCache(tmp_path / "disabled", enabled=False)


@pytest.fixture
def disk_cache(tmp_path):
    cache = DiskCache(tmp_path / "cache")
    yield cache
    cache.close()
