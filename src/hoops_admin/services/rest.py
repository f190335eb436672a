"""
REST-backed implementation of ListService.

This module provides:
- RestClient: authenticated JSON requests against the club backend, with
  every failure mapped onto the hoops_admin.errors taxonomy
- RestListService: list, metadata, export and mutation calls for one
  ListResource

Every privileged request carries ``Authorization: Bearer <token>`` from the
injected AdminSession. When the session holds no token the request is never
sent and AuthError is raised instead.
"""

import functools
from typing import Any, Mapping
from urllib.parse import quote

import requests

from hoops_admin import config
from hoops_admin.errors import AuthError, HttpError, MutationError, NetworkError, extract_message
from hoops_admin.lib import caches, clients, logs, objects, paths
from hoops_admin.models.common import ListPage, MutationResult
from hoops_admin.query import ListQuery, build_query, expand_path
from hoops_admin.resources import ListResource
from hoops_admin.services.list_service import ListService
from hoops_admin.session import AdminSession

LOG = logs.logger(__file__)

_MAX_ERROR_TEXT = 300


def _mutation_result(body: Any) -> MutationResult:
    """Return the mutation result, raising MutationError for success: false."""
    result = MutationResult.from_response(body)
    if not result.success:
        raise MutationError(result.message)
    return result


def _parse_body(response: requests.Response) -> Any:
    """Return the JSON body if it parses, otherwise the raw text."""
    try:
        return response.json()
    except ValueError:
        return response.text or None


class RestClient:
    """
    Thin authenticated JSON client for the club REST backend.

    Attributes:
        session: Source of the bearer token.
        base_url: Backend base URL, e.g. ``http://localhost:5001/api``.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        session: AdminSession,
        base_url: str | None = None,
        http: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self.session = session
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self._http = http

    @property
    def http(self) -> requests.Session:
        return self._http or clients.http_session()

    def get(self, path: str, params: list[tuple[str, str]] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Mapping[str, Any] | None = None) -> Any:
        return self.request("POST", path, payload=payload or {})

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def download(self, path: str, params: list[tuple[str, str]] | None = None) -> bytes:
        return self.request("GET", path, params=params, raw=True)

    def request(
        self,
        method: str,
        path: str,
        params: list[tuple[str, str]] | None = None,
        payload: Mapping[str, Any] | None = None,
        raw: bool = False,
    ) -> Any:
        """
        Send one request and return its parsed body.

        Args:
            method: HTTP method.
            path: Path below base_url.
            params: Ordered query parameters.
            payload: JSON body for mutating requests.
            raw: Return the body bytes instead of parsed JSON.

        Raises:
            AuthError: No token (nothing is sent), or 401/403. A 401 also
                ends the session, so later calls fail before any I/O.
            HttpError: Any other non-2xx status, or an unreadable 2xx body.
            NetworkError: Connection failure or timeout.
        """
        headers = self.session.auth_headers()
        if not headers:
            LOG.warning("%s %s skipped - no auth token", method, path)
            raise AuthError()

        LOG.info("%s %s params:%s", method, path, [key for key, _ in params or []])
        if payload is not None:
            headers["Content-Type"] = "application/json"
        try:
            response = self.http.request(
                method,
                f"{self.base_url}{path}",
                params=params or None,
                json=payload,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.Timeout as exc:
            LOG.warning("%s %s timed out", method, path)
            raise NetworkError("The server took too long to respond. Please try again.") from exc
        except requests.RequestException as exc:
            LOG.warning("%s %s failed: %s", method, path, exc)
            raise NetworkError() from exc

        status = response.status_code
        LOG.info("%s %s -> %s", method, path, status)
        if not 200 <= status < 300:
            error = self._error(response, path)
            if status == 401:
                self.session.logout()
            raise error
        if raw:
            return response.content
        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise HttpError(status, response.text, "The server returned an unreadable response.") from exc

    @staticmethod
    def _error(response: requests.Response, path: str) -> Exception:
        status = response.status_code
        body = _parse_body(response)
        if isinstance(body, str) and len(body) > _MAX_ERROR_TEXT:
            body = body[:_MAX_ERROR_TEXT].rstrip() + "..."
        LOG.error("HTTP %s from %s: %s", status, path, body)
        if status == 401:
            return AuthError(status=status)
        if status == 403:
            return AuthError(
                extract_message(body) or "You do not have permission to view this page.",
                status=status,
            )
        return HttpError(status, body)


@functools.cache
def metadata_cache() -> caches.DiskCache:
    """Return the shared on-disk cache for filter metadata."""
    return caches.DiskCache(paths.cache_dir("metadata"), enabled=not config.CACHE_DISABLED)


class RestListService(ListService):
    """
    ListService backed by the club REST backend.

    Metadata responses are cached on disk for config.METADATA_TTL seconds
    and dropped when the session logs out.
    """

    def __init__(
        self,
        resource: ListResource,
        session: AdminSession,
        client: RestClient | None = None,
        cache: caches.DiskCache | None = None,
    ) -> None:
        super().__init__(resource)
        self.client = client or RestClient(session)
        self._cache = cache if cache is not None else metadata_cache()
        session.on_logout.append(self._cache.clear)

    def fetch_page(self, query: ListQuery) -> ListPage:
        self.check_scope(query)
        resource = self.resource
        path = expand_path(resource.endpoint, query.scope)
        params = None
        if resource.server_paging:
            params = build_query(
                query.filters, resource.fields, query.sort, query.page, query.page_size
            )
        body = self.client.get(path, params)
        page = self.page_from_body(body, query)
        LOG.info(
            "fetch_page - resource:%s page:%s rows:%s total:%s",
            resource.name,
            page.pagination.current_page,
            len(page.rows),
            page.pagination.total_items,
        )
        return page

    def fetch_metadata(self) -> dict[str, list] | None:
        endpoint = self.resource.metadata_endpoint
        if not endpoint:
            return None

        def _load() -> dict[str, list]:
            body = self.client.get(endpoint)
            if not isinstance(body, Mapping):
                return {}
            return {key: list(value) for key, value in body.items() if isinstance(value, list)}

        key = objects.stable_key("metadata", self.client.base_url, endpoint)
        return self._cache.get_or_load(key, _load, expire=config.METADATA_TTL)

    def delete_row(self, row_id: str) -> MutationResult:
        template = self.resource.delete_endpoint
        if not template:
            msg = f"{self.resource.name} rows cannot be deleted"
            raise ValueError(msg)
        body = self.client.delete(template.format(id=quote(row_id, safe="")))
        return _mutation_result(body)

    def export_csv(self, query: ListQuery) -> bytes:
        resource = self.resource
        if resource.export_endpoint:
            params = build_query(query.filters, resource.fields, query.sort)
            return self.client.download(resource.export_endpoint, params)
        self.check_scope(query)
        body = self.client.get(expand_path(resource.endpoint, query.scope))
        rows, _ = resource.normalize(resource.extract_records(body))
        return self.rows_to_csv(self.matching_rows(rows, query))

    def mutate(self, path: str, payload: Mapping[str, Any]) -> MutationResult:
        return _mutation_result(self.client.post(path, payload))

    def list_tournaments(self) -> list[dict[str, Any]]:
        body = self.client.get("/tournaments/all")
        records = body.get("tournaments", []) if isinstance(body, Mapping) else body or []
        return [
            {"id": str(t.get("_id") or ""), "name": t.get("name") or "", "year": t.get("year")}
            for t in records
            if isinstance(t, Mapping) and t.get("name")
        ]
