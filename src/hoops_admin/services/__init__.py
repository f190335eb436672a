"""
Service factory for the admin panel.

This module provides the get_list_service() factory function that returns
the ListService implementation for a resource based on configuration.

Available Implementations:
- rest: the club REST backend (requires an admin session token)
- demo: in-memory demo records (no backend required)

Configure via the HOOPS_ADMIN_SERVICE environment variable.
"""

from typing import Callable, Dict

from hoops_admin import config
from hoops_admin.lib import logs
from hoops_admin.resources import ListResource
from hoops_admin.services.demo import DemoListService
from hoops_admin.services.list_service import ListService
from hoops_admin.services.rest import RestListService
from hoops_admin.session import AdminSession

LOG = logs.logger(__file__)

_SERVICE_REGISTRY: Dict[str, Callable[[ListResource, AdminSession], ListService]] = {
    "rest": lambda resource, session: RestListService(resource, session),
    "demo": lambda resource, session: DemoListService(resource),
}


def get_list_service(
    resource: ListResource,
    session: AdminSession | None = None,
    kind: str | None = None,
) -> ListService:
    """Return the configured list service for resource."""
    resolved_kind = (kind or config.SERVICE_KIND).lower()
    LOG.info(
        "get_list_service - resource:%s kind:%s resolved_kind:%s",
        resource.name,
        kind,
        resolved_kind,
    )
    try:
        factory = _SERVICE_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown list service kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory(resource, session or AdminSession())
