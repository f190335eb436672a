"""
Local support modules shared across the admin list views.

Modules:
    logs: Logger factory with the application's log format
    objects: Stable hashing for cache keys
    paths: Temp and cache directory helpers
    clients: HTTP session factory for the club REST backend
    caches: Disk-based caching with TTL support
"""

from hoops_admin.lib import caches, clients, logs, objects, paths

__all__ = ["caches", "clients", "logs", "objects", "paths"]
