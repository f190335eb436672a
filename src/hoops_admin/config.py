"""
Runtime configuration read from the environment.

All settings are module-level constants resolved once at import time.
"""

import os


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


def _int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {value!r}"
        raise ValueError(msg) from exc


API_BASE_URL = os.getenv("HOOPS_API_BASE_URL", "http://localhost:5001/api").rstrip("/")

# "rest" talks to the backend, "demo" serves the bundled fixtures
SERVICE_KIND = os.getenv("HOOPS_ADMIN_SERVICE", "rest").lower()

PAGE_SIZE = _int("HOOPS_PAGE_SIZE", 20)
REQUEST_TIMEOUT = _int("HOOPS_REQUEST_TIMEOUT", 20)

# Quiet window before filter edits are dispatched. Server-paged views wait
# longer because every dispatch costs a request.
_DEBOUNCE_OVERRIDE_MS = _int("HOOPS_DEBOUNCE_MS", 0)
SERVER_DEBOUNCE_SECONDS = (_DEBOUNCE_OVERRIDE_MS or 500) / 1000
CLIENT_DEBOUNCE_SECONDS = (_DEBOUNCE_OVERRIDE_MS or 300) / 1000

METADATA_TTL = _int("HOOPS_METADATA_TTL", 300)
CACHE_DISABLED = _flag("HOOPS_CACHE_DISABLED")

# Dash app settings
ADMIN_VIEW = os.getenv("HOOPS_ADMIN_VIEW", "tickets").lower()
ADMIN_PORT = _int("HOOPS_ADMIN_PORT", 8050)
ADMIN_TOKEN = os.getenv("HOOPS_ADMIN_TOKEN") or None
ADMIN_ROLE = os.getenv("HOOPS_ADMIN_ROLE", "admin").lower()

# Club website; edit links open its admin pages
SITE_URL = os.getenv("HOOPS_SITE_URL", "http://localhost:3000").rstrip("/")
DEBUG = _flag("HOOPS_DEBUG")
