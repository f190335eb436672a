"""
Error taxonomy for the admin data-access layer.

Services raise these; the list controller and action flows catch them and
turn them into banner text via ``user_message``. Nothing here is allowed to
reach the renderers as an exception.
"""

from typing import Any


class AdminApiError(Exception):
    """Base class for all errors surfaced to an admin view."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def user_message(self) -> str:
        """Text suitable for the dismissible error banner."""
        return str(self)


class AuthError(AdminApiError):
    """No token is available, or the backend rejected it (401/403)."""

    default_message = "Your session has expired. Please log in again."

    def __init__(self, message: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class HttpError(AdminApiError):
    """
    The backend answered with a non-2xx status.

    Attributes:
        status: HTTP status code.
        body: Parsed JSON body when available, otherwise the raw text.
    """

    def __init__(self, status: int, body: Any = None, message: str | None = None) -> None:
        self.status = status
        self.body = body
        super().__init__(message or extract_message(body) or f"HTTP {status}")


class NetworkError(AdminApiError):
    """The request never reached the backend (offline, DNS, timeout)."""

    default_message = "Failed to load data. Check your connection and try again."


class ValidationError(AdminApiError):
    """A required input is missing or malformed; nothing was sent."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class MutationError(AdminApiError):
    """A mutating endpoint answered ``{"success": false}``."""

    default_message = "The request could not be completed."


def extract_message(body: Any) -> str | None:
    """
    Pull a human readable message out of an error body.

    JSON bodies are searched for ``error``, then ``message``; plain text
    bodies are returned stripped. Empty bodies yield None.
    """
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, dict):
                nested = extract_message(value)
                if nested:
                    return nested
        return None
    if isinstance(body, str) and body.strip():
        return body.strip()
    return None


def user_message(exc: BaseException, fallback: str) -> str:
    """Return banner text for any exception, using fallback for unknown ones."""
    if isinstance(exc, AdminApiError):
        return exc.user_message
    return fallback
