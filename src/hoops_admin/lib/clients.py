"""
HTTP client factory for the club REST backend.

Every admin view shares one ``requests.Session`` so connections are pooled.
Authentication is not attached here: the bearer token comes from the
injected AdminSession on each request.
"""

import functools

import requests

from hoops_admin import __version__

_USER_AGENT = f"hoops-admin/{__version__}"


def new_session() -> requests.Session:
    """Return a fresh session with the default JSON headers."""
    session = requests.Session()
    session.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }
    )
    return session


@functools.cache
def http_session() -> requests.Session:
    """
    Return the process-wide HTTP session, creating it on first use.

    Returns:
        Shared requests.Session instance.
    """
    return new_session()
