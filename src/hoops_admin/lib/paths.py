"""
Path helpers for on-disk caches.
"""

import tempfile
from pathlib import Path


def temp_dir() -> Path:
    """Return the system temporary directory as a Path."""
    return Path(tempfile.gettempdir())


def cache_dir(name: str) -> Path:
    """Return (and create) a named cache directory below the temp dir."""
    path = temp_dir() / "hoops_admin" / name
    path.mkdir(parents=True, exist_ok=True)
    return path
