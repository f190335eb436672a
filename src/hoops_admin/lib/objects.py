"""
Object utilities for stable cache keys.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any


def stable_key(*parts: Any) -> str:
    """
    Return a sha256 hex digest that is stable across sessions.

    Parts are serialized with sorted keys, so two equal mappings built in a
    different insertion order produce the same key.
    """
    payload = json.dumps(list(parts), sort_keys=True, default=_default_serializer)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _default_serializer(obj: Any) -> Any:
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)
