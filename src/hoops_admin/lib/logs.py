"""
Logging utilities for the admin list views.

All loggers hang off a single ``hoops_admin`` parent logger so the handler
and level are configured once, no matter how many modules ask for a logger.
"""

import logging
import os
from pathlib import Path

_ROOT_NAME = "hoops_admin"
_LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _root() -> logging.Logger:
    root = logging.getLogger(_ROOT_NAME)
    if not root.handlers:
        root.setLevel(getattr(logging, _LOG_LEVEL, logging.INFO))
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        root.addHandler(handler)
    return root


def logger(name: str) -> logging.Logger:
    """
    Return a logger below the ``hoops_admin`` parent.

    Args:
        name: Logger name or a ``__file__`` path; paths are reduced to the
            module stem so records read ``hoops_admin.controller``.

    Returns:
        Configured logging.Logger instance.
    """
    if "/" in name or "\\" in name:
        name = Path(name).stem
    _root()
    if name == _ROOT_NAME or name.startswith(_ROOT_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_ROOT_NAME}.{name}")
