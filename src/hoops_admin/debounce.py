"""
Debounced dispatch of filter edits.

Filter inputs fire on every keystroke. The Debouncer merges those partial
updates and hands the merged result to its callback once the input has been
quiet for ``wait`` seconds. It runs on the asyncio event loop, so it must be
used from coroutines or loop callbacks.
"""

import asyncio
from typing import Any, Callable, Mapping

from hoops_admin.lib import logs

LOG = logs.logger(__file__)


class Debouncer:
    """
    Merge rapid partial updates into one dispatch per quiet window.

    Attributes:
        wait: Quiet period in seconds.
        dispatch_count: Number of merged updates dispatched so far.
    """

    def __init__(self, callback: Callable[[dict[str, Any]], Any], wait: float) -> None:
        self._callback = callback
        self.wait = wait
        self._pending: dict[str, Any] = {}
        self._handle: asyncio.TimerHandle | None = None
        self.dispatch_count = 0

    @property
    def pending(self) -> dict[str, Any]:
        """A copy of the updates waiting to be dispatched."""
        return dict(self._pending)

    @property
    def is_armed(self) -> bool:
        return self._handle is not None

    def push(self, updates: Mapping[str, Any]) -> None:
        """Merge updates (later values win) and restart the quiet window."""
        self._pending.update(updates)
        if self._handle is not None:
            self._handle.cancel()
        self._handle = asyncio.get_running_loop().call_later(self.wait, self._fire)

    def flush(self) -> bool:
        """
        Dispatch pending updates now instead of waiting.

        Returns:
            True when something was dispatched.
        """
        if self._handle is None:
            return False
        self._handle.cancel()
        self._fire()
        return True

    def cancel(self) -> None:
        """Drop pending updates without dispatching them."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending:
            LOG.debug("Dropping pending filter updates: %s", sorted(self._pending))
        self._pending = {}

    def _fire(self) -> None:
        self._handle = None
        updates, self._pending = self._pending, {}
        self.dispatch_count += 1
        self._callback(updates)
