"""
Confirm-then-submit flow for mutating row actions.

    IDLE -> CONFIRMING -> SUBMITTING -> SUCCEEDED | FAILED

``cancel`` returns a CONFIRMING flow to IDLE. A FAILED flow may be
requested again, which is how the renderer offers a retry.
"""

import asyncio
import inspect
from enum import Enum
from typing import Any, Awaitable, Callable

from hoops_admin.errors import user_message
from hoops_admin.lib import logs
from hoops_admin.models.common import MutationResult

LOG = logs.logger(__file__)


class ActionStatus(str, Enum):
    IDLE = "idle"
    CONFIRMING = "confirming"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ActionFlow:
    """
    One pending row action.

    Attributes:
        name: Action name, e.g. "delete" or "approve".
        prompt: Confirmation text shown while CONFIRMING.
        status: Current ActionStatus.
        message: Result or failure text once finished.
    """

    def __init__(
        self,
        name: str,
        action: Callable[[], Awaitable[MutationResult]],
        on_success: Callable[[MutationResult], Any] | None = None,
        on_error: Callable[[str], Any] | None = None,
        prompt: str = "",
    ) -> None:
        self.name = name
        self.prompt = prompt
        self.status = ActionStatus.IDLE
        self.message: str | None = None
        self._action = action
        self._on_success = on_success
        self._on_error = on_error

    @property
    def is_done(self) -> bool:
        return self.status in (ActionStatus.SUCCEEDED, ActionStatus.FAILED)

    def request(self) -> "ActionFlow":
        """Enter CONFIRMING."""
        self._require(ActionStatus.IDLE, ActionStatus.FAILED)
        self.status = ActionStatus.CONFIRMING
        self.message = None
        return self

    def cancel(self) -> None:
        """Leave CONFIRMING without doing anything."""
        self._require(ActionStatus.CONFIRMING)
        self.status = ActionStatus.IDLE

    async def confirm(self) -> ActionStatus:
        """Run the action and settle into SUCCEEDED or FAILED."""
        self._require(ActionStatus.CONFIRMING)
        self.status = ActionStatus.SUBMITTING
        try:
            result = await self._action()
        except asyncio.CancelledError:
            self.status = ActionStatus.FAILED
            self.message = "The request was cancelled."
            raise
        except Exception as exc:
            LOG.exception("Action %s failed", self.name)
            return self._fail(user_message(exc, f"Failed to {self.name}. Please try again."))

        if not result.success:
            return self._fail(result.message or f"Failed to {self.name}. Please try again.")

        self.status = ActionStatus.SUCCEEDED
        self.message = result.message
        if self._on_success is not None:
            outcome = self._on_success(result)
            if inspect.isawaitable(outcome):
                await outcome
        return self.status

    def _fail(self, message: str) -> ActionStatus:
        self.status = ActionStatus.FAILED
        self.message = message
        if self._on_error is not None:
            self._on_error(message)
        return self.status

    def _require(self, *allowed: ActionStatus) -> None:
        if self.status not in allowed:
            msg = f"Cannot {self.name} while {self.status.value}"
            raise RuntimeError(msg)
