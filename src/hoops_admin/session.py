"""
Explicit authentication session handed to every data-access object.

The session is created when the app starts and torn down at logout. The
list layer only ever reads from it.
"""

from dataclasses import dataclass, field
from typing import Callable

from hoops_admin.lib import logs

LOG = logs.logger(__file__)

_PRIVILEGED_ROLES = frozenset({"admin", "coach"})


@dataclass
class AdminSession:
    """
    Holds the bearer token and role of the signed-in user.

    Attributes:
        access_token: Current bearer token, or None when signed out.
        role: Role reported by the backend ("admin", "coach", "user").
        on_logout: Callbacks run once when the session ends.
    """

    access_token: str | None = None
    role: str = "user"
    on_logout: list[Callable[[], None]] = field(default_factory=list, repr=False)

    @property
    def token(self) -> str | None:
        token = (self.access_token or "").strip()
        return token or None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def can_manage(self) -> bool:
        """Admins and coaches may open the admin list views."""
        return self.role in _PRIVILEGED_ROLES

    def auth_headers(self) -> dict[str, str]:
        """Return the Authorization header, or an empty dict when signed out."""
        token = self.token
        return {"Authorization": f"Bearer {token}"} if token else {}

    def logout(self) -> None:
        """Drop the token and notify listeners."""
        LOG.info("logout - role:%s", self.role)
        self.access_token = None
        callbacks, self.on_logout = self.on_logout, []
        for callback in callbacks:
            callback()
