"""Tournament registration rows and their normalizer."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Mapping, Sequence

from benedict import benedict

from hoops_admin.models.common import ListRow
from hoops_admin.utils import parse_date


@dataclass(slots=True)
class RegistrationRow(ListRow):
    """One team registered for a tournament; ``status`` is the payment status."""

    DATE_FIELDS: ClassVar[tuple[str, ...]] = ("registered_at",)

    team_id: str = ""
    team_name: str = ""
    grade: str = ""
    sex: str = ""
    level: str = ""
    parent_id: str = ""
    parent_name: str = ""
    parent_email: str = ""
    registered_at: datetime | None = None

    @property
    def is_paid(self) -> bool:
        return self.status == "paid"


def normalize_registration(record: Mapping[str, Any]) -> RegistrationRow | None:
    """
    Convert a raw registration; returns None when the team or parent
    identity is incomplete, since such rows cannot be acted on.
    """
    if not isinstance(record.get("team"), Mapping) or not isinstance(record.get("parent"), Mapping):
        return None
    b = benedict(dict(record), keypath_separator=None)
    required = ("_id", ["team", "_id"], ["team", "name"], ["parent", "_id"], ["parent", "fullName"])
    if not all(b.get(key) for key in required):
        return None

    payment_status = b.get("paymentStatus") or ("paid" if b.get("paymentComplete") else "pending")
    return RegistrationRow(
        id=str(b.get("_id")),
        status=str(payment_status).lower(),
        team_id=str(b.get(["team", "_id"])),
        team_name=b.get(["team", "name"]),
        grade=str(b.get(["team", "grade"]) or ""),
        sex=b.get(["team", "sex"]) or "",
        level=b.get(["team", "levelOfCompetition"]) or b.get("levelOfCompetition") or "",
        parent_id=str(b.get(["parent", "_id"])),
        parent_name=b.get(["parent", "fullName"]),
        parent_email=b.get(["parent", "email"]) or "",
        registered_at=parse_date(b.get("registrationDate")),
    )


def registration_stats(rows: Sequence[RegistrationRow]) -> dict[str, float]:
    return {
        "totalRegistrations": len(rows),
        "paidCount": sum(1 for row in rows if row.is_paid),
        "pendingCount": sum(1 for row in rows if not row.is_paid),
        "uniqueParents": len({row.parent_id for row in rows}),
    }
