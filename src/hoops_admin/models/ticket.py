"""
Ticket purchase rows and their normalizer.

The backend has shipped several record shapes over time: the purchase
timestamp may arrive as ``purchasedAt``, ``processedAt`` or only
``createdAt``, and season/year are often absent. ``normalize_ticket``
collapses all of them into one TicketRow.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Mapping, Sequence

from benedict import benedict

from hoops_admin.lib import logs, objects
from hoops_admin.models.common import ListRow, unique_sorted
from hoops_admin.seasons import SEASONS, infer_season
from hoops_admin.utils import parse_date, to_float, to_int

LOG = logs.logger(__file__)

COMPLETED = "completed"
TICKET_STATUSES = ("pending", COMPLETED, "failed", "refunded")

_TIMESTAMP_KEYS = ("purchasedAt", "processedAt", "createdAt")


@dataclass(slots=True)
class TicketRow(ListRow):
    """One ticket purchase, reshaped for the ticket dashboard."""

    DATE_FIELDS: ClassVar[tuple[str, ...]] = ("purchased_at",)

    customer_name: str = ""
    customer_email: str = ""
    package_name: str = "General Admission"
    quantity: int = 1
    unit_price: float = 0.0
    amount: float = 0.0
    currency: str = "USD"
    payment_id: str = ""
    receipt_url: str = ""
    form_name: str = ""
    tournament_name: str = ""
    purchased_at: datetime | None = None
    season: str = ""
    year: int = 0


def normalize_ticket(record: Mapping[str, Any]) -> TicketRow:
    """
    Convert a raw ticket purchase record into a TicketRow.

    Default-filling rules:
        - ``status`` outside the known set (or missing) becomes "completed"
        - ``packageName`` defaults to "General Admission", quantity to 1
        - ``amount`` falls back to quantity * unitPrice
        - the first present of purchasedAt/processedAt/createdAt is used
        - season/year follow hoops_admin.seasons precedence
        - records without ``_id``/``id`` get a content-derived id
    """
    b = benedict(dict(record), keypath_separator=None)

    status = str(b.get("status") or "").strip().lower()
    if status not in TICKET_STATUSES:
        if status:
            LOG.debug("Unknown ticket status %r treated as completed", status)
        status = COMPLETED

    quantity = to_int(b.get("quantity"), 1) or 1
    unit_price = to_float(b.get("unitPrice"))
    amount = to_float(b.get("amount"), quantity * unit_price)

    purchased_at = None
    for key in _TIMESTAMP_KEYS:
        purchased_at = parse_date(b.get(key))
        if purchased_at:
            break

    form_name = b.get("formName") or ""
    tournament_name = b.get("tournamentName") or ""
    season, year = infer_season(
        season=b.get("season"),
        year=b.get("year"),
        titles=(form_name, tournament_name),
        when=purchased_at,
    )

    return TicketRow(
        id=str(b.get("_id") or b.get("id") or objects.stable_key(dict(record))[:24]),
        status=status,
        customer_name=b.get("customerName") or "",
        customer_email=b.get("customerEmail") or "",
        package_name=b.get("packageName") or "General Admission",
        quantity=quantity,
        unit_price=unit_price,
        amount=amount,
        currency=b.get("currency") or "USD",
        payment_id=str(b.get("squarePaymentId") or b.get("paymentId") or ""),
        receipt_url=b.get("receiptUrl") or "",
        form_name=form_name,
        tournament_name=tournament_name,
        purchased_at=purchased_at,
        season=season,
        year=year,
    )


def ticket_stats(rows: Sequence[TicketRow]) -> dict[str, float]:
    """Reduce completed purchases into the dashboard statistics."""
    completed = [row for row in rows if row.status == COMPLETED]
    total_amount = sum(row.amount for row in completed)
    total_tickets = sum(row.quantity for row in completed)
    return {
        "totalAmount": total_amount,
        "totalTickets": total_tickets,
        "totalTransactions": len(completed),
        "averageTicketPrice": total_amount / total_tickets if total_tickets else 0,
        "uniqueCustomers": len({row.customer_email for row in completed if row.customer_email}),
    }


def ticket_metadata(rows: Sequence[TicketRow]) -> dict[str, list]:
    """Derive filter options from loaded rows."""
    return {
        "seasons": unique_sorted(row.season for row in rows),
        "years": unique_sorted((row.year for row in rows if row.year), reverse=True),
        "packages": unique_sorted(row.package_name for row in rows),
    }


def default_ticket_metadata(today_year: int) -> dict[str, list]:
    return {"seasons": list(SEASONS), "years": [today_year], "packages": []}
