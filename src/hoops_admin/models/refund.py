"""
Refund rows.

The refunds endpoint returns payments, each carrying a list of refunds.
The admin panel lists refunds, so every payment fans out into one row per
refund with the payment's card and payer details copied onto it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar, Iterator, Mapping, Sequence

from benedict import benedict

from hoops_admin.models.common import ListRow
from hoops_admin.utils import parse_date, to_float

REFUND_STATUSES = ("pending", "completed", "failed")

_CARD_BRANDS = {
    "VISA": "Visa",
    "MASTERCARD": "Mastercard",
    "AMERICAN_EXPRESS": "American Express",
    "DISCOVER": "Discover",
    "JCB": "JCB",
    "UNIONPAY": "UnionPay",
    "SQUARE_GIFT_CARD": "Gift Card",
}


@dataclass(slots=True)
class RefundRow(ListRow):
    """One refund request against a payment."""

    DATE_FIELDS: ClassVar[tuple[str, ...]] = ("requested_at", "processed_at")

    payment_id: str = ""
    refund_id: str = ""
    amount: float = 0.0
    payment_amount: float = 0.0
    reason: str = ""
    notes: str = ""
    source: str = ""
    requested_at: datetime | None = None
    processed_at: datetime | None = None
    card_last_four: str = ""
    card_brand: str = "Card"
    customer_name: str = ""
    customer_email: str = ""
    receipt_url: str = ""

    @property
    def activity_at(self) -> datetime | None:
        return self.processed_at or self.requested_at

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"


def card_brand_name(brand: str | None) -> str:
    return _CARD_BRANDS.get((brand or "").upper(), "Card")


def normalize_payment(record: Mapping[str, Any]) -> Iterator[RefundRow]:
    """Yield one RefundRow per refund attached to a payment record."""
    payment = benedict(dict(record), keypath_separator=None)
    parents = payment.get("parent") or []
    parent = benedict(dict(parents[0]) if parents else {}, keypath_separator=None)
    payment_id = str(payment.get("_id") or "")

    for refund in payment.get("refunds") or []:
        b = benedict(dict(refund), keypath_separator=None)
        refund_id = str(b.get("_id") or b.get("refundId") or "")
        yield RefundRow(
            id=f"{payment_id}-{refund_id}",
            status=str(b.get("status") or "pending").lower(),
            payment_id=payment_id,
            refund_id=refund_id,
            amount=to_float(b.get("amount")),
            payment_amount=to_float(payment.get("amount")),
            reason=b.get("reason") or "",
            notes=b.get("notes") or "",
            source=b.get("source") or "",
            requested_at=parse_date(b.get("requestedAt")),
            processed_at=parse_date(b.get("processedAt")),
            card_last_four=str(payment.get("cardLastFour") or ""),
            card_brand=card_brand_name(payment.get("cardBrand")),
            customer_name=parent.get("fullName") or "",
            customer_email=parent.get("email") or payment.get("buyerEmail") or "",
            receipt_url=payment.get("receiptUrl") or "",
        )


def refund_stats(rows: Sequence[RefundRow]) -> dict[str, float]:
    return {
        "pendingCount": sum(1 for row in rows if row.status == "pending"),
        "completedCount": sum(1 for row in rows if row.status == "completed"),
        "failedCount": sum(1 for row in rows if row.status == "failed"),
        "totalRefunded": sum(row.amount for row in rows if row.status == "completed"),
    }
