"""
View-models and normalizers for the admin list views.

This package provides:
- Shared list state (filters, pagination, stats, ListState)
- One row type and normalizer per admin resource

All row types extend ListRow and round-trip through to_dict/from_dict.
"""

from hoops_admin.models.common import (
    DateRange,
    FilterState,
    ListPage,
    ListRow,
    ListState,
    MutationResult,
    PaginationState,
    StatsScope,
    StatsSummary,
    ViewStatus,
)
from hoops_admin.models.refund import RefundRow, normalize_payment
from hoops_admin.models.registration import RegistrationRow, normalize_registration
from hoops_admin.models.team import TeamRow, normalize_team
from hoops_admin.models.ticket import TicketRow, normalize_ticket

__all__ = [
    "DateRange",
    "FilterState",
    "ListPage",
    "ListRow",
    "ListState",
    "MutationResult",
    "PaginationState",
    "RefundRow",
    "RegistrationRow",
    "StatsScope",
    "StatsSummary",
    "TeamRow",
    "TicketRow",
    "ViewStatus",
    "normalize_payment",
    "normalize_registration",
    "normalize_team",
    "normalize_ticket",
]
