"""
Declarations of the admin list resources.

Each ListResource describes one admin table: where its rows come from, how
raw records are normalized, which filters and sort orders it offers, how its
statistics are reduced and which row actions it exposes. The controller,
services and renderers are generic and read everything from here.

Resources:
- tickets: ticket purchases, paged and filtered by the backend
- teams: internal club teams, filtered locally
- refunds: refund requests across all payments, filtered locally
- registrations: teams registered for one tournament, filtered locally
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Iterable, Mapping, Sequence

from hoops_admin import config
from hoops_admin.lib import logs
from hoops_admin.models.common import DateRange, ListRow, is_blank
from hoops_admin.models.refund import REFUND_STATUSES, RefundRow, normalize_payment, refund_stats
from hoops_admin.models.registration import (
    RegistrationRow,
    normalize_registration,
    registration_stats,
)
from hoops_admin.models.team import (
    GRADES,
    TeamRow,
    default_team_metadata,
    normalize_team,
    team_metadata,
    team_stats,
)
from hoops_admin.models.ticket import (
    TICKET_STATUSES,
    TicketRow,
    default_ticket_metadata,
    normalize_ticket,
    ticket_metadata,
    ticket_stats,
)
from hoops_admin.utils import format_currency, format_date, title_case

LOG = logs.logger(__file__)

TEXT = "text"
SELECT = "select"
DATE_RANGE = "date_range"


@dataclass(frozen=True)
class FilterField:
    """
    One filter input of a list view.

    Attributes:
        name: Key in FilterState.
        label: Input label.
        kind: TEXT (substring), SELECT (equality) or DATE_RANGE.
        attrs: Row attributes the filter is matched against locally.
        param: Query parameter name; defaults to name. Date ranges always
            expand to ``startDate``/``endDate``.
        options: Static choices for SELECT fields.
        options_key: Metadata key supplying dynamic choices.
    """

    name: str
    label: str
    kind: str = TEXT
    attrs: tuple[str, ...] = ()
    param: str | None = None
    options: tuple[str, ...] = ()
    options_key: str | None = None
    placeholder: str = ""

    @property
    def query_key(self) -> str:
        return self.param or self.name

    def empty_value(self) -> Any:
        return DateRange() if self.kind == DATE_RANGE else None

    def matches(self, row: ListRow, value: Any) -> bool:
        """Return True when row satisfies this filter set to value."""
        if is_blank(value):
            return True
        if self.kind == DATE_RANGE:
            return DateRange.coerce(value).contains(getattr(row, self.attrs[0], None))
        values = [getattr(row, attr, None) for attr in self.attrs or (self.name,)]
        if self.kind == TEXT:
            needle = str(value).strip().lower()
            return any(needle in str(v).lower() for v in values if v not in (None, ""))
        wanted = str(value).strip().lower()
        return any(str(v).lower() == wanted for v in values if v is not None)


@dataclass(frozen=True)
class SortOption:
    """A sort token the list accepts; ``key`` is used for local sorting."""

    token: str
    label: str
    key: Callable[[Any], Any]
    reverse: bool = False


@dataclass(frozen=True)
class Column:
    """A table column; ``render`` turns a row into cell text."""

    label: str
    render: Callable[[Any], str]
    kind: str = "text"


@dataclass(frozen=True)
class RowAction:
    """
    A per-row action button.

    Attributes:
        name: Action identifier used in component ids ("view", "delete", ...).
        label: Button text.
        icon: Iconify icon name.
        confirm: True when the action needs an explicit confirmation step.
        mutates: True when the action changes server state.
        when: Optional predicate; the button is hidden when it returns False.
        href: Optional link target; such actions render as links.
    """

    name: str
    label: str
    icon: str
    confirm: bool = False
    mutates: bool = False
    when: Callable[[Any], bool] | None = None
    href: Callable[[Any], str] | None = None

    def applies_to(self, row: ListRow) -> bool:
        return self.when is None or bool(self.when(row))


@dataclass(frozen=True)
class ListResource:
    """Everything the generic list machinery needs to know about one table."""

    name: str
    title: str
    noun: str
    endpoint: str
    rows_keys: tuple[str, ...]
    row_type: type[ListRow]
    normalizer: Callable[[Mapping[str, Any]], Any]
    fields: tuple[FilterField, ...]
    sort_options: tuple[SortOption, ...]
    columns: tuple[Column, ...]
    stats_reducer: Callable[[Sequence[Any]], dict[str, float]]
    stat_labels: tuple[tuple[str, str, str], ...]
    default_sort: str | None = None
    server_paging: bool = False
    metadata_endpoint: str | None = None
    metadata_from_rows: Callable[[Sequence[Any]], dict[str, list]] | None = None
    default_metadata: Callable[[int], dict[str, list]] | None = None
    delete_endpoint: str | None = None
    export_endpoint: str | None = None
    export_prefix: str = "export"
    actions: tuple[RowAction, ...] = ()
    scope_params: tuple[str, ...] = ()
    page_size: int = field(default_factory=lambda: config.PAGE_SIZE)

    @property
    def debounce_seconds(self) -> float:
        if self.server_paging:
            return config.SERVER_DEBOUNCE_SECONDS
        return config.CLIENT_DEBOUNCE_SECONDS

    def filter_field(self, name: str) -> FilterField:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        msg = f"{self.name} has no filter field {name!r}"
        raise KeyError(msg)

    def sort_option(self, token: str | None) -> SortOption | None:
        if token is None:
            return None
        for option in self.sort_options:
            if option.token == token:
                return option
        msg = f"Unknown sort {token!r} for {self.name}"
        raise ValueError(msg)

    def empty_filters(self) -> dict[str, Any]:
        return {f.name: f.empty_value() for f in self.fields}

    def action(self, name: str) -> RowAction:
        for candidate in self.actions:
            if candidate.name == name:
                return candidate
        msg = f"{self.name} has no row action {name!r}"
        raise KeyError(msg)

    def extract_records(self, body: Any) -> list[Mapping[str, Any]]:
        """Return the raw record list from a list response body."""
        if isinstance(body, list):
            return body
        if isinstance(body, Mapping):
            for key in self.rows_keys:
                records = body.get(key)
                if isinstance(records, list):
                    return records
        LOG.warning("Unexpected %s response shape: %s", self.name, type(body).__name__)
        return []

    def normalize(self, records: Iterable[Mapping[str, Any]]) -> tuple[list[ListRow], int]:
        """
        Normalize raw records into rows.

        Returns:
            ``(rows, dropped)`` where dropped counts records the normalizer
            rejected. Normalizers may return one row, None, or an iterable
            of rows (refund payments fan out).
        """
        rows: list[ListRow] = []
        dropped = 0
        for record in records:
            if not isinstance(record, Mapping):
                dropped += 1
                continue
            result = self.normalizer(record)
            if result is None:
                dropped += 1
            elif isinstance(result, ListRow):
                rows.append(result)
            else:
                rows.extend(result)
        if dropped:
            LOG.warning("%s: dropped %d incomplete records", self.name, dropped)
        return rows, dropped

    def metadata_for(self, rows: Sequence[ListRow], today: date | None = None) -> dict[str, list]:
        """Derive filter options from rows, or defaults when nothing is loaded."""
        year = (today or date.today()).year
        if rows and self.metadata_from_rows is not None:
            return self.metadata_from_rows(rows)
        if self.default_metadata is not None:
            return self.default_metadata(year)
        return {}


def _date_key(value: datetime | None) -> datetime:
    return value or datetime.min


TICKETS = ListResource(
    name="tickets",
    title="Ticket Purchases",
    noun="ticket purchase",
    endpoint="/admin/ticket-purchases",
    rows_keys=("tickets", "data"),
    row_type=TicketRow,
    normalizer=normalize_ticket,
    server_paging=True,
    fields=(
        FilterField("season", "Season", SELECT, ("season",), options_key="seasons"),
        FilterField("year", "Year", SELECT, ("year",), options_key="years"),
        FilterField("status", "Status", SELECT, ("status",), options=TICKET_STATUSES),
        FilterField("package", "Package", SELECT, ("package_name",), options_key="packages"),
        FilterField(
            "customer",
            "Customer",
            TEXT,
            ("customer_name", "customer_email"),
            placeholder="Name or email",
        ),
        FilterField("dateRange", "Purchase date", DATE_RANGE, ("purchased_at",)),
    ),
    sort_options=(
        SortOption("dateDesc", "Newest first", lambda r: _date_key(r.purchased_at), True),
        SortOption("dateAsc", "Oldest first", lambda r: _date_key(r.purchased_at)),
        SortOption("amountDesc", "Highest amount", lambda r: r.amount, True),
        SortOption("amountAsc", "Lowest amount", lambda r: r.amount),
    ),
    default_sort="dateDesc",
    columns=(
        Column("Customer", lambda r: r.customer_name or "N/A"),
        Column("Email", lambda r: r.customer_email),
        Column("Package", lambda r: f"{r.package_name} ({r.quantity} x {format_currency(r.unit_price, r.currency)})"),
        Column("Amount", lambda r: format_currency(r.amount, r.currency)),
        Column("Status", lambda r: r.status, kind="status"),
        Column("Season", lambda r: f"{r.season} {r.year}".strip()),
        Column("Purchased", lambda r: format_date(r.purchased_at, with_time=True)),
    ),
    stats_reducer=ticket_stats,
    stat_labels=(
        ("totalAmount", "Total Revenue", "currency"),
        ("totalTickets", "Tickets Sold", "number"),
        ("totalTransactions", "Transactions", "number"),
        ("averageTicketPrice", "Average Price", "currency"),
        ("uniqueCustomers", "Customers", "number"),
    ),
    metadata_endpoint="/admin/ticket-purchases/metadata",
    metadata_from_rows=ticket_metadata,
    default_metadata=default_ticket_metadata,
    export_endpoint="/admin/ticket-purchases/export",
    export_prefix="ticket-purchases",
    actions=(
        RowAction("view", "View", "lucide:eye"),
        RowAction(
            "receipt",
            "Receipt",
            "lucide:receipt",
            when=lambda r: bool(r.receipt_url),
            href=lambda r: r.receipt_url,
        ),
    ),
)

TEAMS = ListResource(
    name="teams",
    title="Internal Teams",
    noun="team",
    endpoint="/internal-teams",
    rows_keys=("teams", "data"),
    row_type=TeamRow,
    normalizer=normalize_team,
    fields=(
        FilterField("name", "Team name", TEXT, ("name",), placeholder="Search teams"),
        FilterField("year", "Year", SELECT, ("year",), options_key="years"),
        FilterField("grade", "Grade", SELECT, ("grade",), options=GRADES, options_key="grades"),
        FilterField("gender", "Gender", SELECT, ("gender",), options=("Male", "Female")),
        FilterField("status", "Status", SELECT, ("status",), options=("active", "inactive")),
    ),
    sort_options=(
        SortOption("asc", "Name A-Z", lambda r: r.name.lower()),
        SortOption("desc", "Name Z-A", lambda r: r.name.lower(), True),
        SortOption("recentlyAdded", "Recently added", lambda r: r.year, True),
    ),
    columns=(
        Column("Team Name", lambda r: r.name),
        Column("Year", lambda r: str(r.year or "")),
        Column("Grade", lambda r: r.grade),
        Column("Gender", lambda r: r.gender),
        Column("Coaches", lambda r: str(r.coach_count)),
        Column("Players", lambda r: str(r.player_count)),
        Column("Status", lambda r: r.status, kind="status"),
    ),
    stats_reducer=team_stats,
    stat_labels=(
        ("totalTeams", "Teams", "number"),
        ("activeTeams", "Active", "number"),
        ("totalPlayers", "Players", "number"),
        ("totalCoaches", "Coaches", "number"),
    ),
    metadata_endpoint="/internal-teams/metadata",
    metadata_from_rows=team_metadata,
    default_metadata=default_team_metadata,
    delete_endpoint="/internal-teams/{id}",
    export_prefix="internal-teams",
    actions=(
        RowAction("view", "View", "lucide:eye"),
        RowAction(
            "edit",
            "Edit",
            "lucide:pencil",
            mutates=True,
            href=lambda r: f"{config.SITE_URL}/admin/internal-teams/{r.id}/edit",
        ),
        RowAction("delete", "Delete", "lucide:trash-2", confirm=True, mutates=True),
    ),
)

REFUNDS = ListResource(
    name="refunds",
    title="Refunds",
    noun="refund",
    endpoint="/refunds/all",
    rows_keys=("payments", "data"),
    row_type=RefundRow,
    normalizer=normalize_payment,
    fields=(
        FilterField("status", "Status", SELECT, ("status",), options=REFUND_STATUSES),
        FilterField("card", "Card last 4", TEXT, ("card_last_four",), placeholder="1234"),
    ),
    sort_options=(
        SortOption("dateDesc", "Newest first", lambda r: _date_key(r.activity_at), True),
        SortOption("dateAsc", "Oldest first", lambda r: _date_key(r.activity_at)),
        SortOption("amountDesc", "Highest amount", lambda r: r.amount, True),
    ),
    default_sort="dateDesc",
    columns=(
        Column("Card", lambda r: f"{r.card_brand} **** {r.card_last_four}" if r.card_last_four else r.card_brand),
        Column("Customer", lambda r: r.customer_name or r.customer_email or "N/A"),
        Column("Payment", lambda r: format_currency(r.payment_amount)),
        Column("Refund", lambda r: format_currency(r.amount)),
        Column("Status", lambda r: r.status, kind="status"),
        Column("Reason", lambda r: r.reason),
        Column("Date", lambda r: format_date(r.activity_at, with_time=True)),
    ),
    stats_reducer=refund_stats,
    stat_labels=(
        ("pendingCount", "Pending", "number"),
        ("completedCount", "Completed", "number"),
        ("failedCount", "Failed", "number"),
        ("totalRefunded", "Refunded", "currency"),
    ),
    export_prefix="refunds",
    actions=(
        RowAction("approve", "Approve", "lucide:check", confirm=True, mutates=True, when=lambda r: r.is_pending),
        RowAction("reject", "Reject", "lucide:x", confirm=True, mutates=True, when=lambda r: r.is_pending),
        RowAction(
            "receipt",
            "Receipt",
            "lucide:receipt",
            when=lambda r: bool(r.receipt_url),
            href=lambda r: r.receipt_url,
        ),
    ),
    page_size=10,
)

REGISTRATIONS = ListResource(
    name="registrations",
    title="Tournament Registrations",
    noun="registration",
    endpoint="/registrations/by-tournament/{name}/{year}",
    rows_keys=("registrations", "data"),
    row_type=RegistrationRow,
    normalizer=normalize_registration,
    scope_params=("name", "year"),
    fields=(
        FilterField("teamName", "Team name", TEXT, ("team_name",), placeholder="Search teams"),
        FilterField("grade", "Grade", SELECT, ("grade",), options=GRADES),
        FilterField("sex", "Gender", SELECT, ("sex",), options=("Male", "Female")),
        FilterField("level", "Level", SELECT, ("level",), options=("Gold", "Silver", "Bronze")),
        FilterField("paymentStatus", "Payment", SELECT, ("status",), options=("paid", "pending")),
    ),
    sort_options=(
        SortOption("asc", "Team A-Z", lambda r: r.team_name.lower()),
        SortOption("desc", "Team Z-A", lambda r: r.team_name.lower(), True),
        SortOption("recentlyAdded", "Recently registered", lambda r: _date_key(r.registered_at), True),
    ),
    columns=(
        Column("Team Name", lambda r: r.team_name or "N/A"),
        Column("Grade", lambda r: r.grade or "N/A"),
        Column("Gender", lambda r: r.sex or "N/A"),
        Column("Level", lambda r: r.level or "N/A"),
        Column("Parent", lambda r: r.parent_name or "N/A"),
        Column("Parent Email", lambda r: r.parent_email or "N/A"),
        Column("Payment Status", lambda r: title_case(r.status, "Pending"), kind="status"),
    ),
    stats_reducer=registration_stats,
    stat_labels=(
        ("totalRegistrations", "Registrations", "number"),
        ("paidCount", "Paid", "number"),
        ("pendingCount", "Pending", "number"),
        ("uniqueParents", "Parents", "number"),
    ),
    export_prefix="registrations",
    actions=(RowAction("view", "View", "lucide:eye"),),
    page_size=10,
)

_RESOURCES = {resource.name: resource for resource in (TICKETS, TEAMS, REFUNDS, REGISTRATIONS)}


def get_resource(name: str) -> ListResource:
    """Return the resource registered under name."""
    try:
        return _RESOURCES[name.lower()]
    except KeyError as exc:
        msg = f"Unknown admin resource: {name} (expected one of: {', '.join(_RESOURCES)})"
        raise ValueError(msg) from exc
