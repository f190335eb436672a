"""
Unit tests for pagination and statistics reduction.
"""
import pytest

from hoops_admin.models.common import FilterState, StatsScope, StatsSummary
from hoops_admin.models.team import TeamRow, team_stats
from hoops_admin.models.ticket import TicketRow, ticket_stats
from hoops_admin.reducer import apply_local, paginate, reduce_pagination, reduce_stats, subtract_stats
from hoops_admin.resources import TEAMS


def _tickets():
    return [
        TicketRow(id="a", status="completed", amount=20, quantity=2, customer_email="a@example.com"),
        TicketRow(id="b", status="pending", amount=10, quantity=1, customer_email="b@example.com"),
        TicketRow(id="c", status="completed", amount=15, quantity=1, customer_email="a@example.com"),
    ]


def _teams(count):
    return [
        TeamRow(id=f"t{i}", status="active", name=f"Team {i:02d}", player_count=2, coach_count=1)
        for i in range(count)
    ]


class TestReducePagination:
    """Tests for reduce_pagination."""

    def test_server_pagination_wins(self):
        body = {"pagination": {"current": 2, "pageSize": 10, "total": 35, "totalPages": 4}}
        pagination = reduce_pagination(body, page=1, page_size=20, row_count=10)
        assert pagination.current_page == 2
        assert pagination.page_size == 10
        assert pagination.total_items == 35
        assert pagination.total_pages == 4

    def test_missing_total_pages_is_computed(self):
        body = {"pagination": {"current": 1, "pageSize": 10, "total": 35}}
        assert reduce_pagination(body, 1, 10, 10).total_pages == 4

    @pytest.mark.parametrize(
        "total,page_size,expected",
        [(45, 20, 3), (40, 20, 2), (1, 20, 1), (0, 20, 0)],
    )
    def test_fallback_uses_ceiling_division(self, total, page_size, expected):
        """Legacy bodies only carry a total; pages are ceil(total / page_size)."""
        body = {"tickets": [], "total": total}
        pagination = reduce_pagination(body, 1, page_size, row_count=0)
        assert pagination.total_items == total
        assert pagination.total_pages == expected

    def test_legacy_pages_are_kept(self):
        body = {"tickets": [], "total": 45, "pages": 5}
        pagination = reduce_pagination(body, 2, 10, row_count=10)
        assert pagination.total_pages == 5
        assert pagination.current_page == 2

    def test_fallback_to_row_count(self):
        pagination = reduce_pagination([{}] * 7, page=1, page_size=5, row_count=7)
        assert pagination.total_items == 7
        assert pagination.total_pages == 2

    def test_current_page_is_clamped(self):
        body = {"pagination": {"current": 9, "pageSize": 10, "total": 15, "totalPages": 2}}
        assert reduce_pagination(body, 9, 10, 5).current_page == 2


class TestReduceStats:
    """Tests for reduce_stats."""

    def test_fallback_sums_completed_rows_only(self):
        stats = reduce_stats({"tickets": []}, _tickets(), ticket_stats)
        assert stats.scope == StatsScope.PAGE
        assert stats.is_partial
        assert stats["totalAmount"] == 35
        assert stats["totalTickets"] == 3
        assert stats["totalTransactions"] == 2
        assert stats["averageTicketPrice"] == pytest.approx(35 / 3)
        assert stats["uniqueCustomers"] == 1

    def test_fallback_without_completed_rows_is_zero(self):
        rows = [TicketRow(id="p", status="pending", amount=99, quantity=3)]
        stats = reduce_stats({}, rows, ticket_stats)
        assert stats["totalAmount"] == 0
        assert stats["totalTickets"] == 0
        assert stats["averageTicketPrice"] == 0

    def test_server_stats_win_and_keep_local_shape(self):
        body = {"stats": {"totalAmount": 500, "totalTickets": "40", "extra": 1}}
        stats = reduce_stats(body, _tickets(), ticket_stats)
        assert stats.scope == StatsScope.SERVER
        assert not stats.is_partial
        assert stats["totalAmount"] == 500
        assert stats["totalTickets"] == 40
        assert stats["totalTransactions"] == 0
        assert "extra" not in stats.values


class TestLocalPaging:
    """Tests for client-side filtering and pagination."""

    def test_paginate_slices_requested_page(self):
        rows, pagination = paginate(_teams(25), page=3, page_size=10)
        assert [row.id for row in rows] == ["t20", "t21", "t22", "t23", "t24"]
        assert pagination.total_pages == 3

    def test_paginate_clamps_out_of_range_page(self):
        rows, pagination = paginate(_teams(25), page=9, page_size=10)
        assert pagination.current_page == 3
        assert len(rows) == 5

    def test_apply_local_filters_sorts_and_reduces_over_matches(self):
        rows = _teams(12)
        rows[3].status = "inactive"
        filters = FilterState({"name": "team 0"})
        page_rows, pagination, stats = apply_local(
            rows, filters, TEAMS.fields, TEAMS.sort_option("desc"), 1, 5, team_stats
        )
        assert [row.id for row in page_rows] == ["t9", "t8", "t7", "t6", "t5"]
        assert pagination.total_items == 10
        assert pagination.total_pages == 2
        assert stats.scope == StatsScope.FILTERED
        assert stats["totalTeams"] == 10
        assert stats["activeTeams"] == 9

    def test_subtract_stats_removes_row_contribution(self):
        rows = _teams(3)
        stats = StatsSummary(team_stats(rows), StatsScope.FILTERED)
        reduced = subtract_stats(stats, rows[:1], team_stats)
        assert reduced.scope == StatsScope.FILTERED
        assert reduced.values == team_stats(rows[1:])

    def test_subtract_stats_never_goes_negative(self):
        stats = StatsSummary({"totalTeams": 0, "totalPlayers": 1}, StatsScope.SERVER)
        reduced = subtract_stats(stats, _teams(1), team_stats)
        assert reduced["totalTeams"] == 0
        assert reduced["totalPlayers"] == 0
