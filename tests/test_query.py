"""
Unit tests for query building.
"""
from datetime import date

from hoops_admin.models.common import DateRange, FilterState
from hoops_admin.query import build_query, expand_path, query_string
from hoops_admin.resources import REGISTRATIONS, TICKETS


class TestBuildQuery:
    """Tests for build_query."""

    def test_empty_filters_emit_nothing(self):
        """Unset fields, blank strings and empty ranges never become parameters."""
        filters = FilterState(TICKETS.empty_filters()).merge({"customer": "   ", "status": None})
        assert build_query(filters, TICKETS.fields) == []

    def test_empty_filters_with_paging(self):
        filters = FilterState(TICKETS.empty_filters())
        assert build_query(filters, TICKETS.fields, page=1, page_size=20) == [
            ("page", "1"),
            ("limit", "20"),
        ]

    def test_order_follows_field_declarations(self):
        filters = FilterState({"customer": "dana", "status": "pending", "season": "Spring", "year": 2025})
        pairs = build_query(filters, TICKETS.fields, sort="dateDesc", page=2, page_size=20)
        assert pairs == [
            ("season", "Spring"),
            ("year", "2025"),
            ("status", "pending"),
            ("customer", "dana"),
            ("sort", "dateDesc"),
            ("page", "2"),
            ("limit", "20"),
        ]

    def test_equal_states_build_identical_strings(self):
        """Insertion order of the filter mapping does not matter."""
        first = FilterState({"status": "pending", "package": "VIP"})
        second = FilterState({"package": "VIP", "status": "pending"})
        assert query_string(build_query(first, TICKETS.fields, "dateAsc", 1, 20)) == query_string(
            build_query(second, TICKETS.fields, "dateAsc", 1, 20)
        )

    def test_without_fields_uses_sorted_names(self):
        assert build_query({"b": "2", "a": "1"}) == [("a", "1"), ("b", "2")]

    def test_date_range_expands_to_start_and_end(self):
        filters = FilterState().merge({"dateRange": DateRange(date(2025, 1, 1), date(2025, 3, 31))})
        assert build_query(filters, TICKETS.fields) == [
            ("startDate", "2025-01-01"),
            ("endDate", "2025-03-31"),
        ]

    def test_open_date_range_emits_only_set_side(self):
        filters = FilterState().merge({"dateRange": ("2025-01-01", None)})
        assert build_query(filters, TICKETS.fields) == [("startDate", "2025-01-01")]

    def test_export_query_omits_paging(self):
        filters = FilterState({"status": "completed"})
        assert build_query(filters, TICKETS.fields, sort="amountDesc") == [
            ("status", "completed"),
            ("sort", "amountDesc"),
        ]

    def test_page_is_at_least_one(self):
        assert build_query({}, page=0, page_size=10) == [("page", "1"), ("limit", "10")]


class TestPaths:
    """Tests for path helpers."""

    def test_expand_path_encodes_scope(self):
        path = expand_path(REGISTRATIONS.endpoint, {"name": "Fall Classic", "year": 2026})
        assert path == "/registrations/by-tournament/Fall%20Classic/2026"

    def test_expand_path_encodes_slashes(self):
        path = expand_path(REGISTRATIONS.endpoint, {"name": "3v3/Open", "year": 2026})
        assert path == "/registrations/by-tournament/3v3%2FOpen/2026"
