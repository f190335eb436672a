"""
Reusable Dash UI components for the admin list views.

This package provides modular, composable components:
- feedback: loading state, dismissible banners, empty and auth states
- filter_panel: filter inputs generated from a resource's fields
- list_results: the results area assembled from a ListState
- pager: page navigation
- stats: statistic cards
- table: list table with per-row actions and a row detail card

All components are pure functions that return Dash html/dcc elements,
making them easy to test and compose.
"""

from hoops_admin.components.feedback import (
    build_auth_required,
    build_banner,
    build_empty_state,
    build_loading_state,
)
from hoops_admin.components.filter_panel import (
    build_filter_panel,
    build_refund_tools,
    field_options,
    tournament_options,
)
from hoops_admin.components.list_results import build_list_results
from hoops_admin.components.pager import build_pager
from hoops_admin.components.stats import build_stats_cards
from hoops_admin.components.table import build_list_table, build_row_details

__all__ = [
    "build_auth_required",
    "build_banner",
    "build_empty_state",
    "build_filter_panel",
    "build_list_results",
    "build_list_table",
    "build_loading_state",
    "build_pager",
    "build_refund_tools",
    "build_row_details",
    "build_stats_cards",
    "field_options",
    "tournament_options",
]
