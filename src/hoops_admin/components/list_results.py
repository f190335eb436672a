"""Helpers that render a list view from its ListState."""

from dash import html

from hoops_admin.components.feedback import (
    build_auth_required,
    build_banner,
    build_empty_state,
    build_loading_state,
)
from hoops_admin.components.pager import build_pager
from hoops_admin.components.stats import build_stats_cards
from hoops_admin.components.table import build_list_table
from hoops_admin.models.common import ListState, ViewStatus
from hoops_admin.resources import ListResource


def build_list_results(state: ListState, resource: ListResource) -> html.Div:
    """
    Return the results area for a list: banners, stats, table and pager.

    Args:
        state: Current list state.
        resource: The list being rendered.

    Returns:
        The results container div.
    """
    banners = [
        build_banner(state.error, "error", "error"),
        build_banner(state.notice, "notice", "notice"),
    ]
    children = [banner for banner in banners if banner is not None]

    if state.auth_required:
        children.append(build_auth_required())
        return html.Div(className="results", children=children)

    if state.status in (ViewStatus.IDLE, ViewStatus.LOADING) and not state.rows:
        children.append(build_loading_state(f"{resource.noun}s"))
        return html.Div(className="results", children=children)

    if state.status == ViewStatus.ERRORED and not state.rows:
        return html.Div(className="results", children=children)

    children.append(build_stats_cards(state.stats, resource))
    if not state.rows:
        children.append(build_empty_state(resource, state.filters))
        return html.Div(className="results", children=children)

    children.append(
        html.Div(
            className="results-summary",
            children=html.Span(_summary_text(state, resource), className="muted"),
        )
    )
    children.append(build_list_table(state.rows, resource))
    pager = build_pager(state.pagination, resource.noun)
    if pager is not None:
        children.append(pager)
    return html.Div(
        className="results" + (" loading" if state.loading else ""),
        children=children,
    )


def _summary_text(state: ListState, resource: ListResource) -> str:
    total = state.pagination.total_items
    noun = resource.noun if total == 1 else f"{resource.noun}s"
    text = f"{total} {noun} found"
    if not state.filters.is_empty:
        text += " for the current filters"
    if state.dropped:
        text += f" ({state.dropped} incomplete records hidden)"
    return text
