"""
Layout helpers for the admin Dash application.

This module defines the root layout structure including:
- dcc.Store components for the serialized ListState and pending actions
- dcc.Download for CSV exports and dcc.ConfirmDialog for mutating actions
- Filter panel, refund tools and the results container

One layout serves one list resource, chosen by HOOPS_ADMIN_VIEW.
"""

from dash import dcc, html

from hoops_admin.components.feedback import build_loading_state
from hoops_admin.components.filter_panel import build_filter_panel, build_refund_tools
from hoops_admin.resources import ListResource

_SUBTITLES = {
    "tickets": "Browse and export ticket purchases.",
    "teams": "Manage the club's internal teams.",
    "refunds": "Review refund requests and sync them with the payment processor.",
    "registrations": "See which teams registered for a tournament.",
}


def build_layout(resource: ListResource) -> html.Div:
    """
    Build the root layout for one admin list.

    The layout renders immediately with a loading indicator. Rows are
    fetched by the load callback triggered by initial-load-trigger.

    Args:
        resource: The list to show.

    Returns:
        Root html.Div containing the complete application layout.
    """
    return html.Div(
        className="app-shell",
        children=[
            # Download component for CSV exports
            dcc.Download(id="download-file"),
            # Serialized ListState
            dcc.Store(id="list-state", data=None),
            # {"action", "id"} of the row action awaiting confirmation
            dcc.Store(id="pending-action", data=None),
            # Set to 1 to trigger the initial load on app mount
            dcc.Store(id="initial-load-trigger", data=1),
            dcc.ConfirmDialog(id="confirm-dialog", message=""),
            html.Div(
                className="app-container",
                children=[
                    _build_page_header(resource),
                    build_filter_panel(resource),
                    build_refund_tools(visible=resource.name == "refunds"),
                    html.Div(id="row-details"),
                    html.Div(
                        id="results-container",
                        children=build_loading_state(f"{resource.noun}s"),
                    ),
                ],
            ),
        ],
    )


def _build_page_header(resource: ListResource) -> html.Div:
    """Return the hero text area at the top of the page."""
    return html.Div(
        className="page-header",
        children=[
            html.H1(resource.title),
            html.P(_SUBTITLES.get(resource.name, "")),
        ],
    )
