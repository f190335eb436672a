"""Loading, banner and empty-state components shared by every list."""

from dash import html
from dash_iconify import DashIconify

from hoops_admin.models.common import FilterState
from hoops_admin.resources import ListResource


def build_loading_state(noun: str = "records") -> html.Div:
    """Return a loading indicator for the initial page load."""
    return html.Div(
        className="card loading-state",
        children=[
            html.Div(className="spinner"),
            html.P(f"Loading {noun}...", className="muted"),
        ],
    )


def build_banner(message: str | None, kind: str = "error", index: str = "banner") -> html.Div | None:
    """
    Return a dismissible banner, or None when there is nothing to say.

    Args:
        message: Banner text.
        kind: "error" or "notice"; selects icon and styling.
        index: Pattern-matching index of the dismiss button.
    """
    if not message:
        return None
    icon = "lucide:alert-circle" if kind == "error" else "lucide:check-circle"
    return html.Div(
        className=f"banner {kind}",
        role="alert" if kind == "error" else "status",
        children=[
            DashIconify(icon=icon, className="banner-icon"),
            html.Span(message, className="banner-text"),
            html.Button(
                id={"type": "dismiss-banner", "index": index},
                className="button ghost icon-only",
                title="Dismiss",
                children=DashIconify(icon="lucide:x", className="button-icon"),
            ),
        ],
    )


def build_auth_required() -> html.Div:
    """Return the prompt shown when the session token is missing or rejected."""
    return html.Div(
        className="card empty-state",
        children=[
            DashIconify(icon="lucide:lock", className="empty-icon"),
            html.H3("Please log in again"),
            html.P("Your session has expired or you do not have access to this page.", className="muted"),
        ],
    )


def build_empty_state(resource: ListResource, filters: FilterState) -> html.Div:
    """Return the empty state with filter-aware guidance."""
    noun = f"{resource.noun}s"
    if filters.is_empty:
        message = f"No {noun} available."
    else:
        message = f"No {noun} match the current filters. Try clearing some of them."
    return html.Div(
        className="card empty-state",
        children=[
            DashIconify(icon="lucide:inbox", className="empty-icon"),
            html.H3(f"No {noun} found"),
            html.P(message, className="muted"),
        ],
    )
