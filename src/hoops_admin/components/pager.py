"""Pagination controls."""

from dash import html
from dash_iconify import DashIconify

from hoops_admin.models.common import PaginationState

_WINDOW = 2


def page_numbers(pagination: PaginationState) -> list[int]:
    """Return the page buttons to show around the current page."""
    first = max(pagination.current_page - _WINDOW, 1)
    last = min(pagination.current_page + _WINDOW, pagination.total_pages)
    return list(range(first, last + 1))


def build_pager(pagination: PaginationState, noun: str) -> html.Div | None:
    """Return the pager, or None when everything fits on one page."""
    if pagination.total_pages <= 1:
        return None
    start = pagination.offset + 1
    end = min(pagination.offset + pagination.page_size, pagination.total_items)
    buttons = [
        _page_button(
            pagination.current_page - 1,
            DashIconify(icon="lucide:chevron-left", className="button-icon"),
            disabled=not pagination.has_previous,
            title="Previous page",
        )
    ]
    buttons.extend(
        _page_button(page, str(page), active=page == pagination.current_page)
        for page in page_numbers(pagination)
    )
    buttons.append(
        _page_button(
            pagination.current_page + 1,
            DashIconify(icon="lucide:chevron-right", className="button-icon"),
            disabled=not pagination.has_next,
            title="Next page",
        )
    )
    return html.Div(
        className="pager",
        children=[
            html.Span(f"Showing {start}-{end} of {pagination.total_items} {noun}s", className="muted"),
            html.Div(className="pager-buttons", children=buttons),
        ],
    )


def _page_button(
    page: int, label, disabled: bool = False, active: bool = False, title: str | None = None
) -> html.Button:
    return html.Button(
        label,
        id={"type": "page-button", "page": page, "role": title or "page"},
        className="button page" + (" active" if active else ""),
        disabled=disabled or active,
        title=title or f"Page {page}",
    )
