"""
Filter panel built from a resource's field declarations.

Component ids:
- ``{"type": "filter-text", "name": <field>}``: dcc.Input, sent once typing pauses for
  the resource's debounce window
- ``{"type": "filter-select", "name": <field>}``: dcc.Dropdown
- ``{"type": "filter-range", "name": <field>}``: dcc.DatePickerRange
- ``sort-select``, ``tournament-select``, ``refresh-button``,
  ``reset-button``, ``export-button``

The tournament picker is always present so callbacks can reference it; it
is hidden for lists without a tournament scope.
"""

from typing import Any, Mapping, Sequence

from dash import dcc, html
from dash_iconify import DashIconify

from hoops_admin.models.common import DateRange, FilterState
from hoops_admin.resources import DATE_RANGE, SELECT, FilterField, ListResource


def field_options(field: FilterField, metadata: Mapping[str, list] | None = None) -> list[dict[str, Any]]:
    """Return dropdown options, preferring metadata over static choices."""
    values: Sequence[Any] = ()
    if field.options_key and metadata:
        values = metadata.get(field.options_key) or ()
    if not values:
        values = field.options
    return [{"label": str(value), "value": value} for value in values]


def tournament_options(tournaments: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return tournament picker options; values are ``name|year``."""
    return [
        {"label": f"{t['name']} {t.get('year') or ''}".strip(), "value": f"{t['name']}|{t.get('year') or ''}"}
        for t in tournaments
    ]


def build_filter_panel(
    resource: ListResource,
    filters: FilterState | None = None,
    metadata: Mapping[str, list] | None = None,
) -> html.Div:
    """Return the filter card for resource."""
    filters = filters or FilterState(resource.empty_filters())
    inputs = [
        _field_input(field, filters.get(field.name), metadata, resource.debounce_seconds)
        for field in resource.fields
    ]
    return html.Div(
        className="card search-card",
        children=[
            html.Div(
                className="filter-grid",
                children=[_tournament_picker(resource), *inputs, _sort_select(resource)],
            ),
            html.Div(
                className="toolbar",
                children=[
                    _tool_button("refresh-button", "lucide:refresh-cw", "Refresh"),
                    _tool_button("reset-button", "lucide:filter-x", "Clear filters"),
                    _tool_button("export-button", "lucide:download", "Export CSV"),
                ],
            ),
        ],
    )


def build_refund_tools(visible: bool) -> html.Div:
    """Return the refund notes input and the processor sync controls."""
    return html.Div(
        id="refund-tools",
        className="card refund-tools",
        style=None if visible else {"display": "none"},
        children=[
            dcc.Input(
                id="refund-notes",
                type="text",
                placeholder="Admin notes for approve/reject (optional)",
                className="search-input",
            ),
            html.Div(
                className="toolbar",
                children=[
                    dcc.DatePickerRange(
                        id="sync-range",
                        display_format="YYYY-MM-DD",
                        start_date_placeholder_text="Start date",
                        end_date_placeholder_text="End date",
                        clearable=True,
                    ),
                    _tool_button("sync-button", "lucide:repeat", "Sync refunds"),
                ],
            ),
        ],
    )


def _field_input(
    field: FilterField, value: Any, metadata: Mapping[str, list] | None, debounce: float
) -> html.Div:
    if field.kind == SELECT:
        control = dcc.Dropdown(
            id={"type": "filter-select", "name": field.name},
            options=field_options(field, metadata),
            value=value,
            placeholder=f"All {field.label.lower()}s",
            clearable=True,
        )
    elif field.kind == DATE_RANGE:
        date_range = DateRange.coerce(value)
        control = dcc.DatePickerRange(
            id={"type": "filter-range", "name": field.name},
            start_date=date_range.start,
            end_date=date_range.end,
            display_format="YYYY-MM-DD",
            clearable=True,
        )
    else:
        control = dcc.Input(
            id={"type": "filter-text", "name": field.name},
            type="text",
            value=value or "",
            placeholder=field.placeholder or field.label,
            className="search-input",
            debounce=debounce,
        )
    return html.Div(className="filter-field", children=[html.Label(field.label), control])


def _sort_select(resource: ListResource) -> html.Div:
    return html.Div(
        className="filter-field",
        children=[
            html.Label("Sort by"),
            dcc.Dropdown(
                id="sort-select",
                options=[{"label": o.label, "value": o.token} for o in resource.sort_options],
                value=resource.default_sort,
                clearable=resource.default_sort is None,
            ),
        ],
    )


def _tournament_picker(resource: ListResource) -> html.Div:
    return html.Div(
        className="filter-field",
        style=None if resource.scope_params else {"display": "none"},
        children=[
            html.Label("Tournament"),
            dcc.Dropdown(id="tournament-select", options=[], placeholder="Select a tournament"),
        ],
    )


def _tool_button(button_id: str, icon: str, label: str) -> html.Button:
    return html.Button(
        id=button_id,
        className="button primary ghost gap",
        n_clicks=0,
        children=[DashIconify(icon=icon, className="button-icon"), label],
    )
