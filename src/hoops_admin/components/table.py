"""
List table with status badges and per-row action buttons.

Action buttons carry pattern-matching ids of the form
``{"type": "row-action", "action": <name>, "index": <row id>}``; actions
declared with an ``href`` render as links instead.
"""

from typing import Sequence

from dash import html
from dash_iconify import DashIconify

from hoops_admin.models.common import ListRow
from hoops_admin.resources import Column, ListResource, RowAction
from hoops_admin.utils import title_case


def build_list_table(rows: Sequence[ListRow], resource: ListResource) -> html.Div:
    """Return the table for one page of rows."""
    header = html.Tr(
        [html.Th(column.label) for column in resource.columns]
        + ([html.Th("Actions", className="actions")] if resource.actions else [])
    )
    body = [_row(row, resource) for row in rows]
    return html.Div(
        className="card table-card",
        children=html.Table(
            className="list-table",
            children=[html.Thead(header), html.Tbody(body)],
        ),
    )


def build_row_details(row: ListRow, resource: ListResource) -> html.Div:
    """Return a detail card listing every column of one row."""
    return html.Div(
        className="card row-details",
        children=[
            html.Div(
                className="title-row",
                children=[
                    DashIconify(icon="lucide:info", className="title-icon"),
                    html.H3(f"{resource.noun.capitalize()} details"),
                ],
            ),
            html.Div(
                className="info-grid surface",
                children=[
                    html.Div(
                        className="info-block",
                        children=[
                            html.Span(column.label, className="label"),
                            html.Span(column.render(row) or "N/A", className="value"),
                        ],
                    )
                    for column in resource.columns
                ],
            ),
        ],
    )


def status_badge(status: str) -> html.Span:
    return html.Span(title_case(status, "Unknown"), className=f"badge status-{status or 'unknown'}")


def _row(row: ListRow, resource: ListResource) -> html.Tr:
    cells = [_cell(row, column) for column in resource.columns]
    if resource.actions:
        buttons = [_action(row, action) for action in resource.actions if action.applies_to(row)]
        cells.append(html.Td(html.Div(className="row-actions", children=buttons), className="actions"))
    return html.Tr(cells, id=f"{resource.name}-row-{row.id}")


def _cell(row: ListRow, column: Column) -> html.Td:
    if column.kind == "status":
        return html.Td(status_badge(row.status))
    return html.Td(column.render(row))


def _action(row: ListRow, action: RowAction) -> html.A | html.Button:
    content = [DashIconify(icon=action.icon, className="button-icon"), action.label]
    class_name = "button ghost gap" + (" danger" if action.name in ("delete", "reject") else "")
    if action.href is not None:
        return html.A(content, href=action.href(row), target="_blank", rel="noopener", className=class_name)
    return html.Button(
        content,
        id={"type": "row-action", "action": action.name, "index": row.id},
        className=class_name,
        title=f"{action.label} {row.id}",
    )
