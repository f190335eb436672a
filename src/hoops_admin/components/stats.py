"""Statistic cards shown above a list."""

from dash import html

from hoops_admin.models.common import StatsSummary
from hoops_admin.resources import ListResource
from hoops_admin.utils import format_currency


def format_stat(value: float, kind: str) -> str:
    if kind == "currency":
        return format_currency(value)
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def build_stats_cards(stats: StatsSummary, resource: ListResource) -> html.Div:
    """
    Return one card per declared statistic.

    Page-local statistics get a "current page only" label so they are not
    mistaken for totals.
    """
    cards = [
        html.Div(
            className="stat-card",
            children=[
                html.Span(label, className="label"),
                html.Span(format_stat(stats.get(key), kind), className="value"),
            ],
        )
        for key, label, kind in resource.stat_labels
    ]
    children = [html.Div(className="stats-grid", children=cards)]
    if stats.is_partial:
        children.append(html.P("Statistics reflect the current page only.", className="muted stats-scope"))
    return html.Div(className="stats", children=children)
