"""
Dash application entry point for the admin list views.

One app instance serves the list chosen by HOOPS_ADMIN_VIEW. The ListState
lives in the ``list-state`` store; every callback restores a ListController
from it, runs one controller operation and writes the new state back. A
single render callback turns the stored state into components.
"""

import asyncio
from typing import Any, Mapping, Sequence

from dash import ALL, Dash, Input, Output, State, ctx, dcc, no_update
from dash.exceptions import PreventUpdate

from hoops_admin import config
from hoops_admin.actions import ActionFlow
from hoops_admin.components import (
    build_list_results,
    build_row_details,
    field_options,
    tournament_options,
)
from hoops_admin.controller import ListController
from hoops_admin.layout import build_layout
from hoops_admin.lib import logs
from hoops_admin.models.common import DateRange, ListState
from hoops_admin.resources import get_resource
from hoops_admin.services import get_list_service
from hoops_admin.session import AdminSession

LOG = logs.logger(__file__)

_TEXT = {"type": "filter-text", "name": ALL}
_SELECT = {"type": "filter-select", "name": ALL}
_RANGE = {"type": "filter-range", "name": ALL}
_PAGE = {"type": "page-button", "page": ALL, "role": ALL}
_ROW_ACTION = {"type": "row-action", "action": ALL, "index": ALL}
_DISMISS = {"type": "dismiss-banner", "index": ALL}

_resource = get_resource(config.ADMIN_VIEW)
_session = AdminSession(access_token=config.ADMIN_TOKEN, role=config.ADMIN_ROLE)
if not _session.can_manage:
    LOG.warning("Role %s may not manage %s", _session.role, _resource.name)
_service = get_list_service(_resource, _session)
_confirmed_actions = {action.name for action in _resource.actions if action.confirm}

app = Dash(__name__, title=f"{_resource.title} | Admin", suppress_callback_exceptions=True)
app.layout = build_layout(_resource)


def collect_filters(
    texts: Sequence[str | None],
    text_ids: Sequence[Mapping[str, str]],
    selects: Sequence[Any],
    select_ids: Sequence[Mapping[str, str]],
    starts: Sequence[str | None],
    ends: Sequence[str | None],
    range_ids: Sequence[Mapping[str, str]],
) -> dict[str, Any]:
    """Turn pattern-matched filter input values into FilterState updates."""
    updates: dict[str, Any] = {}
    for value, component_id in zip(texts, text_ids):
        updates[component_id["name"]] = (value or "").strip() or None
    for value, component_id in zip(selects, select_ids):
        updates[component_id["name"]] = value
    for start, end, component_id in zip(starts, ends, range_ids):
        updates[component_id["name"]] = DateRange.coerce((start, end))
    return updates


def parse_tournament(value: str | None) -> dict[str, Any]:
    """Split a ``name|year`` picker value into the registrations scope."""
    if not value or "|" not in value:
        return {}
    name, _, year = value.rpartition("|")
    return {"name": name, "year": year}


def start_flow(
    controller: ListController, action: str, row_id: str, notes: str = ""
) -> ActionFlow | None:
    """
    Return a CONFIRMING flow for a confirmable row action.

    When the stored state no longer holds the row, the controller's error
    banner is set instead and None is returned.
    """
    try:
        if action == "delete":
            return controller.request_delete(row_id)
        return controller.request_refund_action(row_id, action, notes)
    except KeyError as exc:
        LOG.warning("%s %s not started: %s", action, row_id, exc)
        noun = controller.resource.noun
        controller.state.error = f"This {noun} is no longer on the page. Refresh and try again."
        return None


def _clicked() -> bool:
    return bool(ctx.triggered and ctx.triggered[0]["value"])


def _restore(data: Mapping[str, Any] | None) -> ListController:
    return ListController.restore(_service, data)


@app.callback(
    Output("list-state", "data"),
    Input("initial-load-trigger", "data"),
    Input(_TEXT, "value"),
    Input(_SELECT, "value"),
    Input(_RANGE, "start_date"),
    Input(_RANGE, "end_date"),
    Input("sort-select", "value"),
    Input("tournament-select", "value"),
    Input("refresh-button", "n_clicks"),
    Input(_PAGE, "n_clicks"),
    State(_TEXT, "id"),
    State(_SELECT, "id"),
    State(_RANGE, "id"),
    State("list-state", "data"),
)
def load_list(
    _trigger,
    texts,
    selects,
    starts,
    ends,
    sort,
    tournament,
    _refresh,
    _pages,
    text_ids,
    select_ids,
    range_ids,
    data,
):
    """Load rows whenever a filter, the sort, the tournament or the page changes."""
    controller = _restore(data)
    triggered = ctx.triggered_id
    if isinstance(triggered, Mapping) and triggered.get("type") == "page-button":
        if not _clicked():
            raise PreventUpdate
        asyncio.run(controller.set_page(triggered["page"]))
    elif triggered == "refresh-button":
        asyncio.run(controller.refresh())
    else:
        controller.state.sort = sort
        controller.state.scope = parse_tournament(tournament)
        updates = collect_filters(texts, text_ids, selects, select_ids, starts, ends, range_ids)
        asyncio.run(controller.apply_filters(updates))
    return controller.state.to_dict()


@app.callback(Output("results-container", "children"), Input("list-state", "data"))
def render_results(data):
    """Render the stored ListState."""
    if data is None:
        raise PreventUpdate
    return build_list_results(ListState.from_dict(data, _resource.row_type), _resource)


@app.callback(
    Output(_SELECT, "options"),
    Output("tournament-select", "options"),
    Input("initial-load-trigger", "data"),
    State(_SELECT, "id"),
)
def load_options(_trigger, select_ids):
    """Fill dropdown options from metadata and the tournament list."""
    controller = ListController(_service)

    async def _load():
        metadata = await controller.load_metadata()
        tournaments = await controller.list_tournaments() if _resource.scope_params else []
        return metadata, tournaments

    metadata, tournaments = asyncio.run(_load())
    options = [field_options(_resource.filter_field(i["name"]), metadata) for i in select_ids]
    return options, tournament_options(tournaments)


@app.callback(
    Output(_TEXT, "value"),
    Output(_SELECT, "value"),
    Output(_RANGE, "start_date"),
    Output(_RANGE, "end_date"),
    Output("sort-select", "value"),
    Input("reset-button", "n_clicks"),
    State(_TEXT, "id"),
    State(_SELECT, "id"),
    State(_RANGE, "id"),
    prevent_initial_call=True,
)
def reset_filters(_n_clicks, text_ids, select_ids, range_ids):
    """Clear every filter input; the load callback then reloads page 1."""
    return (
        [""] * len(text_ids),
        [None] * len(select_ids),
        [None] * len(range_ids),
        [None] * len(range_ids),
        _resource.default_sort,
    )


@app.callback(
    Output("row-details", "children"),
    Input(_ROW_ACTION, "n_clicks"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def show_details(_clicks, data):
    triggered = ctx.triggered_id
    if not _clicked() or triggered["action"] != "view":
        raise PreventUpdate
    row = ListState.from_dict(data, _resource.row_type).find(triggered["index"])
    return build_row_details(row, _resource) if row is not None else None


@app.callback(
    Output("confirm-dialog", "displayed"),
    Output("confirm-dialog", "message"),
    Output("pending-action", "data"),
    Output("list-state", "data", allow_duplicate=True),
    Input(_ROW_ACTION, "n_clicks"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def request_action(_clicks, data):
    """Ask for confirmation before a mutating row action."""
    triggered = ctx.triggered_id
    if not _clicked() or triggered["action"] not in _confirmed_actions:
        raise PreventUpdate
    controller = _restore(data)
    flow = start_flow(controller, triggered["action"], triggered["index"])
    if flow is None:
        return False, no_update, None, controller.state.to_dict()
    return True, flow.prompt, {"action": triggered["action"], "id": triggered["index"]}, no_update


@app.callback(
    Output("list-state", "data", allow_duplicate=True),
    Input("confirm-dialog", "submit_n_clicks"),
    State("pending-action", "data"),
    State("refund-notes", "value"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def confirm_action(_submitted, pending, notes, data):
    if not pending:
        raise PreventUpdate
    controller = _restore(data)
    flow = start_flow(controller, pending["action"], pending["id"], notes or "")
    if flow is None:
        return controller.state.to_dict()
    asyncio.run(flow.confirm())
    LOG.info("%s %s -> %s", pending["action"], pending["id"], flow.status.value)
    return controller.state.to_dict()


@app.callback(
    Output("list-state", "data", allow_duplicate=True),
    Input("sync-button", "n_clicks"),
    State("sync-range", "start_date"),
    State("sync-range", "end_date"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def sync_refunds(n_clicks, start, end, data):
    """Sync refunds with the processor, optionally for a date range."""
    if not n_clicks:
        raise PreventUpdate
    controller = _restore(data)
    flow = controller.request_refund_sync(start, end)
    if flow is not None:
        asyncio.run(flow.confirm())
    return controller.state.to_dict()


@app.callback(
    Output("download-file", "data"),
    Output("list-state", "data", allow_duplicate=True),
    Input("export-button", "n_clicks"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def export_csv(n_clicks, data):
    if not n_clicks:
        raise PreventUpdate
    controller = _restore(data)
    exported = asyncio.run(controller.export())
    if exported is None:
        return no_update, controller.state.to_dict()
    filename, payload = exported
    return dcc.send_bytes(payload, filename), no_update


@app.callback(
    Output("list-state", "data", allow_duplicate=True),
    Input(_DISMISS, "n_clicks"),
    State("list-state", "data"),
    prevent_initial_call=True,
)
def dismiss_banner(_clicks, data):
    if not _clicked():
        raise PreventUpdate
    controller = _restore(data)
    controller.dismiss_error()
    return controller.state.to_dict()


def main() -> None:
    """Entrypoint used by `hoops-admin`."""
    app.run(debug=config.DEBUG, host="0.0.0.0", port=config.ADMIN_PORT)


if __name__ == "__main__":
    main()
