"""
Tests for the Dash callback helpers.
"""
import asyncio

from conftest import RecordingService, team_record
from hoops_admin.actions import ActionStatus
from hoops_admin.app import collect_filters, parse_tournament, start_flow
from hoops_admin.controller import ListController
from hoops_admin.models.common import DateRange
from hoops_admin.resources import TEAMS


class TestCallbackHelpers:
    """Tests for the helpers behind the Dash callbacks."""

    def test_collect_filters(self):
        updates = collect_filters(
            ["  Hawks ", ""],
            [{"type": "filter-text", "name": "name"}, {"type": "filter-text", "name": "customer"}],
            ["5"],
            [{"type": "filter-select", "name": "grade"}],
            ["2026-09-01"],
            [None],
            [{"type": "filter-range", "name": "dateRange"}],
        )
        assert updates == {
            "name": "Hawks",
            "customer": None,
            "grade": "5",
            "dateRange": DateRange.coerce(("2026-09-01", None)),
        }

    def test_parse_tournament(self):
        assert parse_tournament("Fall Classic|2026") == {"name": "Fall Classic", "year": "2026"}
        assert parse_tournament("A|B Cup|2025") == {"name": "A|B Cup", "year": "2025"}
        assert parse_tournament(None) == {}
        assert parse_tournament("Fall Classic") == {}

    def test_start_flow_delete(self):
        service = RecordingService(TEAMS, [team_record("team-1", "Hawks")])
        controller = ListController(service)
        asyncio.run(controller.load())

        flow = start_flow(controller, "delete", "team-1")

        assert flow.status == ActionStatus.CONFIRMING
        assert "Hawks" in flow.prompt

    def test_start_flow_for_a_row_no_longer_stored(self):
        """A click on a row the stored state lost becomes an error banner."""
        service = RecordingService(TEAMS, [team_record("team-1", "Hawks")])
        controller = ListController.restore(service, ListController(service).state.to_dict())

        flow = start_flow(controller, "delete", "team-1")

        assert flow is None
        assert controller.state.error == "This team is no longer on the page. Refresh and try again."
        assert service.deleted == []
