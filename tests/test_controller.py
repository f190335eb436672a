"""
Tests for ListController: loading, staleness, debouncing and row actions.
"""
import asyncio
from datetime import date

import pytest

from conftest import FakeHttp, RecordingService, make_response, team_record, ticket_record
from hoops_admin.actions import ActionStatus
from hoops_admin.controller import (
    REFUND_PROCESS_PATH,
    REFUND_SYNC_BY_DATE_PATH,
    REFUND_SYNC_PATH,
    ListController,
)
from hoops_admin.errors import AuthError, HttpError
from hoops_admin.models.common import MutationResult, StatsScope, StatsSummary, ViewStatus
from hoops_admin.resources import REFUNDS, REGISTRATIONS, TEAMS, TICKETS
from hoops_admin.services.demo import DemoListService
from hoops_admin.services.rest import RestClient, RestListService


def _teams(*names):
    return [team_record(f"team-{i}", name) for i, name in enumerate(names, start=1)]


def _payment(payment_id="pay-1", refund_id="rf-1", status="pending"):
    return {
        "_id": payment_id,
        "amount": 100,
        "cardLastFour": "4242",
        "refunds": [{"_id": refund_id, "amount": 40, "status": status}],
    }


class TestLoading:
    """Tests for load and the state it leaves behind."""

    def test_status_filter_reaches_query_and_rows(self):
        records = [
            ticket_record("t1", "pending"),
            ticket_record("t2", "completed"),
            ticket_record("t3", "pending"),
        ]
        service = RecordingService(TICKETS, records)
        controller = ListController(service)

        state = asyncio.run(
            controller.apply_filters(
                {"status": "pending", "customer": "", "dateRange": {"start": None, "end": None}}
            )
        )

        assert service.queries[-1].filters.get("status") == "pending"
        assert service.queries[-1].page == 1
        assert sorted(state.row_ids) == ["t1", "t3"]
        assert all(row.status == "pending" for row in state.rows)
        assert state.status == ViewStatus.LOADED
        assert state.loading is False
        assert state.error is None

    def test_notifies_loading_then_loaded(self):
        seen = []
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service, on_change=lambda s: seen.append((s.status, s.loading)))

        asyncio.run(controller.load())

        assert seen == [(ViewStatus.LOADING, True), (ViewStatus.LOADED, False)]

    def test_latest_request_wins(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze"), delays=[0.3, 0.0])
        controller = ListController(service)

        async def scenario():
            slow = asyncio.ensure_future(controller.apply_filters({"name": "Hawks"}))
            await asyncio.sleep(0.05)
            await controller.apply_filters({"name": "Blaze"})
            await slow
            return controller.state

        state = asyncio.run(scenario())

        assert service.fetch_count == 2
        assert [row.name for row in state.rows] == ["Blaze"]
        assert state.status == ViewStatus.LOADED
        assert state.loading is False

    def test_http_error_becomes_state_error(self):
        service = RecordingService(TEAMS, _teams("Hawks"), errors=[HttpError(500, "Internal Server Error")])
        controller = ListController(service)

        state = asyncio.run(controller.load())

        assert state.status == ViewStatus.ERRORED
        assert state.error == "Internal Server Error"
        assert state.loading is False
        assert state.auth_required is False

    def test_non_json_server_error_is_displayed(self, admin_session, disabled_cache):
        http = FakeHttp(make_response(500, text="<html><body>Bad Gateway</body></html>"))
        client = RestClient(admin_session, base_url="http://api.test/api", http=http)
        controller = ListController(RestListService(TICKETS, admin_session, client=client, cache=disabled_cache))

        state = asyncio.run(controller.load())

        assert state.status == ViewStatus.ERRORED
        assert state.error == "<html><body>Bad Gateway</body></html>"
        assert state.loading is False

    def test_after_edit_refetches(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service)
        asyncio.run(controller.load())
        service.records.append(team_record("team-2", "Blaze"))

        state = asyncio.run(controller.after_edit())

        assert service.fetch_count == 2
        assert state.row_ids == ["team-1", "team-2"]

    def test_retry_recovers_after_error(self):
        service = RecordingService(TEAMS, _teams("Hawks"), errors=[HttpError(502)])
        controller = ListController(service)
        asyncio.run(controller.load())

        state = asyncio.run(controller.retry())

        assert state.status == ViewStatus.LOADED
        assert state.error is None
        assert state.row_ids == ["team-1"]

    def test_auth_error_flags_login(self):
        service = RecordingService(TEAMS, errors=[AuthError()])
        controller = ListController(service)

        state = asyncio.run(controller.load())

        assert state.auth_required is True
        assert "log in" in state.error

    def test_unknown_error_uses_generic_message(self):
        service = RecordingService(TEAMS, errors=[RuntimeError("socket exploded")])
        controller = ListController(service)

        state = asyncio.run(controller.load())

        assert state.error == "Failed to load teams. Please try again."

    def test_missing_tournament_is_a_validation_error(self):
        controller = ListController(DemoListService(REGISTRATIONS))

        state = asyncio.run(controller.load())

        assert state.status == ViewStatus.ERRORED
        assert state.error == "Select a tournament to see its registrations."
        assert state.rows == []

    def test_set_scope_loads_tournament(self):
        controller = ListController(DemoListService(REGISTRATIONS))

        state = asyncio.run(controller.set_scope(name="Fall Classic", year=2026))

        assert state.row_ids == ["reg-1", "reg-2", "reg-3"]
        assert state.dropped == 1
        assert state.stats.scope == StatsScope.FILTERED

    def test_set_page_is_clamped(self):
        records = [team_record(f"t{i:02d}", f"Team {i:02d}") for i in range(25)]
        service = RecordingService(TEAMS, records)
        controller = ListController(service, page_size=10)
        asyncio.run(controller.load())

        state = asyncio.run(controller.set_page(9))

        assert service.queries[-1].page == 3
        assert state.pagination.current_page == 3
        assert len(state.rows) == 5

    def test_unknown_sort_is_rejected(self):
        controller = ListController(RecordingService(TEAMS))
        with pytest.raises(ValueError):
            asyncio.run(controller.set_sort("bogus"))

    def test_reset_filters_restores_defaults(self):
        service = RecordingService(TICKETS, [ticket_record("t1")])
        controller = ListController(service, filters={"status": "pending"}, sort="amountAsc")

        state = asyncio.run(controller.reset_filters())

        assert state.filters.is_empty
        assert state.sort == "dateDesc"
        assert service.queries[-1].filters.is_empty


class TestDebouncing:
    """Tests for debounced filter edits."""

    def test_rapid_edits_fetch_once(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze", "Hawks Gold"))
        controller = ListController(service, debounce_seconds=0.05)

        async def scenario():
            for text in ("H", "Ha", "Haw", "Hawks"):
                controller.set_filters(name=text)
            await asyncio.sleep(0.4)

        asyncio.run(scenario())

        assert service.fetch_count == 1
        assert service.queries[0].filters.get("name") == "Hawks"
        assert [row.name for row in controller.state.rows] == ["Hawks", "Hawks Gold"]

    def test_submit_dispatches_pending_edits(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze"))
        controller = ListController(service, debounce_seconds=5)

        async def scenario():
            controller.set_filters(name="Blaze")
            state = await controller.submit()
            await asyncio.sleep(0.05)
            return state

        state = asyncio.run(scenario())

        assert service.fetch_count == 1
        assert [row.name for row in state.rows] == ["Blaze"]

    def test_apply_filters_goes_through_the_debouncer(self):
        """Edits already debounced by the input are dispatched at once, merged with pending ones."""
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze"))
        controller = ListController(service, debounce_seconds=5)

        async def scenario():
            controller.set_filters(status="active")
            return await controller.apply_filters({"name": "Blaze"})

        state = asyncio.run(scenario())

        assert service.fetch_count == 1
        assert service.queries[0].filters.get("status") == "active"
        assert service.queries[0].filters.get("name") == "Blaze"
        assert controller.debouncer.dispatch_count == 1
        assert [row.name for row in state.rows] == ["Blaze"]

    def test_submit_without_edits_reloads(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service)

        asyncio.run(controller.submit())

        assert service.fetch_count == 1


class TestClose:
    """Tests for close()."""

    def test_closed_controller_ignores_loads(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service)
        controller.close()

        state = asyncio.run(controller.load())

        assert service.fetch_count == 0
        assert state.status == ViewStatus.CLOSED

    def test_close_drops_in_flight_result(self):
        service = RecordingService(TEAMS, _teams("Hawks"), delays=[0.2])
        controller = ListController(service)

        async def scenario():
            pending = asyncio.ensure_future(controller.load())
            await asyncio.sleep(0.05)
            controller.close()
            return await pending

        state = asyncio.run(scenario())

        assert state.rows == []
        assert state.status == ViewStatus.CLOSED
        assert state.loading is False

    def test_close_drops_pending_edits(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service, debounce_seconds=0.05)

        async def scenario():
            controller.set_filters(name="Hawks")
            controller.close()
            await asyncio.sleep(0.2)

        asyncio.run(scenario())

        assert service.fetch_count == 0


class TestDelete:
    """Tests for confirmed deletes."""

    def test_delete_removes_row_without_refetch(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze", "Storm"))
        controller = ListController(service)
        asyncio.run(controller.load())

        flow = controller.request_delete("team-2")
        assert flow.status == ActionStatus.CONFIRMING
        assert flow.prompt == 'Are you sure you want to delete "Blaze"? This action cannot be undone.'

        asyncio.run(flow.confirm())

        state = controller.state
        assert flow.status == ActionStatus.SUCCEEDED
        assert service.deleted == ["team-2"]
        assert service.fetch_count == 1
        assert state.row_ids == ["team-1", "team-3"]
        assert state.pagination.total_items == 2
        assert state.notice == "Deleted"

    def test_failed_delete_keeps_row(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        service.delete_result = MutationResult(False, "Team has players")
        controller = ListController(service)
        asyncio.run(controller.load())

        flow = controller.request_delete("team-1")
        asyncio.run(flow.confirm())

        assert flow.status == ActionStatus.FAILED
        assert controller.state.error == "Team has players"
        assert controller.state.row_ids == ["team-1"]

    def test_page_stats_are_recomputed(self):
        service = DemoListService(TEAMS, _teams("Hawks", "Blaze"))
        controller = ListController(service)
        asyncio.run(controller.load())
        controller.state.stats = StatsSummary(controller.state.stats.values, StatsScope.PAGE)

        asyncio.run(controller.request_delete("team-1").confirm())

        assert controller.state.stats["totalTeams"] == 1

    @pytest.mark.parametrize("service_type", [RecordingService, DemoListService])
    def test_stat_cards_agree_with_row_count(self, service_type):
        """Totals over the whole set drop the deleted row's contribution."""
        controller = ListController(service_type(TEAMS, _teams("Hawks", "Blaze", "Storm")))
        asyncio.run(controller.load())
        assert controller.state.stats["totalPlayers"] == 6

        asyncio.run(controller.request_delete("team-2").confirm())

        state = controller.state
        assert state.stats.scope != StatsScope.PAGE
        assert state.stats["totalTeams"] == state.pagination.total_items == 2
        assert state.stats["activeTeams"] == 2
        assert state.stats["totalPlayers"] == 4
        assert state.stats["totalCoaches"] == 2

    def test_delete_requires_delete_action(self):
        controller = ListController(RecordingService(TICKETS, [ticket_record("t1")]))
        asyncio.run(controller.load())
        with pytest.raises(KeyError):
            controller.request_delete("t1")

    def test_delete_of_unknown_row(self):
        controller = ListController(RecordingService(TEAMS, _teams("Hawks")))
        asyncio.run(controller.load())
        with pytest.raises(KeyError):
            controller.request_delete("missing")


class TestRefundActions:
    """Tests for refund approve, reject and sync."""

    def test_approve_posts_payload_and_refetches(self):
        service = RecordingService(REFUNDS, [_payment()])
        service.mutation_result = MutationResult(True, "Refund approved")
        controller = ListController(service)
        asyncio.run(controller.load())

        flow = controller.request_refund_action("pay-1-rf-1", "approve", "Verified with parent")
        asyncio.run(flow.confirm())

        assert service.mutations == [
            (
                REFUND_PROCESS_PATH,
                {
                    "paymentId": "pay-1",
                    "refundId": "rf-1",
                    "action": "approve",
                    "adminNotes": "Verified with parent",
                },
            )
        ]
        assert service.fetch_count == 2
        assert controller.state.notice == "Refund approved"

    def test_reject_against_demo_data(self):
        controller = ListController(DemoListService(REFUNDS))
        asyncio.run(controller.apply_filters({"status": "pending"}))
        assert "pay-5001-rf-1" in controller.state.row_ids

        asyncio.run(controller.request_refund_action("pay-5001-rf-1", "reject").confirm())

        assert "pay-5001-rf-1" not in controller.state.row_ids
        assert controller.state.notice == "Refund rejected"

    def test_unknown_refund_action(self):
        controller = ListController(RecordingService(REFUNDS, [_payment()]))
        asyncio.run(controller.load())
        with pytest.raises(ValueError):
            controller.request_refund_action("pay-1-rf-1", "escalate")

    def test_sync_all(self):
        service = RecordingService(REFUNDS, [_payment()])
        controller = ListController(service)

        flow = controller.request_refund_sync()
        asyncio.run(flow.confirm())

        assert service.mutations == [(REFUND_SYNC_PATH, {})]
        assert service.fetch_count == 1

    def test_sync_by_date(self):
        service = RecordingService(REFUNDS, [_payment()])
        controller = ListController(service)

        flow = controller.request_refund_sync("2026-09-01", "2026-09-30")
        asyncio.run(flow.confirm())

        assert service.mutations == [
            (REFUND_SYNC_BY_DATE_PATH, {"startDate": "2026-09-01", "endDate": "2026-09-30"})
        ]

    @pytest.mark.parametrize(
        ("start", "end", "message"),
        [
            ("2026-09-30", "2026-09-01", "Start date must be on or before end date."),
            ("2026-09-01", None, "End date is required."),
            ("09/01/2026", "2026-09-30", "Start date must be a date in YYYY-MM-DD format."),
        ],
    )
    def test_sync_validation(self, start, end, message):
        service = RecordingService(REFUNDS)
        controller = ListController(service)

        assert controller.request_refund_sync(start, end) is None
        assert controller.state.error == message
        assert service.mutations == []


class TestExportAndMetadata:
    """Tests for export, metadata and tournaments."""

    def test_export_filename_and_rows(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze"))
        controller = ListController(service, filters={"name": "hawks"})

        filename, data = asyncio.run(controller.export())

        assert filename == f"internal-teams-{date.today():%Y-%m-%d}.csv"
        lines = data.decode("utf-8").splitlines()
        assert lines[0].startswith("Team Name,")
        assert len(lines) == 2

    def test_export_failure_sets_error(self, signed_out_session):
        controller = ListController(DemoListService(TEAMS, session=signed_out_session))

        assert asyncio.run(controller.export()) is None
        assert controller.state.auth_required is True
        assert controller.state.error

    def test_metadata_from_service(self):
        service = RecordingService(TICKETS)
        service.metadata = {"seasons": ["Fall"], "years": [2026], "packages": ["VIP"]}
        controller = ListController(service)

        assert asyncio.run(controller.load_metadata()) == service.metadata

    def test_metadata_falls_back_to_rows(self):
        service = RecordingService(TEAMS, _teams("Hawks", "Blaze"))
        service.metadata = HttpError(500, "boom")
        controller = ListController(service)
        asyncio.run(controller.load())

        metadata = asyncio.run(controller.load_metadata())

        assert metadata["years"] == [2025]
        assert metadata["grades"] == ["5"]
        assert controller.state.error is None

    def test_tournament_failure_sets_error(self, signed_out_session):
        controller = ListController(DemoListService(REGISTRATIONS, session=signed_out_session))

        assert asyncio.run(controller.list_tournaments()) == []
        assert controller.state.auth_required is True


class TestRestore:
    """Tests for rebuilding a controller from a stored ListState."""

    def test_restore_settles_loading_state(self):
        service = RecordingService(TEAMS, _teams("Hawks"))
        controller = ListController(service)
        asyncio.run(controller.apply_filters({"name": "hawk"}))
        data = controller.state.to_dict()
        data["status"] = ViewStatus.LOADING.value
        data["loading"] = True

        restored = ListController.restore(service, data)

        assert restored.state.status == ViewStatus.LOADED
        assert restored.state.loading is False
        assert restored.state.filters.get("name") == "hawk"
        assert restored.state.row_ids == ["team-1"]

    def test_restore_without_data(self):
        restored = ListController.restore(RecordingService(TICKETS), None)
        assert restored.state.status == ViewStatus.IDLE
        assert restored.state.sort == "dateDesc"
