import os
import sys
from datetime import datetime, timezone

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dashboard.models import DashboardView, ProjectRequestStatus
from dashboard.state import (
    get_dashboard_state,
    get_active_project_request,
    should_show_pre_client_dashboard,
    has_active_project_request,
    has_only_lead_projects,
    get_lead_projects,
    get_active_projects,
    dashboard_state_to_dict,
)


class TestDashboardState:
    """Test dashboard variant detection."""

    def test_empty(self):
        state = get_dashboard_state([], [])

        assert state["view"] == DashboardView.EMPTY
        assert state["active_project_request"] is None
        assert state["lead_projects"] == []
        assert state["active_projects"] == []

    def test_none_collections_are_empty(self):
        assert get_dashboard_state(None, None)["view"] == DashboardView.EMPTY

    def test_submitted_request_is_pre_client(self):
        requests = [{"id": "r1", "status": "SUBMITTED"}]
        state = get_dashboard_state(requests, [])

        assert state["view"] == DashboardView.PRE_CLIENT
        assert state["active_project_request"]["id"] == "r1"
        assert state["has_active_project_request"] is True
        assert should_show_pre_client_dashboard(requests, [])

    def test_request_with_only_lead_projects_is_pre_client(self):
        state = get_dashboard_state([{"status": "NEEDS_INFO"}], [{"id": "p1", "status": "LEAD"}])

        assert state["view"] == DashboardView.PRE_CLIENT
        assert [p["id"] for p in state["lead_projects"]] == ["p1"]

    def test_active_wins_over_lead(self):
        projects = [{"id": "p1", "status": "LEAD"}, {"id": "p2", "status": "ACTIVE"}]
        state = get_dashboard_state([], projects)

        assert state["view"] == DashboardView.ACTIVE
        assert [p["id"] for p in state["lead_projects"]] == ["p1"]
        assert [p["id"] for p in state["active_projects"]] == ["p2"]
        assert not should_show_pre_client_dashboard([], projects)

    def test_active_project_beats_open_request(self):
        state = get_dashboard_state([{"status": "REVIEWING"}], [{"status": "in_progress"}])
        assert state["view"] == DashboardView.ACTIVE

    def test_lead_only(self):
        state = get_dashboard_state([], [{"status": "lead"}])

        assert state["view"] == DashboardView.LEAD_ONLY
        assert state["has_only_lead_projects"] is True

    def test_finished_requests_and_projects_are_lead_only(self):
        requests = [{"status": "APPROVED"}, {"status": "REJECTED"}, {"status": "ARCHIVED"}]
        projects = [{"status": "COMPLETED"}, {"status": "cancelled"}, {"status": "ARCHIVED"}]
        state = get_dashboard_state(requests, projects)

        assert state["view"] == DashboardView.LEAD_ONLY
        assert state["has_active_project_request"] is False
        assert state["has_active_projects"] is False

    def test_completed_project_is_not_empty(self):
        state = get_dashboard_state([], [{"status": "COMPLETED"}])

        assert state["view"] == DashboardView.LEAD_ONLY
        assert state["lead_projects"] == []

    def test_finished_requests_without_projects_are_empty(self):
        state = get_dashboard_state([{"status": "APPROVED"}, {"status": "REJECTED"}], [])
        assert state["view"] == DashboardView.EMPTY

    def test_maintenance_plan_counts_as_active(self):
        projects = [{"id": "p1", "status": "LEAD", "has_maintenance_plan": True}]
        state = get_dashboard_state([{"status": "DRAFT"}], projects)

        assert state["view"] == DashboardView.ACTIVE
        assert state["lead_projects"] == []
        assert get_active_projects(projects) == projects
        assert has_only_lead_projects(projects) is False

    def test_pre_client_predicate_follows_resolver(self):
        cases = [
            ([], []),
            ([{"status": "SUBMITTED"}], []),
            ([{"status": "SUBMITTED"}], [{"status": "LEAD"}]),
            ([], [{"status": "LEAD"}]),
            ([{"status": "DRAFT"}], [{"status": "ACTIVE"}]),
        ]
        for requests, projects in cases:
            expected = get_dashboard_state(requests, projects)["view"] == DashboardView.PRE_CLIENT
            assert should_show_pre_client_dashboard(requests, projects) is expected

    def test_serializes_view(self):
        data = dashboard_state_to_dict(get_dashboard_state([], []))
        assert data["view"] == "EMPTY"


class TestActiveProjectRequest:
    """Test selection of the request shown on the pre-client dashboard."""

    def test_none_when_no_requests(self):
        assert get_active_project_request([]) is None
        assert get_active_project_request(None) is None

    def test_ignores_final_statuses(self):
        requests = [{"status": "APPROVED"}, {"status": "REJECTED"}, {"status": "ARCHIVED"}]
        assert get_active_project_request(requests) is None
        assert not has_active_project_request(requests)

    def test_unknown_status_is_not_active(self):
        assert get_active_project_request([{"status": "PENDING"}]) is None

    def test_latest_created_wins(self):
        older = {"id": "old", "status": "SUBMITTED", "created_at": datetime(2026, 1, 5, tzinfo=timezone.utc)}
        newer = {"id": "new", "status": "DRAFT", "created_at": datetime(2026, 2, 1, tzinfo=timezone.utc)}

        assert get_active_project_request([older, newer])["id"] == "new"
        assert get_active_project_request([newer, older])["id"] == "new"

    def test_iso_strings_and_naive_datetimes(self):
        requests = [
            {"id": "a", "status": "reviewing", "created_at": "2026-03-01T09:00:00Z"},
            {"id": "b", "status": "NEEDS_INFO", "created_at": datetime(2026, 3, 2)},
        ]
        assert get_active_project_request(requests)["id"] == "b"

    def test_unparseable_timestamp_sorts_oldest(self):
        requests = [
            {"id": "bad", "status": "SUBMITTED", "created_at": "yesterday"},
            {"id": "good", "status": "SUBMITTED", "created_at": "2025-06-01T00:00:00+00:00"},
        ]
        assert get_active_project_request(requests)["id"] == "good"

    def test_tie_keeps_input_order(self):
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)
        requests = [
            {"id": "first", "status": "SUBMITTED", "created_at": when},
            {"id": "second", "status": "SUBMITTED", "created_at": when},
        ]
        assert get_active_project_request(requests)["id"] == "first"

    def test_status_parse(self):
        assert ProjectRequestStatus.parse(" needs info ") == ProjectRequestStatus.NEEDS_INFO
        assert ProjectRequestStatus.parse("") is None
        assert ProjectRequestStatus.parse(None) is None

    def test_lead_projects_case_insensitive(self):
        projects = [{"status": "Lead"}, {"status": "LEAD "}, {"status": "QUOTED"}, {}]
        assert len(get_lead_projects(projects)) == 2
