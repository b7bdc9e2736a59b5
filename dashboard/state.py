"""
Detect which dashboard a client should see.

Works purely on the client's project requests and projects as already
fetched by the caller; nothing here reads or writes storage.
"""

from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from loguru import logger
from dashboard.models import (
    ProjectRequestStatus,
    DashboardView,
    DashboardState,
    ACTIVE_REQUEST_STATUSES,
    INACTIVE_PROJECT_STATUSES,
    ProjectStatus,
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _project_status(project: Dict[str, Any]) -> str:
    return str(project.get("status") or "").strip().upper()


def _is_lead(project: Dict[str, Any]) -> bool:
    return _project_status(project) == ProjectStatus.LEAD.value


def _created_at(request: Dict[str, Any]) -> datetime:
    """Sort key for requests; unknown timestamps sort oldest."""
    value = request.get("created_at")
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.warning(f"Unparseable created_at on project request: {value!r}")
            return _EPOCH
    if not isinstance(value, datetime):
        return _EPOCH
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def is_active_request(request: Dict[str, Any]) -> bool:
    return ProjectRequestStatus.parse(request.get("status")) in ACTIVE_REQUEST_STATUSES


def has_active_project_request(project_requests: Optional[List[Dict[str, Any]]]) -> bool:
    return any(is_active_request(req) for req in project_requests or [])


def get_active_project_request(
    project_requests: Optional[List[Dict[str, Any]]],
) -> Optional[Dict[str, Any]]:
    """
    Most recently created request still in intake (DRAFT, SUBMITTED,
    REVIEWING or NEEDS_INFO). Requests created at the same instant keep
    input order, so the first one wins.
    """
    candidates = [req for req in project_requests or [] if is_active_request(req)]
    if not candidates:
        return None
    return max(candidates, key=_created_at)


def get_lead_projects(projects: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """LEAD projects; those on a maintenance plan are shown via the hours bank instead."""
    return [p for p in projects or [] if _is_lead(p) and not p.get("has_maintenance_plan")]


def get_active_projects(projects: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Projects in flight, plus anything carrying a maintenance plan."""
    return [
        p for p in projects or []
        if p.get("has_maintenance_plan") or _project_status(p) not in INACTIVE_PROJECT_STATUSES
    ]


def has_active_projects(projects: Optional[List[Dict[str, Any]]]) -> bool:
    return bool(get_active_projects(projects))


def has_only_lead_projects(projects: Optional[List[Dict[str, Any]]]) -> bool:
    """True when every project outside a maintenance plan is a LEAD."""
    non_maintenance = [p for p in projects or [] if not p.get("has_maintenance_plan")]
    if not non_maintenance:
        return False
    return all(_is_lead(p) for p in non_maintenance)


def resolve_view(
    active_request: Optional[Dict[str, Any]],
    active_projects: List[Dict[str, Any]],
    projects: List[Dict[str, Any]],
) -> DashboardView:
    if active_request is not None and not active_projects:
        return DashboardView.PRE_CLIENT
    if active_projects:
        return DashboardView.ACTIVE
    if not projects:
        return DashboardView.EMPTY
    # Leads and finished projects only
    return DashboardView.LEAD_ONLY


def get_dashboard_state(
    project_requests: Optional[List[Dict[str, Any]]],
    projects: Optional[List[Dict[str, Any]]],
) -> DashboardState:
    """
    Classify a client's onboarding state.

    Args:
        project_requests: Every project request of the client
        projects: Every project of the client

    Returns:
        DashboardState; EMPTY only when there are no projects and no
        request still in intake
    """
    active_request = get_active_project_request(project_requests)
    lead_projects = get_lead_projects(projects)
    active_projects = get_active_projects(projects)

    return {
        "view": resolve_view(active_request, active_projects, list(projects or [])),
        "has_active_project_request": active_request is not None,
        "has_only_lead_projects": has_only_lead_projects(projects),
        "has_active_projects": bool(active_projects),
        "active_project_request": active_request,
        "lead_projects": lead_projects,
        "active_projects": active_projects,
    }


def should_show_pre_client_dashboard(
    project_requests: Optional[List[Dict[str, Any]]],
    projects: Optional[List[Dict[str, Any]]],
) -> bool:
    return get_dashboard_state(project_requests, projects)["view"] == DashboardView.PRE_CLIENT


def dashboard_state_to_dict(state: DashboardState) -> Dict[str, Any]:
    """JSON-friendly copy of a DashboardState."""
    result = dict(state)
    result["view"] = state["view"].value
    return result
