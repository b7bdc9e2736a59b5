from enum import Enum
from typing import TypedDict, Optional, List, Dict, Any
from leads.models import ParsableEnum


class ProjectRequestStatus(ParsableEnum):
    """Intake lifecycle, read only here.

    DRAFT -> SUBMITTED -> REVIEWING -> (NEEDS_INFO -> REVIEWING)* -> APPROVED | REJECTED,
    with ARCHIVED reachable from any state.
    """
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    REVIEWING = "REVIEWING"
    NEEDS_INFO = "NEEDS_INFO"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    ARCHIVED = "ARCHIVED"


class ProjectStatus(ParsableEnum):
    LEAD = "LEAD"
    QUOTED = "QUOTED"
    DEPOSIT_PAID = "DEPOSIT_PAID"
    ACTIVE = "ACTIVE"
    REVIEW = "REVIEW"
    MAINTENANCE = "MAINTENANCE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    ARCHIVED = "ARCHIVED"


class DashboardView(str, Enum):
    PRE_CLIENT = "PRE_CLIENT"
    EMPTY = "EMPTY"
    LEAD_ONLY = "LEAD_ONLY"
    ACTIVE = "ACTIVE"


# Requests still moving through intake
ACTIVE_REQUEST_STATUSES = frozenset({
    ProjectRequestStatus.DRAFT,
    ProjectRequestStatus.SUBMITTED,
    ProjectRequestStatus.REVIEWING,
    ProjectRequestStatus.NEEDS_INFO,
})

# Project statuses that never make a client "active"
INACTIVE_PROJECT_STATUSES = frozenset({
    ProjectStatus.LEAD.value,
    ProjectStatus.COMPLETED.value,
    ProjectStatus.CANCELLED.value,
    ProjectStatus.ARCHIVED.value,
})


class DashboardState(TypedDict):
    """Which dashboard variant a client sees. Recomputed on every read."""
    view: DashboardView
    has_active_project_request: bool
    has_only_lead_projects: bool
    has_active_projects: bool
    active_project_request: Optional[Dict[str, Any]]
    lead_projects: List[Dict[str, Any]]
    active_projects: List[Dict[str, Any]]
