"""Pydantic models for API request validation"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


class BatchScoreRequest(BaseModel):
    """Leads to rescore; raw payloads, same shape as /leads/score"""

    leads: List[Dict[str, Any]] = Field(default_factory=list)


class LeadFilterRequest(BaseModel):
    """Client finder filters applied to already scored leads"""

    leads: List[Dict[str, Any]] = Field(default_factory=list)
    search: Optional[str] = None
    state: Optional[str] = None
    category: Optional[str] = None
    min_score: int = Field(0, ge=0, le=100, description="Inclusive lower bound on lead_score")
    status: Optional[str] = None


class ProjectRequestRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    contact_email: Optional[str] = Field(None, alias="contactEmail")


class ProjectRecord(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    status: Optional[str] = None
    has_maintenance_plan: bool = Field(False, alias="hasMaintenancePlan")


class DashboardStateRequest(BaseModel):
    """A single client's full project request and project collections"""

    model_config = ConfigDict(populate_by_name=True)

    project_requests: List[ProjectRequestRecord] = Field(default_factory=list, alias="projectRequests")
    projects: List[ProjectRecord] = Field(default_factory=list)
