from typing import Any, Dict, List, Mapping, Optional
from leads.models import LeadStatus

# Minimum-score presets offered by the client finder
MIN_SCORE_OPTIONS = {
    0: "Any Score",
    40: "40+ (Cool+)",
    60: "60+ (Warm+)",
    80: "80+ (Hot)",
}

SEARCH_FIELDS = ("name", "company", "email", "city")


def _is_wildcard(value: Optional[str]) -> bool:
    return value is None or value == "" or str(value).lower() == "all"


def _lead_score(lead: Mapping[str, Any]) -> float:
    """Stored score as a number; missing or non-numeric counts as 0."""
    value = lead.get("lead_score")
    if value is None or isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def matches_search(lead: Mapping[str, Any], query: str) -> bool:
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in str(lead.get(key) or "").lower() for key in SEARCH_FIELDS)


def filter_leads(
    leads: List[Dict[str, Any]],
    search: Optional[str] = None,
    state: Optional[str] = None,
    category: Optional[str] = None,
    min_score: int = 0,
    status: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Filter scored leads the way the client finder does.

    Args:
        leads: Lead records carrying a `lead_score`
        search: Free text matched against name, company, email and city
        state: Exact state code, or None/"all"
        category: Exact category, or None/"all"
        min_score: Inclusive lower bound on `lead_score`
        status: Lead status, or None/"all"

    Returns:
        Matching leads in input order
    """
    wanted_status = None if _is_wildcard(status) else LeadStatus.parse(status)
    if not _is_wildcard(status) and wanted_status is None:
        # Unknown status filter matches nothing
        return []

    result = []
    for lead in leads or []:
        if search and not matches_search(lead, search):
            continue
        if not _is_wildcard(state) and lead.get("state") != state:
            continue
        if not _is_wildcard(category) and lead.get("category") != category:
            continue
        if _lead_score(lead) < min_score:
            continue
        if wanted_status is not None and LeadStatus.parse(lead.get("status")) != wanted_status:
            continue
        result.append(lead)
    return result
