"""
Lead scoring for the nonprofit client finder.

Scores a prospect from 0 to 100 across five weighted factors. A missing or
poor website counts as opportunity since the agency sells websites.
"""

from typing import Dict, Any, List, Optional, Mapping
from leads.config import ScoringWeights, DEFAULT_WEIGHTS, FACTOR_CEILINGS
from leads.models import WebsiteQuality, LeadLabel, ScoreBreakdown, ScoreResult

RECOMMENDATIONS = {
    LeadLabel.HOT: "High priority - reach out immediately",
    LeadLabel.WARM: "Good prospect - add to outreach queue",
    LeadLabel.COOL: "Worth pursuing - gather more info",
    LeadLabel.COLD: "Lower priority - may not be ideal fit",
}
CONVERTED_RECOMMENDATION = "Already converted to client"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _tier_points(value: float, tiers, floor: int) -> int:
    for minimum, points in tiers:
        if value >= minimum:
            return points
    return floor


def score_website(lead: Mapping[str, Any], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    """No website scores highest; a better site leaves less to sell."""
    if not lead.get("has_website"):
        return weights.website_missing
    quality = WebsiteQuality.parse(lead.get("website_quality"))
    if quality is None:
        return weights.website_quality_unknown
    return weights.website_quality_points.get(quality.value, weights.website_quality_unknown)


def score_revenue(lead: Mapping[str, Any], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    revenue = _number(lead.get("annual_revenue"))
    if revenue is None:
        return weights.revenue_unknown
    return _tier_points(revenue, weights.revenue_tiers, weights.revenue_floor)


def is_priority_category(category: str, weights: ScoringWeights = DEFAULT_WEIGHTS) -> bool:
    """Case-insensitive substring match in either direction."""
    needle = category.lower()
    return any(
        needle in cat.lower() or cat.lower() in needle
        for cat in weights.priority_categories
    )


def score_category(lead: Mapping[str, Any], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    category = _text(lead.get("category"))
    if not category:
        return weights.category_unknown
    if is_priority_category(category, weights):
        return weights.category_priority
    return weights.category_other


def score_location(lead: Mapping[str, Any], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    city = _text(lead.get("city")).lower()
    state = _text(lead.get("state")).upper()
    if not city and not state:
        return weights.location_unknown

    state_match = state == weights.home_state.upper()
    if state_match and city == weights.home_city.lower():
        return weights.location_home_city
    if state_match:
        return weights.location_home_state
    if state and state in weights.target_states:
        return weights.location_target_state
    return weights.location_other


def score_size(lead: Mapping[str, Any], weights: ScoringWeights = DEFAULT_WEIGHTS) -> int:
    employees = _number(lead.get("employee_count"))
    if employees is None:
        return weights.size_unknown
    return _tier_points(employees, weights.size_tiers, weights.size_floor)


def classify(total: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> LeadLabel:
    """Map a 0-100 score to its band."""
    if total >= weights.hot_min:
        return LeadLabel.HOT
    if total >= weights.warm_min:
        return LeadLabel.WARM
    if total >= weights.cool_min:
        return LeadLabel.COOL
    return LeadLabel.COLD


def _breakdown(lead: Mapping[str, Any], weights: ScoringWeights) -> ScoreBreakdown:
    raw = {
        "website_score": score_website(lead, weights),
        "revenue_score": score_revenue(lead, weights),
        "category_score": score_category(lead, weights),
        "location_score": score_location(lead, weights),
        "size_score": score_size(lead, weights),
    }
    return {key: _clamp(value, 0, FACTOR_CEILINGS[key]) for key, value in raw.items()}


def calculate_lead_score_detailed(
    lead: Mapping[str, Any], weights: Optional[ScoringWeights] = None
) -> ScoreResult:
    """
    Score a prospect with a per-factor breakdown and recommendation.

    Args:
        lead: Prospect attributes; every key is optional
        weights: Scoring policy, defaults to DEFAULT_WEIGHTS

    Returns:
        ScoreResult whose total equals the sum of its breakdown
    """
    weights = weights or DEFAULT_WEIGHTS

    if lead.get("converted_at"):
        return {
            "total": 0,
            "breakdown": {key: 0 for key in FACTOR_CEILINGS},
            "label": LeadLabel.COLD,
            "recommendation": CONVERTED_RECOMMENDATION,
        }

    breakdown = _breakdown(lead, weights)
    total = _clamp(sum(breakdown.values()), 0, 100)
    label = classify(total, weights)
    return {
        "total": total,
        "breakdown": breakdown,
        "label": label,
        "recommendation": RECOMMENDATIONS[label],
    }


def calculate_lead_score(lead: Mapping[str, Any], weights: Optional[ScoringWeights] = None) -> int:
    """List-view score: detailed total plus contact bonus minus outreach penalty."""
    weights = weights or DEFAULT_WEIGHTS
    if lead.get("converted_at"):
        return 0

    score = sum(_breakdown(lead, weights).values())

    # Reachable leads are easier to work
    if lead.get("email") or lead.get("phone"):
        score += weights.contact_bonus

    # Contacted but never converted
    emails_sent = _number(lead.get("emails_sent")) or 0
    if emails_sent > 0:
        score -= weights.outreach_penalty

    return _clamp(int(score), 0, 100)


def recalculate_lead_scores(
    leads: List[Mapping[str, Any]], weights: Optional[ScoringWeights] = None
) -> Dict[int, int]:
    """Batch list-view scores keyed by position in the input."""
    return {index: calculate_lead_score(lead, weights) for index, lead in enumerate(leads or [])}
