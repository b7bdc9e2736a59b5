from typing import TypedDict, Optional, List, Dict, Any

class LeadState(TypedDict, total=False):
    """State shape for the lead intake workflow."""
    lead_id: str
    raw: Dict[str, Any]              # original request payload
    normalized: Dict[str, Any]       # LeadForScoring keys, enums parsed
    score: int                       # 0..100
    breakdown: Dict[str, int]        # per-factor points
    label: str                       # Hot | Warm | Cool | Cold
    recommendation: str
    list_score: int                  # score incl. contact bonus / outreach penalty
    presentation: Dict[str, str]     # color, emoji, badge classes
    errors: List[str]
