from enum import Enum
from typing import TypedDict, Optional, Dict, Any
from datetime import datetime
from loguru import logger


class ParsableEnum(str, Enum):
    """String enum that normalizes raw values at the boundary."""

    @classmethod
    def parse(cls, value: Any) -> Optional["ParsableEnum"]:
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace(" ", "_").replace("-", "_")
        if not key:
            return None
        try:
            return cls(key)
        except ValueError:
            logger.warning(f"Unknown {cls.__name__} value ignored: {value!r}")
            return None


class WebsiteQuality(ParsableEnum):
    POOR = "POOR"
    FAIR = "FAIR"
    GOOD = "GOOD"
    EXCELLENT = "EXCELLENT"


class LeadStatus(ParsableEnum):
    NEW = "NEW"
    CONTACTED = "CONTACTED"
    QUALIFIED = "QUALIFIED"
    PROPOSAL_SENT = "PROPOSAL_SENT"
    CONVERTED = "CONVERTED"
    LOST = "LOST"


class LeadLabel(str, Enum):
    """Score bands, coldest first."""
    COLD = "Cold"
    COOL = "Cool"
    WARM = "Warm"
    HOT = "Hot"


class LeadForScoring(TypedDict, total=False):
    """Prospect attributes read by the scoring engine. Every key is optional."""
    has_website: bool
    website_quality: Optional[WebsiteQuality]
    annual_revenue: Optional[float]
    category: Optional[str]
    city: Optional[str]
    state: Optional[str]
    employee_count: Optional[int]
    email: Optional[str]
    phone: Optional[str]
    emails_sent: int
    converted_at: Optional[datetime]


class ScoreBreakdown(TypedDict):
    website_score: int   # 0..30
    revenue_score: int   # 0..25
    category_score: int  # 0..20
    location_score: int  # 0..15
    size_score: int      # 0..10


class ScoreResult(TypedDict):
    total: int
    breakdown: ScoreBreakdown
    label: LeadLabel
    recommendation: str


class ScoreLabel(TypedDict):
    band: str        # LeadLabel value: Hot | Warm | Cool | Cold
    label: str
    emoji: str
    color: str


def score_result_to_dict(result: ScoreResult) -> Dict[str, Any]:
    """JSON-friendly copy of a ScoreResult."""
    return {
        "total": result["total"],
        "breakdown": dict(result["breakdown"]),
        "label": result["label"].value,
        "recommendation": result["recommendation"],
    }
