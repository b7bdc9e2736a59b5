import os
import json
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Any, List, Optional, Tuple
from loguru import logger

# Scoring weights file; falls back to DEFAULT_WEIGHTS when absent
SCORING_CONFIG_PATH = os.getenv("SCORING_JSON", "./infra/scoring.json")

# Nonprofit categories the agency specializes in
PRIORITY_CATEGORIES = [
    "Healthcare",
    "Mental Health",
    "Education",
    "Community Development",
    "Social Services",
    "Family Services",
    "Youth Development",
    "Substance Abuse",
    "Housing",
    "Food Security",
]

# Louisville metro area and surrounding states
HOME_CITY = "Louisville"
HOME_STATE = "KY"
TARGET_STATES = ["KY", "IN", "OH", "TN", "WV"]


@dataclass(frozen=True)
class ScoringWeights:
    """Every threshold and point value used by the lead scoring engine.

    Tier tables are (minimum, points) pairs ordered from the highest
    minimum down; the first tier whose minimum is met wins.
    """

    # Website opportunity (0-30)
    website_missing: int = 30
    website_quality_points: Dict[str, int] = field(default_factory=lambda: {
        "POOR": 25,
        "FAIR": 15,
        "GOOD": 5,
        "EXCELLENT": 0,
    })
    website_quality_unknown: int = 20

    # Revenue potential (0-25)
    revenue_tiers: List[Tuple[float, int]] = field(default_factory=lambda: [
        (1_000_000, 25),
        (500_000, 20),
        (100_000, 15),
        (50_000, 10),
    ])
    revenue_floor: int = 5
    revenue_unknown: int = 12

    # Category fit (0-20)
    priority_categories: List[str] = field(default_factory=lambda: list(PRIORITY_CATEGORIES))
    category_priority: int = 20
    category_other: int = 10
    category_unknown: int = 10

    # Location proximity (0-15)
    home_city: str = HOME_CITY
    home_state: str = HOME_STATE
    target_states: List[str] = field(default_factory=lambda: list(TARGET_STATES))
    location_home_city: int = 15
    location_home_state: int = 12
    location_target_state: int = 7
    location_other: int = 3
    location_unknown: int = 0

    # Organization size (0-10)
    size_tiers: List[Tuple[int, int]] = field(default_factory=lambda: [
        (50, 10),
        (20, 7),
        (10, 5),
    ])
    size_floor: int = 3
    size_unknown: int = 5

    # List-view adjustments
    contact_bonus: int = 5
    outreach_penalty: int = 10

    # Band cut-points (inclusive lower bounds)
    hot_min: int = 80
    warm_min: int = 60
    cool_min: int = 40


DEFAULT_WEIGHTS = ScoringWeights()

# Upper bound per factor; the five ceilings add up to 100
FACTOR_CEILINGS = {
    "website_score": 30,
    "revenue_score": 25,
    "category_score": 20,
    "location_score": 15,
    "size_score": 10,
}


def _coerce_tiers(value: Any) -> List[Tuple[float, int]]:
    tiers = [(float(minimum), int(points)) for minimum, points in value]
    return sorted(tiers, key=lambda tier: tier[0], reverse=True)


def weights_from_dict(data: Dict[str, Any]) -> ScoringWeights:
    """Overlay known keys from a config mapping onto the default weights."""
    known = {f.name for f in fields(ScoringWeights)}
    overrides: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown scoring config key: {key}")
            continue
        if key in ("revenue_tiers", "size_tiers"):
            value = _coerce_tiers(value)
        elif key == "website_quality_points":
            value = {str(k).upper(): int(v) for k, v in value.items()}
        elif key == "target_states":
            value = [str(s).upper() for s in value]
        overrides[key] = value
    return replace(DEFAULT_WEIGHTS, **overrides)


def load_scoring_weights(path: Optional[str] = None) -> ScoringWeights:
    """Load scoring weights from the JSON config file."""
    config_path = path or os.getenv("SCORING_JSON", SCORING_CONFIG_PATH)
    try:
        with open(config_path, "r") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"Scoring config not found at {config_path}, using defaults")
        return DEFAULT_WEIGHTS
    except OSError as e:
        logger.error(f"Cannot read scoring config {config_path}: {e}")
        return DEFAULT_WEIGHTS
    except json.JSONDecodeError:
        logger.error(f"Invalid JSON in scoring config {config_path}")
        return DEFAULT_WEIGHTS

    if not isinstance(data, dict):
        logger.error(f"Scoring config {config_path} must be a JSON object")
        return DEFAULT_WEIGHTS

    try:
        weights = weights_from_dict(data)
    except (TypeError, ValueError) as e:
        logger.error(f"Malformed scoring config {config_path}: {e}")
        return DEFAULT_WEIGHTS

    logger.info(f"Loaded scoring weights from {config_path}")
    return weights
