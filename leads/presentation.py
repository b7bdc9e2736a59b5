from typing import Optional
from leads.config import ScoringWeights, DEFAULT_WEIGHTS
from leads.models import LeadLabel, ScoreLabel
from leads.scoring import classify

# Map marker colors
BAND_COLORS = {
    LeadLabel.HOT: "#ef4444",   # red
    LeadLabel.WARM: "#f59e0b",  # amber
    LeadLabel.COOL: "#fb923c",  # orange
    LeadLabel.COLD: "#94a3b8",  # slate
}

BAND_LABELS = {
    LeadLabel.HOT: {"band": "Hot", "label": "Hot Lead", "emoji": "🔥", "color": "red"},
    LeadLabel.WARM: {"band": "Warm", "label": "Warm Lead", "emoji": "☀️", "color": "amber"},
    LeadLabel.COOL: {"band": "Cool", "label": "Cool Lead", "emoji": "🌤️", "color": "orange"},
    LeadLabel.COLD: {"band": "Cold", "label": "Cold Lead", "emoji": "❄️", "color": "slate"},
}

# Tailwind badge classes
BAND_BADGES = {
    LeadLabel.HOT: "bg-red-100 text-red-800",
    LeadLabel.WARM: "bg-orange-100 text-orange-800",
    LeadLabel.COOL: "bg-yellow-100 text-yellow-800",
    LeadLabel.COLD: "bg-gray-100 text-gray-800",
}


def get_score_band(score: float, weights: Optional[ScoringWeights] = None) -> LeadLabel:
    """Band for a score. Every helper below goes through here."""
    return classify(score, weights or DEFAULT_WEIGHTS)


def get_score_color(score: float, weights: Optional[ScoringWeights] = None) -> str:
    return BAND_COLORS[get_score_band(score, weights)]


def get_score_label(score: float, weights: Optional[ScoringWeights] = None) -> ScoreLabel:
    return dict(BAND_LABELS[get_score_band(score, weights)])


def get_score_badge_classes(score: float, weights: Optional[ScoringWeights] = None) -> str:
    return BAND_BADGES[get_score_band(score, weights)]
