from typing import Optional
from graph.state import LeadState
from leads.config import ScoringWeights
from leads.presentation import get_score_color, get_score_label, get_score_badge_classes
from loguru import logger


def make_classify_node(weights: Optional[ScoringWeights] = None):
    """Build the presentation node using the same band cut-points as scoring."""

    def classify(state: LeadState) -> LeadState:
        """Attach the presentation tokens for the lead's score band."""
        score_val = state.get("score", 0)
        band = get_score_label(score_val, weights)

        state["presentation"] = {
            "color": get_score_color(score_val, weights),
            "label": band["label"],
            "emoji": band["emoji"],
            "badge_classes": get_score_badge_classes(score_val, weights),
        }

        logger.info(f"Classified lead {state.get('lead_id', 'unknown')} as {band['label']}")
        return state

    return classify


classify = make_classify_node()
