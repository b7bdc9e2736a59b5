from typing import Optional
from graph.state import LeadState
from leads.config import ScoringWeights
from leads.scoring import calculate_lead_score_detailed, calculate_lead_score
from loguru import logger


def make_score_node(weights: Optional[ScoringWeights] = None):
    """Build the scoring node bound to a scoring policy."""

    def score(state: LeadState) -> LeadState:
        """Score the normalized lead and record its breakdown."""
        logger.info(f"Starting scoring for lead: {state.get('lead_id', 'unknown')}")

        lead = state.get("normalized", {})
        result = calculate_lead_score_detailed(lead, weights)

        state["score"] = result["total"]
        state["breakdown"] = dict(result["breakdown"])
        state["label"] = result["label"].value
        state["recommendation"] = result["recommendation"]
        state["list_score"] = calculate_lead_score(lead, weights)

        logger.info(f"Final score: {state['score']} ({state['label']}) for {state.get('lead_id')}")
        return state

    return score


score = make_score_node()
