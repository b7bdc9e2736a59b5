import os
import time
from typing import Dict, Any
from fastapi import FastAPI, Request, HTTPException, Body, Path
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from loguru import logger
from langgraph.graph import StateGraph, START, END
from dotenv import load_dotenv

# Import our modules
from graph.state import LeadState
from graph.nodes.capture import capture
from graph.nodes.score import make_score_node
from graph.nodes.classify import make_classify_node
from leads.config import load_scoring_weights
from leads.filters import filter_leads
from leads.presentation import get_score_band, get_score_color, get_score_label, get_score_badge_classes
from leads.scoring import recalculate_lead_scores
from dashboard.state import get_dashboard_state, should_show_pre_client_dashboard, dashboard_state_to_dict
from schemas import BatchScoreRequest, LeadFilterRequest, DashboardStateRequest

# Load environment variables
load_dotenv()

# Configure logging
logger.add(
    os.getenv("LOG_FILE", "logs/app.log"),
    rotation="1 day",
    retention="7 days",
    level=os.getenv("LOG_LEVEL", "INFO"),
)

# Initialize FastAPI app
app = FastAPI(
    title="Agency Lead Scoring & Client Dashboard Service",
    description="Prospect scoring and client dashboard state detection",
    version="1.0.0"
)

# Scoring policy shared by every endpoint
weights = load_scoring_weights()

# Build the LangGraph workflow
def build_workflow():
    """Build the lead intake workflow."""
    workflow = StateGraph(LeadState)

    # Add nodes
    workflow.add_node("capture", capture)
    workflow.add_node("score", make_score_node(weights))
    workflow.add_node("classify", make_classify_node(weights))

    # Add edges
    workflow.add_edge(START, "capture")
    workflow.add_edge("capture", "score")
    workflow.add_edge("score", "classify")
    workflow.add_edge("classify", END)

    return workflow.compile()

app_graph = build_workflow()


def _normalize(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Run a raw payload through the capture node only."""
    return capture({"raw": payload, "errors": []})["normalized"]


@app.post("/leads/score")
async def score_lead(payload: Dict[str, Any] = Body(...)):
    """
    Score a single prospect.

    Expected payload (snake_case or camelCase keys, all optional):
    {
        "id": "lead_123",
        "has_website": true,
        "website_quality": "POOR",
        "annual_revenue": 750000,
        "category": "Mental Health",
        "city": "Louisville",
        "state": "KY",
        "employee_count": 25
    }
    """
    start_time = time.time()

    try:
        logger.info(f"Received lead for scoring: {payload.get('id') or payload.get('email') or 'unknown'}")

        initial_state = {
            "raw": payload,
            "errors": [],
        }
        result = app_graph.invoke(initial_state)

        processing_time = time.time() - start_time
        logger.info(f"Lead scoring completed in {processing_time:.3f}s: {result.get('lead_id', 'unknown')}")

        presentation = result.get("presentation", {})
        return JSONResponse(
            status_code=200,
            content={
                "status": "success",
                "lead_id": result.get("lead_id"),
                "processing_time": processing_time,
                "score": result.get("score"),
                "list_score": result.get("list_score"),
                "label": result.get("label"),
                "recommendation": result.get("recommendation"),
                "breakdown": result.get("breakdown"),
                "color": presentation.get("color"),
                "emoji": presentation.get("emoji"),
                "badge_classes": presentation.get("badge_classes"),
                "errors": result.get("errors", []),
            }
        )

    except Exception as e:
        logger.error(f"Lead scoring failed: {e}")
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": str(e)}
        )


@app.post("/leads/score/batch")
async def score_leads_batch(body: BatchScoreRequest):
    """Recalculate list-view scores, keyed by position in the request."""
    leads = [_normalize(lead) for lead in body.leads]
    scores = recalculate_lead_scores(leads, weights)
    logger.info(f"Rescored {len(scores)} leads")
    return {
        "status": "success",
        "count": len(scores),
        "scores": {str(index): value for index, value in scores.items()},
    }


@app.post("/leads/filter")
async def filter_scored_leads(body: LeadFilterRequest):
    """Apply client finder filters to already scored leads."""
    matched = filter_leads(
        body.leads,
        search=body.search,
        state=body.state,
        category=body.category,
        min_score=body.min_score,
        status=body.status,
    )
    logger.info(f"Lead filter matched {len(matched)} of {len(body.leads)}")
    return {"status": "success", "count": len(matched), "leads": matched}


@app.get("/leads/score-bands/{score}")
def score_band(score: int = Path(..., ge=0, le=100)):
    """Presentation tokens for a score."""
    band = get_score_label(score, weights)
    return {
        "score": score,
        "band": get_score_band(score, weights).value,
        "label": band["label"],
        "emoji": band["emoji"],
        "color": get_score_color(score, weights),
        "badge_classes": get_score_badge_classes(score, weights),
    }


@app.post("/dashboard/state")
async def dashboard_state(body: DashboardStateRequest):
    """Decide which dashboard variant a client should see."""
    try:
        project_requests = [r.model_dump() for r in body.project_requests]
        projects = [p.model_dump() for p in body.projects]

        state = get_dashboard_state(project_requests, projects)
        logger.info(
            f"Dashboard state {state['view'].value}: "
            f"{len(project_requests)} requests, {len(projects)} projects"
        )

        content = dashboard_state_to_dict(state)
        content["show_pre_client_dashboard"] = should_show_pre_client_dashboard(project_requests, projects)
        return jsonable_encoder(content)

    except Exception as e:
        logger.error(f"Dashboard state resolution failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/health")
def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": "1.0.0",
        "services": {
            "workflow": "ready"
        }
    }

# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal server error"}
    )

if __name__ == "__main__":
    import uvicorn

    # Create logs directory if it doesn't exist
    os.makedirs("logs", exist_ok=True)

    logger.info("Starting Agency Lead Scoring & Client Dashboard Service")

    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=int(os.getenv("PORT", "8000")),
        reload=True,
        log_level="info"
    )
