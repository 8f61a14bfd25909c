import logging
from enum import Enum
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from controllers import ShortlistPolicy, StatsController
from models import RunModel, CandidateModel, InterviewModel
from models.DB_schemas.candidate import Candidate
from utils import get_settings
from .dependencies import get_stats_controller

logger = logging.getLogger("uvicorn.error")

DEMO_MESSAGE = "Document store is not configured; showing demo data"

recruit_router = APIRouter(
    prefix="/api/v1/recruit",
    tags=["api_v1", "recruit"]
)


class CandidateFilter(str, Enum):
    ALL = "all"
    SHORTLISTED = "shortlisted"
    REJECTED = "rejected"


def _candidate_view(candidate: Candidate, policy: ShortlistPolicy) -> dict:
    data = candidate.model_dump()
    data["rejection_reasons"] = policy.rejection_reasons(candidate.ai)
    return data


@recruit_router.get("/dashboard")
async def dashboard(request: Request, limit: int = Query(default=50, ge=1, le=500)):
    """Recent runs and interviews, newest first."""
    db_client = request.app.state.db_client
    if db_client is None:
        return {"success": True, "runs": [], "interviews": [], "message": DEMO_MESSAGE}

    try:
        run_model = await RunModel.create_instance(db_client)
        interview_model = await InterviewModel.create_instance(db_client)
        runs = await run_model.get_recent_runs(limit)
        interviews = await interview_model.get_recent_interviews(limit)
    except Exception as e:
        logger.error(f"Error loading dashboard: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load dashboard"
        )

    return {
        "success": True,
        "runs": [run.model_dump() for run in runs],
        "interviews": [interview.model_dump() for interview in interviews],
    }


@recruit_router.get("/stats")
async def stats(stats_controller: StatsController = Depends(get_stats_controller)):
    try:
        snapshot = await stats_controller.refresh()
    except Exception as e:
        logger.error(f"Error computing recruitment statistics: {e}")
        cached = await stats_controller.cached()
        if cached is not None:
            return {"success": True, "stats": cached.model_dump(), "stale": True}
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to compute statistics"
        )
    return {"success": True, "stats": snapshot.model_dump()}


@recruit_router.get("/runs/{run_id}")
async def get_run(request: Request, run_id: str):
    run_model = await RunModel.create_instance(request.app.state.db_client)
    run = await run_model.get_run_by_id(run_id)
    if run is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Run not found")
    return {"success": True, "run": run.model_dump()}


@recruit_router.get("/candidates")
async def list_candidates(
    request: Request,
    run_id: str | None = Query(default=None),
    filter: CandidateFilter = Query(default=CandidateFilter.ALL),
):
    shortlisted = {
        CandidateFilter.ALL: None,
        CandidateFilter.SHORTLISTED: True,
        CandidateFilter.REJECTED: False,
    }[filter]
    candidate_model = await CandidateModel.create_instance(request.app.state.db_client)
    candidates = await candidate_model.get_candidates(run_id=run_id, shortlisted=shortlisted)

    policy = ShortlistPolicy(get_settings().SHORTLIST_THRESHOLD)
    return {
        "success": True,
        "candidates": [_candidate_view(candidate, policy) for candidate in candidates],
    }


@recruit_router.get("/shortlisted")
async def list_shortlisted(request: Request):
    candidate_model = await CandidateModel.create_instance(request.app.state.db_client)
    candidates = await candidate_model.get_candidates(shortlisted=True)
    return {
        "success": True,
        "candidates": [candidate.model_dump() for candidate in candidates],
    }
