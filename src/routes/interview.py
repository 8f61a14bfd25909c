import logging
from fastapi import APIRouter, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from controllers import InterviewRunner
from models import RunModel, CandidateModel, InterviewModel
from utils import get_settings
from utils.exceptions import InvalidTransition
from utils.security import verify_bearer_token
from .schema.interview import RunInterviewRequest
from .dependencies import (
    get_capabilities, get_generation_client, get_feedback_controller,
    get_notification_controller, get_stats_controller, get_usage_controller,
)

logger = logging.getLogger("uvicorn.error")

interview_router = APIRouter(
    prefix="/api/v1/interview",
    tags=["api_v1", "interview"]
)


@interview_router.post("/run")
async def run_interview(request: Request, authorization: str | None = Header(default=None)):
    if not verify_bearer_token(authorization, get_settings().INTERNAL_API_KEY):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "error": "Unauthorized"}
        )
    try:
        run_request = RunInterviewRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        run_request = None
    if run_request is None or not run_request.interview_id:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Interview ID is required"}
        )

    db_client = request.app.state.db_client
    runner = InterviewRunner(
        run_model=await RunModel.create_instance(db_client),
        candidate_model=await CandidateModel.create_instance(db_client),
        interview_model=await InterviewModel.create_instance(db_client),
        feedback_controller=await get_feedback_controller(request),
        notification_controller=get_notification_controller(request),
        stats_controller=await get_stats_controller(request),
        voice_factory=getattr(request.app.state, "voice_session_factory", None),
        usage_controller=await get_usage_controller(request),
        capabilities=get_capabilities(request),
    )

    try:
        return await runner.run(get_generation_client(request), run_request.interview_id)
    except HTTPException as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "error": e.detail}
        )
    except InvalidTransition as e:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"success": False, "error": str(e)}
        )
    except Exception as e:
        logger.error(f"Interview runner error for {run_request.interview_id}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": f"Interview failed: {e}"}
        )
