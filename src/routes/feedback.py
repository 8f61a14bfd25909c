import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from controllers import FeedbackController
from models import FeedbackModel, PracticeInterviewModel
from utils.exceptions import ScoringError
from .schema.feedback import CreateFeedbackRequest
from .dependencies import get_feedback_controller, get_generation_client, get_practice_interview_model

logger = logging.getLogger("uvicorn.error")

feedback_router = APIRouter(
    prefix="/api/v1",
    tags=["api_v1", "practice"]
)


@feedback_router.post("/feedback", status_code=status.HTTP_201_CREATED)
async def create_feedback(
    request: Request,
    feedback_request: CreateFeedbackRequest,
    feedback_controller: FeedbackController = Depends(get_feedback_controller),
):
    """Grade a practice-interview transcript and store the feedback."""
    generation_client = get_generation_client(request)
    if generation_client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="No generation backend is configured"
        )
    try:
        feedback = await feedback_controller.create_feedback(
            generation_client,
            feedback_request.interview_id,
            feedback_request.user_id,
            [message.model_dump() for message in feedback_request.transcript],
        )
    except ScoringError as e:
        logger.error(f"Error saving feedback: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return {"success": True, "feedback_id": feedback.id}


@feedback_router.get("/feedback/{interview_id}")
async def get_feedback(request: Request, interview_id: str, user_id: str = Query(..., min_length=1)):
    feedback_model = await FeedbackModel.create_instance(request.app.state.db_client)
    feedback = await feedback_model.get_feedback(interview_id, user_id)
    if feedback is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return {"success": True, "feedback": feedback.model_dump()}


@feedback_router.get("/interviews/user/{user_id}")
async def get_user_interviews(
    user_id: str,
    practice_model: PracticeInterviewModel = Depends(get_practice_interview_model),
):
    interviews = await practice_model.get_by_user(user_id)
    return {"success": True, "interviews": [interview.model_dump() for interview in interviews]}


@feedback_router.get("/interviews/latest")
async def get_latest_interviews(
    user_id: str = Query(..., min_length=1),
    limit: int = Query(default=20, ge=1, le=100),
    practice_model: PracticeInterviewModel = Depends(get_practice_interview_model),
):
    interviews = await practice_model.get_latest(user_id, limit)
    return {"success": True, "interviews": [interview.model_dump() for interview in interviews]}


@feedback_router.get("/interviews/{interview_id}")
async def get_practice_interview(
    interview_id: str,
    practice_model: PracticeInterviewModel = Depends(get_practice_interview_model),
):
    interview = await practice_model.get_by_id(interview_id)
    if interview is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
    return {"success": True, "interview": interview.model_dump()}
