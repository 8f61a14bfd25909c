import logging
from fastapi import APIRouter, BackgroundTasks, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from controllers import WebhookController
from models import CandidateModel, InterviewModel
from utils import get_settings
from utils.constants import CALENDLY_SIGNATURE_HEADER
from utils.security import verify_webhook_signature
from .schema.calendly import CalendlyEvent
from .dependencies import get_capabilities, get_stats_controller

logger = logging.getLogger("uvicorn.error")

webhook_router = APIRouter(
    prefix="/api/v1/calendly",
    tags=["api_v1", "calendly"]
)


@webhook_router.post("/webhook")
async def calendly_webhook(request: Request, background_tasks: BackgroundTasks):
    capabilities = get_capabilities(request)
    body = await request.body()
    if capabilities.webhook_verification and not verify_webhook_signature(
        body, request.headers.get(CALENDLY_SIGNATURE_HEADER), get_settings().CALENDLY_WEBHOOK_SECRET
    ):
        logger.warning("Rejected Calendly webhook with a missing or invalid signature")
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "error": "Invalid webhook signature"}
        )

    try:
        event = CalendlyEvent.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Rejected malformed Calendly event: {e.error_count()} validation errors")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Malformed event payload"}
        )

    db_client = request.app.state.db_client
    webhook_controller = WebhookController(
        candidate_model=await CandidateModel.create_instance(db_client),
        interview_model=await InterviewModel.create_instance(db_client),
        stats_controller=await get_stats_controller(request),
        capabilities=capabilities,
    )

    response, due_interview_id = await webhook_controller.handle_event(event)
    if due_interview_id:
        background_tasks.add_task(webhook_controller.trigger_runner, due_interview_id)
    return response
