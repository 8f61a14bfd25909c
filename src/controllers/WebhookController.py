import logging
from datetime import datetime, timedelta, timezone
import httpx
from fastapi import HTTPException, status
from .BaseController import BaseController
from .StatsController import StatsController
from models import CandidateModel, InterviewModel
from models.DB_schemas.interview import Interview
from utils.constants import CALENDLY_INVITEE_CREATED
from utils.helpers import parse_timestamp

logger = logging.getLogger(__name__)


class WebhookController(BaseController):
    """Turns Calendly booking events into scheduled interviews."""

    def __init__(self, candidate_model: CandidateModel, interview_model: InterviewModel,
                 stats_controller: StatsController, capabilities=None):
        super().__init__(capabilities)
        self.candidate_model = candidate_model
        self.interview_model = interview_model
        self.stats_controller = stats_controller

    def is_due(self, scheduled_at: str) -> bool:
        start = parse_timestamp(scheduled_at)
        if start is None:
            return False
        horizon = datetime.now(timezone.utc) + timedelta(hours=self.app_settings.INTERVIEW_LOOKAHEAD_HOURS)
        return start <= horizon

    async def handle_event(self, event) -> tuple[dict, str | None]:
        """
        Process one validated CalendlyEvent.

        Returns the response body, and the id of an interview the runner
        should start now (None when nothing is due).
        """
        if event.event != CALENDLY_INVITEE_CREATED:
            return {"success": True, "message": "Event processed"}, None

        email, scheduled_at, event_uri = event.payload.booking() if event.payload else (None, None, None)
        if not email or not scheduled_at:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing required fields"
            )

        candidate = await self.candidate_model.get_candidate_by_email(email)
        if candidate is None:
            logger.warning(f"No candidate found for email: {email}")
            return {"success": True, "message": "Candidate not found"}, None

        interview = Interview(
            candidate_id=candidate.id,
            candidate_email=email,
            run_id=candidate.run_id,
            scheduled_at=scheduled_at,
            calendly_event_uri=event_uri,
        )
        await self.interview_model.create_interview(interview)
        logger.info(f"Interview {interview.id} scheduled for {scheduled_at}")

        try:
            await self.stats_controller.refresh()
        except Exception as e:
            logger.error(f"Error updating statistics after interview scheduling: {e}")

        body = {
            "success": True,
            "interview_id": interview.id,
            "message": "Interview scheduled successfully",
        }
        if self.is_due(scheduled_at):
            return body, interview.id

        logger.info(
            f"Interview {interview.id} scheduled for {scheduled_at} is beyond "
            f"{self.app_settings.INTERVIEW_LOOKAHEAD_HOURS}h; left scheduled for later processing"
        )
        return body, None

    async def trigger_runner(self, interview_id: str) -> None:
        """Call the interview runner endpoint of this service with the internal key."""
        url = f"{self.app_settings.APP_BASE_URL.rstrip('/')}/api/v1/interview/run"
        try:
            async with httpx.AsyncClient(timeout=self.app_settings.INTERNAL_CALL_TIMEOUT_SECONDS) as client:
                response = await client.post(
                    url,
                    json={"interview_id": interview_id},
                    headers={"Authorization": f"Bearer {self.app_settings.INTERNAL_API_KEY}"},
                )
            if response.is_error:
                logger.error(f"Interview runner returned {response.status_code}: {response.text}")
        except httpx.HTTPError as e:
            logger.error(f"Error starting interview runner for {interview_id}: {e}")
