import asyncio
import logging
from fastapi import HTTPException, status
from pydantic import ValidationError
from .BaseController import BaseController
from .FeedbackController import FeedbackController
from .NotificationController import NotificationController
from .StatsController import StatsController
from models import RunModel, CandidateModel, InterviewModel
from models.DB_schemas.candidate import Candidate
from models.DB_schemas.interview import Interview, InterviewReport, TranscriptTurn
from models.DB_schemas.enums import InterviewStatus
from stores.voice.VoiceSessionEnums import CallCustomer, SessionEvent
from utils.prompts import INTERVIEW_REPORT_PROMPT
from utils.constants import REPORT_GENERATION_CONFIG
from utils.exceptions import InvalidTransition, ScoringError, VoiceSessionError
from utils.helpers import track_llm_call, fill_prompt, format_transcript, parse_structured

logger = logging.getLogger(__name__)

OPENING_QUESTION = "Please tell me about yourself and your experience."


class InterviewRunner(BaseController):
    """
    Conducts one scheduled interview end to end.

    scheduled -> in_progress when the call is placed, then completed once
    the report is stored, or failed if the call or the evaluation breaks.
    """

    def __init__(self, run_model: RunModel, candidate_model: CandidateModel,
                 interview_model: InterviewModel, feedback_controller: FeedbackController,
                 notification_controller: NotificationController, stats_controller: StatsController,
                 voice_factory=None, usage_controller=None, capabilities=None):
        super().__init__(capabilities)
        self.run_model = run_model
        self.candidate_model = candidate_model
        self.interview_model = interview_model
        self.feedback_controller = feedback_controller
        self.notification_controller = notification_controller
        self.stats_controller = stats_controller
        self.voice_factory = voice_factory
        self.usage_controller = usage_controller

    # ── Voice Call ───────────────────────────────────────────────────────

    async def conduct_call(self, candidate: Candidate) -> tuple[list[TranscriptTurn], object]:
        """Run the voice session to completion and return its final transcript."""
        session = self.voice_factory.create_session() if self.voice_factory else None
        if session is None:
            raise VoiceSessionError("Voice backend is not configured")
        if not candidate.ai.phone:
            raise VoiceSessionError(f"Candidate {candidate.id} has no phone number to call")

        transcript: list[TranscriptTurn] = []
        finished = asyncio.get_running_loop().create_future()

        def on_message(message: dict):
            if message.get("type") == "transcript" and message.get("transcriptType") == "final":
                transcript.append(TranscriptTurn(role=message["role"], content=message["transcript"]))

        def on_call_end(_):
            if not finished.done():
                finished.set_result(None)

        def on_error(error):
            if not finished.done():
                finished.set_exception(VoiceSessionError(f"Voice session failed: {error}"))

        session.on(SessionEvent.MESSAGE, on_message)
        session.on(SessionEvent.CALL_END, on_call_end)
        session.on(SessionEvent.ERROR, on_error)

        name = candidate.ai.candidate_name
        try:
            await session.start(
                CallCustomer(number=candidate.ai.phone, name=name),
                {"username": name, "userid": candidate.id, "questions": OPENING_QUESTION},
            )
            await finished
        finally:
            # no-op once the call has ended or failed on its own
            await session.stop()
        return transcript, session

    # ── Evaluation ───────────────────────────────────────────────────────

    async def build_report(self, generation_client, transcript: list[TranscriptTurn], resume_text: str,
                           job_description: str, run_id: str = None, interview_id: str = None) -> InterviewReport:
        if generation_client is None:
            raise ScoringError("No generation backend is configured")

        prompt = fill_prompt(
            INTERVIEW_REPORT_PROMPT,
            job_description=job_description,
            resume_text=resume_text[:self.app_settings.REPORT_RESUME_CHAR_BUDGET],
            transcript=format_transcript([turn.model_dump() for turn in transcript]),
        )
        try:
            response = await track_llm_call(
                generation_client=generation_client,
                prompt=prompt,
                config={**REPORT_GENERATION_CONFIG, "response_schema": InterviewReport},
                usage_controller=self.usage_controller,
                run_id=run_id,
                file_id=interview_id,
                action_type="interview_report",
            )
            return parse_structured(response.content, InterviewReport)
        except ValidationError as e:
            raise ScoringError("Interview report did not match the expected schema") from e
        except Exception as e:
            raise ScoringError(f"Interview report generation failed: {e}") from e

    # ── Orchestration ────────────────────────────────────────────────────

    async def _mark_failed(self, interview_id: str, reason: str) -> None:
        try:
            await self.interview_model.transition(
                interview_id, InterviewStatus.IN_PROGRESS, InterviewStatus.FAILED, error=reason
            )
        except InvalidTransition as e:
            logger.error(f"Could not mark interview {interview_id} as failed: {e}")

    async def _load(self, interview_id: str) -> tuple[Interview, Candidate]:
        interview = await self.interview_model.get_interview_by_id(interview_id)
        if interview is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interview not found")
        candidate = await self.candidate_model.get_candidate_by_id(interview.candidate_id)
        if candidate is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Candidate not found")
        return interview, candidate

    async def run(self, generation_client, interview_id: str) -> dict:
        """
        Raises:
            HTTPException: interview or candidate missing, or no generation backend.
            InvalidTransition: the interview is not in the scheduled state.
            Exception: anything that broke the call or the evaluation; the
                interview has already been marked failed.
            asyncio.CancelledError: the run was cancelled; the session is
                stopped and the interview marked failed before re-raising.
        """
        interview, candidate = await self._load(interview_id)
        if generation_client is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="No generation backend is configured"
            )

        run = await self.run_model.get_run_by_id(interview.run_id)
        job_description = run.job_description if run else ""

        await self.interview_model.transition(
            interview.id, InterviewStatus.SCHEDULED, InterviewStatus.IN_PROGRESS
        )

        try:
            transcript, session = await self.conduct_call(candidate)
            logger.info(f"Interview {interview.id} call ended with {len(transcript)} transcript turns")
            report = await self.build_report(
                generation_client, transcript, candidate.text_snippet, job_description,
                run_id=interview.run_id, interview_id=interview.id,
            )
        except asyncio.CancelledError:
            logger.error(f"Interview {interview.id} was cancelled mid-run")
            await self._mark_failed(interview.id, "Interview run was cancelled")
            raise
        except Exception as e:
            logger.error(f"Interview {interview.id} failed: {e}")
            await self._mark_failed(interview.id, str(e))
            raise

        feedback_id = None
        try:
            # candidates have no practice account; their id stands in as the feedback owner
            feedback = await self.feedback_controller.create_feedback(
                generation_client, interview.id, candidate.id,
                [turn.model_dump() for turn in transcript], run_id=interview.run_id,
            )
            feedback_id = feedback.id
        except ScoringError as e:
            logger.error(f"Feedback for interview {interview.id} was not recorded: {e}")

        await self.interview_model.transition(
            interview.id, InterviewStatus.IN_PROGRESS, InterviewStatus.COMPLETED,
            transcript=[turn.model_dump() for turn in transcript],
            recording_url=session.recording_url,
            voice_session_id=session.session_id,
            report=report.model_dump(),
            feedback_id=feedback_id,
        )

        try:
            await self.stats_controller.refresh()
        except Exception as e:
            logger.error(f"Error updating statistics after interview {interview.id}: {e}")

        name = candidate.ai.candidate_name
        await self.notification_controller.send_admin_report(name, interview.candidate_email, report)
        await self.notification_controller.send_candidate_follow_up(interview.candidate_email, name, report)

        return {
            "success": True,
            "interview_id": interview.id,
            "feedback_id": feedback_id,
            "report": report.model_dump(),
            "message": "Interview completed successfully",
        }
