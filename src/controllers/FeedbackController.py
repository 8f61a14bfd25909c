import logging
from pydantic import ValidationError
from .BaseController import BaseController
from models import FeedbackModel
from models.DB_schemas.feedback import Feedback, FeedbackAssessment
from utils.prompts import FEEDBACK_SYSTEM_PROMPT, FEEDBACK_PROMPT
from utils.constants import FEEDBACK_GENERATION_CONFIG, FEEDBACK_CATEGORIES
from utils.exceptions import ScoringError
from utils.helpers import track_llm_call, fill_prompt, format_transcript, parse_structured

logger = logging.getLogger(__name__)


class FeedbackController(BaseController):
    def __init__(self, feedback_model: FeedbackModel, usage_controller=None, capabilities=None):
        super().__init__(capabilities)
        self.feedback_model = feedback_model
        self.usage_controller = usage_controller

    @staticmethod
    def _order_categories(assessment: FeedbackAssessment) -> list:
        by_name = {score.name.strip().lower(): score for score in assessment.category_scores}
        ordered = []
        for name in FEEDBACK_CATEGORIES:
            score = by_name.get(name.lower())
            if score:
                ordered.append(score.model_copy(update={"name": name}))
        return ordered

    async def assess(self, generation_client, transcript: list[dict],
                     run_id: str = None, file_id: str = None) -> FeedbackAssessment:
        if generation_client is None:
            raise ScoringError("No generation backend is configured")

        prompt = f"{FEEDBACK_SYSTEM_PROMPT}\n\n" + fill_prompt(
            FEEDBACK_PROMPT, transcript=format_transcript(transcript, bullet="- ")
        )
        try:
            response = await track_llm_call(
                generation_client=generation_client,
                prompt=prompt,
                config={**FEEDBACK_GENERATION_CONFIG, "response_schema": FeedbackAssessment},
                usage_controller=self.usage_controller,
                run_id=run_id,
                file_id=file_id,
                action_type="feedback",
            )
            return parse_structured(response.content, FeedbackAssessment)
        except ValidationError as e:
            raise ScoringError("Feedback did not match the expected schema") from e
        except Exception as e:
            raise ScoringError(f"Feedback generation failed: {e}") from e

    async def create_feedback(self, generation_client, interview_id: str, user_id: str,
                              transcript: list[dict], run_id: str = None) -> Feedback:
        """Grade a transcript and store the result as a new feedback record."""
        assessment = await self.assess(generation_client, transcript, run_id=run_id, file_id=interview_id)
        feedback = Feedback(
            interview_id=interview_id,
            user_id=user_id,
            total_score=assessment.total_score,
            category_scores=self._order_categories(assessment),
            strengths=assessment.strengths,
            areas_for_improvement=assessment.areas_for_improvement,
            final_assessment=assessment.final_assessment,
        )
        await self.feedback_model.create_feedback(feedback)
        logger.info(f"Feedback {feedback.id} recorded for interview {interview_id}")
        return feedback
