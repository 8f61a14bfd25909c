import logging
from pydantic import ValidationError
from .BaseController import BaseController
from models.DB_schemas.candidate import CandidateAnalysis
from utils.prompts import SCREENING_SYSTEM_PROMPT
from utils.constants import SCREENING_GENERATION_CONFIG
from utils.exceptions import ScoringError
from utils.helpers import track_llm_call, fill_prompt, parse_structured

logger = logging.getLogger(__name__)


class ScreeningController(BaseController):
    def __init__(self, capabilities=None):
        super().__init__(capabilities)

    def build_prompt(self, resume_text: str, job_description: str) -> str:
        system_prompt = fill_prompt(
            SCREENING_SYSTEM_PROMPT, threshold=self.app_settings.SHORTLIST_THRESHOLD
        )
        return f"""{system_prompt}

=== JOB DESCRIPTION ===
{job_description.strip()}
=== END JOB DESCRIPTION ===

RESUME:
{resume_text[:self.app_settings.RESUME_CHAR_BUDGET]}

Return ONLY the JSON screening result."""

    async def score(
        self, generation_client, resume_text: str, job_description: str,
        usage_controller=None, run_id: str = None, file_id: str = None
    ) -> CandidateAnalysis:
        """
        Score one resume against the job description.

        Raises:
            ScoringError: the model call failed or its answer did not match
                the CandidateAnalysis schema.
        """
        if generation_client is None:
            raise ScoringError("No generation backend is configured")

        try:
            response = await track_llm_call(
                generation_client=generation_client,
                prompt=self.build_prompt(resume_text, job_description),
                config={**SCREENING_GENERATION_CONFIG, "response_schema": CandidateAnalysis},
                usage_controller=usage_controller,
                run_id=run_id,
                file_id=file_id,
                action_type="screening",
            )
        except Exception as e:
            logger.error(f"Screening call failed for {file_id}: {e}")
            raise ScoringError(f"Screening failed: {e}") from e

        try:
            return parse_structured(response.content, CandidateAnalysis)
        except ValidationError as e:
            logger.error(f"Screening result for {file_id} failed validation: {e}")
            raise ScoringError("Screening result did not match the expected schema") from e
