import logging
from fastapi import UploadFile
from .BaseController import BaseController
from .ResumeProcessor import ResumeProcessor
from .ScreeningController import ScreeningController
from .NotificationController import NotificationController
from .ShortlistPolicy import ShortlistPolicy
from models import RunModel, CandidateModel
from models.DB_schemas.candidate import Candidate
from models.DB_schemas.run import Run, ShortlistEntry
from models.DB_schemas.enums import RunStatus
from models.DB_schemas.types import new_object_id
from utils.exceptions import ScoringError

logger = logging.getLogger(__name__)


class RunController(BaseController):
    """Screens a batch of resumes against one job description."""

    def __init__(self, run_model: RunModel, candidate_model: CandidateModel,
                 resume_processor: ResumeProcessor, screening_controller: ScreeningController,
                 notification_controller: NotificationController, usage_controller=None,
                 capabilities=None):
        super().__init__(capabilities)
        self.run_model = run_model
        self.candidate_model = candidate_model
        self.resume_processor = resume_processor
        self.screening_controller = screening_controller
        self.notification_controller = notification_controller
        self.usage_controller = usage_controller
        self.policy = ShortlistPolicy(self.app_settings.SHORTLIST_THRESHOLD)

    def summarize(self, candidate: Candidate) -> dict:
        ai = candidate.ai
        return {
            "id": candidate.id,
            "run_id": candidate.run_id,
            "file_name": candidate.file_name,
            "candidate_name": ai.candidate_name,
            "email": candidate.email,
            "match_score": ai.match_score,
            "recommended": ai.recommended,
            "scoring_breakdown": ai.scoring_breakdown.model_dump(),
            "top_skills": ai.top_skills,
            "summary": ai.summary,
            "shortlisted": candidate.shortlisted,
            "rejection_reasons": self.policy.rejection_reasons(ai),
            "created_at": candidate.created_at,
        }

    async def _process_file(self, generation_client, run: Run, file: UploadFile) -> Candidate | None:
        text = await self.resume_processor.extract(file)
        if not text:
            logger.warning(f"No text could be extracted from {file.filename}; skipped")
            return None

        candidate_id = new_object_id()
        try:
            analysis = await self.screening_controller.score(
                generation_client, text, run.job_description,
                usage_controller=self.usage_controller, run_id=run.id, file_id=candidate_id,
            )
        except ScoringError as e:
            logger.warning(f"Skipping {file.filename}: {e}")
            return None

        candidate = Candidate(
            _id=candidate_id,
            run_id=run.id,
            file_name=file.filename or "resume",
            text_snippet=text[:self.app_settings.TEXT_SNIPPET_CHARS],
            ai=analysis,
            email=analysis.email.lower() if analysis.email else None,
            shortlisted=self.policy.is_shortlisted(analysis),
        )
        await self.candidate_model.create_candidate(candidate)
        return candidate

    async def process(self, generation_client, job_description: str,
                      files: list[UploadFile]) -> tuple[Run, list[Candidate]]:
        """
        Extract, score and record every file in order, then close the run.

        A file that cannot be read or scored is counted as failed and the
        batch moves on. Anything else marks the run failed and propagates.
        """
        run = Run(job_description=job_description.strip(), total=len(files))
        await self.run_model.create_run(run)
        logger.info(f"Run {run.id} started with {run.total} files")

        candidates = []
        try:
            for file in files:
                candidate = await self._process_file(generation_client, run, file)
                if candidate is None:
                    run.failed += 1
                    continue
                run.processed += 1
                candidates.append(candidate)

                if candidate.shortlisted and candidate.email:
                    run.shortlisted.append(ShortlistEntry(
                        id=candidate.id,
                        candidate_name=candidate.ai.candidate_name,
                        email=candidate.email,
                        match_score=candidate.ai.match_score,
                    ))
                    await self.notification_controller.send_shortlist_email(
                        candidate.email, candidate.ai.candidate_name
                    )
        except Exception as e:
            logger.error(f"Run {run.id} aborted: {e}")
            run.run_status = RunStatus.FAILED.value
            await self.run_model.finish_run(run)
            raise

        run.run_status = RunStatus.COMPLETED.value
        await self.run_model.finish_run(run)
        logger.info(
            f"Run {run.id} completed: {run.processed} processed, {run.failed} failed, "
            f"{len(run.shortlisted)} shortlisted"
        )
        return run, candidates
