import logging
from .BaseController import BaseController
from models import CandidateModel, InterviewModel, RunModel, StatsModel
from models.DB_schemas.candidate import Candidate
from models.DB_schemas.interview import Interview
from models.DB_schemas.enums import InterviewStatus
from models.DB_schemas.stats import RecruitmentStats

logger = logging.getLogger(__name__)

PENDING_STATUSES = {InterviewStatus.SCHEDULED.value, InterviewStatus.IN_PROGRESS.value}


class StatsController(BaseController):
    """
    Recruitment statistics, recomputed from the records on every request.

    The stored snapshot is only a cache of the last computation; nothing
    ever increments it in place.
    """

    def __init__(self, run_model: RunModel, candidate_model: CandidateModel,
                 interview_model: InterviewModel, stats_model: StatsModel, capabilities=None):
        super().__init__(capabilities)
        self.run_model = run_model
        self.candidate_model = candidate_model
        self.interview_model = interview_model
        self.stats_model = stats_model

    @staticmethod
    def compute(candidates: list[Candidate], interviews: list[Interview], total_runs: int) -> RecruitmentStats:
        shortlisted = [candidate for candidate in candidates if candidate.shortlisted]
        average = 0.0
        if shortlisted:
            average = round(sum(c.ai.match_score for c in shortlisted) / len(shortlisted), 2)

        return RecruitmentStats(
            total_candidates=len(candidates),
            shortlisted_candidates=len(shortlisted),
            interviews_completed=sum(1 for i in interviews if i.status == InterviewStatus.COMPLETED.value),
            interviews_scheduled=sum(1 for i in interviews if i.status in PENDING_STATUSES),
            total_runs=total_runs,
            average_match_score=average,
        )

    async def refresh(self) -> RecruitmentStats:
        candidates = await self.candidate_model.get_candidates()
        interviews = await self.interview_model.get_recent_interviews()
        total_runs = await self.run_model.count_documents()

        stats = self.compute(candidates, interviews, total_runs)
        try:
            await self.stats_model.save_snapshot(stats)
        except Exception as e:
            logger.warning(f"Failed to cache the statistics snapshot: {e}")
        return stats

    async def cached(self):
        """The last stored snapshot, or None when nothing was ever computed."""
        return await self.stats_model.get_snapshot()
