from pydantic import BaseModel, Field
from utils.helpers import utc_now_iso


class RecruitmentStats(BaseModel):
    total_candidates: int = 0
    shortlisted_candidates: int = 0
    interviews_completed: int = 0
    interviews_scheduled: int = 0
    total_runs: int = 0
    average_match_score: float = 0.0
    last_updated: str = Field(default_factory=utc_now_iso)
