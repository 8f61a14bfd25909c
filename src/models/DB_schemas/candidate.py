from pydantic import BaseModel, Field, ConfigDict, BeforeValidator, field_validator
from typing import Annotated, Literal, Optional
from .types import PyObjectId, new_object_id
from utils.helpers import utc_now_iso


def _round_score(v):
    if isinstance(v, float):
        return int(round(v))
    return v


Score = Annotated[int, BeforeValidator(_round_score)]


class ScoringBreakdown(BaseModel):
    skills_match: Score = Field(..., ge=0, le=100)
    experience_match: Score = Field(..., ge=0, le=100)
    role_alignment: Score = Field(..., ge=0, le=100)
    education_match: Score = Field(..., ge=0, le=100)

    def dimensions(self) -> list[int]:
        return [self.skills_match, self.experience_match, self.role_alignment, self.education_match]


class DetailedFeedback(BaseModel):
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    specific_gaps: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    score_explanation: str = Field(default="")


class CandidateAnalysis(BaseModel):
    """Structured verdict of the screening model for one resume."""
    candidate_name: str = Field(default="Unknown")
    email: Optional[str] = Field(default=None)
    phone: Optional[str] = Field(default=None)
    top_skills: list[str] = Field(default_factory=list)
    summary: str = Field(default="", max_length=200)
    match_score: Score = Field(..., ge=0, le=100)
    recommended: Literal["yes", "no"]
    scoring_breakdown: ScoringBreakdown
    matched_skills: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    experience_level: str = Field(default="Unknown")
    detailed_feedback: DetailedFeedback = Field(default_factory=DetailedFeedback)

    @field_validator("summary", mode="before")
    @classmethod
    def clip_summary(cls, v):
        # the model occasionally overruns the limit by a few characters
        return (v or "")[:200]

    @field_validator("email", "phone", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v


class Candidate(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    run_id: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    text_snippet: str = Field(default="")
    ai: CandidateAnalysis
    email: Optional[str] = Field(default=None)
    shortlisted: bool = Field(default=False)
    created_at: str = Field(default_factory=utc_now_iso)
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "candidate_run_id_index",
                "fields": [("run_id", 1)],
                "unique": False
            },
            {
                "name": "candidate_email_index",
                "fields": [("email", 1)],
                "unique": False
            },
            {
                "name": "candidate_created_at_index",
                "fields": [("created_at", -1)],
                "unique": False
            }
        ]
