from pydantic import BaseModel, Field, ConfigDict
from typing import Literal, Optional
from .types import PyObjectId, new_object_id
from .candidate import Score
from .enums import InterviewStatus
from utils.helpers import utc_now_iso


class TranscriptTurn(BaseModel):
    role: str
    content: str


class InterviewReport(BaseModel):
    """Structured verdict of the evaluation model for one voice interview."""
    overall_score: Score = Field(..., ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    recommended_next_step: Literal["onsite", "hr", "reject"]
    detailed_notes: str = Field(default="")


class Interview(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    candidate_id: str = Field(..., min_length=1)
    candidate_email: str = Field(..., min_length=1)
    run_id: str = Field(..., min_length=1)
    scheduled_at: str = Field(..., min_length=1)
    calendly_event_uri: Optional[str] = Field(default=None)
    voice_session_id: Optional[str] = Field(default=None)
    transcript: list[TranscriptTurn] = Field(default_factory=list)
    recording_url: Optional[str] = Field(default=None)
    report: Optional[InterviewReport] = Field(default=None)
    feedback_id: Optional[str] = Field(default=None)
    status: InterviewStatus = Field(default=InterviewStatus.SCHEDULED.value)
    error: Optional[str] = Field(default=None)
    created_at: str = Field(default_factory=utc_now_iso)
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        use_enum_values=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "interview_created_at_index",
                "fields": [("created_at", -1)],
                "unique": False
            },
            {
                "name": "interview_candidate_id_index",
                "fields": [("candidate_id", 1)],
                "unique": False
            },
            {
                "name": "interview_status_index",
                "fields": [("status", 1)],
                "unique": False
            }
        ]
