from pydantic import BaseModel, Field, ConfigDict
from .types import PyObjectId, new_object_id
from .candidate import Score
from utils.helpers import utc_now_iso


class CategoryScore(BaseModel):
    name: str
    score: Score = Field(..., ge=0, le=100)
    comment: str = Field(default="")


class FeedbackAssessment(BaseModel):
    """Structured verdict of the evaluation model for one practice transcript."""
    total_score: Score = Field(..., ge=0, le=100)
    category_scores: list[CategoryScore] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    final_assessment: str = Field(default="")


class Feedback(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    interview_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    total_score: int = Field(..., ge=0, le=100)
    category_scores: list[CategoryScore] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    final_assessment: str = Field(default="")
    created_at: str = Field(default_factory=utc_now_iso)
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "feedback_interview_user_index",
                "fields": [("interview_id", 1), ("user_id", 1)],
                "unique": False
            }
        ]
