from pydantic import BaseModel, AliasChoices, Field
from typing import Optional


class RunInterviewRequest(BaseModel):
    interview_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("interview_id", "interviewId")
    )
