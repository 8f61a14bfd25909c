from pydantic import BaseModel, AliasChoices, Field


class TranscriptMessage(BaseModel):
    role: str
    content: str


class CreateFeedbackRequest(BaseModel):
    interview_id: str = Field(..., min_length=1, validation_alias=AliasChoices("interview_id", "interviewId"))
    user_id: str = Field(..., min_length=1, validation_alias=AliasChoices("user_id", "userId"))
    transcript: list[TranscriptMessage] = Field(default_factory=list)
