from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime, timezone
from .types import PyObjectId, new_object_id

class UsageLog(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    run_id: str = Field(..., min_length=1)
    file_id: Optional[str] = Field(default=None, description="Candidate or interview id this call relates to")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    model_id: str = Field(..., min_length=1)
    action_type: str = Field(..., description="e.g. 'screening', 'interview_report', 'feedback'")
    prompt_tokens: int = Field(default=0)
    completion_tokens: int = Field(default=0)
    total_tokens: int = Field(default=0)
    latency_ms: int = Field(default=0, description="LLM call duration in milliseconds")
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "usage_run_index",
                "fields": [("run_id", 1)],
                "unique": False
            },
            {
                "name": "usage_timestamp_index",
                "fields": [("timestamp", -1)],
                "unique": False
            }
        ]
