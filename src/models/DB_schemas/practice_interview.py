from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from .types import PyObjectId, new_object_id
from utils.helpers import utc_now_iso


class PracticeInterview(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    role: str = Field(..., min_length=1)
    level: str = Field(default="")
    questions: list[str] = Field(default_factory=list)
    techstack: list[str] = Field(default_factory=list)
    type: str = Field(default="")
    user_id: Optional[str] = Field(default=None)
    finalized: bool = Field(default=False)
    created_at: str = Field(default_factory=utc_now_iso)
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "practice_user_created_index",
                "fields": [("user_id", 1), ("created_at", -1)],
                "unique": False
            },
            {
                "name": "practice_finalized_created_index",
                "fields": [("finalized", 1), ("created_at", -1)],
                "unique": False
            }
        ]
