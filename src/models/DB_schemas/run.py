from pydantic import BaseModel, Field, ConfigDict
from .types import PyObjectId, new_object_id
from .enums import RunStatus
from utils.helpers import utc_now_iso


class ShortlistEntry(BaseModel):
    id: str
    candidate_name: str
    email: str
    match_score: int


class Run(BaseModel):
    id: PyObjectId = Field(alias="_id", default_factory=new_object_id)
    job_description: str = Field(..., min_length=1)
    created_at: str = Field(default_factory=utc_now_iso)
    total: int = Field(default=0, ge=0)
    processed: int = Field(default=0, ge=0)
    failed: int = Field(default=0, ge=0)
    shortlisted: list[ShortlistEntry] = Field(default_factory=list)
    run_status: RunStatus = Field(default=RunStatus.PROCESSING.value)
    model_config: ConfigDict = ConfigDict(
        arbitrary_types_allowed=True,
        populate_by_name=True,
        use_enum_values=True
    )

    @classmethod
    def get_indexes(cls):
        return [
            {
                "name": "run_created_at_index",
                "fields": [("created_at", -1)],
                "unique": False
            }
        ]
