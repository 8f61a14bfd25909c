from .BaseDataModel import BaseDataModel
from .DB_schemas.practice_interview import PracticeInterview


class PracticeInterviewModel(BaseDataModel):
    collection_setting_key: str = "PRACTICE_INTERVIEWS_COLLECTION"
    schema = PracticeInterview

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def get_by_user(self, user_id: str) -> list[PracticeInterview]:
        records = await self._find_newest(
            {"user_id": user_id}, hint="practice_user_created_index"
        )
        return [PracticeInterview(**record) for record in records]

    async def get_latest(self, user_id: str, limit: int = 20) -> list[PracticeInterview]:
        """Finalized interviews created by other users, newest first."""
        records = await self._find_newest(
            {"finalized": True, "user_id": {"$ne": user_id}},
            hint="practice_finalized_created_index",
            limit=limit,
        )
        return [PracticeInterview(**record) for record in records]

    async def get_by_id(self, interview_id: str):
        record = await self._find_one({"_id": interview_id})
        if record:
            return PracticeInterview(**record)
        return None
