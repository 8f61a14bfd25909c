from .BaseDataModel import BaseDataModel
from .DB_schemas.feedback import Feedback


class FeedbackModel(BaseDataModel):
    collection_setting_key: str = "FEEDBACK_COLLECTION"
    schema = Feedback

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def create_feedback(self, feedback: Feedback) -> Feedback:
        return await self._insert(feedback)

    async def get_feedback(self, interview_id: str, user_id: str):
        records = await self._find_newest(
            {"interview_id": interview_id, "user_id": user_id}, limit=1
        )
        if records:
            return Feedback(**records[0])
        return None
