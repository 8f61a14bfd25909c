import logging
from .BaseDataModel import BaseDataModel
from .DB_schemas.interview import Interview
from .DB_schemas.enums import InterviewStatus, can_transition
from utils.exceptions import InvalidTransition

logger = logging.getLogger(__name__)


class InterviewModel(BaseDataModel):
    collection_setting_key: str = "INTERVIEWS_COLLECTION"
    schema = Interview

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def create_interview(self, interview: Interview) -> Interview:
        return await self._insert(interview)

    async def get_interview_by_id(self, interview_id: str):
        record = await self._find_one({"_id": interview_id})
        if record:
            return Interview(**record)
        return None

    async def get_recent_interviews(self, limit: int = None) -> list[Interview]:
        records = await self._find_newest({}, hint="interview_created_at_index", limit=limit)
        return [Interview(**record) for record in records]

    async def transition(self, interview_id: str, current, target, **fields) -> None:
        """
        Move an interview from `current` to `target`, writing `fields` with it.

        The update only matches while the stored status still equals
        `current`, so two runners cannot both claim the same interview.
        """
        current, target = InterviewStatus(current), InterviewStatus(target)
        if not can_transition(current, target):
            raise InvalidTransition(current.value, target.value)
        if self._skip_write(f"transition to {target.value}"):
            return

        result = await self.collection.update_one(
            {"_id": interview_id, "status": current.value},
            {"$set": {"status": target.value, **fields}}
        )
        if result.matched_count == 0:
            raise InvalidTransition(current.value, target.value)
        logger.info(f"Interview {interview_id}: {current.value} -> {target.value}")
