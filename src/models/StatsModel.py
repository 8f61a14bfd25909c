from .BaseDataModel import BaseDataModel
from .DB_schemas.stats import RecruitmentStats
from utils.constants import STATS_DOCUMENT_ID


class StatsModel(BaseDataModel):
    collection_setting_key: str = "STATS_COLLECTION"

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def save_snapshot(self, stats: RecruitmentStats) -> RecruitmentStats:
        if self._skip_write("stats snapshot"):
            return stats
        await self.collection.update_one(
            {"_id": STATS_DOCUMENT_ID},
            {"$set": stats.model_dump()},
            upsert=True
        )
        return stats

    async def get_snapshot(self):
        record = await self._find_one({"_id": STATS_DOCUMENT_ID})
        if record:
            return RecruitmentStats(**record)
        return None
