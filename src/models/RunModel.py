from .BaseDataModel import BaseDataModel
from .DB_schemas.run import Run, ShortlistEntry


class RunModel(BaseDataModel):
    collection_setting_key: str = "RUNS_COLLECTION"
    schema = Run

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def create_run(self, run: Run) -> Run:
        return await self._insert(run)

    async def get_run_by_id(self, run_id: str):
        record = await self._find_one({"_id": run_id})
        if record:
            return Run(**record)
        return None

    async def get_recent_runs(self, limit: int = None) -> list[Run]:
        records = await self._find_newest({}, hint="run_created_at_index", limit=limit)
        return [Run(**record) for record in records]

    async def finish_run(self, run: Run) -> Run:
        """Write the final counters, shortlist and status of a run."""
        if self._skip_write("run update"):
            return run
        await self.collection.update_one(
            {"_id": run.id},
            {"$set": {
                "total": run.total,
                "processed": run.processed,
                "failed": run.failed,
                "shortlisted": [entry.model_dump() for entry in run.shortlisted],
                "run_status": run.run_status,
            }}
        )
        return run
