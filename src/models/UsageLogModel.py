from .BaseDataModel import BaseDataModel
from .DB_schemas.usage_log import UsageLog


class UsageLogModel(BaseDataModel):
    collection_setting_key: str = "USAGE_LOGS_COLLECTION"
    schema = UsageLog

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def log_usage(self, usage_data: UsageLog):
        await self._insert(usage_data)
        return usage_data.id

    async def _group_by(self, run_id: str, key) -> list[dict]:
        pipeline = [
            {"$match": {"run_id": run_id}},
            {"$group": {
                "_id": key,
                "count": {"$sum": 1},
                "input_tokens": {"$sum": "$prompt_tokens"},
                "output_tokens": {"$sum": "$completion_tokens"},
                "total_tokens": {"$sum": "$total_tokens"},
                "avg_latency_ms": {"$avg": "$latency_ms"}
            }}
        ]
        cursor = await self.collection.aggregate(pipeline)
        return await cursor.to_list(length=100)

    @staticmethod
    def _bucket(group: dict) -> dict:
        return {
            "count": group["count"],
            "input_tokens": group["input_tokens"],
            "output_tokens": group["output_tokens"],
            "total_tokens": group["total_tokens"],
            "avg_latency_ms": round(group["avg_latency_ms"] or 0)
        }

    async def get_run_summary(self, run_id: str) -> dict:
        """Token and latency totals of a run, broken down by action type and model."""
        summary = {
            "run_id": run_id,
            "total_requests": 0,
            "total_input_tokens": 0,
            "total_output_tokens": 0,
            "total_tokens": 0,
            "average_latency_ms": 0,
            "by_action": {},
            "by_model": {}
        }
        if self.detached:
            return summary

        totals = await self._group_by(run_id, None)
        if totals:
            t = self._bucket(totals[0])
            summary.update({
                "total_requests": t["count"],
                "total_input_tokens": t["input_tokens"],
                "total_output_tokens": t["output_tokens"],
                "total_tokens": t["total_tokens"],
                "average_latency_ms": t["avg_latency_ms"],
            })

        for group in await self._group_by(run_id, "$action_type"):
            summary["by_action"][group["_id"]] = self._bucket(group)
        for group in await self._group_by(run_id, "$model_id"):
            summary["by_model"][group["_id"]] = self._bucket(group)

        return summary
