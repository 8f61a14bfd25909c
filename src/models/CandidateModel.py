from typing import Optional
from .BaseDataModel import BaseDataModel
from .DB_schemas.candidate import Candidate


class CandidateModel(BaseDataModel):
    collection_setting_key: str = "CANDIDATES_COLLECTION"
    schema = Candidate

    def __init__(self, db_client: object):
        super().__init__(db_client=db_client)

    async def create_candidate(self, candidate: Candidate) -> Candidate:
        return await self._insert(candidate)

    async def get_candidate_by_id(self, candidate_id: str):
        record = await self._find_one({"_id": candidate_id})
        if record:
            return Candidate(**record)
        return None

    async def get_candidate_by_email(self, email: str):
        """Most recent candidate registered under `email`, case-insensitively."""
        records = await self._find_newest(
            {"email": email.strip().lower()}, hint="candidate_email_index", limit=1
        )
        if records:
            return Candidate(**records[0])
        return None

    async def get_candidates(self, run_id: str = None, shortlisted: Optional[bool] = None) -> list[Candidate]:
        filter = {}
        if run_id:
            filter["run_id"] = run_id
        if shortlisted is not None:
            filter["shortlisted"] = shortlisted
        records = await self._find_newest(filter)
        return [Candidate(**record) for record in records]
