import logging
from pymongo import IndexModel
from pymongo.errors import OperationFailure
from utils import get_settings

logger = logging.getLogger(__name__)


class BaseDataModel:
    """
    Shared plumbing for the collection models.

    A model built with db_client=None runs detached: reads come back empty
    and writes are skipped with a warning, so the API keeps answering when
    no document store is configured or reachable.
    """
    collection_setting_key: str = ""
    schema = None

    def __init__(self, db_client, **kwargs):
        self.db_client = db_client
        self.settings = get_settings()
        collection_name = getattr(self.settings, self.collection_setting_key)
        self.collection = self.db_client[collection_name] if db_client is not None else None

        for key, value in kwargs.items():
            setattr(self, key, value)

    @classmethod
    async def create_instance(cls, db_client: object):
        instance = cls(db_client=db_client)
        await instance.init_collection()
        return instance

    @property
    def detached(self) -> bool:
        return self.collection is None

    async def init_collection(self):
        if self.detached or self.schema is None:
            return
        models = [
            IndexModel(
                index['fields'],
                name=index['name'],
                unique=index.get('unique', False)
            ) for index in self.schema.get_indexes()
        ]
        if models:
            try:
                await self.collection.create_indexes(models)
            except Exception as e:
                logger.warning(f"Failed to create indexes for {self.__class__.__name__}: {e}")

    def _skip_write(self, action: str) -> bool:
        if self.detached:
            logger.warning(f"{self.__class__.__name__}: store unavailable, skipped {action}")
            return True
        return False

    async def _insert(self, document):
        if self._skip_write("insert"):
            return document
        data = document.model_dump(by_alias=True, exclude_none=True)
        await self.collection.insert_one(data)
        return document

    async def _find_one(self, filter: dict):
        if self.detached:
            return None
        return await self.collection.find_one(filter)

    async def _find_newest(self, filter: dict, hint: str = None, limit: int = None,
                           sort_field: str = "created_at") -> list[dict]:
        """
        Records matching `filter`, newest first.

        The query carries an index hint when one is given. If the server
        rejects it because the index does not exist yet, the records are
        scanned without a hint and sorted here instead.
        """
        if self.detached:
            return []

        cursor = self.collection.find(filter).sort(sort_field, -1)
        if hint:
            cursor = cursor.hint(hint)
        if limit:
            cursor = cursor.limit(limit)
        try:
            return await cursor.to_list(length=limit)
        except OperationFailure as e:
            if not hint:
                raise
            logger.warning(f"Index '{hint}' unavailable, falling back to an in-memory sort: {e}")

        records = await self.collection.find(filter).to_list(length=None)
        records.sort(key=lambda record: record.get(sort_field) or "", reverse=True)
        return records[:limit] if limit else records

    async def count_documents(self, filter: dict = None):
        if self.detached:
            return 0
        return await self.collection.count_documents(filter or {})
