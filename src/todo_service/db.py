from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from .models import TodoEntity
from .repositories import Repository
from .settings import Settings

logger = logging.getLogger(__name__)

# Never hand MongoDB's internal ObjectId back to callers
_PROJECTION = {"_id": 0}


class MongoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface.

    One instance (and one AsyncMongoClient connection pool) is shared by every
    request for the life of the process.
    """

    def __init__(self, collection: AsyncCollection, client: Optional[AsyncMongoClient] = None) -> None:
        self._collection = collection
        self._client = client

    @classmethod
    async def connect(cls, settings: Settings) -> "MongoRepository":
        """
        Open a client, check the server answers, and return a repository bound
        to ``settings.database_name`` / ``settings.collection_name``.

        Raises:
            PyMongoError: if the connection string is invalid or the server is unreachable.
        """
        client: AsyncMongoClient = AsyncMongoClient(
            settings.db_connection_url,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
            tz_aware=True,
        )
        try:
            await client.admin.command("ping")
            collection = client[settings.database_name][settings.collection_name]
            await collection.create_index([("id", ASCENDING)], unique=True)
        except PyMongoError:
            await client.close()
            raise
        return cls(collection, client)

    async def list(self) -> List[TodoEntity]:
        cursor = self._collection.find({}, _PROJECTION)
        return await cursor.to_list(None)

    async def get(self, todo_id: str) -> Optional[TodoEntity]:
        return await self._collection.find_one({"id": todo_id}, _PROJECTION)

    async def insert(self, entity: TodoEntity) -> None:
        # insert_one adds "_id" to the document it is given
        await self._collection.insert_one(dict(entity))

    async def update(self, todo_id: str, fields: Mapping[str, Any]) -> None:
        await self._collection.update_one({"id": todo_id}, {"$set": dict(fields)})

    async def delete(self, todo_id: str) -> None:
        await self._collection.delete_one({"id": todo_id})

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()


# PUBLIC_INTERFACE
async def connect_or_exit(settings: Settings) -> MongoRepository:
    """
    Connect to MongoDB or terminate the process.

    The service never serves requests without a store: a missing
    DB_CONNECTION_URL or any connection failure is logged and turned into
    ``SystemExit(1)``.
    """
    if not settings.db_connection_url:
        logger.error("MongoDB connection error. DB_CONNECTION_URL is not set.")
        raise SystemExit(1)

    try:
        repository = await MongoRepository.connect(settings)
    except PyMongoError as err:
        logger.error("MongoDB connection error. Please make sure MongoDB is running. %s", err)
        raise SystemExit(1) from err

    logger.info("Connected to `%s`!", settings.database_name)
    return repository
