from __future__ import annotations

import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from devcred.core.config import settings

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the Motor client for the process.

    The lifespan hook opens and closes it::

        await db.connect()
        ...
        await db.disconnect()

    Repositories never touch the client directly; they receive a
    collection through ``get_collection``.
    """

    def __init__(self) -> None:
        self._client: AsyncIOMotorClient | None = None

    async def connect(self) -> None:
        """Open the Motor client and verify connectivity with a ping."""
        self._client = AsyncIOMotorClient(
            settings.mongo_uri,
            maxPoolSize=settings.mongo_max_pool_size,
        )
        await self._client.admin.command("ping")
        logger.info("Connected to MongoDB database %r.", settings.mongo_db)

    async def disconnect(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None
            logger.info("Disconnected from MongoDB.")

    async def ping(self) -> bool:
        """Return ``True`` when the server answers a ping."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as exc:
            logger.warning("MongoDB ping failed: %s", exc)
            return False
        return True

    @property
    def database(self) -> AsyncIOMotorDatabase:
        if self._client is None:
            raise RuntimeError(
                "DatabaseManager is not connected. Call connect() first."
            )
        return self._client[settings.mongo_db]

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        return self.database[name]


#: Shared by the lifespan hook and the route dependencies.
db: DatabaseManager = DatabaseManager()
