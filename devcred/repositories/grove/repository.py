from __future__ import annotations

import logging
from datetime import datetime, timezone

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from devcred.core.collections import CollectionNames
from devcred.models.grove.document import GroveKey, GroveUriDocument
from devcred.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class GroveUriRepository(BaseRepository):
    """MongoDB repository for the ``grove_uris`` collection.

    One document per :class:`GroveKey`; writes replace the URI in place.
    """

    COLLECTION_NAME = CollectionNames.GROVE_URIS

    async def ensure_indexes(self) -> None:
        await self._col.create_index("key", unique=True)

    async def set_uri(self, key: GroveKey, uri: str) -> GroveUriDocument:
        """Record *uri* as the latest upload for *key*.

        ``find_one_and_update`` with ``upsert=True`` keeps a single document
        per key under concurrent writes; ``updated_at`` is set server-side.
        """
        now = datetime.now(timezone.utc)
        try:
            updated = await self._col.find_one_and_update(
                {"key": key.value},
                {"$set": {"key": key.value, "uri": uri, "updated_at": now}},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as exc:
            logger.exception("MongoDB upsert failed for grove key=%s", key.value)
            raise RuntimeError("Database write error") from exc

        updated.pop("_id", None)
        return GroveUriDocument(**updated)

    async def list_uris(self) -> list[GroveUriDocument]:
        """Return every stored registry entry."""
        try:
            rows = await self._col.find({}, {"_id": False}).to_list(length=None)
        except PyMongoError as exc:
            logger.exception("MongoDB read failed for grove URIs")
            raise RuntimeError("Database read error") from exc
        return [GroveUriDocument(**row) for row in rows]
