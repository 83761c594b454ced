"""Common plumbing for the MongoDB repositories.

A repository subclasses ``BaseRepository``, names its collection in
``CollectionNames`` and declares its indexes in ``ensure_indexes``.  The
lifespan hook passes every repository class to ``ensure_all_indexes``.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import ClassVar, Iterable, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection

from devcred.core.database import DatabaseManager

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseRepository")


class BaseRepository(ABC):
    """Binds a repository to its Motor collection."""

    COLLECTION_NAME: ClassVar[str]

    def __init__(self, collection: AsyncIOMotorCollection) -> None:
        self._col = collection

    @classmethod
    def from_db(cls: type[T], db: DatabaseManager) -> T:
        return cls(db.get_collection(cls.COLLECTION_NAME))

    async def ensure_indexes(self) -> None:
        """Create collection indexes.  No-op unless overridden."""


async def ensure_all_indexes(
    db: DatabaseManager, repositories: Iterable[type[BaseRepository]]
) -> None:
    """Run ``ensure_indexes`` for each repository class (idempotent)."""
    for repo_cls in repositories:
        await repo_cls.from_db(db).ensure_indexes()
        logger.debug("Indexes ensured for %s", repo_cls.COLLECTION_NAME)
