from __future__ import annotations

import logging

from devcred.models.grove.document import GroveKey, GroveUriDocument
from devcred.models.grove.schemas import GroveUrisResponse
from devcred.repositories.grove.repository import GroveUriRepository

logger = logging.getLogger(__name__)


class GroveService:
    """Tracks the ``lens://`` URI of the latest Grove upload per data set."""

    def __init__(self, repo: GroveUriRepository) -> None:
        self._repo = repo

    async def set_uri(self, key: GroveKey, uri: str) -> GroveUriDocument:
        doc = await self._repo.set_uri(key, uri)
        logger.info("Grove URI for %s updated to %s", key.value, uri)
        return doc

    async def list_uris(self) -> GroveUrisResponse:
        """Return every data set with its URI; ``uploaded_at`` is the latest write."""
        docs = await self._repo.list_uris()
        uris = {doc.key.value: doc.uri for doc in docs}
        uploaded_at = max((doc.updated_at for doc in docs), default=None)
        return GroveUrisResponse(**uris, uploaded_at=uploaded_at)
