from __future__ import annotations

import logging
from typing import Any

from devcred.core.config import settings
from devcred.services.metadata.cache import MetadataCache
from devcred.workers.fetcher import FetchError, fetch_json

logger = logging.getLogger(__name__)

_MISS = object()


class MissingURIError(ValueError):
    """Raised when a resolution request carries no metadata URI."""


class ResolutionError(Exception):
    """Raised when a metadata document cannot be fetched or parsed."""


def to_gateway_url(
    uri: str,
    gateway_host: str | None = None,
    scheme: str | None = None,
) -> str:
    """Map ``<scheme>://<hash>`` to ``https://<gateway>/<scheme>/<hash>``.

    Any other URI is returned unchanged.
    """
    gateway_host = gateway_host or settings.ipfs_gateway_host
    scheme = scheme or settings.storage_scheme
    prefix = f"{scheme}://"
    if uri.startswith(prefix):
        return f"https://{gateway_host}/{scheme}/{uri[len(prefix):]}"
    return uri


class MetadataResolver:
    """Resolves NFT metadata URIs to JSON documents through a shared cache.

    The cache is keyed by the URI exactly as the caller supplied it, so
    token ids that share a URI share one cached document.
    """

    def __init__(self, cache: MetadataCache) -> None:
        self._cache = cache

    async def resolve(self, token_id: str, uri: str | None) -> Any:
        """Return the metadata document behind *uri*.

        Raises:
            MissingURIError: *uri* is empty or missing.
            ResolutionError: the fetch failed, the server answered non-2xx
                or the body is not JSON.  Nothing is cached in that case.
        """
        if not uri:
            raise MissingURIError("Missing URI parameter")

        cached = self._cache.get(uri, _MISS)
        if cached is not _MISS:
            logger.debug("Metadata cache hit for token %s", token_id)
            return cached

        fetch_url = to_gateway_url(uri)
        logger.info("Fetching metadata for token %s from %s", token_id, fetch_url)
        try:
            document = await fetch_json(fetch_url)
        except FetchError as exc:
            logger.warning("Metadata resolution failed for %s: %s", uri, exc)
            raise ResolutionError("Failed to resolve metadata") from exc

        if isinstance(document, dict) and isinstance(document.get("image"), str):
            document["image"] = to_gateway_url(document["image"])

        self._cache.set(uri, document)
        return document

    def invalidate_all(self) -> None:
        """Drop every cached document."""
        self._cache.clear()
        logger.info("Metadata cache cleared.")
