from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from devcred.models.common import ErrorResponse
from devcred.models.metadata.schemas import ClearCacheResponse
from devcred.services.metadata.service import (
    MetadataResolver,
    MissingURIError,
    ResolutionError,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/metadata", tags=["metadata"])


# ---------------------------------------------------------------------------
# Dependency
# ---------------------------------------------------------------------------


def _get_resolver(request: Request) -> MetadataResolver:
    """Build a resolver around the cache owned by the running application."""
    return MetadataResolver(request.app.state.metadata_cache)


# ---------------------------------------------------------------------------
# POST /metadata/clear-cache
# ---------------------------------------------------------------------------


@router.post(
    "/clear-cache",
    response_model=ClearCacheResponse,
    summary="Drop every cached metadata document",
)
async def clear_cache(
    resolver: MetadataResolver = Depends(_get_resolver),
) -> ClearCacheResponse:
    resolver.invalidate_all()
    return ClearCacheResponse()


# ---------------------------------------------------------------------------
# GET /metadata/{token_id}
# ---------------------------------------------------------------------------


@router.get(
    "/{token_id}",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Resolve the metadata document of an NFT",
)
async def get_metadata(
    token_id: str,
    uri: str | None = None,
    resolver: MetadataResolver = Depends(_get_resolver),
) -> Any:
    """Return the JSON metadata document that *uri* points to.

    ``ipfs://`` URIs, and an ``ipfs://`` ``image`` field inside the document,
    are rewritten to the HTTPS gateway.  Documents are cached by URI.

    - **200**: the metadata document
    - **400**: ``uri`` query parameter missing or empty
    - **500**: the document could not be fetched or is not JSON
    """
    try:
        return await resolver.resolve(token_id, uri)
    except MissingURIError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except ResolutionError as exc:
        raise HTTPException(status_code=500, detail=str(exc))
