from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from devcred.core.database import db
from devcred.models.grove.schemas import (
    GroveUriUpdateRequest,
    GroveUriUpdateResponse,
    GroveUrisResponse,
)
from devcred.repositories.grove.repository import GroveUriRepository
from devcred.services.grove.service import GroveService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/grove", tags=["grove"])


def _get_service() -> GroveService:
    return GroveService(GroveUriRepository.from_db(db))


@router.post(
    "/uri",
    response_model=GroveUriUpdateResponse,
    summary="Record the latest Grove URI of a data set",
)
async def update_uri(
    request: GroveUriUpdateRequest,
    service: GroveService = Depends(_get_service),
) -> GroveUriUpdateResponse:
    """Store ``uri`` as the latest upload for ``key``.

    - **200**: stored
    - **422**: unknown key, or ``uri`` is not a ``lens://`` URI
    - **500**: database failure
    """
    try:
        doc = await service.set_uri(request.key, request.uri)
    except Exception as exc:
        logger.error("POST /grove/uri DB error for %s: %s", request.key.value, exc)
        raise HTTPException(status_code=500, detail="Failed to update Grove URI")
    return GroveUriUpdateResponse(
        message=f"Successfully updated Grove URI for {doc.key.value}",
        key=doc.key,
        uri=doc.uri,
    )


@router.get(
    "/uris",
    response_model=GroveUrisResponse,
    summary="List the latest Grove URI of every data set",
)
async def list_uris(service: GroveService = Depends(_get_service)) -> GroveUrisResponse:
    try:
        return await service.list_uris()
    except Exception as exc:
        logger.error("GET /grove/uris DB error: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to get Grove URIs")
