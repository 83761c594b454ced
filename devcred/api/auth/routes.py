from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from devcred.models.auth.schemas import OAuthCallbackRequest, OAuthToken
from devcred.workers.fetcher import FetchError
from devcred.workers.github import OAuthError, exchange_code

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


async def _exchange(code: str | None) -> OAuthToken:
    """Shared body of both callback routes; maps failures to HTTP errors."""
    if not code:
        raise HTTPException(status_code=400, detail="Authorization code is required")
    try:
        return await exchange_code(code)
    except OAuthError as exc:
        raise HTTPException(
            status_code=400,
            detail={
                "message": "Failed to authenticate with GitHub",
                "error": exc.error,
                "error_description": exc.description,
            },
        )
    except FetchError as exc:
        logger.error("GitHub token endpoint call failed: %s", exc)
        raise HTTPException(
            status_code=500,
            detail={"message": "Error exchanging code for token", "error": str(exc)},
        )


@router.get(
    "/github/oauth/callback",
    response_model=OAuthToken,
    summary="Exchange a GitHub OAuth code passed in the query string",
)
async def oauth_callback(code: str | None = None, state: str | None = None) -> OAuthToken:
    logger.info("GitHub OAuth callback received (GET), state=%s", state)
    return await _exchange(code)


@router.post(
    "/auth/callback",
    response_model=OAuthToken,
    summary="Exchange a GitHub OAuth code passed in the request body",
)
async def auth_callback(request: OAuthCallbackRequest) -> OAuthToken:
    """Exchange the frontend's authorization code for an access token.

    - **200**: token obtained
    - **400**: code missing, or GitHub rejected it
    - **500**: GitHub could not be reached
    """
    return await _exchange(request.code)
