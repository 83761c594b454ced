"""GitHub HTTP calls: the OAuth token exchange and REST API reads.

The token exchange is sent exactly once (an authorization code can only be
redeemed once).  REST reads are idempotent and go through
``fetch_json_with_retry``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from devcred.core.config import settings
from devcred.models.auth.schemas import OAuthToken
from devcred.workers.fetcher import FetchError, fetch_json_with_retry, post_json

logger = logging.getLogger(__name__)

_API_HEADERS = {
    "Accept": "application/vnd.github+json",
    "X-GitHub-Api-Version": "2022-11-28",
}


class OAuthError(Exception):
    """GitHub refused the code exchange or returned no access token."""

    def __init__(self, error: str, description: str | None = None) -> None:
        super().__init__(description or error)
        self.error = error
        self.description = description


class GitHubNotFoundError(Exception):
    """The requested GitHub user does not exist."""


def _redact(token: str) -> str:
    return f"{token[:5]}..."


async def exchange_code(code: str) -> OAuthToken:
    """Trade an OAuth authorization *code* for an access token.

    Raises:
        OAuthError: GitHub answered with an ``error`` or without a token.
        FetchError: the token endpoint could not be reached or did not
            answer with JSON.
    """
    logger.info("Exchanging GitHub OAuth code %s", _redact(code))
    data = await post_json(
        settings.github_oauth_url,
        {
            "client_id": settings.github_client_id,
            "client_secret": settings.github_client_secret,
            "code": code,
            "redirect_uri": settings.github_redirect_uri,
        },
        headers={"Accept": "application/json"},
    )
    if not isinstance(data, dict):
        raise FetchError("GitHub token endpoint returned an unexpected body")
    if data.get("error"):
        logger.warning("GitHub OAuth error: %s", data.get("error"))
        raise OAuthError(str(data["error"]), data.get("error_description"))
    if not data.get("access_token"):
        logger.warning("No access token in GitHub response (keys: %s)", sorted(data))
        raise OAuthError("missing_token", "GitHub did not provide an access token")

    token = OAuthToken(
        access_token=str(data["access_token"]),
        token_type=str(data.get("token_type") or "bearer"),
        scope=str(data.get("scope") or ""),
    )
    logger.info("GitHub access token obtained (%s)", _redact(token.access_token))
    return token


async def _api_get(path: str, token: str | None = None) -> Any:
    headers = dict(_API_HEADERS)
    token = token or settings.github_token
    if token:
        headers["Authorization"] = f"Bearer {token}"
    url = f"{settings.github_api_url.rstrip('/')}{path}"
    try:
        return await fetch_json_with_retry(url, headers=headers)
    except FetchError as exc:
        if exc.status_code == 404:
            raise GitHubNotFoundError(path) from exc
        raise


async def get_user(username: str, token: str | None = None) -> dict[str, Any]:
    return await _api_get(f"/users/{quote(username)}", token)


async def get_repositories(username: str, token: str | None = None) -> list[dict[str, Any]]:
    return await _api_get(
        f"/users/{quote(username)}/repos?sort=updated&per_page=100", token
    )


async def get_public_events(username: str, token: str | None = None) -> list[dict[str, Any]]:
    return await _api_get(
        f"/users/{quote(username)}/events/public?per_page=100", token
    )
