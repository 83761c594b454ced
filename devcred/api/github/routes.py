from __future__ import annotations

import logging
from typing import Awaitable, TypeVar

from fastapi import APIRouter, Depends, Header, HTTPException

from devcred.models.github.schemas import (
    ContributionSummary,
    GitHubProfile,
    GitHubRepository,
)
from devcred.services.github.service import GitHubService
from devcred.workers.fetcher import FetchError
from devcred.workers.github import GitHubNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github/users", tags=["github"])

T = TypeVar("T")


def _get_service(authorization: str | None = Header(default=None)) -> GitHubService:
    """Use the caller's GitHub token when one is forwarded."""
    token = None
    if authorization and authorization.lower().startswith(("bearer ", "token ")):
        token = authorization.split(" ", 1)[1].strip() or None
    return GitHubService(token)


async def _call(username: str, call: Awaitable[T]) -> T:
    try:
        return await call
    except GitHubNotFoundError:
        raise HTTPException(status_code=404, detail="GitHub user not found")
    except FetchError as exc:
        logger.error("GitHub API call failed for %s: %s", username, exc)
        raise HTTPException(status_code=502, detail="GitHub API request failed")


@router.get("/{username}", response_model=GitHubProfile)
async def get_profile(
    username: str, service: GitHubService = Depends(_get_service)
) -> GitHubProfile:
    return await _call(username, service.get_profile(username))


@router.get("/{username}/repos", response_model=list[GitHubRepository])
async def get_repositories(
    username: str, service: GitHubService = Depends(_get_service)
) -> list[GitHubRepository]:
    return await _call(username, service.list_repositories(username))


@router.get("/{username}/contributions", response_model=ContributionSummary)
async def get_contributions(
    username: str, service: GitHubService = Depends(_get_service)
) -> ContributionSummary:
    """Contribution statistics derived from the user's recent public events.

    - **404**: no such GitHub user
    - **502**: GitHub could not be reached after retries
    """
    return await _call(username, service.contribution_summary(username))
