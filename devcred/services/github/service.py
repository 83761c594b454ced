from __future__ import annotations

import logging
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from devcred.models.github.schemas import (
    ContributionSummary,
    DailyContribution,
    GitHubProfile,
    GitHubRepository,
)
from devcred.workers import github

logger = logging.getLogger(__name__)


def _event_weight(event: dict[str, Any]) -> int:
    """A push counts its commits; every other event counts once."""
    if event.get("type") == "PushEvent":
        payload = event.get("payload") or {}
        commits = payload.get("size")
        if commits is None:
            commits = len(payload.get("commits") or [])
        return max(int(commits), 1)
    return 1


def longest_streak(days: Iterable[date]) -> int:
    """Length of the longest run of consecutive calendar days."""
    best = run = 0
    previous: date | None = None
    for day in sorted(set(days)):
        run = run + 1 if previous is not None and day - previous == timedelta(days=1) else 1
        best = max(best, run)
        previous = day
    return best


def summarize_events(username: str, events: Iterable[dict[str, Any]]) -> ContributionSummary:
    per_day: Counter[date] = Counter()
    by_type: Counter[str] = Counter()
    for event in events:
        created_at = event.get("created_at")
        if not created_at:
            continue
        day = datetime.fromisoformat(created_at.replace("Z", "+00:00")).date()
        weight = _event_weight(event)
        per_day[day] += weight
        by_type[event.get("type") or "Unknown"] += weight

    return ContributionSummary(
        username=username,
        total=sum(per_day.values()),
        active_days=len(per_day),
        longest_streak=longest_streak(per_day),
        by_type=dict(by_type),
        days=[DailyContribution(day=d, count=per_day[d]) for d in sorted(per_day)],
    )


class GitHubService:
    """Read-only GitHub statistics for a developer profile."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token

    async def get_profile(self, username: str) -> GitHubProfile:
        return GitHubProfile(**await github.get_user(username, self._token))

    async def list_repositories(self, username: str) -> list[GitHubRepository]:
        repos = await github.get_repositories(username, self._token)
        return [GitHubRepository(**repo) for repo in repos]

    async def contribution_summary(self, username: str) -> ContributionSummary:
        events = await github.get_public_events(username, self._token)
        logger.debug("Summarizing %d public events for %s", len(events), username)
        return summarize_events(username, events)
