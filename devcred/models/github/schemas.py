from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict


class GitHubProfile(BaseModel):
    """Subset of the GitHub ``/users/{username}`` payload."""

    model_config = ConfigDict(extra="ignore")

    login: str
    id: int
    avatar_url: str | None = None
    html_url: str | None = None
    name: str | None = None
    bio: str | None = None
    location: str | None = None
    blog: str | None = None
    public_repos: int = 0
    followers: int = 0
    following: int = 0


class GitHubRepository(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    full_name: str
    description: str | None = None
    html_url: str | None = None
    language: str | None = None
    stargazers_count: int = 0
    forks_count: int = 0
    updated_at: datetime | None = None


class DailyContribution(BaseModel):
    day: date
    count: int


class ContributionSummary(BaseModel):
    username: str
    total: int
    active_days: int
    longest_streak: int
    by_type: dict[str, int]
    days: list[DailyContribution]
