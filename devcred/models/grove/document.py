from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class GroveKey(str, Enum):
    """Data sets whose latest Grove upload is tracked by the registry."""

    USERS = "users"
    REPOSITORIES = "repositories"
    NFTS = "nfts"
    ACTIVITIES = "activities"
    POSTS = "posts"


class GroveUriDocument(BaseModel):
    """Stored registry entry: the latest ``lens://`` URI of one data set."""

    key: GroveKey
    uri: str
    updated_at: datetime
