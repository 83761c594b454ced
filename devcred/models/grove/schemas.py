from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, field_validator

from devcred.models.grove.document import GroveKey

LENS_URI_PREFIX = "lens://"


class GroveUriUpdateRequest(BaseModel):
    """Request body for POST /grove/uri."""

    key: GroveKey
    uri: str

    @field_validator("uri")
    @classmethod
    def _require_lens_scheme(cls, value: str) -> str:
        if not value.startswith(LENS_URI_PREFIX):
            raise ValueError(f"uri must start with {LENS_URI_PREFIX}")
        return value


class GroveUriUpdateResponse(BaseModel):
    message: str
    key: GroveKey
    uri: str


class GroveUrisResponse(BaseModel):
    """Every tracked data set mapped to its URI (``""`` when never uploaded)."""

    users: str = ""
    repositories: str = ""
    nfts: str = ""
    activities: str = ""
    posts: str = ""
    uploaded_at: datetime | None = None
