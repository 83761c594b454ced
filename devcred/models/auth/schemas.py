from __future__ import annotations

from pydantic import BaseModel


class OAuthCallbackRequest(BaseModel):
    """Request body for POST /auth/callback.

    ``code`` is optional at the schema level so a missing code is answered
    with 400, like the query-string variant of the callback.
    """

    code: str | None = None


class OAuthToken(BaseModel):
    access_token: str
    token_type: str = "bearer"
    scope: str = ""
