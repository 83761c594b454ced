from __future__ import annotations

from devcred.models.common import SuccessResponse


class ClearCacheResponse(SuccessResponse):
    """Response for POST /metadata/clear-cache."""

    success: bool = True
    message: str = "Metadata cache cleared"
