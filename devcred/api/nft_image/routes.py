from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from devcred.services.nft_image.generator import render_nft_svg

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/nft-image", tags=["nft-image"])


@router.get(
    "/generate",
    response_class=Response,
    responses={200: {"content": {"image/svg+xml": {}}}},
    summary="Render the SVG artwork of a reputation NFT",
)
async def generate_image(
    repo: str = "Unknown Repo",
    contributor: str = "Unknown",
    score: str = "0",
    rarity: str = "common",
    color: str = "718096",
) -> Response:
    try:
        svg = render_nft_svg(repo, contributor, score, rarity, color)
    except Exception as exc:
        logger.exception("NFT image generation failed: %s", exc)
        raise HTTPException(status_code=500, detail="Failed to generate image")
    return Response(content=svg, media_type="image/svg+xml")
