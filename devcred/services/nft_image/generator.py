"""SVG artwork for reputation NFTs.

The badge is a 500x500 gradient card showing the repository, the
contributor, their score and the rarity tier.  All user-supplied text is
sanitized before it is interpolated into the markup.
"""

from __future__ import annotations

import random
import re

SVG_WIDTH = 500
SVG_HEIGHT = 500
DOT_COUNT = 50
MAX_LABEL_LENGTH = 20

RARITY_COLORS: dict[str, tuple[str, str]] = {
    "common": ("#718096", "#4A5568"),
    "uncommon": ("#38A169", "#2F855A"),
    "rare": ("#3182CE", "#2B6CB0"),
    "epic": ("#805AD5", "#6B46C1"),
    "legendary": ("#DD6B20", "#C05621"),
}

_FONT = 'font-family="Arial, sans-serif"'


def sanitize_label(value: str) -> str:
    return re.sub(r"[<>]", "", value)[:MAX_LABEL_LENGTH].replace("&", "&amp;")


def sanitize_score(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)


def sanitize_rarity(value: str) -> str:
    return re.sub(r"[^a-z]", "", value.lower())


def sanitize_color(value: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "", value)


def _dots(rng: random.Random) -> str:
    dots = []
    for _ in range(DOT_COUNT):
        x = rng.randrange(SVG_WIDTH)
        y = rng.randrange(SVG_HEIGHT)
        r = 2 + rng.randrange(3)
        dots.append(
            f'<circle cx="{x}" cy="{y}" r="{r}" fill="rgba(255, 255, 255, 0.03)" />'
        )
    return "\n    ".join(dots)


def render_nft_svg(
    repo: str = "Unknown Repo",
    contributor: str = "Unknown",
    score: str = "0",
    rarity: str = "common",
    color: str = "718096",
    rng: random.Random | None = None,
) -> str:
    """Render the NFT badge as an SVG document.

    Unknown rarities use the ``common`` gradient but keep their own label.
    """
    rng = rng or random.Random()
    safe_repo = sanitize_label(repo)
    safe_contributor = sanitize_label(contributor)
    safe_score = sanitize_score(score)
    safe_rarity = sanitize_rarity(rarity)
    safe_color = sanitize_color(color)
    start, end = RARITY_COLORS.get(safe_rarity, RARITY_COLORS["common"])

    cx = SVG_WIDTH // 2
    cy = SVG_HEIGHT // 2
    return f"""<svg xmlns="http://www.w3.org/2000/svg" width="{SVG_WIDTH}" height="{SVG_HEIGHT}" viewBox="0 0 {SVG_WIDTH} {SVG_HEIGHT}">
  <defs>
    <linearGradient id="bgGradient" x1="0%" y1="0%" x2="100%" y2="100%">
      <stop offset="0%" stop-color="{start}" />
      <stop offset="100%" stop-color="{end}" />
    </linearGradient>
  </defs>
  <rect x="0" y="0" width="{SVG_WIDTH}" height="{SVG_HEIGHT}" fill="url(#bgGradient)" />
  <g id="pattern">
    {_dots(rng)}
  </g>
  <circle cx="{cx}" cy="{cy - 30}" r="50" fill="rgba(255, 255, 255, 0.1)" stroke="rgba(255, 255, 255, 0.3)" stroke-width="2" />
  <text x="{cx}" y="60" {_FONT} font-size="24" font-weight="bold" fill="#FFFFFF" text-anchor="middle">{safe_repo}</text>
  <text x="{cx}" y="{cy + 70}" {_FONT} font-size="18" fill="#FFFFFF" text-anchor="middle">Contributor: {safe_contributor}</text>
  <text x="{cx}" y="{cy - 20}" {_FONT} font-size="36" font-weight="bold" fill="#FFFFFF" text-anchor="middle">{safe_score}</text>
  <text x="{cx}" y="{cy + 10}" {_FONT} font-size="14" fill="#FFFFFF" text-anchor="middle">SCORE</text>
  <rect x="{cx - 75}" y="{SVG_HEIGHT - 50}" width="150" height="30" fill="#{safe_color}" />
  <text x="{cx}" y="{SVG_HEIGHT - 30}" {_FONT} font-size="16" font-weight="bold" fill="#FFFFFF" text-anchor="middle">{safe_rarity.upper()}</text>
</svg>
"""
