"""Link-preview metadata for a game code."""

from __future__ import annotations

from typing import Optional

from triviyay.config import FALLBACK_SITE_URL
from triviyay.models.metadata import GameMetadata, OpenGraph, PreviewImage, TwitterCard

SITE_NAME = "TriviYay!"
OG_IMAGE_PATH = "/.netlify/functions/og"
OG_IMAGE_WIDTH = 1200
OG_IMAGE_HEIGHT = 630


def resolve_base_url(configured: Optional[str]) -> str:
    """Return an absolute site URL, adding https:// when the scheme is missing."""
    base_url = (configured or "").strip()
    if not base_url:
        return FALLBACK_SITE_URL
    if not base_url.startswith("http"):
        base_url = f"https://{base_url}"
    return base_url


def build_game_metadata(code: str, base_url: Optional[str]) -> GameMetadata:
    image_url = f"{resolve_base_url(base_url)}{OG_IMAGE_PATH}?code={code}"
    title = f"Join Game {code}"
    description = f"Join trivia game {code} on {SITE_NAME}"
    return GameMetadata(
        title=f"{title} - {SITE_NAME}",
        description=description,
        open_graph=OpenGraph(
            title=title,
            description=description,
            images=[
                PreviewImage(
                    url=image_url,
                    width=OG_IMAGE_WIDTH,
                    height=OG_IMAGE_HEIGHT,
                    alt=f"Game code: {code}",
                )
            ],
        ),
        twitter=TwitterCard(title=title, description=description, images=[image_url]),
    )


__all__ = ["resolve_base_url", "build_game_metadata"]
