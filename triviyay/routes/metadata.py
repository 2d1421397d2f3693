"""Link-preview metadata for a game's share page."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from triviyay.config import AppConfig
from triviyay.logic.metadata import build_game_metadata
from triviyay.routes.dependencies import get_app_config

router = APIRouter()


@router.get("/games/{code}/metadata", summary="Link-preview metadata for a game code")
def game_metadata(code: str, config: AppConfig = Depends(get_app_config)) -> dict:
    return build_game_metadata(code, config.site.base_url).model_dump(by_alias=True)


__all__ = ["router", "game_metadata"]
