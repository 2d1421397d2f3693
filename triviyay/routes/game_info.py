"""Game info endpoint: the full state of a game for polling clients."""

from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from triviyay.errors import MISSING_GAME_CODE, SubmissionValidationError
from triviyay.http.cors import GET_CORS_HEADERS
from triviyay.http.envelope import error_response, preflight_response, success_response, to_jsonable
from triviyay.logic.collaborators import call_collaborator
from triviyay.routes.dependencies import get_game_reader

router = APIRouter()

GAME_INFO_PATH = "/simulate-game-info"


@router.get(GAME_INFO_PATH, summary="Read a game by code")
async def game_info(
    code: Optional[str] = None,
    get_game: Callable[[Any], Any] = Depends(get_game_reader),
) -> JSONResponse:
    try:
        if not code:
            raise SubmissionValidationError(MISSING_GAME_CODE)
        game = await call_collaborator(get_game, code)
    except Exception as exc:
        return error_response(exc, "game_info", GET_CORS_HEADERS)
    return success_response(GET_CORS_HEADERS, game=to_jsonable(game))


@router.options(GAME_INFO_PATH, summary="CORS preflight for game info")
async def game_info_preflight() -> JSONResponse:
    return preflight_response(GET_CORS_HEADERS)


__all__ = ["router", "game_info", "game_info_preflight"]
