"""Join-game endpoint."""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from triviyay.http.cors import POST_CORS_HEADERS
from triviyay.http.envelope import error_response, preflight_response, success_response, to_jsonable
from triviyay.logic.collaborators import call_collaborator, parse_json_body
from triviyay.models.join import JoinRequest
from triviyay.routes.dependencies import get_join_game

router = APIRouter()

JOIN_PATH = "/simulate-join"


@router.post(JOIN_PATH, summary="Join a game by code")
async def join(
    request: Request,
    join_game: Callable[[Any, Any], Any] = Depends(get_join_game),
) -> JSONResponse:
    try:
        body = JoinRequest.from_payload(parse_json_body(await request.body()))
        body.require_fields()
        player = await call_collaborator(join_game, body.code, body.username)
    except Exception as exc:
        return error_response(exc, "join_game", POST_CORS_HEADERS)
    return success_response(POST_CORS_HEADERS, player=to_jsonable(player))


@router.options(JOIN_PATH, summary="CORS preflight for joining")
async def join_preflight() -> JSONResponse:
    return preflight_response(POST_CORS_HEADERS)


__all__ = ["router", "join", "join_preflight"]
