"""APIRouter registration for the TriviYay service."""

from __future__ import annotations

from fastapi import APIRouter

from triviyay.routes.game_info import router as game_info_router
from triviyay.routes.join import router as join_router
from triviyay.routes.metadata import router as metadata_router
from triviyay.routes.submit_answer import router as submit_answer_router

api_router = APIRouter()
api_router.include_router(submit_answer_router, tags=["Answers"])
api_router.include_router(join_router, tags=["Players"])
api_router.include_router(game_info_router, tags=["Games"])
api_router.include_router(metadata_router, tags=["Metadata"])

__all__ = ["api_router"]
