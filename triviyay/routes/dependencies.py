"""FastAPI dependencies resolving game-state collaborators.

Routes never import the game store directly; they ask for the callable they
need. Tests swap any of these out through ``app.dependency_overrides``.
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import Request

from triviyay.config import AppConfig
from triviyay.logic.game_store import GameStore
from triviyay.logic.submission import AnswerMutator


def get_game_store(request: Request) -> GameStore:
    return request.app.state.game_store


def get_app_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_answer_mutator(request: Request) -> AnswerMutator:
    return get_game_store(request).submit_answer


def get_join_game(request: Request) -> Callable[[Any, Any], Any]:
    return get_game_store(request).join_game


def get_game_reader(request: Request) -> Callable[[Any], Any]:
    return get_game_store(request).get_game


__all__ = [
    "get_game_store",
    "get_app_config",
    "get_answer_mutator",
    "get_join_game",
    "get_game_reader",
]
