"""Functional test fixtures.

Every test gets its own in-memory SQLite database with the packaged
migrations applied, a game store bound to a frozen clock, and an app built
around that store. Nothing touches the process-wide engine.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Iterator

import pytest
from fastapi.testclient import TestClient

from triviyay.config import AppConfig, DatabaseConfig, GameConfig, SiteConfig
from triviyay.db.base import build_engine
from triviyay.db.migrations_runner import apply_migrations
from triviyay.logic.game_store import GameStore
from triviyay.main import create_app

MEMORY_URL = "sqlite+pysqlite:///:memory:"
NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class RecordingMutator:
    """Stand-in for the answer mutator that records every call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.error = error

    async def __call__(self, *args: Any) -> None:
        self.calls.append(args)
        if self.error is not None:
            raise self.error


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def engine() -> Iterator:
    eng = build_engine(MEMORY_URL)
    apply_migrations(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock()


@pytest.fixture
def store(engine, clock) -> GameStore:
    return GameStore(engine, clock=clock, cleanup_probability=0.0)


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(dsn=MEMORY_URL),
        site=SiteConfig(base_url="triviyay.example"),
        game=GameConfig(expiry_days=14),
        auto_apply_migrations=False,
    )


@pytest.fixture
def app(config, store):
    return create_app(config, game_store=store)


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded(store) -> dict:
    """A game with one multiple-choice question, one wager question and a player."""
    game = store.create_game("Quizmaster")
    mc = store.add_question(game["id"], text="2 + 2?", choices=["3", "4", "5", "22"], answer=1)
    wager = store.add_question(
        game["id"],
        text="Capital of France?",
        choices=["Paris", "Lyon"],
        answer=0,
        has_wager=True,
        max_wager=10,
    )
    player = store.join_game(game["code"], "alice")
    return {"game": game, "mc": mc, "wager": wager, "player": player}


@pytest.fixture
def mutator(app) -> RecordingMutator:
    """Replace the game store's submit_answer with a recorder for this app."""
    from triviyay.routes.dependencies import get_answer_mutator

    recorder = RecordingMutator()
    app.dependency_overrides[get_answer_mutator] = lambda: recorder
    return recorder
