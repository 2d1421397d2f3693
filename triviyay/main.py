from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import text as sql_text
from sqlalchemy.engine import Engine

from triviyay.config import AppConfig, load_config
from triviyay.db.base import get_engine
from triviyay.db.migrations_runner import apply_migrations
from triviyay.http.envelope import (
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from triviyay.http.request_id import RequestIdMiddleware
from triviyay.logging_setup import configure_logging
from triviyay.logic.game_store import GameStore
from triviyay.routes import api_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _health(engine: Engine) -> dict:
    try:
        with engine.connect() as conn:
            conn.execute(sql_text("SELECT 1"))
    except Exception as e:
        logger.error("Health DB check failed", exc_info=True)
        return {"status": "degraded", "db": False, "reason": str(e)}
    return {"status": "ok", "db": True}


def create_app(
    config: Optional[AppConfig] = None,
    *,
    engine: Optional[Engine] = None,
    game_store: Optional[GameStore] = None,
) -> FastAPI:
    """Build the FastAPI application.

    ``config``, ``engine`` and ``game_store`` default to values derived from
    the environment; tests pass their own to isolate state.
    """
    configure_logging()
    config = config or load_config()
    engine = engine or (game_store.engine if game_store is not None else get_engine(config.database.dsn))

    if config.auto_apply_migrations:
        try:
            apply_migrations(engine)
        except Exception:
            logger.error("Failed to apply migrations at startup", exc_info=True)
            raise
    else:
        logger.info("AUTO_APPLY_MIGRATIONS disabled; skipping migrations at startup")

    app = FastAPI(title="TriviYay API", version="0.1.0")
    app.state.config = config
    app.state.game_store = game_store or GameStore(engine, expiry_days=config.game.expiry_days)

    app.add_exception_handler(HTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(api_router, prefix=API_PREFIX)

    @app.get("/health")
    def health() -> dict:
        return _health(engine)

    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
# Run with: uvicorn triviyay.main:create_app --factory
