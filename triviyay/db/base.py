"""SQLAlchemy engine construction.

PostgreSQL is the production target; SQLite backs local development and
tests. No declarative models are defined here; the game store issues plain
SQL through these connections.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from triviyay.config import load_config

logger = logging.getLogger(__name__)


_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:  # type: ignore[no-untyped-def]
    # ON DELETE CASCADE is inert in SQLite unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str) -> Engine:
    """Create a new Engine for ``url``.

    In-memory SQLite URLs use a StaticPool so every connection shares the
    one that holds the database.
    """
    kwargs: dict = {"future": True, "pool_pre_ping": True}
    if url.startswith("sqlite") and ":memory:" in url:
        kwargs.update({
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        })
    engine = create_engine(url, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.info("db.engine.created dialect=%s", engine.dialect.name)
    return engine


def get_engine(url: str | None = None) -> Engine:
    """Return a process-wide Engine for the given (or configured) URL."""
    global _ENGINE, _ENGINE_URL
    resolved_url = url or load_config().database.dsn

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        _ENGINE = build_engine(resolved_url)
        _ENGINE_URL = resolved_url

    return _ENGINE


def reset_engine() -> None:
    """Dispose the cached Engine; the next get_engine() builds a fresh one."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _ENGINE_URL = None
