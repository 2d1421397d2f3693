"""Database bootstrap: engine construction and SQL migrations."""

from triviyay.db.base import build_engine, get_engine, reset_engine
from triviyay.db.migrations_runner import apply_migrations

__all__ = ["build_engine", "get_engine", "reset_engine", "apply_migrations"]
