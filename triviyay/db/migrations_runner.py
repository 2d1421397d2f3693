"""Lightweight SQL migrations runner.

Applies the packaged .sql files (``triviyay/db/migrations/``) in lexical
order. Applied filenames are recorded in a ``schema_migrations`` table of the
target database so a fresh in-memory database always receives the full
schema while a persistent one is never migrated twice.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def _iter_sql_files(root: Path) -> Iterable[Path]:
    for p in sorted(root.glob("*.sql")):
        if "rollback" in p.name.lower():
            continue
        yield p


def _exec_sql_compat(conn: Connection, sql: str) -> None:
    """Execute a multi-statement SQL script.

    pysqlite refuses several statements per execute(), so SQLite scripts are
    split on ';'. Other dialects receive the script as-is.
    """
    name = (getattr(conn.dialect, "name", "") or "").lower()
    if "sqlite" not in name:
        conn.exec_driver_sql(sql)
        return
    for stmt in sql.split(";"):
        lines = [ln for ln in stmt.splitlines() if not ln.strip().startswith("--")]
        s = "\n".join(lines).strip()
        if not s or s.upper() in {"BEGIN", "COMMIT", "END"}:
            continue
        conn.exec_driver_sql(s)


def _applied(conn: Connection) -> set[str]:
    conn.exec_driver_sql(
        "CREATE TABLE IF NOT EXISTS schema_migrations ("
        " filename TEXT PRIMARY KEY,"
        " applied_at TEXT NOT NULL)"
    )
    rows = conn.execute(sql_text("SELECT filename FROM schema_migrations")).fetchall()
    return {str(r[0]) for r in rows}


def apply_migrations(engine: Engine, migrations_dir: str | os.PathLike[str] | None = None) -> list[str]:
    """Apply pending migrations and return the filenames applied this run."""
    root = Path(migrations_dir) if migrations_dir is not None else MIGRATIONS_DIR
    if not root.exists():  # pragma: no cover - optional
        logger.warning("migrations.dir_missing path=%s", root)
        return []

    newly_applied: list[str] = []
    with engine.begin() as conn:
        applied = _applied(conn)
        for sql_path in _iter_sql_files(root):
            fname = sql_path.name
            if fname in applied:
                continue
            sql = sql_path.read_text(encoding="utf-8")
            if not sql.strip():
                continue
            _exec_sql_compat(conn, sql)
            # applied_at is ISO-8601 UTC without fractional seconds
            applied_at = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
            conn.execute(
                sql_text("INSERT INTO schema_migrations (filename, applied_at) VALUES (:f, :a)"),
                {"f": fname, "a": applied_at},
            )
            logger.info("migrations.applied file=%s", fname)
            newly_applied.append(fname)
    return newly_applied
