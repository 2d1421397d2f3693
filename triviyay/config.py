"""Configuration utilities for the TriviYay service.

Configuration is resolved with the following precedence (highest first):
- environment variables;
- optional text files under `config/` (one value per file);
- `triviyay_config.json` at the project root;
- development defaults.

Pydantic models enforce required fields and value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator


CONFIG_DIR = Path("config")
ROOT_CONFIG = Path("triviyay_config.json")
DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"
FALLBACK_SITE_URL = "https://your-site.netlify.app"
logger = logging.getLogger(__name__)


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.environ.get(key)
    return value if value else default


def _truthy(text: Optional[str]) -> bool:
    return str(text or "").strip().lower() in {"1", "true", "yes", "on"}


class DatabaseConfig(BaseModel):
    dsn: str

    @field_validator("dsn")
    @classmethod
    def dsn_must_be_non_empty(cls, v: str) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("database.dsn must be a non-empty string")
        return v


class SiteConfig(BaseModel):
    # None means "not configured"; callers fall back to FALLBACK_SITE_URL
    base_url: Optional[str] = None


class GameConfig(BaseModel):
    expiry_days: int = Field(default=14, gt=0)


class AppConfig(BaseModel):
    database: DatabaseConfig
    site: SiteConfig
    game: GameConfig
    auto_apply_migrations: bool = True


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:  # pragma: no cover - defensive
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def load_config() -> AppConfig:
    """Load and validate configuration from env, files and defaults."""

    base = _read_json_file(ROOT_CONFIG)

    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        return str(cur) if cur is not None else default

    dsn = (
        _env("TEST_DATABASE_URL")
        or _env("DATABASE_URL")
        or _read_config_file("database.url")
        or _base("database.dsn")
        or DEFAULT_DATABASE_URL
    )
    # Netlify sets URL automatically; NEXT_PUBLIC_SITE_URL is the explicit override
    site_url = (
        _env("NEXT_PUBLIC_SITE_URL")
        or _env("URL")
        or _read_config_file("site.url")
        or _base("site.base_url")
    )
    expiry_text = _env("GAME_EXPIRY_DAYS") or _read_config_file("game.expiry_days") or _base("game.expiry_days", "14")
    auto_migrate_text = _env("AUTO_APPLY_MIGRATIONS") or _base("auto_apply_migrations", "true")

    try:
        return AppConfig(
            database=DatabaseConfig(dsn=dsn),
            site=SiteConfig(base_url=site_url),
            game=GameConfig(expiry_days=int(str(expiry_text).strip())),
            auto_apply_migrations=_truthy(auto_migrate_text),
        )
    except (PydanticValidationError, ValueError) as e:
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "SiteConfig",
    "GameConfig",
    "FALLBACK_SITE_URL",
    "load_config",
]
