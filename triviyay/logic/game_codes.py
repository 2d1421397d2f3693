"""Game code generation."""

from __future__ import annotations

import secrets

GAME_CODE_MIN = 10000
GAME_CODE_MAX = 99999


def generate_game_code() -> str:
    """Return a random five-digit join code."""
    return str(GAME_CODE_MIN + secrets.randbelow(GAME_CODE_MAX - GAME_CODE_MIN + 1))


__all__ = ["GAME_CODE_MIN", "GAME_CODE_MAX", "generate_game_code"]
