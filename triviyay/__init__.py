"""TriviYay multiplayer trivia backend.

Exposes a FastAPI application factory. Cross-cutting concerns (request ids,
error handlers, logging) are wired in `triviyay/main.py`; game-state access
lives in `triviyay/logic/` and route handlers in `triviyay/routes/`.
"""

from __future__ import annotations

from triviyay.main import create_app

__all__ = ["create_app"]
