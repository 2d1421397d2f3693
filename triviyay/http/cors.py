"""Fixed cross-origin headers for the public game endpoints.

Each endpoint answers any origin and lists exactly the methods it serves.
The headers are attached by the route itself (success, failure and
preflight alike) rather than by Starlette's CORSMiddleware, which only
decorates requests that carry an Origin header.
"""

from __future__ import annotations

from typing import Iterable


def cors_headers(methods: Iterable[str]) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(methods),
        "Access-Control-Allow-Headers": "Content-Type",
    }


POST_CORS_HEADERS = cors_headers(["POST", "OPTIONS"])
GET_CORS_HEADERS = cors_headers(["GET", "OPTIONS"])


__all__ = ["cors_headers", "POST_CORS_HEADERS", "GET_CORS_HEADERS"]
