"""Helpers for calling out to game-state collaborators.

Collaborators may be coroutine functions or plain blocking callables (the
SQL-backed game store). Blocking callables run in the threadpool so the
event loop keeps serving other requests while a write completes.
"""

from __future__ import annotations

import inspect
import json
from typing import Any, Callable

from fastapi.concurrency import run_in_threadpool

from triviyay.errors import MalformedRequestError


async def call_collaborator(fn: Callable[..., Any], *args: Any) -> Any:
    """Invoke ``fn`` with positional ``args`` and wait for its result."""
    if inspect.iscoroutinefunction(fn):
        return await fn(*args)
    result = await run_in_threadpool(fn, *args)
    if inspect.isawaitable(result):
        result = await result
    return result


def parse_json_body(raw: bytes) -> Any:
    """Decode a request body, raising MalformedRequestError when it is not JSON."""
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedRequestError(str(exc)) from exc


__all__ = ["call_collaborator", "parse_json_body"]
