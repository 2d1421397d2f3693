"""Pydantic model for join-game payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from triviyay.errors import MISSING_JOIN_FIELDS, SubmissionValidationError


class JoinRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Any = None
    username: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "JoinRequest":
        return cls.model_validate(payload if isinstance(payload, dict) else {})

    def require_fields(self) -> None:
        if not self.code or not self.username:
            raise SubmissionValidationError(MISSING_JOIN_FIELDS)


__all__ = ["JoinRequest"]
