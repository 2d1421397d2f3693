"""Pydantic model for answer submission payloads.

Inbound bodies are loosely typed JSON; this record names every field the
submission endpoint understands and applies the defaulting rules in one
place. Field values are deliberately typed ``Any``: type and range checks of
answers and wagers belong to the game store, not to this boundary.
"""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from triviyay.errors import MISSING_SUBMISSION_IDS, SubmissionValidationError


class MutatorArgs(NamedTuple):
    """Positional arguments handed to the answer mutator, in call order."""

    player_id: Any
    question_id: Any
    answer_index: Any
    text_answer: Any
    wager: Any
    wager_slot: Any
    player_round: Any


class AnswerSubmission(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")

    player_id: Any = None
    question_id: Any = None
    answer_index: Any = None
    text_answer: Any = None
    wager: Any = None
    wager_slot: Any = None
    player_round: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "AnswerSubmission":
        # Non-object JSON (list, string, number, null) carries no fields
        return cls.model_validate(payload if isinstance(payload, dict) else {})

    def require_identifiers(self) -> None:
        if not self.player_id or not self.question_id:
            raise SubmissionValidationError(MISSING_SUBMISSION_IDS)

    def mutator_args(self) -> MutatorArgs:
        # Absent fields are None; explicit nulls pass through unchanged
        return MutatorArgs(
            self.player_id,
            self.question_id,
            self.answer_index,
            self.text_answer,
            self.wager,
            self.wager_slot,
            self.player_round,
        )


__all__ = ["AnswerSubmission", "MutatorArgs"]
