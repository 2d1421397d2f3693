"""Answer submission: validate, normalise, delegate.

The handler owns no state between requests. It checks the two required
identifiers, then hands the seven positional values to the injected mutator
and waits for it. Any failure propagates to the caller unchanged; mapping
failures onto HTTP responses is the route's job.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Protocol, Union

from triviyay.logic.collaborators import call_collaborator, parse_json_body
from triviyay.models.answer_submission import AnswerSubmission, MutatorArgs

logger = logging.getLogger(__name__)


class AnswerMutator(Protocol):
    """Applies one validated answer to game state, or raises."""

    def __call__(
        self,
        player_id: Any,
        question_id: Any,
        answer_index: Any,
        text_answer: Any,
        wager: Any,
        wager_slot: Any,
        player_round: Any,
    ) -> Union[None, Awaitable[None]]: ...


class AnswerSubmissionHandler:
    def __init__(self, mutator: AnswerMutator) -> None:
        self.mutator = mutator

    async def submit(self, raw_body: bytes) -> MutatorArgs:
        """Run one submission and return the arguments the mutator received.

        Raises MalformedRequestError for a non-JSON body and
        SubmissionValidationError when playerId or questionId is missing;
        neither case reaches the mutator.
        """
        submission = AnswerSubmission.from_payload(parse_json_body(raw_body))
        submission.require_identifiers()
        args = submission.mutator_args()
        logger.info(
            "submit_answer.delegate player_id=%s question_id=%s",
            args.player_id,
            args.question_id,
        )
        await call_collaborator(self.mutator, *args)
        return args


__all__ = ["AnswerMutator", "AnswerSubmissionHandler"]
