"""Error taxonomy and fallback messages.

Single source of truth for the exception types raised by the game store and
the request handlers, and for the fixed messages the HTTP layer returns.
Route modules import from here instead of hardcoding strings.
"""

from __future__ import annotations


class TriviYayError(Exception):
    """Base class for every error this service raises on purpose."""


class MalformedRequestError(TriviYayError):
    """Request body could not be parsed as JSON."""


class SubmissionValidationError(TriviYayError):
    """Required identifiers missing from a request; detected before delegation."""


class GameError(TriviYayError):
    """Failure reported by the game-state mutator."""


class GameNotFoundError(GameError):
    def __init__(self, message: str = "Game not found") -> None:
        super().__init__(message)


class GameExpiredError(GameError):
    def __init__(self, expiry_days: int = 14) -> None:
        super().__init__(f"Game has expired (older than {expiry_days} days)")


class PlayerNotFoundError(GameError):
    def __init__(self, message: str = "Player not found. Please rejoin the game.") -> None:
        super().__init__(message)


class QuestionNotFoundError(GameError):
    def __init__(self, message: str = "Question not found") -> None:
        super().__init__(message)


class InvalidWagerError(GameError):
    def __init__(self, message: str = "Invalid wager") -> None:
        super().__init__(message)


class InvalidAnswerError(GameError):
    def __init__(self, message: str = "Invalid answer") -> None:
        super().__init__(message)


# Validation messages (fixed; clients match on them)
MISSING_SUBMISSION_IDS = "Missing playerId or questionId"
MISSING_JOIN_FIELDS = "Missing code or username"
MISSING_GAME_CODE = "Missing game code"

# Used when a failure carries no message of its own
FALLBACK_MESSAGES = {
    "submit_answer": "Failed to submit answer",
    "join_game": "Failed to join game",
    "game_info": "Failed to get game info",
}


def error_message(exc: BaseException, operation: str) -> str:
    """Return the exception's own message, or the operation's fallback."""
    message = str(exc) if exc.args else ""
    return message or FALLBACK_MESSAGES[operation]


__all__ = [
    "TriviYayError",
    "MalformedRequestError",
    "SubmissionValidationError",
    "GameError",
    "GameNotFoundError",
    "GameExpiredError",
    "PlayerNotFoundError",
    "QuestionNotFoundError",
    "InvalidWagerError",
    "InvalidAnswerError",
    "MISSING_SUBMISSION_IDS",
    "MISSING_JOIN_FIELDS",
    "MISSING_GAME_CODE",
    "FALLBACK_MESSAGES",
    "error_message",
]
