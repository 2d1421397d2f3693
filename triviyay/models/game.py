"""Read models returned by the game-info and join endpoints.

Fields are snake_case in Python and serialise with camelCase aliases, which
is the shape browser clients consume.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuestionView(_CamelModel):
    id: str
    text: str
    choices: list[str] = Field(default_factory=list)
    answer: int
    points: int
    multiplier: int = 1
    game_id: str
    question_order: int = 0
    is_fill_in_blank: bool = False
    has_timer: bool = False
    timer_seconds: Optional[int] = None
    has_wager: bool = False
    max_wager: Optional[int] = None
    round_number: Optional[int] = None


class PlayerView(_CamelModel):
    id: str
    username: str
    score: int = 0
    game_id: str


class PlayerAnswerView(_CamelModel):
    player_id: str
    question_id: str
    answer_index: Optional[int] = None
    text_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    points_earned: Optional[int] = None
    manually_scored: bool = False
    wager: Optional[int] = None
    wager_slot: Optional[int] = None
    player_round: Optional[int] = None


class GameView(_CamelModel):
    id: str
    code: str
    host_name: str
    created_at: str
    current_question_index: Optional[int] = None
    answers_revealed: bool = False
    game_type: str = "traditional"
    wager_amounts: list[int] = Field(default_factory=list)
    questions: list[QuestionView] = Field(default_factory=list)
    players: list[PlayerView] = Field(default_factory=list)
    player_answers: list[PlayerAnswerView] = Field(default_factory=list)


class JoinedPlayer(BaseModel):
    """Row echoed back after a join; keys match the players table."""

    id: str
    username: str
    game_id: str


__all__ = ["QuestionView", "PlayerView", "PlayerAnswerView", "GameView", "JoinedPlayer"]
