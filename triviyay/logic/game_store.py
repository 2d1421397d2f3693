"""Game state persistence.

Encapsulates every query and write against the games, players, questions and
player_answers tables so route handlers stay free of inline SQL. Methods are
synchronous; the HTTP layer runs them in the threadpool.

``GameStore.submit_answer`` is the default answer mutator wired into the
submission endpoint.
"""

from __future__ import annotations

import json
import logging
import random
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from sqlalchemy import text as sql_text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError

from triviyay.errors import (
    GameExpiredError,
    GameNotFoundError,
    InvalidAnswerError,
    InvalidWagerError,
    PlayerNotFoundError,
    QuestionNotFoundError,
)
from triviyay.logic.game_codes import generate_game_code
from triviyay.models.game import (
    GameView,
    JoinedPlayer,
    PlayerAnswerView,
    PlayerView,
    QuestionView,
)

logger = logging.getLogger(__name__)

DEFAULT_POINTS = 10
DEFAULT_MULTIPLIER = 1
DEFAULT_EXPIRY_DAYS = 14
# Questions without an explicit order sort after every ordered question
QUESTION_ORDER_FALLBACK = 999999
# Share of get_game() calls that also purge expired games
CLEANUP_PROBABILITY = 0.01
_CODE_ATTEMPTS = 5


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _parse_ts(value: str) -> datetime:
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _load_json_list(raw: Any) -> list:
    if raw is None or raw == "":
        return []
    if isinstance(raw, list):
        return raw
    try:
        loaded = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("game_store.json_column_unreadable value=%r", raw)
        return []
    return loaded if isinstance(loaded, list) else []


class GameStore:
    """SQL-backed store for trivia games."""

    def __init__(
        self,
        engine: Engine,
        *,
        expiry_days: int = DEFAULT_EXPIRY_DAYS,
        clock: Callable[[], datetime] = _utcnow,
        cleanup_probability: float = CLEANUP_PROBABILITY,
    ) -> None:
        self.engine = engine
        self.expiry_days = expiry_days
        self.clock = clock
        self.cleanup_probability = cleanup_probability

    # ------------------------------------------------------------------
    # Games
    # ------------------------------------------------------------------

    def create_game(
        self,
        host_name: str,
        *,
        game_type: str = "traditional",
        wager_amounts: Optional[list[int]] = None,
    ) -> dict:
        """Create a game under a fresh five-digit code and return its row."""
        created_at = _iso(self.clock())
        for attempt in range(1, _CODE_ATTEMPTS + 1):
            row = {
                "id": str(uuid.uuid4()),
                "code": generate_game_code(),
                "host_name": host_name,
                "created_at": created_at,
                "game_type": game_type,
                "wager_amounts": json.dumps(list(wager_amounts or [])),
            }
            try:
                with self.engine.begin() as conn:
                    conn.execute(
                        sql_text(
                            """
                            INSERT INTO games (id, code, host_name, created_at, game_type, wager_amounts)
                            VALUES (:id, :code, :host_name, :created_at, :game_type, :wager_amounts)
                            """
                        ),
                        row,
                    )
            except IntegrityError:
                # Code collision; draw another
                logger.info("game_store.code_collision attempt=%s code=%s", attempt, row["code"])
                continue
            logger.info("game_store.game_created code=%s", row["code"])
            return row
        raise RuntimeError("Could not allocate a unique game code")

    def _game_row(self, conn: Connection, code: str) -> Optional[dict]:
        row = conn.execute(
            sql_text("SELECT * FROM games WHERE code = :code"), {"code": str(code)}
        ).mappings().fetchone()
        return dict(row) if row is not None else None

    def get_game(self, code: str) -> GameView:
        """Return the full game view for a join code.

        Games older than the expiry window are deleted and reported as
        expired.
        """
        if random.random() < self.cleanup_probability:
            self.cleanup_old_games()

        with self.engine.begin() as conn:
            game = self._game_row(conn, code)
            if game is None:
                raise GameNotFoundError()
            expired = self.clock() - _parse_ts(game["created_at"]) > timedelta(days=self.expiry_days)
            if expired:
                conn.execute(sql_text("DELETE FROM games WHERE id = :id"), {"id": game["id"]})
        if expired:
            # Raised after commit so the delete sticks
            logger.info("game_store.game_expired code=%s", code)
            raise GameExpiredError(self.expiry_days)

        with self.engine.connect() as conn:
            questions = conn.execute(
                sql_text("SELECT * FROM questions WHERE game_id = :gid"), {"gid": game["id"]}
            ).mappings().fetchall()
            players = conn.execute(
                sql_text("SELECT * FROM players WHERE game_id = :gid ORDER BY score DESC, username"),
                {"gid": game["id"]},
            ).mappings().fetchall()
            answers = conn.execute(
                sql_text(
                    """
                    SELECT pa.* FROM player_answers pa
                    JOIN players p ON p.id = pa.player_id
                    WHERE p.game_id = :gid
                    """
                ),
                {"gid": game["id"]},
            ).mappings().fetchall()

        def _order(q: Any) -> int:
            return q["question_order"] if q["question_order"] is not None else QUESTION_ORDER_FALLBACK

        return GameView(
            id=game["id"],
            code=game["code"],
            host_name=game["host_name"],
            created_at=game["created_at"],
            current_question_index=game["current_question_index"],
            answers_revealed=bool(game["answers_revealed"]),
            game_type=game["game_type"] or "traditional",
            wager_amounts=_load_json_list(game["wager_amounts"]),
            questions=[
                QuestionView(
                    id=q["id"],
                    text=q["text"],
                    choices=_load_json_list(q["choices"]),
                    answer=q["answer"],
                    points=q["points"],
                    multiplier=q["multiplier"] or DEFAULT_MULTIPLIER,
                    game_id=q["game_id"],
                    question_order=q["question_order"] or 0,
                    is_fill_in_blank=bool(q["is_fill_in_blank"]),
                    has_timer=bool(q["has_timer"]),
                    timer_seconds=q["timer_seconds"] or None,
                    has_wager=bool(q["has_wager"]),
                    max_wager=q["max_wager"],
                    round_number=q["round_number"],
                )
                for q in sorted(questions, key=_order)
            ],
            players=[
                PlayerView(id=p["id"], username=p["username"], score=p["score"] or 0, game_id=p["game_id"])
                for p in players
            ],
            player_answers=[
                PlayerAnswerView(
                    player_id=a["player_id"],
                    question_id=a["question_id"],
                    answer_index=a["answer_index"],
                    text_answer=a["text_answer"],
                    is_correct=None if a["is_correct"] is None else bool(a["is_correct"]),
                    points_earned=a["points_earned"],
                    manually_scored=bool(a["manually_scored"]),
                    wager=a["wager"],
                    wager_slot=a["wager_slot"],
                    player_round=a["player_round"],
                )
                for a in answers
            ],
        )

    def cleanup_old_games(self) -> int:
        """Delete games past the expiry window; return how many were removed."""
        cutoff = _iso(self.clock() - timedelta(days=self.expiry_days))
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    sql_text("DELETE FROM games WHERE created_at < :cutoff"), {"cutoff": cutoff}
                )
        except Exception:
            # Housekeeping must not fail the read that triggered it
            logger.error("game_store.cleanup_failed", exc_info=True)
            return 0
        removed = int(result.rowcount or 0)
        if removed:
            logger.info("game_store.cleanup removed=%s", removed)
        return removed

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def add_question(
        self,
        game_id: str,
        *,
        text: str,
        choices: list[str],
        answer: int,
        points: int = DEFAULT_POINTS,
        multiplier: int = DEFAULT_MULTIPLIER,
        is_fill_in_blank: bool = False,
        has_timer: bool = False,
        timer_seconds: Optional[int] = None,
        has_wager: bool = False,
        max_wager: Optional[int] = None,
        round_number: Optional[int] = None,
    ) -> dict:
        """Append a question after the game's current last question."""
        with self.engine.begin() as conn:
            current = conn.execute(
                sql_text("SELECT MAX(question_order) FROM questions WHERE game_id = :gid"),
                {"gid": game_id},
            ).scalar()
            row = {
                "id": str(uuid.uuid4()),
                "text": text,
                "choices": json.dumps(list(choices)),
                "answer": answer,
                "points": points,
                "multiplier": multiplier,
                "question_order": 0 if current is None else int(current) + 1,
                "is_fill_in_blank": bool(is_fill_in_blank),
                "has_timer": bool(has_timer),
                # Timer length only applies when the timer is on
                "timer_seconds": timer_seconds if has_timer else None,
                "has_wager": bool(has_wager),
                "max_wager": max_wager if has_wager else None,
                "round_number": round_number,
                "game_id": game_id,
            }
            conn.execute(
                sql_text(
                    """
                    INSERT INTO questions (
                        id, text, choices, answer, points, multiplier, question_order,
                        is_fill_in_blank, has_timer, timer_seconds, has_wager, max_wager,
                        round_number, game_id
                    ) VALUES (
                        :id, :text, :choices, :answer, :points, :multiplier, :question_order,
                        :is_fill_in_blank, :has_timer, :timer_seconds, :has_wager, :max_wager,
                        :round_number, :game_id
                    )
                    """
                ),
                row,
            )
        return row

    # ------------------------------------------------------------------
    # Players
    # ------------------------------------------------------------------

    def join_game(self, code: str, username: str) -> JoinedPlayer:
        """Add a player to the game with the given code."""
        with self.engine.begin() as conn:
            game = self._game_row(conn, code)
            if game is None:
                raise GameNotFoundError()
            player = JoinedPlayer(id=str(uuid.uuid4()), username=str(username), game_id=game["id"])
            conn.execute(
                sql_text("INSERT INTO players (id, username, score, game_id) VALUES (:id, :username, 0, :game_id)"),
                player.model_dump(),
            )
        logger.info("game_store.player_joined code=%s player_id=%s", code, player.id)
        return player

    # ------------------------------------------------------------------
    # Answers
    # ------------------------------------------------------------------

    def submit_answer(
        self,
        player_id: str,
        question_id: str,
        answer_index: Optional[int],
        text_answer: Optional[str] = None,
        wager: Optional[int] = None,
        wager_slot: Optional[int] = None,
        player_round: Optional[int] = None,
    ) -> None:
        """Record (or overwrite) a player's answer to a question.

        Only the provided fields overwrite an earlier submission for the same
        (player, question) pair.
        """
        with self.engine.begin() as conn:
            player = conn.execute(
                sql_text("SELECT id FROM players WHERE id = :pid"), {"pid": str(player_id)}
            ).fetchone()
            if player is None:
                raise PlayerNotFoundError()

            question = conn.execute(
                sql_text("SELECT choices, is_fill_in_blank, has_wager, max_wager FROM questions WHERE id = :qid"),
                {"qid": str(question_id)},
            ).mappings().fetchone()
            if question is None:
                raise QuestionNotFoundError()

            self._check_answer_index(question, answer_index)
            self._check_wager(question, wager)
            for name, value in (("wager_slot", wager_slot), ("player_round", player_round)):
                if value is not None and not _is_int(value):
                    raise InvalidAnswerError(f"Invalid {name}")
            if text_answer is not None and not isinstance(text_answer, str):
                raise InvalidAnswerError("Invalid text answer")

            fields = {
                "answer_index": answer_index,
                "text_answer": text_answer,
                "wager": wager,
                "wager_slot": wager_slot,
                "player_round": player_round,
            }
            # One statement so concurrent first submissions for the same pair
            # cannot both insert; NULL keeps the stored value on conflict
            conn.execute(
                sql_text(
                    """
                    INSERT INTO player_answers (
                        id, player_id, question_id, answer_index, text_answer,
                        wager, wager_slot, player_round
                    ) VALUES (
                        :id, :pid, :qid, :answer_index, :text_answer,
                        :wager, :wager_slot, :player_round
                    )
                    ON CONFLICT (player_id, question_id) DO UPDATE SET
                        answer_index = COALESCE(excluded.answer_index, player_answers.answer_index),
                        text_answer = COALESCE(excluded.text_answer, player_answers.text_answer),
                        wager = COALESCE(excluded.wager, player_answers.wager),
                        wager_slot = COALESCE(excluded.wager_slot, player_answers.wager_slot),
                        player_round = COALESCE(excluded.player_round, player_answers.player_round)
                    """
                ),
                {"id": str(uuid.uuid4()), "pid": str(player_id), "qid": str(question_id), **fields},
            )
        logger.info("game_store.answer_saved player_id=%s question_id=%s", player_id, question_id)

    @staticmethod
    def _check_answer_index(question: Any, answer_index: Any) -> None:
        if answer_index is None:
            return
        if not _is_int(answer_index):
            raise InvalidAnswerError("Invalid answer index")
        if question["is_fill_in_blank"]:
            return
        choices = _load_json_list(question["choices"])
        if not 0 <= answer_index < len(choices):
            raise InvalidAnswerError("Invalid answer index")

    @staticmethod
    def _check_wager(question: Any, wager: Any) -> None:
        if wager is None:
            return
        if not _is_int(wager) or wager < 0:
            raise InvalidWagerError()
        max_wager = question["max_wager"]
        if question["has_wager"] and max_wager is not None and wager > max_wager:
            raise InvalidWagerError(f"Wager cannot exceed {max_wager}")


__all__ = [
    "GameStore",
    "DEFAULT_EXPIRY_DAYS",
    "QUESTION_ORDER_FALLBACK",
    "CLEANUP_PROBABILITY",
]
