"""Riddle session state machine."""

import hashlib
import logging
import re
import unicodedata
from datetime import datetime
from typing import Callable, Optional

from riddler.engine.scoring import ScoreModel
from riddler.errors import InvalidStateTransition
from riddler.models.metadata import Difficulty
from riddler.models.riddle import (
    AnswerOutcome,
    GradingMode,
    ResolvedRiddle,
    Riddle,
    RiddleSession,
    RiddleStatus,
)
from riddler.models.service import GradingVerdict, RiddleDraft

logger = logging.getLogger(__name__.split(".")[-1])

# Grader receives the riddle and the sanitized answer
Grader = Callable[[Riddle, str], GradingVerdict]

_LEADING_ARTICLE = re.compile(r"^(a|an|the)\s+")
_LEADING_PUNCTUATION = re.compile(r"^[\s.!?,;:'\"]+")
_TRAILING_PUNCTUATION = re.compile(r"[\s.!?,;:'\"]+$")


def normalize_answer(text: str) -> str:
    """Normalize an answer for comparison: case, spacing, articles, surrounding quotes and punctuation."""
    normalized = unicodedata.normalize("NFKC", text).casefold().strip()
    normalized = re.sub(r"\s+", " ", normalized)
    normalized = _TRAILING_PUNCTUATION.sub("", normalized)
    normalized = _LEADING_PUNCTUATION.sub("", normalized)
    normalized = _LEADING_ARTICLE.sub("", normalized)
    return normalized


def riddle_fingerprint(prompt: str) -> str:
    """Stable opaque ID derived from the riddle text."""
    digest = hashlib.sha256(normalize_answer(prompt).encode("utf-8")).hexdigest()
    return digest[:16]


class RiddleLifecycle:
    """Applies player commands to a RiddleSession.

    Sessions are immutable; every transition returns a new session and
    leaves the input untouched.
    """

    @staticmethod
    def issue(draft: RiddleDraft, difficulty: Difficulty) -> RiddleSession:
        """Create a pending session for a freshly generated riddle."""
        riddle = Riddle(
            riddle_id=riddle_fingerprint(draft.prompt),
            prompt=draft.prompt,
            answer=draft.answer,
            hint=draft.hint,
            wisdom=draft.wisdom,
            difficulty=difficulty,
            grading=draft.grading,
        )
        return RiddleSession(riddle=riddle, started_at=datetime.now())

    @staticmethod
    def _require_pending(session: RiddleSession, command: str) -> None:
        if session.status is not RiddleStatus.PENDING:
            raise InvalidStateTransition(
                f"Cannot {command}: riddle {session.riddle.riddle_id} is already {session.status.value}"
            )

    @staticmethod
    def request_hint(session: RiddleSession) -> tuple[RiddleSession, str]:
        """
        Reveal the hint.

        Repeated requests return the same session, so the hint penalty
        is only ever counted once.

        Returns:
            Tuple of (session, hint_text)
        """
        RiddleLifecycle._require_pending(session, "request a hint")
        if session.hint_used:
            return session, session.riddle.hint
        return session.model_copy(update={"hint_used": True}), session.riddle.hint

    @staticmethod
    def submit_answer(
        session: RiddleSession, answer: str, grader: Optional[Grader] = None
    ) -> tuple[RiddleSession, AnswerOutcome]:
        """
        Grade an answer.

        A normalized match against the canonical answer always wins. Otherwise
        riddles with guardian grading are judged by the grader. If the grader
        raises, the exception propagates and no attempt is counted.

        Returns:
            Tuple of (session, outcome)
        """
        RiddleLifecycle._require_pending(session, "submit an answer")
        riddle = session.riddle

        remark: Optional[str] = None
        correct = normalize_answer(answer) == normalize_answer(riddle.answer)
        if not correct and riddle.grading is GradingMode.GUARDIAN and grader is not None:
            verdict = grader(riddle, answer)
            correct = verdict.correct
            remark = verdict.remark

        attempts = session.attempts + 1
        if not correct:
            logger.debug(f"Wrong answer for {riddle.riddle_id} (attempt {attempts})")
            return (
                session.model_copy(update={"attempts": attempts}),
                AnswerOutcome(correct=False, attempts=attempts, remark=remark),
            )

        reward = ScoreModel.compute_reward(riddle.difficulty, attempts, session.hint_used)
        solved = session.model_copy(update={"attempts": attempts, "status": RiddleStatus.SOLVED})
        return solved, AnswerOutcome(
            correct=True, attempts=attempts, reward=reward, wisdom=riddle.wisdom, remark=remark
        )

    @staticmethod
    def abandon(session: RiddleSession) -> RiddleSession:
        """Give up on the riddle; it earns nothing."""
        RiddleLifecycle._require_pending(session, "abandon")
        return session.model_copy(update={"status": RiddleStatus.ABANDONED})

    @staticmethod
    def resolve(session: RiddleSession, reward: int) -> ResolvedRiddle:
        """Build the history entry for a session in a terminal state."""
        if not session.status.is_terminal:
            raise InvalidStateTransition(f"Riddle {session.riddle.riddle_id} is still pending")
        return ResolvedRiddle(
            riddle_id=session.riddle.riddle_id,
            prompt=session.riddle.prompt,
            difficulty=session.riddle.difficulty,
            status=session.status,
            attempts=session.attempts,
            hint_used=session.hint_used,
            reward=reward,
            resolved_at=datetime.now(),
        )
