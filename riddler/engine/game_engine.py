"""Main game engine for riddle sessions, scoring and checkpoints."""

import functools
import logging
import time
import uuid
from datetime import datetime
from typing import Callable, Optional, TypeVar

from riddler.agents.base import RiddleService
from riddler.config import DEFAULT_SERVICE_MAX_ATTEMPTS, DEFAULT_SERVICE_RETRY_DELAY
from riddler.engine.scoring import ScoreModel
from riddler.engine.session import RiddleLifecycle
from riddler.errors import (
    InvalidOperation,
    InvalidServiceResponse,
    InvalidStateTransition,
    RequestCancelled,
    ServiceUnavailable,
)
from riddler.models.metadata import Difficulty
from riddler.models.riddle import AnswerOutcome, ResolvedRiddle, Riddle, RiddleSession
from riddler.models.service import GradingVerdict, RiddleRequest
from riddler.models.state import GameState, SaveRecord
from riddler.persistence.save_gateway import PersistenceGateway, parse_save_record
from riddler.security.input_sanitizer import InputSanitizer

logger = logging.getLogger(__name__.split(".")[-1])

R = TypeVar("R")


def _exclusive(method):
    """Reject a command issued while another one is still running."""

    @functools.wraps(method)
    def __wrapped(self: "GameEngine", *args, **kwargs):
        if self._busy:
            raise InvalidOperation(f"Cannot {method.__name__} while another command is in progress")
        self._busy = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._busy = False

    return __wrapped


class GameEngine:
    """State machine for one player's riddle game.

    The engine exclusively owns the current GameState. Every command builds
    a candidate state, checkpoints it through the persistence gateway and
    only then replaces the current state, so a failure at any step leaves
    the game exactly as it was.
    """

    def __init__(
        self,
        service: RiddleService,
        gateway: PersistenceGateway,
        sanitizer: Optional[InputSanitizer] = None,
        max_service_attempts: int = DEFAULT_SERVICE_MAX_ATTEMPTS,
        retry_delay: float = DEFAULT_SERVICE_RETRY_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize game engine.

        Args:
            service: Riddle generation service (the Guardian)
            gateway: Persistence gateway for checkpoints
            sanitizer: Sanitizer applied to answers before grading
            max_service_attempts: Upper bound on calls per generation or grading request
            retry_delay: Delay before the first retry in seconds, doubled for each further retry
            sleep: Sleep function used between retries
        """
        if max_service_attempts < 1:
            raise ValueError("max_service_attempts must be at least 1")
        self._service = service
        self._gateway = gateway
        self._sanitizer = sanitizer or InputSanitizer()
        self._max_service_attempts = max_service_attempts
        self._retry_delay = retry_delay
        self._sleep = sleep
        self._state: Optional[GameState] = None
        self._busy = False

    @property
    def state(self) -> Optional[GameState]:
        """Get current game state (None before a game is started or continued)."""
        return self._state

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------

    @_exclusive
    def start_new_game(self, difficulty: Difficulty = Difficulty.MEDIUM) -> GameState:
        """
        Start a fresh game. No riddle is fetched until the player asks for one.

        Args:
            difficulty: Initial difficulty

        Returns:
            The new GameState
        """
        state = GameState(
            game_id=str(uuid.uuid4()),
            state_version=0,
            started_at=datetime.now(),
            difficulty=self._coerce_difficulty(difficulty),
        )
        self._commit(state, "new game")
        logger.info(f"Started game {state.game_id} at {state.difficulty.value} difficulty")
        return self._state

    @_exclusive
    def continue_game(self, record: SaveRecord | dict | str | None = None) -> GameState:
        """
        Resume a saved game.

        Args:
            record: Save record (or its raw dict/JSON form); loaded from the gateway if None

        Returns:
            The restored GameState

        Raises:
            SaveNotFoundError: If no record is given and none is stored
            CorruptSaveError: If the record is structurally invalid
        """
        if record is None:
            save_record = self._gateway.load()
        else:
            save_record = parse_save_record(record)

        self._state = save_record.state
        logger.info(
            f"Continuing game {self._state.game_id}: score {self._state.total_score}, "
            f"{len(self._state.history)} riddles resolved"
        )
        return self._state

    @_exclusive
    def set_difficulty(self, level: Difficulty) -> GameState:
        """
        Change the difficulty for the next riddle.

        Raises:
            InvalidOperation: If a riddle is still pending or the level is unknown
        """
        state = self._require_game()
        if state.active_session is not None:
            raise InvalidOperation("Cannot change difficulty while a riddle is pending")

        level = self._coerce_difficulty(level)
        if level == state.difficulty:
            return state
        new_state = state.model_copy(update={"difficulty": level})
        self._commit(new_state, "difficulty changed")
        logger.info(f"Difficulty set to {level.value}")
        return self._state

    @_exclusive
    def save(self) -> SaveRecord:
        """Write an explicit checkpoint of the current state."""
        state = self._require_game()
        record = SaveRecord.from_state(state)
        self._gateway.save(record)
        return record

    def load(self) -> SaveRecord:
        """Read the stored save record without applying it."""
        return self._gateway.load()

    @_exclusive
    def quit(self) -> Optional[SaveRecord]:
        """Final checkpoint before the player leaves."""
        if self._state is None:
            return None
        record = SaveRecord.from_state(self._state)
        self._gateway.save(record)
        logger.info(f"Game {self._state.game_id} saved on quit")
        return record

    # ------------------------------------------------------------------
    # Riddle commands
    # ------------------------------------------------------------------

    @_exclusive
    def request_riddle(self) -> Riddle:
        """
        Ask the Guardian for a new riddle at the current difficulty.

        Returns:
            The issued Riddle

        Raises:
            InvalidOperation: If a riddle is already pending
            ServiceUnavailable: If the Guardian failed on every attempt
            InvalidServiceResponse: If the Guardian kept replying with unusable riddles
            RequestCancelled: If the player interrupted the request
        """
        state = self._require_game()
        if state.active_session is not None:
            raise InvalidOperation("A riddle is already in progress")

        seen_ids = set(state.history_ids)
        request = RiddleRequest(
            difficulty=state.difficulty,
            exclude_ids=frozenset(seen_ids),
            seen_prompts=[entry.prompt for entry in state.history],
        )

        def fetch() -> RiddleSession:
            draft = self._service.generate_riddle(request)
            session = RiddleLifecycle.issue(draft, state.difficulty)
            if session.riddle.riddle_id in seen_ids:
                raise InvalidServiceResponse(f"Guardian repeated riddle {session.riddle.riddle_id}")
            return session

        session = self._call_service(fetch, "riddle generation")

        new_state = state.model_copy(update={"active_session": session})
        self._commit(new_state, "riddle issued")
        logger.info(f"Issued riddle {session.riddle.riddle_id} ({session.riddle.difficulty.value})")
        return session.riddle

    @_exclusive
    def submit_answer(self, text: str) -> AnswerOutcome:
        """
        Submit an answer to the pending riddle.

        Returns:
            AnswerOutcome; on a correct answer the reward has been added to the score

        Raises:
            InvalidStateTransition: If no riddle is pending
            InvalidOperation: If the answer is empty after sanitization
            ServiceUnavailable / InvalidServiceResponse: If guardian grading failed
        """
        state = self._require_game()
        session = self._require_session(state, "submit an answer")

        answer = self._sanitizer.sanitize(text)
        if not answer:
            raise InvalidOperation("Answer is empty")

        grader = self._grade
        if self._sanitizer.looks_like_injection(answer):
            # Only a literal match can solve it; the Guardian is not consulted
            logger.warning(f"Answer for {session.riddle.riddle_id} tries to instruct the Guardian")
            grader = None

        new_session, outcome = RiddleLifecycle.submit_answer(session, answer, grader)

        if outcome.correct:
            new_state = self._resolve(state, new_session, outcome.reward)
            self._commit(new_state, "riddle solved")
            logger.info(
                f"Riddle {session.riddle.riddle_id} solved in {outcome.attempts} attempts "
                f"for {outcome.reward} points"
            )
        else:
            new_state = state.model_copy(update={"active_session": new_session})
            self._commit(new_state, "wrong answer")
        return outcome

    @_exclusive
    def request_hint(self) -> str:
        """
        Reveal the pending riddle's hint. The penalty applies once per riddle.

        Raises:
            InvalidStateTransition: If no riddle is pending
        """
        state = self._require_game()
        session = self._require_session(state, "request a hint")

        new_session, hint = RiddleLifecycle.request_hint(session)
        if new_session is not session:
            new_state = state.model_copy(update={"active_session": new_session})
            self._commit(new_state, "hint used")
        return hint

    @_exclusive
    def abandon_riddle(self) -> ResolvedRiddle:
        """
        Give up on the pending riddle.

        Returns:
            The history entry recorded for it

        Raises:
            InvalidStateTransition: If no riddle is pending
        """
        state = self._require_game()
        session = self._require_session(state, "abandon")

        abandoned = RiddleLifecycle.abandon(session)
        new_state = self._resolve(state, abandoned, ScoreModel.abandon_reward())
        self._commit(new_state, "riddle abandoned")
        logger.info(f"Riddle {session.riddle.riddle_id} abandoned")
        return new_state.history[-1]

    def show_riddle(self) -> Riddle:
        """
        Return the pending riddle for re-display. Never changes state.

        Raises:
            InvalidStateTransition: If no riddle is pending
        """
        state = self._require_game()
        return self._require_session(state, "show the riddle").riddle

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_game(self) -> GameState:
        if self._state is None:
            raise InvalidOperation("No game in progress; start a new game or continue a saved one")
        return self._state

    @staticmethod
    def _coerce_difficulty(value: Difficulty | str) -> Difficulty:
        try:
            return Difficulty(value)
        except ValueError as e:
            raise InvalidOperation(f"Unknown difficulty: {value!r}") from e

    @staticmethod
    def _require_session(state: GameState, command: str) -> RiddleSession:
        session = state.active_session
        if session is None:
            raise InvalidStateTransition(f"Cannot {command}: no riddle is in progress")
        return session

    @staticmethod
    def _resolve(state: GameState, session: RiddleSession, reward: int) -> GameState:
        """Move a terminal session into history and credit its reward."""
        entry = RiddleLifecycle.resolve(session, reward)
        total = state.total_score + reward
        return state.model_copy(
            update={
                "history": state.history + [entry],
                "total_score": max(total, 0),
                "active_session": None,
            }
        )

    def _commit(self, new_state: GameState, reason: str) -> None:
        """Checkpoint a candidate state, then make it current.

        If the checkpoint fails the current state is left untouched and the
        SaveWriteError propagates.
        """
        versioned = new_state.model_copy(update={"state_version": new_state.state_version + 1})
        self._gateway.save(SaveRecord.from_state(versioned))
        self._state = versioned
        logger.debug(f"Checkpoint v{versioned.state_version}: {reason}")

    def _grade(self, riddle: Riddle, answer: str) -> GradingVerdict:
        return self._call_service(lambda: self._service.grade_answer(riddle, answer), "answer grading")

    def _call_service(self, call: Callable[[], R], tag: str) -> R:
        """
        Call the generation service with a bounded number of attempts.

        Raises the last ServiceUnavailable or InvalidServiceResponse once the
        attempts are used up, and RequestCancelled if the player interrupts.
        """
        last_error: Optional[Exception] = None
        for attempt in range(1, self._max_service_attempts + 1):
            try:
                return call()
            except (ServiceUnavailable, InvalidServiceResponse) as e:
                last_error = e
                if attempt >= self._max_service_attempts:
                    break
                delay = self._retry_delay * (2 ** (attempt - 1))
                logger.warning(
                    f"{tag} failed (attempt {attempt}/{self._max_service_attempts}), "
                    f"retrying in {delay:.1f}s: {e}"
                )
                try:
                    self._sleep(delay)
                except KeyboardInterrupt as interrupt:
                    raise RequestCancelled(f"{tag} cancelled") from interrupt
            except KeyboardInterrupt as interrupt:
                logger.info(f"{tag} cancelled by player")
                raise RequestCancelled(f"{tag} cancelled") from interrupt

        logger.error(f"{tag} failed after {self._max_service_attempts} attempts: {last_error}")
        raise last_error
