"""Game state and save record models."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from riddler.models.metadata import Difficulty
from riddler.models.riddle import ResolvedRiddle, RiddleSession, RiddleStatus

SAVE_FORMAT = "riddler-save"
SAVE_FORMAT_VERSION = 1


class GameState(BaseModel):
    """Aggregate of player progress - immutable and self-contained."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    game_id: str = Field(description="Unique game identifier")
    state_version: int = Field(ge=0, default=0, description="Increments with each checkpointed change")
    started_at: datetime = Field(default_factory=datetime.now, description="When the game was started")

    total_score: int = Field(ge=0, default=0, description="Cumulative score, never negative")
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM, description="Current difficulty selection")

    # Resolved riddles in insertion order
    history: list[ResolvedRiddle] = Field(default_factory=list, description="Solved and abandoned riddles")

    active_session: Optional[RiddleSession] = Field(
        default=None, description="Riddle currently being played, None between riddles"
    )

    @model_validator(mode="after")
    def _active_session_is_pending(self) -> "GameState":
        # Finished riddles always move to history
        if self.active_session is not None and self.active_session.status.is_terminal:
            raise ValueError(
                f"active riddle {self.active_session.riddle.riddle_id} is already {self.active_session.status.value}"
            )
        return self

    @property
    def history_ids(self) -> list[str]:
        """Resolved riddle IDs in the order they were resolved."""
        return [entry.riddle_id for entry in self.history]

    @property
    def solved_count(self) -> int:
        return sum(1 for entry in self.history if entry.status is RiddleStatus.SOLVED)


class SaveRecord(BaseModel):
    """Serialized form of a GameState, as written to persistence."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    format: Literal["riddler-save"] = Field(default=SAVE_FORMAT, description="Format tag")
    version: Literal[1] = Field(default=SAVE_FORMAT_VERSION, description="Format version")
    saved_at: datetime = Field(default_factory=datetime.now, description="When the record was written")
    state: GameState = Field(description="Complete game state")

    @classmethod
    def from_state(cls, state: GameState) -> "SaveRecord":
        return cls(state=state)
