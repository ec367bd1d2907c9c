"""Riddle, riddle session and resolution models."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from riddler.models.metadata import Difficulty


class GradingMode(str, Enum):
    """How a submitted answer is judged."""

    EXACT = "exact"  # Normalized string comparison only
    GUARDIAN = "guardian"  # Fall back to the Guardian's verdict


class RiddleStatus(str, Enum):
    """Lifecycle status of a riddle session."""

    PENDING = "pending"
    SOLVED = "solved"
    ABANDONED = "abandoned"

    @property
    def is_terminal(self) -> bool:
        return self is not RiddleStatus.PENDING


class Riddle(BaseModel):
    """A single riddle as issued by the Guardian."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    riddle_id: str = Field(min_length=1, description="Opaque identifier, unique per game")
    prompt: str = Field(min_length=1, description="Riddle text shown to the player")
    answer: str = Field(min_length=1, description="Canonical answer")
    hint: str = Field(min_length=1, description="Hint revealed on request")
    wisdom: str = Field(default="", description="Insight revealed once the riddle is solved")
    difficulty: Difficulty = Field(description="Difficulty the riddle was issued at")
    grading: GradingMode = Field(default=GradingMode.GUARDIAN, description="Grading rule")


class RiddleSession(BaseModel):
    """Lifecycle of one riddle, from issuance to resolution."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    riddle: Riddle = Field(description="The riddle being played")
    attempts: int = Field(ge=0, default=0, description="Graded answers submitted so far")
    hint_used: bool = Field(default=False, description="Whether the hint was revealed")
    started_at: datetime = Field(default_factory=datetime.now, description="When the riddle was issued")
    status: RiddleStatus = Field(default=RiddleStatus.PENDING, description="Lifecycle status")


class ResolvedRiddle(BaseModel):
    """History entry for a riddle that reached a terminal status."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    riddle_id: str
    prompt: str
    difficulty: Difficulty
    status: RiddleStatus
    attempts: int = Field(ge=0)
    hint_used: bool
    reward: int = Field(ge=0)
    resolved_at: datetime = Field(default_factory=datetime.now)


class AnswerOutcome(BaseModel):
    """Result of grading one submitted answer."""

    model_config = ConfigDict(frozen=True)  # Immutable model

    correct: bool
    attempts: int = Field(ge=0)
    reward: int = Field(ge=0, default=0)
    wisdom: Optional[str] = Field(default=None, description="Revealed only on a correct answer")
    remark: Optional[str] = Field(default=None, description="Guardian's comment on the answer, if any")

    @property
    def try_again(self) -> bool:
        return not self.correct
