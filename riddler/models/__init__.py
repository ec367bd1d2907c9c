"""Data models module for Riddler."""

# Metadata
from riddler.models.metadata import DIFFICULTY_DESCRIPTIONS, Difficulty

# Riddles and sessions
from riddler.models.riddle import (
    AnswerOutcome,
    GradingMode,
    ResolvedRiddle,
    Riddle,
    RiddleSession,
    RiddleStatus,
)

# Generation service schemas
from riddler.models.service import GradingVerdict, RiddleDraft, RiddleRequest

# State
from riddler.models.state import SAVE_FORMAT, SAVE_FORMAT_VERSION, GameState, SaveRecord

__all__ = [
    # Metadata
    "Difficulty",
    "DIFFICULTY_DESCRIPTIONS",
    # Riddles and sessions
    "Riddle",
    "RiddleSession",
    "RiddleStatus",
    "GradingMode",
    "ResolvedRiddle",
    "AnswerOutcome",
    # Generation service schemas
    "RiddleRequest",
    "RiddleDraft",
    "GradingVerdict",
    # State
    "GameState",
    "SaveRecord",
    "SAVE_FORMAT",
    "SAVE_FORMAT_VERSION",
]
