"""Game engine package."""

from riddler.engine.commands import CommandResult, CommandType, PlayerCommand, execute_command, parse_command
from riddler.engine.game_engine import GameEngine
from riddler.engine.scoring import ScoreModel
from riddler.engine.session import RiddleLifecycle, normalize_answer, riddle_fingerprint

__all__ = [
    "GameEngine",
    "ScoreModel",
    "RiddleLifecycle",
    "normalize_answer",
    "riddle_fingerprint",
    "PlayerCommand",
    "CommandType",
    "CommandResult",
    "parse_command",
    "execute_command",
]
