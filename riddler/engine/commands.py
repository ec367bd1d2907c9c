"""Player command parsing and dispatch."""

from enum import Enum
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, ConfigDict, Field

from riddler.models.riddle import AnswerOutcome, ResolvedRiddle, Riddle
from riddler.models.state import GameState

if TYPE_CHECKING:
    from riddler.engine.game_engine import GameEngine


class CommandType(str, Enum):
    """Commands a player can issue during play."""

    ANSWER = "answer"
    HINT = "hint"
    SHOW_RIDDLE = "show_riddle"
    NEW_RIDDLE = "new_riddle"
    ABANDON = "abandon"
    STATUS = "status"
    QUIT = "quit"


KEYWORDS: dict[str, CommandType] = {
    "hint": CommandType.HINT,
    "riddle": CommandType.SHOW_RIDDLE,
    "new": CommandType.NEW_RIDDLE,
    "skip": CommandType.ABANDON,
    "abandon": CommandType.ABANDON,
    "score": CommandType.STATUS,
    "quit": CommandType.QUIT,
    "exit": CommandType.QUIT,
}


class PlayerCommand(BaseModel):
    """One parsed line of player input."""

    model_config = ConfigDict(frozen=True)

    command_type: CommandType
    text: str = Field(default="", description="Raw answer text for ANSWER commands")


class CommandResult(BaseModel):
    """Everything the presentation layer needs to render a command's effect."""

    model_config = ConfigDict(frozen=True)

    command_type: CommandType
    riddle: Optional[Riddle] = None
    hint: Optional[str] = None
    outcome: Optional[AnswerOutcome] = None
    resolved: Optional[ResolvedRiddle] = None
    state: Optional[GameState] = None


def parse_command(line: str) -> PlayerCommand:
    """Map a raw input line to a command; anything that is not a keyword is an answer."""
    keyword = line.strip().lower()
    command_type = KEYWORDS.get(keyword)
    if command_type is None:
        return PlayerCommand(command_type=CommandType.ANSWER, text=line)
    return PlayerCommand(command_type=command_type)


def execute_command(engine: "GameEngine", command: PlayerCommand) -> CommandResult:
    """
    Apply a player command to the engine.

    Engine errors propagate unchanged so the caller can report them and
    keep the command loop running.
    """
    command_type = command.command_type
    result: dict = {"command_type": command_type}

    if command_type is CommandType.ANSWER:
        result["outcome"] = engine.submit_answer(command.text)
    elif command_type is CommandType.HINT:
        result["hint"] = engine.request_hint()
    elif command_type is CommandType.SHOW_RIDDLE:
        result["riddle"] = engine.show_riddle()
    elif command_type is CommandType.NEW_RIDDLE:
        result["riddle"] = engine.request_riddle()
    elif command_type is CommandType.ABANDON:
        result["resolved"] = engine.abandon_riddle()
    elif command_type is CommandType.QUIT:
        engine.quit()

    result["state"] = engine.state
    return CommandResult(**result)
