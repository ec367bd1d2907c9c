"""Difficulty levels."""

from enum import Enum


class Difficulty(str, Enum):
    """Riddle difficulty levels."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DIFFICULTY_DESCRIPTIONS: dict[Difficulty, str] = {
    Difficulty.EASY: "Easy: Simple riddles suitable for beginners",
    Difficulty.MEDIUM: "Medium: Challenging riddles that will make you think",
    Difficulty.HARD: "Hard: Complex mind-benders for riddle masters",
}
