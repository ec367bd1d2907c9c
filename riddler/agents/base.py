"""Interface of the riddle generation service."""

from abc import ABC, abstractmethod

from riddler.models.riddle import Riddle
from riddler.models.service import GradingVerdict, RiddleDraft, RiddleRequest


class RiddleService(ABC):
    """Generates riddles and judges answers.

    Implementations raise ServiceUnavailable when the backend cannot be
    reached or times out, and InvalidServiceResponse when it replies with
    content that does not match the expected schema.
    """

    @abstractmethod
    def generate_riddle(self, request: RiddleRequest) -> RiddleDraft:
        """Produce a new riddle at the requested difficulty."""

    @abstractmethod
    def grade_answer(self, riddle: Riddle, answer: str) -> GradingVerdict:
        """Judge whether an answer solves the riddle."""
