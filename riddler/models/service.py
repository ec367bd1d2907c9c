"""Request and response schemas for the riddle generation service."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from riddler.models.metadata import Difficulty
from riddler.models.riddle import GradingMode


class RiddleRequest(BaseModel):
    """What the engine asks the Guardian for."""

    model_config = ConfigDict(frozen=True)

    difficulty: Difficulty
    exclude_ids: frozenset[str] = Field(default_factory=frozenset, description="Riddle IDs already seen")
    seen_prompts: list[str] = Field(default_factory=list, description="Recent riddle texts to avoid repeating")


class RiddleDraft(BaseModel):
    """Riddle content as returned by the Guardian, before the engine issues it."""

    prompt: str = Field(min_length=1, description="The riddle text")
    answer: str = Field(min_length=1, description="Canonical answer")
    hint: str = Field(min_length=1, description="A hint that does not give the answer away")
    wisdom: str = Field(min_length=1, description="Insight revealed once solved")
    grading: GradingMode = Field(default=GradingMode.GUARDIAN)

    @field_validator("prompt", "answer", "hint", "wisdom")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class GradingVerdict(BaseModel):
    """The Guardian's judgement of a submitted answer."""

    correct: bool
    remark: Optional[str] = Field(default=None)
