"""Agents package."""

from riddler.agents.base import RiddleService
from riddler.agents.guardian import GuardianAgent

__all__ = [
    "RiddleService",
    "GuardianAgent",
]
