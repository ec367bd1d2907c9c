"""Validates Guardian outputs against Pydantic schemas."""

import json
import logging
import re
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar("T", bound=BaseModel)

logger = logging.getLogger(__name__)


class OutputValidator:
    """Validates Guardian outputs against Pydantic schemas."""

    def __init__(self) -> None:
        """Initialize output validator."""
        self.suspicious_patterns: list[str] = []

    @staticmethod
    def extract_json(text: str) -> str:
        """Pull a JSON object out of a reply that may be wrapped in markdown or prose."""
        content = text.strip()
        if content.startswith("```"):
            lines = content.split("\n")
            content = "\n".join(line for line in lines if not line.strip().startswith("```"))
        if not content.lstrip().startswith("{"):
            match = re.search(r"\{.*\}", content, flags=re.S)
            if match:
                content = match.group(0)
        return content.strip()

    def validate(
        self,
        output: Any,
        schema: type[T],
        strict: bool = True,
    ) -> tuple[bool, Optional[T], Optional[str]]:
        """
        Validate output against Pydantic schema.
        Returns (is_valid, parsed_output, error_message).
        """
        try:
            if strict and isinstance(output, str):
                try:
                    output = json.loads(self.extract_json(output))
                except json.JSONDecodeError:
                    return False, None, f"Output is not valid JSON: {output[:100]}"

            parsed = schema.model_validate(output)
            return True, parsed, None

        except ValidationError as e:
            error_msg = f"Validation failed: {e.errors()}"
            logger.warning(f"Output validation failed: {error_msg}")
            return False, None, error_msg

    def check_suspicious_patterns(self, output: str) -> list[str]:
        """
        Check output for signs the Guardian leaked instructions or broke character.
        Returns list of detected patterns.
        """
        detected: list[str] = []

        suspicious = [
            (r"ignore\s+(previous|all|above)", "Ignore instruction pattern"),
            (r"system\s*:\s*", "System instruction pattern"),
            (r"<\|.*?\|>", "Special token pattern"),
            (r"as an ai( language)? model", "Broken persona pattern"),
        ]

        for pattern, description in suspicious:
            if re.search(pattern, output, re.IGNORECASE):
                detected.append(description)
                if description not in self.suspicious_patterns:
                    self.suspicious_patterns.append(description)
                    logger.warning(f"Suspicious pattern detected: {description}")

        return detected

    def log_suspicious_activity(self, output: str, context: Optional[dict[str, Any]] = None) -> None:
        """Log suspicious activity for monitoring."""
        patterns = self.check_suspicious_patterns(output)
        if patterns:
            logger.warning(
                f"Suspicious patterns detected: {patterns}",
                extra={"output": output[:200], "context": context, "patterns": patterns},
            )
