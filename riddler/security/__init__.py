"""Input sanitization and output validation for Riddler."""

from riddler.security.input_sanitizer import InputSanitizer
from riddler.security.output_validator import OutputValidator
from riddler.security.prompt_builder import PromptBuilder

__all__ = [
    "InputSanitizer",
    "PromptBuilder",
    "OutputValidator",
]
