"""Input sanitization for player answers."""

import re
import unicodedata

from riddler.config import DEFAULT_MAX_ANSWER_LENGTH


class InputSanitizer:
    """Sanitizes player answers before they reach the Guardian's grading prompt."""

    # Special tokens that could be used for prompt injection
    DANGEROUS_TOKENS = [
        "{",
        "}",
        "<|",
        "|>",
        "[INST]",
        "[/INST]",
        "<|im_start|>",
        "<|im_end|>",
        "<|system|>",
        "<|user|>",
        "<|assistant|>",
        "<<SYS>>",
        "<</SYS>>",
        "[SYSTEM]",
        "[/SYSTEM]",
        "```",
    ]

    # Phrases a player might use to talk the Guardian into a "yes"
    VERDICT_INJECTION_PATTERNS = [
        r"ignore\s+(all\s+|the\s+)?(previous|above|prior)",
        r"(answer|reply|respond|say)\s+(with\s+)?[\"']?(yes|true|correct)\b",
        r"\"?correct\"?\s*:\s*true",
        r"\bsystem\s*:",
    ]

    MAX_INPUT_LENGTH = DEFAULT_MAX_ANSWER_LENGTH

    def __init__(self, max_length: int = MAX_INPUT_LENGTH) -> None:
        """Initialize sanitizer with configurable limits."""
        self.max_length = max_length

    def sanitize(self, input_text: str) -> str:
        """
        Sanitize input text by:
        1. Normalizing unicode
        2. Stripping dangerous tokens
        3. Removing control characters and newlines
        4. Truncating to max length
        5. Stripping whitespace
        """
        if not isinstance(input_text, str):
            raise TypeError(f"Input must be a string, got {type(input_text)}")

        normalized = unicodedata.normalize("NFKC", input_text)

        sanitized = normalized
        # Longest first so composite tokens are removed whole
        for token in sorted(self.DANGEROUS_TOKENS, key=len, reverse=True):
            sanitized = sanitized.replace(token, "")

        # Answers are single-line; newlines could smuggle extra instructions
        sanitized = re.sub(r"[\r\n\t]+", " ", sanitized)
        sanitized = re.sub(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]", "", sanitized)

        if len(sanitized) > self.max_length:
            sanitized = sanitized[: self.max_length]

        return sanitized.strip()

    def looks_like_injection(self, input_text: str) -> bool:
        """Check whether an answer tries to dictate the Guardian's verdict."""
        return any(
            re.search(pattern, input_text, re.IGNORECASE) for pattern in self.VERDICT_INJECTION_PATTERNS
        )
