"""Central configuration defaults and constants for Riddler."""

import os

# LLM Provider Defaults
DEFAULT_LLM_PROVIDER = os.getenv("RIDDLER_LLM_PROVIDER", "openai")
DEFAULT_OLLAMA_BASE_URL = os.getenv("RIDDLER_OLLAMA_BASE_URL", "http://localhost:11434/")
DEFAULT_OPENAI_BASE_URL = os.getenv("RIDDLER_OPENAI_BASE_URL", "")
DEFAULT_OPENAI_API_KEY = os.getenv("RIDDLER_OPENAI_API_KEY", "")
DEFAULT_LLM_MODEL = os.getenv("RIDDLER_LLM_MODEL", "gpt-4o")
DEFAULT_LLM_TEMPERATURE = float(os.getenv("RIDDLER_LLM_TEMPERATURE", "0.9"))  # Riddles benefit from variety
DEFAULT_LLM_TIMEOUT = int(os.getenv("RIDDLER_LLM_TIMEOUT", "60"))

# Grading needs consistent yes/no verdicts
DEFAULT_GRADING_TEMPERATURE = float(os.getenv("RIDDLER_GRADING_TEMPERATURE", "0.1"))

# Generation service retry policy
DEFAULT_SERVICE_MAX_ATTEMPTS = int(os.getenv("RIDDLER_SERVICE_MAX_ATTEMPTS", "3"))
DEFAULT_SERVICE_RETRY_DELAY = float(os.getenv("RIDDLER_SERVICE_RETRY_DELAY", "1.0"))  # Seconds, doubled per retry

# Persistence
DEFAULT_SAVE_PATH = os.getenv("RIDDLER_SAVE_PATH", "riddler_save.json")

# Player input
DEFAULT_MAX_ANSWER_LENGTH = int(os.getenv("RIDDLER_MAX_ANSWER_LENGTH", "200"))

# How many previously seen riddles are quoted back to the Guardian
DEFAULT_SEEN_PROMPTS_LIMIT = int(os.getenv("RIDDLER_SEEN_PROMPTS_LIMIT", "20"))
