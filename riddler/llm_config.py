"""LLM configuration and management."""

import logging
from typing import Literal, Optional

from langchain.chat_models import BaseChatModel
from langchain_ollama import ChatOllama
from langchain_openai import ChatOpenAI
from pydantic import BaseModel, Field

from riddler.config import (
    DEFAULT_LLM_MODEL,
    DEFAULT_LLM_PROVIDER,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_OLLAMA_BASE_URL,
    DEFAULT_OPENAI_API_KEY,
    DEFAULT_OPENAI_BASE_URL,
)

logger = logging.getLogger(__name__.split(".")[-1])


class LLMConfig(BaseModel):
    """LLM configuration model."""

    provider: Literal["openai", "ollama"] = Field(
        default=DEFAULT_LLM_PROVIDER, description="LLM provider"
    )
    api_key: Optional[str] = Field(default=DEFAULT_OPENAI_API_KEY or None, description="API key for OpenAI")
    base_url: Optional[str] = Field(
        default=None, description="Base URL (for Ollama or custom OpenAI endpoints)"
    )
    model: str = Field(default=DEFAULT_LLM_MODEL, description="Model name")
    temperature: float = Field(
        default=DEFAULT_LLM_TEMPERATURE, ge=0.0, le=2.0, description="Temperature"
    )
    max_tokens: Optional[int] = Field(default=None, ge=1, description="Max tokens")
    timeout: int = Field(default=DEFAULT_LLM_TIMEOUT, ge=1, description="Per-request timeout in seconds")

    def resolved_base_url(self) -> Optional[str]:
        """Base URL to use, falling back to the provider default."""
        if self.base_url:
            return self.base_url
        if self.provider == "ollama":
            return DEFAULT_OLLAMA_BASE_URL.rstrip("/")
        return DEFAULT_OPENAI_BASE_URL or None


class LLMConfigManager:
    """Manages LLM configuration and lazy model construction."""

    def __init__(self, initial_config: Optional[LLMConfig] = None) -> None:
        """Initialize with optional config."""
        self._config = initial_config or LLMConfig()
        self._llm_instance: Optional[BaseChatModel] = None
        # Don't build the model at creation time - wait until first use
        # This allows the game to start without API keys

    @property
    def config(self) -> LLMConfig:
        """Get current config."""
        return self._config

    def update_config(self, new_config: LLMConfig) -> None:
        """Update configuration; the model is rebuilt on next use."""
        self._config = new_config
        self._llm_instance = None

    def get_llm(self) -> BaseChatModel:
        """Get current LLM instance, building it on first use."""
        if self._llm_instance is None:
            self._llm_instance = self._build_llm()
        return self._llm_instance

    def _build_llm(self) -> BaseChatModel:
        """Build LLM instance based on current config."""
        base_url = self._config.resolved_base_url()

        if self._config.provider == "ollama":
            kwargs = {
                "model": self._config.model,
                "temperature": self._config.temperature,
                "base_url": base_url,
                "client_kwargs": {"timeout": self._config.timeout},
            }
            if self._config.max_tokens:
                kwargs["num_predict"] = self._config.max_tokens
            logger.info(f"Using Ollama model {self._config.model} at {base_url}")
            return ChatOllama(**kwargs)

        kwargs = {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "timeout": self._config.timeout,
            "max_retries": 0,  # Retries are bounded by the game engine
        }
        if self._config.max_tokens:
            kwargs["max_tokens"] = self._config.max_tokens
        # Only set api_key if provided (allows OPENAI_API_KEY environment fallback)
        if self._config.api_key:
            kwargs["api_key"] = self._config.api_key
        if base_url:
            kwargs["base_url"] = base_url
        logger.info(f"Using OpenAI model {self._config.model}")
        return ChatOpenAI(**kwargs)
