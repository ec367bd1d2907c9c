"""Secure prompt building using LangChain templates."""

from typing import Any

from langchain_core.messages import BaseMessage
from langchain_core.prompts import ChatPromptTemplate


class PromptBuilder:
    """Builds Guardian prompts using LangChain templates."""

    @staticmethod
    def escape_braces(text: str) -> str:
        """Escape literal braces so fixed text survives template formatting."""
        return text.replace("{", "{{").replace("}", "}}")

    @staticmethod
    def create_chat_prompt(system_template: str, user_template: str = "{user_input}") -> ChatPromptTemplate:
        """
        Create a chat prompt with separate system and user messages.
        Player content is inserted via template variables, never concatenated
        into the system message.
        """
        return ChatPromptTemplate.from_messages(
            [
                ("system", system_template),
                ("user", user_template),
            ]
        )

    @staticmethod
    def format_messages(template: ChatPromptTemplate, **kwargs: Any) -> list[BaseMessage]:
        """Format a chat template into messages ready for a chat model."""
        return template.format_messages(**kwargs)
