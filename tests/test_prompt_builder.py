"""Tests for PromptBuilder."""

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_core.prompts import ChatPromptTemplate

from riddler.security.prompt_builder import PromptBuilder


class TestPromptBuilder:
    """Test suite for PromptBuilder."""

    def test_create_chat_prompt(self):
        """Test creation of chat prompt."""
        prompt = PromptBuilder.create_chat_prompt("You are the Guardian.")
        assert isinstance(prompt, ChatPromptTemplate)
        assert prompt.input_variables == ["user_input"]

    def test_create_chat_prompt_with_user_template(self):
        """Test creation of chat prompt with user template."""
        prompt = PromptBuilder.create_chat_prompt("You are the Guardian.", "Riddle: {riddle}\nAnswer: {answer}")
        assert sorted(prompt.input_variables) == ["answer", "riddle"]

    def test_format_messages(self):
        """System and user content land in separate messages."""
        prompt = PromptBuilder.create_chat_prompt("You are the Guardian.")
        system, user = PromptBuilder.format_messages(prompt, user_input="an echo")
        assert isinstance(system, SystemMessage)
        assert isinstance(user, HumanMessage)
        assert system.content == "You are the Guardian."
        assert user.content == "an echo"

    def test_values_are_not_reformatted(self):
        """Braces inside a value are kept literally."""
        prompt = PromptBuilder.create_chat_prompt("You are the Guardian.")
        _, user = PromptBuilder.format_messages(prompt, user_input="{system}")
        assert user.content == "{system}"

    def test_escape_braces(self):
        """Escaped text survives template formatting unchanged."""
        fixed = 'Reply as {"correct": true}'
        prompt = PromptBuilder.create_chat_prompt(PromptBuilder.escape_braces(fixed))
        system, _ = PromptBuilder.format_messages(prompt, user_input="x")
        assert system.content == fixed
