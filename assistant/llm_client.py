"""OpenAI chat completion client shared by assistant operations."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

from shared import config


class ChatCompletionClient(Protocol):
    """Abstraction over OpenAI chat completion for easy mocking in tests."""

    def create_chat_completion(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str | dict[str, Any],
    ) -> dict[str, Any]:
        """Create a chat completion payload."""


@dataclass(slots=True)
class OpenAIChatClientImpl:
    """Concrete OpenAI chat client wrapper."""

    api_key: str
    timeout_s: float | None = 20.0

    def create_chat_completion(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str | dict[str, Any],
    ) -> dict[str, Any]:
        from openai import OpenAI

        client_kwargs: dict[str, Any] = {"api_key": self.api_key, "max_retries": 0}
        if self.timeout_s is not None:
            client_kwargs["timeout"] = self.timeout_s

        client = OpenAI(**client_kwargs)
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            tools=tools,
            tool_choice=tool_choice,
        )
        return response.model_dump(mode="json")


def build_default_client() -> ChatCompletionClient | None:
    """Return an OpenAI client when language-model features are configured."""

    if not config.ai_enabled():
        return None

    api_key = config.openai_api_key()
    if not api_key:
        return None

    return OpenAIChatClientImpl(api_key=api_key, timeout_s=config.ai_timeout_seconds())


def forced_tool_choice(tool_name: str) -> dict[str, Any]:
    """Return a tool_choice payload forcing a single function call."""
    return {"type": "function", "function": {"name": tool_name}}


def parse_tool_arguments(response: dict[str, Any], tool_name: str) -> dict[str, Any]:
    """Return decoded arguments of the first `tool_name` call in a completion.

    Raises `ValueError` describing what is missing or malformed.
    """

    choices = response.get("choices") or []
    first_choice = choices[0] if choices else {}
    message = first_choice.get("message") if isinstance(first_choice, dict) else None
    if not isinstance(message, dict):
        raise ValueError("Completion has no message.")

    tool_calls = message.get("tool_calls") or []
    if not tool_calls:
        raise ValueError("Completion has no tool call.")

    tool_call = tool_calls[0] if isinstance(tool_calls[0], dict) else {}
    function_data = tool_call.get("function")
    if not isinstance(function_data, dict) or function_data.get("name") != tool_name:
        raise ValueError(f"Completion did not call {tool_name}.")

    raw_arguments = function_data.get("arguments")
    if raw_arguments is None:
        raw_arguments = "{}"
    if not isinstance(raw_arguments, str):
        raise ValueError("Tool arguments must be a JSON string.")

    try:
        parsed_args = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON arguments from tool call: {exc}") from exc

    if not isinstance(parsed_args, dict):
        raise ValueError("Tool arguments JSON must deserialize to an object.")
    return parsed_args
