"""Single-call category suggestions for a transaction being recorded."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from assistant.errors import SuggestionError
from assistant.llm_client import (
    ChatCompletionClient,
    build_default_client,
    forced_tool_choice,
    parse_tool_arguments,
)
from shared import config
from shared.categories import TRANSACTION_CATEGORIES, normalize_category_name


logger = logging.getLogger(__name__)

SUGGEST_CATEGORIES_TOOL = "suggest_transaction_categories"


@dataclass(slots=True)
class CategorySuggester:
    """Suggest categories for a transaction from its title and notes."""

    model: str = field(default_factory=config.ai_model)
    client: ChatCompletionClient | None = None

    @staticmethod
    def _tool_definitions() -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": SUGGEST_CATEGORIES_TOOL,
                    "description": "Record categories for the transaction, most relevant first.",
                    "parameters": {
                        "type": "object",
                        "properties": {
                            "suggestedCategories": {
                                "type": "array",
                                "items": {"type": "string"},
                                "description": "A list of suggested categories for the transaction.",
                            }
                        },
                        "required": ["suggestedCategories"],
                        "additionalProperties": False,
                    },
                },
            }
        ]

    @staticmethod
    def _messages(title: str, notes: str | None) -> list[dict[str, str]]:
        system_prompt = (
            "You are an AI financial assistant. Your task is to suggest a list of relevant categories "
            "for a user's financial transaction based on its title and any associated notes.\n\n"
            f"Consider common financial categories such as: {', '.join(TRANSACTION_CATEGORIES)}.\n\n"
            "Provide at least 3 relevant categories, ordered from most to least relevant."
        )
        user_content = f"Transaction Title: {title}"
        if notes:
            user_content += f"\nNotes: {notes}"
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ]

    def _client(self) -> ChatCompletionClient:
        if self.client is not None:
            return self.client

        client = build_default_client()
        if client is None:
            raise SuggestionError(
                "AI suggestions are not configured.",
                details={"hint": "Set AI_SEARCH_ENABLED=true and OPENAI_API_KEY.", "retryable": False},
            )
        return client

    @staticmethod
    def _clean(raw_categories: object) -> list[str]:
        if not isinstance(raw_categories, list) or not all(isinstance(item, str) for item in raw_categories):
            raise SuggestionError("suggestedCategories must be a list of strings.")

        suggestions: list[str] = []
        seen: set[str] = set()
        for item in raw_categories:
            name = item.strip()
            key = normalize_category_name(name)
            if not key or key in seen:
                continue
            seen.add(key)
            suggestions.append(name)
        return suggestions

    def suggest(self, title: str, notes: str | None = None) -> list[str]:
        client = self._client()
        try:
            response = client.create_chat_completion(
                model=self.model,
                messages=self._messages(title, notes),
                tools=self._tool_definitions(),
                tool_choice=forced_tool_choice(SUGGEST_CATEGORIES_TOOL),
            )
            arguments = parse_tool_arguments(response, SUGGEST_CATEGORIES_TOOL)
        except Exception as exc:
            logger.warning("category_suggestion_failed error_type=%s", type(exc).__name__)
            raise SuggestionError(
                "Could not get category suggestions.",
                details={"error": str(exc), "retryable": True},
            ) from exc

        return self._clean(arguments.get("suggestedCategories"))


def suggest_categories(
    title: str,
    notes: str | None = None,
    *,
    suggester: CategorySuggester | None = None,
) -> list[str]:
    """Return suggested categories for a transaction, most relevant first."""

    return (suggester or CategorySuggester()).suggest(title, notes)
