"""Natural-language query to TransactionFilter extraction backed by OpenAI tool calling."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from pydantic import ValidationError

from assistant.errors import ExtractionError
from assistant.llm_client import (
    ChatCompletionClient,
    build_default_client,
    forced_tool_choice,
    parse_tool_arguments,
)
from shared import config
from shared.models import TransactionFilter


logger = logging.getLogger(__name__)

EXTRACT_FILTERS_TOOL = "extract_transaction_filters"

_INSTRUCTIONS = """You are an AI assistant specialized in interpreting natural language queries for financial transactions.
Your task is to extract filtering criteria from the user's query and output them in a structured JSON format.
Do NOT perform the filtering yourself. Just extract the criteria.

Available filter fields:
- textSearch: Keywords to search within transaction titles and notes.
- category: A specific category (e.g., "Food", "Transport").
- minAmount: Minimum transaction amount. Expenses are negative amounts, income is positive.
- maxAmount: Maximum transaction amount. Expenses are negative amounts, income is positive.
- startDate: Start date in ISO 8601 format (YYYY-MM-DD). Convert relative terms like "last month" or "yesterday" to concrete YYYY-MM-DD dates.
- endDate: End date in ISO 8601 format (YYYY-MM-DD). Convert relative terms like "last month" or "yesterday" to concrete YYYY-MM-DD dates.

If a filter is not mentioned or implied in the query, do not include it in the output."""


def filter_parameters_schema() -> dict[str, Any]:
    """Return the JSON schema the model must fill for a TransactionFilter."""

    iso_date = {"type": "string", "format": "date", "pattern": r"^\d{4}-\d{2}-\d{2}$"}
    return {
        "type": "object",
        "properties": {
            "textSearch": {
                "type": "string",
                "description": "Keywords to search in transaction titles and notes (case-insensitive).",
            },
            "category": {
                "type": "string",
                "description": "Specific category to filter transactions by (case-insensitive).",
            },
            "minAmount": {"type": "number", "description": "Minimum amount for transactions."},
            "maxAmount": {"type": "number", "description": "Maximum amount for transactions."},
            "startDate": {
                **iso_date,
                "description": "Start date for filtering transactions, in ISO 8601 format (YYYY-MM-DD).",
            },
            "endDate": {
                **iso_date,
                "description": "End date for filtering transactions, in ISO 8601 format (YYYY-MM-DD).",
            },
        },
        "additionalProperties": False,
    }


@dataclass(slots=True)
class FilterExtractor:
    """Turn a free-text search query into a validated TransactionFilter."""

    model: str = field(default_factory=config.ai_model)
    client: ChatCompletionClient | None = None
    today: Callable[[], date] = date.today

    @staticmethod
    def _tool_definitions() -> list[dict[str, Any]]:
        return [
            {
                "type": "function",
                "function": {
                    "name": EXTRACT_FILTERS_TOOL,
                    "description": "Record the transaction filters implied by the user's query.",
                    "parameters": filter_parameters_schema(),
                },
            }
        ]

    @staticmethod
    def _messages(query: str, current_date: date) -> list[dict[str, str]]:
        system_prompt = (
            f"{_INSTRUCTIONS}\n"
            "When extracting dates, assume the current date is today, if needed to resolve relative dates. "
            f"The current date is {current_date.isoformat()}."
        )
        return [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": f'User query: "{query}"'},
        ]

    def _client(self) -> ChatCompletionClient:
        if self.client is not None:
            return self.client

        client = build_default_client()
        if client is None:
            raise ExtractionError(
                "AI search is not configured.",
                details={"hint": "Set AI_SEARCH_ENABLED=true and OPENAI_API_KEY.", "retryable": False},
            )
        return client

    def extract(self, query: str) -> TransactionFilter:
        """Return the filter criteria expressed by `query`.

        Raises `ExtractionError` when the model call fails or its output does not
        conform to the TransactionFilter schema.
        """

        client = self._client()
        logger.info("filter_extraction_requested query_length=%s model=%s", len(query), self.model)

        try:
            response = client.create_chat_completion(
                model=self.model,
                messages=self._messages(query, self.today()),
                tools=self._tool_definitions(),
                tool_choice=forced_tool_choice(EXTRACT_FILTERS_TOOL),
            )
        except Exception as exc:
            logger.warning("filter_extraction_request_failed error_type=%s", type(exc).__name__)
            raise ExtractionError(
                "Language model request failed.",
                details={"error": str(exc), "retryable": True},
            ) from exc

        try:
            arguments = parse_tool_arguments(response, EXTRACT_FILTERS_TOOL)
        except ValueError as exc:
            logger.warning("filter_extraction_malformed_output error=%s", exc)
            raise ExtractionError(
                "Language model returned malformed filter output.",
                details={"error": str(exc), "retryable": True},
            ) from exc

        try:
            filters = TransactionFilter.model_validate(arguments)
        except ValidationError as exc:
            logger.warning("filter_extraction_invalid_filters errors=%s", exc.error_count())
            raise ExtractionError(
                "Language model returned filters that do not match the schema.",
                details={"errors": exc.errors(include_url=False, include_context=False), "retryable": True},
            ) from exc

        logger.info("filter_extraction_succeeded filters=%s", filters.to_wire())
        return filters


def extract_filters(query: str, *, extractor: FilterExtractor | None = None) -> TransactionFilter:
    """Extract a TransactionFilter from a natural-language query."""

    return (extractor or FilterExtractor()).extract(query)
