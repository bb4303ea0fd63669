"""Errors raised by language-model backed assistant operations."""

from __future__ import annotations


class AssistantError(Exception):
    """Base error for failed language-model operations."""

    def __init__(self, message: str, *, details: dict[str, object] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, object] = details or {}


class ExtractionError(AssistantError):
    """Raised when a search query cannot be turned into a valid filter."""


class SuggestionError(AssistantError):
    """Raised when category suggestions cannot be produced."""
