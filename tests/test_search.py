"""Tests for the extract-then-apply search composition and service."""

from __future__ import annotations

from datetime import date

import pytest

from assistant.errors import ExtractionError
from assistant.filter_extractor import EXTRACT_FILTERS_TOOL, FilterExtractor
from assistant.search import search
from backend.repositories.transactions_repository import InMemoryTransactionsRepository
from backend.services.transaction_service import TransactionService
from tests.fakes import DINNER, SALARY, FakeChatClient, response_with_tool_call


def _extractor(arguments: dict) -> tuple[FilterExtractor, FakeChatClient]:
    client = FakeChatClient(response_with_tool_call(EXTRACT_FILTERS_TOOL, arguments))
    return FilterExtractor(model="test-model", client=client, today=lambda: date(2024, 8, 1)), client


def test_search_applies_extracted_filters() -> None:
    extractor, _ = _extractor({"category": "dining out"})

    assert search("dining out", [DINNER, SALARY], extractor=extractor) == [DINNER]


def test_search_propagates_extraction_errors() -> None:
    extractor = FilterExtractor(model="test-model", client=FakeChatClient(error=ConnectionError("down")))

    with pytest.raises(ExtractionError):
        search("dining out", [DINNER, SALARY], extractor=extractor)


def test_service_search_returns_filters_and_newest_first_matches() -> None:
    extractor, _ = _extractor({"minAmount": 100})
    service = TransactionService(
        transactions_repository=InMemoryTransactionsRepository(),
        filter_extractor=extractor,
    )

    result = service.search_transactions("income over 100")

    assert result.filters == {"minAmount": 100.0}
    assert [item.id for item in result.items] == ["txn_2", "txn_9"]
    assert result.total == 2


def test_service_blank_query_lists_everything_without_model_call() -> None:
    extractor, client = _extractor({"category": "Food"})
    service = TransactionService(
        transactions_repository=InMemoryTransactionsRepository(),
        filter_extractor=extractor,
    )

    result = service.search_transactions("   ")

    assert result.filters == {}
    assert result.total == 10
    assert client.calls == []
