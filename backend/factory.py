"""Composition root for backend services."""

from __future__ import annotations

from assistant.category_suggester import CategorySuggester
from assistant.filter_extractor import FilterExtractor
from backend.repositories.transactions_repository import InMemoryTransactionsRepository, TransactionsRepository
from backend.services.transaction_service import TransactionService
from shared import config


def build_transactions_repository() -> TransactionsRepository:
    """Build the transaction store; the in-memory adapter is the only one available."""

    return InMemoryTransactionsRepository()


def build_transaction_service(transactions_repository: TransactionsRepository) -> TransactionService:
    """Build the search service over an existing repository."""

    return TransactionService(
        transactions_repository=transactions_repository,
        filter_extractor=FilterExtractor(model=config.ai_model()),
    )


def build_category_suggester() -> CategorySuggester:
    return CategorySuggester(model=config.ai_model())
