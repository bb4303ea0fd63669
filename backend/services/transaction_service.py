"""Transaction service combining storage with natural-language search."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from assistant.filter_extractor import FilterExtractor
from backend.repositories.transactions_repository import TransactionsRepository
from backend.services.transaction_filter import apply_filter
from shared.models import TransactionFilter, TransactionSearchResult


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransactionService:
    """Search transactions held by the repository with a free-text query."""

    transactions_repository: TransactionsRepository
    filter_extractor: FilterExtractor = field(default_factory=FilterExtractor)

    def search_transactions(self, query: str) -> TransactionSearchResult:
        """Return matching transactions, newest first, with the filters used.

        A blank query clears the search and lists everything without a model
        call. `ExtractionError` propagates to the caller.
        """

        transactions = self.transactions_repository.list_all_transactions()
        if not query.strip():
            filters = TransactionFilter()
        else:
            filters = self.filter_extractor.extract(query)

        items = apply_filter(transactions, filters)
        logger.info(
            "transactions_search_completed candidates=%s matches=%s filters=%s",
            len(transactions),
            len(items),
            filters.to_wire(),
        )
        return TransactionSearchResult(query=query, filters=filters.to_wire(), items=items, total=len(items))
