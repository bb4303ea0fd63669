"""Natural-language search: extract filters, then apply them."""

from __future__ import annotations

from collections.abc import Iterable

from assistant.filter_extractor import FilterExtractor
from backend.services.transaction_filter import apply_filter
from shared.models import Transaction


def search(
    query: str,
    transactions: Iterable[Transaction],
    *,
    extractor: FilterExtractor | None = None,
) -> list[Transaction]:
    """Return the transactions matching `query`.

    `ExtractionError` propagates unchanged; what to show instead is up to the caller.
    """

    filters = (extractor or FilterExtractor()).extract(query)
    return apply_filter(transactions, filters)
