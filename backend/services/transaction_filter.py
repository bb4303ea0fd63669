"""Deterministic application of a TransactionFilter over in-memory transactions."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from shared.dates import to_calendar_day
from shared.models import Transaction, TransactionFilter


def _matches_text(transaction: Transaction, needle: str) -> bool:
    if needle in transaction.title.lower():
        return True
    return transaction.notes is not None and needle in transaction.notes.lower()


def apply_filter(transactions: Iterable[Transaction], filters: TransactionFilter) -> list[Transaction]:
    """Return transactions matching every present predicate, in input order.

    Absent fields are skipped. Contradictory bounds (for example a minimum
    above the maximum) simply match nothing.
    """

    rows: Sequence[Transaction] = list(transactions)

    if filters.text_search is not None:
        needle = filters.text_search.lower()
        rows = [row for row in rows if _matches_text(row, needle)]

    if filters.category is not None:
        category = filters.category.lower()
        rows = [row for row in rows if row.category.lower() == category]

    if filters.min_amount is not None:
        rows = [row for row in rows if row.amount >= filters.min_amount]
    if filters.max_amount is not None:
        rows = [row for row in rows if row.amount <= filters.max_amount]

    if filters.start_date is not None:
        start = filters.start_date
        rows = [row for row in rows if to_calendar_day(row.date) >= start]
    if filters.end_date is not None:
        end = filters.end_date
        rows = [row for row in rows if to_calendar_day(row.date) <= end]

    return list(rows)
