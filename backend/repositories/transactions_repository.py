"""Transactions repository interfaces and in-memory adapter."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol
from uuid import uuid4

from shared.dates import parse_timestamp
from shared.models import Transaction, TransactionCreateRequest, TransactionUpdateRequest


class TransactionNotFoundError(LookupError):
    """Raised when a transaction id is unknown."""

    def __init__(self, transaction_id: str) -> None:
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id


class TransactionsRepository(Protocol):
    def list_transactions(self, *, page: int = 1, limit: int = 10) -> tuple[list[Transaction], int]:
        """Return one page of transactions, newest first, plus the total count."""

    def list_all_transactions(self) -> list[Transaction]:
        """Return every transaction, newest first."""

    def get_transaction(self, transaction_id: str) -> Transaction:
        """Return one transaction or raise `TransactionNotFoundError`."""

    def create_transaction(self, request: TransactionCreateRequest) -> Transaction:
        """Create and return a transaction."""

    def update_transaction(self, transaction_id: str, request: TransactionUpdateRequest) -> Transaction:
        """Apply a partial update and return the updated transaction."""

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction or raise `TransactionNotFoundError`."""


def _seed_transaction(
    transaction_id: str,
    title: str,
    amount: str,
    category: str,
    booked_at: str,
    notes: str | None = None,
) -> Transaction:
    return Transaction(
        id=transaction_id,
        title=title,
        amount=Decimal(amount),
        category=category,
        date=parse_timestamp(booked_at),
        notes=notes,
    )


def sample_transactions() -> list[Transaction]:
    """Return the demo transactions a fresh in-memory store starts with."""

    return [
        _seed_transaction(
            "txn_1", "Grocery Shopping at FreshMart", "-75.50", "Groceries", "2024-07-28T10:00:00Z", "Weekly groceries"
        ),
        _seed_transaction("txn_2", "Monthly Salary", "3500.00", "Income", "2024-07-25T09:00:00Z", "July Salary"),
        _seed_transaction("txn_3", "Dinner at The Italian Place", "-55.00", "Dining Out", "2024-07-26T19:30:00Z"),
        _seed_transaction(
            "txn_4", "Netflix Subscription", "-15.99", "Subscriptions", "2024-07-20T12:00:00Z", "Monthly plan"
        ),
        _seed_transaction("txn_5", "Train ticket to City Center", "-5.50", "Transport", "2024-07-22T08:15:00Z"),
        _seed_transaction("txn_6", "New T-shirt from StyleCo", "-29.99", "Shopping", "2024-07-21T15:45:00Z"),
        _seed_transaction("txn_7", "Electricity Bill", "-65.20", "Bills", "2024-07-18T11:00:00Z", "For June"),
        _seed_transaction("txn_8", "Coffee with a friend", "-8.75", "Food", "2024-07-27T14:00:00Z"),
        _seed_transaction("txn_9", "Freelance Project Payment", "500.00", "Income", "2024-07-15T18:00:00Z"),
        _seed_transaction(
            "txn_10", "Cinema Tickets: 'The Last Stand'", "-25.00", "Entertainment", "2024-07-19T20:00:00Z"
        ),
    ]


def _sort_key(transaction: Transaction) -> float:
    # Naive timestamps are read as local time, like the browser did.
    booked_at: datetime = transaction.date
    return booked_at.timestamp()


class InMemoryTransactionsRepository:
    """In-memory repository used for local dev/tests; state lives for the process lifetime."""

    def __init__(self, transactions: list[Transaction] | None = None) -> None:
        self._transactions: list[Transaction] = (
            list(transactions) if transactions is not None else sample_transactions()
        )

    def _index_of(self, transaction_id: str) -> int:
        for index, transaction in enumerate(self._transactions):
            if transaction.id == transaction_id:
                return index
        raise TransactionNotFoundError(transaction_id)

    def list_all_transactions(self) -> list[Transaction]:
        return sorted(self._transactions, key=_sort_key, reverse=True)

    def list_transactions(self, *, page: int = 1, limit: int = 10) -> tuple[list[Transaction], int]:
        if page < 1 or limit < 1:
            raise ValueError("page and limit must be positive")
        ordered = self.list_all_transactions()
        start = (page - 1) * limit
        return ordered[start : start + limit], len(ordered)

    def get_transaction(self, transaction_id: str) -> Transaction:
        return self._transactions[self._index_of(transaction_id)]

    def create_transaction(self, request: TransactionCreateRequest) -> Transaction:
        transaction = Transaction(id=f"txn_{uuid4().hex}", **request.model_dump())
        self._transactions.insert(0, transaction)
        return transaction

    def update_transaction(self, transaction_id: str, request: TransactionUpdateRequest) -> Transaction:
        index = self._index_of(transaction_id)
        updated = self._transactions[index].model_copy(update=request.changes())
        self._transactions[index] = updated
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        kept = [transaction for transaction in self._transactions if transaction.id != transaction_id]
        if len(kept) == len(self._transactions):
            raise TransactionNotFoundError(transaction_id)
        self._transactions = kept
