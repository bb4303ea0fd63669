"""Unit tests for in-memory transactions repository CRUD behavior."""

from __future__ import annotations

from decimal import Decimal

import pytest

from backend.repositories.transactions_repository import InMemoryTransactionsRepository, TransactionNotFoundError
from shared.models import TransactionCreateRequest, TransactionUpdateRequest


def test_list_all_transactions_orders_newest_first() -> None:
    repository = InMemoryTransactionsRepository()

    ids = [transaction.id for transaction in repository.list_all_transactions()]

    assert ids == ["txn_1", "txn_8", "txn_3", "txn_2", "txn_5", "txn_6", "txn_4", "txn_10", "txn_7", "txn_9"]


def test_list_transactions_paginates() -> None:
    repository = InMemoryTransactionsRepository()

    first_page, total = repository.list_transactions(page=1, limit=4)
    last_page, _ = repository.list_transactions(page=3, limit=4)
    beyond, _ = repository.list_transactions(page=4, limit=4)

    assert total == 10
    assert [item.id for item in first_page] == ["txn_1", "txn_8", "txn_3", "txn_2"]
    assert [item.id for item in last_page] == ["txn_7", "txn_9"]
    assert beyond == []


def test_list_transactions_rejects_invalid_page() -> None:
    with pytest.raises(ValueError):
        InMemoryTransactionsRepository().list_transactions(page=0, limit=10)


def test_create_transaction_assigns_id_and_is_listed() -> None:
    repository = InMemoryTransactionsRepository(transactions=[])

    created = repository.create_transaction(
        TransactionCreateRequest(title="Book", amount=Decimal("-12.00"), category="Education", date="2024-08-01")
    )

    assert created.id.startswith("txn_")
    assert repository.get_transaction(created.id) == created
    assert repository.list_all_transactions() == [created]


def test_update_transaction_changes_only_provided_fields() -> None:
    repository = InMemoryTransactionsRepository()

    updated = repository.update_transaction(
        "txn_1",
        TransactionUpdateRequest.model_validate({"notes": None, "amount": -80}),
    )

    assert updated.amount == Decimal("-80")
    assert updated.notes is None
    assert updated.title == "Grocery Shopping at FreshMart"
    assert repository.get_transaction("txn_1") == updated


def test_unknown_ids_raise_not_found() -> None:
    repository = InMemoryTransactionsRepository()

    with pytest.raises(TransactionNotFoundError):
        repository.get_transaction("missing")
    with pytest.raises(TransactionNotFoundError):
        repository.update_transaction("missing", TransactionUpdateRequest(notes="x"))
    with pytest.raises(TransactionNotFoundError):
        repository.delete_transaction("missing")


def test_delete_transaction_removes_it() -> None:
    repository = InMemoryTransactionsRepository()

    repository.delete_transaction("txn_3")

    assert "txn_3" not in {item.id for item in repository.list_all_transactions()}
    assert len(repository.list_all_transactions()) == 9
