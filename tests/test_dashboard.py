"""Tests for dashboard aggregation."""

from decimal import Decimal

from backend.reporting import build_dashboard, expenses_by_category, summarize
from backend.repositories.transactions_repository import InMemoryTransactionsRepository


def test_summary_totals_income_expenses_and_balance() -> None:
    transactions = InMemoryTransactionsRepository().list_all_transactions()

    summary = summarize(transactions)

    assert summary.total_income == Decimal("4000.00")
    assert summary.total_expenses == Decimal("280.93")
    assert summary.net_balance == Decimal("3719.07")


def test_summary_of_nothing_is_zero() -> None:
    summary = summarize([])

    assert summary.total_income == 0
    assert summary.total_expenses == 0
    assert summary.net_balance == 0


def test_expenses_by_category_ignores_income_and_sorts_descending() -> None:
    transactions = InMemoryTransactionsRepository().list_all_transactions()

    categories = expenses_by_category(transactions)

    assert [row.category for row in categories] == [
        "Groceries",
        "Bills",
        "Dining Out",
        "Shopping",
        "Entertainment",
        "Subscriptions",
        "Food",
        "Transport",
    ]
    assert categories[0].total == Decimal("75.50")


def test_build_dashboard_keeps_five_most_recent() -> None:
    transactions = InMemoryTransactionsRepository().list_all_transactions()

    dashboard = build_dashboard(transactions)

    assert [item.id for item in dashboard.recent] == ["txn_1", "txn_8", "txn_3", "txn_2", "txn_5"]
    payload = dashboard.model_dump(mode="json", by_alias=True)
    assert payload["summary"]["totalExpenses"] == 280.93
