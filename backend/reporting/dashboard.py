"""Dashboard aggregates: income/expense summary, expenses by category, recent activity."""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from shared.models import CategoryTotal, DashboardResult, DashboardSummary, Transaction


RECENT_TRANSACTIONS_LIMIT = 5


def summarize(transactions: Iterable[Transaction]) -> DashboardSummary:
    """Return total income, total expenses (as a positive number) and net balance."""

    income = Decimal("0")
    expenses = Decimal("0")
    for transaction in transactions:
        if transaction.amount > 0:
            income += transaction.amount
        elif transaction.amount < 0:
            expenses += transaction.amount

    return DashboardSummary(
        total_income=income,
        total_expenses=abs(expenses),
        net_balance=income + expenses,
    )


def expenses_by_category(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.amount >= 0:
            continue
        totals[transaction.category] = totals.get(transaction.category, Decimal("0")) + abs(transaction.amount)

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=category, total=total) for category, total in ordered]


def build_dashboard(transactions: list[Transaction]) -> DashboardResult:
    """Build dashboard data from transactions already ordered newest first."""

    return DashboardResult(
        summary=summarize(transactions),
        categories=expenses_by_category(transactions),
        recent=transactions[:RECENT_TRANSACTIONS_LIMIT],
    )
