"""Known transaction categories and category name helpers."""

from __future__ import annotations


TRANSACTION_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transport",
    "Utilities",
    "Entertainment",
    "Shopping",
    "Rent",
    "Salary",
    "Healthcare",
    "Education",
    "Groceries",
    "Dining Out",
    "Travel",
    "Bills",
    "Income",
    "Savings",
    "Investments",
    "Gifts",
    "Personal Care",
    "Technology",
    "Home Improvement",
    "Subscriptions",
    "Other",
)


def normalize_category_name(s: str) -> str:
    """Normalize category names for duplicate detection."""
    return " ".join(s.strip().lower().split())
