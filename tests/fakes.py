"""Deterministic fakes for assistant and API tests."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import Any

from shared.dates import parse_timestamp
from shared.models import Transaction


class FakeChatClient:
    """Chat client returning a fixed completion payload and recording calls."""

    def __init__(self, response: dict[str, Any] | None = None, *, error: Exception | None = None) -> None:
        self.response = response or {}
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def create_chat_completion(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]],
        tool_choice: str | dict[str, Any],
    ) -> dict[str, Any]:
        self.calls.append({"model": model, "messages": messages, "tools": tools, "tool_choice": tool_choice})
        if self.error is not None:
            raise self.error
        return self.response


def response_with_tool_call(name: str, arguments: dict[str, Any] | str) -> dict[str, Any]:
    raw_arguments = arguments if isinstance(arguments, str) else json.dumps(arguments)
    return {
        "choices": [
            {
                "message": {
                    "content": None,
                    "tool_calls": [
                        {
                            "id": "call_1",
                            "type": "function",
                            "function": {"name": name, "arguments": raw_arguments},
                        }
                    ],
                }
            }
        ]
    }


def make_transaction(
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


DINNER = make_transaction("txn_3", "Dinner at The Italian Place", "-55", "Dining Out", "2024-07-26")
SALARY = make_transaction("txn_2", "Monthly Salary", "3500", "Income", "2024-07-25", "July Salary")
GROCERIES = make_transaction(
    "txn_1", "Grocery Shopping at FreshMart", "-75.50", "Groceries", "2024-07-28T10:00:00Z", "Weekly groceries"
)
COFFEE = make_transaction("txn_8", "Coffee with a friend", "-8.75", "Food", "2024-07-27T14:00:00Z")
LATE_NIGHT_SNACK = make_transaction("txn_11", "Late snack", "-50", "Food", "2024-07-28T23:59:59-07:00", "food truck")
