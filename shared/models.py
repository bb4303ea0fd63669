"""Pydantic contracts shared across backend and assistant."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator, model_validator
from pydantic.alias_generators import to_camel

from shared.dates import parse_iso_date, parse_timestamp


# Amounts travel as JSON numbers, like the UI sends them.
Amount = Annotated[Decimal, PlainSerializer(lambda value: float(value), return_type=float, when_used="json")]


def _coerce_timestamp(value: Any) -> Any:
    if isinstance(value, str):
        return parse_timestamp(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime.combine(value, time.min)
    return value


class ApiErrorCode(str, Enum):
    """Stable error codes returned by the HTTP layer."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    EXTRACTION_ERROR = "EXTRACTION_ERROR"
    SUGGESTION_ERROR = "SUGGESTION_ERROR"
    BACKEND_ERROR = "BACKEND_ERROR"


class ApiError(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: ApiErrorCode
    message: str
    details: dict[str, object] | None = None


class WireModel(BaseModel):
    """Base model exposing camelCase field names on the wire."""

    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)


class Transaction(WireModel):
    """A recorded income (positive amount) or expense (negative amount)."""

    id: str
    title: str = Field(min_length=1)
    amount: Amount
    category: str
    date: datetime
    notes: str | None = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return _coerce_timestamp(value)


class TransactionFilter(WireModel):
    """Independent, optional search constraints combined with logical AND.

    An absent field imposes no constraint. Values are validated, never coerced:
    amounts must be JSON numbers and dates must be `YYYY-MM-DD` strings.
    Blank strings count as absent.
    """

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    text_search: str | None = None
    category: str | None = None
    min_amount: Amount | None = None
    max_amount: Amount | None = None
    start_date: date | None = None
    end_date: date | None = None

    @field_validator("text_search", "category", mode="before")
    @classmethod
    def blank_text_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("min_amount", "max_amount", mode="before")
    @classmethod
    def require_number(cls, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            raise ValueError("amount bounds must be numbers")
        return value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def require_calendar_date(cls, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, str):
            if not value.strip():
                return None
            return parse_iso_date(value)
        if isinstance(value, datetime) or not isinstance(value, date):
            raise ValueError("dates must be YYYY-MM-DD strings")
        return value

    def is_empty(self) -> bool:
        """Return whether no constraint is set."""
        return all(getattr(self, name) is None for name in type(self).model_fields)

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON payload with absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TransactionCreateRequest(WireModel):
    title: str = Field(min_length=2)
    amount: Amount
    category: str = Field(min_length=1)
    date: datetime
    notes: str | None = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Decimal) -> Decimal:
        if value == 0:
            raise ValueError("Amount cannot be zero.")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return _coerce_timestamp(value)


class TransactionUpdateRequest(WireModel):
    """Partial update; only fields present in the payload are changed."""

    title: str | None = Field(default=None, min_length=2)
    amount: Amount | None = None
    category: str | None = Field(default=None, min_length=1)
    date: datetime | None = None
    notes: str | None = None

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: Decimal | None) -> Decimal | None:
        if value is not None and value == 0:
            raise ValueError("Amount cannot be zero.")
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        return _coerce_timestamp(value)

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "TransactionUpdateRequest":
        for field_name in ("title", "amount", "category", "date"):
            if field_name in self.model_fields_set and getattr(self, field_name) is None:
                raise ValueError(f"{field_name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class TransactionPage(WireModel):
    items: list[Transaction]
    page: int
    limit: int
    total: int


class TransactionSearchRequest(WireModel):
    query: str


class TransactionSearchResult(WireModel):
    query: str
    filters: dict[str, Any]
    items: list[Transaction]
    total: int


class CategorySuggestionRequest(WireModel):
    title: str = Field(min_length=1)
    notes: str | None = None


class CategorySuggestionResult(WireModel):
    suggested_categories: list[str]


class DashboardSummary(WireModel):
    total_income: Amount
    total_expenses: Amount
    net_balance: Amount


class CategoryTotal(WireModel):
    category: str
    total: Amount


class DashboardResult(WireModel):
    summary: DashboardSummary
    categories: list[CategoryTotal]
    recent: list[Transaction]
