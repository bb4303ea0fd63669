"""FastAPI entrypoint for transaction, search and dashboard endpoints."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any

from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse

from assistant.category_suggester import CategorySuggester
from assistant.errors import ExtractionError, SuggestionError
from backend.factory import build_category_suggester, build_transaction_service, build_transactions_repository
from backend.reporting import build_dashboard
from backend.repositories.transactions_repository import TransactionNotFoundError, TransactionsRepository
from backend.services.transaction_service import TransactionService
from shared import config as _config
from shared.models import (
    ApiError,
    ApiErrorCode,
    CategorySuggestionRequest,
    CategorySuggestionResult,
    DashboardResult,
    Transaction,
    TransactionCreateRequest,
    TransactionPage,
    TransactionSearchRequest,
    TransactionSearchResult,
    TransactionUpdateRequest,
)


logger = logging.getLogger(__name__)

_MAX_PAGE_SIZE = 100


@lru_cache(maxsize=1)
def get_transactions_repository() -> TransactionsRepository:
    """Create and cache the transaction store once per process."""

    return build_transactions_repository()


@lru_cache(maxsize=1)
def get_transaction_service() -> TransactionService:
    """Create and cache the search service once per process."""

    return build_transaction_service(get_transactions_repository())


@lru_cache(maxsize=1)
def get_category_suggester() -> CategorySuggester:
    return build_category_suggester()


def _error_response(status_code: int, code: ApiErrorCode, message: str, details: dict[str, Any] | None = None) -> JSONResponse:
    error = ApiError(code=code, message=message, details=details or None)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(error))


app = FastAPI(title="Finance Tracker API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("cors_allow_origins=%s", ALLOW_ORIGINS)


@app.exception_handler(TransactionNotFoundError)
async def handle_transaction_not_found(request: Request, exc: TransactionNotFoundError) -> JSONResponse:
    return _error_response(404, ApiErrorCode.NOT_FOUND, "Transaction not found", {"id": exc.transaction_id})


@app.exception_handler(ExtractionError)
async def handle_extraction_error(request: Request, exc: ExtractionError) -> JSONResponse:
    logger.warning("transactions_search_extraction_failed message=%s", exc.message)
    return _error_response(502, ApiErrorCode.EXTRACTION_ERROR, exc.message, exc.details)


@app.exception_handler(SuggestionError)
async def handle_suggestion_error(request: Request, exc: SuggestionError) -> JSONResponse:
    return _error_response(502, ApiErrorCode.SUGGESTION_ERROR, exc.message, exc.details)


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return _error_response(500, ApiErrorCode.BACKEND_ERROR, "Internal Server Error")


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.get("/transactions", response_model=TransactionPage)
def list_transactions(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1, le=_MAX_PAGE_SIZE),
) -> TransactionPage:
    """Return one page of transactions, newest first."""

    page_size = limit or min(_config.transactions_page_size(), _MAX_PAGE_SIZE)
    items, total = get_transactions_repository().list_transactions(page=page, limit=page_size)
    return TransactionPage(items=items, page=page, limit=page_size, total=total)


@app.post("/transactions", response_model=Transaction, status_code=201)
def create_transaction(payload: TransactionCreateRequest) -> Transaction:
    transaction = get_transactions_repository().create_transaction(payload)
    logger.info("transaction_created id=%s", transaction.id)
    return transaction


@app.post("/transactions/search", response_model=TransactionSearchResult)
def search_transactions(payload: TransactionSearchRequest) -> TransactionSearchResult:
    """Search transactions with a natural-language query.

    Extraction failures answer 502 rather than an unfiltered or partial list.
    """

    logger.info("transactions_search_received query_length=%s", len(payload.query))
    return get_transaction_service().search_transactions(payload.query)


@app.post("/transactions/suggest-categories", response_model=CategorySuggestionResult)
def suggest_categories(payload: CategorySuggestionRequest) -> CategorySuggestionResult:
    suggestions = get_category_suggester().suggest(payload.title, payload.notes)
    return CategorySuggestionResult(suggested_categories=suggestions)


@app.get("/transactions/{transaction_id}", response_model=Transaction)
def get_transaction(transaction_id: str) -> Transaction:
    return get_transactions_repository().get_transaction(transaction_id)


@app.patch("/transactions/{transaction_id}", response_model=Transaction)
def update_transaction(transaction_id: str, payload: TransactionUpdateRequest) -> Transaction:
    transaction = get_transactions_repository().update_transaction(transaction_id, payload)
    logger.info("transaction_updated id=%s fields=%s", transaction_id, sorted(payload.model_fields_set))
    return transaction


@app.delete("/transactions/{transaction_id}")
def delete_transaction(transaction_id: str) -> dict[str, bool]:
    get_transactions_repository().delete_transaction(transaction_id)
    logger.info("transaction_deleted id=%s", transaction_id)
    return {"success": True}


@app.get("/dashboard", response_model=DashboardResult)
def dashboard() -> DashboardResult:
    """Return summary cards, expenses by category and recent transactions."""

    return build_dashboard(get_transactions_repository().list_all_transactions())
