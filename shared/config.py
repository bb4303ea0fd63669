"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_TRUE_VALUES = {"1", "true"}
_DEFAULT_AI_MODEL = "gpt-4o-mini"
_DEFAULT_AI_TIMEOUT_SECONDS = 20.0
_DEFAULT_PAGE_SIZE = 10


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def ai_enabled() -> bool:
    """Return whether language-model features (search, category suggestions) are enabled."""
    if app_env().strip().lower() in {"test", "ci"}:
        return False

    raw_value = get_env("AI_SEARCH_ENABLED", "") or ""
    return raw_value.strip().lower() in _TRUE_VALUES


def ai_model() -> str:
    """Return configured language model with safe default."""
    return (get_env("AI_MODEL", _DEFAULT_AI_MODEL) or _DEFAULT_AI_MODEL).strip() or _DEFAULT_AI_MODEL


def ai_timeout_seconds() -> float:
    """Return the language-model request timeout in seconds."""
    raw_value = (get_env("AI_TIMEOUT_SECONDS", "") or "").strip()
    if not raw_value:
        return _DEFAULT_AI_TIMEOUT_SECONDS

    try:
        timeout = float(raw_value)
    except ValueError:
        logger.warning("ai_timeout_seconds_invalid value=%s; using default", raw_value)
        return _DEFAULT_AI_TIMEOUT_SECONDS

    if timeout <= 0:
        logger.warning("ai_timeout_seconds_invalid value=%s; using default", raw_value)
        return _DEFAULT_AI_TIMEOUT_SECONDS
    return timeout


def openai_api_key() -> str | None:
    """Return OpenAI API key when configured."""
    return get_env("OPENAI_API_KEY")


def transactions_page_size() -> int:
    """Return the default page size of transaction listings."""
    raw_value = (get_env("TRANSACTIONS_PAGE_SIZE", "") or "").strip()
    if not raw_value:
        return _DEFAULT_PAGE_SIZE

    try:
        page_size = int(raw_value)
    except ValueError:
        logger.warning("transactions_page_size_invalid value=%s; using default", raw_value)
        return _DEFAULT_PAGE_SIZE

    if page_size < 1:
        logger.warning("transactions_page_size_invalid value=%s; using default", raw_value)
        return _DEFAULT_PAGE_SIZE
    return page_size
