"""Reporting utilities for dashboard views."""

from backend.reporting.dashboard import build_dashboard, expenses_by_category, summarize

__all__ = ["build_dashboard", "expenses_by_category", "summarize"]
