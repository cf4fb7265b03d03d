"""
Category Summarizer — Drops empty categories and summarises the rest.

An empty result is not an error: it means "nothing to render".
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

import pandas as pd

from .core.diagnostics import EMPTY_CATEGORY, NO_SERIES_FOUND, DiagnosticLog
from .schemas import CategoryResult, CategorySummary

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = ["key", "title", "chartCount"]


def build_summary(results: Iterable[CategoryResult]) -> list[CategorySummary]:
    """One {key, title, chartCount} record per category that has charts."""
    return [
        CategorySummary(key=r.key, title=r.title, chart_count=len(r.charts))
        for r in results
        if r.charts
    ]


def summarize(
    results: Sequence[CategoryResult],
    diagnostics: DiagnosticLog | None = None,
) -> list[CategoryResult]:
    """
    Keep only categories with at least one chart, in their original order.

    Args:
        results:     Output of classifier.classify().
        diagnostics: Optional per-run log.

    Returns:
        The non-empty categories (same objects, order preserved), or []
        when there is nothing to render.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    kept: list[CategoryResult] = []
    for result in results:
        if result.charts:
            kept.append(result)
            continue
        diagnostics.record(
            EMPTY_CATEGORY,
            f"No valid charts in category {result.key}",
            level=logging.DEBUG,
            category_key=result.key,
        )

    if not kept:
        diagnostics.record(NO_SERIES_FOUND, "No valid charts to render", level=logging.INFO)
        return []

    logger.info(
        "Categories with charts: %s",
        [s.model_dump(by_alias=True) for s in build_summary(kept)],
    )
    return kept


def summary_frame(summaries: Iterable[CategorySummary]) -> pd.DataFrame:
    """
    Summary records as a DataFrame (for dashboards and notebooks).

    Returns:
        DataFrame with columns: [key, title, chartCount]
    """
    rows = [s.model_dump(by_alias=True) for s in summaries]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
