"""
Campaign Chart Analyzer — The single entry point for campaign chart building.

Runs classify -> summarize on one metric bag and returns a consolidated
"Chart Snapshot" dictionary that any presentation layer (dashboard page,
API response, notebook) can render directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pandas as pd

from campaign_engine.config import settings
from .classifier import classify
from .core.diagnostics import DiagnosticLog
from .core.registry import CategoryRegistry, get_registry
from .schemas import CategoryResult
from .summarizer import build_summary, summarize, summary_frame

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_NO_DATA = "no_data"


class CampaignChartAnalyzer:
    """
    Takes a metric bag and produces categorised, render-ready charts.

    Usage:
        analyzer = CampaignChartAnalyzer()
        snapshot = analyzer.analyze(chart_data)
    """

    def __init__(
        self,
        registry: CategoryRegistry | None = None,
        title: str | None = None,
    ):
        self.registry = registry if registry is not None else get_registry()
        self.title = title or settings.DASHBOARD_TITLE

    def categorize(
        self,
        bag: Any,
        diagnostics: DiagnosticLog | None = None,
    ) -> list[CategoryResult]:
        """Classified, filtered categories in registry order."""
        diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        return summarize(classify(bag, self.registry, diagnostics), diagnostics)

    def summary_table(self, bag: Any) -> pd.DataFrame:
        """Category summary as a DataFrame (key, title, chartCount) for tabular views."""
        return summary_frame(build_summary(self.categorize(bag)))

    def analyze(self, bag: Any) -> dict:
        """
        Build a Chart Snapshot for one metric bag.

        Args:
            bag: Mapping of series key -> list of {name, value} points.

        Returns:
            {
              "meta": {
                "title": "Campaign Analytics Dashboard",
                "status": "ok" | "empty" | "no_data",
                "series_received": 12,     # keys in the bag
                "series_recognized": 9,    # keys routed to an active category
                "categories_rendered": 3,
                "charts_rendered": 7,
              },
              "categories":  [ {key, title, description, charts: [...]}, ... ],
              "summary":     [ {key, title, chartCount}, ... ],
              "diagnostics": [ {code, message, level, ...}, ... ],
            }
        """
        diagnostics = DiagnosticLog()
        categories = self.categorize(bag, diagnostics)
        summary = build_summary(categories)

        if not isinstance(bag, Mapping):
            status = STATUS_NO_DATA
            received = recognized = 0
        else:
            status = STATUS_OK if categories else STATUS_EMPTY
            received = len(bag)
            recognized = sum(1 for key in bag if self.registry.is_active(self.registry.route_for(key)))

        return {
            "meta": {
                "title": self.title,
                "status": status,
                "series_received": received,
                "series_recognized": recognized,
                "categories_rendered": len(categories),
                "charts_rendered": sum(s.chart_count for s in summary),
            },
            "categories": [c.model_dump(mode="json", by_alias=True) for c in categories],
            "summary": [s.model_dump(mode="json", by_alias=True) for s in summary],
            "diagnostics": diagnostics.to_list(),
        }
