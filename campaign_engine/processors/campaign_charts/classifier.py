"""
Chart Classifier — Routes validated metric series into presentation categories.

Iteration is registry-driven, not bag-driven: only registered series keys
are looked up, so unknown keys in the bag can never create a category.
Output order is always the registry's category order, whatever order the
bag was built in.

Nothing here raises for malformed input. Every anomaly degrades to
"this chart is missing" plus a diagnostic record.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .core.diagnostics import GATE_REJECTED, INVALID_BAG, DiagnosticLog
from .core.registry import CategoryRegistry, ChartRoute, get_registry
from .core.validation import Invalid, validate
from .schemas import CategoryResult, ChartSpec, DataPoint

logger = logging.getLogger(__name__)


def _chart_spec(
    registry: CategoryRegistry,
    route: ChartRoute,
    series: tuple[DataPoint, ...],
) -> ChartSpec:
    return ChartSpec(
        id=route.chart_id,
        title=route.title,
        subtitle=route.subtitle,
        data=list(series),
        render_type=registry.render_type_for(route),
        height_hint=registry.height_for(route),
    )


def classify(
    bag: Any,
    registry: CategoryRegistry | None = None,
    diagnostics: DiagnosticLog | None = None,
) -> list[CategoryResult]:
    """
    Classify a metric bag into ordered, unfiltered category results.

    Args:
        bag:         Mapping of series key -> series. Any other value is
                     treated as "no data".
        registry:    Category registry. Defaults to the process-wide one.
        diagnostics: Optional per-run log for excluded items.

    Returns:
        One CategoryResult per active category, in registry order, each
        holding its charts in route order. Empty categories are kept; use
        summarizer.summarize() to drop them. Returns [] for a non-mapping bag.
    """
    registry = registry if registry is not None else get_registry()
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    if not isinstance(bag, Mapping):
        diagnostics.record(
            INVALID_BAG,
            f"Invalid chart data: expected an object, got {type(bag).__name__}",
        )
        return []

    results: dict[str, CategoryResult] = {
        category.key: CategoryResult(
            key=category.key,
            title=category.title,
            description=category.description,
        )
        for category in registry.categories_in_order()
    }

    for route in registry.routes():
        target = results.get(route.category_key)
        if target is None:
            logger.debug("Skipping %s: category %s is inactive", route.series_key, route.category_key)
            continue

        if route.series_key not in bag:
            continue

        result = validate(route.series_key, bag[route.series_key], diagnostics)
        if isinstance(result, Invalid):
            logger.debug("Skipping chart %s due to invalid data (%s)", route.chart_id, result.reason)
            continue

        gate = registry.activation_predicate(route.series_key)
        if not gate(result.series):
            diagnostics.record(
                GATE_REJECTED,
                f"{route.series_key} has no positive values; hiding {route.chart_id}",
                level=logging.INFO,
                series_key=route.series_key,
                category_key=route.category_key,
            )
            continue

        target.charts.append(_chart_spec(registry, route, result.series))

    return list(results.values())
