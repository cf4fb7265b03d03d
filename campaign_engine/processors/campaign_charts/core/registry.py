"""
Registry — Presentation categories and series-key routing for campaign charts.

Replaces the dashboard's long chain of per-series conditionals with two
declarative tables:

    CATEGORIES  — every known category, in display order. Retired ones stay
                  declared with active=False so they can be switched back on.
    ROUTES      — one row per recognised series key: target category, chart
                  id / title / subtitle, optional render overrides, and
                  whether the series is gated (needs a value > 0 to show).

The registry is built once per process (see get_registry) and is read-only
afterwards, so concurrent readers need no locking.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Iterable, Sequence

from campaign_engine.config import Settings, settings as _env_settings
from ..schemas import DataPoint, RenderTypeEnum

logger = logging.getLogger(__name__)

ActivationPredicate = Callable[[Sequence[DataPoint]], bool]

_RENDER_TYPES = frozenset(t.value for t in RenderTypeEnum)


class RegistryError(ValueError):
    """Raised at startup when the category / route tables are inconsistent."""


@dataclass(frozen=True)
class CategoryDefinition:
    key: str
    title: str
    description: str
    active: bool = True


@dataclass(frozen=True)
class ChartRoute:
    series_key: str
    category_key: str
    chart_id: str
    title: str
    subtitle: str
    render_type: str | None = None   # None = registry default
    height: int | None = None        # None = registry default
    gated: bool = False


# ---------------------------------------------------------------------------
# Activation predicates
# ---------------------------------------------------------------------------

def always_active(series: Sequence[DataPoint]) -> bool:
    return True


def has_positive_value(series: Sequence[DataPoint]) -> bool:
    """Hide all-zero summary widgets: at least one point must be > 0."""
    return any(point.value > 0 for point in series)


# ---------------------------------------------------------------------------
# Category table (display order)
# ---------------------------------------------------------------------------

CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition("overview", "Campaign Overview",
                       "Key performance metrics and campaign health"),
    CategoryDefinition("performance", "Performance Metrics",
                       "Core campaign performance indicators"),
    CategoryDefinition("engagement", "Engagement & Actions",
                       "User engagement and action tracking"),
    CategoryDefinition("video", "Video Performance",
                       "Video engagement and completion metrics"),
    CategoryDefinition("geographic", "Geographic Performance",
                       "Performance by geographic regions", active=False),
    CategoryDefinition("device", "Device Performance",
                       "Performance across different device platforms"),
    CategoryDefinition("platform", "Publisher Platform",
                       "Performance across publisher platforms"),
    CategoryDefinition("temporal", "Temporal Analysis",
                       "Performance over time and hourly patterns", active=False),
    CategoryDefinition("demographic", "Demographic Breakdown",
                       "Performance by age, gender, and combinations", active=False),
)


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------

# Breakdown metrics: (key suffix, title label, subtitle stem)
_BREAKDOWN_METRICS = [
    ("Impressions",     "Impressions",        "Impressions"),
    ("Clicks",          "Clicks",             "Clicks"),
    ("Spend",           "Spend",              "Spend"),
    ("CTR",             "CTR",                "Click-through rate"),
    ("CPC",             "CPC",                "Cost per click"),
    ("CPM",             "CPM",                "Cost per mille"),
    ("Video30Sec",      "Video 30s Watched",  "30-second video views"),
    ("Video100Percent", "Video 100% Watched", "100% video completion"),
]


def _breakdown(
    prefix: str,
    category_key: str,
    title_prefix: str,
    dimension: str,
    metrics: int,
    render_type: str | None = None,
) -> list[ChartRoute]:
    """Routes for a '<prefix><Metric>Data' family, e.g. deviceClicksData."""
    return [
        ChartRoute(
            series_key=f"{prefix}{suffix}Data",
            category_key=category_key,
            chart_id=f"{prefix}{suffix}",
            title=f"{title_prefix} - {label}",
            subtitle=f"{stem} by {dimension}",
            render_type=render_type,
        )
        for suffix, label, stem in _BREAKDOWN_METRICS[:metrics]
    ]


ROUTES: tuple[ChartRoute, ...] = (
    ChartRoute("performanceData", "performance", "performance",
               "Performance Metrics", "Core campaign performance indicators"),
    ChartRoute("videoData", "video", "video",
               "Video Engagement", "Video performance metrics"),
    ChartRoute("actionsData", "engagement", "actions",
               "Top Actions", "Most performed actions"),
    ChartRoute("actionValuesData", "engagement", "actionValues",
               "Action Values", "Revenue from actions"),
    ChartRoute("campaignHealthData", "overview", "health",
               "Campaign Health Overview", "Activity rates across campaign",
               render_type="pie", gated=True),
    ChartRoute("roiData", "performance", "roi",
               "ROI Metrics", "Return on investment indicators", gated=True),
    ChartRoute("engagementData", "engagement", "engagement",
               "Engagement Metrics", "User engagement and interaction metrics", gated=True),
    *_breakdown("regional", "geographic", "Regional", "geographic region", 6),
    *_breakdown("device", "device", "Device", "device platform", 8),
    *_breakdown("publisherPlatform", "platform", "Publisher Platform", "publisher platform", 8),
    *_breakdown("hourly", "temporal", "Hourly", "hour of day", 6, render_type="line"),
    *_breakdown("age", "demographic", "Age Group", "age group", 4),
    *_breakdown("gender", "demographic", "Gender", "gender", 4),
    *_breakdown("ageGender", "demographic", "Age & Gender", "age and gender combination", 2),
)


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

class CategoryRegistry:
    """
    Immutable lookup over the category and route tables.

    Usage:
        registry = get_registry()
        registry.route_for("deviceClicksData")              # -> "device"
        registry.activation_predicate("roiData")(series)    # -> bool
    """

    def __init__(
        self,
        categories: Iterable[CategoryDefinition],
        routes: Iterable[ChartRoute],
        default_render_type: str = "bar",
        default_height: int = 300,
    ):
        self._categories = tuple(categories)
        self._routes = tuple(routes)
        self._default_render_type = RenderTypeEnum(default_render_type)
        self._default_height = default_height

        categories_by_key: dict[str, CategoryDefinition] = {}
        for category in self._categories:
            if category.key in categories_by_key:
                raise RegistryError(f"Duplicate category key: {category.key}")
            categories_by_key[category.key] = category

        routes_by_key: dict[str, ChartRoute] = {}
        chart_ids: set[str] = set()
        for route in self._routes:
            if route.series_key in routes_by_key:
                raise RegistryError(f"Duplicate series key: {route.series_key}")
            if route.category_key not in categories_by_key:
                raise RegistryError(
                    f"Series {route.series_key} routes to unknown category {route.category_key}"
                )
            if route.chart_id in chart_ids:
                raise RegistryError(f"Duplicate chart id: {route.chart_id}")
            if route.render_type is not None and route.render_type not in _RENDER_TYPES:
                raise RegistryError(
                    f"Series {route.series_key} has unknown render type {route.render_type}"
                )
            if route.height is not None and route.height <= 0:
                raise RegistryError(f"Series {route.series_key} has non-positive height")
            routes_by_key[route.series_key] = route
            chart_ids.add(route.chart_id)

        self._categories_by_key = MappingProxyType(categories_by_key)
        self._routes_by_key = MappingProxyType(routes_by_key)

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def categories_in_order(self, include_inactive: bool = False) -> tuple[CategoryDefinition, ...]:
        if include_inactive:
            return self._categories
        return tuple(c for c in self._categories if c.active)

    def category(self, key: str) -> CategoryDefinition | None:
        return self._categories_by_key.get(key)

    def is_active(self, key: str) -> bool:
        category = self._categories_by_key.get(key)
        return category is not None and category.active

    # ------------------------------------------------------------------
    # Routes
    # ------------------------------------------------------------------

    def routes(self) -> tuple[ChartRoute, ...]:
        return self._routes

    def series_keys(self) -> tuple[str, ...]:
        return tuple(self._routes_by_key)

    def route(self, series_key: str) -> ChartRoute | None:
        return self._routes_by_key.get(series_key)

    def route_for(self, series_key: str) -> str | None:
        """Category key for *series_key*, or None if the key is not registered."""
        route = self._routes_by_key.get(series_key)
        return route.category_key if route is not None else None

    def activation_predicate(self, series_key: str) -> ActivationPredicate | None:
        route = self._routes_by_key.get(series_key)
        if route is None:
            return None
        return has_positive_value if route.gated else always_active

    def render_type_for(self, route: ChartRoute) -> RenderTypeEnum:
        if route.render_type is None:
            return self._default_render_type
        return RenderTypeEnum(route.render_type)

    def height_for(self, route: ChartRoute) -> int:
        return route.height if route.height is not None else self._default_height

    def __len__(self) -> int:
        return len(self._routes)

    def __contains__(self, series_key: object) -> bool:
        return series_key in self._routes_by_key


def build_registry(
    settings: Settings | None = None,
    categories: Iterable[CategoryDefinition] = CATEGORIES,
    routes: Iterable[ChartRoute] = ROUTES,
) -> CategoryRegistry:
    """
    Build a registry from the declared tables and the given settings.

    ENABLED_CATEGORIES, when set, replaces every category's declared
    active flag (categories not listed become inactive).
    """
    config = settings or _env_settings
    categories = tuple(categories)

    enabled = config.ENABLED_CATEGORIES
    if enabled is not None:
        known = {c.key for c in categories}
        unknown = [key for key in enabled if key not in known]
        if unknown:
            raise RegistryError(f"Unknown categories in ENABLED_CATEGORIES: {', '.join(unknown)}")
        categories = tuple(replace(c, active=c.key in enabled) for c in categories)

    registry = CategoryRegistry(
        categories,
        routes,
        default_render_type=config.DEFAULT_RENDER_TYPE,
        default_height=config.DEFAULT_CHART_HEIGHT,
    )
    logger.debug(
        "Category registry built: %d categories (%d active), %d routes",
        len(registry.categories_in_order(include_inactive=True)),
        len(registry.categories_in_order()),
        len(registry),
    )
    return registry


@lru_cache(maxsize=None)
def get_registry() -> CategoryRegistry:
    """Process-wide registry, built once from environment settings."""
    return build_registry(_env_settings)
