"""
Pytest fixtures for campaign chart tests.
"""
import json
import os

import pytest

from campaign_engine.config import Settings
from campaign_engine.processors.campaign_charts.core.diagnostics import DiagnosticLog
from campaign_engine.processors.campaign_charts.core.registry import build_registry


FIXTURE_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures", "campaign_insights.json")


@pytest.fixture
def campaign_bag():
    """A realistic metric bag as produced by the insights fetcher."""
    with open(FIXTURE_FILE, encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def registry():
    """Registry with the declared active flags and default chart settings."""
    return build_registry(Settings(ENABLED_CATEGORIES=None, DEFAULT_RENDER_TYPE="bar", DEFAULT_CHART_HEIGHT=300))


@pytest.fixture
def full_registry():
    """Registry with every category switched on, retired ones included."""
    return build_registry(Settings(ENABLED_CATEGORIES=[
        "overview", "performance", "engagement", "video", "geographic",
        "device", "platform", "temporal", "demographic",
    ]))


@pytest.fixture
def diagnostics():
    return DiagnosticLog()
