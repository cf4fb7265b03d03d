"""
Campaign Charts — Metric bag -> categorised chart specs.

Pure data logic. Zero rendering knowledge.

Modules:
    schemas     — Pydantic output models (ChartSpec, CategoryResult, ...)
    classifier  — Registry-driven routing of valid series into categories
    summarizer  — Empty-category filter and per-category summary
    analyzer    — CampaignChartAnalyzer, the single entry point
"""

from .analyzer import CampaignChartAnalyzer
from .classifier import classify
from .core.registry import build_registry, get_registry
from .core.validation import Invalid, Valid, validate
from .summarizer import build_summary, summarize, summary_frame

__all__ = [
    "CampaignChartAnalyzer",
    "build_registry",
    "build_summary",
    "classify",
    "get_registry",
    "Invalid",
    "summarize",
    "summary_frame",
    "Valid",
    "validate",
]
