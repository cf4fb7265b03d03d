"""
Validation — Shape contract for one named metric series.

A series is an ordered sequence of points shaped {name: str, value: number}.
Malformed points are dropped (and recorded), never raised. A series with no
surviving points is Invalid as a whole.

Returns a tagged result so callers branch on type, not on ad hoc probing:

    result = validate("deviceClicksData", bag.get("deviceClicksData"))
    if isinstance(result, Valid):
        result.series   # tuple[DataPoint, ...]
    else:
        result.reason   # "not_a_sequence" | "empty_series"
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

from ..schemas import DataPoint
from .diagnostics import INVALID_SERIES, MALFORMED_POINT, DiagnosticLog

logger = logging.getLogger(__name__)

NOT_A_SEQUENCE = "not_a_sequence"
EMPTY_SERIES = "empty_series"

# Sequences that must not be treated as a list of points
_SCALAR_SEQUENCES = (str, bytes, bytearray, memoryview)


@dataclass(frozen=True)
class Valid:
    series: tuple[DataPoint, ...]
    dropped: int = 0


@dataclass(frozen=True)
class Invalid:
    reason: str
    dropped: int = 0


ValidationResult = Union[Valid, Invalid]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _point_problem(item: Any) -> str | None:
    """Return why *item* is not a well-formed point, or None if it is."""
    if not isinstance(item, Mapping):
        return "not an object"
    name = item.get("name")
    if not isinstance(name, str) or not name:
        return "missing name"
    if not _is_number(item.get("value")):
        return "missing value"
    return None


def _describe(item: Any) -> str:
    """repr() for diagnostics; falls back to the type name if repr itself fails."""
    try:
        return repr(item)
    except Exception:
        return f"<{type(item).__name__}>"


def is_valid_point(item: Any) -> bool:
    """True if *item* has a non-empty string name and a finite numeric value."""
    return _point_problem(item) is None


def validate(
    series_key: str,
    candidate: Any,
    diagnostics: DiagnosticLog | None = None,
) -> ValidationResult:
    """
    Check one series and return Valid(series) or Invalid(reason).

    Args:
        series_key:  Key the candidate was found under (for diagnostics).
        candidate:   Raw value from the metric bag. Any type.
        diagnostics: Optional per-run log receiving a record per dropped item.

    Returns:
        Valid with the filtered points (order kept), or Invalid.
    """
    diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    if not isinstance(candidate, Sequence) or isinstance(candidate, _SCALAR_SEQUENCES):
        diagnostics.record(
            INVALID_SERIES,
            f"{series_key} is not an array ({type(candidate).__name__})",
            series_key=series_key,
            reason=NOT_A_SEQUENCE,
        )
        return Invalid(NOT_A_SEQUENCE)

    points: list[DataPoint] = []
    for index, item in enumerate(candidate):
        problem = _point_problem(item)
        if problem is not None:
            diagnostics.record(
                MALFORMED_POINT,
                f"Item {index} in {series_key} {problem}",
                series_key=series_key,
                index=index,
                item=_describe(item),
            )
            continue
        points.append(DataPoint(name=item["name"], value=item["value"]))

    dropped = len(candidate) - len(points)
    if dropped:
        logger.debug("%s has %d invalid items", series_key, dropped)

    if not points:
        diagnostics.record(
            INVALID_SERIES,
            f"{series_key} has no valid items",
            series_key=series_key,
            reason=EMPTY_SERIES,
            dropped=dropped,
        )
        return Invalid(EMPTY_SERIES, dropped=dropped)

    return Valid(tuple(points), dropped=dropped)
