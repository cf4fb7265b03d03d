"""
Diagnostics — Structured, advisory records for every excluded item.

Every anomaly the pipeline tolerates (malformed point, invalid series,
gated series, empty category) is written here and mirrored to the
module logger. Records never influence returned data.

One DiagnosticLog per pipeline run. Do not share across calls.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

logger = logging.getLogger(__name__)


# Record codes
INVALID_BAG = "invalid_bag"
MALFORMED_POINT = "malformed_point"
INVALID_SERIES = "invalid_series"
GATE_REJECTED = "gate_rejected"
EMPTY_CATEGORY = "empty_category"
NO_SERIES_FOUND = "no_series_found"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic event."""
    code: str
    message: str
    level: int = logging.WARNING
    series_key: str | None = None
    category_key: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)

    def to_dict(self) -> dict:
        out = asdict(self)
        out["level"] = self.level_name
        return out


@dataclass
class DiagnosticLog:
    """Collects diagnostics for one run and logs each one as it arrives."""
    records: list[Diagnostic] = field(default_factory=list)

    def record(
        self,
        code: str,
        message: str,
        level: int = logging.WARNING,
        series_key: str | None = None,
        category_key: str | None = None,
        **context: Any,
    ) -> Diagnostic:
        entry = Diagnostic(
            code=code,
            message=message,
            level=level,
            series_key=series_key,
            category_key=category_key,
            context=context,
        )
        self.records.append(entry)
        logger.log(level, "[%s] %s", code, message)
        return entry

    def codes(self) -> list[str]:
        return [r.code for r in self.records]

    def by_code(self, code: str) -> list[Diagnostic]:
        return [r for r in self.records if r.code == code]

    def at_least(self, level: int) -> list[Diagnostic]:
        """Records at *level* or above (e.g. logging.WARNING)."""
        return [r for r in self.records if r.level >= level]

    def to_list(self) -> list[dict]:
        return [r.to_dict() for r in self.records]

    def __len__(self) -> int:
        return len(self.records)
