"""
machine_report.model
AUTHOR: carter-vin

Report body schema shared by the builder and the renderers.

Design goals:
- Explicit row/divider variants (no sentinel strings in the row list)
- Immutable once built; insertion order is the visual order
- Usage ratios kept as raw numbers so bars are computed at build time
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class MetricRow:
    """
    One label/value line of the table body
    - value may be empty (continuation rows such as a second login line)
    """

    label: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "row", "label": self.label, "value": self.value}


@dataclass(frozen=True)
class Divider:
    """
    Horizontal rule between groups of rows
    """

    def to_dict(self) -> dict[str, Any]:
        return {"kind": "divider"}


DIVIDER = Divider()

ReportEntry = Union[MetricRow, Divider]

# Ordered, frozen sequence of entries
ReportBody = tuple[ReportEntry, ...]


@dataclass(frozen=True)
class UsageRatio:
    """
    used/total pair in the same unit
    - total of 0 is valid and means "no data"
    """

    used: float
    total: float

    @property
    def percent(self) -> float:
        if self.total <= 0:
            return 0.0
        return (self.used / self.total) * 100.0


EMPTY_RATIO = UsageRatio(used=0, total=0)


@dataclass(frozen=True)
class UsageRatios:
    """
    Ratios needed for bar graphs
    - cpu: load averages (1m, 5m, 15m) over core count
    """

    cpu: tuple[UsageRatio, UsageRatio, UsageRatio]
    memory: UsageRatio
    disk: UsageRatio


def body_to_list(body: ReportBody) -> list[dict[str, Any]]:
    # Explicit per-entry mapping keeps the JSON shape stable
    return [entry.to_dict() for entry in body]
