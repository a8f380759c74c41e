"""
machine_report.render.layout
AUTHOR: carter-vin

Layout configuration + column width negotiation

Contract:
- LayoutConfig is immutable and validated on construction
- label width always in [min_label_width, max_label_width]
- data width always in [min_data_width, max_data_width]
- widths computed once per render, applied to every line
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from machine_report.model import Divider, ReportEntry

DEFAULT_TITLE = "SHAUGHNESSY V DEVELOPMENT INC."
DEFAULT_SUBTITLE = "TR-200 MACHINE REPORT"

# Two border glyphs, two spaces each side of the text, one column separator
BORDERS_AND_PADDING = 7


class ConfigurationError(ValueError):
    """
    Raised for a LayoutConfig that cannot produce a table
    """


@dataclass(frozen=True)
class LayoutConfig:
    """
    Bounds and title strings governing one render
    """

    min_label_width: int = 5
    max_label_width: int = 13
    min_data_width: int = 20
    max_data_width: int = 32
    title: str = DEFAULT_TITLE
    subtitle: str = DEFAULT_SUBTITLE

    def __post_init__(self) -> None:
        if self.min_label_width < 1:
            raise ConfigurationError("min_label_width must be >= 1")
        if self.min_data_width < 1:
            raise ConfigurationError("min_data_width must be >= 1")
        # Inverted bounds are rejected, never swapped
        if self.min_label_width > self.max_label_width:
            raise ConfigurationError(
                f"min_label_width ({self.min_label_width}) > max_label_width ({self.max_label_width})"
            )
        if self.min_data_width > self.max_data_width:
            raise ConfigurationError(
                f"min_data_width ({self.min_data_width}) > max_data_width ({self.max_data_width})"
            )


@dataclass(frozen=True)
class Widths:
    label: int
    data: int

    @property
    def total(self) -> int:
        """
        Full framed line length, border glyphs included
        """
        return self.label + self.data + BORDERS_AND_PADDING


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def negotiate(entries: Iterable[ReportEntry], config: LayoutConfig) -> Widths:
    """
    Compute shared label/data column widths from content + configured bounds

    Dividers contribute nothing; an empty body collapses to the minimums
    """
    label_max = 0
    data_max = 0
    for entry in entries:
        if isinstance(entry, Divider):
            continue
        label_max = max(label_max, len(entry.label))
        data_max = max(data_max, len(entry.value))

    return Widths(
        label=clamp(label_max, config.min_label_width, config.max_label_width),
        data=clamp(data_max, config.min_data_width, config.max_data_width),
    )
