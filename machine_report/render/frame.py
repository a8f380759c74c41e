"""
machine_report.render.frame
AUTHOR: carter-vin

Frame drawer: header, dividers, footer and centered title lines

Every line is sized to Widths.total, border glyphs included.
The column junction sits label_width + 2 cells after the left glyph.
"""

from __future__ import annotations

from enum import Enum

from machine_report.render.layout import Widths
from machine_report.render.rows import VERTICAL

HORIZONTAL = "─"


class DividerPosition(Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


# (left, junction, right)
_DIVIDER_GLYPHS = {
    DividerPosition.TOP: ("├", "┬", "┤"),
    DividerPosition.MIDDLE: ("├", "┼", "┤"),
    DividerPosition.BOTTOM: ("├", "┴", "┤"),
}


class FrameDrawer:
    """
    Pure string construction from already negotiated widths
    """

    def __init__(self, widths: Widths) -> None:
        self.widths = widths

    @property
    def inner_width(self) -> int:
        return self.widths.total - 2

    def top_header(self) -> list[str]:
        """
        Top border followed by its divider-style companion line
        """
        return [
            "┌" + "┬" * self.inner_width + "┐",
            "├" + "┴" * self.inner_width + "┤",
        ]

    def centered_line(self, text: str) -> str:
        width = self.inner_width
        # Titles are expected to fit; hard truncate otherwise
        text = text[:width]
        left = (width - len(text)) // 2
        right = width - len(text) - left
        return f"{VERTICAL}{' ' * left}{text}{' ' * right}{VERTICAL}"

    def divider(self, position: DividerPosition = DividerPosition.MIDDLE) -> str:
        left, junction, right = _DIVIDER_GLYPHS[position]
        return (
            left
            + HORIZONTAL * (self.widths.label + 2)
            + junction
            + HORIZONTAL * (self.widths.data + 2)
            + right
        )

    def footer(self) -> str:
        return "└" + HORIZONTAL * self.inner_width + "┘"
