"""
machine_report.render.bars
AUTHOR: carter-vin

Bar graph generator

Rules:
- output is exactly `width` glyphs, filled glyphs always lead
- total <= 0 means no data -> all empty glyphs
- percent clamped to [0, 100]; rounding is half-up
"""

from __future__ import annotations

import math
from fractions import Fraction

FILLED = "█"
EMPTY = "░"


def filled_count(used: float, total: float, width: int) -> int:
    """
    Number of FILLED glyphs for a used/total ratio at a given width
    """
    if width <= 0 or total <= 0:
        return 0

    # Exact rationals: float error must not turn an exact half into x.4999
    ratio = min(max(Fraction(used) / Fraction(total), Fraction(0)), Fraction(1))
    # Half-up so 50% on an even width fills exactly half
    count = math.floor(ratio * width + Fraction(1, 2))
    return min(max(count, 0), width)


def bar_graph(used: float, total: float, width: int) -> str:
    width = max(width, 0)
    count = filled_count(used, total, width)
    return FILLED * count + EMPTY * (width - count)
