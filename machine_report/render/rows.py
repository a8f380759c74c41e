"""
machine_report.render.rows
AUTHOR: carter-vin

Row formatter: truncate/pad one label+value pair to the negotiated widths
"""

from __future__ import annotations

from machine_report.model import MetricRow

VERTICAL = "│"
ELLIPSIS = "..."


def fit(text: str, width: int) -> str:
    """
    Truncate with ellipsis when longer than width, else right-pad with spaces

    Widths of 3 or less keep a single char before the ellipsis
    """
    if len(text) > width:
        keep = max(width - len(ELLIPSIS), 1)
        return text[:keep] + ELLIPSIS
    return text.ljust(width)


def format_row(row: MetricRow, label_width: int, data_width: int) -> str:
    label = fit(row.label, label_width)
    value = fit(row.value, data_width)
    return f"{VERTICAL} {label} {VERTICAL} {value} {VERTICAL}"
