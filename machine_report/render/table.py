"""
machine_report.render.table
AUTHOR: carter-vin

Box-drawing table renderer

Render pass:
- header pair, title, subtitle, top divider
- body rows / middle dividers in insertion order
- bottom divider, footer

The whole report is built in memory and returned as one string, so a
caller either gets the full framed report or an exception before output.
"""

from __future__ import annotations

from typing import Iterable

from machine_report.model import Divider, ReportEntry
from machine_report.render.base import Renderer
from machine_report.render.frame import DividerPosition, FrameDrawer
from machine_report.render.layout import LayoutConfig, negotiate
from machine_report.render.rows import format_row


def render_lines(entries: Iterable[ReportEntry], config: LayoutConfig) -> list[str]:
    body = tuple(entries)
    widths = negotiate(body, config)
    frame = FrameDrawer(widths)

    lines = frame.top_header()
    lines.append(frame.centered_line(config.title))
    lines.append(frame.centered_line(config.subtitle))
    lines.append(frame.divider(DividerPosition.TOP))

    for entry in body:
        if isinstance(entry, Divider):
            lines.append(frame.divider(DividerPosition.MIDDLE))
        else:
            lines.append(format_row(entry, widths.label, widths.data))

    lines.append(frame.divider(DividerPosition.BOTTOM))
    lines.append(frame.footer())
    return lines


def render_report(entries: Iterable[ReportEntry], config: LayoutConfig) -> str:
    return "\n".join(render_lines(entries, config))


class TableRenderer(Renderer):
    name = "table"

    def render(self, body, *, config: LayoutConfig, meta: dict) -> str:
        return render_report(body, config)
