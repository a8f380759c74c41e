"""
machine_report.render.base
AUTHOR: carter-vin

Renderer interface
"""

from __future__ import annotations

from machine_report.model import ReportBody
from machine_report.render.layout import LayoutConfig


class Renderer:
    name: str = "base"

    def render(self, body: ReportBody, *, config: LayoutConfig, meta: dict) -> str:
        raise NotImplementedError
