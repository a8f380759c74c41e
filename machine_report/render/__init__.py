"""machine_report.render registry."""

from __future__ import annotations

from machine_report.render.json import JsonRenderer
from machine_report.render.table import TableRenderer

_RENDERERS = {
    "table": TableRenderer(),
    "json": JsonRenderer(),
}

RENDERER_NAMES = tuple(_RENDERERS)


def get_renderer(name: str):
    if name not in _RENDERERS:
        raise ValueError(f"unknown renderer: {name}")
    return _RENDERERS[name]
