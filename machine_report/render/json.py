"""
machine_report.render.json
AUTHOR: carter-vin

JSON renderer: same body, machine-readable
"""

from __future__ import annotations

import json

from machine_report.model import body_to_list
from machine_report.render.base import Renderer


class JsonRenderer(Renderer):
    name = "json"

    def render(self, body, *, config, meta: dict) -> str:
        payload = {
            "meta": {
                **meta,
                "title": config.title,
                "subtitle": config.subtitle,
            },
            "rows": body_to_list(body),
        }
        return json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
