"""
machine_report.collectors.uptime
AUTHOR: carter-vin

Uptime collector
- Linux: /proc/uptime
- macOS/BSD: sysctl kern.boottime
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from machine_report.collectors.base import read_text, run_command

PROC_UPTIME = Path("/proc/uptime")


@dataclass(frozen=True)
class UptimeResult:
    seconds: int


def format_uptime(seconds: int) -> str:
    """
    "2d 3h 4m", zero parts omitted, "0m" under a minute
    """
    seconds = max(int(seconds), 0)
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    return " ".join(parts) or "0m"


def _parse_proc_uptime(contents: str) -> Optional[int]:
    fields = contents.split()
    if not fields:
        return None
    try:
        return int(float(fields[0]))
    except ValueError:
        return None


def _parse_boottime(output: str) -> Optional[int]:
    """
    "{ sec = 1700000000, usec = 0 } Tue Nov 14 ..." -> boot epoch seconds
    """
    match = re.search(r"sec\s*=\s*(\d+)", output)
    return int(match.group(1)) if match else None


def collect_uptime() -> UptimeResult:
    contents = read_text(PROC_UPTIME)
    if contents:
        seconds = _parse_proc_uptime(contents)
        if seconds is not None:
            return UptimeResult(seconds=seconds)

    output = run_command(["sysctl", "-n", "kern.boottime"])
    boot = _parse_boottime(output) if output else None
    if boot is None:
        raise RuntimeError("uptime unavailable")
    return UptimeResult(seconds=int(time.time()) - boot)
