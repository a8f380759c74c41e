"""
machine_report.collectors.os_info
AUTHOR: carter-vin

OS collector
- Linux: /etc/os-release
- macOS: platform.mac_ver
- anything else: uname system name
"""

from __future__ import annotations

import platform
import shlex
from dataclasses import dataclass
from pathlib import Path

from machine_report.collectors.base import read_text

OS_RELEASE = Path("/etc/os-release")


@dataclass(frozen=True)
class OsResult:
    name: str
    kernel: str


def _parse_os_release(contents: str) -> dict[str, str]:
    """
    Parse KEY=value lines, values may be shell-quoted
    """
    values: dict[str, str] = {}
    for line in contents.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
        except ValueError:
            parts = [raw.strip("\"'")]
        values[key.strip()] = " ".join(parts)
    return values


def format_os_name(release: dict[str, str]) -> str:
    """
    "{Id} {version} {Codename}", e.g. "Debian 13 (trixie) Trixie"
    """
    parts = [
        release.get("ID", "").capitalize(),
        release.get("VERSION", ""),
        release.get("VERSION_CODENAME", "").capitalize(),
    ]
    return " ".join(part for part in parts if part)


def collect_os() -> OsResult:
    system = platform.system() or "Unknown"
    kernel = f"{system} {platform.release()}".strip()

    if system == "Darwin":
        version = platform.mac_ver()[0]
        return OsResult(name=f"macOS {version or 'Unknown'}", kernel=kernel)

    contents = read_text(OS_RELEASE)
    if contents:
        name = format_os_name(_parse_os_release(contents))
        if name:
            return OsResult(name=name, kernel=kernel)

    return OsResult(name=f"{system} (Unknown Version)", kernel=kernel)
