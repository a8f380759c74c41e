"""
machine_report.collectors.memory
AUTHOR: carter-vin

Memory collector
- Linux: /proc/meminfo (MemTotal, MemAvailable)
- macOS: sysctl hw.memsize + vm_stat free/inactive/speculative pages
- other platforms: empty values, no failure
"""

from __future__ import annotations

import platform
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from machine_report.collectors.base import run_command

PROC_MEMINFO = Path("/proc/meminfo")
DEFAULT_PAGE_SIZE = 4096


@dataclass(frozen=True)
class MemoryResult:
    mem_total_bytes: Optional[int]
    mem_available_bytes: Optional[int]

    @property
    def mem_used_bytes(self) -> Optional[int]:
        if self.mem_total_bytes is None or self.mem_available_bytes is None:
            return None
        return self.mem_total_bytes - self.mem_available_bytes


def _parse_meminfo(contents: str) -> dict[str, int]:
    """
    Parse /proc/meminfo into a dict of values in bytes
    """
    values: dict[str, int] = {}
    for line in contents.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        try:
            values[parts[0].rstrip(":")] = int(parts[1]) * 1024
        except ValueError:
            continue
    return values


def _parse_vm_stat_available(output: str) -> int:
    """
    Bytes in free + inactive + speculative pages from vm_stat output
    """
    match = re.search(r"page size of (\d+) bytes", output)
    page_size = int(match.group(1)) if match else DEFAULT_PAGE_SIZE

    pages = 0
    for line in output.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() in ("Pages free", "Pages inactive", "Pages speculative"):
            try:
                pages += int(value.strip().rstrip("."))
            except ValueError:
                continue
    return pages * page_size


def _collect_macos() -> MemoryResult:
    output = run_command(["sysctl", "-n", "hw.memsize"])
    try:
        total = int(output.strip()) if output else None
    except ValueError:
        total = None
    if not total:
        return MemoryResult(mem_total_bytes=None, mem_available_bytes=None)

    vm_stat = run_command(["vm_stat"])
    # Rough estimate when vm_stat is unavailable
    available = _parse_vm_stat_available(vm_stat) if vm_stat else total // 4
    return MemoryResult(mem_total_bytes=total, mem_available_bytes=min(available, total))


def collect_memory() -> MemoryResult:
    """
    Collect memory total/available in bytes
    """
    if platform.system() == "Darwin":
        return _collect_macos()

    if not PROC_MEMINFO.exists():
        return MemoryResult(mem_total_bytes=None, mem_available_bytes=None)

    values = _parse_meminfo(PROC_MEMINFO.read_text(encoding="utf-8"))
    mem_total = values.get("MemTotal")
    mem_available = values.get("MemAvailable")

    if mem_total is None or mem_available is None:
        raise RuntimeError("MemAvailable or MemTotal missing in /proc/meminfo")

    return MemoryResult(mem_total_bytes=mem_total, mem_available_bytes=mem_available)
