"""
machine_report.collectors.disk
AUTHOR: carter-vin

Disk collector
- root filesystem usage via shutil.disk_usage
- ZFS root (Linux): dataset used/available + pool health via zfs/zpool
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from machine_report.collectors.base import read_text, run_command

PROC_MOUNTS = Path("/proc/mounts")
DEFAULT_ZFS_FILESYSTEM = "zroot/ROOT/os"

ZFS_HEALTHY = "HEALTH O.K."
ZFS_CHECK = "CHECK REQUIRED"
ZFS_UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ZfsResult:
    used_bytes: int
    available_bytes: int
    health: str

    @property
    def total_bytes(self) -> int:
        # ZFS "available" excludes what is already used
        return self.used_bytes + self.available_bytes


@dataclass(frozen=True)
class DiskResult:
    disk_total_bytes: int
    disk_used_bytes: int
    disk_free_bytes: int
    zfs: Optional[ZfsResult] = None


def _zfs_mounted(mounts: str) -> bool:
    for line in mounts.splitlines():
        parts = line.split()
        if len(parts) >= 3 and parts[2] == "zfs":
            return True
    return False


def classify_zpool_status(first_line: str) -> str:
    line = first_line.strip()
    if not line:
        return ZFS_UNKNOWN
    if line == "all pools are healthy" or "is healthy" in line:
        return ZFS_HEALTHY
    return ZFS_CHECK


def _zfs_property(filesystem: str, prop: str) -> int:
    output = run_command(["zfs", "get", "-o", "value", "-Hp", prop, filesystem])
    try:
        return int(output.strip()) if output else 0
    except ValueError:
        return 0


def _collect_zfs(filesystem: str) -> Optional[ZfsResult]:
    if shutil.which("zfs") is None:
        return None
    mounts = read_text(PROC_MOUNTS)
    if not mounts or not _zfs_mounted(mounts):
        return None

    pool = filesystem.split("/", 1)[0]
    status = run_command(["zpool", "status", "-x", pool]) or ""
    first_line = status.splitlines()[0] if status.strip() else ""

    return ZfsResult(
        used_bytes=_zfs_property(filesystem, "used"),
        available_bytes=_zfs_property(filesystem, "available"),
        health=classify_zpool_status(first_line),
    )


def collect_disk(path: str = "/", *, zfs_filesystem: str = DEFAULT_ZFS_FILESYSTEM) -> DiskResult:
    """
    Collect disk usage for a given path, plus ZFS details when the host runs ZFS
    """
    usage = shutil.disk_usage(path)
    return DiskResult(
        disk_total_bytes=usage.total,
        disk_used_bytes=usage.used,
        disk_free_bytes=usage.free,
        zfs=_collect_zfs(zfs_filesystem),
    )
