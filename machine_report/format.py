"""
machine_report.format
AUTHOR: carter-vin

Value formatting helpers for report rows
"""

from __future__ import annotations

from typing import Optional

from machine_report.model import UsageRatio

UNKNOWN = "Unknown"

GIB = 1024 ** 3


def format_gb(bytes_value: Optional[int]) -> str:
    if bytes_value is None:
        return UNKNOWN
    return f"{bytes_value / GIB:.2f}"


def format_percent(ratio: UsageRatio) -> str:
    return f"{ratio.percent:.2f}"


def format_usage(used: Optional[int], total: Optional[int], unit: str, *, shown_total: Optional[int] = None) -> str:
    """
    "12.34/56.78 GiB [21.73%]"

    shown_total lets ZFS display used/available while the percent uses used+available
    """
    if used is None or total is None:
        return UNKNOWN
    display_total = total if shown_total is None else shown_total
    percent = format_percent(UsageRatio(used=used, total=total))
    return f"{format_gb(used)}/{format_gb(display_total)} {unit} [{percent}%]"


def format_ghz(freq_ghz: Optional[float]) -> str:
    if freq_ghz is None:
        return UNKNOWN
    return f"{freq_ghz:.2f} GHz"


def format_cores(cores_per_socket: Optional[str], sockets: Optional[str]) -> str:
    return f"{cores_per_socket or '-'} vCPU(s) / {sockets or '-'} Socket(s)"
