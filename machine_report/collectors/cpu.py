"""
machine_report.collectors.cpu
AUTHOR: carter-vin

CPU collector
- Linux: lscpu for model/topology/hypervisor, /proc/cpuinfo or sysfs for frequency
- macOS: sysctl
- load averages via os.getloadavg; unavailable on some platforms
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from machine_report.collectors.base import read_text, run_command

PROC_CPUINFO = Path("/proc/cpuinfo")
SYSFS_CUR_FREQ = Path("/sys/devices/system/cpu/cpu0/cpufreq/scaling_cur_freq")

BARE_METAL = "Bare Metal"


@dataclass(frozen=True)
class CpuResult:
    model: str
    cores: Optional[int]
    cores_per_socket: Optional[str]
    sockets: Optional[str]
    hypervisor: str
    freq_ghz: Optional[float]
    loadavg_1m: Optional[float]
    loadavg_5m: Optional[float]
    loadavg_15m: Optional[float]


def _parse_colon_fields(contents: str) -> dict[str, str]:
    """
    "Key:   value" lines -> dict, first occurrence wins
    """
    values: dict[str, str] = {}
    for line in contents.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key and key not in values:
            values[key] = value.strip()
    return values


def short_model(model: str) -> str:
    # Vendor strings run long; the first four words identify the part
    return " ".join(model.split()[:4])


def _parse_lscpu(contents: str) -> dict[str, str]:
    fields = _parse_colon_fields(contents)
    return {
        "model": short_model(fields.get("Model name") or fields.get("Model") or ""),
        "hypervisor": fields.get("Hypervisor vendor", ""),
        "cores": fields.get("CPU(s)", ""),
        "cores_per_socket": fields.get("Core(s) per socket", ""),
        "sockets": fields.get("Socket(s)", ""),
    }


def _parse_cpuinfo_ghz(contents: str) -> Optional[float]:
    mhz = _parse_colon_fields(contents).get("cpu MHz")
    if not mhz:
        return None
    try:
        return float(mhz) / 1000.0
    except ValueError:
        return None


def _to_int(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value else None
    except ValueError:
        return None


def _loadavg() -> tuple[Optional[float], Optional[float], Optional[float]]:
    try:
        return os.getloadavg()
    except (OSError, AttributeError):
        return None, None, None


def _sysctl(name: str) -> Optional[str]:
    output = run_command(["sysctl", "-n", name])
    return output.strip() if output else None


def _collect_macos() -> CpuResult:
    freq_hz = _to_int(_sysctl("hw.cpufrequency_max") or _sysctl("hw.cpufrequency"))
    load_1m, load_5m, load_15m = _loadavg()
    return CpuResult(
        model=_sysctl("machdep.cpu.brand_string") or "Unknown CPU",
        cores=_to_int(_sysctl("hw.ncpu")) or os.cpu_count(),
        cores_per_socket=_sysctl("machdep.cpu.core_count"),
        sockets=_sysctl("hw.packages") or _sysctl("hw.physicalcpu"),
        hypervisor=BARE_METAL,
        freq_ghz=freq_hz / 1e9 if freq_hz else None,
        loadavg_1m=load_1m,
        loadavg_5m=load_5m,
        loadavg_15m=load_15m,
    )


def _collect_linux() -> CpuResult:
    output = run_command(["lscpu"])
    fields = _parse_lscpu(output) if output else {}

    freq_ghz = None
    contents = read_text(PROC_CPUINFO)
    if contents:
        freq_ghz = _parse_cpuinfo_ghz(contents)
        if not fields.get("model"):
            info = _parse_colon_fields(contents)
            fields["model"] = short_model(info.get("model name", ""))
    if freq_ghz is None:
        # ARM boards often only expose sysfs, in kHz
        khz = _to_int((read_text(SYSFS_CUR_FREQ) or "").strip())
        freq_ghz = khz / 1e6 if khz else None

    load_1m, load_5m, load_15m = _loadavg()
    return CpuResult(
        model=fields.get("model") or "Unknown CPU",
        cores=_to_int(fields.get("cores")) or os.cpu_count(),
        cores_per_socket=fields.get("cores_per_socket") or None,
        sockets=fields.get("sockets") or None,
        hypervisor=fields.get("hypervisor") or BARE_METAL,
        freq_ghz=freq_ghz,
        loadavg_1m=load_1m,
        loadavg_5m=load_5m,
        loadavg_15m=load_15m,
    )


def collect_cpu() -> CpuResult:
    """
    Collect CPU identity, topology and load averages
    """
    if platform.system() == "Darwin":
        result = _collect_macos()
    else:
        result = _collect_linux()

    if result.loadavg_1m is None and result.cores is None:
        raise RuntimeError("CPU metrics unavailable")
    return result
