"""
machine_report.build
AUTHOR: carter-vin

Collector outputs -> ReportBody

Two-phase build:
1) assemble text rows with blank bar cells, negotiate widths
2) fill bar cells with graphs sized to the negotiated data width

The renderer never knows which rows hold bars.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Callable, Optional

from machine_report.collectors.base import CollectorOutcome, run_collector
from machine_report.collectors.cpu import CpuResult, collect_cpu
from machine_report.collectors.disk import DEFAULT_ZFS_FILESYSTEM, DiskResult, collect_disk
from machine_report.collectors.login import LoginResult, collect_login
from machine_report.collectors.memory import MemoryResult, collect_memory
from machine_report.collectors.network import NetworkResult, collect_network
from machine_report.collectors.os_info import OsResult, collect_os
from machine_report.collectors.uptime import UptimeResult, collect_uptime, format_uptime
from machine_report.format import (
    UNKNOWN,
    format_cores,
    format_ghz,
    format_usage,
)
from machine_report.model import (
    DIVIDER,
    EMPTY_RATIO,
    MetricRow,
    ReportBody,
    ReportEntry,
    UsageRatio,
    UsageRatios,
)
from machine_report.render.bars import bar_graph
from machine_report.render.layout import LayoutConfig, negotiate

BarFn = Callable[[UsageRatio], str]


@dataclass(frozen=True)
class MachineSnapshot:
    """
    Everything the collectors produced; None where a collector failed
    """

    os: Optional[OsResult] = None
    network: Optional[NetworkResult] = None
    cpu: Optional[CpuResult] = None
    memory: Optional[MemoryResult] = None
    disk: Optional[DiskResult] = None
    login: Optional[LoginResult] = None
    uptime: Optional[UptimeResult] = None

    @property
    def empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


def collect_snapshot(
    *,
    zfs_filesystem: str = DEFAULT_ZFS_FILESYSTEM,
    on_failure: Optional[Callable[[CollectorOutcome], None]] = None,
) -> MachineSnapshot:
    """
    Run every collector; failures become None fields and are reported to on_failure
    """
    outcomes = [
        run_collector("os", collect_os),
        run_collector("network", collect_network),
        run_collector("cpu", collect_cpu),
        run_collector("memory", collect_memory),
        run_collector("disk", collect_disk, zfs_filesystem=zfs_filesystem),
        run_collector("login", collect_login),
        run_collector("uptime", collect_uptime),
    ]

    values = {}
    for outcome in outcomes:
        if outcome.ok:
            values[outcome.name] = outcome.value
        elif on_failure is not None:
            on_failure(outcome)

    return MachineSnapshot(**values)


def _load_ratio(load: Optional[float], cores: Optional[int]) -> UsageRatio:
    if load is None or not cores:
        return EMPTY_RATIO
    return UsageRatio(used=load, total=cores)


def usage_ratios(snapshot: MachineSnapshot) -> UsageRatios:
    cpu = snapshot.cpu
    if cpu is not None:
        cpu_ratios = (
            _load_ratio(cpu.loadavg_1m, cpu.cores),
            _load_ratio(cpu.loadavg_5m, cpu.cores),
            _load_ratio(cpu.loadavg_15m, cpu.cores),
        )
    else:
        cpu_ratios = (EMPTY_RATIO, EMPTY_RATIO, EMPTY_RATIO)

    memory = EMPTY_RATIO
    mem = snapshot.memory
    if mem is not None and mem.mem_used_bytes is not None and mem.mem_total_bytes:
        memory = UsageRatio(used=mem.mem_used_bytes, total=mem.mem_total_bytes)

    disk = EMPTY_RATIO
    if snapshot.disk is not None:
        zfs = snapshot.disk.zfs
        if zfs is not None:
            disk = UsageRatio(used=zfs.used_bytes, total=zfs.total_bytes)
        else:
            disk = UsageRatio(used=snapshot.disk.disk_used_bytes, total=snapshot.disk.disk_total_bytes)

    return UsageRatios(cpu=cpu_ratios, memory=memory, disk=disk)


def _entries(snapshot: MachineSnapshot, ratios: UsageRatios, bar: BarFn) -> list[ReportEntry]:
    os_info = snapshot.os
    net = snapshot.network
    cpu = snapshot.cpu
    disk = snapshot.disk
    mem = snapshot.memory
    login = snapshot.login

    entries: list[ReportEntry] = [
        MetricRow("OS", os_info.name if os_info else UNKNOWN),
        MetricRow("KERNEL", os_info.kernel if os_info else UNKNOWN),
        DIVIDER,
        MetricRow("HOSTNAME", net.hostname if net else UNKNOWN),
        MetricRow("MACHINE IP", net.machine_ip if net else UNKNOWN),
        MetricRow("CLIENT  IP", net.client_ip if net else UNKNOWN),
    ]
    if net:
        for index, server in enumerate(net.dns_servers, start=1):
            entries.append(MetricRow(f"DNS  IP {index}", server))
    entries.extend(
        [
            MetricRow("USER", net.user if net else UNKNOWN),
            DIVIDER,
            MetricRow("PROCESSOR", cpu.model if cpu else UNKNOWN),
            MetricRow("CORES", format_cores(cpu.cores_per_socket, cpu.sockets) if cpu else UNKNOWN),
            MetricRow("HYPERVISOR", cpu.hypervisor if cpu else UNKNOWN),
            MetricRow("CPU FREQ", format_ghz(cpu.freq_ghz) if cpu else UNKNOWN),
            MetricRow("LOAD  1m", bar(ratios.cpu[0])),
            MetricRow("LOAD  5m", bar(ratios.cpu[1])),
            MetricRow("LOAD 15m", bar(ratios.cpu[2])),
            DIVIDER,
        ]
    )

    zfs = disk.zfs if disk else None
    if zfs is not None:
        entries.extend(
            [
                MetricRow(
                    "VOLUME",
                    format_usage(zfs.used_bytes, zfs.total_bytes, "GB", shown_total=zfs.available_bytes),
                ),
                MetricRow("DISK USAGE", bar(ratios.disk)),
                MetricRow("ZFS HEALTH", zfs.health),
            ]
        )
    else:
        entries.extend(
            [
                MetricRow(
                    "VOLUME",
                    format_usage(disk.disk_used_bytes, disk.disk_total_bytes, "GB") if disk else UNKNOWN,
                ),
                MetricRow("DISK USAGE", bar(ratios.disk)),
            ]
        )

    entries.extend(
        [
            DIVIDER,
            MetricRow(
                "MEMORY",
                format_usage(mem.mem_used_bytes, mem.mem_total_bytes, "GiB") if mem else UNKNOWN,
            ),
            MetricRow("USAGE", bar(ratios.memory)),
            DIVIDER,
            MetricRow("LAST LOGIN", login.time if login else UNKNOWN),
        ]
    )
    if login and login.ip:
        # Continuation row: blank label under LAST LOGIN
        entries.append(MetricRow("", login.ip))

    entries.append(MetricRow("UPTIME", format_uptime(snapshot.uptime.seconds) if snapshot.uptime else UNKNOWN))
    return entries


def build_report_body(snapshot: MachineSnapshot, config: LayoutConfig) -> ReportBody:
    ratios = usage_ratios(snapshot)

    # Phase 1: widths from text rows only
    widths = negotiate(_entries(snapshot, ratios, lambda ratio: ""), config)

    # Phase 2: bars sized to the data column; within bounds, so widths do not move
    return tuple(
        _entries(snapshot, ratios, lambda ratio: bar_graph(ratio.used, ratio.total, widths.data))
    )
