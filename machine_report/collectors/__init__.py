"""machine_report.collectors package exports."""

from machine_report.collectors.cpu import collect_cpu
from machine_report.collectors.disk import collect_disk
from machine_report.collectors.login import collect_login
from machine_report.collectors.memory import collect_memory
from machine_report.collectors.network import collect_network
from machine_report.collectors.os_info import collect_os
from machine_report.collectors.uptime import collect_uptime

__all__ = [
    "collect_cpu",
    "collect_disk",
    "collect_login",
    "collect_memory",
    "collect_network",
    "collect_os",
    "collect_uptime",
]
