"""
machine_report.collectors.network
AUTHOR: carter-vin

Network identity collector
- hostname (FQDN preferred)
- first machine address, skipping loopback and docker interfaces
- SSH client address for remote sessions
- DNS servers from resolv.conf

No direct network calls. The FQDN comes from `hostname -f`, which may
consult the resolver; it runs under the command timeout so it cannot stall.
"""

from __future__ import annotations

import getpass
import ipaddress
import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from machine_report.collectors.base import read_text, run_command

RESOLV_CONF = Path("/etc/resolv.conf")
MAX_DNS_SERVERS = 5

NO_IP = "No IP found"
NOT_CONNECTED = "Not connected"
NOT_DEFINED = "Not Defined"


@dataclass(frozen=True)
class NetworkResult:
    hostname: str
    machine_ip: str
    client_ip: str
    user: str
    dns_servers: tuple[str, ...] = ()


@dataclass(frozen=True)
class InterfaceAddress:
    interface: str
    family: str  # "inet" | "inet6"
    address: str


def _skip_interface(name: str) -> bool:
    name = name.rstrip(":")
    return name == "lo" or name.startswith("lo0") or name.startswith("docker")


def _parse_ip_addr(output: str) -> list[InterfaceAddress]:
    """
    Parse `ip -o addr show` one-line-per-address output
    """
    found: list[InterfaceAddress] = []
    for line in output.splitlines():
        parts = line.split()
        if len(parts) < 4 or parts[2] not in ("inet", "inet6"):
            continue
        address = parts[3].split("/", 1)[0]
        found.append(InterfaceAddress(interface=parts[1], family=parts[2], address=address))
    return found


def _parse_ifconfig(output: str) -> list[InterfaceAddress]:
    """
    Parse BSD/macOS/net-tools ifconfig blocks
    """
    found: list[InterfaceAddress] = []
    interface = ""
    for line in output.splitlines():
        if not line.strip():
            continue
        if not line[0].isspace():
            interface = line.split()[0].rstrip(":")
            continue
        parts = line.split()
        if len(parts) >= 2 and parts[0] in ("inet", "inet6"):
            address = parts[1].removeprefix("addr:").split("%", 1)[0]
            found.append(InterfaceAddress(interface=interface, family=parts[0], address=address))
    return found


def pick_machine_ip(addresses: list[InterfaceAddress]) -> Optional[str]:
    """
    First IPv4 on a non-loopback, non-docker interface; IPv6 as fallback
    """
    candidates = [item for item in addresses if not _skip_interface(item.interface)]
    for family in ("inet", "inet6"):
        for item in candidates:
            if item.family == family:
                return item.address
    return None


def _machine_ip() -> str:
    output = run_command(["ip", "-o", "addr", "show"])
    addresses = _parse_ip_addr(output) if output else []
    if not addresses:
        output = run_command(["ifconfig"])
        addresses = _parse_ifconfig(output) if output else []
    return pick_machine_ip(addresses) or NO_IP


def client_ip_from_env(env: dict[str, str]) -> str:
    """
    SSH_CLIENT / SSH_CONNECTION start with the remote address
    """
    for key in ("SSH_CLIENT", "SSH_CONNECTION"):
        value = env.get(key, "").split()
        if value:
            return value[0]
    return NOT_CONNECTED


def _parse_resolv_conf(contents: str) -> tuple[str, ...]:
    servers: list[str] = []
    for line in contents.splitlines():
        parts = line.split()
        if len(parts) < 2 or parts[0] != "nameserver":
            continue
        try:
            if ipaddress.ip_address(parts[1]).version != 4:
                continue
        except ValueError:
            continue
        servers.append(parts[1])
    return tuple(servers[:MAX_DNS_SERVERS])


def _hostname() -> str:
    """
    FQDN when cheaply available, else the short hostname
    """
    name = socket.gethostname()
    if "." in name:
        return name

    output = run_command(["hostname", "-f"])
    fqdn = output.strip() if output else ""
    return fqdn or name or NOT_DEFINED


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "Unknown"


def collect_network() -> NetworkResult:
    contents = read_text(RESOLV_CONF)
    return NetworkResult(
        hostname=_hostname(),
        machine_ip=_machine_ip(),
        client_ip=client_ip_from_env(dict(os.environ)),
        user=_current_user(),
        dns_servers=_parse_resolv_conf(contents) if contents else (),
    )
