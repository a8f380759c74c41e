"""
machine_report.collectors.login
AUTHOR: carter-vin

Last login collector
- lastlog2 (modern Debian) first, then classic lastlog
- ip only kept when it looks like an IPv4 address
"""

from __future__ import annotations

import getpass
import ipaddress
from dataclasses import dataclass
from typing import Optional

from machine_report.collectors.base import run_command

NEVER_LOGGED_IN = "Never logged in"
TRACKING_UNAVAILABLE = "Login tracking unavailable"

_WEEKDAYS = {"Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"}


@dataclass(frozen=True)
class LoginResult:
    time: str
    ip: Optional[str] = None


def _is_ipv4(value: str) -> bool:
    try:
        return ipaddress.ip_address(value).version == 4
    except ValueError:
        return False


def _parse_lastlog(output: str) -> LoginResult:
    """
    Parse the record line of lastlog/lastlog2 output (line 2, after the header)

    Both tools end the line with a ctime-like stamp; the From column is optional.
    """
    lines = [line for line in output.splitlines() if line.strip()]
    if len(lines) < 2 or "**Never" in lines[1]:
        return LoginResult(time=NEVER_LOGGED_IN)

    tokens = lines[1].split()
    ip = next((token for token in tokens[1:] if _is_ipv4(token)), None)

    start = next((i for i, token in enumerate(tokens) if token in _WEEKDAYS), None)
    if start is None:
        return LoginResult(time=NEVER_LOGGED_IN, ip=ip)

    # Drop numeric timezone offsets such as +0000
    stamp = [token for token in tokens[start:] if not token.startswith(("+", "-"))]
    return LoginResult(time=" ".join(stamp), ip=ip)


def _user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def collect_login() -> LoginResult:
    user = _user()
    for tool in ("lastlog2", "lastlog"):
        args = [tool, "-u", user] if user else [tool]
        output = run_command(args)
        if output is not None:
            return _parse_lastlog(output)
    return LoginResult(time=TRACKING_UNAVAILABLE)
