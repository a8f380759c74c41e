"""
machine_report.collectors.base
AUTHOR: carter-vin

Light result wrapper -> prevent collector errors from crashing the report
Command helper -> platform tools may be missing, slow or failing
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

COMMAND_TIMEOUT_S = 3.0


@dataclass(frozen=True)
class CollectorOutcome:
    """
    Normalized collector result
    - ok: false=failure, error details in error field
    - value: collector result object if ok=true
    """

    name: str
    ok: bool
    value: Optional[Any] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None


def run_collector(name: str, fn, *args, **kwargs) -> CollectorOutcome:
    """
    Run collector & collect failure as data
    """
    try:
        v = fn(*args, **kwargs)
        return CollectorOutcome(name=name, ok=True, value=v, error_type=None, error_message=None)
    except Exception as e:
        return CollectorOutcome(
            name=name,
            ok=False,
            value=None,
            error_type=type(e).__name__,
            error_message=str(e),
        )


def run_command(args: Sequence[str], *, timeout: float = COMMAND_TIMEOUT_S) -> Optional[str]:
    """
    Run an external tool and return its stdout

    Returns None when the tool is missing, exits non-zero or times out
    """
    try:
        completed = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError):
        return None

    if completed.returncode != 0:
        return None
    return completed.stdout


def read_text(path: Path) -> Optional[str]:
    """
    Read a small system file, None if missing or unreadable
    """
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return None
