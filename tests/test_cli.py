"""
Contract test for the tr200 command line
"""

import json

import pytest
from typer.testing import CliRunner

import machine_report.main as main
from machine_report.build import MachineSnapshot
from machine_report.collectors.os_info import OsResult
from machine_report.collectors.uptime import UptimeResult
from machine_report.main import REPORT_VERSION, app


@pytest.fixture
def fake_collect(monkeypatch):
    calls = []

    def _collect(**kwargs):
        calls.append(kwargs)
        return MachineSnapshot(
            os=OsResult(name="Debian 13 Trixie", kernel="Linux 6.12.0"),
            uptime=UptimeResult(seconds=3 * 3600),
        )

    monkeypatch.setattr(main, "collect_snapshot", _collect)
    return calls


def test_no_args_prints_report(fake_collect) -> None:
    result = CliRunner().invoke(app, [])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert lines[0].startswith("┌┬")
    assert lines[-1].startswith("└─")
    assert "TR-200 MACHINE REPORT" in result.stdout
    assert "│ OS         │ Debian 13 Trixie" in result.stdout
    assert len(fake_collect) == 1


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version_skips_collection(flag, fake_collect) -> None:
    result = CliRunner().invoke(app, [flag])

    assert result.exit_code == 0
    assert result.stdout.strip() == REPORT_VERSION
    assert fake_collect == []


@pytest.mark.parametrize("flag", ["--help", "-h"])
def test_help_skips_collection(flag, fake_collect) -> None:
    result = CliRunner().invoke(app, [flag])

    assert result.exit_code == 0
    assert "Usage" in result.stdout
    assert fake_collect == []


def test_unknown_flag_still_runs_report(fake_collect) -> None:
    result = CliRunner().invoke(app, ["--install-everything", "extra"])

    assert result.exit_code == 0
    assert "UPTIME" in result.stdout
    assert len(fake_collect) == 1


def test_inverted_bounds_fail_before_collection(fake_collect) -> None:
    result = CliRunner().invoke(app, ["--min-data-width", "40", "--max-data-width", "30"])

    assert result.exit_code == 2
    assert "┌" not in result.output
    assert fake_collect == []


def test_title_from_env(fake_collect) -> None:
    result = CliRunner().invoke(app, [], env={"TR200_TITLE": "ACME LABS"})

    assert result.exit_code == 0
    assert result.stdout.splitlines()[2].strip("│ ") == "ACME LABS"


def test_no_data_exits_non_zero(monkeypatch) -> None:
    monkeypatch.setattr(main, "collect_snapshot", lambda **kwargs: MachineSnapshot())

    result = CliRunner().invoke(app, [])

    assert result.exit_code == 1
    assert "┌" not in result.output
    assert "no machine data could be collected" in result.output


def test_json_format(fake_collect) -> None:
    result = CliRunner().invoke(app, ["--format", "json"])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["meta"]["report_version"] == REPORT_VERSION
    assert payload["rows"][0] == {"kind": "row", "label": "OS", "value": "Debian 13 Trixie"}


def test_unknown_format_is_usage_error(fake_collect) -> None:
    result = CliRunner().invoke(app, ["--format", "xml"])

    assert result.exit_code == 2
    assert fake_collect == []
