"""
machine_report.main
------------
AUTHOR: carter-vin

CLI entrypoint for the TR-200 machine report.

Key contract:
- no arguments -> one rendered report on stdout, exit 0
- `--help` / `-h` and `--version` / `-v` exit 0 without collecting anything
- unrecognized flags are ignored and the report still runs
- nothing is written to stdout unless the full report rendered
"""

from __future__ import annotations

import typer

from machine_report.build import build_report_body, collect_snapshot
from machine_report.collectors.base import CollectorOutcome
from machine_report.collectors.disk import DEFAULT_ZFS_FILESYSTEM
from machine_report.logging import event_logger, utc_now_iso
from machine_report.render import RENDERER_NAMES, get_renderer
from machine_report.render.layout import (
    DEFAULT_SUBTITLE,
    DEFAULT_TITLE,
    ConfigurationError,
    LayoutConfig,
)

REPORT_VERSION = "2.0.1"

NO_DATA_MESSAGE = "no machine data could be collected"

app = typer.Typer(
    add_completion=False,
    help="tr200: TR-200 machine report",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(REPORT_VERSION)
        raise typer.Exit()


@app.command(
    context_settings={
        "help_option_names": ["-h", "--help"],
        # Unknown flags fall through to the default action
        "allow_extra_args": True,
        "ignore_unknown_options": True,
    }
)
def report(
    ctx: typer.Context,
    title: str = typer.Option(
        DEFAULT_TITLE,
        envvar="TR200_TITLE",
        help="First centered header line.",
    ),
    subtitle: str = typer.Option(
        DEFAULT_SUBTITLE,
        envvar="TR200_SUBTITLE",
        help="Second centered header line.",
    ),
    min_label_width: int = typer.Option(5, envvar="TR200_MIN_LABEL_WIDTH", help="Label column floor."),
    max_label_width: int = typer.Option(13, envvar="TR200_MAX_LABEL_WIDTH", help="Label column ceiling."),
    min_data_width: int = typer.Option(20, envvar="TR200_MIN_DATA_WIDTH", help="Data column floor."),
    max_data_width: int = typer.Option(32, envvar="TR200_MAX_DATA_WIDTH", help="Data column ceiling."),
    zfs_filesystem: str = typer.Option(
        DEFAULT_ZFS_FILESYSTEM,
        envvar="TR200_ZFS_FILESYSTEM",
        help="ZFS dataset reported when the root filesystem is ZFS.",
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        help=f"Output format: {' or '.join(RENDERER_NAMES)}.",
    ),
    events: bool = typer.Option(
        False,
        "--events/--no-events",
        envvar="TR200_EVENTS",
        help="Write JSON event lines to stderr.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version number and exit.",
    ),
) -> None:
    """
    Collect host metrics and print the machine report
    """
    try:
        config = LayoutConfig(
            min_label_width=min_label_width,
            max_label_width=max_label_width,
            min_data_width=min_data_width,
            max_data_width=max_data_width,
            title=title,
            subtitle=subtitle,
        )
    except ConfigurationError as e:
        raise typer.BadParameter(str(e))

    try:
        renderer = get_renderer(output_format)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--format")

    log = event_logger(events, report_version=REPORT_VERSION)
    log("report_start", format=output_format)

    if ctx.args:
        log("args_ignored", args=list(ctx.args))

    def _on_collector_failed(outcome: CollectorOutcome) -> None:
        log(
            "collector_failed",
            collector=outcome.name,
            error_type=outcome.error_type,
            message=outcome.error_message,
        )

    try:
        snapshot = collect_snapshot(zfs_filesystem=zfs_filesystem, on_failure=_on_collector_failed)
        if snapshot.empty:
            log("report_failed", message=NO_DATA_MESSAGE)
            typer.echo(f"error: {NO_DATA_MESSAGE}", err=True)
            raise typer.Exit(code=1)

        body = build_report_body(snapshot, config)
        meta = {"report_version": REPORT_VERSION, "generated_at": utc_now_iso()}
        output = renderer.render(body, config=config, meta=meta)

        typer.echo(output)
        log("report_rendered", entries=len(body), bytes=len(output.encode("utf-8")))

    finally:
        log("report_shutdown")


if __name__ == "__main__":
    app()
