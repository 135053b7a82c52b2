"""
exporter.main
------------
AUTHOR: carter-vin

CLI entrypoint for filefd-exporter

Key contract:
- `filefd-exporter --help` shows a Commands section.
- `filefd-exporter oneshot` scrapes once and prints the text exposition.
- `filefd-exporter run` serves /metrics until interrupted.
"""

from __future__ import annotations

import platform
import sys
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import typer
from prometheus_client import generate_latest, start_http_server

from exporter import EXPORTER_VERSION
from exporter.collectors import FACTORIES, build_collectors
from exporter.config import ExporterConfig, load_config
from exporter.emit import ExpositionTargets, emit_exposition
from exporter.logging import emit_event
from exporter.node import build_registry

app = typer.Typer(
    add_completion=False,
    help="filefd-exporter: node-local Prometheus exporter for kernel file descriptor stats",
)


# -----------------------------
# DATA CLASSES
# -----------------------------
@dataclass(frozen=True)
class EnvironmentInfo:
    """
    Snapshot of the runtime environment
    """

    python_version: str
    os: str
    machine: str
    utc_now: str


def collect_environment_info() -> EnvironmentInfo:
    return EnvironmentInfo(
        python_version=sys.version.split()[0],
        os=f"{platform.system()} {platform.release()}",
        machine=platform.machine(),
        utc_now=datetime.now(timezone.utc).isoformat(),
    )


def _resolve_config(**overrides) -> ExporterConfig:
    try:
        return load_config().with_overrides(**overrides)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _build(config: ExporterConfig):
    try:
        collectors = build_collectors(config.collectors, config.procfs)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--collectors") from e
    return build_registry(collectors)


# -----------------------------
# ROOT COMMAND BEHAVIOR
# -----------------------------
@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """
    Root command behavior.

    No subcommand -> print a short hint and exit 0.
    """
    if ctx.invoked_subcommand is None:
        typer.echo("No command provided. Try: filefd-exporter --help")


# -----------------------------
# CLI COMMANDS
# -----------------------------
@app.command()
def version() -> None:
    """
    Print exporter version & runtime env
    """
    env = collect_environment_info()

    typer.echo(f"filefd-exporter v{EXPORTER_VERSION}")
    typer.echo(f"python={env.python_version}")
    typer.echo(f"os={env.os}")
    typer.echo(f"machine={env.machine}")
    typer.echo(f"utc_now={env.utc_now}")


@app.command("collectors")
def list_collectors() -> None:
    """
    List available collectors
    """
    for name in sorted(FACTORIES):
        typer.echo(name)


@app.command("oneshot")
def oneshot(
    procfs: Optional[str] = typer.Option(None, help="procfs mount point (default /proc)."),
    collectors: Optional[str] = typer.Option(None, help="Comma separated collectors to enable."),
    output: Optional[str] = typer.Option(
        None,
        help="Also write the exposition to this file (replaced atomically).",
    ),
    no_stdout: bool = typer.Option(
        False,
        "--no-stdout",
        help="Disable printing the exposition to stdout.",
    ),
) -> None:
    """
    Scrape once, print the exposition and exit

    Exit code 1 if any collector failed (its metrics are left out).
    """
    config = _resolve_config(procfs=procfs, collectors=collectors)
    registry, node = _build(config)

    emit_event(
        "exporter_start",
        exporter_version=EXPORTER_VERSION,
        mode="oneshot",
        procfs=str(config.procfs),
        collectors=list(config.collectors),
    )

    def _on_write_error(e: Exception, path: Path) -> None:
        emit_event(
            "exposition_write_failed",
            exporter_version=EXPORTER_VERSION,
            mode="oneshot",
            output_path=str(path),
            error_type=type(e).__name__,
            message=str(e),
        )

    try:
        text = generate_latest(registry).decode("utf-8")
        targets = ExpositionTargets(
            output_path=Path(output) if output else None,
            emit_stdout=not no_stdout,
        )
        emit_exposition(text, targets, on_write_error=_on_write_error)

        failed = [outcome.name for outcome in node.last_outcomes if not outcome.ok]
        emit_event(
            "scrape_completed",
            exporter_version=EXPORTER_VERSION,
            mode="oneshot",
            collectors_ok=len(node.last_outcomes) - len(failed),
            collectors_failed=failed,
            bytes=len(text),
        )
        if failed:
            raise typer.Exit(code=1)

    finally:
        emit_event(
            "exporter_shutdown",
            exporter_version=EXPORTER_VERSION,
            mode="oneshot",
        )


@app.command("run")
def run(
    procfs: Optional[str] = typer.Option(None, help="procfs mount point (default /proc)."),
    collectors: Optional[str] = typer.Option(None, help="Comma separated collectors to enable."),
    listen_address: Optional[str] = typer.Option(None, help="Address to bind (default 0.0.0.0)."),
    port: Optional[int] = typer.Option(None, help="Port for /metrics (default 9100)."),
) -> None:
    """
    Serve /metrics until interrupted.

    Scrape cadence is decided by whoever scrapes; each request runs one
    update cycle per collector.
    """
    config = _resolve_config(
        procfs=procfs,
        collectors=collectors,
        listen_address=listen_address,
        port=port,
    )
    registry, _ = _build(config)

    emit_event(
        "exporter_start",
        exporter_version=EXPORTER_VERSION,
        mode="run",
        procfs=str(config.procfs),
        collectors=list(config.collectors),
    )

    try:
        start_http_server(config.port, addr=config.listen_address, registry=registry)
        emit_event(
            "exporter_listening",
            exporter_version=EXPORTER_VERSION,
            mode="run",
            listen_address=config.listen_address,
            port=config.port,
        )
        while True:
            time.sleep(1.0)

    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        pass

    finally:
        emit_event(
            "exporter_shutdown",
            exporter_version=EXPORTER_VERSION,
            mode="run",
        )


if __name__ == "__main__":
    app()
