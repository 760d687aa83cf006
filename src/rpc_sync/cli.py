from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional

import typer

from src.config.logger_config import logger
from src.config.settings import settings
from src.rpc_sync.domain.errors import RpcSyncError
from src.rpc_sync.domain.models import SyncSummary
from src.rpc_sync.sync import probe_urls, run_sync, run_validate

app = typer.Typer(no_args_is_help=True, help="Keep a vetted catalog of live RPC endpoints per network.")


def _finish(summary: SyncSummary, json_out: bool) -> None:
    if json_out:
        sys.stdout.write(json.dumps(summary.to_dict(), ensure_ascii=False) + "\n")
    else:
        typer.echo(f"Updated {summary.output_path}")
        typer.echo(f"  Total networks: {summary.networks_total}")
        typer.echo(f"  Verified endpoints: {summary.verified_total}")
        typer.echo(f"  Network 1 endpoints: {summary.primary_network_verified}")
        typer.echo(f"  Version: {summary.previous_version} -> {summary.version}")


def _fail(exc: Exception) -> None:
    if isinstance(exc, RpcSyncError):
        logger.error("Error: {}", exc)
    else:
        logger.exception("Unexpected error: {}", exc)
    raise typer.Exit(code=1)


@app.command("sync")
def sync_cmd(
    source_url: str = typer.Option(settings.source_url, "--source-url", help="Registry document URL."),
    output: Path = typer.Option(Path(settings.output_path), "--output", "-o", help="Catalog JSON path."),
    version_file: Path = typer.Option(Path(settings.version_path), "--version-file", help="Version counter path."),
    export_name: str = typer.Option(settings.export_name, "--export-name", help="Declaration holding the catalog."),
    timeout: float = typer.Option(settings.probe_timeout, "--timeout", min=0.1, help="Per-probe timeout in seconds."),
    concurrency: int = typer.Option(settings.probe_concurrency, "--concurrency", "-c", min=1, help="Concurrent probes."),
    skip_probe: bool = typer.Option(False, "--skip-probe", help="Publish eligible endpoints without probing."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bars."),
    json_out: bool = typer.Option(False, "--json", help="Print the run summary as JSON."),
) -> None:
    """Fetch the registry, filter and probe endpoints, publish the catalog."""
    try:
        summary = run_sync(
            source_url=source_url,
            output_path=output,
            version_path=version_file,
            export_name=export_name,
            probe_timeout=timeout,
            concurrency=concurrency,
            skip_probe=skip_probe,
            show_progress=progress,
        )
    except Exception as exc:
        _fail(exc)
    _finish(summary, json_out)


@app.command("validate")
def validate_cmd(
    output: Path = typer.Option(Path(settings.output_path), "--output", "-o", help="Catalog JSON path."),
    version_file: Path = typer.Option(Path(settings.version_path), "--version-file", help="Version counter path."),
    timeout: float = typer.Option(settings.validate_timeout, "--timeout", min=0.1, help="Per-probe timeout in seconds."),
    concurrency: int = typer.Option(settings.validate_concurrency, "--concurrency", "-c", min=1, help="Concurrent probes."),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bars."),
    json_out: bool = typer.Option(False, "--json", help="Print the run summary as JSON."),
) -> None:
    """Re-probe the published catalog and drop dead endpoints."""
    try:
        summary = run_validate(
            output_path=output,
            version_path=version_file,
            probe_timeout=timeout,
            concurrency=concurrency,
            show_progress=progress,
        )
    except Exception as exc:
        _fail(exc)
    _finish(summary, json_out)


@app.command("probe")
def probe_cmd(
    urls: List[str] = typer.Argument(..., help="Endpoints to probe."),
    timeout: float = typer.Option(settings.probe_timeout, "--timeout", min=0.1, help="Per-probe timeout in seconds."),
    concurrency: int = typer.Option(settings.probe_concurrency, "--concurrency", "-c", min=1, help="Concurrent probes."),
) -> None:
    """Probe endpoints once and print the outcome of each."""
    results = probe_urls(urls, probe_timeout=timeout, concurrency=concurrency)
    for result in results:
        if result.ok:
            typer.echo(f"OK   {result.url} {result.block_number} ({result.elapsed_ms} ms)")
        else:
            typer.echo(f"FAIL {result.url} {result.error}")
    raise typer.Exit(code=0 if all(result.ok for result in results) else 1)


def main(argv: Optional[List[str]] = None) -> None:
    app(args=argv)
