"""Snapshot CLI commands."""

from __future__ import annotations

import uuid
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from macrosnap.cli.error_handler import handle_cli_error
from macrosnap.cli.utils import async_command
from macrosnap.domain.models.snapshot import FALLBACK, Snapshot
from macrosnap.infrastructure.config import get_settings
from macrosnap.infrastructure.containers import get_container
from macrosnap.infrastructure.logging_config import (
    bind_run_context,
    clear_run_context,
    configure_logging,
)
from macrosnap.infrastructure.storage.snapshot_writer import SnapshotWriter

console = Console()


def _display_summary(snapshot: Snapshot, path: Path, size_bytes: int) -> None:
    """Print one row per metric with its provider and size."""
    table = Table(title="Snapshot summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Source")
    table.add_column("Value / points", justify="right")

    gold = snapshot.gold_silver
    rows = [
        ("gold", f"{gold.gold} / {gold.silver}" if gold else "-"),
        ("goldHist", str(len(snapshot.gold_hist or []))),
        ("btc", str(len(snapshot.btc_raw or []))),
        ("cpi", str(len(snapshot.cpi_raw or []))),
        ("m2", str(len(snapshot.m2_raw or []))),
        ("hpi", str(len(snapshot.hpi_raw or []))),
        ("dxy", str(snapshot.dxy_live.value) if snapshot.dxy_live else "-"),
    ]
    for metric, value in rows:
        source = snapshot.sources.get(metric, FALLBACK)
        style = "yellow" if source == FALLBACK else "green"
        table.add_row(metric, f"[{style}]{source}[/{style}]", value)

    console.print(table)
    console.print(f"\nWrote {size_bytes} bytes -> {path}", style="bold green")


@async_command
async def fetch_snapshot(
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Snapshot JSON path. Default: MACROSNAP_OUTPUT_PATH or docs/data/data.json",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Skip the summary table",
    ),
) -> None:
    """Fetch every provider, merge the results and publish one snapshot document.

    Metrics whose providers all fail are published as null with source
    "fallback"; the command still succeeds. It exits with status 1 only when the
    snapshot cannot be written or the run hits an unexpected error.

    Examples:
        # Write to the configured default location
        macrosnap fetch

        # Write somewhere else
        macrosnap fetch --output /tmp/data.json
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    bind_run_context(run_id=uuid.uuid4().hex[:12])

    container = get_container()
    writer = SnapshotWriter(output) if output is not None else container.snapshot_writer()
    fetcher = container.json_fetcher()

    try:
        aggregator = container.snapshot_aggregator()
        snapshot = await aggregator.build_snapshot()
        size_bytes = writer.write(snapshot)
    except Exception as e:
        handle_cli_error(e, context={"output": str(writer.path)})
    finally:
        await fetcher.close()
        clear_run_context()

    if not quiet:
        _display_summary(snapshot, writer.path, size_bytes)
