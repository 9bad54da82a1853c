"""Error handling for CLI commands."""

from __future__ import annotations

from typing import Any, NoReturn

import structlog
import typer
from rich.console import Console

from macrosnap.domain.exceptions import SnapshotWriteError

logger = structlog.get_logger(__name__)
console = Console(stderr=True)


def handle_cli_error(error: Exception, context: dict[str, Any] | None = None) -> NoReturn:
    """Log a run-fatal error, print a short message and exit with status 1."""
    context = context or {}
    if isinstance(error, SnapshotWriteError):
        logger.error("snapshot write failed", path=error.path, reason=error.reason, **context)
        console.print(f"✗ Could not write snapshot: {error.reason}", style="bold red")
    else:
        logger.error(
            "snapshot run failed",
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
            **context,
        )
        console.print(f"✗ Snapshot run failed: {error}", style="bold red")
    raise typer.Exit(code=1)
