"""Command-line interface for macrosnap."""

import typer

from macrosnap import __version__
from macrosnap.cli.snapshot import console, fetch_snapshot

app = typer.Typer(help="macrosnap - multi-source macro and market indicator snapshots")

app.command("fetch")(fetch_snapshot)


@app.command("version")
def version() -> None:
    """Show the installed version."""
    console.print(f"macrosnap {__version__}")


def main() -> None:
    app()
