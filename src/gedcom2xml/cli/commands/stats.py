
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gedcom2xml.cli.utils import fail, scan_gedcom
from gedcom2xml.loader import RecordError

console = Console()


def stats_command(
    gedcom: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show structure statistics for a GEDCOM file.
    """
    try:
        stats, _ = scan_gedcom(gedcom, verbose=verbose)
    except RecordError as exc:
        fail(str(exc))

    table = Table(title="GEDCOM Structure")
    table.add_column("Measure", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Records", str(stats.records))
    table.add_row("Top-level records", str(stats.top_level))
    table.add_row("References", str(stats.references))
    table.add_row("Max depth", str(stats.max_depth))
    table.add_row("Dropped reference data", str(stats.dropped_data))

    console.print(table)
