from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from gedcom2xml.cli.utils import fail
from gedcom2xml.core.exceptions import ConversionError, PreconditionError
from gedcom2xml.main import run

console = Console()


def convert_command(
    gedcom: Path = typer.Argument(..., help="The input GEDCOM file"),
    out: Path = typer.Argument(..., help="The XML file to write (must not exist)"),
    root: Optional[str] = typer.Option(
        None,
        "--root",
        help="Name of the root element (default from config)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging and a summary",
    ),
):
    """
    Convert a GEDCOM file into an XML file.
    """
    try:
        ctx = run(str(gedcom), str(out), debug_flag=verbose, root_tag=root)
    except PreconditionError as exc:
        fail(str(exc))
    except ConversionError as exc:
        fail(f"Unable to convert GEDCOM file to XML: {exc}")

    if verbose:
        console.log(
            f"{ctx.stats.records} records, {ctx.stats.references} references, "
            f"max depth {ctx.stats.max_depth}"
        )

    console.print(f"Total time taken: {ctx.elapsed_ms} ms.")
