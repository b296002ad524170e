
from __future__ import annotations

import os
import time
from pathlib import Path
from typing import NoReturn, Tuple

import typer
from rich.console import Console

from gedcom2xml.config import get_config
from gedcom2xml.transcoder import TranscodeStats, transcode

console = Console()
err_console = Console(stderr=True)


def scan_gedcom(path: Path, *, verbose: bool = False) -> Tuple[TranscodeStats, float]:
    """
    Run the transcoder over `path` without keeping its output.

    Returns the collected stats and the elapsed time in seconds.
    """
    cfg = get_config()
    t0 = time.perf_counter()

    with path.open("r", encoding=cfg.input_encoding, errors="replace") as reader, open(
        os.devnull, "w", encoding="utf-8"
    ) as sink:
        stats = transcode(reader, sink, root_tag=cfg.root_tag, indent=cfg.indent)

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Scanned GEDCOM in {elapsed:.2f}s")

    return stats, elapsed


def fail(message: str) -> NoReturn:
    """Print `message` in red on stderr and exit with status 1."""
    err_console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)
