# src/gedcom2xml/loader/tokenizer.py

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

REFERENCE_MARKER = "@"
BOM = "\ufeff"


@dataclass(frozen=True)
class Record:
    """
    A single parsed GEDCOM line.

    Attributes:
        lineno: 1-based line number in the original input (0 if unknown).
        level: Parsed GEDCOM level (0, 1, 2, ...).
        tag: First token after the level, e.g. "INDI", "NAME" or "@I1@".
        data: Trimmed remainder of the line, or None when nothing follows the tag.
        raw: The trimmed line the record was parsed from.
    """
    lineno: int
    level: int
    tag: str
    data: Optional[str]
    raw: str

    @property
    def is_reference(self) -> bool:
        """True for cross-reference records such as ``0 @I1@ INDI``."""
        return self.tag.startswith(REFERENCE_MARKER)


class RecordError(ValueError):
    """Base class for input lines that cannot be turned into XML."""

    def __init__(self, message: str, line: str, lineno: int = 0):
        self.line = line
        self.lineno = lineno
        where = f"Line {lineno}: " if lineno else ""
        super().__init__(f"{where}{message} -> {line!r}")


class GedcomSyntaxError(RecordError):
    """Raised when a GEDCOM line does not match ``<level> <tag> [<data>]``."""


class GedcomStructureError(RecordError):
    """Raised when a record's level cannot nest under the records before it."""


def tokenize_line(line: str, lineno: int = 0) -> Record:
    """
    Parse a single GEDCOM line into a Record.

    The level is everything up to the first whitespace and must be a
    non-negative integer. The tag is the next whitespace-delimited token and
    the data is whatever follows, trimmed.

    Examples:
        "0 HEAD"              -> level=0, tag="HEAD", data=None
        "0 @I1@ INDI"         -> level=0, tag="@I1@", data="INDI"
        "1 NAME John /Doe/"   -> level=1, tag="NAME", data="John /Doe/"
    """
    raw = line.strip()

    # Handle optional UTF-8 BOM on the very first line.
    if lineno == 1 and raw.startswith(BOM):
        raw = raw.lstrip(BOM).strip()

    if not raw:
        raise GedcomSyntaxError("empty line", line, lineno)

    parts = raw.split(None, 1)
    level_str = parts[0]
    if not (level_str.isascii() and level_str.isdigit()):
        raise GedcomSyntaxError(f"level is not numeric ({level_str!r})", raw, lineno)

    if len(parts) == 1:
        raise GedcomSyntaxError("missing tag after level", raw, lineno)

    rest = parts[1].split(None, 1)
    tag = rest[0]
    data = rest[1].strip() if len(rest) > 1 else None

    return Record(
        lineno=lineno,
        level=int(level_str),
        tag=tag,
        data=data or None,
        raw=raw,
    )


def iter_records(lines: Iterable[str]) -> Iterator[Record]:
    """
    Yield a Record for every non-blank line, numbering lines from 1.

    Blank and whitespace-only lines are skipped but still counted, so the
    line numbers in errors match the input file.
    """
    for lineno, line in enumerate(lines, start=1):
        if not line.strip().lstrip(BOM):
            continue
        yield tokenize_line(line, lineno=lineno)


def tokenize_file(path: Union[str, Path], encoding: str = "utf-8") -> Iterator[Record]:
    """
    Stream Records from a GEDCOM file.

    Raises:
        FileNotFoundError: if `path` is not a file.
        GedcomSyntaxError: if a line is syntactically invalid.
    """
    file_path = Path(path)

    if not file_path.is_file():
        raise FileNotFoundError(f"GEDCOM file not found: {file_path}")

    with file_path.open("r", encoding=encoding, errors="replace") as f:
        yield from iter_records(f)
