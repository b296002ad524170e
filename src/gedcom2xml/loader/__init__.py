# src/gedcom2xml/loader/__init__.py

"""
Public interface for the GEDCOM line loader.

    from gedcom2xml.loader import (
        Record,
        GedcomSyntaxError,
        GedcomStructureError,
        tokenize_line,
        iter_records,
        tokenize_file,
    )
"""

from __future__ import annotations

from .tokenizer import (
    REFERENCE_MARKER,
    GedcomStructureError,
    GedcomSyntaxError,
    Record,
    RecordError,
    iter_records,
    tokenize_file,
    tokenize_line,
)

__all__ = [
    "REFERENCE_MARKER",
    "GedcomStructureError",
    "GedcomSyntaxError",
    "Record",
    "RecordError",
    "iter_records",
    "tokenize_file",
    "tokenize_line",
]
