# src/gedcom2xml/transcoder/transcoder.py

"""
Single-pass GEDCOM -> XML transcoder.

The GEDCOM level numbers describe a tree, but only implicitly: whether a
record has children is not known until the next record is read. The
transcoder therefore keeps each start tag open (``<NAME`` without ``>``)
until the following record arrives, and only then decides whether the
record's value becomes a ``value`` attribute (it has children) or text
content (it is a leaf).

Only the chain of currently open elements is kept in memory, so memory use
is bounded by the nesting depth of the input, not by its size.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, TextIO, Tuple

from gedcom2xml.loader.tokenizer import (
    GedcomStructureError,
    GedcomSyntaxError,
    Record,
    iter_records,
)
from gedcom2xml.logging import get_logger

from .escaping import escape_attr, escape_xml

log = get_logger(__name__)

PROLOGUE = '<?xml version="1.0" encoding="utf-8"?>\n'
DEFAULT_ROOT_TAG = "gedcom"
DEFAULT_INDENT = "  "


@dataclass
class TranscodeStats:
    """Counters collected while a document is transcoded."""

    records: int = 0
    top_level: int = 0
    references: int = 0
    dropped_data: int = 0
    max_depth: int = 0


@dataclass
class TranscoderState:
    """
    Everything the transcoder remembers between two records.

    Attributes:
        stack: Open element names, outermost first.
        level: Level of the previous record, -1 before the first one.
        pending: Value of the previous record, not yet written.
    """

    stack: List[str] = field(default_factory=list)
    level: int = -1
    pending: Optional[str] = None

    @property
    def started(self) -> bool:
        return self.level > -1

    @property
    def depth(self) -> int:
        return len(self.stack)


class LevelTreeTranscoder:
    """
    Turn a stream of Records into XML fragments.

    Usage:
        tx = LevelTreeTranscoder()
        out.write(tx.begin())
        for record in records:
            out.write(tx.feed(record))
        out.write(tx.finish())

    Each call returns the text that can be written immediately; nothing is
    buffered between calls except the open-element stack and one pending
    value.
    """

    def __init__(self, root_tag: str = DEFAULT_ROOT_TAG, indent: str = DEFAULT_INDENT):
        self.root_tag = root_tag
        self.indent = indent
        self.state = TranscoderState()
        self.stats = TranscodeStats()
        self._finished = False

    # ---------------------------------------------------------
    # Public API
    # ---------------------------------------------------------
    def begin(self) -> str:
        """Return the XML prologue and the root start tag."""
        return f"{PROLOGUE}<{self.root_tag}>\n"

    def feed(self, record: Record) -> str:
        """Consume one record and return the XML it makes writable."""
        if self._finished:
            raise RuntimeError("transcoder already finished")

        state = self.state
        self._check_level(record)

        out: List[str] = []
        first = not state.started
        if not first:
            out.extend(self._terminate_open_tag(next_level=record.level))
            out.extend(self._close_until(record.level))

        name, value = self._element_for(record)

        state.level = record.level
        state.stack.append(name)
        state.pending = value
        self._count(record)

        if not first:
            out.append("\n")
        out.append(self.indent * state.level)
        out.append(f"<{name}")
        return "".join(out)

    def finish(self) -> str:
        """Close everything still open, including the root element."""
        if self._finished:
            raise RuntimeError("transcoder already finished")
        self._finished = True

        out: List[str] = []
        if self.state.started:
            # Nothing follows the last record, so it is a leaf.
            out.extend(self._terminate_open_tag(next_level=None))
            out.extend(self._close_until(0))
            out.append("\n")

        out.append(f"</{self.root_tag}>")
        log.debug(f"Transcoder finished: {self.stats}")
        return "".join(out)

    # ---------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------
    def _check_level(self, record: Record) -> None:
        state = self.state
        if not state.started and record.level != 0:
            raise GedcomStructureError(
                f"first record must be level 0, found level {record.level}",
                record.raw,
                record.lineno,
            )
        if state.started and record.level > state.level + 1:
            raise GedcomStructureError(
                f"level jumped from {state.level} to {record.level}",
                record.raw,
                record.lineno,
            )

    def _terminate_open_tag(self, next_level: Optional[int]) -> List[str]:
        """
        Finish the start tag left open by the previous record.

        A deeper next record means the previous element has children, so its
        value moves into the ``value`` attribute. Otherwise it is a leaf and
        the value becomes its text.
        """
        state = self.state
        pending, state.pending = state.pending, None

        if pending is None:
            return [">"]
        if next_level is not None and next_level > state.level:
            return [' value="', escape_attr(pending), '">']
        return [">", escape_xml(pending)]

    def _close_until(self, depth: int) -> List[str]:
        """
        Pop and close elements until ``depth`` remain open.

        The first closing tag goes right after the element's content; every
        further one starts a new line indented to the closed element's level.
        """
        stack = self.state.stack
        out: List[str] = []
        while len(stack) > depth:
            if out:
                out.append("\n")
                out.append(self.indent * (len(stack) - 1))
            out.append(f"</{stack.pop()}>")
        return out

    def _element_for(self, record: Record) -> Tuple[str, Optional[str]]:
        """Return (element name, pending value), swapping for references."""
        if not record.is_reference:
            return record.tag, record.data

        if record.data is None:
            raise GedcomSyntaxError(
                "reference record has no tag",
                record.raw,
                record.lineno,
            )

        name, *extra = record.data.split(None, 1)
        if extra:
            self.stats.dropped_data += 1
            log.warning(
                f"Line {record.lineno}: dropping data after {record.tag} {name}: {extra[0]!r}"
            )
        return name, record.tag

    def _count(self, record: Record) -> None:
        stats = self.stats
        stats.records += 1
        if record.level == 0:
            stats.top_level += 1
        if record.is_reference:
            stats.references += 1
        stats.max_depth = max(stats.max_depth, self.state.depth)


# -------------------------------------------------------------
# Stream helpers
# -------------------------------------------------------------
def iter_fragments(
    records: Iterable[Record],
    root_tag: str = DEFAULT_ROOT_TAG,
    indent: str = DEFAULT_INDENT,
    transcoder: Optional[LevelTreeTranscoder] = None,
) -> Iterator[str]:
    """Yield the XML document for `records` piece by piece."""
    tx = transcoder or LevelTreeTranscoder(root_tag=root_tag, indent=indent)
    yield tx.begin()
    for record in records:
        yield tx.feed(record)
    yield tx.finish()


def transcode(
    lines: Iterable[str],
    sink: TextIO,
    root_tag: str = DEFAULT_ROOT_TAG,
    indent: str = DEFAULT_INDENT,
) -> TranscodeStats:
    """
    Read GEDCOM lines and write the XML document to `sink`.

    Blank lines are ignored. On a malformed line the error propagates and
    whatever was already written stays in `sink`.
    """
    tx = LevelTreeTranscoder(root_tag=root_tag, indent=indent)
    for fragment in iter_fragments(iter_records(lines), transcoder=tx):
        sink.write(fragment)
    return tx.stats


def transcode_text(text: str, root_tag: str = DEFAULT_ROOT_TAG, indent: str = DEFAULT_INDENT) -> str:
    """Convenience wrapper: GEDCOM text in, XML text out."""
    out = io.StringIO()
    transcode(io.StringIO(text), out, root_tag=root_tag, indent=indent)
    return out.getvalue()
