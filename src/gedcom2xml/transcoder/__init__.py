"""
Level-tree transcoder: GEDCOM records in, XML text out, one pass.

    from gedcom2xml.transcoder import LevelTreeTranscoder, transcode
"""

from __future__ import annotations

from .escaping import escape_attr, escape_xml
from .transcoder import (
    PROLOGUE,
    LevelTreeTranscoder,
    TranscodeStats,
    TranscoderState,
    iter_fragments,
    transcode,
    transcode_text,
)

__all__ = [
    "PROLOGUE",
    "LevelTreeTranscoder",
    "TranscodeStats",
    "TranscoderState",
    "escape_attr",
    "escape_xml",
    "iter_fragments",
    "transcode",
    "transcode_text",
]
