from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from gedcom2xml.transcoder import TranscodeStats


@dataclass
class ConversionContext:
    """
    Shared state for one conversion.
    This object is passed between orchestration layers.
    """

    config: Any
    logger: Any

    input_path: Optional[str] = None
    output_path: Optional[str] = None
    root_tag: Optional[str] = None

    stats: TranscodeStats = field(default_factory=TranscodeStats)
    elapsed_ms: int = 0

    debug: bool = False
