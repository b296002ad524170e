from __future__ import annotations

import time

from gedcom2xml.core.context import ConversionContext
from gedcom2xml.core.exceptions import ConversionError
from gedcom2xml.logging import set_debug
from gedcom2xml.transcoder import TranscodeStats, transcode


class Pipeline:
    """
    Wires files to the transcoder for one conversion.
    No transcoding logic lives here.
    """

    def __init__(self, context: ConversionContext):
        self.ctx = context
        self.log = context.logger

        if context.debug:
            set_debug(True)

    def run(self) -> TranscodeStats:
        cfg = self.ctx.config
        root_tag = self.ctx.root_tag or cfg.root_tag

        self.log.info(f"Converting {self.ctx.input_path} -> {self.ctx.output_path}")
        start = time.perf_counter()

        try:
            with open(
                self.ctx.input_path, "r", encoding=cfg.input_encoding, errors="replace"
            ) as reader, open(
                self.ctx.output_path, "x", encoding="utf-8", newline="\n"
            ) as writer:
                stats = transcode(reader, writer, root_tag=root_tag, indent=cfg.indent)

        except Exception as exc:
            self.log.exception("Conversion failed")
            raise ConversionError(str(exc)) from exc

        self.ctx.elapsed_ms = int((time.perf_counter() - start) * 1000)
        self.ctx.stats = stats

        self.log.info(
            f"Conversion complete: {stats.records} records, "
            f"max depth {stats.max_depth}, {self.ctx.elapsed_ms} ms"
        )
        if self.ctx.debug:
            self.log.debug(f"Transcode stats = {stats}")
        return stats
