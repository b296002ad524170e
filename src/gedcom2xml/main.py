"""
Main entry for gedcom2xml.

    $ gedcom2xml <input> <output>

This module is intentionally thin:
- argument parsing
- path precondition checks
- pipeline orchestration and timing

No transcoding logic lives here.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from gedcom2xml.config import get_config
from gedcom2xml.logging import get_logger

from gedcom2xml.core.context import ConversionContext
from gedcom2xml.core.exceptions import ConversionError, PreconditionError
from gedcom2xml.core.pipeline import Pipeline
from gedcom2xml.loader.file_locator import resolve_input_path, resolve_output_path

log = get_logger("main")


# ---------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------
def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gedcom2xml",
        description="Convert a GEDCOM file into an XML file.",
    )
    parser.add_argument("input", help="the input GEDCOM file")
    parser.add_argument("output", help="the filename of XML that needs to be written")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )
    return parser


# ---------------------------------------------------------
# Conversion Runner
# ---------------------------------------------------------
def run(
    input_path: str,
    output_path: str,
    debug_flag: bool = False,
    root_tag: Optional[str] = None,
) -> ConversionContext:
    """
    Validate paths, then convert `input_path` into `output_path`.

    Raises PreconditionError before anything is written, or ConversionError
    if the conversion itself fails.
    """
    cfg = get_config()

    ctx = ConversionContext(
        config=cfg,
        logger=log,
        input_path=resolve_input_path(input_path),
        output_path=resolve_output_path(output_path),
        root_tag=root_tag,
        debug=bool(debug_flag or cfg.debug),
    )

    Pipeline(ctx).run()
    return ctx


# ---------------------------------------------------------
# Program Entry Point
# ---------------------------------------------------------
def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    try:
        ctx = run(args.input, args.output, debug_flag=args.debug)
    except PreconditionError as exc:
        print(exc)
        return 1
    except ConversionError as exc:
        print(f"Unable to convert GEDCOM file to XML: {exc}")
        return 1

    print(f"Total time taken: {ctx.elapsed_ms} ms.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
