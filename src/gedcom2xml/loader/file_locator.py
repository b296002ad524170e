"""
File Locator

Validates the input and output paths before a conversion starts.
"""

import os

from gedcom2xml.core.exceptions import PreconditionError
from gedcom2xml.logging import get_logger

log = get_logger(__name__)


def resolve_input_path(path: str) -> str:
    """
    Return the absolute path of an existing, non-directory input file.

    Raises:
        PreconditionError: if the file is missing or is a directory.
    """
    abs_path = os.path.abspath(path)
    log.debug(f"Resolving input file: {abs_path}")

    if not os.path.exists(abs_path):
        log.error(f"Input file does not exist: {abs_path}")
        raise PreconditionError("Input file does not exists... exiting!")

    if os.path.isdir(abs_path):
        log.error(f"Input path is a directory: {abs_path}")
        raise PreconditionError("Input file is a directory... exiting!")

    return abs_path


def resolve_output_path(path: str) -> str:
    """
    Return the absolute path of an output file that does not exist yet.

    Raises:
        PreconditionError: if something already exists at the path.
    """
    abs_path = os.path.abspath(path)
    log.debug(f"Resolving output file: {abs_path}")

    if os.path.isdir(abs_path):
        log.error(f"Output path is a directory: {abs_path}")
        raise PreconditionError("Output file is a directory... exiting!")

    if os.path.exists(abs_path):
        log.error(f"Output file already exists: {abs_path}")
        raise PreconditionError("Output file already exists... exiting!")

    return abs_path
