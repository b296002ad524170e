
"""
CLI command modules for gedcom2xml.

Each command module defines a single Typer-compatible command function.
"""

from gedcom2xml.cli.commands.convert import convert_command
from gedcom2xml.cli.commands.stats import stats_command

__all__ = [
    "convert_command",
    "stats_command",
]
