
"""
CLI package for gedcom2xml.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gedcom2xml.cli.app import app, main

__all__ = [
    "app",
    "main",
]
