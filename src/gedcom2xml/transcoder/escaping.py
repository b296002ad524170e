"""XML escaping for element text and attribute values."""

from __future__ import annotations

import re
from xml.sax.saxutils import escape

REPLACEMENT_CHAR = "\ufffd"

# saxutils.escape always handles &, < and >
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# Attribute-value normalization would turn literal whitespace into spaces
_ATTR_ENTITIES = {**_QUOTE_ENTITIES, "\t": "&#9;", "\n": "&#10;", "\r": "&#13;"}

# C0 controls other than tab, LF and CR cannot appear in XML 1.0, even as
# character references.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def _replace_invalid(value: str) -> str:
    return _INVALID_XML_CHARS.sub(REPLACEMENT_CHAR, value)


def escape_xml(value: str) -> str:
    """Escape ``&``, ``<``, ``>``, ``"`` and ``'`` for XML element text."""
    return escape(_replace_invalid(value), _QUOTE_ENTITIES)


def escape_attr(value: str) -> str:
    """Like ``escape_xml``, also keeping tab, LF and CR as character references."""
    return escape(_replace_invalid(value), _ATTR_ENTITIES)
