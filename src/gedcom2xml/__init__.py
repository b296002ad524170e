"""
gedcom2xml: stream a GEDCOM file into a nested XML document in one pass.
"""

from gedcom2xml.loader import GedcomStructureError, GedcomSyntaxError, Record, RecordError
from gedcom2xml.transcoder import LevelTreeTranscoder, TranscodeStats, transcode, transcode_text

__version__ = "0.1.0"

__all__ = [
    "GedcomStructureError",
    "GedcomSyntaxError",
    "LevelTreeTranscoder",
    "Record",
    "RecordError",
    "TranscodeStats",
    "transcode",
    "transcode_text",
]
