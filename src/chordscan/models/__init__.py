"""Data models for chordscan."""

from chordscan.models.analysis import CHORD_TEMPLATES, NOTE_NAMES, ChordEvent, ChordTemplate
from chordscan.models.pipeline import AnalysisContext, ErrorKind, ScanResult, StageResult

__all__ = [
    "CHORD_TEMPLATES",
    "NOTE_NAMES",
    "AnalysisContext",
    "ChordEvent",
    "ChordTemplate",
    "ErrorKind",
    "ScanResult",
    "StageResult",
]
