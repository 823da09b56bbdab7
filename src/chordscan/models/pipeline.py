"""Pipeline processing models for chordscan.

These models track state while a recording is scanned step by step.
"""

from dataclasses import dataclass, field
from typing import Literal

import numpy as np

from chordscan.audio.source import AudioSource
from chordscan.models.analysis import ChordEvent

ErrorKind = Literal[
    "no_source_loaded",
    "invalid_frame_length",
    "read_failure",
    "concurrent_scan_rejected",
    "stage_error",
]


@dataclass
class AnalysisContext:
    """Mutable state passed through the stages for one scan step."""

    # Scan-wide (fixed for the whole scan)
    source: AudioSource
    sample_rate: float
    num_channels: int
    frame_length: int
    window: np.ndarray

    # Per step
    step_index: int = 0
    position: int = 0  # sample offset of the frame start

    # Filled in by stages, reset between steps
    frame: np.ndarray | None = None  # windowed mono samples, length frame_length
    spectrum: np.ndarray | None = None  # magnitudes, length frame_length // 2
    pcp: np.ndarray | None = None  # 12 pitch-class energies
    label: str = ""

    @property
    def time(self) -> float:
        return self.position / self.sample_rate

    def start_step(self, step_index: int, position: int) -> None:
        """Move to a new step and drop everything computed for the last one."""
        self.step_index = step_index
        self.position = position
        self.frame = None
        self.spectrum = None
        self.pcp = None
        self.label = ""


@dataclass
class StageResult:
    """Result of a stage execution."""

    success: bool
    stage_name: str
    duration_seconds: float
    error_message: str | None = None
    error_kind: ErrorKind | None = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class ScanResult:
    """Final result of a complete scan."""

    success: bool
    events: list[ChordEvent] = field(default_factory=list)
    cancelled: bool = False
    error_kind: ErrorKind | None = None
    error_message: str | None = None
    error_offset: int | None = None  # sample offset of a read failure
    steps_completed: int = 0
    sample_rate: float | None = None
    warnings: list[str] = field(default_factory=list)
    total_duration: float = 0.0

    @property
    def labels(self) -> list[str]:
        return [event.label for event in self.events]
