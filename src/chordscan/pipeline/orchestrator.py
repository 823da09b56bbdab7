"""Scan controller for chordscan."""

import threading
import time
from typing import Literal

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn, TimeElapsedColumn

from chordscan.audio.source import AudioSource
from chordscan.config import Settings
from chordscan.models.analysis import ChordEvent
from chordscan.models.pipeline import AnalysisContext, ErrorKind, ScanResult
from chordscan.pipeline.base import PipelineStage
from chordscan.stages.spectrum import is_power_of_two
from chordscan.stages.window import hann_window

console = Console()

ScanState = Literal["idle", "scanning"]


class ChordScanner:
    """Runs the stages over a whole recording, one frame per time step.

    A scanner is bound to at most one source at a time. While a scan runs it
    owns that source's read cursor; the cursor is put back to where it was
    when the scan ends, however it ends. Only one scan may be in flight per
    source, across all scanners in the process.
    """

    _sources_in_flight: set[int] = set()
    _in_flight_lock = threading.Lock()

    def __init__(
        self,
        stages: list[PipelineStage],
        settings: Settings,
        source: AudioSource | None = None,
    ) -> None:
        """Initialize the scanner.

        Args:
            stages: Ordered list of stages to execute per step.
            settings: Application settings.
            source: Audio to scan; can also be bound later with load().
        """
        self.stages = stages
        self.settings = settings
        self.source = source
        self._state: ScanState = "idle"

    @property
    def state(self) -> ScanState:
        return self._state

    def load(self, source: AudioSource | None) -> None:
        """Bind a new source. The next scan reads its sample rate afresh."""
        self.source = source

    def scan(self, cancel: threading.Event | None = None) -> ScanResult:
        """Scan the loaded source for chords.

        Args:
            cancel: Optional event checked before every step. When set, the
                scan stops and returns the events found so far, flagged as
                cancelled.

        Returns:
            ScanResult with the chord events, or the reason the scan failed.
        """
        start_time = time.time()
        source = self.source

        if source is None:
            return self._rejected("no_source_loaded", "No audio source loaded", start_time)

        # Re-read per scan: a newly loaded file may have a different rate
        sample_rate = float(source.sample_rate)
        total_length = int(source.total_length)
        frame_length = self.settings.frame_length

        if sample_rate <= 0:
            return self._rejected(
                "no_source_loaded", f"Source has no usable sample rate ({sample_rate})", start_time
            )
        if not is_power_of_two(frame_length) or frame_length < 2:
            return self._rejected(
                "invalid_frame_length",
                f"Frame length must be a power of two >= 2, got {frame_length}",
                start_time,
            )
        if frame_length > total_length:
            return self._rejected(
                "invalid_frame_length",
                f"Frame length {frame_length} exceeds recording length {total_length}",
                start_time,
            )

        if not self._claim(source):
            return self._rejected(
                "concurrent_scan_rejected",
                "A scan is already in progress on this source",
                start_time,
            )

        self._state = "scanning"
        original_position = source.read_position
        try:
            result = self._run_steps(source, sample_rate, total_length, frame_length, cancel)
        finally:
            source.read_position = original_position
            self._state = "idle"
            self._release(source)

        result.total_duration = time.time() - start_time
        return result

    def _run_steps(
        self,
        source: AudioSource,
        sample_rate: float,
        total_length: int,
        frame_length: int,
        cancel: threading.Event | None,
    ) -> ScanResult:
        step_size = max(1, int(round(self.settings.step_seconds * sample_rate)))
        positions = range(0, total_length - frame_length + 1, step_size)
        emit_empty = self.settings.no_chord_policy == "overwrite-with-empty"

        context = AnalysisContext(
            source=source,
            sample_rate=sample_rate,
            num_channels=source.num_channels,
            frame_length=frame_length,
            window=hann_window(frame_length),
        )
        result = ScanResult(success=True, sample_rate=sample_rate)

        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
            disable=not self.settings.show_progress,
        ) as progress:
            task = progress.add_task("[cyan]scanning[/cyan]", total=len(positions))

            for step_index, position in enumerate(positions):
                if cancel is not None and cancel.is_set():
                    result.success = False
                    result.cancelled = True
                    break

                context.start_step(step_index, position)

                for stage in self.stages:
                    stage_result = stage.run(context)
                    result.warnings.extend(stage_result.warnings)
                    if not stage_result.success:
                        result.success = False
                        result.error_kind = stage_result.error_kind or "stage_error"
                        result.error_message = f"{stage.name}: {stage_result.error_message}"
                        if result.error_kind == "read_failure":
                            result.error_offset = position
                        return result

                if context.label or emit_empty:
                    result.events.append(ChordEvent(time=context.time, label=context.label))

                result.steps_completed += 1
                progress.advance(task)

        return result

    def _claim(self, source: AudioSource) -> bool:
        with self._in_flight_lock:
            key = id(source)
            if self._state == "scanning" or key in self._sources_in_flight:
                return False
            self._sources_in_flight.add(key)
            return True

    def _release(self, source: AudioSource) -> None:
        with self._in_flight_lock:
            self._sources_in_flight.discard(id(source))

    def _rejected(self, kind: ErrorKind, message: str, start_time: float) -> ScanResult:
        return ScanResult(
            success=False,
            error_kind=kind,
            error_message=message,
            total_duration=time.time() - start_time,
        )


def create_default_scanner(
    settings: Settings,
    source: AudioSource | None = None,
) -> ChordScanner:
    """Create a scanner with the default stages.

    Args:
        settings: Application settings.
        source: Optional source to bind immediately.

    Returns:
        Configured ChordScanner instance.
    """
    from chordscan.stages import (
        ChordMatchStage,
        FrameExtractionStage,
        PitchClassStage,
        SpectrumDumpStage,
        SpectrumStage,
    )

    stages: list[PipelineStage] = [
        FrameExtractionStage(settings),
        SpectrumStage(),
    ]
    if settings.spectrum_dump_path is not None:
        stages.append(
            SpectrumDumpStage(settings.spectrum_dump_path, settings.spectrum_dump_frame)
        )
    stages += [
        PitchClassStage(settings),
        ChordMatchStage(),
    ]

    return ChordScanner(stages, settings, source)
