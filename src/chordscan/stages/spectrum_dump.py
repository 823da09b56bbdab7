"""Spectrum dump stage - opt-in export of one step's magnitude spectrum."""

from pathlib import Path

import numpy as np

from chordscan.models.pipeline import AnalysisContext, StageResult
from chordscan.pipeline.base import PipelineStage


def write_spectrum(path: Path, spectrum: np.ndarray, sample_rate: float) -> None:
    """Write a magnitude spectrum as comma-delimited ``bin,frequency_hz,magnitude`` rows."""
    bins = np.arange(len(spectrum))
    frequencies = bins * sample_rate / (2.0 * len(spectrum))
    table = np.column_stack((bins, frequencies, spectrum))

    path.parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(
        path,
        table,
        delimiter=",",
        header="bin,frequency_hz,magnitude",
        comments="",
        fmt=("%d", "%.4f", "%.8e"),
    )


class SpectrumDumpStage(PipelineStage):
    """Diagnostic: write the spectrum of a single scan step to disk.

    Only added to a scanner when a dump path is configured. Runs after the
    spectrum stage and does nothing on every other step.
    """

    def __init__(self, path: Path, step_index: int = 0) -> None:
        self.path = path
        self.step_index = step_index

    @property
    def name(self) -> str:
        return "spectrum_dump"

    def execute(self, context: AnalysisContext) -> StageResult:
        """Write the spectrum if this is the requested step."""
        if context.step_index != self.step_index or context.spectrum is None:
            return self._ok()

        write_spectrum(self.path, context.spectrum, context.sample_rate)
        return self._ok([f"Wrote spectrum of step {context.step_index} to {self.path}"])
