"""Spectrum stage - magnitude spectrum of the windowed frame."""

import numpy as np

from chordscan.models.pipeline import AnalysisContext, StageResult
from chordscan.pipeline.base import PipelineStage


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def magnitude_spectrum(frame: np.ndarray) -> np.ndarray:
    """Forward FFT magnitudes of a real frame.

    Args:
        frame: Windowed time-domain samples; length must be a power of two.

    Returns:
        ``len(frame) // 2`` non-negative magnitudes, bin 0 = DC. The Nyquist
        bin is dropped.

    Raises:
        ValueError: If the frame length is not a power of two.
    """
    n = len(frame)
    if not is_power_of_two(n) or n < 2:
        raise ValueError(f"Frame length must be a power of two >= 2, got {n}")

    return np.abs(np.fft.rfft(frame))[: n // 2]


class SpectrumStage(PipelineStage):
    """Step 2: Magnitude Spectrum.

    Phase is discarded; only the magnitudes feed the pitch-class profile.
    """

    @property
    def name(self) -> str:
        return "spectrum"

    def execute(self, context: AnalysisContext) -> StageResult:
        """Compute the spectrum of the current frame."""
        frame = context.frame
        if frame is None or len(frame) != context.frame_length:
            got = "no frame" if frame is None else f"{len(frame)} samples"
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=(
                    f"Malformed frame at sample {context.position}: "
                    f"expected {context.frame_length} samples, got {got}"
                ),
                error_kind="stage_error",
            )

        context.spectrum = magnitude_spectrum(frame)
        return self._ok()
