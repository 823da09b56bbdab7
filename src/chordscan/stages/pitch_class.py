"""Pitch-class profile stage - folds spectral peaks into 12 pitch classes."""

import numpy as np

from chordscan.config import Settings
from chordscan.models.pipeline import AnalysisContext, StageResult
from chordscan.pipeline.base import PipelineStage

# Equal temperament, A4 = 440 Hz. Reference notes are C0..B0.
A4_FREQUENCY = 440.0
C0_SEMITONES_FROM_A4 = -57
OCTAVES = 8

REFERENCE_FREQUENCIES = A4_FREQUENCY * 2.0 ** ((np.arange(12) + C0_SEMITONES_FROM_A4) / 12.0)
REFERENCE_LOG_FREQUENCIES = np.log2(REFERENCE_FREQUENCIES)


def _pitch_class_bounds() -> tuple[np.ndarray, np.ndarray]:
    """Log2-frequency bounds [lower, upper) of each pitch class in octave 0.

    Each bound is the midpoint to the neighbouring pitch class; C and B
    wrap to the adjacent octave.
    """
    logs = REFERENCE_LOG_FREQUENCIES
    below = np.concatenate(([logs[11] - 1.0], logs[:-1]))
    above = np.concatenate((logs[1:], [logs[0] + 1.0]))
    return (logs + below) / 2.0, (logs + above) / 2.0


LOWER_BOUNDS, UPPER_BOUNDS = _pitch_class_bounds()


def find_peaks(spectrum: np.ndarray) -> np.ndarray:
    """Indices of bins strictly greater than both neighbours.

    The first and last bins are never peaks.
    """
    if len(spectrum) < 3:
        return np.array([], dtype=int)

    middle = spectrum[1:-1]
    is_peak = (middle > spectrum[:-2]) & (middle > spectrum[2:])
    return np.nonzero(is_peak)[0] + 1


def build_pcp(
    spectrum: np.ndarray,
    sample_rate: float,
    normalize: bool = False,
) -> np.ndarray:
    """Accumulate peak magnitudes into a 12-bin pitch-class profile.

    A peak at bin ``i`` sits at ``i * sample_rate / (2 * len(spectrum))`` Hz.
    Its magnitude is added to every pitch class whose log-frequency window,
    shifted through octaves 0..7, contains the peak. Windows are not
    deduplicated across octaves.

    Args:
        spectrum: Magnitude spectrum (N/2 bins).
        sample_rate: Sample rate of the audio the spectrum came from.
        normalize: Divide by the largest entry when it is positive.

    Returns:
        Array of 12 non-negative values, index 0 = C.
    """
    pcp = np.zeros(12, dtype=np.float64)
    num_bins = len(spectrum)

    for i in find_peaks(spectrum):
        freq = i * sample_rate / (2.0 * num_bins)
        log_freq = np.log2(freq)
        magnitude = spectrum[i]

        # Midpoint windows tile the log axis, so a peak lands in at most one class
        for octave in range(OCTAVES):
            for nf in range(12):
                if LOWER_BOUNDS[nf] + octave <= log_freq < UPPER_BOUNDS[nf] + octave:
                    pcp[nf] += magnitude

    if normalize:
        peak = pcp.max()
        if peak > 0:
            pcp /= peak

    return pcp


class PitchClassStage(PipelineStage):
    """Step 3: Pitch-Class Profile.

    Uses the sample rate captured at the start of the scan, so a source
    loaded at a different rate is mapped correctly on the next scan.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def name(self) -> str:
        return "pitch_class"

    def execute(self, context: AnalysisContext) -> StageResult:
        """Build the PCP for the current spectrum."""
        if context.spectrum is None:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"No spectrum at sample {context.position}",
                error_kind="stage_error",
            )

        context.pcp = build_pcp(
            context.spectrum,
            context.sample_rate,
            normalize=self.settings.normalize_pcp,
        )
        return self._ok()
