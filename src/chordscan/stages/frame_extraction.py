"""Frame extraction stage - pulls one windowed mono frame from the source."""

import numpy as np

from chordscan.audio.source import AudioReadError, AudioSource
from chordscan.config import DownmixPolicy, Settings
from chordscan.models.pipeline import AnalysisContext, StageResult
from chordscan.pipeline.base import PipelineStage


def extract_frame(
    source: AudioSource,
    window: np.ndarray,
    offset: int,
    num_channels: int,
    downmix: DownmixPolicy = "sum",
) -> np.ndarray:
    """Read one frame at ``offset`` and fold it to a windowed mono buffer.

    Every call accumulates into a freshly zeroed buffer, so nothing from a
    previous frame can leak into this one.

    Args:
        source: Source to read from. Its cursor is left after the frame.
        window: Window coefficients; its length is the frame length.
        offset: Sample offset of the first sample in the frame.
        num_channels: Channels to read.
        downmix: "sum" adds channels, "average" divides the sum by the
            channel count, "left" uses channel 0 only.

    Returns:
        Array of length ``len(window)``.

    Raises:
        AudioReadError: If the source delivers less than a full frame, or its
            read fails with OSError, EOFError, or ValueError.
    """
    frame_length = len(window)
    source.read_position = offset
    try:
        block = np.asarray(source.read_block(num_channels, frame_length), dtype=np.float64)
    except (OSError, EOFError, ValueError) as e:
        raise AudioReadError(f"Read failed at sample {offset}: {e}", offset) from e
    if block.ndim == 1:
        block = block[np.newaxis, :]

    if block.shape[1] != frame_length or block.shape[0] == 0:
        raise AudioReadError(
            f"Short read at sample {offset}: got {block.shape[1]} of {frame_length} samples",
            offset,
        )

    channels = block[:1] if downmix == "left" else block

    frame = np.zeros(frame_length, dtype=np.float64)
    for channel in channels:
        frame += channel * window

    if downmix == "average":
        frame /= len(channels)

    return frame


class FrameExtractionStage(PipelineStage):
    """Step 1: Frame Extraction.

    Seeks the source to the step's sample offset, reads ``frame_length``
    samples per channel, applies the analysis window, and folds the
    channels into one buffer according to the configured downmix policy.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    @property
    def name(self) -> str:
        return "frame_extraction"

    def execute(self, context: AnalysisContext) -> StageResult:
        """Extract the frame for the current step."""
        try:
            context.frame = extract_frame(
                context.source,
                context.window,
                context.position,
                context.num_channels,
                self.settings.downmix,
            )
        except AudioReadError as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=str(e),
                error_kind="read_failure",
            )

        return self._ok()
