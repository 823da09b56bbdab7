"""Seekable audio sources.

The scanner only borrows a source for the duration of a scan: it moves the
read cursor, pulls fixed-size blocks, and puts the cursor back when done.
Decoding files is not part of the core; ``load_audio`` exists so the CLI has
something to hand the scanner.
"""

from pathlib import Path
from typing import Protocol, runtime_checkable

import numpy as np


class AudioReadError(RuntimeError):
    """Raised when a source cannot deliver a full block."""

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(message)
        self.offset = offset


@runtime_checkable
class AudioSource(Protocol):
    """Decoded PCM audio with a settable read cursor."""

    @property
    def sample_rate(self) -> float: ...

    @property
    def num_channels(self) -> int: ...

    @property
    def total_length(self) -> int: ...

    @property
    def read_position(self) -> int: ...

    @read_position.setter
    def read_position(self, position: int) -> None: ...

    def read_block(self, num_channels: int, num_samples: int) -> np.ndarray:
        """Read samples at the cursor and advance it.

        Returns an array of shape (num_channels, num_samples). Short or
        failed reads raise AudioReadError carrying the read offset.
        """
        ...


class ArrayAudioSource:
    """AudioSource backed by an in-memory array of shape (channels, samples)."""

    def __init__(self, samples: np.ndarray, sample_rate: float) -> None:
        data = np.asarray(samples, dtype=np.float64)
        if data.ndim == 1:
            data = data[np.newaxis, :]
        if data.ndim != 2:
            raise ValueError(f"Expected 1-D or 2-D samples, got shape {data.shape}")

        self._samples = data
        self._sample_rate = float(sample_rate)
        self._position = 0
        self._closed = False

    @property
    def sample_rate(self) -> float:
        return self._sample_rate

    @property
    def num_channels(self) -> int:
        return self._samples.shape[0]

    @property
    def total_length(self) -> int:
        return self._samples.shape[1]

    @property
    def read_position(self) -> int:
        return self._position

    @read_position.setter
    def read_position(self, position: int) -> None:
        self._position = max(0, int(position))

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Release the samples. Further reads fail."""
        self._closed = True

    def read_block(self, num_channels: int, num_samples: int) -> np.ndarray:
        start = self._position
        if self._closed:
            raise AudioReadError(f"Source closed (read at sample {start})", start)

        end = start + num_samples
        if end > self.total_length:
            raise AudioReadError(
                f"Requested {num_samples} samples at {start}, "
                f"only {max(0, self.total_length - start)} available",
                start,
            )

        channels = min(num_channels, self.num_channels)
        block = self._samples[:channels, start:end].copy()
        self._position = end
        return block


def load_audio(path: Path) -> ArrayAudioSource:
    """Decode an audio file into an ArrayAudioSource.

    Args:
        path: Any file soundfile can read (WAV, FLAC, OGG, ...).

    Returns:
        Source holding every channel of the file at its native sample rate.
    """
    import soundfile as sf

    data, sample_rate = sf.read(str(path), dtype="float64", always_2d=True)
    # soundfile returns (frames, channels)
    return ArrayAudioSource(data.T, sample_rate)
