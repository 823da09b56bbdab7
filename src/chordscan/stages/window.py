"""Analysis window generator."""

from functools import lru_cache

import numpy as np


@lru_cache(maxsize=8)
def hann_window(frame_length: int) -> np.ndarray:
    """Symmetric Hann window, ``0.5 * (1 - cos(2*pi*i / (N - 1)))``.

    The returned array is cached per length and read-only.
    """
    if frame_length < 2:
        raise ValueError(f"Window length must be at least 2, got {frame_length}")

    window = np.hanning(frame_length)
    window.flags.writeable = False
    return window
