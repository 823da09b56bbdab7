"""Pytest fixtures for chordscan tests."""

from collections.abc import Callable, Sequence

import numpy as np
import pytest

from chordscan.audio.source import ArrayAudioSource
from chordscan.config import Settings, configure

# A4, C#5, E5
A_MAJOR_FREQUENCIES = (440.0, 554.37, 659.25)


@pytest.fixture(autouse=True)
def settings() -> Settings:
    """Fresh global settings for every test, without progress output."""
    return configure(show_progress=False)


@pytest.fixture
def make_tone() -> Callable[..., ArrayAudioSource]:
    """Factory for sine-mixture sources."""

    def _make(
        frequencies: Sequence[float],
        duration: float = 3.0,
        sample_rate: int = 44100,
        channels: int = 1,
        amplitude: float = 0.3,
    ) -> ArrayAudioSource:
        t = np.arange(int(duration * sample_rate)) / sample_rate
        signal = np.zeros_like(t)
        for freq in frequencies:
            signal += amplitude * np.sin(2 * np.pi * freq * t)
        return ArrayAudioSource(np.tile(signal, (channels, 1)), sample_rate)

    return _make


@pytest.fixture
def a_major_source(make_tone: Callable[..., ArrayAudioSource]) -> ArrayAudioSource:
    """Three seconds of an A major triad at 44.1 kHz."""
    return make_tone(A_MAJOR_FREQUENCIES)


@pytest.fixture
def silent_source() -> ArrayAudioSource:
    """Two seconds of stereo silence at 44.1 kHz."""
    return ArrayAudioSource(np.zeros((2, 88200)), 44100)
