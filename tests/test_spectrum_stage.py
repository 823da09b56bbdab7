"""Tests for the SpectrumStage."""

import numpy as np
import pytest

from chordscan.audio.source import ArrayAudioSource
from chordscan.models.pipeline import AnalysisContext
from chordscan.stages.spectrum import SpectrumStage, is_power_of_two, magnitude_spectrum
from chordscan.stages.window import hann_window


def test_is_power_of_two():
    """Powers of two are recognised; everything else is not."""
    assert all(is_power_of_two(2**k) for k in range(16))
    assert not is_power_of_two(0)
    assert not is_power_of_two(-4)
    assert not is_power_of_two(1000)
    assert not is_power_of_two(4095)


class TestMagnitudeSpectrum:
    """Tests for magnitude_spectrum."""

    @pytest.mark.parametrize("frame_length", [2, 256, 4096])
    def test_half_length_non_negative(self, frame_length: int):
        """N samples give N/2 non-negative magnitudes."""
        rng = np.random.default_rng(0)
        spectrum = magnitude_spectrum(rng.standard_normal(frame_length))
        assert spectrum.shape == (frame_length // 2,)
        assert np.all(spectrum >= 0)

    def test_sine_peaks_at_its_bin(self):
        """A bin-centred sine peaks at that bin."""
        n = 1024
        frame = np.sin(2 * np.pi * 64 * np.arange(n) / n) * hann_window(n)
        spectrum = magnitude_spectrum(frame)
        assert int(np.argmax(spectrum)) == 64

    def test_silence_is_zero(self):
        """All-zero frames have an all-zero spectrum."""
        assert not np.any(magnitude_spectrum(np.zeros(512)))

    def test_rejects_non_power_of_two(self):
        """Non power-of-two lengths are a contract violation."""
        with pytest.raises(ValueError):
            magnitude_spectrum(np.zeros(1000))


class TestSpectrumStage:
    """Tests for SpectrumStage."""

    def _context(self, frame_length: int) -> AnalysisContext:
        return AnalysisContext(
            source=ArrayAudioSource(np.zeros(frame_length), 8000),
            sample_rate=8000,
            num_channels=1,
            frame_length=frame_length,
            window=hann_window(frame_length),
        )

    def test_stage_name(self):
        """Stage has correct name."""
        assert SpectrumStage().name == "spectrum"

    def test_sets_spectrum(self):
        """Stage stores N/2 magnitudes on the context."""
        context = self._context(256)
        context.frame = np.ones(256)

        result = SpectrumStage().execute(context)

        assert result.success is True
        assert context.spectrum.shape == (128,)

    def test_malformed_frame(self):
        """A frame of the wrong length fails the step."""
        context = self._context(256)
        context.frame = np.ones(200)

        result = SpectrumStage().execute(context)

        assert result.success is False
        assert result.error_kind == "stage_error"
        assert "200" in result.error_message

    def test_missing_frame(self):
        """Running without a frame fails the step."""
        result = SpectrumStage().execute(self._context(256))
        assert result.success is False
        assert "no frame" in result.error_message
