"""Tests for settings."""

import pytest
from pydantic import ValidationError

from chordscan.config import Settings, configure, get_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self):
        """Defaults match the reference analysis parameters."""
        settings = Settings()
        assert settings.frame_length == 4096
        assert settings.step_seconds == 0.5
        assert settings.downmix == "sum"
        assert settings.no_chord_policy == "retain-last-on-silence"
        assert settings.normalize_pcp is False
        assert settings.spectrum_dump_path is None

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """Settings are read from CHORDSCAN_ environment variables."""
        monkeypatch.setenv("CHORDSCAN_FRAME_LENGTH", "8192")
        monkeypatch.setenv("CHORDSCAN_DOWNMIX", "average")
        monkeypatch.setenv("CHORDSCAN_NO_CHORD_POLICY", "overwrite-with-empty")

        settings = Settings()

        assert settings.frame_length == 8192
        assert settings.downmix == "average"
        assert settings.no_chord_policy == "overwrite-with-empty"

    def test_rejects_unknown_downmix(self):
        """Only sum, average, and left are valid downmix policies."""
        with pytest.raises(ValidationError):
            Settings(downmix="mid-side")

    def test_rejects_non_positive_step(self):
        """The scan step must be positive."""
        with pytest.raises(ValidationError):
            Settings(step_seconds=0)

    def test_frame_length_not_validated_here(self):
        """Bad frame lengths are reported by the scan, not by settings."""
        settings = Settings(frame_length=1000)
        assert settings.frame_length == 1000

    def test_configure_replaces_global(self):
        """configure() installs the instance get_settings() returns."""
        configured = configure(step_seconds=0.25, show_progress=False)
        assert get_settings() is configured
        assert get_settings().step_seconds == 0.25
