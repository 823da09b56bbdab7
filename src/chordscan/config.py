"""Configuration management for chordscan."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DownmixPolicy = Literal["sum", "average", "left"]
NoChordPolicy = Literal["retain-last-on-silence", "overwrite-with-empty"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CHORDSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Analysis
    frame_length: int = Field(
        default=4096,
        description="Analysis frame length in samples (must be a power of two)",
    )
    step_seconds: float = Field(
        default=0.5,
        gt=0,
        description="Time between consecutive analysis frames",
    )
    downmix: DownmixPolicy = Field(
        default="sum",
        description="How channels are folded into one frame: sum, average, or left",
    )
    normalize_pcp: bool = Field(
        default=False,
        description="Scale each pitch-class profile so its largest entry is 1.0",
    )

    # Output
    no_chord_policy: NoChordPolicy = Field(
        default="retain-last-on-silence",
        description="retain-last-on-silence skips steps without a match, "
        "overwrite-with-empty emits an empty-label event for them",
    )
    show_progress: bool = Field(
        default=True,
        description="Show a progress bar while scanning",
    )

    # Diagnostics
    spectrum_dump_path: Path | None = Field(
        default=None,
        description="Write one step's magnitude spectrum to this file",
    )
    spectrum_dump_frame: int = Field(
        default=0,
        ge=0,
        description="Index of the scan step whose spectrum is dumped",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure(**overrides: object) -> Settings:
    """Configure settings with overrides. Useful for testing."""
    global _settings
    _settings = Settings(**overrides)  # type: ignore[arg-type]
    return _settings
