"""Audio sources consumed by the chord scanner."""

from chordscan.audio.source import ArrayAudioSource, AudioReadError, AudioSource, load_audio

__all__ = ["ArrayAudioSource", "AudioReadError", "AudioSource", "load_audio"]
