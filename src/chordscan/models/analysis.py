"""Core analysis data models for chordscan.

These models describe the chord vocabulary and the events a scan produces.
"""

from dataclasses import dataclass

# Pitch class names (index 0 = C)
NOTE_NAMES: tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)


@dataclass(frozen=True)
class ChordTemplate:
    """A chord quality defined by semitone offsets from its root."""

    quality: str  # "Major", "Minor", ...
    intervals: tuple[int, ...]  # semitones above the root, e.g. (0, 4, 7)

    def label(self, root: int) -> str:
        """Chord label for this quality on the given root pitch class."""
        return f"{NOTE_NAMES[root % 12]} {self.quality}"


# Matched in this order; earlier templates win ties
CHORD_TEMPLATES: tuple[ChordTemplate, ...] = (
    ChordTemplate(quality="Major", intervals=(0, 4, 7)),
    ChordTemplate(quality="Minor", intervals=(0, 3, 7)),
    ChordTemplate(quality="Diminished", intervals=(0, 3, 6)),
    ChordTemplate(quality="Augmented", intervals=(0, 4, 8)),
)


@dataclass
class ChordEvent:
    """Best-guess chord at one scan step."""

    time: float  # seconds from the start of the recording
    label: str  # "A Major", or "" when nothing matched

    @property
    def is_empty(self) -> bool:
        return self.label == ""
