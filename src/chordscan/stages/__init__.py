"""Analysis stages for chordscan."""

from chordscan.stages.chord_match import ChordMatchStage
from chordscan.stages.frame_extraction import FrameExtractionStage
from chordscan.stages.pitch_class import PitchClassStage
from chordscan.stages.spectrum import SpectrumStage
from chordscan.stages.spectrum_dump import SpectrumDumpStage

__all__ = [
    "ChordMatchStage",
    "FrameExtractionStage",
    "PitchClassStage",
    "SpectrumDumpStage",
    "SpectrumStage",
]
