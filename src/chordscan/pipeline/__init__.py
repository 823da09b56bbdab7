"""Pipeline module for chordscan."""

from chordscan.pipeline.base import PipelineStage
from chordscan.pipeline.orchestrator import ChordScanner, create_default_scanner

__all__ = ["ChordScanner", "PipelineStage", "create_default_scanner"]
