"""Chord matching stage - picks the best (root, template) for a PCP."""

from collections.abc import Sequence

import numpy as np

from chordscan.models.analysis import CHORD_TEMPLATES, ChordTemplate
from chordscan.models.pipeline import AnalysisContext, StageResult
from chordscan.pipeline.base import PipelineStage


def score_chord(pcp: np.ndarray, root: int, template: ChordTemplate) -> float:
    """Sum of PCP energy on the template's notes above ``root``."""
    return float(sum(pcp[(root + offset) % 12] for offset in template.intervals))


def match_chord(
    pcp: np.ndarray,
    templates: Sequence[ChordTemplate] = CHORD_TEMPLATES,
) -> str:
    """Label of the highest-scoring chord, or "" if nothing scores above zero.

    Roots are tried 0..11 and, for each root, templates in catalog order.
    Only a strictly higher score replaces the current best, so the first
    candidate found wins a tie.
    """
    best_score = 0.0
    best_label = ""

    for root in range(12):
        for template in templates:
            score = score_chord(pcp, root, template)
            if score > best_score:
                best_score = score
                best_label = template.label(root)

    return best_label


class ChordMatchStage(PipelineStage):
    """Step 4: Chord Matching.

    Scores every root against every template in the catalog by summed
    pitch-class membership.
    """

    def __init__(self, templates: Sequence[ChordTemplate] = CHORD_TEMPLATES) -> None:
        self.templates = tuple(templates)

    @property
    def name(self) -> str:
        return "chord_match"

    def execute(self, context: AnalysisContext) -> StageResult:
        """Match the current PCP against the template catalog."""
        if context.pcp is None or len(context.pcp) != 12:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=0,
                error_message=f"No 12-bin pitch-class profile at sample {context.position}",
                error_kind="stage_error",
            )

        context.label = match_chord(context.pcp, self.templates)
        return self._ok()
