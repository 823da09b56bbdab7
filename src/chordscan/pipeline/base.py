"""Base classes for analysis stages."""

from abc import ABC, abstractmethod
import time

from chordscan.models.pipeline import AnalysisContext, StageResult


class PipelineStage(ABC):
    """Abstract base class for analysis stages.

    Each stage implements execute() which receives the AnalysisContext for
    the current scan step, performs its work (mutating the context), and
    returns a StageResult. Stages run once per step, in order.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this stage."""
        ...

    @abstractmethod
    def execute(self, context: AnalysisContext) -> StageResult:
        """Execute this stage.

        Args:
            context: Mutable per-step context that accumulates results.

        Returns:
            StageResult indicating success/failure and any warnings.
        """
        ...

    def run(self, context: AnalysisContext) -> StageResult:
        """Run the stage with timing.

        This is the public entry point that wraps execute() with timing
        and error handling.
        """
        start_time = time.perf_counter()
        try:
            result = self.execute(context)
            result.duration_seconds = time.perf_counter() - start_time
            return result
        except Exception as e:
            return StageResult(
                success=False,
                stage_name=self.name,
                duration_seconds=time.perf_counter() - start_time,
                error_message=f"Unexpected error at sample {context.position}: {e}",
                error_kind="stage_error",
            )

    def _ok(self, warnings: list[str] | None = None) -> StageResult:
        return StageResult(
            success=True,
            stage_name=self.name,
            duration_seconds=0,
            warnings=warnings or [],
        )
