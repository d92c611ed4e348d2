"""Stage isolation for the analysis and comparison engines.

Every sub-analysis runs through :func:`run_stage`, which turns an exception
into a :class:`StageFailure` record and the stage's default value, so one
failing stage degrades the result instead of aborting the whole call.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class StageFailure:
    """A stage that raised and was replaced by its default value."""
    stage: str
    error_type: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        """Convert failure to dictionary for logging/serialization."""
        return {
            "stage": self.stage,
            "error_type": self.error_type,
            "message": self.message,
        }

    def __str__(self) -> str:
        return f"{self.stage} failed ({self.error_type}): {self.message}"


def run_stage(
    stage: str,
    func: Callable[[], T],
    default: Callable[[], T],
    failures: Optional[List[StageFailure]] = None,
) -> T:
    """
    Run a stage and fall back to its default on any exception.

    Args:
        stage: Stage name used in logs and failure records.
        func: Zero-argument callable computing the stage result.
        default: Zero-argument callable building the fallback value.
        failures: Optional list collecting a StageFailure per failed stage.

    Returns:
        The stage result, or the default value if the stage raised.
    """
    try:
        return func()
    except Exception as e:
        logger.warning(f"{stage} failed, using default: {e}")
        if failures is not None:
            failures.append(
                StageFailure(stage=stage, error_type=type(e).__name__, message=str(e))
            )
        return default()
