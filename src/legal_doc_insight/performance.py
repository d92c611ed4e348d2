"""Performance monitoring utilities for the Legal Document Insight system.

Every public pipeline call (analysis, re-analysis, comparison) is recorded as
an operation metric. The monitor keeps the finished metrics per operation
name, summarizes them on request and warns when a call runs past the
configured processing time.
"""

import functools
import logging
import time
from collections import defaultdict
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class OperationMetric:
    """Timing and outcome of one tracked call."""

    operation: str
    started_at: float = field(default_factory=time.perf_counter)
    duration: Optional[float] = None
    success: bool = True
    error: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.duration is not None

    def finish(self, success: bool = True, error: Optional[str] = None) -> None:
        """Mark the call as finished."""
        self.duration = time.perf_counter() - self.started_at
        self.success = success
        self.error = error

    def exceeded(self, limit: float) -> bool:
        """Check whether the call took longer than ``limit`` seconds."""
        return self.duration is not None and self.duration > limit


class PerformanceMonitor:
    """
    Records how long pipeline operations take.

    Use ``start``/``finish`` when the caller decides the outcome itself, or
    ``track`` to record a block whose exceptions mark it as failed.
    """

    def __init__(self, max_processing_time: float = 60):
        """
        Initialize the performance monitor.

        Args:
            max_processing_time: Time in seconds after which an operation
                is reported as slow.
        """
        self.max_processing_time = max_processing_time
        self.metrics: Dict[str, List[OperationMetric]] = defaultdict(list)

    def start(self, operation: str, **metadata) -> OperationMetric:
        """Begin timing an operation."""
        return OperationMetric(operation=operation, metadata=metadata)

    def finish(
        self,
        metric: OperationMetric,
        success: bool = True,
        error: Optional[str] = None
    ) -> None:
        """
        Finish and store an operation metric.

        Args:
            metric: Metric returned by ``start``.
            success: Whether the operation succeeded.
            error: Optional error message.
        """
        if metric.finished:
            return

        metric.finish(success=success, error=error)
        self.metrics[metric.operation].append(metric)

        if metric.exceeded(self.max_processing_time):
            logger.warning(
                f"Operation '{metric.operation}' exceeded max time: "
                f"{metric.duration:.2f}s > {self.max_processing_time}s"
            )

    @contextmanager
    def track(self, operation: str, **metadata) -> Iterator[OperationMetric]:
        """
        Time the enclosed block as one operation.

        An exception escaping the block is recorded as a failure and
        re-raised.
        """
        metric = self.start(operation, **metadata)
        try:
            yield metric
        except Exception as e:
            self.finish(metric, success=False, error=str(e))
            raise
        self.finish(metric)

    def get_operation_stats(self, operation: str) -> Dict[str, Any]:
        """
        Summarize the recorded calls of one operation.

        Returns:
            Dictionary with count, average, min, max, total, success_rate
            and slow (calls over the time limit), or an empty dictionary if
            nothing was recorded.
        """
        recorded = self.metrics.get(operation)
        if not recorded:
            return {}

        durations = [m.duration for m in recorded]
        return {
            "count": len(recorded),
            "average": sum(durations) / len(durations),
            "min": min(durations),
            "max": max(durations),
            "total": sum(durations),
            "success_rate": sum(1 for m in recorded if m.success) / len(recorded),
            "slow": sum(1 for m in recorded if m.exceeded(self.max_processing_time)),
        }

    def get_all_stats(self) -> Dict[str, Dict[str, Any]]:
        """Summaries of every operation recorded so far."""
        return {name: self.get_operation_stats(name) for name in self.metrics}

    def reset(self) -> None:
        """Forget all recorded metrics."""
        self.metrics.clear()


def timed_operation(operation_name: str):
    """
    Decorator that logs how long a call took.

    Args:
        operation_name: Name used in the log messages.

    Example:
        @timed_operation("load_configuration")
        def load_from_directory(self, config_dir):
            ...
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            start_time = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{operation_name} failed after {time.perf_counter() - start_time:.2f}s: {e}"
                )
                raise
            logger.debug(f"{operation_name} completed in {time.perf_counter() - start_time:.2f}s")
            return result
        return wrapper
    return decorator
