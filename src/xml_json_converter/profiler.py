"""Performance profiler for conversion operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class ConversionMetrics:
    """
    Performance metrics for a single conversion.

    The record is created when profiling starts and completed when it stops,
    so every profiled call owns its own copy.
    """
    operation_name: str
    start_time: float
    input_size: int
    memory_start_mb: float
    end_time: float = 0.0
    duration: float = 0.0
    output_size: int = 0
    memory_end_mb: float = 0.0
    node_count: int = 0


class ConversionProfiler:
    """
    Profiler collecting timing and memory figures per conversion.

    Memory is the resident set size of the current process as reported
    by psutil. Only conversions that complete are added to the history.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[ConversionMetrics] = []

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        The caller may set ``output_size`` and ``node_count`` on the yielded
        metrics record before the block exits. A block that raises leaves
        the history untouched.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        metrics = self.start_profiling(operation_name, input_size)
        try:
            yield metrics
        except Exception:
            self.logger.debug(f"Discarded profile of failed operation: {operation_name}")
            raise
        self.stop_profiling(metrics)

    def start_profiling(self, operation_name: str, input_size: int = 0) -> ConversionMetrics:
        metrics = ConversionMetrics(
            operation_name=operation_name,
            start_time=time.perf_counter(),
            input_size=input_size,
            memory_start_mb=self._current_memory_mb()
        )
        self.logger.debug(f"Started profiling: {operation_name}")
        return metrics

    def stop_profiling(self, metrics: ConversionMetrics) -> ConversionMetrics:
        """
        Complete a metrics record and add it to the history.

        Args:
            metrics: Record returned by ``start_profiling``

        Returns:
            The completed ConversionMetrics record
        """
        metrics.end_time = time.perf_counter()
        metrics.duration = metrics.end_time - metrics.start_time
        metrics.memory_end_mb = self._current_memory_mb()
        self.metrics_history.append(metrics)

        self.logger.info(f"{metrics.operation_name}: {metrics.duration * 1000:.2f}ms, "
                         f"{metrics.node_count} nodes, {metrics.input_size}B -> {metrics.output_size}B, "
                         f"memory {metrics.memory_end_mb:.1f} MB")
        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all collected metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "average_duration": total_duration / len(self.metrics_history),
            "total_input_bytes": sum(m.input_size for m in self.metrics_history),
            "total_output_bytes": sum(m.output_size for m in self.metrics_history),
            "total_nodes": sum(m.node_count for m in self.metrics_history),
            "peak_memory_mb": max(m.memory_end_mb for m in self.metrics_history),
        }

    def export_summary(self) -> str:
        summary = self.get_performance_summary()
        if not summary["total_operations"]:
            return "No conversions profiled"
        return "\n".join([
            "Performance Summary:",
            f"  Conversions: {summary['total_operations']}",
            f"  Total Duration: {summary['total_duration'] * 1000:.2f}ms",
            f"  Nodes Built: {summary['total_nodes']}",
            f"  Input: {summary['total_input_bytes']}B, Output: {summary['total_output_bytes']}B",
            f"  Peak Memory: {summary['peak_memory_mb']:.1f} MB",
        ])

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Memory sampling failed: {e}")
            return 0.0
