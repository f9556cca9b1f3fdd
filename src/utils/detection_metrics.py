"""
Performance monitoring utilities for recurring charge detection.

This module provides a context manager that records how long each stage of a
detection run takes, along with how many transactions, groups and candidates
passed through it, and logs a structured summary when the run finishes.
"""

import time
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

SLOW_RUN_WARNING_MS = 10000
SLOW_RUN_ERROR_MS = 30000


@dataclass
class DetectionMetrics:
    """Container for detection run performance metrics."""
    operation_name: str
    start_time: float = field(default_factory=time.time)
    end_time: Optional[float] = None
    elapsed_ms: Optional[float] = None
    transaction_count: int = 0
    filtered_count: int = 0
    groups_identified: int = 0
    candidates_detected: int = 0
    stage_ms: Dict[str, float] = field(default_factory=dict)

    def finish(self):
        """Mark the operation as finished and calculate elapsed time."""
        self.end_time = time.time()
        self.elapsed_ms = (self.end_time - self.start_time) * 1000

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary for logging."""
        return {
            'operation_name': self.operation_name,
            'elapsed_ms': self.elapsed_ms,
            'transaction_count': self.transaction_count,
            'filtered_count': self.filtered_count,
            'groups_identified': self.groups_identified,
            'candidates_detected': self.candidates_detected,
            'stage_ms': dict(self.stage_ms),
            'timestamp': datetime.now(timezone.utc).isoformat()
        }

    def log_metrics(self):
        """Log the performance metrics."""
        metrics = self.to_dict()
        elapsed = self.elapsed_ms or 0.0

        # Determine log level based on performance
        if elapsed > SLOW_RUN_ERROR_MS:
            logger.error(
                f"SLOW DETECTION RUN: {self.operation_name} took {elapsed:.2f}ms",
                extra={'detection_metrics': metrics}
            )
        elif elapsed > SLOW_RUN_WARNING_MS:
            logger.warning(
                f"Slow detection run: {self.operation_name} took {elapsed:.2f}ms",
                extra={'detection_metrics': metrics}
            )
        else:
            logger.info(
                f"Detection run completed: {self.operation_name} in {elapsed:.2f}ms "
                f"({self.transaction_count} transactions, {self.candidates_detected} candidates)",
                extra={'detection_metrics': metrics}
            )

        if self.stage_ms:
            breakdown = ', '.join(f"{name}: {ms:.2f}ms" for name, ms in self.stage_ms.items())
            logger.debug(
                f"Detection breakdown for {self.operation_name}: {breakdown}",
                extra={'detection_metrics': metrics}
            )


class _StageTimer:
    def __init__(self, metrics: DetectionMetrics, stage: str):
        self.metrics = metrics
        self.stage = stage
        self.start_time: float = 0.0

    def __enter__(self):
        self.start_time = time.time()
        logger.debug(f"Starting stage: {self.stage}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.time() - self.start_time) * 1000
        self.metrics.stage_ms[self.stage] = elapsed_ms
        logger.debug(f"Completed stage {self.stage} in {elapsed_ms:.2f}ms")


class DetectionPerformanceTracker:
    """
    Context manager for detection run performance tracking.

    Usage:
        with DetectionPerformanceTracker("recurring_charge_detection") as tracker:
            tracker.set_transaction_count(len(transactions))

            with tracker.stage('filter'):
                filtered = filter_transactions(transactions, config)
            tracker.set_filtered_count(len(filtered))

            with tracker.stage('pattern_analysis'):
                candidates = analyze(groups)
            tracker.set_candidates_detected(len(candidates))
    """

    def __init__(self, operation_name: str):
        self.metrics = DetectionMetrics(operation_name=operation_name)

    def __enter__(self):
        logger.debug(f"Starting detection run: {self.metrics.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.metrics.finish()
        self.metrics.log_metrics()

    def stage(self, stage_name: str) -> _StageTimer:
        """Create a context manager for tracking a stage."""
        return _StageTimer(self.metrics, stage_name)

    def set_transaction_count(self, count: int):
        """Set the number of transactions handed to the run."""
        self.metrics.transaction_count = count

    def set_filtered_count(self, count: int):
        """Set the number of transactions that survived filtering."""
        self.metrics.filtered_count = count

    def set_groups_identified(self, count: int):
        """Set the number of merchant groups built."""
        self.metrics.groups_identified = count

    def set_candidates_detected(self, count: int):
        """Set the number of recurring candidates detected."""
        self.metrics.candidates_detected = count
