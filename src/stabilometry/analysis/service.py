"""
Analysis service for balance measurements.

A measurement is one patient visit in a given pose, made of up to four
balance tasks (eyes open/closed on a solid/soft surface). Each task is
analyzed independently from its own sample sequence.
"""

import logging
import time

from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from stabilometry.analysis.metrics import compute_session_metrics
from stabilometry.analysis.types import MeasurementResult, Sample, SessionMetrics
from stabilometry.constants import Pose, TaskCondition

logger = logging.getLogger(__name__)

__all__ = ["AnalysisService", "MeasurementResult"]


class AnalysisService:
    """
    Service for computing sway metrics of tasks and whole measurements.

    The service keeps no state between calls. Sample sequences are copied
    into tuples before any computation starts, so the caller's lists can be
    reused once a call returns.

    Example:
        >>> service = AnalysisService(max_workers=4)
        >>> result = service.analyze_measurement(
        ...     {TaskCondition.EYES_OPEN_SOLID_SURFACE: samples},
        ...     pose=Pose.LEFT_LEG,
        ... )
        >>> result.get_parameter(
        ...     TaskCondition.EYES_OPEN_SOLID_SURFACE, Parameter.SWAY_PATH
        ... )
    """

    def __init__(self, max_workers: int | None = None):
        """
        Initialize analysis service.

        Args:
            max_workers: Worker threads for analyzing task conditions of a
                measurement in parallel. None or 1 analyzes them serially.
        """
        self.max_workers = max_workers

    def analyze_session(self, samples: Iterable[Sample]) -> SessionMetrics:
        """
        Analyze a single balance task.

        Args:
            samples: Ordered COP samples

        Returns:
            SessionMetrics for the task
        """
        frozen = tuple(samples)
        start = time.perf_counter()

        metrics = compute_session_metrics(frozen)

        elapsed = time.perf_counter() - start
        logger.info(
            f"Analyzed task with {len(frozen)} samples in {elapsed * 1000:.1f} ms"
        )
        return metrics

    def analyze_measurement(
        self,
        sessions: Mapping[TaskCondition, Iterable[Sample]],
        pose: Pose,
        recorded_at: datetime | None = None,
    ) -> MeasurementResult:
        """
        Analyze every recorded task of a measurement.

        Args:
            sessions: Sample sequence per task condition; conditions that
                were not recorded are simply absent
            pose: Stance held during the measurement
            recorded_at: Time of the measurement

        Returns:
            MeasurementResult with metrics per supplied condition
        """
        frozen = {
            TaskCondition(condition): tuple(samples)
            for condition, samples in sessions.items()
        }

        logger.info(
            f"Analyzing measurement ({pose.value}) with {len(frozen)} task(s)"
        )

        if self.max_workers and self.max_workers > 1 and len(frozen) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = {
                    condition: executor.submit(compute_session_metrics, samples)
                    for condition, samples in frozen.items()
                }
                tasks = {
                    condition: future.result() for condition, future in futures.items()
                }
        else:
            tasks = {
                condition: compute_session_metrics(samples)
                for condition, samples in frozen.items()
            }

        return MeasurementResult(pose=pose, recorded_at=recorded_at, tasks=tasks)
