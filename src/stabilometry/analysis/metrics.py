"""
Sway metrics for a single balance task.

Every metric needs at least two samples; with fewer, each returns 0.0.
"""

import logging

from collections.abc import Iterable, Sequence

from stabilometry.analysis.ellipse import build_confidence_ellipse
from stabilometry.analysis.projection import axis_value, project
from stabilometry.analysis.types import SessionMetrics, Sample
from stabilometry.analysis.vectors import distance
from stabilometry.constants import AxisSelector
from stabilometry.constants import SwayMetricConstants as SMC

logger = logging.getLogger(__name__)


def calculate_sway_path(samples: Sequence[Sample], axis: AxisSelector) -> float:
    """
    Total distance travelled by the COP along an axis.

    Args:
        samples: Ordered COP samples
        axis: Axis selector

    Returns:
        Sum of distances between consecutive projected samples
    """
    if len(samples) < SMC.MIN_SAMPLES:
        return 0.0

    result = 0.0
    previous = project(samples[0], axis)

    for sample in samples[1:]:
        current = project(sample, axis)
        result += distance(previous, current)
        previous = current

    return result


def calculate_mean_distance(samples: Sequence[Sample]) -> float:
    """
    Mean distance of the COP from the first sample.

    The sum over samples 1..n-1 is divided by n, not n-1. Stored values from
    earlier recordings use this definition, so it is kept as is.
    """
    if len(samples) < SMC.MIN_SAMPLES:
        return 0.0

    first = project(samples[0], AxisSelector.BOTH)
    total = 0.0

    for sample in samples[1:]:
        total += distance(project(sample, AxisSelector.BOTH), first)

    return total / len(samples)


def calculate_mean_sway_velocity(
    samples: Sequence[Sample], axis: AxisSelector
) -> float:
    """
    Mean of the per-interval COP speeds along an axis.

    Intervals with zero time difference have no defined speed; they are
    skipped and the mean is taken over the remaining intervals.

    Args:
        samples: Ordered COP samples
        axis: Axis selector

    Returns:
        Mean velocity, or 0.0 if no interval has a usable time difference
    """
    if len(samples) < SMC.MIN_SAMPLES:
        return 0.0

    total = 0.0
    intervals = 0
    skipped = 0

    previous_point = project(samples[0], axis)
    previous_time = samples[0].time

    for sample in samples[1:]:
        current_point = project(sample, axis)
        delta_time = sample.time - previous_time

        if delta_time == 0:
            skipped += 1
        else:
            total += distance(current_point, previous_point) / delta_time
            intervals += 1

        previous_point = current_point
        previous_time = sample.time

    if skipped:
        logger.warning(
            f"Skipped {skipped} of {len(samples) - 1} intervals with zero time "
            f"difference in {axis.value} velocity"
        )

    if intervals == 0:
        return 0.0

    return total / intervals


def count_direction_changes(samples: Sequence[Sample], axis: AxisSelector) -> int:
    """
    Count reversals of the trend of one coordinate, starting from 1.

    The first two samples set the initial trend. Equal consecutive values
    never count as a reversal.
    """
    direction_changes = SMC.INITIAL_DIRECTION_CHANGES

    if len(samples) < SMC.MIN_SAMPLES:
        return direction_changes

    previous_value = axis_value(samples[0], axis)
    value_increasing = axis_value(samples[1], axis) > previous_value

    for sample in samples[1:]:
        current_value = axis_value(sample, axis)

        if value_increasing and current_value < previous_value:
            value_increasing = False
            direction_changes += 1
        elif not value_increasing and current_value > previous_value:
            value_increasing = True
            direction_changes += 1

        previous_value = current_value

    return direction_changes


def calculate_average_amplitude(
    samples: Sequence[Sample], axis: AxisSelector, sway_path: float | None = None
) -> float:
    """
    Sway path per oscillation along an axis.

    Args:
        samples: Ordered COP samples
        axis: AP or ML
        sway_path: Precomputed sway path for ``axis``, computed if omitted

    Returns:
        Sway path divided by the number of direction changes
    """
    if len(samples) < SMC.MIN_SAMPLES:
        return 0.0

    if sway_path is None:
        sway_path = calculate_sway_path(samples, axis)

    return sway_path / count_direction_changes(samples, axis)


def calculate_maximal_amplitude(samples: Sequence[Sample], axis: AxisSelector) -> float:
    """Range (max - min) of one coordinate."""
    if len(samples) < SMC.MIN_SAMPLES:
        return 0.0

    values = [axis_value(sample, axis) for sample in samples]
    return max(values) - min(values)


def compute_session_metrics(samples: Iterable[Sample]) -> SessionMetrics:
    """
    Compute all sway parameters of one balance task.

    Args:
        samples: Ordered COP samples of the task

    Returns:
        SessionMetrics for the task
    """
    samples = tuple(samples)
    count = len(samples)

    if count >= SMC.MIN_SAMPLES:
        duration = samples[-1].time - samples[0].time
        sample_time = duration / (count - 1)
    else:
        duration = 0.0
        sample_time = 0.0

    sway_path_ap = calculate_sway_path(samples, AxisSelector.AP)
    sway_path_ml = calculate_sway_path(samples, AxisSelector.ML)

    metrics = SessionMetrics(
        sample_count=count,
        duration=duration,
        sample_time=sample_time,
        sway_path=calculate_sway_path(samples, AxisSelector.BOTH),
        sway_path_ap=sway_path_ap,
        sway_path_ml=sway_path_ml,
        mean_distance=calculate_mean_distance(samples),
        mean_sway_velocity=calculate_mean_sway_velocity(samples, AxisSelector.BOTH),
        mean_sway_velocity_ap=calculate_mean_sway_velocity(samples, AxisSelector.AP),
        mean_sway_velocity_ml=calculate_mean_sway_velocity(samples, AxisSelector.ML),
        sway_average_amplitude_ap=calculate_average_amplitude(
            samples, AxisSelector.AP, sway_path_ap
        ),
        sway_average_amplitude_ml=calculate_average_amplitude(
            samples, AxisSelector.ML, sway_path_ml
        ),
        sway_maximal_amplitude_ap=calculate_maximal_amplitude(
            samples, AxisSelector.AP
        ),
        sway_maximal_amplitude_ml=calculate_maximal_amplitude(
            samples, AxisSelector.ML
        ),
        confidence_ellipse=build_confidence_ellipse(samples),
    )

    logger.debug(
        f"Computed metrics for {count} samples: path={metrics.sway_path:.3f}, "
        f"ellipse area={metrics.ellipse_area:.3f}"
    )
    return metrics
