"""Axis projection of COP samples."""

from collections.abc import Sequence

from stabilometry.analysis.types import Sample
from stabilometry.analysis.vectors import Vector2
from stabilometry.constants import AxisSelector


def project(sample: Sample, axis: AxisSelector) -> Vector2:
    """
    Project a sample onto the requested axis.

    AP keeps only the y coordinate and ML only the x coordinate, so that
    distances between projected points are distances along that axis.

    Args:
        sample: COP sample
        axis: Axis selector

    Returns:
        Projected 2D point
    """
    if axis is AxisSelector.AP:
        return Vector2(0.0, sample.y)
    if axis is AxisSelector.ML:
        return Vector2(sample.x, 0.0)
    return Vector2(sample.x, sample.y)


def axis_value(sample: Sample, axis: AxisSelector) -> float:
    """Scalar coordinate of a sample: x for ML, y otherwise."""
    return sample.x if axis is AxisSelector.ML else sample.y


def project_all(samples: Sequence[Sample], axis: AxisSelector) -> list[Vector2]:
    return [project(sample, axis) for sample in samples]
