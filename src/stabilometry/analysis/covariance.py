"""
Mean and scatter matrix of a 2D point set.

Sums are accumulated in plain Python floats in input order so that results
are reproducible to the last bit for a given sequence.
"""

from collections.abc import Sequence

from stabilometry.analysis.types import CovarianceMatrix, CovarianceResult
from stabilometry.analysis.vectors import Vector2, add, subtract


def calculate_mean(points: Sequence[Vector2]) -> Vector2:
    """
    Arithmetic mean of a non-empty point sequence.

    Raises:
        ValueError: If points is empty
    """
    if not points:
        raise ValueError("Cannot compute the mean of an empty point set")

    total = Vector2(0.0, 0.0)
    for point in points:
        total = add(total, point)

    count = len(points)
    return Vector2(total.x / count, total.y / count)


def calculate_covariance_matrix(
    points: Sequence[Vector2], mean: Vector2
) -> CovarianceMatrix:
    """
    Sum squared and cross deviations from a known mean.

    Args:
        points: Point sequence
        mean: Mean of the same sequence

    Returns:
        Unnormalized scatter matrix
    """
    cxx = 0.0
    cxy = 0.0
    cyy = 0.0

    for point in points:
        deviation = subtract(point, mean)
        cxx += deviation.x**2
        cxy += deviation.x * deviation.y
        cyy += deviation.y**2

    return CovarianceMatrix(cxx=cxx, cxy=cxy, cyy=cyy)


def estimate_covariance(points: Sequence[Vector2]) -> CovarianceResult:
    """
    Compute mean and scatter matrix in two passes.

    Raises:
        ValueError: If points is empty
    """
    mean = calculate_mean(points)
    matrix = calculate_covariance_matrix(points, mean)
    return CovarianceResult(mean=mean, matrix=matrix, count=len(points))
