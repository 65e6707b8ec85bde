"""
95% confidence ellipse of COP sway.

The ellipse axes follow the principal directions of the sample scatter
matrix. Semi-axes are the standard deviations along those directions and the
area is scaled by the chi-square critical value for two degrees of freedom,
giving the smallest ellipse expected to hold 95% of a bivariate-normal sample
(Oliveira et al., 1996).
"""

import logging
import math

from collections.abc import Sequence

from stabilometry.analysis.covariance import estimate_covariance
from stabilometry.analysis.eigen import decompose
from stabilometry.analysis.projection import project_all
from stabilometry.analysis.types import EllipseResult, Sample
from stabilometry.analysis.vectors import Vector2
from stabilometry.constants import AxisSelector, EllipseConstants

logger = logging.getLogger(__name__)


def calculate_ellipse_area(semi_major_axis: float, semi_minor_axis: float) -> float:
    return EllipseConstants.CHI_SQUARE_95 * math.pi * semi_major_axis * semi_minor_axis


def build_confidence_ellipse(samples: Sequence[Sample]) -> EllipseResult:
    """
    Build the 95% confidence ellipse of a session.

    Args:
        samples: Ordered COP samples

    Returns:
        EllipseResult, or the empty sentinel when fewer than two samples
        are given
    """
    points = project_all(samples, AxisSelector.BOTH)

    if not points:
        return EllipseResult.empty()

    covariance = estimate_covariance(points)

    if covariance.count < 2:
        return EllipseResult.empty(sample_count=covariance.count, mean=covariance.mean)

    eigen = decompose(covariance.matrix)
    degrees_of_freedom = covariance.count - 1

    # Rounding can push the smaller eigenvalue of a collinear set just below 0
    semi_major_axis = math.sqrt(max(eigen.major.value, 0.0) / degrees_of_freedom)
    semi_minor_axis = math.sqrt(max(eigen.minor.value, 0.0) / degrees_of_freedom)

    return EllipseResult(
        area=calculate_ellipse_area(semi_major_axis, semi_minor_axis),
        semi_major_axis=semi_major_axis,
        semi_minor_axis=semi_minor_axis,
        eigenvectors=eigen.vectors,
        mean=covariance.mean,
        sample_count=covariance.count,
    )


def get_ellipse_points(
    ellipse: EllipseResult, number_of_points: int, centered: bool = False
) -> list[Vector2]:
    """Boundary points of ``ellipse``; see EllipseResult.get_ellipse_points."""
    return ellipse.get_ellipse_points(number_of_points, centered=centered)
