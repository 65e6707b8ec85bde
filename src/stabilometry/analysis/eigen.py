"""
Closed-form eigen-decomposition of symmetric 2x2 matrices.

For a scatter matrix [[Cxx, Cxy], [Cxy, Cyy]] the eigenvalues are

    (Cxx + Cyy) / 2 +/- sqrt(Cxy^2 + ((Cxx - Cyy) / 2)^2)

and the eigenvector of eigenvalue L solves (Cxx - L) * vx + Cxy * vy = 0.
"""

import logging
import math

from stabilometry.analysis.types import CovarianceMatrix, EigenPair, EigenResult
from stabilometry.analysis.vectors import UNIT_X, UNIT_Y, Vector2

logger = logging.getLogger(__name__)


def calculate_eigenvalues(matrix: CovarianceMatrix) -> tuple[float, float]:
    """
    Eigenvalues of a symmetric 2x2 matrix, larger first.

    Args:
        matrix: Scatter matrix

    Returns:
        Tuple of (larger, smaller) eigenvalue
    """
    average = (matrix.cxx + matrix.cyy) / 2
    spread = math.sqrt(matrix.cxy**2 + ((matrix.cxx - matrix.cyy) / 2) ** 2)

    return average + spread, average - spread


def calculate_eigenvector(eigenvalue: float, matrix: CovarianceMatrix) -> Vector2:
    """
    Unit eigenvector for an eigenvalue of a matrix with non-zero Cxy.

    Args:
        eigenvalue: Eigenvalue of ``matrix``
        matrix: Scatter matrix

    Returns:
        Unit eigenvector with positive x component

    Raises:
        ZeroDivisionError: If Cxy is zero; use decompose() for that case
    """
    t = (matrix.cxx - eigenvalue) / matrix.cxy

    # t**2 overflows for |t| above ~1e154 when Cxy is tiny; hypot does not
    vx = 1 / math.hypot(1.0, t)
    vy = -t * vx

    return Vector2(vx, vy)


def decompose(matrix: CovarianceMatrix) -> EigenResult:
    """
    Eigenvalues and unit eigenvectors of a scatter matrix.

    When Cxy is zero the matrix is already diagonal and the coordinate axes
    are its eigenvectors: the larger eigenvalue gets the x axis when
    Cxx >= Cyy and the y axis otherwise.

    Args:
        matrix: Scatter matrix

    Returns:
        EigenResult with major (larger) and minor pairs
    """
    larger, smaller = calculate_eigenvalues(matrix)

    if matrix.cxy == 0:
        logger.debug(
            f"Axis-aligned scatter matrix (Cxx={matrix.cxx}, Cyy={matrix.cyy}), "
            "using coordinate axes as eigenvectors"
        )
        major_vector, minor_vector = (
            (UNIT_X, UNIT_Y) if matrix.cxx >= matrix.cyy else (UNIT_Y, UNIT_X)
        )
        return EigenResult(
            major=EigenPair(value=larger, vector=major_vector),
            minor=EigenPair(value=smaller, vector=minor_vector),
            axis_aligned=True,
        )

    return EigenResult(
        major=EigenPair(value=larger, vector=calculate_eigenvector(larger, matrix)),
        minor=EigenPair(value=smaller, vector=calculate_eigenvector(smaller, matrix)),
    )
