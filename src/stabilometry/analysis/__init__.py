"""
Postural sway analysis.

Public API for computing sway metrics and confidence ellipses from
center-of-pressure samples.
"""

from stabilometry.analysis.covariance import estimate_covariance
from stabilometry.analysis.eigen import decompose
from stabilometry.analysis.ellipse import build_confidence_ellipse, get_ellipse_points
from stabilometry.analysis.metrics import compute_session_metrics
from stabilometry.analysis.service import AnalysisService
from stabilometry.analysis.types import (
    CovarianceMatrix,
    EigenResult,
    EllipseResult,
    MeasurementResult,
    Sample,
    SessionMetrics,
)
from stabilometry.analysis.vectors import Vector2

__all__ = [
    "AnalysisService",
    "CovarianceMatrix",
    "EigenResult",
    "EllipseResult",
    "MeasurementResult",
    "Sample",
    "SessionMetrics",
    "Vector2",
    "build_confidence_ellipse",
    "compute_session_metrics",
    "decompose",
    "estimate_covariance",
    "get_ellipse_points",
]
