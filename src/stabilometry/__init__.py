"""
Stabilometry: postural sway analysis

Computes clinical balance parameters and 95% confidence ellipses from
force-platform center-of-pressure recordings.
"""

from stabilometry.analysis import (
    AnalysisService,
    EllipseResult,
    Sample,
    SessionMetrics,
    build_confidence_ellipse,
    compute_session_metrics,
)

__all__ = [
    "AnalysisService",
    "EllipseResult",
    "Sample",
    "SessionMetrics",
    "build_confidence_ellipse",
    "compute_session_metrics",
]
