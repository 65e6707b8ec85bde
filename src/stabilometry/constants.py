"""
Constants and enumerations for stabilometry analysis.

Axis selectors, stance and task conditions of a balance measurement, and the
parameters a completed task exposes for storage and charting.
"""

from enum import Enum
from pathlib import Path

# ============================================================================
# Axes
# ============================================================================


class AxisSelector(str, Enum):
    """Sway axis a metric is computed on."""

    AP = "AP"  # Anterior-posterior, y coordinate
    ML = "ML"  # Medio-lateral, x coordinate
    BOTH = "BOTH"  # Full 2D vector


# ============================================================================
# Measurement Setup
# ============================================================================


class Pose(str, Enum):
    """Stance held by the patient during a measurement."""

    BOTH_LEGS_JOINED_PARALLEL = "both_legs_joined_parallel"
    BOTH_LEGS_30_ANGLE = "both_legs_30_angle"
    BOTH_LEGS_PARALLEL_APART = "both_legs_parallel_apart"
    TANDEM_LEFT_FRONT = "tandem_left_front"
    TANDEM_RIGHT_FRONT = "tandem_right_front"
    LEFT_LEG = "left_leg"
    RIGHT_LEG = "right_leg"


class TaskCondition(str, Enum):
    """Visual and surface condition of a single balance task."""

    EYES_OPEN_SOLID_SURFACE = "eyes_open_solid_surface"
    EYES_CLOSED_SOLID_SURFACE = "eyes_closed_solid_surface"
    EYES_OPEN_SOFT_SURFACE = "eyes_open_soft_surface"
    EYES_CLOSED_SOFT_SURFACE = "eyes_closed_soft_surface"


class Parameter(str, Enum):
    """Scalar task parameters available for storage and charting."""

    SWAY_PATH = "sway_path"
    SWAY_PATH_AP = "sway_path_ap"
    SWAY_PATH_ML = "sway_path_ml"
    MEAN_DISTANCE = "mean_distance"
    MEAN_SWAY_VELOCITY = "mean_sway_velocity"
    MEAN_SWAY_VELOCITY_AP = "mean_sway_velocity_ap"
    MEAN_SWAY_VELOCITY_ML = "mean_sway_velocity_ml"
    SWAY_AVERAGE_AMPLITUDE_AP = "sway_average_amplitude_ap"
    SWAY_AVERAGE_AMPLITUDE_ML = "sway_average_amplitude_ml"
    SWAY_MAXIMAL_AMPLITUDE_AP = "sway_maximal_amplitude_ap"
    SWAY_MAXIMAL_AMPLITUDE_ML = "sway_maximal_amplitude_ml"
    CONFIDENCE_ELLIPSE_AREA = "confidence_ellipse_area"


PARAMETER_UNITS: dict[Parameter, str] = {
    Parameter.SWAY_PATH: "mm",
    Parameter.SWAY_PATH_AP: "mm",
    Parameter.SWAY_PATH_ML: "mm",
    Parameter.MEAN_DISTANCE: "mm",
    Parameter.MEAN_SWAY_VELOCITY: "mm/s",
    Parameter.MEAN_SWAY_VELOCITY_AP: "mm/s",
    Parameter.MEAN_SWAY_VELOCITY_ML: "mm/s",
    Parameter.SWAY_AVERAGE_AMPLITUDE_AP: "mm",
    Parameter.SWAY_AVERAGE_AMPLITUDE_ML: "mm",
    Parameter.SWAY_MAXIMAL_AMPLITUDE_AP: "mm",
    Parameter.SWAY_MAXIMAL_AMPLITUDE_ML: "mm",
    Parameter.CONFIDENCE_ELLIPSE_AREA: "mm²",
}


# ============================================================================
# Analysis Algorithm Constants
# ============================================================================


class EllipseConstants:
    """Constants for the confidence ellipse (ellipse.py)."""

    # Chi-square critical value, 2 degrees of freedom, 95% confidence
    CHI_SQUARE_95 = 5.991

    DEFAULT_POINT_COUNT = 100


class SwayMetricConstants:
    """Constants for sway metrics (metrics.py)."""

    MIN_SAMPLES = 2
    INITIAL_DIRECTION_CHANGES = 1


# ============================================================================
# Application Defaults
# ============================================================================

DEFAULT_CONFIG_DIR = Path.home() / ".stabilometry"
DEFAULT_CONFIG_FILE = "config.toml"

DEFAULT_LOG_DIR = DEFAULT_CONFIG_DIR / "logs"
DEFAULT_LOG_FILE = "stabilometry.log"
DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
DEFAULT_LOG_BACKUP_COUNT = 5
