"""Stabilometry analysis type definitions."""

import logging

from datetime import datetime

import numpy as np

from pydantic import BaseModel, ConfigDict, Field

from stabilometry.analysis.vectors import UNIT_X, UNIT_Y, ZERO, Vector2
from stabilometry.constants import EllipseConstants, Parameter, Pose, TaskCondition

logger = logging.getLogger(__name__)

# ============================================================================
# Input Types
# ============================================================================


class Sample(BaseModel):
    """
    One center-of-pressure reading.

    Attributes:
        time: Timestamp (seconds), non-decreasing within a session
        x: Medio-lateral coordinate
        y: Anterior-posterior coordinate
    """

    model_config = ConfigDict(frozen=True)

    time: float = Field(description="Timestamp (seconds)")
    x: float = Field(description="Medio-lateral (ML) coordinate")
    y: float = Field(description="Anterior-posterior (AP) coordinate")


# ============================================================================
# Ellipse Pipeline Types
# ============================================================================


class CovarianceMatrix(BaseModel):
    """
    Symmetric 2x2 scatter matrix.

    Entries are sums of squared/cross deviations from the mean and are not
    normalized by the sample count.
    """

    model_config = ConfigDict(frozen=True)

    cxx: float = Field(description="Sum of squared x deviations")
    cxy: float = Field(description="Sum of x*y deviation products")
    cyy: float = Field(description="Sum of squared y deviations")


class CovarianceResult(BaseModel):
    """Mean position and scatter matrix of a point set."""

    model_config = ConfigDict(frozen=True)

    mean: Vector2 = Field(description="Mean position")
    matrix: CovarianceMatrix = Field(description="Scatter matrix")
    count: int = Field(ge=1, description="Number of points")


class EigenPair(BaseModel):
    """An eigenvalue and its unit-length eigenvector."""

    model_config = ConfigDict(frozen=True)

    value: float = Field(description="Eigenvalue")
    vector: Vector2 = Field(description="Unit-length eigenvector")


class EigenResult(BaseModel):
    """
    Eigen-decomposition of a symmetric 2x2 matrix.

    Attributes:
        major: Pair with the larger eigenvalue
        minor: Pair with the smaller eigenvalue
        axis_aligned: True when the off-diagonal term was zero and the
            coordinate axes were used as eigenvectors
    """

    model_config = ConfigDict(frozen=True)

    major: EigenPair
    minor: EigenPair
    axis_aligned: bool = False

    @property
    def values(self) -> tuple[float, float]:
        return (self.major.value, self.minor.value)

    @property
    def vectors(self) -> tuple[Vector2, Vector2]:
        return (self.major.vector, self.minor.vector)


class EllipseResult(BaseModel):
    """
    95% confidence sway ellipse.

    Invariants: area = 5.991 * pi * semi_major_axis * semi_minor_axis and
    semi_major_axis >= semi_minor_axis >= 0. Eigenvectors are given relative
    to the origin; the ellipse itself is centered on ``mean``.
    """

    model_config = ConfigDict(frozen=True)

    area: float = Field(ge=0, description="Ellipse area")
    semi_major_axis: float = Field(ge=0, description="Semi-major axis (std dev)")
    semi_minor_axis: float = Field(ge=0, description="Semi-minor axis (std dev)")
    eigenvectors: tuple[Vector2, Vector2] = Field(
        description="Unit vectors of the major and minor axes"
    )
    mean: Vector2 = Field(description="Mean COP position")
    sample_count: int = Field(ge=0, description="Number of samples used")

    @classmethod
    def empty(cls, sample_count: int = 0, mean: Vector2 = ZERO) -> "EllipseResult":
        """Sentinel ellipse for sessions with fewer than two samples."""
        return cls(
            area=0.0,
            semi_major_axis=0.0,
            semi_minor_axis=0.0,
            eigenvectors=(UNIT_X, UNIT_Y),
            mean=mean,
            sample_count=sample_count,
        )

    @property
    def is_empty(self) -> bool:
        return self.sample_count < 2

    def get_ellipse_points(
        self, number_of_points: int, centered: bool = False
    ) -> list[Vector2]:
        """
        Sample evenly spaced points on the ellipse boundary.

        Point i lies at angle i * 2*pi/N. Points are relative to the origin
        unless ``centered`` is set, in which case they are shifted onto the
        mean COP position.

        Args:
            number_of_points: Number of boundary points (N > 0)
            centered: Translate the outline by the mean position

        Returns:
            List of exactly N points, or an empty list when N <= 0
        """
        if number_of_points <= 0:
            logger.error(f"{number_of_points} is not a valid ellipse point count")
            return []

        angles = np.arange(number_of_points) * (2 * np.pi / number_of_points)
        multiplier = np.sqrt(EllipseConstants.CHI_SQUARE_95)
        major, minor = self.eigenvectors

        major_part = np.cos(angles) * self.semi_major_axis
        minor_part = np.sin(angles) * self.semi_minor_axis
        xs = multiplier * (major_part * major.x + minor_part * minor.x)
        ys = multiplier * (major_part * major.y + minor_part * minor.y)

        if centered:
            xs = xs + self.mean.x
            ys = ys + self.mean.y

        return [Vector2(float(x), float(y)) for x, y in zip(xs, ys)]


# ============================================================================
# Result Types
# ============================================================================


class SessionMetrics(BaseModel):
    """
    Sway parameters of one completed balance task.

    Built once from an immutable sample sequence and never modified.
    """

    model_config = ConfigDict(frozen=True)

    sample_count: int = Field(ge=0, description="Number of samples")
    duration: float = Field(description="Recording duration (seconds)")
    sample_time: float = Field(description="Mean sampling interval (seconds)")

    sway_path: float = Field(ge=0, description="Total COP path length")
    sway_path_ap: float = Field(ge=0, description="AP path length")
    sway_path_ml: float = Field(ge=0, description="ML path length")
    mean_distance: float = Field(ge=0, description="Mean distance from first sample")

    mean_sway_velocity: float = Field(description="Mean COP velocity")
    mean_sway_velocity_ap: float = Field(description="Mean AP velocity")
    mean_sway_velocity_ml: float = Field(description="Mean ML velocity")

    sway_average_amplitude_ap: float = Field(ge=0, description="AP average amplitude")
    sway_average_amplitude_ml: float = Field(ge=0, description="ML average amplitude")
    sway_maximal_amplitude_ap: float = Field(ge=0, description="AP range")
    sway_maximal_amplitude_ml: float = Field(ge=0, description="ML range")

    confidence_ellipse: EllipseResult = Field(description="95% confidence ellipse")

    @property
    def ellipse_area(self) -> float:
        return self.confidence_ellipse.area

    def get_parameter(self, parameter: Parameter) -> float:
        """Return the scalar value of a chartable parameter."""
        if parameter is Parameter.CONFIDENCE_ELLIPSE_AREA:
            return self.ellipse_area
        value: float = getattr(self, parameter.value)
        return value

    def to_record(self) -> dict[str, float]:
        """
        Flatten to the named numeric fields stored per task.

        Returns:
            Mapping of field name to value, ellipse reduced to its area
        """
        record = {"duration": self.duration, "sample_time": self.sample_time}
        record.update({p.value: self.get_parameter(p) for p in Parameter})
        return record


class MeasurementResult(BaseModel):
    """Task metrics for every recorded condition of one measurement."""

    model_config = ConfigDict(frozen=True)

    pose: Pose = Field(description="Stance held during the measurement")
    recorded_at: datetime | None = Field(default=None, description="Recording time")
    tasks: dict[TaskCondition, SessionMetrics] = Field(
        default_factory=dict, description="Metrics per task condition"
    )

    def get_parameter(
        self, condition: TaskCondition, parameter: Parameter
    ) -> float | None:
        """Look up one parameter, or None if the condition was not recorded."""
        task = self.tasks.get(condition)
        if task is None:
            return None
        return task.get_parameter(parameter)
