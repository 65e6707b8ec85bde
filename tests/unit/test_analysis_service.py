"""
Unit tests for the measurement analysis service.
"""

from datetime import datetime

import pytest

from stabilometry.analysis.metrics import compute_session_metrics
from stabilometry.analysis.service import AnalysisService
from stabilometry.analysis.types import Sample
from stabilometry.constants import Parameter, Pose, TaskCondition
from tests.helpers.synthetic_data import generate_random_sway


@pytest.fixture
def measurement_sessions():
    """Recordings for all four task conditions."""
    return {
        TaskCondition.EYES_OPEN_SOLID_SURFACE: generate_random_sway(
            duration=3.0, seed=1
        ),
        TaskCondition.EYES_CLOSED_SOLID_SURFACE: generate_random_sway(
            duration=3.0, seed=2
        ),
        TaskCondition.EYES_OPEN_SOFT_SURFACE: generate_random_sway(
            duration=3.0, seed=3
        ),
        TaskCondition.EYES_CLOSED_SOFT_SURFACE: generate_random_sway(
            duration=3.0, seed=4
        ),
    }


class TestAnalyzeSession:
    """Test single-task analysis."""

    def test_matches_direct_computation(self, four_samples):
        service = AnalysisService()
        assert service.analyze_session(four_samples) == compute_session_metrics(
            four_samples
        )

    def test_input_copied_before_analysis(self, four_samples):
        service = AnalysisService()
        expected = compute_session_metrics(four_samples)

        metrics = service.analyze_session(four_samples)
        four_samples.append(Sample(time=5, x=100, y=100))

        assert metrics == expected


class TestAnalyzeMeasurement:
    """Test multi-task measurement analysis."""

    def test_all_conditions(self, measurement_sessions):
        result = AnalysisService().analyze_measurement(
            measurement_sessions, pose=Pose.TANDEM_LEFT_FRONT
        )

        assert result.pose is Pose.TANDEM_LEFT_FRONT
        assert set(result.tasks) == set(TaskCondition)
        for condition, samples in measurement_sessions.items():
            assert result.tasks[condition] == compute_session_metrics(samples)

    def test_parallel_matches_serial(self, measurement_sessions):
        serial = AnalysisService().analyze_measurement(
            measurement_sessions, pose=Pose.LEFT_LEG
        )
        parallel = AnalysisService(max_workers=4).analyze_measurement(
            measurement_sessions, pose=Pose.LEFT_LEG
        )

        assert parallel.tasks == serial.tasks

    def test_missing_condition(self, four_samples):
        recorded_at = datetime(2024, 3, 14, 9, 30)
        result = AnalysisService().analyze_measurement(
            {TaskCondition.EYES_OPEN_SOLID_SURFACE: four_samples},
            pose=Pose.BOTH_LEGS_30_ANGLE,
            recorded_at=recorded_at,
        )

        assert result.recorded_at == recorded_at
        assert (
            result.get_parameter(
                TaskCondition.EYES_OPEN_SOLID_SURFACE, Parameter.SWAY_PATH_AP
            )
            == 4.0
        )
        assert (
            result.get_parameter(
                TaskCondition.EYES_CLOSED_SOFT_SURFACE, Parameter.SWAY_PATH_AP
            )
            is None
        )

    def test_condition_given_as_string(self, four_samples):
        result = AnalysisService().analyze_measurement(
            {"eyes_closed_solid_surface": four_samples}, pose=Pose.RIGHT_LEG
        )

        assert TaskCondition.EYES_CLOSED_SOLID_SURFACE in result.tasks

    def test_empty_measurement(self):
        result = AnalysisService().analyze_measurement({}, pose=Pose.LEFT_LEG)
        assert result.tasks == {}
