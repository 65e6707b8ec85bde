"""
Unit tests for the 95% confidence ellipse.

Tests ellipse geometry, the area invariant, boundary point sampling, and
degenerate inputs.
"""

import logging
import math

import numpy as np
import pytest

from stabilometry.analysis.ellipse import (
    build_confidence_ellipse,
    calculate_ellipse_area,
    get_ellipse_points,
)
from stabilometry.analysis.types import EllipseResult, Sample
from stabilometry.analysis.vectors import UNIT_X, UNIT_Y, Vector2, distance
from stabilometry.constants import EllipseConstants
from tests.helpers.synthetic_data import generate_elliptical_sway, generate_random_sway

CHI = EllipseConstants.CHI_SQUARE_95
SQRT5 = math.sqrt(5)


@pytest.fixture
def reference_ellipse():
    """Ellipse from eigenvalues 21 and 1 of a four-sample recording."""
    semi_major = math.sqrt(21 / 3)
    semi_minor = math.sqrt(1 / 3)
    return EllipseResult(
        area=calculate_ellipse_area(semi_major, semi_minor),
        semi_major_axis=semi_major,
        semi_minor_axis=semi_minor,
        eigenvectors=(Vector2(2 / SQRT5, -1 / SQRT5), Vector2(1 / SQRT5, 2 / SQRT5)),
        mean=Vector2(1.0, 2.0),
        sample_count=4,
    )


class TestEllipseGeometry:
    """Test semi-axes and area of built ellipses."""

    def test_reference_recording(self, four_samples):
        ellipse = build_confidence_ellipse(four_samples)

        # det of [[10.75, -6.75], [-6.75, 4.75]] is 5.5
        assert ellipse.mean == Vector2(2.25, 0.75)
        assert ellipse.semi_major_axis * ellipse.semi_minor_axis == pytest.approx(
            math.sqrt(5.5) / 3
        )
        assert ellipse.area == pytest.approx(CHI * math.pi * math.sqrt(5.5) / 3)
        assert ellipse.sample_count == 4
        assert not ellipse.is_empty

    def test_reference_area(self):
        area = calculate_ellipse_area(math.sqrt(21 / 3), math.sqrt(1 / 3))
        assert area == pytest.approx(CHI * math.pi * math.sqrt(7) * math.sqrt(1 / 3))

    @pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
    def test_area_invariant(self, seed):
        ellipse = build_confidence_ellipse(generate_random_sway(duration=5.0, seed=seed))

        assert ellipse.area == (
            CHI * math.pi * ellipse.semi_major_axis * ellipse.semi_minor_axis
        )
        assert ellipse.semi_major_axis >= ellipse.semi_minor_axis >= 0

    def test_recovers_principal_direction(self):
        angle = math.pi / 6
        ellipse = build_confidence_ellipse(
            generate_elliptical_sway(ml_std=4.0, ap_std=1.0, angle=angle)
        )
        major = ellipse.eigenvectors[0]

        assert ellipse.semi_major_axis == pytest.approx(4.0, rel=0.05)
        assert ellipse.semi_minor_axis == pytest.approx(1.0, rel=0.05)
        assert abs(major.x * math.cos(angle) + major.y * math.sin(angle)) == (
            pytest.approx(1.0, abs=1e-3)
        )

    def test_covers_about_95_percent(self):
        samples = generate_elliptical_sway(n_samples=5000)
        ellipse = build_confidence_ellipse(samples)
        major, minor = ellipse.eigenvectors

        inside = 0
        for s in samples:
            dx, dy = s.x - ellipse.mean.x, s.y - ellipse.mean.y
            u = (dx * major.x + dy * major.y) / ellipse.semi_major_axis
            v = (dx * minor.x + dy * minor.y) / ellipse.semi_minor_axis
            if u * u + v * v <= CHI:
                inside += 1

        assert inside / len(samples) == pytest.approx(0.95, abs=0.015)

    def test_axis_aligned_samples(self):
        samples = [
            Sample(time=0, x=0, y=0),
            Sample(time=1, x=2, y=0),
            Sample(time=2, x=0, y=1),
            Sample(time=3, x=2, y=1),
        ]
        ellipse = build_confidence_ellipse(samples)

        assert ellipse.eigenvectors == (UNIT_X, UNIT_Y)
        assert ellipse.semi_major_axis == pytest.approx(math.sqrt(4 / 3))
        assert ellipse.semi_minor_axis == pytest.approx(math.sqrt(1 / 3))

    def test_collinear_samples_have_zero_minor_axis(self):
        samples = [Sample(time=i, x=0.1 * i, y=0.3 * i) for i in range(10)]
        ellipse = build_confidence_ellipse(samples)

        assert ellipse.semi_minor_axis == pytest.approx(0.0, abs=1e-7)
        assert ellipse.area == pytest.approx(0.0, abs=1e-6)
        assert not math.isnan(ellipse.semi_minor_axis)


class TestDegenerateInput:
    """Fewer than two samples give the empty sentinel."""

    def test_no_samples(self):
        ellipse = build_confidence_ellipse([])

        assert ellipse.is_empty
        assert ellipse.area == 0.0
        assert ellipse.sample_count == 0

    def test_single_sample(self):
        ellipse = build_confidence_ellipse([Sample(time=0, x=3, y=4)])

        assert ellipse.is_empty
        assert ellipse.area == 0.0
        assert ellipse.mean == Vector2(3.0, 4.0)

    def test_identical_samples(self):
        samples = [Sample(time=i, x=1.0, y=1.0) for i in range(5)]
        ellipse = build_confidence_ellipse(samples)

        assert ellipse.area == 0.0
        assert ellipse.semi_major_axis == 0.0

    def test_empty_ellipse_points_at_origin(self):
        points = EllipseResult.empty().get_ellipse_points(8)

        assert len(points) == 8
        assert all(p == Vector2(0.0, 0.0) for p in points)


class TestEllipsePoints:
    """Test boundary point sampling."""

    @pytest.mark.parametrize("count", [1, 3, 4, 64, 361])
    def test_point_count(self, reference_ellipse, count):
        assert len(reference_ellipse.get_ellipse_points(count)) == count

    @pytest.mark.parametrize("count", [0, -1, -100])
    def test_invalid_count_returns_empty(self, reference_ellipse, count, caplog):
        with caplog.at_level(logging.ERROR):
            points = reference_ellipse.get_ellipse_points(count)

        assert points == []
        assert str(count) in caplog.text

    def test_first_point_on_major_axis(self, reference_ellipse):
        first = reference_ellipse.get_ellipse_points(16)[0]
        major = reference_ellipse.eigenvectors[0]
        scale = math.sqrt(CHI) * reference_ellipse.semi_major_axis

        assert first.x == pytest.approx(scale * major.x)
        assert first.y == pytest.approx(scale * major.y)

    def test_quarter_turn_on_minor_axis(self, reference_ellipse):
        points = reference_ellipse.get_ellipse_points(4)
        minor = reference_ellipse.eigenvectors[1]
        scale = math.sqrt(CHI) * reference_ellipse.semi_minor_axis

        assert points[1].x == pytest.approx(scale * minor.x)
        assert points[1].y == pytest.approx(scale * minor.y)
        assert points[2].x == pytest.approx(-points[0].x)
        assert points[2].y == pytest.approx(-points[0].y)

    def test_points_lie_on_boundary(self, reference_ellipse):
        major, minor = reference_ellipse.eigenvectors
        for p in reference_ellipse.get_ellipse_points(50):
            u = (p.x * major.x + p.y * major.y) / reference_ellipse.semi_major_axis
            v = (p.x * minor.x + p.y * minor.y) / reference_ellipse.semi_minor_axis
            assert u * u + v * v == pytest.approx(CHI)

    def test_repeated_calls_are_identical(self, reference_ellipse):
        assert reference_ellipse.get_ellipse_points(33) == (
            reference_ellipse.get_ellipse_points(33)
        )

    def test_centered_points_shift_by_mean(self, reference_ellipse):
        raw = reference_ellipse.get_ellipse_points(12)
        centered = get_ellipse_points(reference_ellipse, 12, centered=True)

        for a, b in zip(raw, centered):
            assert b.x == pytest.approx(a.x + 1.0)
            assert b.y == pytest.approx(a.y + 2.0)

    def test_points_evenly_spaced(self):
        circle = EllipseResult(
            area=calculate_ellipse_area(1.0, 1.0),
            semi_major_axis=1.0,
            semi_minor_axis=1.0,
            eigenvectors=(UNIT_X, UNIT_Y),
            mean=Vector2(0.0, 0.0),
            sample_count=10,
        )
        points = circle.get_ellipse_points(10)
        gaps = [
            distance(points[i], points[(i + 1) % len(points)])
            for i in range(len(points))
        ]

        assert np.allclose(gaps, gaps[0])
