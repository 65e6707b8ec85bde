"""Pytest configuration and fixtures for stabilometry tests."""

from pathlib import Path

import pytest

from stabilometry.analysis.types import Sample


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "business_logic: Tests for core business logic and algorithms"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )


@pytest.fixture
def four_samples():
    """Four-sample reference recording with known mean and scatter matrix."""
    return [
        Sample(time=1, x=1, y=1),
        Sample(time=2, x=1, y=2),
        Sample(time=3, x=2, y=1),
        Sample(time=4, x=5, y=-1),
    ]


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temporary directory."""
    config_dir = tmp_path / ".stabilometry"
    monkeypatch.setattr("stabilometry.config.DEFAULT_CONFIG_DIR", config_dir)
    return config_dir / "config.toml"


@pytest.fixture
def sample_file_factory(tmp_path):
    """Factory writing sample sequences to delimited text files."""

    def _write(
        samples: list[Sample],
        name: str = "recording.csv",
        header: bool = True,
        delimiter: str = ",",
    ) -> Path:
        path = tmp_path / name
        lines = [delimiter.join(["time", "x", "y"])] if header else []
        lines.extend(
            delimiter.join(repr(float(v)) for v in (s.time, s.x, s.y))
            for s in samples
        )
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
