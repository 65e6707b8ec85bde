import pytest


def pytest_collection_modifyitems(items):
    """Apply integration marker to all tests in this directory."""
    for item in items:
        if "/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def skip_logging_setup(monkeypatch):
    """Leave logging to pytest instead of the CLI's dictConfig."""
    monkeypatch.setattr("stabilometry.logging_config._logging_configured", True)
