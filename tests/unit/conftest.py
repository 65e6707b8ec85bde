import pytest

ALGORITHM_MODULES = {
    "test_covariance.py",
    "test_eigen.py",
    "test_ellipse.py",
    "test_sway_metrics.py",
}


def pytest_collection_modifyitems(items):
    """Mark unit tests, and the sway algorithm tests as business logic."""
    for item in items:
        path = str(item.fspath)
        if "/unit/" not in path:
            continue
        item.add_marker(pytest.mark.unit)
        if item.fspath.basename in ALGORITHM_MODULES:
            item.add_marker(pytest.mark.business_logic)
