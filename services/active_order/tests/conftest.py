# services/active_order/tests/conftest.py
"""
Minimal test configuration for active order service tests.
"""

import sys
from pathlib import Path

import pytest


# Configure Python path for testing
def setup_python_path():
    """Set up Python path to allow imports from both service and shared libs."""
    project_root = Path(__file__).parent.parent.parent.parent.absolute()
    service_src = Path(__file__).parent.parent / "src"
    tests_dir = Path(__file__).parent

    paths_to_add = [str(tests_dir), str(service_src), str(project_root)]
    for path in paths_to_add:
        if path not in sys.path:
            sys.path.insert(0, path)


# Set up paths immediately when module is imported
setup_python_path()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Start every test with empty counters."""
    from libs.cart_shared.metrics import Metrics

    Metrics.reset()
    yield
    Metrics.reset()
