"""Pytest configuration for GCE Disk Claim tests.

Ensures the project root is in sys.path so imports work correctly.
"""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from gce_disk_claim.utils.logger import get_logger  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logger():
    # setup_logging binds handlers to the sys.stdout of the test that called it
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def logger():
    return get_logger()


class FakeClock:
    """Monotonic clock advanced only by its own sleep()."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
