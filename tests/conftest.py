"""
Pytest configuration and fixtures for the analytics engine.
"""

from datetime import datetime

import pytest

from tests.factories import NOW


@pytest.fixture
def now() -> datetime:
    """Fixed reference time for deterministic calendar bucketing."""
    return NOW
