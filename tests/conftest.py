"""Test configuration and fixtures."""

import pytest

from tests.factories import FixedClock


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to a known instant."""
    return FixedClock()
