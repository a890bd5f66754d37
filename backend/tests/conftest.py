"""Shared test configuration and fixtures."""

import pytest

from api.router import limiter


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Each test starts with a fresh in-memory rate-limit window."""
    limiter.reset()
    yield
