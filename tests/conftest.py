"""Shared fixtures for pathweaver tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """A seeded random stream so stochastic tests are repeatable."""
    return np.random.default_rng(12345)
