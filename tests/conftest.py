"""
Shared fixtures for the test suite
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator"""
    return np.random.default_rng(1234)


def _retry(assertion, attempts: int = 3):
    """
    Run a stochastic assertion up to `attempts` times.

    `assertion` is called with the attempt number (use it to vary the seed)
    and the test fails only if every attempt raises AssertionError.
    """
    for attempt in range(attempts):
        try:
            return assertion(attempt)
        except AssertionError:
            if attempt == attempts - 1:
                raise


@pytest.fixture
def retry():
    """Rerun a stochastic assertion a few times before failing"""
    return _retry
