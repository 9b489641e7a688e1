"""
Tests for the random walk proposals
"""

import math

import numpy as np
import pytest

from mhgibbs.proposals.bitflipproposal import BitFlipProposal, flip_bit, flip_probability
from mhgibbs.proposals.gaussianproposal import GaussianRandomWalk
from mhgibbs.proposals.geometricproposal import INT64_MAX, INT64_MIN, SignedGeometricRandomWalk, geometric_p


# --------------------------------------------------
# GaussianRandomWalk
# --------------------------------------------------
def test_gaussian_scalar(rng):
    proposal = GaussianRandomWalk()
    draws = np.array([proposal.sample(3.0, 2.0, rng) for _ in range(5000)])

    assert abs(draws.mean() - 3.0) < 0.15
    assert abs(draws.std() - 2.0) < 0.15


def test_gaussian_scalar_invalid_scale(rng):
    with pytest.raises(ValueError):
        GaussianRandomWalk().sample(0.0, 0.0, rng)


def test_gaussian_vector(rng):
    proposal = GaussianRandomWalk()
    cov = np.array([[1.0, 0.8], [0.8, 1.0]])
    draws = np.array([proposal.sample(np.array([1.0, 2.0]), cov, rng) for _ in range(5000)])

    assert draws.shape == (5000, 2)
    np.testing.assert_allclose(draws.mean(axis=0), [1.0, 2.0], atol=0.1)
    np.testing.assert_allclose(np.cov(draws.T), cov, atol=0.1)


# --------------------------------------------------
# SignedGeometricRandomWalk
# --------------------------------------------------
@pytest.mark.parametrize("scale", [0.1, 1.0, 3.0, 50.0])
def test_geometric_p_matches_variance(scale):
    """The step magnitude has variance scale^2"""
    p = geometric_p(scale)
    assert 0.0 < p <= 1.0
    assert (1.0 - p) / p**2 == pytest.approx(scale**2)


def test_geometric_p_unit_scale():
    assert geometric_p(1.0) == pytest.approx((math.sqrt(5.0) - 1.0) / 2.0)


def test_geometric_p_invalid():
    with pytest.raises(ValueError):
        geometric_p(0.0)


def test_geometric_walk_is_symmetric(rng):
    proposal = SignedGeometricRandomWalk()
    steps = np.array([proposal.sample(0, 4.0, rng) for _ in range(10000)])

    assert steps.dtype.kind == "i"
    assert abs(steps.mean()) < 0.2
    assert np.all(np.isin([-1, 0, 1], steps))


def test_geometric_walk_saturates(rng):
    """Steps past the signed 64-bit range clamp instead of wrapping"""
    proposal = SignedGeometricRandomWalk()
    assert proposal.sample(INT64_MAX, 1e6, rng) <= INT64_MAX
    assert proposal.sample(INT64_MIN, 1e6, rng) >= INT64_MIN


def test_geometric_walk_does_not_clamp_inside_range(rng):
    """Large steps from small values are returned as drawn"""
    proposal = SignedGeometricRandomWalk()
    draws = np.array([proposal.sample(0, 100.0, rng) for _ in range(2000)])
    assert draws.min() < -50
    assert draws.max() > 50
    assert np.mean(draws == 0) < 0.05


# --------------------------------------------------
# BitFlipProposal
# --------------------------------------------------
def test_flip_probability():
    assert flip_probability(1.0) == 0.5
    assert flip_probability(0.5) == pytest.approx(1.0 - math.sqrt(0.5))


def test_bit_flip_rate(rng):
    proposal = BitFlipProposal()
    current = np.zeros(1000, dtype=bool)
    proposed = proposal.sample(current, 1.0, rng)

    assert proposed.dtype == bool
    assert abs(proposed.mean() - 0.5) < 0.06
    assert not current.any()


def test_flip_bit_copies():
    current = np.array([True, False, True])
    proposed = flip_bit(current, 1)
    np.testing.assert_array_equal(proposed, [True, True, True])
    np.testing.assert_array_equal(current, [True, False, True])
