"""
Tests for the Geweke joint distribution test
"""

from dataclasses import dataclass, replace

import numpy as np
import pytest
from scipy import stats

from mhgibbs.core.lens import make_lens
from mhgibbs.core.parameter import Parameter
from mhgibbs.kernels.srwm import SRWMBuilder
from mhgibbs.utils.geweke import (
    GewekeConfig,
    geweke_test,
    marginal_conditional_simulator,
    successive_conditional_simulator,
)

N_OBS = 5


@dataclass(frozen=True)
class Model:
    mu: float
    data: np.ndarray


def resample_data(model, rng):
    return replace(model, data=rng.normal(model.mu, 1.0, size=N_OBS))


def to_stats(model):
    return {"mu": model.mu, "data_mean": float(np.mean(model.data))}


def correct_log_likelihood(model):
    return float(-0.5 * np.sum((model.data - model.mu) ** 2))


def biased_log_likelihood(model):
    return float(-0.5 * np.sum((model.data - model.mu - 1.0) ** 2))


def builder_for(log_likelihood):
    return SRWMBuilder(Parameter.independent(stats.norm(), make_lens("mu")), log_likelihood, variance=0.5)


@pytest.fixture
def init_model():
    return Model(0.0, np.zeros(N_OBS))


@pytest.fixture
def config():
    return GewekeConfig(n_samples=500, burn_in=200, thinning=20, alpha=0.001)


# --------------------------------------------------
# GewekeConfig
# --------------------------------------------------
def test_config_validation():
    with pytest.raises(ValueError) as excinfo:
        GewekeConfig(n_samples=0, thinning=0, alpha=1.5)
    assert "n_samples" in str(excinfo.value)
    assert "thinning" in str(excinfo.value)
    assert "alpha" in str(excinfo.value)


# --------------------------------------------------
# Simulators
# --------------------------------------------------
def test_simulator_output(config, init_model, rng):
    builder = builder_for(correct_log_likelihood)
    mcs = marginal_conditional_simulator(config, builder, init_model, to_stats, resample_data, rng)
    scs = successive_conditional_simulator(config, builder, init_model, to_stats, resample_data, rng)

    for result in (mcs, scs):
        assert set(result) == {"mu", "data_mean"}
        assert all(len(v) == config.n_samples for v in result.values())


def test_marginal_conditional_draws_prior(config, init_model, rng):
    mcs = marginal_conditional_simulator(config, builder_for(correct_log_likelihood), init_model, to_stats, resample_data, rng)
    assert stats.kstest(mcs["mu"], stats.norm().cdf).pvalue > 0.001


# --------------------------------------------------
# geweke_test
# --------------------------------------------------
def test_correct_sampler_passes(config, init_model, retry):
    builder = builder_for(correct_log_likelihood)

    def check(attempt):
        result = geweke_test(config, builder, init_model, to_stats, resample_data, np.random.default_rng(1100 + attempt))
        assert set(result.p_values) == {"mu", "data_mean"}
        assert result.passed, result.p_values

    retry(check)


def test_biased_sampler_fails(config, init_model, rng):
    """A likelihood shifted by one drags the successive-conditional chain away from the prior"""
    result = geweke_test(config, builder_for(biased_log_likelihood), init_model, to_stats, resample_data, rng)
    assert not result.passed
    assert result.p_values["mu"] < 0.001
