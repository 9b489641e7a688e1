"""
Tests for sequential composition of kernels
"""

from dataclasses import dataclass

import numpy as np
import pytest
from scipy import stats

from mhgibbs.core.lens import make_lens
from mhgibbs.core.parameter import Parameter
from mhgibbs.core.state import AdaptState
from mhgibbs.kernels.binary import BinaryGibbsMetropolisBuilder
from mhgibbs.kernels.group import Group, GroupBuilder
from mhgibbs.kernels.srwm import SRWMBuilder


@dataclass(frozen=True)
class Model:
    x: float
    y: float


class CountingLikelihood:
    """Correlated Gaussian: y | x ~ N(x, 1) on top of the priors"""

    def __init__(self):
        self.calls = 0

    def __call__(self, model):
        self.calls += 1
        return float(stats.norm(model.x, 1.0).logpdf(model.y))


@pytest.fixture
def likelihood():
    return CountingLikelihood()


@pytest.fixture
def builder(likelihood):
    x = Parameter.independent(stats.norm(0.0, 1.0), make_lens("x"))
    y = Parameter.independent(stats.uniform(-50.0, 100.0), make_lens("y"))
    return GroupBuilder([SRWMBuilder(x, likelihood), SRWMBuilder(y, likelihood)])


# --------------------------------------------------
# Construction
# --------------------------------------------------
def test_empty_group():
    with pytest.raises(ValueError):
        Group([])
    with pytest.raises(ValueError):
        GroupBuilder([])


def test_builder_builds_fresh_members(builder):
    a, b = builder.build(), builder.build()
    assert len(a.kernels) == 2
    assert all(ka is not kb for ka, kb in zip(a.kernels, b.kernels))


# --------------------------------------------------
# Stepping
# --------------------------------------------------
def test_likelihood_threaded_through_members(builder, likelihood, rng):
    """After the first evaluation each member scores only its proposal"""
    group = builder.build()
    model = Model(0.0, 0.0)
    n_sweeps = 50
    for _ in range(n_sweeps):
        model = group.step(rng, model)

    assert likelihood.calls == 1 + 2 * n_sweeps


def test_step_returns_matching_likelihood(builder, rng):
    group = builder.build()
    model, ll = group.step_with_log_likelihood(rng, Model(0.3, -0.2))
    for _ in range(20):
        model, ll = group.step_with_log_likelihood(rng, model, ll)
    assert ll == pytest.approx(float(stats.norm(model.x, 1.0).logpdf(model.y)))


def test_joint_target(builder, retry):
    """x ~ N(0, 1) and y | x ~ N(x, 1) give y ~ N(0, 2)"""

    def check(attempt):
        rng = np.random.default_rng(1000 + attempt)
        group = builder.build()
        group.adapt_enable()
        model = group.multiple_steps(rng, Model(0.0, 0.0), 1000)
        group.adapt_disable()
        draws = group.sample(rng, model, 2000, thinning=10)

        ys = [m.y for m in draws]
        xs = [m.x for m in draws]
        assert stats.kstest(ys, stats.norm(0.0, np.sqrt(2.0)).cdf).pvalue > 0.001
        assert stats.kstest(xs, stats.norm().cdf).pvalue > 0.001

    retry(check)


def test_draw_prior(builder, rng):
    model = builder.build().draw_prior(rng, Model(100.0, 100.0))
    assert -50.0 <= model.y <= 50.0
    assert model.x != 100.0


# --------------------------------------------------
# Adaptation
# --------------------------------------------------
def test_adapt_state_merges(builder):
    group = builder.build()
    assert group.adapt_state() is AdaptState.DISABLED

    group.adapt_enable()
    assert group.adapt_state() is AdaptState.ENABLED

    group.kernels[0].adapt_disable()
    assert group.adapt_state() is AdaptState.MIXED

    group.adapt_disable()
    assert group.adapt_state() is AdaptState.DISABLED


def test_adapt_state_ignores_non_adaptive(likelihood):
    x = Parameter.independent(stats.norm(), make_lens("x"))
    bits = Parameter.independent(stats.bernoulli(0.5), make_lens("y"))
    group = Group([BinaryGibbsMetropolisBuilder(bits, likelihood).build()])
    assert group.adapt_state() is AdaptState.NOT_APPLICABLE

    group = Group([SRWMBuilder(x, likelihood).build(), BinaryGibbsMetropolisBuilder(bits, likelihood).build()])
    group.adapt_enable()
    assert group.adapt_state() is AdaptState.ENABLED


def test_reset(builder, rng):
    group = builder.build()
    group.adapt_enable()
    group.multiple_steps(rng, Model(0.0, 0.0), 100)
    group.reset()

    assert group.adapt_state() is AdaptState.DISABLED
    assert all(k.adaptor.step == 0 for k in group.kernels)


# --------------------------------------------------
# Dependent priors
# --------------------------------------------------
@pytest.fixture
def hierarchical_builders():
    """x ~ N(0, 1) and y ~ N(x, 0.5) with a flat likelihood"""
    x = Parameter.independent(stats.norm(0.0, 1.0), make_lens("x"))
    y = Parameter.dependent(lambda m: stats.norm(m.x, 0.5), make_lens("y"))
    return [SRWMBuilder(x, lambda m: 0.0), SRWMBuilder(y, lambda m: 0.0)]


def test_dependent_prior_rescored_after_parent_moves(hierarchical_builders):
    """A sweep reusing cached scores matches one that rescores every member from scratch"""
    group = GroupBuilder(hierarchical_builders).build()
    members = [b.build() for b in hierarchical_builders]

    rng_group = np.random.default_rng(42)
    rng_fresh = np.random.default_rng(42)
    model_group = model_fresh = Model(0.0, 0.0)
    for _ in range(500):
        model_group = group.step(rng_group, model_group)
        for kernel in members:
            kernel.reset()
            model_fresh = kernel.step(rng_fresh, model_fresh)

        assert model_group == model_fresh


def test_dependent_prior_parent_marginal(hierarchical_builders, retry):
    """The parent keeps its own prior while the child follows it"""

    def check(attempt):
        rng = np.random.default_rng(1100 + attempt)
        group = GroupBuilder(hierarchical_builders).build()
        group.adapt_enable()
        model = group.multiple_steps(rng, Model(0.0, 0.0), 1000)
        group.adapt_disable()
        draws = group.sample(rng, model, 2000, thinning=10)

        xs = np.array([m.x for m in draws])
        ys = np.array([m.y for m in draws])
        assert stats.kstest(xs, stats.norm().cdf).pvalue > 0.001
        assert np.corrcoef(xs, ys)[0, 1] > 0.5

    retry(check)
