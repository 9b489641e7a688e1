"""Adaptive Metropolis-within-Gibbs sampling for user-defined models."""

from mhgibbs.core.distribution import Distribution, IidProduct, ScipyDistribution, as_distribution
from mhgibbs.core.errors import AdaptationError, ChainError
from mhgibbs.core.kernel import KernelBuilder, SteppingKernel
from mhgibbs.core.lens import Lens, make_lens
from mhgibbs.core.parameter import Parameter
from mhgibbs.core.state import AdaptState, MetropolisUpdate
from mhgibbs.kernels import (
    SRWM,
    BinaryGibbsMetropolis,
    BinaryGibbsMetropolisBuilder,
    BinaryMetropolis,
    BinaryMetropolisBuilder,
    DiscreteSRWM,
    DiscreteSRWMBuilder,
    Group,
    GroupBuilder,
    SRWMBuilder,
    metropolis_accept_reject,
)
from mhgibbs.samplers import Runner, RunnerConfig, draw_chain

__version__ = "0.1.0"

__all__ = [
    "AdaptState",
    "AdaptationError",
    "BinaryGibbsMetropolis",
    "BinaryGibbsMetropolisBuilder",
    "BinaryMetropolis",
    "BinaryMetropolisBuilder",
    "ChainError",
    "DiscreteSRWM",
    "DiscreteSRWMBuilder",
    "Distribution",
    "Group",
    "GroupBuilder",
    "IidProduct",
    "KernelBuilder",
    "Lens",
    "MetropolisUpdate",
    "Parameter",
    "Runner",
    "RunnerConfig",
    "SRWM",
    "SRWMBuilder",
    "ScipyDistribution",
    "SteppingKernel",
    "as_distribution",
    "draw_chain",
    "make_lens",
    "metropolis_accept_reject",
]
