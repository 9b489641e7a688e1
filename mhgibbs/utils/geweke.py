"""
Geweke joint distribution test for sampler correctness.

The test compares two ways of simulating the joint distribution of
parameters and data:

- the marginal-conditional simulator draws parameters from the prior and
  then data given the parameters, independently each time;
- the successive-conditional simulator alternates a kernel step on the
  parameters (given the data) with a fresh draw of the data (given the
  parameters).

If the kernel leaves the posterior invariant both produce the same joint
distribution, so any statistic of the model has the same distribution under
both. Each statistic is compared with a two-sample Kolmogorov-Smirnov test.

Reference: Geweke, J. (2004). Getting it right: joint distribution tests of
posterior simulators. JASA 99(467).
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping

import numpy as np
from scipy import stats

from mhgibbs.core.kernel import KernelBuilder

StatsFn = Callable[[Any], Mapping[str, float]]
ResampleFn = Callable[[Any, np.random.Generator], Any]


@dataclass(frozen=True)
class GewekeConfig:
    """
    Settings for a Geweke test.

    Attributes:
        n_samples (int): Statistics collected per simulator.
        burn_in (int): Initial successive-conditional iterations discarded.
        thinning (int): Iterations per kept successive-conditional sample.
        alpha (float): A statistic fails when its KS p-value is <= alpha.
    """

    n_samples: int = 1000
    burn_in: int = 100
    thinning: int = 1
    alpha: float = 0.001

    def __post_init__(self) -> None:
        errors: List[str] = []
        if self.n_samples < 1:
            errors.append(f"n_samples must be >= 1, got {self.n_samples}")
        if self.burn_in < 0:
            errors.append(f"burn_in must be >= 0, got {self.burn_in}")
        if self.thinning < 1:
            errors.append(f"thinning must be >= 1, got {self.thinning}")
        if not 0.0 < self.alpha < 1.0:
            errors.append(f"alpha must be in (0, 1), got {self.alpha}")
        if errors:
            raise ValueError("Invalid Geweke configuration:\n  " + "\n  ".join(errors))


@dataclass(frozen=True)
class GewekeResult:
    """KS p-value of every statistic and the overall verdict"""

    p_values: Dict[str, float]
    passed: bool


def _collect(stats_list: List[Mapping[str, float]]) -> Dict[str, np.ndarray]:
    return {name: np.array([s[name] for s in stats_list], dtype=float) for name in stats_list[0]}


def marginal_conditional_simulator(config: GewekeConfig, builder: KernelBuilder, init_model: Any, to_stats: StatsFn, resample_data: ResampleFn, rng: np.random.Generator) -> Dict[str, np.ndarray]:
    """Independent prior draws followed by data draws"""
    kernel = builder.build()
    kernel.adapt_disable()

    samples = []
    for _ in range(config.n_samples):
        model = resample_data(kernel.draw_prior(rng, init_model), rng)
        samples.append(to_stats(model))
    return _collect(samples)


def successive_conditional_simulator(config: GewekeConfig, builder: KernelBuilder, init_model: Any, to_stats: StatsFn, resample_data: ResampleFn, rng: np.random.Generator) -> Dict[str, np.ndarray]:
    """Alternating kernel steps on the parameters and data draws"""
    kernel = builder.build()
    kernel.adapt_disable()

    model = resample_data(kernel.draw_prior(rng, init_model), rng)
    for _ in range(config.burn_in):
        model = resample_data(kernel.step(rng, model), rng)

    samples = []
    for _ in range(config.n_samples):
        for _ in range(config.thinning):
            model = resample_data(kernel.step(rng, model), rng)
        samples.append(to_stats(model))
    return _collect(samples)


def geweke_test(config: GewekeConfig, builder: KernelBuilder, init_model: Any, to_stats: StatsFn, resample_data: ResampleFn, rng: np.random.Generator) -> GewekeResult:
    """
    Run both simulators and KS-test every statistic.

    Parameters:
    ----------
        config: Test settings.
        builder: Builds the kernel under test (adaptation is disabled).
        init_model: Template model; parameters are drawn into it from the
            kernel's priors.
        to_stats: Maps a model to named scalar statistics.
        resample_data: Returns the model with its data redrawn given its
            parameters.
        rng: Random number generator.

    Returns:
    -------
        GewekeResult with one p-value per statistic; passed when every
        p-value exceeds config.alpha.
    """
    mcs = marginal_conditional_simulator(config, builder, init_model, to_stats, resample_data, rng)
    scs = successive_conditional_simulator(config, builder, init_model, to_stats, resample_data, rng)

    p_values = {name: float(stats.ks_2samp(mcs[name], scs[name]).pvalue) for name in mcs}
    return GewekeResult(p_values, all(p > config.alpha for p in p_values.values()))
