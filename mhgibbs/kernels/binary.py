"""
Kernels for vectors of binary random variables
"""

# Imports
import math
from typing import Any, Callable, Optional, Tuple

import numpy as np

from mhgibbs.core.kernel import SteppingKernel
from mhgibbs.core.parameter import Parameter
from mhgibbs.kernels.metropolis import RandomWalkMetropolis, metropolis_accept_reject
from mhgibbs.proposals.adapters import SimpleAdaptor
from mhgibbs.proposals.bitflipproposal import BitFlipProposal, flip_bit


class BinaryMetropolis(RandomWalkMetropolis):
    """
    Block Metropolis update of a binary vector.

    Every bit is flipped independently with probability 1 - 0.5^scale and
    the whole proposal is accepted or rejected at once.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], adaptor: Optional[SimpleAdaptor] = None):
        super().__init__(parameter, log_likelihood, BitFlipProposal(), adaptor or SimpleAdaptor(0.5, 50))


class BinaryMetropolisBuilder:
    """Builder for BinaryMetropolis kernels"""

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], initial_scale: float = 0.5, adapt_interval: int = 50):
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.initial_scale = initial_scale
        self.adapt_interval = adapt_interval

    def build(self) -> BinaryMetropolis:
        return BinaryMetropolis(self.parameter, self.log_likelihood, SimpleAdaptor(self.initial_scale, self.adapt_interval))


class BinaryGibbsMetropolis(SteppingKernel):
    """
    Single-bit Metropolis sweep over a binary vector.

    Visits the bits in a fresh random order each step; each bit is proposed
    for flipping with probability `transit_p` and the flip is accepted or
    rejected on its own. No adaptation.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], transit_p: float = 0.5):
        if not 0.0 < transit_p <= 1.0:
            raise ValueError(f"transit_p must be in (0, 1], got {transit_p}.")
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.transit_p = transit_p
        self._cached_model = None
        self._cached_log_likelihood: Optional[float] = None

    def step_with_log_likelihood(self, rng: np.random.Generator, model: Any, log_likelihood: Optional[float] = None) -> Tuple[Any, float]:
        if log_likelihood is None:
            if model is self._cached_model:
                log_likelihood = self._cached_log_likelihood
            else:
                log_likelihood = self.log_likelihood(model)

        value = np.asarray(self.parameter.get(model), dtype=bool)
        log_prior = self.parameter.log_prior(model, value)

        for idx in rng.permutation(value.shape[0]):
            if rng.random() >= self.transit_p:
                continue
            proposed_value = flip_bit(value, idx)
            proposed_model = self.parameter.set(model, proposed_value)
            proposed_prior = self.parameter.log_prior(proposed_model, proposed_value)
            if not math.isfinite(proposed_prior):
                continue
            proposed_ll = self.log_likelihood(proposed_model)
            if math.isnan(proposed_ll):
                continue
            update = metropolis_accept_reject(
                rng, (proposed_ll + proposed_prior) - (log_likelihood + log_prior), proposed_value, value
            )
            if update.accepted:
                model, value = proposed_model, proposed_value
                log_likelihood, log_prior = proposed_ll, proposed_prior

        self._cached_model = model
        self._cached_log_likelihood = log_likelihood
        return model, log_likelihood

    def draw_prior(self, rng: np.random.Generator, model: Any) -> Any:
        return self.parameter.draw(model, rng)

    def reset(self) -> None:
        self._cached_model = None
        self._cached_log_likelihood = None


class BinaryGibbsMetropolisBuilder:
    """Builder for BinaryGibbsMetropolis kernels"""

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], transit_p: float = 0.5):
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.transit_p = transit_p

    def build(self) -> BinaryGibbsMetropolis:
        return BinaryGibbsMetropolis(self.parameter, self.log_likelihood, self.transit_p)
