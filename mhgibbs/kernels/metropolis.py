"""
Class file for the Metropolis-Hastings kernels
"""

# Imports
import logging
import math
from typing import Any, Callable, Optional, Tuple

import numpy as np

from mhgibbs.core.kernel import SteppingKernel
from mhgibbs.core.parameter import Parameter
from mhgibbs.core.proposal import AdapterBase, ProposalProtocol
from mhgibbs.core.state import AdaptState, MetropolisUpdate

logger = logging.getLogger(__name__)


def metropolis_accept_reject(rng: np.random.Generator, log_ratio: float, proposed: Any, current: Any) -> MetropolisUpdate:
    """
    Metropolis accept/reject decision for a symmetric proposal.

    Parameters:
    ----------
        rng: Random number generator.
        log_ratio: log p(proposed) - log p(current).
        proposed: Proposed value.
        current: Current value.

    Returns:
    -------
        MetropolisUpdate holding the next value and min(log_ratio, 0).

    Raises:
    ------
        ValueError: If log_ratio is NaN.
    """
    if math.isnan(log_ratio):
        raise ValueError("Log acceptance ratio is NaN; the current state has no finite score.")

    log_alpha = min(log_ratio, 0.0)
    # u < exp(log_ratio) is ln(u) < log_ratio without log(0)
    if log_alpha == 0.0 or rng.random() < math.exp(log_alpha):
        return MetropolisUpdate(True, proposed, log_alpha)
    return MetropolisUpdate(False, current, log_alpha)


class RandomWalkMetropolis(SteppingKernel):
    """
    Single-parameter random walk Metropolis kernel.

    Proposes a new value for one parameter with a symmetric proposal scaled
    by an adapter, scores it with the prior and the log likelihood, and
    accepts or rejects it. Proposals outside the prior's support are
    rejected without evaluating the likelihood.

    The log likelihood and log prior of the model last returned are cached,
    so consecutive steps evaluate the likelihood once per step.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], proposal: ProposalProtocol, adaptor: AdapterBase):
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.proposal = proposal
        self.adaptor = adaptor
        self._clear_cache()

    def _clear_cache(self) -> None:
        self._cached_model = None
        self._cached_log_likelihood: Optional[float] = None
        self._cached_log_prior: Optional[float] = None

    def _current_scores(self, model: Any, log_likelihood: Optional[float]) -> Tuple[float, float]:
        """Log likelihood and log prior of `model`, reusing the cache when it is valid"""
        cache_valid = model is self._cached_model and (
            log_likelihood is None or log_likelihood == self._cached_log_likelihood
        )
        if cache_valid:
            return self._cached_log_likelihood, self._cached_log_prior

        if log_likelihood is None:
            log_likelihood = self.log_likelihood(model)
        return log_likelihood, self.parameter.log_prior(model)

    def step_with_log_likelihood(self, rng: np.random.Generator, model: Any, log_likelihood: Optional[float] = None) -> Tuple[Any, float]:
        current_value = self.parameter.get(model)
        current_ll, current_prior = self._current_scores(model, log_likelihood)
        current_score = current_ll + current_prior

        proposed_value = self.proposal.sample(current_value, self.adaptor.scale, rng)
        proposed_model = self.parameter.set(model, proposed_value)
        proposed_prior = self.parameter.log_prior(proposed_model, proposed_value)

        # Out of support, reject on the prior alone
        proposed_ll = None
        if math.isfinite(proposed_prior):
            proposed_ll = self.log_likelihood(proposed_model)
            if math.isnan(proposed_ll):
                proposed_ll = -math.inf
            proposed_score = proposed_ll + proposed_prior
        else:
            proposed_score = -math.inf

        update = metropolis_accept_reject(rng, proposed_score - current_score, proposed_value, current_value)
        logger.debug("%s: current score %s, proposed score %s, %s", self.parameter.name, current_score, proposed_score, "accepted" if update.accepted else "rejected")
        self.adaptor.update(update)

        if update.accepted:
            next_model, next_ll, next_prior = proposed_model, proposed_ll, proposed_prior
        else:
            next_model, next_ll, next_prior = model, current_ll, current_prior

        self._cached_model = next_model
        self._cached_log_likelihood = next_ll
        self._cached_log_prior = next_prior
        return next_model, next_ll

    def draw_prior(self, rng: np.random.Generator, model: Any) -> Any:
        return self.parameter.draw(model, rng)

    def adapt_enable(self) -> None:
        self.adaptor.enable()

    def adapt_disable(self) -> None:
        self.adaptor.disable()

    def adapt_state(self) -> AdaptState:
        return self.adaptor.state()

    def reset(self) -> None:
        self._clear_cache()
        self.adaptor.reset()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.parameter.name!r}, scale={self.adaptor.scale!r})"
