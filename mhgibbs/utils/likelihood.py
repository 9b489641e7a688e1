"""
Helpers for building log likelihood functions
"""

import math
from typing import Any, Callable, Sequence

import numpy as np

from mhgibbs.core.distribution import ScipyDistribution, as_distribution


def log_likelihood_from_data(data: Sequence[Any], model_to_dist: Callable[[Any], Any]) -> Callable[[Any], float]:
    """
    Build a log likelihood closure over observed data.

    `model_to_dist` maps a model to the distribution of one observation
    (a frozen scipy.stats distribution or a Distribution). The closure sums
    that distribution's log density over `data`, and returns -inf when
    the distribution cannot be built for the model.

    Examples:
        >>> from scipy import stats
        >>> ll = log_likelihood_from_data([2, 3, 2, 1, 1, 3, 2, 4, 3, 4], lambda mean: stats.poisson(mean))
        >>> round(ll(3.0), 10)
        -16.3455203934
    """
    observations = np.asarray(data)

    def log_likelihood(model: Any) -> float:
        try:
            dist = as_distribution(model_to_dist(model))
        except ValueError:
            return -math.inf

        if isinstance(dist, ScipyDistribution):
            # scipy evaluates the whole data set in one call
            ll = float(np.sum(dist.log_densities(observations)))
        else:
            ll = float(sum(dist.log_density(x) for x in observations))
        return -math.inf if math.isnan(ll) else ll

    return log_likelihood
