"""
Gaussian random walk proposals for MCMC sampling
"""

from typing import Any

import numpy as np

from mhgibbs.core.proposal import ProposalProtocol


class GaussianRandomWalk(ProposalProtocol):
    """
    Random walk proposal centered at current value.

    For scalars `scale` is the standard deviation of the step, for vectors it
    is the covariance matrix of the step.
    """

    def sample(self, current: Any, scale: Any, rng: np.random.Generator) -> Any:
        if np.ndim(current) == 0:
            if not scale > 0:
                raise ValueError(f"Cannot propose with scale {scale!r} <= 0.")
            return float(rng.normal(float(current), float(scale)))
        current = np.asarray(current, dtype=float)
        return rng.multivariate_normal(current, np.asarray(scale, dtype=float), method="cholesky")
