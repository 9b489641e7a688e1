"""
Class file for the Symmetric Random Walk Metropolis kernel
"""

# Imports
from typing import Any, Callable, Optional

import numpy as np

from mhgibbs.core.parameter import Parameter
from mhgibbs.kernels.metropolis import RandomWalkMetropolis
from mhgibbs.proposals.adapters import GlobalAdaptor
from mhgibbs.proposals.gaussianproposal import GaussianRandomWalk


class SRWM(RandomWalkMetropolis):
    """
    Symmetric Random Walk Metropolis for real-valued parameters.

    Scalars are proposed from Gaussian(x, scale), vectors from
    MvGaussian(x, scale) where scale is the adapted covariance.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], adaptor: GlobalAdaptor):
        super().__init__(parameter, log_likelihood, GaussianRandomWalk(), adaptor)


class SRWMBuilder:
    """
    Builder for SRWM kernels.

    Holds the parameter, the log likelihood and the initial adaptation
    values; every call to build returns a kernel with fresh adaptor state.

    Attributes:
        parameter (Parameter): Parameter updated by the kernels.
        log_likelihood (Callable): Log likelihood of the model.
        mean: Initial mean estimate for the adaptor.
        variance: Initial variance (covariance matrix for vectors).
        target_alpha (float): Acceptance rate the adaptor tunes towards.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], mean: Any = 0.0, variance: Any = 1.0, target_alpha: float = 0.234):
        if np.ndim(mean) != 0 and np.ndim(variance) == 0:
            variance = variance * np.eye(np.size(mean))
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.mean = mean
        self.variance = variance
        self.target_alpha = target_alpha
        # Fail at configuration time on an unusable initial scale
        GlobalAdaptor(mean, variance, target_alpha)

    @classmethod
    def from_prior(cls, parameter: Parameter, log_likelihood: Callable[[Any], float], model: Optional[Any] = None, target_alpha: float = 0.234) -> "SRWMBuilder":
        """
        Initialise the adaptor from the prior's mean and variance.

        Dependent priors are evaluated at `model`.

        Raises:
            ValueError: If the prior has no finite mean or variance.
        """
        if parameter.is_dependent and model is None:
            raise ValueError("A model is required to evaluate a dependent prior.")
        prior = parameter.prior(model)
        mean, variance = prior.mean(), prior.variance()
        if mean is None or variance is None:
            raise ValueError(f"Prior of {parameter.name!r} has no finite mean and variance.")
        return cls(parameter, log_likelihood, mean, variance, target_alpha)

    def build(self) -> SRWM:
        return SRWM(self.parameter, self.log_likelihood, GlobalAdaptor(self.mean, self.variance, self.target_alpha))
