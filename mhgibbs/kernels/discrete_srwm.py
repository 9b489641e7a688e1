"""
Class file for the Discrete Symmetric Random Walk Metropolis kernel
"""

# Imports
from typing import Any, Callable

from mhgibbs.core.parameter import Parameter
from mhgibbs.kernels.metropolis import RandomWalkMetropolis
from mhgibbs.proposals.adapters import SimpleAdaptor
from mhgibbs.proposals.geometricproposal import SignedGeometricRandomWalk


class DiscreteSRWM(RandomWalkMetropolis):
    """
    Symmetric random walk Metropolis for integer-valued parameters.

    Steps are symmetrised geometric draws whose spread follows the adapted
    scale. Bounded supports come from the prior; proposals outside it are
    rejected.
    """

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], adaptor: SimpleAdaptor):
        super().__init__(parameter, log_likelihood, SignedGeometricRandomWalk(), adaptor)


class DiscreteSRWMBuilder:
    """Builder for DiscreteSRWM kernels"""

    def __init__(self, parameter: Parameter, log_likelihood: Callable[[Any], float], initial_scale: float = 1.0, adapt_interval: int = 100):
        self.parameter = parameter
        self.log_likelihood = log_likelihood
        self.initial_scale = initial_scale
        self.adapt_interval = adapt_interval
        # Fail at configuration time on invalid settings
        SimpleAdaptor(initial_scale, adapt_interval)

    def build(self) -> DiscreteSRWM:
        adaptor = SimpleAdaptor(self.initial_scale, self.adapt_interval)
        return DiscreteSRWM(self.parameter, self.log_likelihood, adaptor)
