"""
Class file for groups of kernels acting in sequence
"""

# Imports
from functools import reduce
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from mhgibbs.core.kernel import KernelBuilder, SteppingKernel
from mhgibbs.core.state import AdaptState


class Group(SteppingKernel):
    """
    Sequential composition of kernels.

    One step of the group is one sweep over its members in order, each
    member starting from the model and log likelihood left by the previous
    one (component-wise Metropolis-within-Gibbs).

    Examples:
        >>> group = Group([x_kernel, y_kernel])
        >>> draws = group.sample(rng, Model(x=0.0, y=0.0), size=10)
    """

    def __init__(self, kernels: Sequence[SteppingKernel]):
        if len(kernels) == 0:
            raise ValueError("A group needs at least one kernel.")
        self.kernels: List[SteppingKernel] = list(kernels)
        self._cached_model = None
        self._cached_log_likelihood: Optional[float] = None

    def step_with_log_likelihood(self, rng: np.random.Generator, model: Any, log_likelihood: Optional[float] = None) -> Tuple[Any, float]:
        if log_likelihood is None and model is self._cached_model:
            log_likelihood = self._cached_log_likelihood

        for kernel in self.kernels:
            model, log_likelihood = kernel.step_with_log_likelihood(rng, model, log_likelihood)

        self._cached_model = model
        self._cached_log_likelihood = log_likelihood
        return model, log_likelihood

    def draw_prior(self, rng: np.random.Generator, model: Any) -> Any:
        for kernel in self.kernels:
            model = kernel.draw_prior(rng, model)
        return model

    def adapt_enable(self) -> None:
        for kernel in self.kernels:
            kernel.adapt_enable()

    def adapt_disable(self) -> None:
        for kernel in self.kernels:
            kernel.adapt_disable()

    def adapt_state(self) -> AdaptState:
        return reduce(
            lambda state, kernel: state.merge(kernel.adapt_state()),
            self.kernels,
            AdaptState.NOT_APPLICABLE,
        )

    def reset(self) -> None:
        self._cached_model = None
        self._cached_log_likelihood = None
        for kernel in self.kernels:
            kernel.reset()

    def __repr__(self) -> str:
        return f"Group({self.kernels!r})"


class GroupBuilder:
    """Builder for a Group, building each member from its own builder"""

    def __init__(self, builders: Sequence[KernelBuilder]):
        if len(builders) == 0:
            raise ValueError("A group needs at least one kernel builder.")
        self.builders = list(builders)

    def build(self) -> Group:
        return Group([builder.build() for builder in self.builders])
