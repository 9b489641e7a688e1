"""
Template class file for the stepping kernels
"""

# Imports
from typing import Any, List, Optional, Protocol, Tuple

import numpy as np

from mhgibbs.core.state import AdaptState


class SteppingKernel:
    """
    Base class for MCMC stepping kernels.

    A kernel moves a model one step along its Markov chain. Kernels hold
    mutable adaptation state, so every chain needs its own instance (see
    KernelBuilder).
    """

    def step(self, rng: np.random.Generator, model: Any) -> Any:
        """Take one step from `model`"""
        return self.step_with_log_likelihood(rng, model)[0]

    def step_with_log_likelihood(self, rng: np.random.Generator, model: Any, log_likelihood: Optional[float] = None) -> Tuple[Any, float]:
        """
        Take one step, reusing `log_likelihood` as the score of `model` when given.

        Returns the next model and its log likelihood.
        """
        raise NotImplementedError("Implement step_with_log_likelihood method")

    def draw_prior(self, rng: np.random.Generator, model: Any) -> Any:
        """Redraw the kernel's parameters from their priors"""
        raise NotImplementedError("Implement draw_prior method")

    def multiple_steps(self, rng: np.random.Generator, model: Any, steps: int) -> Any:
        """Take `steps` steps and return the final model"""
        for _ in range(steps):
            model = self.step(rng, model)
        return model

    def sample(self, rng: np.random.Generator, model: Any, size: int, thinning: int = 1) -> List[Any]:
        """Return `size` models, each `thinning` steps after the previous one"""
        if thinning < 1:
            raise ValueError(f"thinning must be >= 1, got {thinning}.")
        draws = []
        for _ in range(size):
            model = self.multiple_steps(rng, model, thinning)
            draws.append(model)
        return draws

    def adapt_enable(self) -> None:
        """Enable adaptation"""
        pass

    def adapt_disable(self) -> None:
        """Disable adaptation"""
        pass

    def adapt_state(self) -> AdaptState:
        return AdaptState.NOT_APPLICABLE

    def reset(self) -> None:
        """Drop cached scores and restore the initial adaptation state"""
        pass


class KernelBuilder(Protocol):
    """
    Protocol for kernel factories.

    A builder holds the immutable configuration of a kernel and returns a
    fresh instance (fresh adaptation state) on every call to build.
    """

    def build(self) -> SteppingKernel:
        """Build a new kernel"""
        raise NotImplementedError("Implement build method")
