"""
Class file for model parameters
"""

# Imports
import math
from typing import Any, Callable, Optional

import numpy as np

from mhgibbs.core.distribution import Distribution, as_distribution
from mhgibbs.core.lens import Lens


class Parameter:
    """
    A parameter couples a lens into the model with a prior distribution.

    The prior is either fixed (independent) or generated from the current
    model on every use (dependent), which is how hierarchical priors are
    expressed.

    Attributes:
        lens (Lens): Accessor for the parameter's value inside the model.
        name (str): Human readable name, defaults to the lens name.
    """

    def __init__(self, lens: Lens, prior: Optional[Any] = None, generator: Optional[Callable[[Any], Any]] = None, name: Optional[str] = None):
        if (prior is None) == (generator is None):
            raise ValueError("Exactly one of prior or generator must be given.")
        self.lens = lens
        self._prior = as_distribution(prior) if prior is not None else None
        self._generator = generator
        self.name = name if name is not None else lens.name

    @classmethod
    def independent(cls, prior: Any, lens: Lens, name: Optional[str] = None) -> "Parameter":
        """Parameter with a fixed prior distribution"""
        return cls(lens, prior=prior, name=name)

    @classmethod
    def dependent(cls, generator: Callable[[Any], Any], lens: Lens, name: Optional[str] = None) -> "Parameter":
        """Parameter whose prior is computed from the rest of the model"""
        return cls(lens, generator=generator, name=name)

    @property
    def is_dependent(self) -> bool:
        return self._generator is not None

    def prior(self, model: Any) -> Distribution:
        """Prior distribution in the context of `model`"""
        if self._generator is not None:
            return as_distribution(self._generator(model))
        return self._prior

    def log_prior(self, model: Any, value: Any = None) -> float:
        """
        Log prior density of `value` (defaults to the value held by `model`).

        NaN densities are mapped to -inf so they are rejected like any other
        out-of-support value.
        """
        if value is None:
            value = self.lens.get(model)
        lp = self.prior(model).log_density(value)
        return -math.inf if math.isnan(lp) else lp

    def draw(self, model: Any, rng: np.random.Generator) -> Any:
        """Return a new model with this parameter redrawn from its prior"""
        return self.lens.set(model, self.prior(model).draw(rng))

    def get(self, model: Any) -> Any:
        return self.lens.get(model)

    def set(self, model: Any, value: Any) -> Any:
        return self.lens.set(model, value)

    def __repr__(self) -> str:
        kind = "dependent" if self.is_dependent else "independent"
        return f"Parameter(name={self.name!r}, {kind})"
