"""
Template class file for prior distributions
"""

# Imports
from typing import Any, Optional, Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class Distribution(Protocol):
    """
    Protocol for the distributions used as priors.

    A distribution must be able to draw a value and score a value. The
    moments are optional and are only used to initialise adaptive proposals.
    """

    def draw(self, rng: np.random.Generator) -> Any:
        """Draw a single value"""
        raise NotImplementedError("Implement draw method")

    def log_density(self, value: Any) -> float:
        """Log density (or log mass) at `value`"""
        raise NotImplementedError("Implement log_density method")

    def mean(self) -> Optional[Any]:
        """Mean of the distribution, None if undefined"""
        return None

    def variance(self) -> Optional[Any]:
        """Variance (or covariance matrix), None if undefined"""
        return None


class ScipyDistribution(Distribution):
    """Adapter exposing a frozen scipy.stats distribution as a Distribution"""

    def __init__(self, frozen: Any):
        self.frozen = frozen
        if hasattr(frozen, "logpdf"):
            self._log_density = frozen.logpdf
        elif hasattr(frozen, "logpmf"):
            self._log_density = frozen.logpmf
        else:
            raise TypeError(f"{type(frozen).__name__} has neither logpdf nor logpmf.")

    def draw(self, rng: np.random.Generator) -> Any:
        value = self.frozen.rvs(random_state=rng)
        if np.ndim(value) == 0:
            return value.item() if isinstance(value, np.generic) else value
        return np.asarray(value)

    def log_density(self, value: Any) -> float:
        return float(self._log_density(value))

    def log_densities(self, values: Any) -> np.ndarray:
        """Elementwise log density over an array of values"""
        return np.asarray(self._log_density(values), dtype=float)

    def mean(self) -> Optional[Any]:
        # Multivariate frozen distributions expose moments as attributes
        mean = self.frozen.mean() if callable(self.frozen.mean) else self.frozen.mean
        return _finite_or_none(mean)

    def variance(self) -> Optional[Any]:
        if hasattr(self.frozen, "var"):
            return _finite_or_none(self.frozen.var())
        if hasattr(self.frozen, "cov"):
            cov = self.frozen.cov() if callable(self.frozen.cov) else self.frozen.cov
            return _finite_or_none(cov)
        return None

    def __repr__(self) -> str:
        name = getattr(getattr(self.frozen, "dist", None), "name", type(self.frozen).__name__)
        return f"ScipyDistribution({name})"


class IidProduct(Distribution):
    """A vector of `size` independent copies of a scalar distribution"""

    def __init__(self, base: Any, size: int):
        if size < 1:
            raise ValueError(f"size must be >= 1, got {size}.")
        self.base = as_distribution(base)
        self.size = size

    def draw(self, rng: np.random.Generator) -> np.ndarray:
        return np.array([self.base.draw(rng) for _ in range(self.size)])

    def log_density(self, value: Any) -> float:
        value = np.asarray(value)
        if value.shape != (self.size,):
            return -np.inf
        if isinstance(self.base, ScipyDistribution):
            return float(np.sum(self.base.log_densities(value)))
        return float(sum(self.base.log_density(v) for v in value))

    def mean(self) -> Optional[np.ndarray]:
        mean = self.base.mean()
        return None if mean is None else np.full(self.size, mean, dtype=float)

    def variance(self) -> Optional[np.ndarray]:
        variance = self.base.variance()
        return None if variance is None else variance * np.eye(self.size)


def _finite_or_none(value: Any) -> Optional[Any]:
    arr = np.asarray(value, dtype=float)
    if not np.all(np.isfinite(arr)):
        return None
    return float(arr) if arr.ndim == 0 else arr


def as_distribution(obj: Any) -> Distribution:
    """
    Coerce `obj` to a Distribution.

    Objects implementing `draw` and `log_density` are returned unchanged,
    frozen scipy.stats distributions are wrapped in ScipyDistribution.
    """
    if hasattr(obj, "draw") and hasattr(obj, "log_density"):
        return obj
    if hasattr(obj, "rvs"):
        return ScipyDistribution(obj)
    raise TypeError(
        f"Cannot use {type(obj).__name__} as a distribution: expected draw/log_density "
        "or a frozen scipy.stats distribution."
    )
