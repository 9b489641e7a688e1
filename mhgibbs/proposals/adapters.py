"""
Class file for the proposal adapters
"""

# Imports
import math
from typing import Any, Optional

import numpy as np

from mhgibbs.core.errors import AdaptationError
from mhgibbs.core.proposal import AdapterBase
from mhgibbs.core.state import MetropolisUpdate
from mhgibbs.utils.tools import is_positive_definite, nearest_positive_definite


# Numeric strategies shared by the global adapter
class ScalarOps:
    """Arithmetic for scalar parameters with a scalar scale"""

    @staticmethod
    def copy(value: Any) -> float:
        return float(value)

    @staticmethod
    def delta(value: Any, mean: float) -> float:
        return float(value) - mean

    @staticmethod
    def second_moment(delta: float) -> float:
        return delta * delta

    @staticmethod
    def repair(scale: float) -> float:
        return scale

    @staticmethod
    def is_valid(proposal_scale: float) -> bool:
        return proposal_scale > 0.0 and math.isfinite(proposal_scale)


class CovarianceOps:
    """Arithmetic for vector parameters with a covariance matrix scale"""

    @staticmethod
    def copy(value: Any) -> np.ndarray:
        return np.array(value, dtype=float, copy=True)

    @staticmethod
    def delta(value: Any, mean: np.ndarray) -> np.ndarray:
        return np.asarray(value, dtype=float) - mean

    @staticmethod
    def second_moment(delta: np.ndarray) -> np.ndarray:
        return np.outer(delta, delta)

    @staticmethod
    def repair(scale: np.ndarray) -> np.ndarray:
        scale = (scale + scale.T) / 2
        if is_positive_definite(scale):
            return scale
        try:
            return nearest_positive_definite(scale)
        except np.linalg.LinAlgError as exc:
            raise AdaptationError("Adapted covariance could not be made positive definite.") from exc

    @staticmethod
    def is_valid(proposal_scale: np.ndarray) -> bool:
        return bool(np.all(np.isfinite(proposal_scale))) and is_positive_definite(proposal_scale)


# Concrete Adapters
class GlobalAdaptor(AdapterBase):
    """
    Globally adaptive scaling (Andrieu & Thoms 2008, Algorithm 4).

    Robbins-Monro updates with gain g_k = 0.9 / (k + 1)^0.9 of a log scale
    factor lambda towards the target acceptance rate, and of a running mean and
    variance (covariance for vectors) of the chain. The proposal scale is
    exp(log_lambda) * scale.
    """

    def __init__(self, mean: Any, scale: Any, target_alpha: float = 0.234, ops: Optional[Any] = None):
        super().__init__()
        if ops is None:
            ops = ScalarOps if np.ndim(mean) == 0 else CovarianceOps
        self.ops = ops
        self.target_alpha = target_alpha
        self._initial_mu = ops.copy(mean)
        self._initial_scale = ops.copy(scale)
        if not ops.is_valid(self._initial_scale):
            raise AdaptationError(f"Initial scale must be positive (definite) and finite, got {scale!r}.")
        self._restore()

    def _restore(self) -> None:
        self.log_lambda = 0.0
        self.mu = self.ops.copy(self._initial_mu)
        self.variance = self.ops.copy(self._initial_scale)
        self.step = 0
        self.proposal_scale = self.ops.copy(self._initial_scale)
        self.enabled = False

    def update(self, update: MetropolisUpdate) -> None:
        """Update the scale with the outcome of one Metropolis step"""
        if not self.enabled:
            return

        g = 0.9 / (self.step + 1) ** 0.9
        delta = self.ops.delta(update.value, self.mu)

        log_lambda = self.log_lambda + g * (update.alpha - self.target_alpha)
        mu = self.mu + g * delta
        variance = self.ops.repair(self.variance + g * (self.ops.second_moment(delta) - self.variance))
        proposal_scale = math.exp(log_lambda) * variance

        if not self.ops.is_valid(proposal_scale):
            raise AdaptationError(
                f"Adaptation produced an invalid proposal scale {proposal_scale!r} at step {self.step}."
            )

        self.log_lambda = log_lambda
        self.mu = mu
        self.variance = variance
        self.proposal_scale = proposal_scale
        self.step += 1

    @property
    def scale(self) -> Any:
        return self.proposal_scale

    def reset(self) -> None:
        self._restore()


class SimpleAdaptor(AdapterBase):
    """
    Batch scale adaptation.

    Averages the acceptance probability over `adapt_interval` updates and
    then multiplies the scale by a fixed factor chosen from that average.
    Reference: the tune function of pymc3's Metropolis step method.
    """

    def __init__(self, scale: float = 1.0, adapt_interval: int = 100):
        super().__init__()
        if not (scale > 0.0 and math.isfinite(scale)):
            raise AdaptationError(f"Initial scale must be positive and finite, got {scale!r}.")
        if adapt_interval < 1:
            raise ValueError(f"adapt_interval must be >= 1, got {adapt_interval}.")
        self.initial_scale = float(scale)
        self.adapt_interval = adapt_interval
        self._restore()

    def _restore(self) -> None:
        self.alpha_sum = 0.0
        self.n_updates = 0
        self._scale = self.initial_scale
        self.enabled = False

    def update(self, update: MetropolisUpdate) -> None:
        if not self.enabled:
            return

        self.n_updates += 1
        self.alpha_sum += update.alpha

        if self.n_updates >= self.adapt_interval:
            self._scale *= self.tune_factor(self.alpha_sum / self.n_updates)
            self.n_updates = 0
            self.alpha_sum = 0.0

            if not (self._scale > 0.0 and math.isfinite(self._scale)):
                raise AdaptationError(f"Adaptation produced an invalid proposal scale {self._scale!r}.")

    @staticmethod
    def tune_factor(alpha_mean: float) -> float:
        """Multiplicative scale change for a mean acceptance probability"""
        if alpha_mean < 0.001:
            return 0.01
        elif alpha_mean < 0.05:
            return 0.5
        elif alpha_mean < 0.2:
            return 0.2
        elif alpha_mean > 0.95:
            return 10.0
        elif alpha_mean > 0.75:
            return 2.0
        elif alpha_mean > 0.5:
            return 1.1
        return 1.0

    @property
    def scale(self) -> float:
        return self._scale

    def reset(self) -> None:
        self._restore()
