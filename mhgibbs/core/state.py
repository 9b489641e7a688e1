"""
Adaptation status and Metropolis-Hastings outcome records.

This module provides the AdaptState enum reported by kernels and groups of
kernels, and the MetropolisUpdate dataclass produced by every accept/reject
decision.
"""

import enum
import math
from dataclasses import dataclass
from typing import Any


class AdaptState(enum.Enum):
    """
    Adaptation status of a kernel.

    States of composed kernels are combined with `merge`, which is
    associative and commutative with NOT_APPLICABLE as identity:

    >>> AdaptState.ENABLED.merge(AdaptState.DISABLED)
    <AdaptState.MIXED: 'mixed'>
    >>> AdaptState.NOT_APPLICABLE.merge(AdaptState.ENABLED)
    <AdaptState.ENABLED: 'enabled'>
    """

    ENABLED = "enabled"
    DISABLED = "disabled"
    MIXED = "mixed"
    NOT_APPLICABLE = "not_applicable"

    def merge(self, other: "AdaptState") -> "AdaptState":
        if self is AdaptState.NOT_APPLICABLE:
            return other
        if other is AdaptState.NOT_APPLICABLE:
            return self
        if self is other:
            return self
        return AdaptState.MIXED


@dataclass(frozen=True)
class MetropolisUpdate:
    """
    Outcome of a Metropolis-Hastings accept/reject decision.

    Attributes:
        accepted (bool):
            Whether the proposed value was accepted.

        value (Any):
            The next value of the chain: the proposal if accepted, the
            current value otherwise.

        log_alpha (float):
            Log acceptance probability, min(log ratio, 0).
    """

    accepted: bool
    value: Any
    log_alpha: float

    @property
    def alpha(self) -> float:
        """Acceptance probability"""
        return math.exp(self.log_alpha)

    def __repr__(self) -> str:
        status = "Accepted" if self.accepted else "Rejected"
        return f"{status}({self.value!r}, alpha={self.alpha:.4f})"
