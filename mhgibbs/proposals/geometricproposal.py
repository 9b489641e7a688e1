"""
Integer random walk proposals built from a symmetrised geometric step
"""

import math

import numpy as np

from mhgibbs.core.proposal import ProposalProtocol
from mhgibbs.utils.tools import saturating_add

INT64_MIN = int(np.iinfo(np.int64).min)
INT64_MAX = int(np.iinfo(np.int64).max)


def geometric_p(scale: float) -> float:
    """
    Success probability of the step magnitude for a given proposal scale.

    The magnitude K counts failures before the first success, so
    Var(K) = (1 - p) / p^2. Solving Var(K) = scale^2 for p in (0, 1] gives
    p = (sqrt(4 scale^2 + 1) - 1) / (2 scale^2).
    """
    if not scale > 0:
        raise ValueError(f"Cannot propose with scale {scale!r} <= 0.")
    s2 = scale * scale
    p = (math.sqrt(4.0 * s2 + 1.0) - 1.0) / (2.0 * s2)
    # sqrt cancellation for tiny scales
    return min(max(p, np.finfo(float).tiny), 1.0)


class SignedGeometricRandomWalk(ProposalProtocol):
    """
    Symmetric integer random walk.

    Draws a magnitude from Geometric(geometric_p(scale)) on {0, 1, ...} and
    adds or subtracts it with equal probability. The result saturates at the
    signed 64-bit range instead of wrapping. Support restrictions belong in
    the prior: candidates outside it are rejected by the kernel, which keeps
    the walk symmetric.
    """

    def sample(self, current: int, scale: float, rng: np.random.Generator) -> int:
        # numpy's geometric counts trials, shift to failures
        magnitude = int(rng.geometric(geometric_p(scale))) - 1
        if rng.random() < 0.5:
            magnitude = -magnitude
        return saturating_add(current, magnitude, INT64_MIN, INT64_MAX)
