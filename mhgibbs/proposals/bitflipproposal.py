"""
Proposals for binary vectors
"""

import numpy as np

from mhgibbs.core.proposal import ProposalProtocol


def flip_probability(scale: float) -> float:
    """Per-bit flip probability 1 - 0.5^scale"""
    return 1.0 - 0.5 ** scale


class BitFlipProposal(ProposalProtocol):
    """Flip each bit independently with probability flip_probability(scale)"""

    def sample(self, current: np.ndarray, scale: float, rng: np.random.Generator) -> np.ndarray:
        current = np.asarray(current, dtype=bool)
        flips = rng.random(current.shape) < flip_probability(scale)
        return np.logical_xor(current, flips)


def flip_bit(current: np.ndarray, index: int) -> np.ndarray:
    """Copy of `current` with bit `index` flipped"""
    proposed = np.array(current, dtype=bool, copy=True)
    proposed[index] = not proposed[index]
    return proposed
