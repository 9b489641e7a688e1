"""
Template class file for proposals and their adapters
"""

# Imports
from typing import Any, Protocol

import numpy as np

from mhgibbs.core.state import AdaptState, MetropolisUpdate


class ProposalProtocol(Protocol):
    """
    Protocol for symmetric proposal kernels.

    A proposal draws a candidate centred at the current value, using the
    scale handed out by an adapter.
    """

    def sample(self, current: Any, scale: Any, rng: np.random.Generator) -> Any:
        """Generate candidate value from current value"""
        raise NotImplementedError("Implement sample method")


# Adapter base
class AdapterBase:
    """Base class for proposal scale adaptation strategies"""

    def __init__(self):
        self.enabled = False

    def update(self, update: MetropolisUpdate) -> None:
        """Feed one accept/reject outcome to the adapter"""
        raise NotImplementedError("Subclass must implement update method")

    @property
    def scale(self) -> Any:
        """Current proposal scale"""
        raise NotImplementedError("Subclass must implement scale property")

    def reset(self) -> None:
        """Restore construction-time values and disable adaptation"""
        raise NotImplementedError("Subclass must implement reset method")

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False

    def state(self) -> AdaptState:
        return AdaptState.ENABLED if self.enabled else AdaptState.DISABLED
