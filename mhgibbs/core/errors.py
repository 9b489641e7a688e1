"""
Exceptions raised by the sampling engine.
"""

from typing import Optional


class AdaptationError(ArithmeticError):
    """An adaptation step produced an unusable proposal scale"""


class ChainError(RuntimeError):
    """
    A chain failed while running.

    The exception raised inside the chain is available as `__cause__`.
    """

    def __init__(self, chain: int, message: Optional[str] = None):
        self.chain = chain
        super().__init__(message or f"Chain {chain} failed.")
