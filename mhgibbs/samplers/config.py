"""
Runner configuration.

RunnerConfig is immutable; the fluent Runner methods replace fields and the
new value is validated on construction, so a bad setting fails at the call
that introduced it.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class RunnerConfig:
    """
    Settings for a multi-chain run.

    Attributes:
        chains (int): Number of independent chains. Must be >= 1.
        warm_up (int): Adaptation steps before drawing. Must be >= 0.
        draws (int): Draws kept per chain after warm-up. Must be >= 0.
        thinning (int): Steps per kept draw. Must be >= 1.
        keep_warm_up (bool): Prepend every warm-up step to the output.
        max_workers (Optional[int]): Thread pool size, None lets the
            executor decide.
        progress_interval (Optional[int]): Log chain progress every this
            many steps, None disables progress logging.
    """

    chains: int = 1
    warm_up: int = 1000
    draws: int = 2000
    thinning: int = 1
    keep_warm_up: bool = False
    max_workers: Optional[int] = None
    progress_interval: Optional[int] = None

    def __post_init__(self) -> None:
        errors: List[str] = []

        if self.chains < 1:
            errors.append(f"chains must be >= 1, got {self.chains}")
        if self.warm_up < 0:
            errors.append(f"warm_up must be >= 0, got {self.warm_up}")
        if self.draws < 0:
            errors.append(f"draws must be >= 0, got {self.draws}")
        if self.thinning < 1:
            errors.append(f"thinning must be >= 1, got {self.thinning}")
        if self.max_workers is not None and self.max_workers < 1:
            errors.append(f"max_workers must be >= 1, got {self.max_workers}")
        if self.progress_interval is not None and self.progress_interval < 1:
            errors.append(f"progress_interval must be >= 1, got {self.progress_interval}")

        if errors:
            raise ValueError("Invalid runner configuration:\n  " + "\n  ".join(errors))

    @property
    def steps_per_chain(self) -> int:
        """Total kernel steps taken by one chain"""
        return self.warm_up + self.draws * self.thinning
