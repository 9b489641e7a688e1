"""
Driver for a single chain: warm-up with adaptation, then frozen sampling.
"""

import logging
from typing import Any, List, Optional

import numpy as np

from mhgibbs.core.kernel import SteppingKernel
from mhgibbs.samplers.config import RunnerConfig


def draw_chain(kernel: SteppingKernel, init_model: Any, rng: np.random.Generator, config: RunnerConfig, logger: Optional[logging.Logger] = None, chain: int = 0) -> List[Any]:
    """
    Run one chain.

    Parameters:
    ----------
        kernel: Kernel instance owned by this chain.
        init_model: Starting model.
        rng: Random number generator owned by this chain.
        config: Run configuration.
        logger: Logger for progress messages.
        chain: Chain index used in log messages.

    Returns:
    -------
        draws (list): `config.draws` models, each `config.thinning` steps
        apart, preceded by every warm-up model if `config.keep_warm_up`.
    """
    interval = config.progress_interval
    total = config.steps_per_chain
    n_step = 0

    def _progress() -> None:
        if logger is not None and interval is not None and n_step % interval == 0:
            logger.info("Chain %d: step %d/%d", chain, n_step, total)

    # Warm up
    kernel.adapt_enable()
    warm_up_draws = []
    model = init_model
    for _ in range(config.warm_up):
        model = kernel.step(rng, model)
        n_step += 1
        _progress()
        if config.keep_warm_up:
            warm_up_draws.append(model)
    kernel.adapt_disable()

    if logger is not None:
        logger.debug("Chain %d: warm-up finished, adaptation %s", chain, kernel.adapt_state().value)

    # Draws from the frozen kernel
    draws = []
    for _ in range(config.draws):
        for _ in range(config.thinning):
            model = kernel.step(rng, model)
            n_step += 1
            _progress()
        draws.append(model)

    return warm_up_draws + draws
