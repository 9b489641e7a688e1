"""
Class file for the multi-chain runner.
"""

import dataclasses
import enum
import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, List, Optional, Union

import numpy as np

from mhgibbs.core.errors import ChainError
from mhgibbs.core.kernel import KernelBuilder
from mhgibbs.samplers.config import RunnerConfig
from mhgibbs.samplers.single_chain import draw_chain
from mhgibbs.utils.logging import chain_context


class InitializationMode(enum.Enum):
    """How each chain obtains its starting model"""

    DRAW_FROM_PRIOR = "draw_from_prior"
    PROVIDED = "provided"


class Runner:
    """
    Runs independent chains of a kernel in parallel.

    Each chain gets its own kernel from the builder and its own random
    generator, seeded from the master generator passed to `run`. Chains run
    on a thread pool; each chain warms up with adaptation enabled and then
    draws with adaptation frozen.

    The configuration methods return new runners and leave this one
    untouched.

    Examples:
        >>> samples = (
        ...     Runner(group_builder)
        ...     .chains(4)
        ...     .warmup(1000)
        ...     .draws(2000)
        ...     .thinning(5)
        ...     .initial_model(Model(switch_point=10, early_mean=3.0, late_mean=1.0))
        ...     .run(rng=0)
        ... )
        >>> len(samples), len(samples[0])
        (4, 2000)

    Attributes:
        builder (KernelBuilder): Builds one kernel per chain.
        config (RunnerConfig): Run settings.
        initialization (InitializationMode): Starting model policy.
        model: The provided starting model, or the template filled in by
            the prior draw.
    """

    def __init__(self, builder: KernelBuilder, config: Optional[RunnerConfig] = None, logger: Optional[logging.Logger] = None):
        self.builder = builder
        self.config = config if config is not None else RunnerConfig()
        self.initialization = InitializationMode.DRAW_FROM_PRIOR
        self.model: Any = None
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    def _replace(self, **changes: Any) -> "Runner":
        runner = Runner(self.builder, self.config, self.logger)
        runner.initialization = self.initialization
        runner.model = self.model
        config_changes = {k: v for k, v in changes.items() if k in RunnerConfig.__dataclass_fields__}
        runner.config = dataclasses.replace(self.config, **config_changes)
        if "initialization" in changes:
            runner.initialization = changes["initialization"]
            runner.model = changes["model"]
        return runner

    def chains(self, n_chains: int) -> "Runner":
        """Number of chains to run"""
        return self._replace(chains=n_chains)

    def warmup(self, steps: int) -> "Runner":
        """Number of adapting steps before drawing"""
        return self._replace(warm_up=steps)

    def draws(self, n_draws: int) -> "Runner":
        """Number of draws per chain"""
        return self._replace(draws=n_draws)

    def thinning(self, thinning: int) -> "Runner":
        """Steps per kept draw"""
        return self._replace(thinning=thinning)

    def keep_warm_up(self) -> "Runner":
        return self._replace(keep_warm_up=True)

    def discard_warm_up(self) -> "Runner":
        return self._replace(keep_warm_up=False)

    def max_workers(self, n_workers: int) -> "Runner":
        """Size of the thread pool"""
        return self._replace(max_workers=n_workers)

    def progress_interval(self, steps: int) -> "Runner":
        """Log progress every `steps` steps"""
        return self._replace(progress_interval=steps)

    def initial_model(self, model: Any) -> "Runner":
        """Start every chain at `model`"""
        return self._replace(initialization=InitializationMode.PROVIDED, model=model)

    def prior_template(self, model: Any) -> "Runner":
        """Start every chain at a prior draw of the kernel's parameters, filled into `model`"""
        return self._replace(initialization=InitializationMode.DRAW_FROM_PRIOR, model=model)

    def _run_chain(self, chain: int, seed: int, results: Dict[int, List[Any]], results_lock: threading.Lock) -> None:
        rng = np.random.default_rng(seed)
        kernel = self.builder.build()

        with chain_context(chain):
            if self.initialization is InitializationMode.PROVIDED:
                init_model = self.model
            else:
                init_model = kernel.draw_prior(rng, self.model)

            self.logger.info("Chain %d: started", chain)
            draws = draw_chain(kernel, init_model, rng, self.config, logger=self.logger, chain=chain)
            self.logger.info("Chain %d: finished with %d draws", chain, len(draws))

        with results_lock:
            results[chain] = draws

    def run(self, rng: Union[None, int, np.random.Generator] = None) -> List[List[Any]]:
        """
        Run the chains.

        Parameters:
        ----------
            rng: Master generator, or a seed for one. Each chain's generator
                is seeded from it, so a fixed master seed and chain count
                reproduce every chain.

        Returns:
        -------
            samples (list): One list of models per chain, in chain order.

        Raises:
        ------
            ValueError: If chains are to start from a prior draw and no
                template model was given.
            ChainError: If any chain raised; the original exception is the
                cause.
        """
        if self.initialization is InitializationMode.DRAW_FROM_PRIOR and self.model is None:
            raise ValueError("Set initial_model() or prior_template() before running.")

        master = np.random.default_rng(rng)
        seed_lock = threading.Lock()
        results_lock = threading.Lock()
        results: Dict[int, List[Any]] = {}
        failures: Dict[int, BaseException] = {}

        with ThreadPoolExecutor(max_workers=self.config.max_workers, thread_name_prefix="mhgibbs-chain") as executor:
            futures = {}
            for chain in range(self.config.chains):
                with seed_lock:
                    seed = int(master.integers(0, 2**63 - 1))
                futures[executor.submit(self._run_chain, chain, seed, results, results_lock)] = chain

            for future in as_completed(futures):
                exc = future.exception()
                if exc is not None:
                    chain = futures[future]
                    self.logger.error("Chain %d failed: %r", chain, exc)
                    failures[chain] = exc

        if failures:
            chain = min(failures)
            raise ChainError(chain, f"Chain {chain} failed: {failures[chain]!r}") from failures[chain]

        return [results[chain] for chain in range(self.config.chains)]
