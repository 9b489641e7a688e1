"""
Logging helpers for mhgibbs.

Library modules log through plain module loggers. `MhGibbsLogger` is for
applications: it configures a logger whose handlers stamp every record with
the index of the chain that emitted it, so interleaved output from parallel
chains stays readable.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Iterator, Optional

_current_chain: ContextVar[Optional[int]] = ContextVar("mhgibbs_chain", default=None)


@contextmanager
def chain_context(chain: int) -> Iterator[None]:
    """Attribute records logged inside the block to `chain`"""
    token = _current_chain.set(chain)
    try:
        yield
    finally:
        _current_chain.reset(token)


class ChainFilter(logging.Filter):
    """Sets `record.chain` to the active chain index, or "-" outside a chain"""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "chain"):
            chain = _current_chain.get()
            record.chain = "-" if chain is None else chain
        return True


class MhGibbsLogger:
    """Factory for application loggers with chain-aware formatting"""

    _formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)s | %(name)s | chain %(chain)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    @classmethod
    def _add_handler(cls, logger: logging.Logger, handler: logging.Handler) -> None:
        handler.setFormatter(cls._formatter)
        handler.addFilter(ChainFilter())
        logger.addHandler(handler)

    @classmethod
    def get_logger(
        cls,
        name: str = "mhgibbs",
        level: int = logging.INFO,
        log_file: Optional[str] = None,
        propagate: bool = False,
    ) -> logging.Logger:
        """
        Return the logger `name` with a console handler and, optionally, a
        file handler. Repeated calls reuse the existing handlers.
        """
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = propagate

        if not any(type(handler) is logging.StreamHandler for handler in logger.handlers):
            cls._add_handler(logger, logging.StreamHandler())

        if log_file is not None:
            log_path = Path(log_file).resolve()
            if not any(isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path for h in logger.handlers):
                log_path.parent.mkdir(parents=True, exist_ok=True)
                cls._add_handler(logger, logging.FileHandler(log_path))

        return logger
