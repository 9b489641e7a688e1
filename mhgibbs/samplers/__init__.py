from mhgibbs.samplers.config import RunnerConfig
from mhgibbs.samplers.runner import InitializationMode, Runner
from mhgibbs.samplers.single_chain import draw_chain

__all__ = [
    "InitializationMode",
    "Runner",
    "RunnerConfig",
    "draw_chain",
]
