from mhgibbs.kernels.binary import (
    BinaryGibbsMetropolis,
    BinaryGibbsMetropolisBuilder,
    BinaryMetropolis,
    BinaryMetropolisBuilder,
)
from mhgibbs.kernels.discrete_srwm import DiscreteSRWM, DiscreteSRWMBuilder
from mhgibbs.kernels.group import Group, GroupBuilder
from mhgibbs.kernels.metropolis import RandomWalkMetropolis, metropolis_accept_reject
from mhgibbs.kernels.srwm import SRWM, SRWMBuilder

__all__ = [
    "BinaryGibbsMetropolis",
    "BinaryGibbsMetropolisBuilder",
    "BinaryMetropolis",
    "BinaryMetropolisBuilder",
    "DiscreteSRWM",
    "DiscreteSRWMBuilder",
    "Group",
    "GroupBuilder",
    "RandomWalkMetropolis",
    "SRWM",
    "SRWMBuilder",
    "metropolis_accept_reject",
]
