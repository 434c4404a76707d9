"""Stochastic process models consumed by path generators."""

from pathgen.processes.base import (
    StochasticProcess,
    StochasticProcess1D,
    as_one_dimensional,
)
from pathgen.processes.brownian import (
    BrownianMotionProcess,
    GeometricBrownianMotionProcess,
    BlackScholesProcess,
)
from pathgen.processes.ornstein_uhlenbeck import OrnsteinUhlenbeckProcess

__all__ = [
    "StochasticProcess",
    "StochasticProcess1D",
    "as_one_dimensional",
    "BrownianMotionProcess",
    "GeometricBrownianMotionProcess",
    "BlackScholesProcess",
    "OrnsteinUhlenbeckProcess",
]
