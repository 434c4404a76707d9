"""Path construction engines: Brownian bridge and path generator."""

from pathgen.engines.brownian_bridge import BrownianBridge, cumulative_variances
from pathgen.engines.path_generator import PathGenerator

__all__ = [
    "BrownianBridge",
    "cumulative_variances",
    "PathGenerator",
]
