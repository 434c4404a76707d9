"""
pathgen - Monte Carlo sample path generation.

Generates weighted, discretized paths of one-dimensional stochastic processes
over a fixed time grid:
- Direct evolution from pseudo-random or quasi-random draws
- Brownian bridge construction with successive differencing
- Antithetic paths from the same underlying draw

Example:
    >>> from pathgen import PathGenerator, BlackScholesProcess, PseudoRandomSequenceGenerator
    >>> process = BlackScholesProcess(spot=100.0, rate=0.05, volatility=0.2)
    >>> rsg = PseudoRandomSequenceGenerator(dimension=12, seed=42)
    >>> generator = PathGenerator.from_length(process, 1.0, 12, rsg, brownian_bridge=True)
    >>> sample = generator.next()
    >>> mirror = generator.antithetic()
"""

__version__ = "0.1.0"

# Core containers
from pathgen.core import (
    PathGenerationError,
    ConfigurationError,
    DimensionMismatchError,
    TypeMismatchError,
    StateError,
    TimeGrid,
    Path,
    Sample,
)

# Processes
from pathgen.processes import (
    StochasticProcess,
    StochasticProcess1D,
    as_one_dimensional,
    BrownianMotionProcess,
    GeometricBrownianMotionProcess,
    BlackScholesProcess,
    OrnsteinUhlenbeckProcess,
)

# Draw sources
from pathgen.sequences import (
    SequenceGenerator,
    PseudoRandomSequenceGenerator,
    UniformRandomSequenceGenerator,
    SobolSequenceGenerator,
    HaltonSequenceGenerator,
    InverseCumulativeSequenceGenerator,
    FixedSequenceGenerator,
)

# Engines
from pathgen.engines import BrownianBridge, PathGenerator

# Configuration
from pathgen.config import (
    PathGeneratorConfig,
    TimeGridConfig,
    SequenceConfig,
    SequenceType,
    build_path_generator,
    load_path_generator_config,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "PathGenerationError",
    "ConfigurationError",
    "DimensionMismatchError",
    "TypeMismatchError",
    "StateError",
    "TimeGrid",
    "Path",
    "Sample",
    # Processes
    "StochasticProcess",
    "StochasticProcess1D",
    "as_one_dimensional",
    "BrownianMotionProcess",
    "GeometricBrownianMotionProcess",
    "BlackScholesProcess",
    "OrnsteinUhlenbeckProcess",
    # Draw sources
    "SequenceGenerator",
    "PseudoRandomSequenceGenerator",
    "UniformRandomSequenceGenerator",
    "SobolSequenceGenerator",
    "HaltonSequenceGenerator",
    "InverseCumulativeSequenceGenerator",
    "FixedSequenceGenerator",
    # Engines
    "BrownianBridge",
    "PathGenerator",
    # Configuration
    "PathGeneratorConfig",
    "TimeGridConfig",
    "SequenceConfig",
    "SequenceType",
    "build_path_generator",
    "load_path_generator_config",
]
