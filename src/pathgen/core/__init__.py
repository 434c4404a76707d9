"""Core containers: time grid, paths, weighted samples and errors."""

from pathgen.core.errors import (
    PathGenerationError,
    ConfigurationError,
    DimensionMismatchError,
    TypeMismatchError,
    StateError,
)
from pathgen.core.time_grid import TimeGrid
from pathgen.core.path import Path, Sample

__all__ = [
    "PathGenerationError",
    "ConfigurationError",
    "DimensionMismatchError",
    "TypeMismatchError",
    "StateError",
    "TimeGrid",
    "Path",
    "Sample",
]
