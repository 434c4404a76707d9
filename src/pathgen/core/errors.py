"""
Exception hierarchy for path generation.

Construction problems derive from ValueError, usage problems from
RuntimeError, so callers that only know the builtins still catch them.
"""

from typing import Optional


class PathGenerationError(Exception):
    """Base class for all pathgen errors."""


class ConfigurationError(PathGenerationError, ValueError):
    """Invalid construction-time configuration."""


class DimensionMismatchError(ConfigurationError):
    """
    Draw-source dimensionality does not match the number of time steps.

    Attributes:
        dimension: Dimensionality reported by the sequence generator
        expected: Number of evolution steps on the time grid
    """

    def __init__(self, dimension: int, expected: int) -> None:
        self.dimension = dimension
        self.expected = expected
        super().__init__(
            f"sequence generator dimensionality ({dimension}) "
            f"!= time steps ({expected})"
        )


class TypeMismatchError(ConfigurationError, TypeError):
    """The supplied process does not provide the one-dimensional interface."""

    def __init__(self, process_type: str, size: Optional[int] = None) -> None:
        self.process_type = process_type
        self.size = size
        detail = f" with {size} state variables" if size is not None else ""
        super().__init__(
            f"one-dimensional process required, got {process_type}{detail}"
        )


class StateError(PathGenerationError, RuntimeError):
    """Operation called in a state where it is not defined."""
