"""
Sequence generator interface.

A sequence generator produces weighted batches of ``dimension`` scalars per
call and can replay its most recent batch.
"""

from abc import ABC, abstractmethod
from typing import Optional, Protocol, runtime_checkable

import numpy as np

from pathgen.core.errors import ConfigurationError, StateError
from pathgen.core.path import Sample


@runtime_checkable
class SequenceGenerator(Protocol):
    """Draw source consumed by path generators and Brownian bridges."""

    def dimension(self) -> int:
        ...

    def next_sequence(self) -> Sample[np.ndarray]:
        ...

    def last_sequence(self) -> Sample[np.ndarray]:
        ...


class BaseSequenceGenerator(ABC):
    """
    Common bookkeeping for concrete generators.

    Subclasses implement ``_draw`` returning one weighted batch; this class
    stores it so ``last_sequence`` replays the exact same values. Returned
    arrays are read-only.
    """

    def __init__(self, dimension: int) -> None:
        if dimension < 1:
            raise ConfigurationError(f"Sequence dimension must be >= 1, got {dimension}")
        self._dimension = dimension
        self._last: Optional[Sample[np.ndarray]] = None

    @abstractmethod
    def _draw(self) -> Sample[np.ndarray]:
        """Produce a fresh batch of ``dimension`` values."""
        pass

    def dimension(self) -> int:
        return self._dimension

    def next_sequence(self) -> Sample[np.ndarray]:
        sample = self._draw()
        sample.value.flags.writeable = False
        self._last = sample
        return sample

    def last_sequence(self) -> Sample[np.ndarray]:
        if self._last is None:
            raise StateError(
                f"{type(self).__name__}.last_sequence() called before next_sequence()"
            )
        return self._last

    def __repr__(self) -> str:
        return f"{type(self).__name__}(dimension={self._dimension})"
