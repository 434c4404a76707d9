"""
Path and weighted sample containers.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar
import copy

import numpy as np

from pathgen.core.time_grid import TimeGrid

T = TypeVar("T")


class Path:
    """
    Single discretized realization of a process, aligned with a time grid.

    values[i] is the process value at time_grid[i]. The grid is referenced,
    not copied.
    """

    def __init__(self, time_grid: TimeGrid, values: Optional[np.ndarray] = None) -> None:
        self.time_grid = time_grid
        if values is None:
            self.values = np.zeros(time_grid.size(), dtype=np.float64)
        else:
            self.values = np.asarray(values, dtype=np.float64)
            if self.values.shape != (time_grid.size(),):
                raise ValueError(
                    f"Path values shape {self.values.shape} doesn't match "
                    f"time grid size {time_grid.size()}"
                )

    def length(self) -> int:
        return len(self.values)

    def time(self, i: int) -> float:
        """Time of the i-th path point."""
        return self.time_grid[i]

    def front(self) -> float:
        return float(self.values[0])

    def back(self) -> float:
        return float(self.values[-1])

    def copy(self) -> "Path":
        return Path(self.time_grid, self.values.copy())

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, i: int) -> float:
        return float(self.values[i])

    def __setitem__(self, i: int, value: float) -> None:
        self.values[i] = value

    def __repr__(self) -> str:
        return f"Path({self.values.tolist()})"


@dataclass
class Sample(Generic[T]):
    """
    Value paired with the importance weight attached by its draw source.

    Attributes:
        value: Sampled value (sequence of draws or a Path)
        weight: Importance weight (1.0 for plain pseudo-random sources)
    """

    value: T
    weight: float = 1.0

    def copy(self) -> "Sample[T]":
        """Independent copy that survives the next overwrite of the original."""
        if hasattr(self.value, "copy"):
            return Sample(self.value.copy(), self.weight)
        return Sample(copy.deepcopy(self.value), self.weight)
