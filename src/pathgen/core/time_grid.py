"""
Time grid for path discretization.

A grid is an ordered set of times t[0] = 0 < t[1] < ... < t[n]. Step sizes
are derived from the stored times, never stored separately.
"""

from typing import Iterable, Iterator, Sequence
import bisect
import logging
import math

import numpy as np

from pathgen.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


class TimeGrid:
    """
    Immutable, strictly increasing time grid starting at zero.

    Use ``TimeGrid.uniform`` for equally spaced grids and
    ``TimeGrid.with_mandatory_times`` for grids that must hit given dates.

    Attributes:
        times: Grid times [n + 1] (read-only array)
    """

    def __init__(self, times: Iterable[float]) -> None:
        values = [float(t) for t in times]
        if not values:
            raise ConfigurationError("Time grid requires at least one time")
        for t in values:
            if not math.isfinite(t):
                raise ConfigurationError(f"Time grid times must be finite, got {t}")
        if values[0] < 0.0:
            raise ConfigurationError(f"Negative time in grid: {values[0]}")
        if values[0] != 0.0:
            logger.debug(f"Prepending t=0 to time grid starting at {values[0]}")
            values.insert(0, 0.0)
        for i in range(1, len(values)):
            if values[i] <= values[i - 1]:
                raise ConfigurationError(
                    f"Time grid must be strictly increasing: "
                    f"t[{i - 1}]={values[i - 1]} >= t[{i}]={values[i]}"
                )

        self._times = np.array(values, dtype=np.float64)
        self._times.flags.writeable = False
        self._dt = np.diff(self._times)
        self._dt.flags.writeable = False

    @classmethod
    def uniform(cls, length: float, steps: int) -> "TimeGrid":
        """
        Build an equally spaced grid over [0, length].

        Args:
            length: Time horizon (> 0)
            steps: Number of steps (>= 1)

        Returns:
            TimeGrid with steps + 1 points
        """
        if steps < 1:
            raise ConfigurationError(f"Number of steps must be >= 1, got {steps}")
        if not (length > 0.0 and math.isfinite(length)):
            raise ConfigurationError(f"Time grid length must be positive, got {length}")

        dt = length / steps
        times = [dt * i for i in range(steps)]
        times.append(float(length))
        return cls(times)

    @classmethod
    def with_mandatory_times(cls, times: Sequence[float], steps: int) -> "TimeGrid":
        """
        Build a grid over [0, max(times)] with about ``steps`` equal steps.

        Every mandatory time becomes a grid point; each interval between
        consecutive mandatory times is split into as many equal sub-steps as
        the nominal step size calls for (at least one).
        """
        if steps < 1:
            raise ConfigurationError(f"Number of steps must be >= 1, got {steps}")
        mandatory = sorted(set(float(t) for t in times))
        if not mandatory:
            raise ConfigurationError("At least one mandatory time is required")
        if not all(math.isfinite(t) for t in mandatory):
            raise ConfigurationError(f"Mandatory times must be finite, got {mandatory}")
        if mandatory[0] < 0.0:
            raise ConfigurationError(f"Negative time in grid: {mandatory[0]}")
        if mandatory[0] != 0.0:
            mandatory.insert(0, 0.0)
        if len(mandatory) == 1:
            raise ConfigurationError("Mandatory times must include a positive time")

        last = mandatory[-1]
        nominal_dt = last / steps

        grid = [0.0]
        for start, end in zip(mandatory[:-1], mandatory[1:]):
            n_sub = max(int(round((end - start) / nominal_dt)), 1)
            sub_dt = (end - start) / n_sub
            grid.extend(start + sub_dt * k for k in range(1, n_sub))
            grid.append(end)
        return cls(grid)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------

    @property
    def times(self) -> np.ndarray:
        return self._times

    @property
    def steps(self) -> np.ndarray:
        """Step sizes dt[i] = t[i+1] - t[i]."""
        return self._dt

    def size(self) -> int:
        """Number of grid points (steps + 1)."""
        return len(self._times)

    def dt(self, i: int) -> float:
        """Step size between t[i] and t[i+1]."""
        return float(self._dt[i])

    def front(self) -> float:
        return float(self._times[0])

    def back(self) -> float:
        return float(self._times[-1])

    def index(self, t: float) -> int:
        """Index of an exact grid time."""
        i = self.closest_index(t)
        if not math.isclose(self._times[i], t, rel_tol=1e-12, abs_tol=1e-14):
            raise ValueError(f"Time {t} is not on the grid (closest is {self._times[i]})")
        return i

    def closest_index(self, t: float) -> int:
        """Index of the grid time closest to t (ties go to the later point)."""
        values = self._times
        i = bisect.bisect_left(values, t)
        if i == 0:
            return 0
        if i == len(values):
            return len(values) - 1
        if t - values[i - 1] < values[i] - t:
            return i - 1
        return i

    def __len__(self) -> int:
        return len(self._times)

    def __getitem__(self, i: int) -> float:
        return float(self._times[i])

    def __iter__(self) -> Iterator[float]:
        return (float(t) for t in self._times)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeGrid):
            return NotImplemented
        return np.array_equal(self._times, other._times)

    def __repr__(self) -> str:
        return f"TimeGrid(size={self.size()}, end={self.back()})"
