"""
Brownian bridge path construction.

Turns a batch of independent standard normals into the cumulative values
b[0..n-1] of a Brownian motion observed at the grid's cumulative variances:

    Var(b[i]) = v[i],   v[i] = sum_{j<=i} process.variance(t_j, x0, dt_j)

The terminal value is drawn first and the remaining points are filled by
recursive bisection, so the first draws carry most of the path's variance.
Successive differences b[i] - b[i-1] are independent with variance
v[i] - v[i-1], i.e. exactly the diffusion term of step i.
"""

import logging
import math

import numpy as np

from pathgen.core.errors import ConfigurationError
from pathgen.core.path import Sample
from pathgen.core.time_grid import TimeGrid
from pathgen.processes.base import StochasticProcess1D
from pathgen.sequences.base import SequenceGenerator

logger = logging.getLogger(__name__)


def cumulative_variances(process: StochasticProcess1D, time_grid: TimeGrid) -> np.ndarray:
    """
    Cumulative process variance at each grid point after the first.

    Steps may carry zero variance; the total must be positive.

    Returns:
        Array [time_grid.size() - 1], non-decreasing
    """
    x0 = process.x0()
    steps = time_grid.size() - 1
    variances = np.empty(steps)
    total = 0.0
    for i in range(steps):
        step_variance = process.variance(time_grid[i], x0, time_grid.dt(i))
        if not (step_variance >= 0.0 and math.isfinite(step_variance)):
            raise ConfigurationError(
                f"Brownian bridge requires finite non-negative step variance, "
                f"got {step_variance} for step {i} (t={time_grid[i]})"
            )
        total += step_variance
        variances[i] = total
    if steps and not total > 0.0:
        raise ConfigurationError(
            f"Brownian bridge requires positive total variance, got {total}"
        )
    return variances


class BrownianBridge:
    """
    Brownian bridge adapter over a sequence generator.

    Attributes:
        bridge_index: Grid index filled at construction stage i
        left_index: First unfilled index of the gap bisected at stage i
        right_index: Filled right anchor of that gap
        left_weight: Weight of the left anchor value
        right_weight: Weight of the right anchor value
        std_deviation: Conditional standard deviation at stage i
    """

    def __init__(
        self,
        process: StochasticProcess1D,
        time_grid: TimeGrid,
        generator: SequenceGenerator
    ) -> None:
        self.generator = generator
        self.variances = cumulative_variances(process, time_grid)
        self._size = len(self.variances)
        if self._size < 1:
            raise ConfigurationError("Brownian bridge requires at least one time step")
        self._initialize()

        logger.debug(
            f"Brownian bridge built: size={self._size}, "
            f"terminal variance={self.variances[-1]:.6g}"
        )

    def _initialize(self) -> None:
        """Build the bisection order and interpolation coefficients."""
        n = self._size
        v = self.variances

        self.bridge_index = np.zeros(n, dtype=np.int64)
        self.left_index = np.zeros(n, dtype=np.int64)
        self.right_index = np.zeros(n, dtype=np.int64)
        self.left_weight = np.zeros(n)
        self.right_weight = np.zeros(n)
        self.std_deviation = np.zeros(n)

        # filled[i] != 0 once point i has been assigned a construction stage
        filled = np.zeros(n, dtype=np.int64)

        filled[n - 1] = 1
        self.bridge_index[0] = n - 1
        self.std_deviation[0] = math.sqrt(v[n - 1])

        j = 0
        for i in range(1, n):
            while filled[j]:
                j += 1
            k = j
            while not filled[k]:
                k += 1
            # midpoint of the unfilled gap [j, k-1]
            mid = j + ((k - 1 - j) >> 1)
            filled[mid] = i

            self.bridge_index[i] = mid
            self.left_index[i] = j
            self.right_index[i] = k
            if j != 0:
                span = v[k] - v[j - 1]
                if span > 0.0:
                    self.left_weight[i] = (v[k] - v[mid]) / span
                    self.right_weight[i] = (v[mid] - v[j - 1]) / span
                    self.std_deviation[i] = math.sqrt(
                        (v[mid] - v[j - 1]) * (v[k] - v[mid]) / span
                    )
                else:
                    # no variance across the gap: the point sits on its left anchor
                    self.left_weight[i] = 1.0
            elif v[k] == 0.0:
                # no variance since the origin: the point stays at zero
                pass
            else:
                self.left_weight[i] = (v[k] - v[mid]) / v[k]
                self.right_weight[i] = v[mid] / v[k]
                self.std_deviation[i] = math.sqrt(v[mid] * (v[k] - v[mid]) / v[k])

            j = k + 1
            if j >= n:
                j = 0

    def size(self) -> int:
        return self._size

    def transform(self, draws: np.ndarray) -> np.ndarray:
        """
        Map independent standard normals to cumulative bridge values.

        Args:
            draws: Standard normal draws [size]

        Returns:
            Cumulative values b[0..size-1]
        """
        if len(draws) != self._size:
            raise ValueError(
                f"Bridge expects {self._size} draws, got {len(draws)}"
            )
        bridge = self.bridge_index
        left = self.left_index
        right = self.right_index
        wl = self.left_weight
        wr = self.right_weight
        sd = self.std_deviation

        out = np.empty(self._size)
        out[-1] = sd[0] * draws[0]
        for i in range(1, self._size):
            j = left[i]
            k = right[i]
            mid = bridge[i]
            if j != 0:
                out[mid] = wl[i] * out[j - 1] + wr[i] * out[k] + sd[i] * draws[i]
            else:
                out[mid] = wr[i] * out[k] + sd[i] * draws[i]
        return out

    def next(self) -> Sample[np.ndarray]:
        """Bridge values built from a fresh draw."""
        sequence = self.generator.next_sequence()
        return Sample(self.transform(sequence.value), sequence.weight)

    def last(self) -> Sample[np.ndarray]:
        """Bridge values rebuilt from the generator's last draw."""
        sequence = self.generator.last_sequence()
        return Sample(self.transform(sequence.value), sequence.weight)
