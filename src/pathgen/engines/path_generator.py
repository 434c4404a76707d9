"""
Monte Carlo path generator for one-dimensional processes.

Features:
- Direct evolution from raw draws via process.evolve
- Brownian bridge construction with successive differencing
- Antithetic paths replaying the last draw negated
- Single reusable path buffer (one generator per worker)
"""

from typing import Optional
import logging

import numpy as np

from pathgen.core.errors import DimensionMismatchError
from pathgen.core.path import Path, Sample
from pathgen.core.time_grid import TimeGrid
from pathgen.engines.brownian_bridge import BrownianBridge
from pathgen.processes.base import StochasticProcess, as_one_dimensional
from pathgen.sequences.base import SequenceGenerator

logger = logging.getLogger(__name__)


class PathGenerator:
    """
    Generates weighted sample paths of a 1-D process using a sequence generator.

    ``next()`` and ``antithetic()`` return the generator's own buffer,
    overwritten in place on every call: the returned sample is only valid
    until the next call on the same instance. Use ``Sample.copy()`` to keep
    a path. Instances are not safe for concurrent use.

    The process and time grid are referenced, not copied, and must not be
    mutated while the generator is in use.

    Args:
        process: Stochastic process (must be one-dimensional)
        time_grid: Grid of n + 1 times
        generator: Draw source of dimension n
        brownian_bridge: Build paths via Brownian bridge construction
    """

    def __init__(
        self,
        process: StochasticProcess,
        time_grid: TimeGrid,
        generator: SequenceGenerator,
        brownian_bridge: bool = False
    ) -> None:
        self._brownian_bridge = brownian_bridge
        self._generator = generator
        self._dimension = generator.dimension()
        self._time_grid = time_grid
        self._process = as_one_dimensional(process)
        self._next: Sample[Path] = Sample(Path(time_grid), 1.0)

        self._bridge: Optional[BrownianBridge] = None
        if brownian_bridge:
            self._bridge = BrownianBridge(self._process, time_grid, generator)

        expected = time_grid.size() - 1
        if self._dimension != expected:
            raise DimensionMismatchError(self._dimension, expected)

        logger.debug(
            f"PathGenerator ready: dimension={self._dimension}, "
            f"horizon={self._time_grid.back()}, brownian_bridge={self._brownian_bridge}"
        )

    @classmethod
    def from_length(
        cls,
        process: StochasticProcess,
        length: float,
        steps: int,
        generator: SequenceGenerator,
        brownian_bridge: bool = False
    ) -> "PathGenerator":
        """
        Build a generator over an equally spaced grid of ``steps`` steps on [0, length].
        """
        return cls(process, TimeGrid.uniform(length, steps), generator, brownian_bridge)

    # ------------------------------------------------------------------
    # Inspectors
    # ------------------------------------------------------------------

    def size(self) -> int:
        """Number of draws consumed per path (= number of time steps)."""
        return self._dimension

    def time_grid(self) -> TimeGrid:
        return self._time_grid

    @property
    def process(self) -> StochasticProcess:
        return self._process

    @property
    def brownian_bridge(self) -> bool:
        return self._brownian_bridge

    # ------------------------------------------------------------------
    # Path production
    # ------------------------------------------------------------------

    def next(self) -> Sample[Path]:
        """Path built from a fresh draw."""
        return self._produce(False)

    def antithetic(self) -> Sample[Path]:
        """
        Mirror path of the most recent ``next()``.

        Replays the same draw with its sign flipped at the point of use.
        Calling it before any ``next()`` raises StateError from the draw source.
        """
        return self._produce(True)

    def _produce(self, antithetic: bool) -> Sample[Path]:
        if self._bridge is not None:
            return self._produce_bridge(antithetic)
        return self._produce_direct(antithetic)

    def _produce_direct(self, antithetic: bool) -> Sample[Path]:
        generator = self._generator
        sequence = generator.last_sequence() if antithetic else generator.next_sequence()

        self._next.weight = sequence.weight

        draws = sequence.value
        if antithetic:
            draws = -draws

        process = self._process
        grid = self._time_grid
        path = self._next.value.values

        # starting point for process value
        path[0] = process.x0()

        for i in range(1, len(path)):
            path[i] = process.evolve(grid[i - 1], path[i - 1], grid.dt(i - 1), draws[i - 1])

        return self._next

    def _produce_bridge(self, antithetic: bool) -> Sample[Path]:
        bridge = self._bridge
        sequence = bridge.last() if antithetic else bridge.next()

        self._next.weight = sequence.weight

        # diffusion[0] = s[0], diffusion[i] = s[i] - s[i-1]; negated after differencing
        diffusion = np.diff(sequence.value, prepend=0.0)
        if antithetic:
            diffusion = -diffusion

        process = self._process
        grid = self._time_grid
        path = self._next.value.values

        path[0] = process.x0()

        for i in range(1, len(path)):
            t = grid[i - 1]
            dt = grid.dt(i - 1)
            path[i] = process.apply(process.expectation(t, path[i - 1], dt), diffusion[i - 1])

        return self._next
