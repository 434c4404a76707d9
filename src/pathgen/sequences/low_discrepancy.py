"""
Low-discrepancy (quasi-random) uniform sequence generators.

Points come from scipy.stats.qmc engines and are fetched in blocks whose
size is a power of two, which keeps Sobol' balance properties per block.
"""

from typing import Optional
import logging

import numpy as np
from scipy.stats import qmc

from pathgen.core.errors import ConfigurationError
from pathgen.core.path import Sample
from pathgen.sequences.base import BaseSequenceGenerator

logger = logging.getLogger(__name__)

# Sobol' direction numbers shipped with scipy
MAX_SOBOL_DIMENSION = 21201


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def _check_dimension(dimension: int) -> None:
    if dimension < 1:
        raise ConfigurationError(f"Sequence dimension must be >= 1, got {dimension}")


class _QMCSequenceGenerator(BaseSequenceGenerator):
    """Serves single points from blocks drawn out of a scipy QMC engine."""

    def __init__(self, dimension: int, engine: qmc.QMCEngine, block_size: int) -> None:
        super().__init__(dimension)
        if not _is_power_of_two(block_size):
            raise ConfigurationError(f"block_size must be a power of two, got {block_size}")
        self.block_size = block_size
        self._engine = engine
        self._block: Optional[np.ndarray] = None
        self._position = 0

    def _draw(self) -> Sample[np.ndarray]:
        if self._block is None or self._position >= len(self._block):
            self._block = self._engine.random(self.block_size)
            self._position = 0
        point = self._block[self._position].copy()
        self._position += 1
        return Sample(point, 1.0)


class SobolSequenceGenerator(_QMCSequenceGenerator):
    """
    Sobol' uniform points in [0, 1)^dimension.

    Args:
        dimension: Number of coordinates per point (<= 21201)
        seed: Seed for scrambling
        scramble: Apply Owen scrambling (unscrambled sequences start at 0)
        skip: Number of initial points to discard
        block_size: Points fetched from the engine at a time
    """

    def __init__(
        self,
        dimension: int,
        seed: Optional[int] = None,
        scramble: bool = True,
        skip: int = 0,
        block_size: int = 1024
    ) -> None:
        _check_dimension(dimension)
        if dimension > MAX_SOBOL_DIMENSION:
            raise ConfigurationError(
                f"Sobol dimension {dimension} exceeds maximum {MAX_SOBOL_DIMENSION}"
            )
        if skip < 0:
            raise ConfigurationError(f"skip must be non-negative, got {skip}")
        engine = qmc.Sobol(d=dimension, scramble=scramble, seed=seed)
        if skip:
            if not _is_power_of_two(skip):
                logger.warning(
                    f"Sobol skip={skip} is not a power of two; "
                    f"balance properties of the sequence are lost"
                )
            engine.fast_forward(skip)
        super().__init__(dimension, engine, block_size)
        self.seed = seed
        self.scramble = scramble
        self.skip = skip


class HaltonSequenceGenerator(_QMCSequenceGenerator):
    """Halton uniform points in [0, 1)^dimension."""

    def __init__(
        self,
        dimension: int,
        seed: Optional[int] = None,
        scramble: bool = True,
        block_size: int = 1024
    ) -> None:
        _check_dimension(dimension)
        engine = qmc.Halton(d=dimension, scramble=scramble, seed=seed)
        super().__init__(dimension, engine, block_size)
        self.seed = seed
        self.scramble = scramble
