"""
Pseudo-random sequence generators backed by numpy's Generator API.
"""

from typing import Optional

import numpy as np
from numpy.random import Generator, default_rng

from pathgen.core.path import Sample
from pathgen.sequences.base import BaseSequenceGenerator


class PseudoRandomSequenceGenerator(BaseSequenceGenerator):
    """
    Independent standard normal draws, weight 1.0.

    Attributes:
        seed: Seed used to create the RNG (None for OS entropy)
    """

    def __init__(self, dimension: int, seed: Optional[int] = None) -> None:
        super().__init__(dimension)
        self.seed = seed
        self._rng: Generator = default_rng(seed)

    def set_seed(self, seed: int) -> None:
        """Reset RNG (for common random numbers across runs)."""
        self.seed = seed
        self._rng = default_rng(seed)
        self._last = None

    def _draw(self) -> Sample[np.ndarray]:
        return Sample(self._rng.standard_normal(self._dimension), 1.0)


class UniformRandomSequenceGenerator(BaseSequenceGenerator):
    """Independent uniform draws on [0, 1), weight 1.0."""

    def __init__(self, dimension: int, seed: Optional[int] = None) -> None:
        super().__init__(dimension)
        self.seed = seed
        self._rng: Generator = default_rng(seed)

    def set_seed(self, seed: int) -> None:
        self.seed = seed
        self._rng = default_rng(seed)
        self._last = None

    def _draw(self) -> Sample[np.ndarray]:
        return Sample(self._rng.random(self._dimension), 1.0)
