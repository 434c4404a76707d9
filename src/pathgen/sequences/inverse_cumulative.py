"""
Gaussian sequences from uniform sequences via the inverse normal CDF.
"""

import numpy as np
from scipy.stats import norm

from pathgen.core.path import Sample
from pathgen.sequences.base import BaseSequenceGenerator, SequenceGenerator

# Clamp to avoid +/-inf at the boundaries
UNIFORM_EPSILON = 1e-10


class InverseCumulativeSequenceGenerator(BaseSequenceGenerator):
    """
    Maps a uniform sequence generator to standard normals.

    The uniform generator's weight is carried through unchanged. Replaying
    returns the stored normals, so the uniform source is never replayed.
    """

    def __init__(self, uniform_generator: SequenceGenerator) -> None:
        super().__init__(uniform_generator.dimension())
        self.uniform_generator = uniform_generator

    def _draw(self) -> Sample[np.ndarray]:
        uniforms = self.uniform_generator.next_sequence()
        clipped = np.clip(uniforms.value, UNIFORM_EPSILON, 1.0 - UNIFORM_EPSILON)
        return Sample(norm.ppf(clipped), uniforms.weight)

    def __repr__(self) -> str:
        return f"InverseCumulativeSequenceGenerator({self.uniform_generator!r})"
