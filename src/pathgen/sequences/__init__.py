"""Draw sources: pseudo-random, quasi-random and fixed sequence generators."""

from pathgen.sequences.base import SequenceGenerator, BaseSequenceGenerator
from pathgen.sequences.pseudo_random import (
    PseudoRandomSequenceGenerator,
    UniformRandomSequenceGenerator,
)
from pathgen.sequences.low_discrepancy import (
    SobolSequenceGenerator,
    HaltonSequenceGenerator,
    MAX_SOBOL_DIMENSION,
)
from pathgen.sequences.inverse_cumulative import InverseCumulativeSequenceGenerator
from pathgen.sequences.fixed import FixedSequenceGenerator

__all__ = [
    "SequenceGenerator",
    "BaseSequenceGenerator",
    "PseudoRandomSequenceGenerator",
    "UniformRandomSequenceGenerator",
    "SobolSequenceGenerator",
    "HaltonSequenceGenerator",
    "MAX_SOBOL_DIMENSION",
    "InverseCumulativeSequenceGenerator",
    "FixedSequenceGenerator",
]
