"""
Deterministic draw source replaying a fixed table of sequences.

Useful for weighted (quadrature-style) sampling and for reproducing a given
set of draws exactly.
"""

from typing import Optional, Sequence

import numpy as np

from pathgen.core.errors import ConfigurationError
from pathgen.core.path import Sample
from pathgen.sequences.base import BaseSequenceGenerator


class FixedSequenceGenerator(BaseSequenceGenerator):
    """
    Cycles through the rows of a table, one row per ``next_sequence``.

    Args:
        sequences: Table [num_rows, dimension] (a 1-D input is a single row)
        weights: Optional per-row weights [num_rows], default 1.0
    """

    def __init__(
        self,
        sequences: Sequence[Sequence[float]],
        weights: Optional[Sequence[float]] = None
    ) -> None:
        table = np.array(sequences, dtype=np.float64)
        if table.ndim == 1:
            table = table.reshape(1, -1)
        if table.ndim != 2 or table.shape[0] == 0:
            raise ConfigurationError(
                f"Sequences must be a non-empty 2-D table, got shape {table.shape}"
            )
        super().__init__(table.shape[1])

        if weights is None:
            row_weights = np.ones(table.shape[0])
        else:
            row_weights = np.array(weights, dtype=np.float64)
            if row_weights.shape != (table.shape[0],):
                raise ConfigurationError(
                    f"weights length {row_weights.shape} != number of sequences {table.shape[0]}"
                )
            if np.any(row_weights < 0):
                raise ConfigurationError("Sequence weights must be non-negative")

        table.flags.writeable = False
        self._table = table
        self._weights = row_weights
        self._row = 0

    @property
    def num_sequences(self) -> int:
        return self._table.shape[0]

    def reset(self) -> None:
        """Restart from the first row."""
        self._row = 0
        self._last = None

    def _draw(self) -> Sample[np.ndarray]:
        row = self._row
        self._row = (row + 1) % self._table.shape[0]
        return Sample(self._table[row], float(self._weights[row]))
