"""
Pydantic configuration schema for path generators.

Validates time grid, draw source and construction settings, and builds the
corresponding objects.
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional, Union
import json
import logging
import math

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pathgen.core.time_grid import TimeGrid
from pathgen.engines.path_generator import PathGenerator
from pathgen.processes.base import StochasticProcess
from pathgen.sequences import (
    HaltonSequenceGenerator,
    InverseCumulativeSequenceGenerator,
    PseudoRandomSequenceGenerator,
    SequenceGenerator,
    SobolSequenceGenerator,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Enums
# ============================================================================

class SequenceType(str, Enum):
    """Supported draw sources."""
    PSEUDO_RANDOM = "pseudo_random"
    SOBOL = "sobol"
    HALTON = "halton"


# ============================================================================
# Sub-schemas
# ============================================================================

class TimeGridConfig(BaseModel):
    """
    Time grid specification.

    Either ``length`` + ``steps`` (uniform grid) or ``times`` (explicit grid),
    optionally with ``steps`` to refine between mandatory times.
    """
    model_config = ConfigDict(extra="forbid")

    length: Optional[float] = Field(
        default=None, gt=0, allow_inf_nan=False, description="Horizon in years"
    )
    steps: Optional[int] = Field(default=None, ge=1, description="Number of time steps")
    times: Optional[List[float]] = Field(
        default=None,
        description="Explicit grid times (0.0 is prepended if missing)"
    )

    @field_validator("times")
    @classmethod
    def validate_times(cls, v: Optional[List[float]]) -> Optional[List[float]]:
        if v is None:
            return v
        if not v:
            raise ValueError("times must not be empty")
        for t in v:
            if not math.isfinite(t):
                raise ValueError(f"times must be finite, got {t}")
        if v[0] < 0:
            raise ValueError(f"times must be non-negative, got {v[0]}")
        for i in range(1, len(v)):
            if v[i] <= v[i - 1]:
                raise ValueError("times must be strictly increasing")
        return v

    @model_validator(mode="after")
    def validate_grid(self) -> "TimeGridConfig":
        if self.times is None:
            if self.length is None or self.steps is None:
                raise ValueError("length and steps required when times is not given")
        elif self.length is not None:
            raise ValueError("length cannot be combined with explicit times")
        return self


class SequenceConfig(BaseModel):
    """Draw source specification."""
    model_config = ConfigDict(extra="forbid")

    type: SequenceType = SequenceType.PSEUDO_RANDOM
    seed: Optional[int] = Field(default=None, ge=0)
    scramble: bool = Field(default=True, description="Scramble quasi-random points")
    skip: int = Field(default=0, ge=0, description="Sobol points to discard")

    @model_validator(mode="after")
    def validate_sequence(self) -> "SequenceConfig":
        if self.skip and self.type != SequenceType.SOBOL:
            raise ValueError(f"skip is only supported for sobol sequences, got {self.type.value}")
        return self


class PathGeneratorConfig(BaseModel):
    """Complete path generator configuration."""
    model_config = ConfigDict(extra="forbid")

    time_grid: TimeGridConfig
    sequence: SequenceConfig = Field(default_factory=SequenceConfig)
    brownian_bridge: bool = False


# ============================================================================
# Builders
# ============================================================================

def build_time_grid(config: TimeGridConfig) -> TimeGrid:
    """Build the time grid described by ``config``."""
    if config.times is None:
        return TimeGrid.uniform(config.length, config.steps)
    if config.steps is not None:
        return TimeGrid.with_mandatory_times(config.times, config.steps)
    return TimeGrid(config.times)


def build_sequence_generator(config: SequenceConfig, dimension: int) -> SequenceGenerator:
    """
    Build a standard normal draw source of the given dimension.

    Quasi-random sources are mapped to normals with the inverse normal CDF.
    """
    if config.type == SequenceType.PSEUDO_RANDOM:
        return PseudoRandomSequenceGenerator(dimension, seed=config.seed)
    if config.type == SequenceType.SOBOL:
        uniform = SobolSequenceGenerator(
            dimension, seed=config.seed, scramble=config.scramble, skip=config.skip
        )
        return InverseCumulativeSequenceGenerator(uniform)
    if config.type == SequenceType.HALTON:
        uniform = HaltonSequenceGenerator(dimension, seed=config.seed, scramble=config.scramble)
        return InverseCumulativeSequenceGenerator(uniform)
    raise ValueError(f"Unknown sequence type: {config.type}")


def build_path_generator(
    process: StochasticProcess,
    config: PathGeneratorConfig
) -> PathGenerator:
    """
    Build a path generator for ``process`` from a validated configuration.

    The draw source dimension is the number of grid steps.
    """
    grid = build_time_grid(config.time_grid)
    generator = build_sequence_generator(config.sequence, grid.size() - 1)

    if config.sequence.type != SequenceType.PSEUDO_RANDOM and not config.brownian_bridge:
        logger.info(
            f"{config.sequence.type.value} sequence used without Brownian bridge; "
            f"later dimensions carry the same weight as early ones"
        )

    return PathGenerator(process, grid, generator, config.brownian_bridge)


# ============================================================================
# Loading and validation functions
# ============================================================================

def load_path_generator_config(path: Union[str, Path]) -> PathGeneratorConfig:
    """
    Load and validate a path generator configuration from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValidationError: If JSON doesn't match schema
    """
    filepath = Path(path)
    if not filepath.exists():
        raise FileNotFoundError(f"Path generator config not found: {path}")

    with open(filepath, "r") as f:
        data = json.load(f)

    return PathGeneratorConfig(**data)


def validate_path_generator_config(data: dict) -> PathGeneratorConfig:
    """Validate a configuration dictionary."""
    return PathGeneratorConfig(**data)
