"""
Shared pytest fixtures for pathgen tests.

Provides reusable processes, grids and draw sources.
"""

import math

import pytest

from pathgen.core.time_grid import TimeGrid
from pathgen.processes import (
    StochasticProcess,
    BrownianMotionProcess,
    BlackScholesProcess,
    OrnsteinUhlenbeckProcess,
)
from pathgen.sequences import FixedSequenceGenerator, PseudoRandomSequenceGenerator


class TwoFactorProcess(StochasticProcess):
    """Minimal multi-dimensional process for narrowing tests."""

    def size(self) -> int:
        return 2


class ExponentialIncrementProcess(BrownianMotionProcess):
    """
    Process with expectation(t, x, dt) = x and apply(e, d) = e * exp(d).

    Makes bridge-mode paths a direct read-out of the diffusion terms.
    """

    def expectation(self, t: float, x: float, dt: float) -> float:
        return x

    def apply(self, x: float, dx: float) -> float:
        return x * math.exp(dx)


@pytest.fixture
def standard_brownian() -> BrownianMotionProcess:
    """Standard Brownian motion started at zero."""
    return BrownianMotionProcess(initial_value=0.0, mu=0.0, sigma=1.0)


@pytest.fixture
def black_scholes() -> BlackScholesProcess:
    """Black-Scholes process with typical equity parameters."""
    return BlackScholesProcess(spot=100.0, rate=0.05, volatility=0.25, dividend_yield=0.02)


@pytest.fixture
def ornstein_uhlenbeck() -> OrnsteinUhlenbeckProcess:
    return OrnsteinUhlenbeckProcess(speed=1.5, volatility=0.3, initial_value=0.5, level=0.1)


@pytest.fixture
def exponential_increment() -> ExponentialIncrementProcess:
    return ExponentialIncrementProcess(initial_value=1.0, mu=0.0, sigma=1.0)


@pytest.fixture
def two_factor_process() -> TwoFactorProcess:
    return TwoFactorProcess()


@pytest.fixture
def yearly_grid() -> TimeGrid:
    """One year in 12 monthly steps."""
    return TimeGrid.uniform(1.0, 12)


@pytest.fixture
def irregular_grid() -> TimeGrid:
    """Non-uniform grid with 5 steps."""
    return TimeGrid([0.0, 0.1, 0.25, 0.5, 1.0, 2.0])


@pytest.fixture
def seeded_rsg() -> PseudoRandomSequenceGenerator:
    """Seeded 12-dimensional pseudo-random source."""
    return PseudoRandomSequenceGenerator(dimension=12, seed=42)


@pytest.fixture
def fixed_draws() -> FixedSequenceGenerator:
    """Two fixed 5-dimensional draws with distinct weights."""
    return FixedSequenceGenerator(
        [
            [0.5, -1.0, 0.25, 2.0, -0.75],
            [-0.3, 0.8, 1.5, -0.2, 0.0],
        ],
        weights=[0.75, 1.25],
    )
