"""
Brownian motion processes.

Supports:
- Arithmetic Brownian motion dX = mu dt + sigma dW
- Geometric Brownian motion dS = mu S dt + sigma S dW (log-space stepping)
- Black-Scholes risk-neutral GBM with continuous dividend yield
"""

import math

from pathgen.core.errors import ConfigurationError
from pathgen.processes.base import StochasticProcess1D


class BrownianMotionProcess(StochasticProcess1D):
    """
    Arithmetic Brownian motion with constant drift and volatility.

    Euler stepping is exact for this process.
    """

    def __init__(self, initial_value: float = 0.0, mu: float = 0.0, sigma: float = 1.0) -> None:
        if sigma < 0:
            raise ConfigurationError(f"Volatility must be non-negative, got {sigma}")
        self.initial_value = initial_value
        self.mu = mu
        self.sigma = sigma

    def x0(self) -> float:
        return self.initial_value

    def drift(self, t: float, x: float) -> float:
        return self.mu

    def diffusion(self, t: float, x: float) -> float:
        return self.sigma

    def __repr__(self) -> str:
        return (
            f"BrownianMotionProcess(x0={self.initial_value}, "
            f"mu={self.mu}, sigma={self.sigma})"
        )


class GeometricBrownianMotionProcess(StochasticProcess1D):
    """
    Geometric Brownian motion stepped in log space.

    expectation() returns S * exp((mu - sigma^2/2) dt), the step without its
    diffusion part, and apply(x, dx) = x * exp(dx). Combined they give the
    exact lognormal transition:
        S(t+dt) = S(t) * exp((mu - 0.5*sigma^2)*dt + sigma*sqrt(dt)*Z)
    """

    def __init__(self, initial_value: float, mu: float, sigma: float) -> None:
        if initial_value <= 0:
            raise ConfigurationError(f"Initial value must be positive, got {initial_value}")
        if sigma < 0:
            raise ConfigurationError(f"Volatility must be non-negative, got {sigma}")
        self.initial_value = initial_value
        self.mu = mu
        self.sigma = sigma

    def x0(self) -> float:
        return self.initial_value

    def drift(self, t: float, x: float) -> float:
        return self.mu * x

    def diffusion(self, t: float, x: float) -> float:
        return self.sigma * x

    def expectation(self, t: float, x: float, dt: float) -> float:
        return x * math.exp((self.mu - 0.5 * self.sigma * self.sigma) * dt)

    def std_deviation(self, t: float, x: float, dt: float) -> float:
        return self.sigma * math.sqrt(dt)

    def variance(self, t: float, x: float, dt: float) -> float:
        return self.sigma * self.sigma * dt

    def apply(self, x: float, dx: float) -> float:
        return x * math.exp(dx)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(x0={self.initial_value}, "
            f"mu={self.mu}, sigma={self.sigma})"
        )


class BlackScholesProcess(GeometricBrownianMotionProcess):
    """Risk-neutral GBM with drift r - q."""

    def __init__(
        self,
        spot: float,
        rate: float,
        volatility: float,
        dividend_yield: float = 0.0
    ) -> None:
        super().__init__(spot, rate - dividend_yield, volatility)
        self.rate = rate
        self.dividend_yield = dividend_yield

    @property
    def spot(self) -> float:
        return self.initial_value
