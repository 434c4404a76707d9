"""
Ornstein-Uhlenbeck process dx = a (theta - x) dt + sigma dW.
"""

import math

from pathgen.core.errors import ConfigurationError
from pathgen.processes.base import StochasticProcess1D

# Below this speed the exact variance is replaced by its a -> 0 limit.
_SPEED_EPSILON = 1e-12


class OrnsteinUhlenbeckProcess(StochasticProcess1D):
    """
    Mean-reverting Gaussian process with exact discretization.

    Attributes:
        speed: Mean-reversion speed a (>= 0)
        volatility: Diffusion coefficient sigma (>= 0)
        initial_value: x(0)
        level: Long-run mean theta
    """

    def __init__(
        self,
        speed: float,
        volatility: float,
        initial_value: float = 0.0,
        level: float = 0.0
    ) -> None:
        if speed < 0:
            raise ConfigurationError(f"Mean-reversion speed must be non-negative, got {speed}")
        if volatility < 0:
            raise ConfigurationError(f"Volatility must be non-negative, got {volatility}")
        self.speed = speed
        self.volatility = volatility
        self.initial_value = initial_value
        self.level = level

    def x0(self) -> float:
        return self.initial_value

    def drift(self, t: float, x: float) -> float:
        return self.speed * (self.level - x)

    def diffusion(self, t: float, x: float) -> float:
        return self.volatility

    def expectation(self, t: float, x: float, dt: float) -> float:
        return self.level + (x - self.level) * math.exp(-self.speed * dt)

    def variance(self, t: float, x: float, dt: float) -> float:
        a = self.speed
        sigma2 = self.volatility * self.volatility
        if a < _SPEED_EPSILON:
            return sigma2 * dt
        # -expm1(-2 a dt) = 1 - exp(-2 a dt), accurate for small a dt
        return 0.5 * sigma2 / a * -math.expm1(-2.0 * a * dt)

    def std_deviation(self, t: float, x: float, dt: float) -> float:
        return math.sqrt(self.variance(t, x, dt))

    def __repr__(self) -> str:
        return (
            f"OrnsteinUhlenbeckProcess(speed={self.speed}, "
            f"volatility={self.volatility}, x0={self.initial_value}, "
            f"level={self.level})"
        )
