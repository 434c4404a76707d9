"""
Stochastic process interfaces.

StochasticProcess is the general (possibly multi-dimensional) interface;
StochasticProcess1D adds the scalar discretization used by path generators.
"""

from abc import ABC, abstractmethod
import math

from pathgen.core.errors import TypeMismatchError


class StochasticProcess(ABC):
    """Abstract base class for stochastic processes."""

    @abstractmethod
    def size(self) -> int:
        """Number of state variables."""
        pass

    def factors(self) -> int:
        """Number of independent Brownian factors driving the process."""
        return self.size()


class StochasticProcess1D(StochasticProcess):
    """
    One-dimensional process dx = mu(t, x) dt + sigma(t, x) dW.

    The default discretization is Euler. Subclasses with exact transition
    laws override expectation, std_deviation and variance; processes living
    in log space override apply.
    """

    def size(self) -> int:
        return 1

    @abstractmethod
    def x0(self) -> float:
        """Initial value of the process."""
        pass

    @abstractmethod
    def drift(self, t: float, x: float) -> float:
        pass

    @abstractmethod
    def diffusion(self, t: float, x: float) -> float:
        pass

    def expectation(self, t: float, x: float, dt: float) -> float:
        """Expected value of x(t + dt) given x(t) = x."""
        return self.apply(x, self.drift(t, x) * dt)

    def std_deviation(self, t: float, x: float, dt: float) -> float:
        """Standard deviation of the step from t to t + dt."""
        return self.diffusion(t, x) * math.sqrt(dt)

    def variance(self, t: float, x: float, dt: float) -> float:
        """Variance of the step from t to t + dt."""
        sigma = self.diffusion(t, x)
        return sigma * sigma * dt

    def apply(self, x: float, dx: float) -> float:
        """Combine a value with an increment."""
        return x + dx

    def evolve(self, t: float, x: float, dt: float, dw: float) -> float:
        """
        Value at t + dt given x(t) = x and a standard normal draw dw.

        Args:
            t: Current time
            x: Current value
            dt: Step size
            dw: Standard normal variate

        Returns:
            x(t + dt)
        """
        return self.apply(
            self.expectation(t, x, dt),
            self.std_deviation(t, x, dt) * dw,
        )


def as_one_dimensional(process: StochasticProcess) -> StochasticProcess1D:
    """
    Narrow a general process to the one-dimensional interface.

    Raises:
        TypeMismatchError: If the process is not one-dimensional
    """
    if isinstance(process, StochasticProcess1D):
        return process
    size = process.size() if isinstance(process, StochasticProcess) else None
    raise TypeMismatchError(type(process).__name__, size)
