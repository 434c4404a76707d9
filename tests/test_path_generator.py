"""
Tests for the path generator.

Validates:
- Dimension checks at construction
- First-point and length invariants
- Direct and Brownian bridge evolution against manual computation
- Antithetic replay of the last draw
- Determinism with fixed draws
"""

import math

import pytest
import numpy as np

from pathgen.core.errors import (
    ConfigurationError,
    DimensionMismatchError,
    StateError,
    TypeMismatchError,
)
from pathgen.core.time_grid import TimeGrid
from pathgen.engines.brownian_bridge import BrownianBridge
from pathgen.engines.path_generator import PathGenerator
from pathgen.processes import BlackScholesProcess, GeometricBrownianMotionProcess
from pathgen.sequences import (
    FixedSequenceGenerator,
    InverseCumulativeSequenceGenerator,
    PseudoRandomSequenceGenerator,
    SobolSequenceGenerator,
)


class TestConstruction:
    """Tests for construction and validation."""

    def test_from_length_builds_uniform_grid(self, black_scholes) -> None:
        generator = PathGenerator.from_length(
            black_scholes, 1.0, 12, PseudoRandomSequenceGenerator(12, seed=1)
        )

        assert generator.size() == 12
        assert generator.time_grid() == TimeGrid.uniform(1.0, 12)
        assert generator.brownian_bridge is False
        assert generator.process is black_scholes

    def test_from_length_runs_subclass_initializer(self, black_scholes) -> None:
        class CountingPathGenerator(PathGenerator):
            def __init__(self, *args, **kwargs) -> None:
                super().__init__(*args, **kwargs)
                self.paths_drawn = 0

        generator = CountingPathGenerator.from_length(
            black_scholes, 1.0, 4, PseudoRandomSequenceGenerator(4, seed=1)
        )

        assert isinstance(generator, CountingPathGenerator)
        assert generator.paths_drawn == 0
        assert generator.time_grid() == TimeGrid.uniform(1.0, 4)

    def test_explicit_grid_is_referenced(self, black_scholes, irregular_grid) -> None:
        generator = PathGenerator(
            black_scholes, irregular_grid, PseudoRandomSequenceGenerator(5, seed=1)
        )

        assert generator.time_grid() is irregular_grid
        assert generator.size() == 5

    @pytest.mark.parametrize("brownian_bridge", [False, True])
    def test_dimension_mismatch_from_length(self, black_scholes, brownian_bridge: bool) -> None:
        with pytest.raises(DimensionMismatchError) as exc_info:
            PathGenerator.from_length(
                black_scholes, 1.0, 12, PseudoRandomSequenceGenerator(10, seed=1),
                brownian_bridge=brownian_bridge,
            )

        assert exc_info.value.dimension == 10
        assert exc_info.value.expected == 12
        assert "(10)" in str(exc_info.value)
        assert "(12)" in str(exc_info.value)

    @pytest.mark.parametrize("dimension", [4, 6])
    def test_dimension_mismatch_explicit_grid(self, black_scholes, irregular_grid, dimension: int) -> None:
        """No padding or truncation: dimension must equal the step count."""
        with pytest.raises(DimensionMismatchError) as exc_info:
            PathGenerator(
                black_scholes, irregular_grid, PseudoRandomSequenceGenerator(dimension, seed=1)
            )

        assert exc_info.value.expected == 5

    def test_dimension_mismatch_is_configuration_error(self, black_scholes) -> None:
        with pytest.raises(ConfigurationError):
            PathGenerator.from_length(
                black_scholes, 1.0, 3, PseudoRandomSequenceGenerator(2, seed=1)
            )
        with pytest.raises(ValueError):
            PathGenerator.from_length(
                black_scholes, 1.0, 3, PseudoRandomSequenceGenerator(2, seed=1)
            )

    def test_mismatch_consumes_no_draws(self, black_scholes) -> None:
        """Construction failure happens before any path is produced."""
        generator = FixedSequenceGenerator([[0.1, 0.2]])

        with pytest.raises(DimensionMismatchError):
            PathGenerator.from_length(black_scholes, 1.0, 3, generator)

        with pytest.raises(StateError):
            generator.last_sequence()

    def test_multi_dimensional_process_rejected(self, two_factor_process) -> None:
        with pytest.raises(TypeMismatchError):
            PathGenerator.from_length(
                two_factor_process, 1.0, 2, PseudoRandomSequenceGenerator(2, seed=1)
            )

    def test_buffer_weight_initialized(self, black_scholes) -> None:
        generator = PathGenerator.from_length(
            black_scholes, 1.0, 4, PseudoRandomSequenceGenerator(4, seed=1)
        )

        assert generator._next.weight == 1.0
        assert len(generator._next.value) == 5


class TestDirectEvolution:
    """Tests for paths evolved directly from raw draws."""

    def test_single_step_brownian(self, standard_brownian) -> None:
        """1-step grid, z = 1: next -> [0, 1], antithetic -> [0, -1]."""
        generator = PathGenerator.from_length(
            standard_brownian, 1.0, 1, FixedSequenceGenerator([[1.0]])
        )

        sample = generator.next()
        assert sample.value.values.tolist() == [0.0, 1.0]
        assert sample.weight == 1.0

        mirror = generator.antithetic()
        assert mirror.value.values.tolist() == [0.0, -1.0]
        assert mirror.weight == 1.0

    def test_matches_manual_evolution(self, black_scholes, irregular_grid, fixed_draws) -> None:
        generator = PathGenerator(black_scholes, irregular_grid, fixed_draws)
        draws = [0.5, -1.0, 0.25, 2.0, -0.75]

        path = generator.next().value

        expected = [black_scholes.x0()]
        for i, z in enumerate(draws):
            expected.append(
                black_scholes.evolve(irregular_grid[i], expected[-1], irregular_grid.dt(i), z)
            )
        assert path.values.tolist() == expected

    def test_antithetic_uses_negated_last_draw(self, black_scholes, irregular_grid, fixed_draws) -> None:
        generator = PathGenerator(black_scholes, irregular_grid, fixed_draws)
        generator.next()

        path = generator.antithetic().value

        expected = [black_scholes.x0()]
        for i, z in enumerate([0.5, -1.0, 0.25, 2.0, -0.75]):
            expected.append(
                black_scholes.evolve(irregular_grid[i], expected[-1], irregular_grid.dt(i), -z)
            )
        assert path.values.tolist() == expected

    def test_weight_follows_sequence(self, black_scholes, irregular_grid, fixed_draws) -> None:
        generator = PathGenerator(black_scholes, irregular_grid, fixed_draws)

        assert generator.next().weight == 0.75
        assert generator.antithetic().weight == 0.75
        assert generator.next().weight == 1.25

    def test_lognormal_antithetic_symmetry(self, yearly_grid) -> None:
        """For GBM, log-returns of a path and its mirror are symmetric about the drift."""
        process = GeometricBrownianMotionProcess(100.0, mu=0.04, sigma=0.3)
        generator = PathGenerator(process, yearly_grid, PseudoRandomSequenceGenerator(12, seed=7))

        up = np.log(generator.next().value.values.copy() / 100.0)
        down = np.log(generator.antithetic().value.values / 100.0)

        drift = (0.04 - 0.045) * yearly_grid.times
        assert up + down == pytest.approx(2.0 * drift, abs=1e-12)

    def test_antithetic_before_next_raises(self, black_scholes) -> None:
        generator = PathGenerator.from_length(
            black_scholes, 1.0, 3, PseudoRandomSequenceGenerator(3, seed=1)
        )

        with pytest.raises(StateError):
            generator.antithetic()


class TestBridgeEvolution:
    """Tests for paths built from Brownian bridge values."""

    def test_two_step_bridge_differencing(self, exponential_increment) -> None:
        """Bridge values [0.5, 1.2] give diffusions 0.5 and 0.7."""
        grid = TimeGrid.uniform(2.0, 2)
        # standard Brownian bridge on [0, 1, 2]: b[1] = sqrt(2) z0, b[0] = b[1]/2 + sqrt(1/2) z1
        z0 = 1.2 / math.sqrt(2.0)
        z1 = (0.5 - 0.6) / math.sqrt(0.5)
        generator = PathGenerator(
            exponential_increment, grid, FixedSequenceGenerator([[z0, z1]]), brownian_bridge=True
        )

        path = generator.next().value

        assert path[0] == 1.0
        assert path[1] == pytest.approx(math.exp(0.5), rel=1e-12)
        assert path[2] == pytest.approx(math.exp(0.5) * math.exp(0.7), rel=1e-12)

    def test_two_step_bridge_gbm(self) -> None:
        """apply(e, d) = e * exp(d) with GBM expectation, checked by hand."""
        process = GeometricBrownianMotionProcess(100.0, mu=0.05, sigma=1.0)
        grid = TimeGrid.uniform(2.0, 2)
        z0 = 1.2 / math.sqrt(2.0)
        z1 = (0.5 - 0.6) / math.sqrt(0.5)
        generator = PathGenerator(
            process, grid, FixedSequenceGenerator([[z0, z1]]), brownian_bridge=True
        )

        path = generator.next().value

        step_1 = 100.0 * math.exp(0.05 - 0.5) * math.exp(0.5)
        step_2 = step_1 * math.exp(0.05 - 0.5) * math.exp(0.7)
        assert path[1] == pytest.approx(step_1, rel=1e-12)
        assert path[2] == pytest.approx(step_2, rel=1e-12)

    def test_diffusions_are_successive_differences(self, exponential_increment, irregular_grid, fixed_draws) -> None:
        """Recovered log-increments difference the bridge; their cumulative sums recover it."""
        generator = PathGenerator(
            exponential_increment, irregular_grid, fixed_draws, brownian_bridge=True
        )
        reference = BrownianBridge(exponential_increment, irregular_grid, fixed_draws)
        bridge_values = reference.transform(np.array([0.5, -1.0, 0.25, 2.0, -0.75]))

        path = generator.next().value.values
        diffusions = np.diff(np.log(path))

        expected = np.concatenate([[bridge_values[0]], np.diff(bridge_values)])
        assert diffusions == pytest.approx(expected, abs=1e-12)
        assert np.cumsum(diffusions) == pytest.approx(bridge_values, abs=1e-12)

    def test_antithetic_negates_differences(self, exponential_increment, irregular_grid, fixed_draws) -> None:
        generator = PathGenerator(
            exponential_increment, irregular_grid, fixed_draws, brownian_bridge=True
        )

        up = np.log(generator.next().value.values.copy())
        down = np.log(generator.antithetic().value.values)

        assert up == pytest.approx(-down, abs=1e-12)
        assert generator.antithetic().weight == 0.75

    def test_bridge_weight_follows_sequence(self, black_scholes, irregular_grid, fixed_draws) -> None:
        generator = PathGenerator(black_scholes, irregular_grid, fixed_draws, brownian_bridge=True)

        assert generator.next().weight == 0.75
        assert generator.next().weight == 1.25

    def test_bridge_and_direct_share_terminal_distribution(self, black_scholes) -> None:
        """Both constructions produce the same lognormal terminal mean."""
        steps = 8
        n_paths = 4_000
        terminal = {}
        for use_bridge in (False, True):
            generator = PathGenerator.from_length(
                black_scholes, 1.0, steps, PseudoRandomSequenceGenerator(steps, seed=2024),
                brownian_bridge=use_bridge,
            )
            values = []
            for _ in range(n_paths // 2):
                values.append(generator.next().value.back())
                values.append(generator.antithetic().value.back())
            terminal[use_bridge] = np.mean(values)

        forward = 100.0 * math.exp(0.03)
        assert terminal[False] == pytest.approx(forward, rel=0.02)
        assert terminal[True] == pytest.approx(forward, rel=0.02)

    def test_antithetic_before_next_raises(self, black_scholes) -> None:
        generator = PathGenerator.from_length(
            black_scholes, 1.0, 3, PseudoRandomSequenceGenerator(3, seed=1), brownian_bridge=True
        )

        with pytest.raises(StateError):
            generator.antithetic()

    def test_sobol_bridge_paths(self, black_scholes) -> None:
        rsg = InverseCumulativeSequenceGenerator(SobolSequenceGenerator(16, seed=3))
        generator = PathGenerator.from_length(black_scholes, 1.0, 16, rsg, brownian_bridge=True)

        values = [generator.next().value.back() for _ in range(1024)]

        assert np.mean(values) == pytest.approx(100.0 * math.exp(0.03), rel=0.01)


class TestInvariants:
    """Properties that hold for every generated path."""

    @pytest.mark.parametrize("brownian_bridge", [False, True])
    def test_first_point_and_length(self, black_scholes, irregular_grid, brownian_bridge: bool) -> None:
        generator = PathGenerator(
            black_scholes, irregular_grid, PseudoRandomSequenceGenerator(5, seed=3),
            brownian_bridge=brownian_bridge,
        )

        for _ in range(5):
            for sample in (generator.next(), generator.antithetic()):
                assert sample.value[0] == black_scholes.x0()
                assert len(sample.value) == irregular_grid.size()

    @pytest.mark.parametrize("brownian_bridge", [False, True])
    def test_deterministic_with_fixed_draws(self, black_scholes, irregular_grid, brownian_bridge: bool) -> None:
        rows = [[0.5, -1.0, 0.25, 2.0, -0.75], [-0.3, 0.8, 1.5, -0.2, 0.0]]
        results = []
        for _ in range(2):
            generator = PathGenerator(
                black_scholes, irregular_grid, FixedSequenceGenerator(rows),
                brownian_bridge=brownian_bridge,
            )
            results.append([generator.next().value.values.tolist() for _ in range(2)])

        assert results[0] == results[1]

    def test_buffer_reused_between_calls(self, black_scholes, yearly_grid, seeded_rsg) -> None:
        """The returned sample is overwritten by the next call; copies survive."""
        generator = PathGenerator(black_scholes, yearly_grid, seeded_rsg)

        first = generator.next()
        kept = first.copy()
        second = generator.next()

        assert second is first
        assert not np.array_equal(kept.value.values, second.value.values)
        assert kept.value.time_grid is yearly_grid

    def test_collaborator_errors_propagate(self, irregular_grid) -> None:
        class FailingProcess(BlackScholesProcess):
            def evolve(self, t, x, dt, dw):
                raise ArithmeticError("state out of domain")

        generator = PathGenerator(
            FailingProcess(100.0, 0.05, 0.2), irregular_grid,
            PseudoRandomSequenceGenerator(5, seed=1),
        )

        with pytest.raises(ArithmeticError, match="out of domain"):
            generator.next()
