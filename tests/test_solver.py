"""
Tests for Newton-Raphson and NPV helpers.
"""

import pytest

from fincalc.calculations.solver import calculate_npv, newton_raphson, solve_periodic_rate
from fincalc.errors import InvalidInputError


class TestNewtonRaphson:
    """Test the generic bounded iteration."""

    def test_square_root(self):
        """Test Newton-Raphson on the square root of two."""
        root = newton_raphson(lambda x: x * x - 2, lambda x: 2 * x, guess=1.0)
        assert root.converged
        assert root.value == pytest.approx(2 ** 0.5)

    def test_flat_derivative_stops(self):
        """Test a flat derivative stops the iteration."""
        root = newton_raphson(lambda x: 1.0, lambda x: 0.0, guess=0.5)
        assert root.converged is False
        assert root.value == 0.5

    def test_root_outside_bounds_is_not_converged(self):
        """Test a root outside the bounds is not reported as converged."""
        root = newton_raphson(lambda x: x + 1, lambda x: 1.0, guess=0.5, lower=0.0, upper=2.0)
        assert root.value == 0.0
        assert root.converged is False

    def test_iteration_cap(self):
        """Test the iteration cap."""
        root = newton_raphson(lambda x: x * x - 2, lambda x: 2 * x, guess=100.0, max_iterations=2)
        assert root.converged is False
        assert root.iterations == 2


class TestPeriodicRate:
    """Test IRR of periodic cash flows."""

    def test_simple(self):
        """Test IRR calculation with simple cash flows."""
        # Investment of 100, returns of 110 after 1 period = 10% return
        root = solve_periodic_rate([-100, 110])
        assert abs(root.value - 0.10) < 0.001

    def test_multi_period(self):
        """Test IRR with multiple periods."""
        root = solve_periodic_rate([-100, 20, 20, 20, 20, 120])
        assert abs(root.value - 0.20) < 0.01

    def test_negative_returns(self):
        """Test IRR with negative return scenario."""
        root = solve_periodic_rate([-100, 40, 40, 10])
        assert root.value < 0

    def test_requires_mixed_signs(self):
        """Test cash flows without a sign change are rejected."""
        with pytest.raises(InvalidInputError):
            solve_periodic_rate([100, 100])
        with pytest.raises(InvalidInputError):
            solve_periodic_rate([-100])

    def test_npv(self):
        """Test NPV calculation."""
        assert calculate_npv([-100, 50, 50, 50], 0.10) > 0
        assert calculate_npv([-100, 110], 0.10) == pytest.approx(0)
