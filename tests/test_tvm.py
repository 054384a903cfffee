"""
Tests for time-value-of-money solvers.
"""

import pytest

from fincalc.calculations.amortization import compute_payment
from fincalc.calculations.rates import Timing
from fincalc.calculations.tvm import (
    TVMTarget,
    future_value,
    generate_tvm_schedule,
    number_of_periods,
    payment,
    present_value,
    solve,
    solve_rate,
)
from fincalc.errors import InvalidInputError, NoSolutionError


class TestClosedForms:
    """Test FV, PV, PMT and N."""

    def test_future_value(self):
        """Test future value."""
        fv = future_value(-1000, -100, 0.05, 10)
        expected = 1000 * 1.05 ** 10 + 100 * (1.05 ** 10 - 1) / 0.05
        assert fv == pytest.approx(expected)

    def test_future_value_due(self):
        """Test future value of an annuity due."""
        ordinary = future_value(0, -100, 0.05, 10, Timing.END)
        due = future_value(0, -100, 0.05, 10, Timing.BEGINNING)
        assert due == pytest.approx(ordinary * 1.05)

    def test_zero_rate_degrades_to_linear(self):
        """Test zero rate gives linear formulas."""
        assert future_value(-100, -10, 0, 5) == 150
        assert present_value(150, -10, 0, 5) == -100
        assert payment(-100, 150, 0, 5) == -10
        assert number_of_periods(-100, 150, -10, 0) == 5

    def test_payment_matches_loan_payment(self):
        """Test PMT matches the loan payment."""
        rate = 0.07 / 12
        pmt = payment(30000, 0, rate, 120)
        assert pmt == pytest.approx(-compute_payment(30000, rate, 120))

    def test_number_of_periods_recovers_term(self):
        """Test NPER recovers the loan term."""
        rate = 0.07 / 12
        pmt = -compute_payment(30000, rate, 120)
        assert number_of_periods(30000, 0, pmt, rate) == pytest.approx(120)

    def test_number_of_periods_lump_sum(self):
        """Test NPER for a lump sum."""
        # Doubling at 7.2% takes about ten years
        assert number_of_periods(-1000, 2000, 0, 0.072) == pytest.approx(9.97, abs=0.01)

    def test_number_of_periods_without_solution(self):
        """Payment below interest can never pay the loan down."""
        with pytest.raises(NoSolutionError):
            number_of_periods(1000, 0, -10, 0.05)
        with pytest.raises(NoSolutionError):
            number_of_periods(1000, 500, 0, 0.05)

    def test_payment_requires_periods(self):
        """Test PMT with zero periods is rejected."""
        with pytest.raises(InvalidInputError):
            payment(1000, 0, 0.05, 0)


class TestRoundTrips:
    """Test that solving one way and back recovers the input."""

    @pytest.mark.parametrize("timing", [Timing.END, Timing.BEGINNING])
    def test_fv_then_pv(self, timing):
        """Test solving FV then PV recovers the present value."""
        fv = future_value(-5000, -200, 0.04, 12, timing)
        assert present_value(fv, -200, 0.04, 12, timing) == pytest.approx(-5000, abs=1e-4)

    @pytest.mark.parametrize("timing", [Timing.END, Timing.BEGINNING])
    def test_fv_then_rate(self, timing):
        """Test solving FV then I/Y recovers the rate."""
        fv = future_value(-5000, -200, 0.04, 12, timing)
        root = solve_rate(-5000, fv, -200, 12, timing)
        assert root.converged
        assert root.value == pytest.approx(0.04, abs=1e-6)


class TestSolveRate:
    """Test Newton-Raphson rate solving."""

    def test_lump_sum_rate(self):
        """Test rate that doubles a lump sum in ten periods."""
        root = solve_rate(-1000, 2000, 0, 10)
        assert root.converged
        assert root.value == pytest.approx(2 ** 0.1 - 1, abs=1e-6)

    def test_loan_rate(self):
        """Test rate recovered from a loan payment."""
        rate = 0.07 / 12
        pmt = -compute_payment(30000, rate, 120)
        root = solve_rate(30000, 0, pmt, 120)
        assert root.converged
        assert root.value == pytest.approx(rate, abs=1e-6)

    def test_zero_rate_root(self):
        """Test a zero rate root."""
        root = solve_rate(-1000, 1000, 0, 5)
        assert root.value == pytest.approx(0, abs=1e-6)

    def test_non_convergence_is_soft(self, monkeypatch):
        """Test non-convergence returns an approximate rate."""
        monkeypatch.setenv("FINCALC_NEWTON_MAX_ITERATIONS", "1")
        root = solve_rate(-1000, 2000, 0, 10)
        assert root.converged is False
        assert root.approximate is True
        assert root.iterations == 1
        assert 0 <= root.value <= 2

    def test_requires_positive_periods(self):
        """Test zero periods are rejected."""
        with pytest.raises(InvalidInputError):
            solve_rate(-1000, 2000, 0, 0)


class TestSolve:
    """Test the four-known-values entry point."""

    def test_solve_each_target(self):
        """Test solving each of the five variables."""
        known = dict(n=10, rate=0.06, pv=-20000, pmt=-1000)
        fv = solve(TVMTarget.FV, **known).value
        values = dict(n=10, rate=0.06, pv=-20000, pmt=-1000, fv=fv)

        for target, key in [
            (TVMTarget.N, "n"),
            (TVMTarget.IY, "rate"),
            (TVMTarget.PV, "pv"),
            (TVMTarget.PMT, "pmt"),
        ]:
            inputs = {k: v for k, v in values.items() if k != key}
            solution = solve(target, **inputs)
            assert solution.ok, solution.error
            assert solution.value == pytest.approx(values[key], abs=1e-4)

    def test_rate_solution_reports_convergence(self):
        """Test I/Y solution reports convergence."""
        solution = solve("iy", n=10, pv=-1000, pmt=0, fv=2000)
        assert solution.converged
        assert solution.iterations > 0

    def test_missing_operand(self):
        """Test a missing operand is reported."""
        solution = solve(TVMTarget.FV, n=10, rate=0.05, pv=-1000)
        assert not solution.ok
        assert "PMT" in solution.error
        assert solution.value == 0.0

    def test_non_finite_operand(self):
        """Test a non-finite operand is reported."""
        solution = solve(TVMTarget.PV, n=10, rate=float("nan"), pmt=0, fv=100)
        assert not solution.ok

    def test_no_solution_is_reported(self):
        """Test an N with no real solution is reported."""
        solution = solve(TVMTarget.N, rate=0.05, pv=1000, pmt=-10, fv=0)
        assert not solution.ok
        assert solution.converged is False

    @pytest.mark.parametrize("target", [TVMTarget.FV, TVMTarget.PV, TVMTarget.PMT, TVMTarget.N])
    def test_rate_at_or_below_minus_one_is_rejected(self, target):
        """Test a per-period rate of -100% or lower is rejected for every closed form."""
        for rate in (-1.5, -1.0):
            solution = solve(target, n=2.5, rate=rate, pv=-1000, pmt=0, fv=100)
            assert not solution.ok
            assert solution.value == 0.0
            assert "-100%" in solution.error


class TestTVMSchedule:
    """Test the per-period ledger."""

    @pytest.mark.parametrize("timing", [Timing.END, Timing.BEGINNING])
    def test_closing_value_is_negated_fv(self, timing):
        """Test the last closing value is the negated FV."""
        schedule = generate_tvm_schedule(20000, -2000, 0.06, 10, timing)
        assert len(schedule.periods) == 10
        assert schedule.periods[-1].fv == pytest.approx(-future_value(20000, -2000, 0.06, 10, timing))

    def test_totals(self):
        """Test ledger totals."""
        schedule = generate_tvm_schedule(1000, 0, 0.1, 2)
        assert schedule.total_interest == pytest.approx(210)
        assert schedule.total_payments == 0

    def test_empty_for_no_periods(self):
        """Test zero periods give an empty ledger."""
        assert generate_tvm_schedule(1000, -100, 0.05, 0).periods == []

    def test_ledger_is_capped(self):
        """Test a term longer than the cap is cut short and flagged."""
        schedule = generate_tvm_schedule(1000, -1, 0, 10_000_000, max_periods=100)
        assert schedule.truncated
        assert len(schedule.periods) == 100
        assert schedule.total_payments == pytest.approx(-100)

    def test_short_ledger_not_truncated(self):
        """Test a normal term keeps every row."""
        schedule = generate_tvm_schedule(20000, -2000, 0.06, 10)
        assert not schedule.truncated
