"""
Tests for annuity accumulation.
"""

import math
import pytest

from fincalc.calculations.annuity import accumulate
from fincalc.calculations.rates import Timing


def closed_form_end_balance(principal, annual, rate, years, due=False):
    """Lump-sum growth plus the ordinary (or due) annuity future value."""
    factor = (1 + rate) ** years
    annuity = annual * (factor - 1) / rate
    if due:
        annuity *= 1 + rate
    return principal * factor + annuity


class TestAnnualContributions:
    """Test annual compounding without monthly additions."""

    def test_end_of_year_matches_closed_form(self):
        """Test end-of-year additions match the ordinary annuity formula."""
        result = accumulate(20000, 10000, 0, 6, 10, Timing.END)
        expected = closed_form_end_balance(20000, 10000, 0.06, 10)
        assert result.end_balance == pytest.approx(expected, rel=1e-12)
        assert 167000 < result.end_balance < 168000

    def test_beginning_of_year_matches_closed_form(self):
        """Test beginning-of-year additions match the annuity-due formula."""
        result = accumulate(20000, 10000, 0, 6, 10, Timing.BEGINNING)
        expected = closed_form_end_balance(20000, 10000, 0.06, 10, due=True)
        assert result.end_balance == pytest.approx(expected, rel=1e-12)

    def test_beginning_beats_end(self):
        """Test beginning timing ends higher than end timing."""
        end = accumulate(20000, 10000, 0, 6, 10, Timing.END)
        beginning = accumulate(20000, 10000, 0, 6, 10, Timing.BEGINNING)
        assert beginning.end_balance > end.end_balance
        assert beginning.total_additions == end.total_additions

    def test_yearly_schedule(self):
        """Test yearly schedule rows."""
        result = accumulate(20000, 10000, 0, 6, 10, Timing.END)
        assert len(result.yearly_schedule) == 10
        first = result.yearly_schedule[0]
        assert first.addition == 10000
        assert first.growth == pytest.approx(1200)
        assert first.ending_balance == pytest.approx(31200)

    def test_totals_reconcile(self):
        """Test principal, additions and return add up to the end balance."""
        result = accumulate(20000, 10000, 0, 6, 10, Timing.END)
        assert result.total_additions == 100000
        assert result.total_return == pytest.approx(result.end_balance - 20000 - 100000)
        assert sum(e.growth for e in result.yearly_schedule) == pytest.approx(result.total_return)


class TestMonthlyContributions:
    """Test month-by-month interleaving."""

    def test_monthly_only_matches_closed_form(self):
        """Test monthly additions match the monthly annuity formula."""
        result = accumulate(0, 0, 100, 12, 1, Timing.END)
        expected = 100 * (1.01 ** 12 - 1) / 0.01
        assert result.end_balance == pytest.approx(expected)

    def test_monthly_beginning_beats_end(self):
        """Test beginning timing ends higher with monthly additions."""
        end = accumulate(5000, 1200, 200, 5, 20, Timing.END)
        beginning = accumulate(5000, 1200, 200, 5, 20, Timing.BEGINNING)
        assert beginning.end_balance > end.end_balance

    def test_annual_addition_included_with_monthly(self):
        """At zero growth the balance is exactly the sum of contributions."""
        for timing in (Timing.END, Timing.BEGINNING):
            result = accumulate(0, 1000, 100, 0, 2, timing)
            assert result.end_balance == pytest.approx(4400)
            assert result.total_return == pytest.approx(0)

    def test_monthly_schedule_reconciles_with_yearly(self):
        """Test monthly ledger agrees with the yearly ledger."""
        result = accumulate(5000, 1200, 200, 5, 3, Timing.END)
        assert len(result.monthly_schedule) == 36
        assert result.monthly_schedule[-1].ending_balance == pytest.approx(result.end_balance)
        assert result.monthly_schedule[11].ending_balance == pytest.approx(
            result.yearly_schedule[0].ending_balance
        )


class TestMonthlyLedger:
    """Test the monthly ledger when growth compounds annually."""

    def test_reconciles_with_annual_compounding(self):
        """Test monthly ledger matches annual compounding at each year end."""
        for timing in (Timing.END, Timing.BEGINNING):
            result = accumulate(20000, 10000, 0, 6, 10, timing)
            assert len(result.monthly_schedule) == 120
            assert result.monthly_schedule[-1].ending_balance == pytest.approx(
                result.end_balance, rel=1e-9
            )

    def test_annual_addition_lands_at_year_boundary(self):
        """Test the annual addition lands in the first or last month."""
        end = accumulate(0, 1000, 0, 6, 2, Timing.END)
        assert end.monthly_schedule[10].addition == 0
        assert end.monthly_schedule[11].addition == 1000

        beginning = accumulate(0, 1000, 0, 6, 2, Timing.BEGINNING)
        assert beginning.monthly_schedule[0].addition == 1000
        assert beginning.monthly_schedule[12].addition == 1000


class TestEdgeCases:
    """Test invalid and degenerate inputs."""

    def test_zero_years(self):
        """Test zero years returns the starting principal."""
        result = accumulate(20000, 10000, 0, 6, 0)
        assert result.yearly_schedule == []
        assert result.monthly_schedule == []
        assert result.end_balance == 20000
        assert result.error is None

    def test_negative_years(self):
        """Test negative years give empty schedules."""
        result = accumulate(20000, 10000, 0, 6, -3)
        assert result.yearly_schedule == []

    def test_negative_principal_rejected(self):
        """Test negative principal is rejected."""
        result = accumulate(-1, 0, 0, 6, 10)
        assert result.error is not None
        assert result.end_balance == 0

    def test_non_finite_rate_rejected(self):
        """Test a non-finite rate is rejected."""
        result = accumulate(1000, 0, 0, math.nan, 10)
        assert result.error is not None
        assert result.yearly_schedule == []
