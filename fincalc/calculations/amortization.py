"""
Loan Amortization Calculations

Implements level-payment computation and period-by-period amortization
schedules, matching Excel's PMT, IPMT and PPMT functions for both ordinary
annuities and annuities due.
"""

import math
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from fincalc.calculations.rates import (
    Frequency,
    Timing,
    clamp_to_zero,
    period_offset,
)


@dataclass
class PeriodEntry:
    """One row of an amortization schedule."""

    period: int
    opening_balance: float
    payment: float
    interest: float
    principal: float
    closing_balance: float
    cumulative_interest: float = 0.0
    cumulative_principal: float = 0.0
    payment_date: Optional[date] = None


@dataclass
class ScheduleTotals:
    total_paid: float = 0.0
    total_interest: float = 0.0
    total_principal: float = 0.0


@dataclass
class ScheduleResult:
    """Full schedule plus running totals."""

    periods: List[PeriodEntry] = field(default_factory=list)
    totals: ScheduleTotals = field(default_factory=ScheduleTotals)

    @property
    def payment(self) -> float:
        """Level payment of the first period (0 for an empty schedule)."""
        return self.periods[0].payment if self.periods else 0.0

    @property
    def final_balance(self) -> float:
        return self.periods[-1].closing_balance if self.periods else 0.0


def _valid_terms(principal: float, rate_per_period: float, total_periods: int) -> bool:
    if not (math.isfinite(principal) and math.isfinite(rate_per_period)):
        return False
    return principal > 0 and total_periods > 0 and rate_per_period > -1


def compute_payment(
    principal: float,
    rate_per_period: float,
    total_periods: int,
    timing: Timing = Timing.END,
) -> float:
    """
    Calculate the level payment that fully amortizes a loan.

    Matches Excel's PMT() function (returned as a positive number).

    Args:
        principal: Loan principal amount
        rate_per_period: Interest rate per payment period as decimal
        total_periods: Number of payments
        timing: END for an ordinary annuity, BEGINNING for an annuity due

    Returns:
        Payment per period, 0.0 for invalid terms
    """
    if not _valid_terms(principal, rate_per_period, total_periods):
        return 0.0

    if rate_per_period == 0:
        return principal / total_periods

    growth = (1 + rate_per_period) ** total_periods
    payment = principal * rate_per_period * growth / (growth - 1)

    if Timing(timing) is Timing.BEGINNING:
        payment /= 1 + rate_per_period

    return payment


def remaining_balance(
    principal: float,
    rate_per_period: float,
    total_periods: int,
    payments_completed: int,
) -> float:
    """Calculate remaining loan balance after N level payments (ordinary annuity)."""
    payment = compute_payment(principal, rate_per_period, total_periods)
    if payment == 0:
        return 0.0

    payments_completed = min(max(payments_completed, 0), total_periods)

    if rate_per_period == 0:
        return max(0.0, principal - payment * payments_completed)

    growth = (1 + rate_per_period) ** payments_completed
    balance = principal * growth - payment * (growth - 1) / rate_per_period

    return max(0.0, balance)


def generate_schedule(
    principal: float,
    rate_per_period: float,
    total_periods: int,
    payment: Optional[float] = None,
    timing: Timing = Timing.END,
    start_date: Optional[date] = None,
    frequency: Frequency = Frequency.MONTHLY,
    epsilon: Optional[float] = None,
) -> ScheduleResult:
    """
    Generate a full amortization schedule.

    When ``payment`` is omitted it is solved with compute_payment(). A known
    payment is amortized as-is; once the balance reaches zero the remaining
    rows carry zero payments. The last row always pays off whatever balance
    is left, so the schedule length equals ``total_periods`` and the final
    balance is exactly zero.

    For an annuity due each payment settles the interest accrued during the
    previous period, so the first payment is entirely principal.

    Args:
        principal: Loan principal amount
        rate_per_period: Interest rate per payment period as decimal
        total_periods: Number of payments
        payment: Known level payment (optional)
        timing: END for an ordinary annuity, BEGINNING for an annuity due
        start_date: Date of first payment; rows are undated when omitted
        frequency: Payment frequency used to space payment dates
        epsilon: Balance at or below which the loan counts as paid off

    Returns:
        ScheduleResult, empty for invalid terms
    """
    if not _valid_terms(principal, rate_per_period, total_periods):
        return ScheduleResult()

    timing = Timing(timing)
    if payment is None:
        payment = compute_payment(principal, rate_per_period, total_periods, timing)
    if not math.isfinite(payment) or payment < 0:
        return ScheduleResult()

    result = ScheduleResult()
    totals = result.totals
    balance = principal
    accrued = 0.0

    for period in range(1, total_periods + 1):
        opening = balance

        if timing is Timing.BEGINNING:
            interest = accrued
        else:
            interest = balance * rate_per_period

        if period == total_periods:
            principal_pmt = balance
        else:
            principal_pmt = min(payment - interest, balance)
        period_payment = principal_pmt + interest

        balance = clamp_to_zero(balance - principal_pmt, epsilon)
        if period == total_periods:
            balance = 0.0

        if timing is Timing.BEGINNING:
            accrued = balance * rate_per_period

        totals.total_paid += period_payment
        totals.total_interest += interest
        totals.total_principal += principal_pmt

        result.periods.append(
            PeriodEntry(
                period=period,
                opening_balance=opening,
                payment=period_payment,
                interest=interest,
                principal=principal_pmt,
                closing_balance=balance,
                cumulative_interest=totals.total_interest,
                cumulative_principal=totals.total_principal,
                payment_date=(
                    start_date + period_offset(frequency, period - 1)
                    if start_date is not None
                    else None
                ),
            )
        )

    return result


def aggregate_periods(periods: List[PeriodEntry], window: int = 12) -> List[PeriodEntry]:
    """
    Roll consecutive rows up into larger periods (e.g. months into years).

    Interest, principal and payments are summed within each window; opening
    balance comes from the window's first row and closing balance from its
    last. A trailing partial window becomes its own row.
    """
    if window <= 0:
        raise ValueError("window must be positive")

    rolled = []
    for start in range(0, len(periods), window):
        chunk = periods[start : start + window]
        last = chunk[-1]
        rolled.append(
            PeriodEntry(
                period=start // window + 1,
                opening_balance=chunk[0].opening_balance,
                payment=sum(row.payment for row in chunk),
                interest=sum(row.interest for row in chunk),
                principal=sum(row.principal for row in chunk),
                closing_balance=last.closing_balance,
                cumulative_interest=last.cumulative_interest,
                cumulative_principal=last.cumulative_principal,
                payment_date=last.payment_date,
            )
        )
    return rolled
