"""
Annuity Accumulation

Year-by-year and month-by-month growth of a starting principal with annual
and monthly contributions made at the beginning or end of each period.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from fincalc.calculations.rates import Timing


@dataclass
class AccumulationEntry:
    """One year (or month) of accumulation."""

    period: int
    addition: float
    growth: float
    ending_balance: float


@dataclass
class AccumulationResult:
    starting_principal: float = 0.0
    end_balance: float = 0.0
    total_additions: float = 0.0
    total_return: float = 0.0
    yearly_schedule: List[AccumulationEntry] = field(default_factory=list)
    monthly_schedule: List[AccumulationEntry] = field(default_factory=list)
    error: Optional[str] = None


def _invalid_reason(
    principal: float,
    annual_contribution: float,
    monthly_contribution: float,
    rate_percent: float,
) -> Optional[str]:
    values = {
        "principal": principal,
        "annual contribution": annual_contribution,
        "monthly contribution": monthly_contribution,
        "rate": rate_percent,
    }
    for name, value in values.items():
        if value is None or not math.isfinite(value):
            return f"{name} must be a finite number"
    if principal < 0 or annual_contribution < 0 or monthly_contribution < 0:
        return "principal and contributions cannot be negative"
    if rate_percent <= -100:
        return "rate must be greater than -100%"
    return None


def accumulate(
    principal: float,
    annual_contribution: float,
    monthly_contribution: float,
    rate_percent: float,
    years: int,
    timing: Timing = Timing.END,
) -> AccumulationResult:
    """
    Project a balance forward with periodic contributions.

    Beginning-of-period contributions are added before that period's growth
    is applied, end-of-period contributions after it, so beginning timing
    always ends higher for a positive rate.

    With monthly contributions every year is simulated month by month,
    compounding at rate/12 and interleaving each monthly contribution with
    growth; the annual contribution lands in the first month (beginning) or
    after the last month (end). Without monthly contributions growth
    compounds once a year.

    Args:
        principal: Starting balance
        annual_contribution: Amount added once per year
        monthly_contribution: Amount added every month
        rate_percent: Annual growth rate in percent
        years: Number of years to project
        timing: When contributions are made

    Returns:
        AccumulationResult; empty schedules when years <= 0
    """
    error = _invalid_reason(principal, annual_contribution, monthly_contribution, rate_percent)
    if error:
        return AccumulationResult(error=error)

    if years <= 0:
        return AccumulationResult(starting_principal=principal, end_balance=principal)

    beginning = Timing(timing) is Timing.BEGINNING
    rate = rate_percent / 100
    monthly_rate = rate / 12

    yearly_schedule = []
    balance = principal
    total_additions = 0.0

    for year in range(1, years + 1):
        year_start_balance = balance
        year_addition = 0.0

        if beginning:
            balance += annual_contribution
            year_addition += annual_contribution

        if monthly_contribution > 0:
            for _ in range(12):
                if beginning:
                    balance += monthly_contribution
                    balance *= 1 + monthly_rate
                else:
                    balance *= 1 + monthly_rate
                    balance += monthly_contribution
                year_addition += monthly_contribution
        else:
            balance *= 1 + rate

        if not beginning:
            balance += annual_contribution
            year_addition += annual_contribution

        total_additions += year_addition
        yearly_schedule.append(
            AccumulationEntry(
                period=year,
                addition=year_addition,
                growth=balance - year_start_balance - year_addition,
                ending_balance=balance,
            )
        )

    return AccumulationResult(
        starting_principal=principal,
        end_balance=balance,
        total_additions=total_additions,
        total_return=balance - principal - total_additions,
        yearly_schedule=yearly_schedule,
        monthly_schedule=_monthly_schedule(
            principal, annual_contribution, monthly_contribution, rate, years, beginning
        ),
    )


def _monthly_schedule(
    principal: float,
    annual_contribution: float,
    monthly_contribution: float,
    rate: float,
    years: int,
    beginning: bool,
) -> List[AccumulationEntry]:
    """
    Month-level ledger that reconciles with the yearly schedule.

    When there are no monthly contributions growth compounds annually, so
    each month grows at the equivalent rate (1 + rate)^(1/12) - 1.
    """
    if monthly_contribution > 0:
        monthly_rate = rate / 12
    else:
        monthly_rate = (1 + rate) ** (1 / 12) - 1

    schedule = []
    balance = principal

    for month in range(1, years * 12 + 1):
        month_start_balance = balance
        addition = 0.0
        month_of_year = (month - 1) % 12 + 1

        if beginning:
            if month_of_year == 1:
                balance += annual_contribution
                addition += annual_contribution
            balance += monthly_contribution
            addition += monthly_contribution
            balance *= 1 + monthly_rate
        else:
            balance *= 1 + monthly_rate
            balance += monthly_contribution
            addition += monthly_contribution
            if month_of_year == 12:
                balance += annual_contribution
                addition += annual_contribution

        schedule.append(
            AccumulationEntry(
                period=month,
                addition=addition,
                growth=balance - month_start_balance - addition,
                ending_balance=balance,
            )
        )

    return schedule
