"""
Finance Calculator

Enter four of N, I/Y, PV, PMT and FV and solve for the fifth.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional

from fincalc.calculations.rates import Timing
from fincalc.calculations.tvm import (
    TVMPeriod,
    TVMTarget,
    future_value,
    generate_tvm_schedule,
    solve,
)
from fincalc.calculators.base import CalculatorInputs


class FinanceInputs(CalculatorInputs):
    """Input for a time-value-of-money calculation; blank fields are None."""

    n: Optional[float] = 10
    iy: Optional[float] = 6  # Annual percent
    pv: Optional[float] = 20000
    pmt: Optional[float] = -2000
    fv: Optional[float] = None
    payment_timing: Timing = Timing.END
    compounding_frequency: int = 1
    calculate_for: TVMTarget = TVMTarget.FV


@dataclass
class FinanceResult:
    calculated_value: float = 0.0
    converged: bool = True
    total_payments: float = 0.0
    total_interest: float = 0.0
    schedule: List[TVMPeriod] = field(default_factory=list)
    schedule_truncated: bool = False
    error: Optional[str] = None


def calculate_finance(inputs: FinanceInputs) -> FinanceResult:
    """
    Solve the selected TVM variable and build its period ledger.

    I/Y is entered and reported as an annual percentage; the engine works
    with the rate per compounding period.
    """
    if inputs.compounding_frequency <= 0:
        return FinanceResult(error="Compounding frequency must be positive")

    frequency = inputs.compounding_frequency
    rate = inputs.iy / 100 / frequency if inputs.iy is not None else None
    target = inputs.calculate_for

    solution = solve(
        target,
        n=inputs.n,
        rate=rate,
        pv=inputs.pv,
        pmt=inputs.pmt,
        fv=inputs.fv,
        timing=inputs.payment_timing,
    )
    if not solution.ok:
        return FinanceResult(converged=False, error=solution.error)

    n, pv, pmt = inputs.n, inputs.pv, inputs.pmt
    calculated_value = solution.value
    if target is TVMTarget.N:
        n = solution.value
    elif target is TVMTarget.PV:
        pv = solution.value
    elif target is TVMTarget.PMT:
        pmt = solution.value
    elif target is TVMTarget.IY:
        rate = solution.value
        calculated_value = solution.value * 100 * frequency

    whole_periods = math.floor(n)
    schedule = generate_tvm_schedule(pv, pmt, rate, whole_periods, inputs.payment_timing)

    total_interest = schedule.total_interest
    if schedule.truncated:
        # Interest over the full term from the closing value of the last period
        closing = -future_value(pv, pmt, rate, whole_periods, inputs.payment_timing)
        total_interest = closing - pv - pmt * whole_periods

    return FinanceResult(
        calculated_value=calculated_value,
        converged=solution.converged,
        total_payments=pmt * n,
        total_interest=total_interest,
        schedule=schedule.periods,
        schedule_truncated=schedule.truncated,
    )
