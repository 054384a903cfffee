"""
Time Value of Money

Closed-form solutions for FV, PV, PMT and N and a Newton-Raphson solver
for the periodic rate, matching Excel's FV/PV/PMT/NPER/RATE functions.

Sign convention follows cash flows: money received is positive, money paid
out is negative, so PV and FV of a savings plan have opposite signs.
``timing`` selects end-of-period (ordinary) or beginning-of-period
(annuity due) payments.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fincalc.calculations.rates import Timing, require_finite
from fincalc.calculations.solver import RootResult, newton_raphson
from fincalc.config import get_settings
from fincalc.errors import CalculationError, InvalidInputError, NoSolutionError

logger = logging.getLogger(__name__)

# Below this magnitude the annuity factor is evaluated by its series limit
SMALL_RATE = 1e-10


class TVMTarget(str, Enum):
    N = "n"
    IY = "iy"
    PV = "pv"
    PMT = "pmt"
    FV = "fv"


@dataclass
class TVMSolution:
    """Solved value and whether it can be trusted as exact."""

    target: TVMTarget
    value: float
    converged: bool = True
    iterations: int = 0
    error: Optional[str] = None

    @property
    def approximate(self) -> bool:
        return not self.converged

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class TVMPeriod:
    period: int
    pv: float
    pmt: float
    interest: float
    fv: float


@dataclass
class TVMSchedule:
    periods: List[TVMPeriod] = field(default_factory=list)
    total_payments: float = 0.0
    total_interest: float = 0.0
    truncated: bool = False


def _annuity_factor(rate: float, n: float) -> float:
    """((1 + r)^n - 1) / r, with its limit n at r = 0."""
    if abs(rate) < SMALL_RATE:
        return n
    return ((1 + rate) ** n - 1) / rate


def _annuity_factor_derivative(rate: float, n: float) -> float:
    if abs(rate) < SMALL_RATE:
        return n * (n - 1) / 2
    growth = (1 + rate) ** n
    return (n * (1 + rate) ** (n - 1) * rate - (growth - 1)) / (rate * rate)


def future_value(pv: float, pmt: float, rate: float, n: float, timing: Timing = Timing.END) -> float:
    """Calculate FV. Matches Excel's FV()."""
    t = Timing(timing).type_flag
    if rate == 0:
        return -(pv + pmt * n)

    factor = (1 + rate) ** n
    return -(pv * factor + pmt * (factor - 1) / rate * (1 + rate * t))


def present_value(fv: float, pmt: float, rate: float, n: float, timing: Timing = Timing.END) -> float:
    """Calculate PV. Matches Excel's PV()."""
    t = Timing(timing).type_flag
    if rate == 0:
        return -(fv + pmt * n)

    factor = (1 + rate) ** n
    return -(fv / factor + pmt * (factor - 1) / (rate * factor) * (1 + rate * t))


def payment(pv: float, fv: float, rate: float, n: float, timing: Timing = Timing.END) -> float:
    """Calculate PMT. Matches Excel's PMT()."""
    if n == 0:
        raise InvalidInputError("number of periods must be non-zero to solve for PMT")

    t = Timing(timing).type_flag
    if rate == 0:
        return -(pv + fv) / n

    factor = (1 + rate) ** n
    return -(pv * rate * factor + fv * rate) / ((factor - 1) * (1 + rate * t))


def number_of_periods(pv: float, fv: float, pmt: float, rate: float, timing: Timing = Timing.END) -> float:
    """
    Calculate N. Matches Excel's NPER().

    Raises:
        NoSolutionError: When the signs of PV, PMT and FV cannot balance
    """
    t = Timing(timing).type_flag
    if rate == 0:
        if pmt == 0:
            raise NoSolutionError("N is undefined with zero rate and zero payment")
        return -(pv + fv) / pmt

    if rate <= -1:
        raise NoSolutionError("rate must be greater than -100% to solve for N")

    if pmt == 0:
        if pv == 0:
            raise NoSolutionError("N is undefined with zero present value and zero payment")
        ratio = -fv / pv
        if ratio <= 0:
            raise NoSolutionError("PV and FV must have opposite signs to solve for N")
        return math.log(ratio) / math.log(1 + rate)

    adjusted_pmt = pmt * (1 + rate * t)
    denominator = adjusted_pmt + pv * rate
    if denominator == 0:
        raise NoSolutionError("payment only covers interest; N is unbounded")

    ratio = (adjusted_pmt - fv * rate) / denominator
    if ratio <= 0:
        raise NoSolutionError("PV, PMT and FV signs admit no solution for N")
    return math.log(ratio) / math.log(1 + rate)


def _balance_equation(pv: float, fv: float, pmt: float, n: float, t: int):
    def func(rate: float) -> float:
        return pv * (1 + rate) ** n + pmt * _annuity_factor(rate, n) * (1 + rate * t) + fv

    def derivative(rate: float) -> float:
        return (
            pv * n * (1 + rate) ** (n - 1)
            + pmt * _annuity_factor_derivative(rate, n) * (1 + rate * t)
            + pmt * _annuity_factor(rate, n) * t
        )

    return func, derivative


def solve_rate(
    pv: float,
    fv: float,
    pmt: float,
    n: float,
    timing: Timing = Timing.END,
    guess: Optional[float] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> RootResult:
    """
    Solve for the periodic rate with Newton-Raphson. Matches Excel's RATE().

    The derivative is taken analytically from the FV equation. Estimates are
    clamped to the configured [rate_floor, rate_ceiling] range; a result with
    ``converged=False`` is the best estimate, not an exact rate.
    """
    if n <= 0:
        raise InvalidInputError("number of periods must be positive to solve for I/Y")

    settings = get_settings()
    func, derivative = _balance_equation(pv, fv, pmt, n, Timing(timing).type_flag)
    return newton_raphson(
        func,
        derivative,
        guess=guess,
        lower=settings.rate_floor if lower is None else lower,
        upper=settings.rate_ceiling if upper is None else upper,
    )


def solve(
    target: TVMTarget,
    n: Optional[float] = None,
    rate: Optional[float] = None,
    pv: Optional[float] = None,
    pmt: Optional[float] = None,
    fv: Optional[float] = None,
    timing: Timing = Timing.END,
) -> TVMSolution:
    """
    Given four of N, I/Y (per-period decimal), PV, PMT and FV, solve the fifth.

    Never raises for bad inputs: the solution carries ``error`` instead.
    """
    target = TVMTarget(target)
    known = {"n": n, "iy": rate, "pv": pv, "pmt": pmt, "fv": fv}

    try:
        for name, value in known.items():
            if name == target.value:
                continue
            if value is None:
                raise InvalidInputError(f"{name.upper()} is required to solve for {target.name}")
            require_finite(name.upper(), value)

        if target is not TVMTarget.IY and rate <= -1:
            raise InvalidInputError("I/Y must be greater than -100% per period")

        if target is TVMTarget.FV:
            return TVMSolution(target, future_value(pv, pmt, rate, n, timing))
        if target is TVMTarget.PV:
            return TVMSolution(target, present_value(fv, pmt, rate, n, timing))
        if target is TVMTarget.PMT:
            return TVMSolution(target, payment(pv, fv, rate, n, timing))
        if target is TVMTarget.N:
            return TVMSolution(target, number_of_periods(pv, fv, pmt, rate, timing))

        root = solve_rate(pv, fv, pmt, n, timing)
        return TVMSolution(
            target, root.value, converged=root.converged, iterations=root.iterations
        )
    except (CalculationError, OverflowError, ZeroDivisionError) as e:
        return TVMSolution(target, 0.0, converged=False, error=str(e))


def generate_tvm_schedule(
    pv: float,
    pmt: float,
    rate: float,
    n: int,
    timing: Timing = Timing.END,
    max_periods: Optional[int] = None,
) -> TVMSchedule:
    """
    Roll the PV forward one period at a time.

    Each row shows the opening value, the payment, the interest earned and
    the closing value. The closing value of the last row is -FV under the
    cash flow sign convention.

    At most ``max_periods`` rows are built (defaults to the configured
    ledger cap); a longer term is cut short and flagged ``truncated``, with
    totals covering the listed rows only.
    """
    if max_periods is None:
        max_periods = get_settings().tvm_schedule_max_periods

    schedule = TVMSchedule()
    beginning = Timing(timing) is Timing.BEGINNING
    current = pv

    periods = max(int(n), 0)
    if periods > max_periods:
        logger.warning(f"TVM ledger of {periods} periods cut to {max_periods}")
        schedule.truncated = True
        periods = max_periods

    for period in range(1, periods + 1):
        if beginning:
            interest = (current + pmt) * rate
        else:
            interest = current * rate
        closing = current + interest + pmt

        schedule.periods.append(
            TVMPeriod(period=period, pv=current, pmt=pmt, interest=interest, fv=closing)
        )
        schedule.total_payments += pmt
        schedule.total_interest += interest
        current = closing

    return schedule
