"""
Root Finding and NPV

Bounded Newton-Raphson iteration shared by the TVM rate solver and the
business loan APR, plus NPV/IRR helpers for periodic cash flows.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Optional

from fincalc.config import get_settings
from fincalc.errors import InvalidInputError

logger = logging.getLogger(__name__)

# Derivatives smaller than this stall the iteration
MIN_DERIVATIVE = 1e-12


@dataclass
class RootResult:
    """Outcome of a bounded iteration."""

    value: float
    converged: bool
    iterations: int

    @property
    def approximate(self) -> bool:
        return not self.converged


def newton_raphson(
    func: Callable[[float], float],
    derivative: Callable[[float], float],
    guess: Optional[float] = None,
    tolerance: Optional[float] = None,
    max_iterations: Optional[int] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> RootResult:
    """
    Find a root of ``func`` with Newton-Raphson.

    Iterates until successive estimates differ by less than ``tolerance`` or
    ``max_iterations`` elapse. Each estimate is clamped to [lower, upper]
    when bounds are given. Never raises for non-convergence: the best
    estimate is returned with ``converged=False``.
    """
    settings = get_settings()
    rate = settings.newton_initial_guess if guess is None else guess
    tolerance = settings.newton_tolerance if tolerance is None else tolerance
    if max_iterations is None:
        max_iterations = settings.newton_max_iterations

    for iteration in range(1, max_iterations + 1):
        try:
            value = func(rate)
            slope = derivative(rate)
        except (OverflowError, ZeroDivisionError):
            logger.warning(f"Newton-Raphson diverged at estimate {rate}")
            return RootResult(value=rate, converged=False, iterations=iteration)

        if not math.isfinite(value) or not math.isfinite(slope) or abs(slope) < MIN_DERIVATIVE:
            logger.warning(f"Newton-Raphson stalled at estimate {rate}")
            return RootResult(value=rate, converged=False, iterations=iteration)

        step_rate = rate - value / slope
        new_rate = step_rate
        if lower is not None:
            new_rate = max(lower, new_rate)
        if upper is not None:
            new_rate = min(upper, new_rate)

        if abs(new_rate - rate) < tolerance:
            # Pinned against a bound: the root lies outside the allowed range
            pinned = abs(step_rate - new_rate) >= tolerance
            if pinned:
                logger.warning(f"Newton-Raphson estimate pinned at bound {new_rate}")
            return RootResult(value=new_rate, converged=not pinned, iterations=iteration)

        rate = new_rate

    logger.warning(
        f"Newton-Raphson did not converge after {max_iterations} iterations"
    )
    return RootResult(value=rate, converged=False, iterations=max_iterations)


def calculate_npv(cash_flows: List[float], discount_rate: float) -> float:
    """
    Calculate NPV (Net Present Value) of periodic cash flows.

    Args:
        cash_flows: Cash flows starting at period 0 (negative = outflow)
        discount_rate: Rate per period as decimal

    Returns:
        NPV value
    """
    npv = 0.0
    for period, cf in enumerate(cash_flows):
        npv += cf / ((1 + discount_rate) ** period)
    return npv


def _npv_derivative(cash_flows: List[float], rate: float) -> float:
    """Calculate derivative of NPV with respect to rate (for Newton-Raphson)."""
    dnpv = 0.0
    for period, cf in enumerate(cash_flows):
        dnpv -= (period * cf) / ((1 + rate) ** (period + 1))
    return dnpv


def solve_periodic_rate(
    cash_flows: List[float],
    guess: Optional[float] = None,
    lower: Optional[float] = None,
    upper: Optional[float] = None,
) -> RootResult:
    """
    Find the per-period rate at which the cash flows' NPV is zero (IRR).

    Args:
        cash_flows: Periodic cash flows starting at period 0
        guess: Initial estimate (defaults to the configured guess)
        lower: Smallest rate the iteration may reach
        upper: Largest rate the iteration may reach

    Raises:
        InvalidInputError: If the cash flows cannot have an IRR
    """
    if len(cash_flows) < 2:
        raise InvalidInputError("At least 2 cash flows required")

    has_positive = any(cf > 0 for cf in cash_flows)
    has_negative = any(cf < 0 for cf in cash_flows)

    if not has_positive or not has_negative:
        raise InvalidInputError("Cash flows must contain both positive and negative values")

    return newton_raphson(
        lambda rate: calculate_npv(cash_flows, rate),
        lambda rate: _npv_derivative(cash_flows, rate),
        guess=guess,
        lower=lower,
        upper=upper,
    )
