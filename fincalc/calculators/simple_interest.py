"""
Simple Interest Calculator

Interest on the original principal only, I = P x r x t.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fincalc.calculators.base import CalculatorInputs

logger = logging.getLogger(__name__)


class InterestFrequency(str, Enum):
    YEARLY = "yearly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    DAILY = "daily"


PERIODS = {
    InterestFrequency.YEARLY: 1,
    InterestFrequency.MONTHLY: 12,
    InterestFrequency.QUARTERLY: 4,
    InterestFrequency.DAILY: 365,
}


class SimpleInterestInputs(CalculatorInputs):
    """Input for simple interest calculation."""

    principal: float = 20000
    rate: float = 3  # Annual percent
    time: float = 0  # Years
    frequency: InterestFrequency = InterestFrequency.YEARLY


@dataclass
class SimpleInterestYear:
    year: int
    interest: float
    balance: float
    cumulative_interest: float


@dataclass
class SimpleInterestResult:
    end_balance: float = 0.0
    total_interest: float = 0.0
    yearly_interest: float = 0.0
    monthly_interest: float = 0.0
    schedule: List[SimpleInterestYear] = field(default_factory=list)
    error: Optional[str] = None


def calculate_simple_interest(inputs: SimpleInterestInputs) -> SimpleInterestResult:
    """
    Calculate simple interest over the term.

    Interest accrues per period at rate / periods, so the frequency changes
    when interest is credited, not how much is earned. Partial final years
    are included in the totals; the schedule lists whole years only.
    """
    principal, rate, time = inputs.principal, inputs.rate, inputs.time

    if principal <= 0 or rate < 0 or time <= 0 or not math.isfinite(time):
        logger.info("Rejected simple interest inputs")
        return SimpleInterestResult(
            error="Please enter valid positive values for principal and time, and non-negative rate."
        )

    periods = PERIODS[inputs.frequency]
    rate_per_period = rate / 100 / periods
    total_interest = principal * rate_per_period * time * periods

    yearly_interest = total_interest / time
    schedule = [
        SimpleInterestYear(
            year=year,
            interest=yearly_interest,
            balance=principal + yearly_interest * year,
            cumulative_interest=yearly_interest * year,
        )
        for year in range(1, int(time) + 1)
    ]

    return SimpleInterestResult(
        end_balance=principal + total_interest,
        total_interest=total_interest,
        yearly_interest=yearly_interest,
        monthly_interest=total_interest / (time * 12),
        schedule=schedule,
    )
