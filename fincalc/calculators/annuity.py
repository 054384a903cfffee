"""
Annuity Calculator

Growth of a starting principal with annual and monthly additions.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from fincalc.calculations.annuity import AccumulationEntry, accumulate
from fincalc.calculations.rates import Timing
from fincalc.calculators.base import CalculatorInputs


class AnnuityInputs(CalculatorInputs):
    """Input for annuity accumulation."""

    starting_principal: float = 20000
    annual_addition: float = 10000
    monthly_addition: float = 0
    addition_timing: Timing = Timing.END
    growth_rate: float = 6  # Percent
    years: int = 10


@dataclass
class AnnuityResult:
    end_balance: float = 0.0
    total_additions: float = 0.0
    total_return: float = 0.0
    principal_percent: float = 0.0
    additions_percent: float = 0.0
    return_percent: float = 0.0
    yearly_schedule: List[AccumulationEntry] = field(default_factory=list)
    monthly_schedule: List[AccumulationEntry] = field(default_factory=list)
    error: Optional[str] = None


def calculate_annuity(inputs: AnnuityInputs) -> AnnuityResult:
    """Project the annuity balance and split the end balance by source."""
    accumulation = accumulate(
        principal=inputs.starting_principal,
        annual_contribution=inputs.annual_addition,
        monthly_contribution=inputs.monthly_addition,
        rate_percent=inputs.growth_rate,
        years=inputs.years,
        timing=inputs.addition_timing,
    )
    if accumulation.error:
        return AnnuityResult(error=accumulation.error)

    end_balance = accumulation.end_balance
    result = AnnuityResult(
        end_balance=end_balance,
        total_additions=accumulation.total_additions,
        total_return=accumulation.total_return,
        yearly_schedule=accumulation.yearly_schedule,
        monthly_schedule=accumulation.monthly_schedule,
    )

    if end_balance > 0:
        result.principal_percent = inputs.starting_principal / end_balance * 100
        result.additions_percent = accumulation.total_additions / end_balance * 100
        result.return_percent = accumulation.total_return / end_balance * 100

    return result
