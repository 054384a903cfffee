"""
Business Loan Calculator

Payment, schedule and fee-inclusive "real" APR for a business loan with
independent compounding and payback frequencies.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fincalc.calculations.amortization import PeriodEntry, generate_schedule
from fincalc.calculations.rates import Frequency, RateConfig, periods_per_year, total_periods
from fincalc.calculations.solver import solve_periodic_rate
from fincalc.config import get_settings
from fincalc.calculators.base import CalculatorInputs
from fincalc.errors import CalculationError

logger = logging.getLogger(__name__)


class BusinessLoanInputs(CalculatorInputs):
    """Input for business loan calculation."""

    loan_amount: float = 10000
    interest_rate: float = 10  # Percent
    compound: Frequency = Frequency.MONTHLY
    loan_term_years: int = 5
    loan_term_months: int = 0
    payback: Frequency = Frequency.MONTHLY
    origination_fee: float = 5  # Percent of loan, rolled into principal
    documentation_fee: float = 750  # Paid upfront
    other_fees: float = 0  # Paid upfront


@dataclass
class BusinessLoanResult:
    payment_amount: float = 0.0
    number_of_payments: int = 0
    total_payments: float = 0.0
    total_interest: float = 0.0
    total_fees: float = 0.0
    interest_plus_fees: float = 0.0
    real_apr: float = 0.0  # Percent
    real_apr_converged: bool = False
    principal_percent: float = 0.0
    interest_percent: float = 0.0
    fee_percent: float = 0.0
    schedule: List[PeriodEntry] = field(default_factory=list)
    error: Optional[str] = None


def calculate_business_loan(inputs: BusinessLoanInputs) -> BusinessLoanResult:
    """
    Calculate business loan payment, schedule and real APR.

    The origination fee is financed; documentation and other fees reduce the
    cash actually received. The real APR is the annualized rate at which the
    payments discount back to that net amount, clamped to [0, 200%].
    """
    if inputs.loan_amount <= 0 or inputs.interest_rate < 0:
        return BusinessLoanResult()
    if min(inputs.origination_fee, inputs.documentation_fee, inputs.other_fees) < 0:
        logger.info("Rejected business loan inputs with negative fees")
        return BusinessLoanResult(error="Fees cannot be negative")

    try:
        number_of_payments = total_periods(
            inputs.loan_term_years, inputs.loan_term_months, inputs.payback
        )
        rates = RateConfig(payment_frequency=inputs.payback, compound_frequency=inputs.compound)
        rate_per_payment = rates.rate_per_period(inputs.interest_rate)
    except CalculationError as e:
        return BusinessLoanResult(error=str(e))

    if number_of_payments <= 0:
        return BusinessLoanResult()

    origination_fee_amount = inputs.origination_fee / 100 * inputs.loan_amount
    upfront_fees = inputs.documentation_fee + inputs.other_fees
    total_fees = origination_fee_amount + upfront_fees
    principal_with_fees = inputs.loan_amount + origination_fee_amount

    schedule = generate_schedule(principal_with_fees, rate_per_payment, number_of_payments)
    payment_amount = schedule.payment
    total_payments = payment_amount * number_of_payments
    total_interest = total_payments - principal_with_fees

    payments_per_year = periods_per_year(inputs.payback)
    real_apr, converged = _real_apr(
        inputs.loan_amount - upfront_fees,
        payment_amount,
        number_of_payments,
        payments_per_year,
        guess=inputs.interest_rate / 100,
    )

    total_cost = total_payments + upfront_fees
    return BusinessLoanResult(
        payment_amount=payment_amount,
        number_of_payments=number_of_payments,
        total_payments=total_payments,
        total_interest=total_interest,
        total_fees=total_fees,
        interest_plus_fees=total_interest + total_fees,
        real_apr=real_apr * 100,
        real_apr_converged=converged,
        principal_percent=inputs.loan_amount / total_cost * 100,
        interest_percent=total_interest / total_cost * 100,
        fee_percent=total_fees / total_cost * 100,
        schedule=schedule.periods,
    )


def _real_apr(
    net_proceeds: float,
    payment_amount: float,
    number_of_payments: int,
    payments_per_year: int,
    guess: float,
):
    """Annual rate equating the payment stream with the net cash received."""
    settings = get_settings()
    cash_flows = [-net_proceeds] + [payment_amount] * number_of_payments

    try:
        root = solve_periodic_rate(
            cash_flows,
            guess=guess / payments_per_year,
            lower=settings.rate_floor / payments_per_year,
            upper=settings.rate_ceiling / payments_per_year,
        )
    except CalculationError as e:
        logger.info(f"Real APR unavailable: {e}")
        return 0.0, False

    return root.value * payments_per_year, root.converged
