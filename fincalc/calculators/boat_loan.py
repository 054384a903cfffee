"""
Boat Loan Calculator

Monthly payment, total cost and amortization schedule for a boat purchase
with down payment, trade-in, sales tax and financed fees.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from fincalc.calculations.amortization import (
    PeriodEntry,
    aggregate_periods,
    compute_payment,
    generate_schedule,
)
from fincalc.calculations.rates import Frequency, effective_rate_per_period, total_periods
from fincalc.calculators.base import CalculatorInputs
from fincalc.errors import CalculationError

logger = logging.getLogger(__name__)


class BoatLoanInputs(CalculatorInputs):
    """Input for boat loan calculation."""

    boat_price: float = 35000
    down_payment: float = 7000
    trade_in_value: float = 0
    sales_tax_rate: float = 7  # Percent
    fees: float = 2000  # Financed with the loan
    interest_rate: float = 7  # Percent
    loan_term_years: int = 10


@dataclass
class BoatLoanResult:
    total_loan_amount: float = 0.0
    sales_tax: float = 0.0
    upfront_payment: float = 0.0
    monthly_payment: float = 0.0
    total_loan_payments: float = 0.0
    total_loan_interest: float = 0.0
    total_cost: float = 0.0
    principal_percentage: float = 0.0
    interest_percentage: float = 0.0
    monthly_schedule: List[PeriodEntry] = field(default_factory=list)
    annual_schedule: List[PeriodEntry] = field(default_factory=list)
    error: Optional[str] = None


def calculate_boat_loan(inputs: BoatLoanInputs) -> BoatLoanResult:
    """
    Calculate boat loan payment and schedule.

    Sales tax applies to the price less trade-in and is paid upfront with
    the down payment. Fees are rolled into the loan.
    """
    if inputs.boat_price <= 0 or inputs.loan_term_years <= 0:
        return BoatLoanResult()

    if min(inputs.down_payment, inputs.trade_in_value, inputs.sales_tax_rate, inputs.fees) < 0:
        logger.info("Rejected boat loan inputs with negative amounts")
        return BoatLoanResult(error="Amounts and rates cannot be negative")

    try:
        monthly_rate = effective_rate_per_period(inputs.interest_rate, Frequency.MONTHLY)
        number_of_payments = total_periods(inputs.loan_term_years, frequency=Frequency.MONTHLY)
    except CalculationError as e:
        return BoatLoanResult(error=str(e))

    sales_tax = (inputs.boat_price - inputs.trade_in_value) * inputs.sales_tax_rate / 100
    loan_amount = inputs.boat_price - inputs.down_payment - inputs.trade_in_value + inputs.fees
    upfront_payment = inputs.down_payment + sales_tax

    monthly_payment = compute_payment(loan_amount, monthly_rate, number_of_payments)
    schedule = generate_schedule(loan_amount, monthly_rate, number_of_payments, payment=monthly_payment)

    total_loan_payments = monthly_payment * number_of_payments
    total_loan_interest = max(0.0, total_loan_payments - loan_amount)

    result = BoatLoanResult(
        total_loan_amount=loan_amount,
        sales_tax=sales_tax,
        upfront_payment=upfront_payment,
        monthly_payment=monthly_payment,
        total_loan_payments=total_loan_payments,
        total_loan_interest=total_loan_interest,
        total_cost=inputs.boat_price + total_loan_interest + sales_tax + inputs.fees,
        monthly_schedule=schedule.periods,
        annual_schedule=aggregate_periods(schedule.periods, window=12),
    )

    if loan_amount > 0 and total_loan_payments > 0:
        result.principal_percentage = loan_amount / total_loan_payments * 100
        result.interest_percentage = total_loan_interest / total_loan_payments * 100

    return result
