"""
Take-Home Paycheck Calculator

Federal income tax, FICA and flat state/city taxes withheld from a salary,
annualized and per paycheck.
"""

from dataclasses import dataclass
from typing import Optional

from fincalc.calculations.rates import BUSINESS_DAYS, Frequency, periods_per_year
from fincalc.calculations.tax import (
    ADDITIONAL_MEDICARE_THRESHOLDS,
    FilingStatus,
    child_tax_credit,
    compute_tax,
    get_brackets,
    get_payroll_rates,
    get_standard_deduction,
    marginal_rate,
)
from fincalc.calculators.base import CalculatorInputs
from fincalc.errors import CalculationError


class PaycheckInputs(CalculatorInputs):
    """Input for take-home pay calculation."""

    salary: float = 80000
    pay_frequency: Frequency = Frequency.BIWEEKLY
    filing_status: FilingStatus = FilingStatus.SINGLE
    children_under_17: int = 0
    other_dependents: int = 0
    other_income: float = 0
    pretax_deductions: float = 6000
    deductions_not_withheld: float = 0
    itemized_deductions: float = 0
    state_tax_rate: float = 0  # Percent of AGI
    city_tax_rate: float = 0  # Percent of AGI
    self_employed: bool = False
    tax_year: Optional[int] = None


@dataclass
class PaycheckResult:
    gross_annual_income: float = 0.0
    adjusted_gross_income: float = 0.0
    taxable_income: float = 0.0
    federal_income_tax: float = 0.0
    child_tax_credit: float = 0.0
    federal_tax_after_credits: float = 0.0
    social_security_tax: float = 0.0
    medicare_tax: float = 0.0
    total_fica_tax: float = 0.0
    state_tax: float = 0.0
    city_tax: float = 0.0
    total_annual_deductions: float = 0.0
    annual_take_home: float = 0.0
    pay_periods_per_year: int = 0
    gross_paycheck: float = 0.0
    take_home_paycheck: float = 0.0
    deductions_per_paycheck: float = 0.0
    effective_tax_rate: float = 0.0  # Percent
    marginal_tax_rate: float = 0.0  # Percent
    error: Optional[str] = None


def calculate_paycheck(inputs: PaycheckInputs) -> PaycheckResult:
    """
    Estimate annual and per-paycheck take-home pay.

    Taxable income is AGI less the larger of the standard and itemized
    deductions and any deductions not withheld. Child credits offset federal
    tax down to zero. Self-employed workers pay both halves of FICA.
    """
    amounts = (
        inputs.salary,
        inputs.other_income,
        inputs.pretax_deductions,
        inputs.deductions_not_withheld,
        inputs.itemized_deductions,
        inputs.state_tax_rate,
        inputs.city_tax_rate,
    )
    if min(amounts) < 0 or inputs.children_under_17 < 0 or inputs.other_dependents < 0:
        return PaycheckResult(error="Income, deductions and rates cannot be negative")

    status = inputs.filing_status
    try:
        brackets = get_brackets(status, inputs.tax_year)
        standard_deduction = get_standard_deduction(status, inputs.tax_year)
        payroll = get_payroll_rates(inputs.tax_year)
    except CalculationError as e:
        return PaycheckResult(error=str(e))

    gross_annual_income = inputs.salary + inputs.other_income
    adjusted_gross_income = gross_annual_income - inputs.pretax_deductions

    deductions = max(inputs.itemized_deductions, standard_deduction)
    taxable_income = max(
        0.0, adjusted_gross_income - deductions - inputs.deductions_not_withheld
    )

    federal_income_tax = compute_tax(taxable_income, brackets)
    credits = child_tax_credit(inputs.children_under_17, inputs.other_dependents)
    federal_tax_after_credits = max(0.0, federal_income_tax - credits)

    fica_multiplier = payroll.self_employed_multiplier if inputs.self_employed else 1.0
    social_security_tax = (
        min(inputs.salary, payroll.social_security_wage_base)
        * payroll.social_security_rate
        * fica_multiplier
    )
    medicare_threshold = ADDITIONAL_MEDICARE_THRESHOLDS[status]
    medicare_tax = inputs.salary * payroll.medicare_rate * fica_multiplier
    if inputs.salary > medicare_threshold:
        medicare_tax += (inputs.salary - medicare_threshold) * payroll.additional_medicare_rate
    total_fica_tax = social_security_tax + medicare_tax

    state_tax = adjusted_gross_income * inputs.state_tax_rate / 100
    city_tax = adjusted_gross_income * inputs.city_tax_rate / 100

    total_annual_deductions = (
        federal_tax_after_credits
        + total_fica_tax
        + state_tax
        + city_tax
        + inputs.pretax_deductions
    )
    annual_take_home = gross_annual_income - total_annual_deductions

    pay_periods = periods_per_year(inputs.pay_frequency, daily_periods=BUSINESS_DAYS)

    effective_tax_rate = 0.0
    if gross_annual_income > 0:
        effective_tax_rate = (
            (total_annual_deductions - inputs.pretax_deductions) / gross_annual_income * 100
        )

    return PaycheckResult(
        gross_annual_income=gross_annual_income,
        adjusted_gross_income=adjusted_gross_income,
        taxable_income=taxable_income,
        federal_income_tax=federal_income_tax,
        child_tax_credit=credits,
        federal_tax_after_credits=federal_tax_after_credits,
        social_security_tax=social_security_tax,
        medicare_tax=medicare_tax,
        total_fica_tax=total_fica_tax,
        state_tax=state_tax,
        city_tax=city_tax,
        total_annual_deductions=total_annual_deductions,
        annual_take_home=annual_take_home,
        pay_periods_per_year=pay_periods,
        gross_paycheck=gross_annual_income / pay_periods,
        take_home_paycheck=annual_take_home / pay_periods,
        deductions_per_paycheck=total_annual_deductions / pay_periods,
        effective_tax_rate=effective_tax_rate,
        marginal_tax_rate=marginal_rate(taxable_income, brackets) * 100,
    )
