"""
Federal Income and Payroll Tax

Progressive bracket tax over static, per-year tables. Adding a tax year
means adding tables here, not changing the calculation.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

from fincalc.config import get_settings
from fincalc.errors import InvalidInputError


class FilingStatus(str, Enum):
    SINGLE = "single"
    MARRIED_JOINT = "married-joint"
    MARRIED_SEPARATE = "married-separate"
    HEAD_OF_HOUSEHOLD = "head"
    QUALIFYING_WIDOW = "widow"


@dataclass(frozen=True)
class TaxBracket:
    lower: float
    upper: float
    rate: float


@dataclass(frozen=True)
class PayrollTaxRates:
    """FICA parameters for one tax year."""

    social_security_wage_base: float
    social_security_rate: float = 0.062
    medicare_rate: float = 0.0145
    additional_medicare_rate: float = 0.009
    self_employed_multiplier: float = 2.0


def _brackets(*rows: Tuple[float, float]) -> Tuple[TaxBracket, ...]:
    """Build a table from (lower bound, rate) rows; the last bracket is open-ended."""
    uppers = [lower for lower, _ in rows[1:]] + [math.inf]
    return tuple(
        TaxBracket(lower=lower, upper=upper, rate=rate)
        for (lower, rate), upper in zip(rows, uppers)
    )


BRACKETS: Dict[int, Dict[FilingStatus, Tuple[TaxBracket, ...]]] = {
    2024: {
        FilingStatus.SINGLE: _brackets(
            (0, 0.10), (11600, 0.12), (47150, 0.22), (100525, 0.24),
            (191950, 0.32), (243725, 0.35), (609350, 0.37),
        ),
        FilingStatus.MARRIED_JOINT: _brackets(
            (0, 0.10), (23200, 0.12), (94300, 0.22), (201050, 0.24),
            (383900, 0.32), (487450, 0.35), (731200, 0.37),
        ),
        FilingStatus.MARRIED_SEPARATE: _brackets(
            (0, 0.10), (11600, 0.12), (47150, 0.22), (100525, 0.24),
            (191950, 0.32), (243725, 0.35), (365600, 0.37),
        ),
        FilingStatus.HEAD_OF_HOUSEHOLD: _brackets(
            (0, 0.10), (16550, 0.12), (63100, 0.22), (100500, 0.24),
            (191950, 0.32), (243700, 0.35), (609350, 0.37),
        ),
        FilingStatus.QUALIFYING_WIDOW: _brackets(
            (0, 0.10), (23200, 0.12), (94300, 0.22), (201050, 0.24),
            (383900, 0.32), (487450, 0.35), (731200, 0.37),
        ),
    },
    2025: {
        FilingStatus.SINGLE: _brackets(
            (0, 0.10), (11925, 0.12), (48475, 0.22), (103350, 0.24),
            (197300, 0.32), (250525, 0.35), (626350, 0.37),
        ),
        FilingStatus.MARRIED_JOINT: _brackets(
            (0, 0.10), (23850, 0.12), (96950, 0.22), (206700, 0.24),
            (394600, 0.32), (501050, 0.35), (751600, 0.37),
        ),
        FilingStatus.MARRIED_SEPARATE: _brackets(
            (0, 0.10), (11925, 0.12), (48475, 0.22), (103350, 0.24),
            (197300, 0.32), (250525, 0.35), (375800, 0.37),
        ),
        FilingStatus.HEAD_OF_HOUSEHOLD: _brackets(
            (0, 0.10), (17000, 0.12), (64850, 0.22), (103350, 0.24),
            (197300, 0.32), (250500, 0.35), (626350, 0.37),
        ),
        FilingStatus.QUALIFYING_WIDOW: _brackets(
            (0, 0.10), (23850, 0.12), (96950, 0.22), (206700, 0.24),
            (394600, 0.32), (501050, 0.35), (751600, 0.37),
        ),
    },
}

STANDARD_DEDUCTIONS: Dict[int, Dict[FilingStatus, float]] = {
    2024: {
        FilingStatus.SINGLE: 14600,
        FilingStatus.MARRIED_JOINT: 29200,
        FilingStatus.MARRIED_SEPARATE: 14600,
        FilingStatus.HEAD_OF_HOUSEHOLD: 21900,
        FilingStatus.QUALIFYING_WIDOW: 29200,
    },
    2025: {
        FilingStatus.SINGLE: 15000,
        FilingStatus.MARRIED_JOINT: 30000,
        FilingStatus.MARRIED_SEPARATE: 15000,
        FilingStatus.HEAD_OF_HOUSEHOLD: 22500,
        FilingStatus.QUALIFYING_WIDOW: 30000,
    },
}

PAYROLL_TAX: Dict[int, PayrollTaxRates] = {
    2024: PayrollTaxRates(social_security_wage_base=168600),
    2025: PayrollTaxRates(social_security_wage_base=176100),
}

# Additional Medicare tax thresholds are not indexed to inflation
ADDITIONAL_MEDICARE_THRESHOLDS: Dict[FilingStatus, float] = {
    FilingStatus.SINGLE: 200000,
    FilingStatus.MARRIED_JOINT: 250000,
    FilingStatus.MARRIED_SEPARATE: 125000,
    FilingStatus.HEAD_OF_HOUSEHOLD: 200000,
    FilingStatus.QUALIFYING_WIDOW: 200000,
}

CHILD_TAX_CREDIT = 2000
OTHER_DEPENDENT_CREDIT = 500


def _tax_year(year: Optional[int]) -> int:
    year = get_settings().tax_year if year is None else year
    if year not in BRACKETS:
        raise InvalidInputError(f"No tax tables for {year}")
    return year


def get_brackets(status: FilingStatus, year: Optional[int] = None) -> Tuple[TaxBracket, ...]:
    """Look up the bracket table for a filing status and tax year."""
    return BRACKETS[_tax_year(year)][FilingStatus(status)]


def get_standard_deduction(status: FilingStatus, year: Optional[int] = None) -> float:
    return STANDARD_DEDUCTIONS[_tax_year(year)][FilingStatus(status)]


def get_payroll_rates(year: Optional[int] = None) -> PayrollTaxRates:
    return PAYROLL_TAX[_tax_year(year)]


def compute_tax(taxable_income: float, brackets: Tuple[TaxBracket, ...]) -> float:
    """
    Calculate progressive tax on taxable income.

    Only the slice of income inside each bracket is taxed at that bracket's
    rate. Non-positive or non-finite income owes nothing.

    Args:
        taxable_income: Income after deductions
        brackets: Ascending bracket table

    Returns:
        Total tax
    """
    if not math.isfinite(taxable_income) or taxable_income <= 0:
        return 0.0

    tax = 0.0
    for bracket in brackets:
        if taxable_income <= bracket.lower:
            break
        tax += (min(taxable_income, bracket.upper) - bracket.lower) * bracket.rate
        if taxable_income <= bracket.upper:
            break

    return tax


def marginal_rate(taxable_income: float, brackets: Tuple[TaxBracket, ...]) -> float:
    """Rate applied to the next dollar of taxable income."""
    if not brackets:
        return 0.0
    for bracket in brackets:
        if taxable_income < bracket.upper:
            return bracket.rate
    return brackets[-1].rate


def child_tax_credit(children_under_17: int, other_dependents: int) -> float:
    return children_under_17 * CHILD_TAX_CREDIT + other_dependents * OTHER_DEPENDENT_CREDIT
