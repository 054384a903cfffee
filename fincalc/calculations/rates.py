"""
Rate and Period Conversions

Maps payment/compounding frequencies to periods per year and converts
nominal annual rates into effective per-period rates.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dateutil.relativedelta import relativedelta

from fincalc.config import get_settings
from fincalc.errors import InvalidInputError


class Frequency(str, Enum):
    """How often a payment is made or interest is compounded."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    SEMIMONTHLY = "semimonthly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMIANNUALLY = "semiannually"
    ANNUALLY = "annually"


class Timing(str, Enum):
    """When a periodic payment or contribution is made."""

    END = "end"
    BEGINNING = "beginning"

    @property
    def type_flag(self) -> int:
        """Excel-style payment type: 0 = end of period, 1 = beginning."""
        return 1 if self is Timing.BEGINNING else 0


PERIODS_PER_YEAR = {
    Frequency.WEEKLY: 52,
    Frequency.BIWEEKLY: 26,
    Frequency.SEMIMONTHLY: 24,
    Frequency.MONTHLY: 12,
    Frequency.QUARTERLY: 4,
    Frequency.SEMIANNUALLY: 2,
    Frequency.ANNUALLY: 1,
}

# Calendar days for interest accrual; payroll calculators pass 260
CALENDAR_DAYS = 365
BUSINESS_DAYS = 260

_PERIOD_OFFSETS = {
    Frequency.DAILY: relativedelta(days=1),
    Frequency.WEEKLY: relativedelta(weeks=1),
    Frequency.BIWEEKLY: relativedelta(weeks=2),
    Frequency.MONTHLY: relativedelta(months=1),
    Frequency.QUARTERLY: relativedelta(months=3),
    Frequency.SEMIANNUALLY: relativedelta(months=6),
    Frequency.ANNUALLY: relativedelta(years=1),
}


@dataclass(frozen=True)
class RateConfig:
    """Frequency and timing options shared by the schedulers."""

    timing: Timing = Timing.END
    payment_frequency: Frequency = Frequency.MONTHLY
    compound_frequency: Optional[Frequency] = None

    def rate_per_period(self, annual_rate_percent: float) -> float:
        return effective_rate_per_period(
            annual_rate_percent, self.payment_frequency, self.compound_frequency
        )


def require_finite(name: str, value: float) -> float:
    """Reject NaN and infinite values."""
    if value is None or not math.isfinite(value):
        raise InvalidInputError(f"{name} must be a finite number")
    return value


def clamp_to_zero(balance: float, epsilon: Optional[float] = None) -> float:
    """
    Snap a balance to exactly zero once it is within epsilon of zero.

    Floating-point residue from repeated subtraction otherwise leaves
    balances like 3.2e-12 on a fully paid loan.
    """
    if epsilon is None:
        epsilon = get_settings().balance_epsilon
    if balance <= epsilon:
        return 0.0
    return balance


def periods_per_year(frequency: Frequency, daily_periods: int = CALENDAR_DAYS) -> int:
    """
    Number of periods in a year for a frequency.

    Args:
        frequency: Payment or compounding frequency
        daily_periods: Periods used for DAILY (365 for interest, 260 for payroll)
    """
    frequency = Frequency(frequency)
    if frequency is Frequency.DAILY:
        return daily_periods
    return PERIODS_PER_YEAR[frequency]


def effective_rate_per_period(
    annual_rate_percent: float,
    payment_frequency: Frequency = Frequency.MONTHLY,
    compound_frequency: Optional[Frequency] = None,
) -> float:
    """
    Convert a nominal annual rate into the effective rate per payment period.

    When compounding and payment frequencies match this is simple division;
    otherwise the per-compound rate is compounded over the number of
    compounding periods that fall in one payment period.

    Args:
        annual_rate_percent: Nominal annual rate in percent (e.g., 7 for 7%)
        payment_frequency: How often payments are made
        compound_frequency: How often interest compounds (defaults to payment frequency)

    Returns:
        Rate per payment period as decimal
    """
    require_finite("annual rate", annual_rate_percent)
    if annual_rate_percent == 0:
        return 0.0

    nominal = annual_rate_percent / 100
    payments = periods_per_year(payment_frequency)
    if compound_frequency is None:
        return nominal / payments

    compounds = periods_per_year(compound_frequency)
    if compounds == payments:
        return nominal / payments

    periodic_compound_rate = nominal / compounds
    compound_periods_per_payment = compounds / payments
    return (1 + periodic_compound_rate) ** compound_periods_per_payment - 1


def total_periods(
    years: float,
    months: float = 0,
    frequency: Frequency = Frequency.MONTHLY,
    daily_periods: int = CALENDAR_DAYS,
) -> int:
    """Convert a term in years and months into a whole number of periods."""
    require_finite("years", years)
    require_finite("months", months)
    if years < 0 or months < 0:
        raise InvalidInputError("term cannot be negative")

    term_years = years + months / 12
    return int(round(term_years * periods_per_year(frequency, daily_periods)))


def period_offset(frequency: Frequency, index: int) -> relativedelta:
    """Offset from the first payment date to payment number ``index`` (0-based)."""
    frequency = Frequency(frequency)
    if frequency is Frequency.SEMIMONTHLY:
        # Two payments a month: 1st and 16th style spacing
        return relativedelta(months=index // 2, days=15 * (index % 2))
    return _PERIOD_OFFSETS[frequency] * index
