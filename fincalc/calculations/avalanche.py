"""
Debt Avalanche Payoff

Month-by-month payoff simulation for several debts under a fixed monthly
budget. Every debt receives its minimum payment and whatever budget is
left goes to the debt with the highest interest rate.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from fincalc.calculations.rates import clamp_to_zero
from fincalc.config import get_settings

logger = logging.getLogger(__name__)


class PayoffStatus(str, Enum):
    COMPLETED = "completed"
    NO_DEBTS = "no_debts"
    INSUFFICIENT_BUDGET = "insufficient_budget"
    CAP_REACHED = "cap_reached"
    INVALID_INPUT = "invalid_input"


@dataclass
class DebtAccount:
    """A debt being paid down; balances mutate during one simulation run."""

    name: str
    original_balance: float
    minimum_payment: float
    annual_rate: float  # Percent, e.g. 18.99
    current_balance: float = 0.0
    paid_off_month: Optional[int] = None
    total_paid: float = 0.0
    total_interest: float = 0.0

    def __post_init__(self):
        if not self.current_balance:
            self.current_balance = self.original_balance

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 100 / 12

    @property
    def is_valid(self) -> bool:
        values = (self.original_balance, self.minimum_payment, self.annual_rate)
        return all(math.isfinite(v) and v >= 0 for v in values)


@dataclass
class PayoffMonth:
    """Balances after one simulated month, in highest-rate-first order."""

    month: int
    payment: float
    interest: float
    balances: List[float]


@dataclass
class PayoffResult:
    status: PayoffStatus = PayoffStatus.NO_DEBTS
    months: int = 0
    total_paid: float = 0.0
    total_interest: float = 0.0
    total_principal: float = 0.0
    minimum_needed: float = 0.0
    debts: List[DebtAccount] = field(default_factory=list)
    schedule: List[PayoffMonth] = field(default_factory=list)

    @property
    def insufficient_budget(self) -> bool:
        return self.status is PayoffStatus.INSUFFICIENT_BUDGET

    @property
    def cap_reached(self) -> bool:
        return self.status is PayoffStatus.CAP_REACHED


def simulate_payoff(
    debts: Iterable[DebtAccount],
    monthly_budget: float,
    max_months: Optional[int] = None,
    epsilon: Optional[float] = None,
) -> PayoffResult:
    """
    Simulate avalanche payoff of several debts.

    Each month: accrue interest on every active debt, pay each minimum
    (capped at the remaining balance), send the leftover budget to the
    active debt with the highest annual rate (ties go to the debt listed
    first), then retire debts whose balance is within epsilon of zero.

    Affordability is checked once against the sum of all minimum payments.
    The simulation stops when every debt is paid or ``max_months`` elapse;
    the latter is reported as CAP_REACHED rather than a normal completion.

    Args:
        debts: Debts to pay off; copies are simulated, inputs are untouched
        monthly_budget: Total amount available each month
        max_months: Safety cap (defaults to the configured 600 months)
        epsilon: Balance at or below which a debt counts as paid off

    Returns:
        PayoffResult with per-debt breakdown sorted highest rate first
    """
    settings = get_settings()
    if max_months is None:
        max_months = settings.payoff_max_months
    if epsilon is None:
        epsilon = settings.balance_epsilon

    accounts = [
        DebtAccount(
            name=debt.name,
            original_balance=debt.original_balance,
            minimum_payment=debt.minimum_payment,
            annual_rate=debt.annual_rate,
        )
        for debt in debts
    ]

    if not math.isfinite(monthly_budget) or monthly_budget < 0:
        return PayoffResult(status=PayoffStatus.INVALID_INPUT)
    if not all(account.is_valid for account in accounts):
        return PayoffResult(status=PayoffStatus.INVALID_INPUT)

    accounts = [account for account in accounts if account.original_balance > epsilon]
    if not accounts:
        return PayoffResult(status=PayoffStatus.NO_DEBTS)

    minimum_needed = sum(account.minimum_payment for account in accounts)
    if monthly_budget < minimum_needed:
        logger.info(
            f"Budget {monthly_budget:.2f} is below minimum payments {minimum_needed:.2f}"
        )
        return PayoffResult(
            status=PayoffStatus.INSUFFICIENT_BUDGET, minimum_needed=minimum_needed
        )

    # Stable sort keeps encounter order for equal rates
    accounts.sort(key=lambda account: account.annual_rate, reverse=True)

    active = list(accounts)
    schedule = []
    month = 0

    while active and month < max_months:
        month += 1
        remaining_budget = monthly_budget
        month_interest = 0.0

        for account in active:
            interest = account.current_balance * account.monthly_rate
            account.current_balance += interest
            account.total_interest += interest
            month_interest += interest

            payment = min(account.minimum_payment, account.current_balance)
            account.current_balance -= payment
            account.total_paid += payment
            remaining_budget -= payment

        target = next((a for a in active if a.current_balance > 0), None)
        if remaining_budget > 0 and target is not None:
            extra = min(remaining_budget, target.current_balance)
            target.current_balance -= extra
            target.total_paid += extra
            remaining_budget -= extra

        for account in active:
            account.current_balance = clamp_to_zero(account.current_balance, epsilon)
            if account.current_balance == 0:
                account.paid_off_month = month
        active = [account for account in active if account.paid_off_month is None]

        schedule.append(
            PayoffMonth(
                month=month,
                payment=monthly_budget - remaining_budget,
                interest=month_interest,
                balances=[account.current_balance for account in accounts],
            )
        )

    status = PayoffStatus.COMPLETED
    if active:
        status = PayoffStatus.CAP_REACHED
        logger.warning(
            f"Payoff not reached within {max_months} months; "
            f"{len(active)} debt(s) still open"
        )

    return PayoffResult(
        status=status,
        months=month,
        total_paid=sum(account.total_paid for account in accounts),
        total_interest=sum(account.total_interest for account in accounts),
        total_principal=sum(account.original_balance for account in accounts),
        minimum_needed=minimum_needed,
        debts=accounts,
        schedule=schedule,
    )
