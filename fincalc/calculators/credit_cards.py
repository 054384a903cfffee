"""
Credit Cards Payoff Calculator

Debt avalanche payoff plan for several credit cards under one budget.
"""

from dataclasses import dataclass, field
from typing import List

from pydantic import Field

from fincalc.calculations.avalanche import (
    DebtAccount,
    PayoffMonth,
    PayoffStatus,
    simulate_payoff,
)
from fincalc.calculators.base import CalculatorInputs


class CreditCardInput(CalculatorInputs):
    name: str = "Card"
    balance: float = 0
    minimum_payment: float = 0
    interest_rate: float = 0  # Annual percent


def _default_cards() -> List[CreditCardInput]:
    return [
        CreditCardInput(name="Card 1", balance=4600, minimum_payment=100, interest_rate=18.99),
        CreditCardInput(name="Card 2", balance=3900, minimum_payment=90, interest_rate=19.99),
        CreditCardInput(name="Card 3", balance=6000, minimum_payment=120, interest_rate=15.99),
    ]


class CreditCardsInputs(CalculatorInputs):
    """Input for multi-card payoff."""

    monthly_budget: float = 500
    cards: List[CreditCardInput] = Field(default_factory=_default_cards)


@dataclass
class CardPayoff:
    name: str
    original_balance: float
    interest_rate: float
    total_paid: float
    total_interest: float
    paid_off_month: int  # 0 while still open


@dataclass
class CreditCardsResult:
    status: PayoffStatus = PayoffStatus.NO_DEBTS
    total_months: int = 0
    total_paid: float = 0.0
    total_interest: float = 0.0
    total_principal: float = 0.0
    minimum_needed: float = 0.0
    card_payoffs: List[CardPayoff] = field(default_factory=list)
    monthly_schedule: List[PayoffMonth] = field(default_factory=list)

    @property
    def insufficient_budget(self) -> bool:
        return self.status is PayoffStatus.INSUFFICIENT_BUDGET

    @property
    def payoff_reached(self) -> bool:
        return self.status is PayoffStatus.COMPLETED


def calculate_credit_cards_payoff(inputs: CreditCardsInputs) -> CreditCardsResult:
    """Run the avalanche simulation for the entered cards."""
    debts = [
        DebtAccount(
            name=card.name,
            original_balance=card.balance,
            minimum_payment=card.minimum_payment,
            annual_rate=card.interest_rate,
        )
        for card in inputs.cards
    ]
    payoff = simulate_payoff(debts, inputs.monthly_budget)

    return CreditCardsResult(
        status=payoff.status,
        total_months=payoff.months,
        total_paid=payoff.total_paid,
        total_interest=payoff.total_interest,
        total_principal=payoff.total_principal,
        minimum_needed=payoff.minimum_needed,
        card_payoffs=[
            CardPayoff(
                name=debt.name,
                original_balance=debt.original_balance,
                interest_rate=debt.annual_rate,
                total_paid=debt.total_paid,
                total_interest=debt.total_interest,
                paid_off_month=debt.paid_off_month or 0,
            )
            for debt in payoff.debts
        ],
        monthly_schedule=payoff.schedule,
    )
