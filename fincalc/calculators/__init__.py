"""
Calculator entry points.

Each calculator takes its own input model and returns a plain result
record. No calculator calls another.
"""

from fincalc.calculators.annuity import AnnuityInputs, calculate_annuity
from fincalc.calculators.boat_loan import BoatLoanInputs, calculate_boat_loan
from fincalc.calculators.business_loan import BusinessLoanInputs, calculate_business_loan
from fincalc.calculators.credit_cards import CreditCardsInputs, calculate_credit_cards_payoff
from fincalc.calculators.finance import FinanceInputs, calculate_finance
from fincalc.calculators.paycheck import PaycheckInputs, calculate_paycheck
from fincalc.calculators.simple_interest import SimpleInterestInputs, calculate_simple_interest
from fincalc.calculators.vat import VatInputs, calculate_vat

__all__ = [
    "AnnuityInputs",
    "BoatLoanInputs",
    "BusinessLoanInputs",
    "CreditCardsInputs",
    "FinanceInputs",
    "PaycheckInputs",
    "SimpleInterestInputs",
    "VatInputs",
    "calculate_annuity",
    "calculate_boat_loan",
    "calculate_business_loan",
    "calculate_credit_cards_payoff",
    "calculate_finance",
    "calculate_paycheck",
    "calculate_simple_interest",
    "calculate_vat",
]
