"""
Financial Calculator Engine

Shared schedule and time-value-of-money math behind the annuity, loan,
credit card payoff, finance, simple interest, paycheck and VAT calculators.
"""

__version__ = "0.1.0"
