"""
Financial Schedule Engine

Pure calculation modules shared by every calculator. All calculations are
designed to match Excel formula behavior.
"""

from fincalc.calculations import amortization, annuity, avalanche, rates, solver, tax, tvm

__all__ = ["amortization", "annuity", "avalanche", "rates", "solver", "tax", "tvm"]
