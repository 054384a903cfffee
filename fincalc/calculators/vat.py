"""
VAT Calculator

Given any two of rate, net price, gross price and tax amount, fill in the
rest. The field the user edited last decides which pair is used.
"""

from dataclasses import dataclass
from enum import Enum

from fincalc.calculators.base import CalculatorInputs


class VatField(str, Enum):
    VAT_RATE = "vat_rate"
    NET_PRICE = "net_price"
    GROSS_PRICE = "gross_price"
    TAX_AMOUNT = "tax_amount"


class VatInputs(CalculatorInputs):
    """Input for VAT calculation."""

    vat_rate: float = 20  # Percent
    net_price: float = 1200
    gross_price: float = 0
    tax_amount: float = 0
    last_modified: VatField = VatField.NET_PRICE


@dataclass
class VatResult:
    vat_rate: float
    net_price: float
    gross_price: float
    tax_amount: float


def calculate_vat(inputs: VatInputs) -> VatResult:
    """
    Resolve the missing VAT values.

    Pairs are tried in order: rate + net, rate + gross, rate + tax,
    net + gross, net + tax, gross + tax. Inputs that match no pair are
    returned unchanged.
    """
    rate, net, gross, tax = inputs.vat_rate, inputs.net_price, inputs.gross_price, inputs.tax_amount
    last = inputs.last_modified

    if last is VatField.NET_PRICE and net > 0 and rate >= 0:
        tax = net * rate / 100
        gross = net + tax
    elif last is VatField.GROSS_PRICE and gross > 0 and rate >= 0:
        net = gross / (1 + rate / 100)
        tax = gross - net
    elif last is VatField.TAX_AMOUNT and tax > 0 and rate > 0:
        net = tax / (rate / 100)
        gross = net + tax
    elif last is VatField.GROSS_PRICE and net > 0 and gross > net:
        tax = gross - net
        rate = tax / net * 100
    elif last is VatField.TAX_AMOUNT and net > 0 and tax > 0:
        gross = net + tax
        rate = tax / net * 100
    elif last is VatField.TAX_AMOUNT and gross > tax > 0:
        net = gross - tax
        rate = tax / net * 100
    elif last is VatField.VAT_RATE and net > 0 and rate >= 0:
        tax = net * rate / 100
        gross = net + tax

    return VatResult(vat_rate=rate, net_price=net, gross_price=gross, tax_amount=tax)
