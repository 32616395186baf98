"""Immutable Money value object for estimate and invoice amounts."""

from opsportal.money.money import AMOUNT_PLACES, CURRENCY_DECIMALS, Money
from opsportal.money.exceptions import CurrencyMismatchError

__all__ = [
    "Money",
    "AMOUNT_PLACES",
    "CURRENCY_DECIMALS",
    "CurrencyMismatchError",
]
