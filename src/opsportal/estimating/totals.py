"""Totals calculation for estimates and invoices.

Pure functions over line items; no database access and no rounding.
Quantization to storage precision happens only in Totals.for_storage().
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from opsportal.money import AMOUNT_PLACES, Money


@dataclass(frozen=True)
class Totals:
    """Subtotal, tax and total for a set of line items."""

    subtotal: Money
    tax_amount: Money
    total: Money

    def for_storage(self) -> "Totals":
        """Quantize to stored precision, keeping total = subtotal + tax exact."""
        subtotal = self.subtotal.quantized(AMOUNT_PLACES)
        tax_amount = self.tax_amount.quantized(AMOUNT_PLACES)
        return Totals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)


def _field(item, name: str):
    if isinstance(item, dict):
        return item[name]
    return getattr(item, name)


def line_total(quantity, unit_price, currency: str) -> Money:
    """quantity * unit_price as Money."""
    return Money(unit_price, currency) * quantity


def calculate_totals(
    line_items: Iterable,
    tax_rate: Optional[Decimal] = None,
    currency: str = "USD",
) -> Totals:
    """Compute subtotal, tax and total for line items.

    Args:
        line_items: Objects or dicts with ``quantity`` and ``unit_price``,
            already validated (quantity > 0, unit_price >= 0)
        tax_rate: Tax rate as decimal (0.08 = 8%); None means no tax
        currency: ISO currency code of the amounts

    Returns:
        Totals where total == subtotal + tax_amount exactly. An empty
        sequence gives all zeros.
    """
    subtotal = Money.sum(
        (
            line_total(_field(item, "quantity"), _field(item, "unit_price"), currency)
            for item in line_items
        ),
        currency,
    )
    if tax_rate is not None:
        tax_amount = subtotal * tax_rate
    else:
        tax_amount = Money.zero(currency)

    return Totals(subtotal=subtotal, tax_amount=tax_amount, total=subtotal + tax_amount)
