"""Tests for totals calculation."""
from decimal import Decimal

from opsportal.estimating.totals import calculate_totals, line_total
from opsportal.estimating.validators import LineItemData
from opsportal.money import Money


class TestCalculateTotals:
    """calculate_totals over line items."""

    def test_subtotal_tax_and_total(self):
        """2 x 100 + 1 x 50 at 8% gives 250 / 20 / 270."""
        items = [
            {"quantity": Decimal("2"), "unit_price": Decimal("100")},
            {"quantity": Decimal("1"), "unit_price": Decimal("50")},
        ]
        totals = calculate_totals(items, Decimal("0.08"))

        assert totals.subtotal == Money("250", "USD")
        assert totals.tax_amount == Money("20", "USD")
        assert totals.total == Money("270", "USD")

    def test_accepts_line_item_objects(self):
        items = [LineItemData("Labor", Decimal("1.5"), Decimal("80.00"))]
        totals = calculate_totals(items)
        assert totals.subtotal.amount == Decimal("120.00")

    def test_no_tax_rate_means_zero_tax(self):
        items = [{"quantity": Decimal("3"), "unit_price": Decimal("10")}]
        totals = calculate_totals(items, None)

        assert totals.tax_amount.is_zero()
        assert totals.total == totals.subtotal

    def test_empty_line_items_gives_zero(self):
        totals = calculate_totals([], Decimal("0.08"))

        assert totals.subtotal.is_zero()
        assert totals.tax_amount.is_zero()
        assert totals.total.is_zero()

    def test_no_float_drift(self):
        """0.1 + 0.2 is exactly 0.3."""
        items = [
            {"quantity": Decimal("1"), "unit_price": Decimal("0.10")},
            {"quantity": Decimal("1"), "unit_price": Decimal("0.20")},
        ]
        assert calculate_totals(items).subtotal.amount == Decimal("0.30")

    def test_currency_is_carried(self):
        items = [{"quantity": Decimal("1"), "unit_price": Decimal("10")}]
        totals = calculate_totals(items, currency="EUR")
        assert totals.total.currency == "EUR"

    def test_line_total(self):
        assert line_total(Decimal("2.5"), Decimal("4.10"), "USD") == Money("10.25", "USD")


class TestTotalsForStorage:
    """Quantization to storage precision."""

    def test_tax_rounded_to_four_places(self):
        items = [{"quantity": Decimal("1"), "unit_price": Decimal("33.33")}]
        totals = calculate_totals(items, Decimal("0.0825")).for_storage()

        # 33.33 * 0.0825 = 2.749725
        assert totals.tax_amount.amount == Decimal("2.7497")
        assert totals.total.amount == Decimal("36.0797")

    def test_total_equals_subtotal_plus_tax_after_rounding(self):
        items = [{"quantity": Decimal("7"), "unit_price": Decimal("19.99")}]
        totals = calculate_totals(items, Decimal("0.0725")).for_storage()

        assert totals.total == totals.subtotal + totals.tax_amount
