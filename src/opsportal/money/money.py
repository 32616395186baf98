"""Money value object with currency-aware Decimal arithmetic."""

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal
from typing import Iterable, Optional, Union

from opsportal.money.exceptions import CurrencyMismatchError


# Display/settlement precision per currency
CURRENCY_DECIMALS = {
    'USD': 2, 'EUR': 2, 'GBP': 2, 'CAD': 2, 'AUD': 2, 'MXN': 2,
    'JPY': 0, 'KRW': 0,
}

# Precision used for stored amounts (DecimalField decimal_places)
AMOUNT_PLACES = 4


@dataclass(frozen=True)
class Money:
    """
    Immutable amount of money in a single currency.

    Amounts are always Decimal; ints, floats and strings are converted
    through ``str`` so 0.1 stays 0.1.

    Usage:
        labor = Money(Decimal("100"), "USD") * 2
        total = Money.sum([labor, Money("50", "USD")], "USD")  # 250 USD
        total.quantized()  # 2 places, banker's rounding
    """
    amount: Decimal
    currency: str

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

    @classmethod
    def zero(cls, currency: str) -> 'Money':
        return cls(Decimal('0'), currency)

    @classmethod
    def sum(cls, amounts: Iterable['Money'], currency: str) -> 'Money':
        """Add up amounts in one pass, starting from zero in ``currency``."""
        total = cls.zero(currency)
        for amount in amounts:
            total = total + amount
        return total

    def quantized(self, places: Optional[int] = None) -> 'Money':
        """
        Return a copy rounded with ROUND_HALF_EVEN.

        Args:
            places: Decimal places to keep. Defaults to the currency's
                settlement precision (2 when the currency is unknown).
        """
        if places is None:
            places = CURRENCY_DECIMALS.get(self.currency, 2)
        return Money(
            self.amount.quantize(Decimal(10) ** -places, rounding=ROUND_HALF_EVEN),
            self.currency,
        )

    def _check_currency(self, other: 'Money', verb: str):
        if self.currency != other.currency:
            raise CurrencyMismatchError(
                f"Cannot {verb} {other.currency} and {self.currency}"
            )

    def __add__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'add')
        return Money(self.amount + other.amount, self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        self._check_currency(other, 'subtract')
        return Money(self.amount - other.amount, self.currency)

    def __mul__(self, factor: Union[Decimal, int, float, str]) -> 'Money':
        if isinstance(factor, Money):
            raise TypeError("Cannot multiply Money by Money")
        return Money(self.amount * Decimal(str(factor)), self.currency)

    def __rmul__(self, factor: Union[Decimal, int, float, str]) -> 'Money':
        return self.__mul__(factor)

    def __neg__(self) -> 'Money':
        return Money(-self.amount, self.currency)

    def __str__(self):
        return f"{self.quantized().amount} {self.currency}"

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_negative(self) -> bool:
        return self.amount < 0
