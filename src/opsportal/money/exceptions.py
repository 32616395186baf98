"""Exceptions for opsportal.money."""


class CurrencyMismatchError(ValueError):
    """Raised when combining amounts in different currencies."""
    pass
