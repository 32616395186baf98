"""Ops Portal - estimating and invoicing core."""

__version__ = "0.1.0"
