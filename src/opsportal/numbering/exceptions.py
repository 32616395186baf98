"""Exceptions for document numbering."""

from opsportal.exceptions import InfrastructureError


class NumberingError(InfrastructureError):
    """Base exception for numbering errors."""
    pass


class SequenceNotFoundError(NumberingError):
    """Raised when a sequence doesn't exist and auto_create is False."""

    def __init__(self, scope: str):
        self.scope = scope
        super().__init__(f"Document sequence '{scope}' not found")


class NumberingUnavailableError(NumberingError):
    """Raised when the counter store cannot issue a number."""

    def __init__(self, scope: str, reason: str = ''):
        self.scope = scope
        message = f"Cannot issue a '{scope}' number"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
