"""Exceptions for invoicing."""

from opsportal.exceptions import ConflictError, NotFoundError


class InvoiceNotFoundError(NotFoundError):
    """Referenced invoice does not exist."""

    def __init__(self, invoice_id=None):
        super().__init__("Invoice", invoice_id)


class EstimateAlreadyConvertedError(ConflictError):
    """The estimate already produced an invoice."""

    def __init__(self, estimate_number: str, invoice_number: str):
        self.estimate_number = estimate_number
        self.invoice_number = invoice_number
        super().__init__(
            f"Estimate {estimate_number} was already converted to invoice {invoice_number}"
        )
