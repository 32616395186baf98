"""Invoice selectors for read-only queries."""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch, QuerySet

from .exceptions import InvoiceNotFoundError
from .models import Invoice, InvoiceLineItem


def get_invoice(invoice_id) -> Invoice:
    """Fetch an invoice with its line items in sort order.

    Raises:
        InvoiceNotFoundError: If no invoice has this id
    """
    queryset = Invoice.objects.prefetch_related(
        Prefetch("line_items", queryset=InvoiceLineItem.objects.order_by("sort_order"))
    )
    try:
        return queryset.get(pk=invoice_id)
    except (Invoice.DoesNotExist, DjangoValidationError, ValueError):
        raise InvoiceNotFoundError(invoice_id)


def list_invoices(status=None, client_id=None, estimate_id=None) -> QuerySet:
    """Invoices filtered by status, client and source estimate, newest first."""
    queryset = Invoice.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    if client_id:
        queryset = queryset.filter(client_id=client_id)
    if estimate_id:
        queryset = queryset.filter(estimate_id=estimate_id)
    return queryset.order_by("-created_at")
