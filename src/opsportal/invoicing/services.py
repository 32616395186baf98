"""Estimate-to-invoice conversion.

Main entry point for the estimate-to-invoice flow.
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from opsportal.activity import record_activity
from opsportal.conf import get_setting
from opsportal.estimating.lifecycle import ensure_convertible
from opsportal.estimating.selectors import get_estimate, get_line_items
from opsportal.numbering.services import next_invoice_number

from .exceptions import EstimateAlreadyConvertedError
from .models import Invoice, InvoiceLineItem, InvoiceStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionResult:
    """Outcome of a successful conversion."""

    invoice_id: UUID
    invoice_number: str
    invoice: Invoice


def _copy_line_items(estimate, invoice: Invoice) -> int:
    """Copy the estimate's line items onto the invoice, in order, unchanged."""
    items = get_line_items(estimate)
    InvoiceLineItem.objects.bulk_create(
        InvoiceLineItem(
            invoice=invoice,
            description=item.description,
            quantity=item.quantity,
            unit_price_amount=item.unit_price_amount,
            line_total_amount=item.line_total_amount,
            sort_order=item.sort_order,
        )
        for item in items
    )
    return len(items)


@transaction.atomic
def convert_estimate_to_invoice(
    estimate_id,
    *,
    actor=None,
    due_date: date = None,
) -> ConversionResult:
    """Convert an approved estimate into a draft invoice.

    The estimate row is locked for the duration of the conversion, so two
    concurrent conversions of the same estimate are serialized. The invoice
    number, the invoice, its line items and the activity entry are written
    in one transaction; if any step fails nothing is persisted.

    Amounts are copied from the estimate, never recomputed. The estimate
    itself is not modified.

    Args:
        estimate_id: UUID of the estimate to convert
        actor: User performing the conversion
        due_date: Invoice due date (defaults to today + OPSPORTAL_INVOICE_DUE_DAYS)

    Returns:
        ConversionResult with the new invoice's id and number

    Raises:
        EstimateNotFoundError: If the estimate doesn't exist
        EstimateNotConvertibleError: If the estimate is not approved
        EstimateAlreadyConvertedError: If the estimate already has an invoice
            and OPSPORTAL_ALLOW_REPEAT_CONVERSION is off
        NumberingUnavailableError: If no invoice number can be issued
    """
    estimate = get_estimate(estimate_id, for_update=True)
    ensure_convertible(estimate)

    if not get_setting("ALLOW_REPEAT_CONVERSION"):
        existing = estimate.invoices.order_by("created_at").first()
        if existing is not None:
            raise EstimateAlreadyConvertedError(
                estimate.estimate_number, existing.invoice_number
            )

    today = timezone.localdate()
    if due_date is None:
        due_date = today + timedelta(days=get_setting("INVOICE_DUE_DAYS"))

    invoice = Invoice.objects.create(
        invoice_number=next_invoice_number(),
        client_id=estimate.client_id,
        project_id=estimate.project_id,
        estimate=estimate,
        title=estimate.title,
        description=estimate.description,
        status=InvoiceStatus.DRAFT,
        issue_date=today,
        due_date=due_date,
        currency=estimate.currency,
        subtotal_amount=estimate.subtotal_amount,
        tax_rate=estimate.tax_rate,
        tax_amount=estimate.tax_amount,
        total_amount=estimate.total_amount,
        created_by=actor if actor is not None and actor.is_authenticated else None,
    )
    copied = _copy_line_items(estimate, invoice)

    record_activity(
        action="created",
        entity=invoice,
        actor=actor,
        description=(
            f"Created invoice {invoice.invoice_number} "
            f"from estimate {estimate.estimate_number}"
        ),
        metadata={"estimate_id": str(estimate.pk)},
    )
    logger.info(
        "Converted estimate %s to invoice %s (%d line items, total %s)",
        estimate.estimate_number,
        invoice.invoice_number,
        copied,
        invoice.total,
    )
    return ConversionResult(
        invoice_id=invoice.pk,
        invoice_number=invoice.invoice_number,
        invoice=invoice,
    )
