"""Models for invoicing.

Invoice and InvoiceLineItem. Invoices created by conversion keep a
back-reference to their estimate for traceability only; deleting the
estimate clears it.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.db.models.functions import Round
from django.utils import timezone

from opsportal.money import Money


class InvoiceStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SENT = "sent", "Sent"
    PAID = "paid", "Paid"
    OVERDUE = "overdue", "Overdue"
    CANCELLED = "cancelled", "Cancelled"


class Invoice(models.Model):
    """A billing document representing an amount owed by a client."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice_number = models.CharField(
        max_length=50,
        unique=True,
        editable=False,
        help_text="Human-readable invoice number",
    )
    client_id = models.UUIDField(db_index=True)
    project_id = models.UUIDField(null=True, blank=True)
    estimate = models.ForeignKey(
        "estimating.Estimate",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices",
        help_text="Estimate this invoice was converted from (if any)",
    )

    title = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.DRAFT,
        db_index=True,
    )

    issue_date = models.DateField(default=timezone.localdate)
    due_date = models.DateField(db_index=True)
    paid_date = models.DateField(null=True, blank=True)

    currency = models.CharField(max_length=3, default="USD")
    subtotal_amount = models.DecimalField(max_digits=19, decimal_places=4, default=Decimal("0"))
    tax_rate = models.DecimalField(max_digits=5, decimal_places=4, null=True, blank=True)
    tax_amount = models.DecimalField(max_digits=19, decimal_places=4, default=Decimal("0"))
    total_amount = models.DecimalField(max_digits=19, decimal_places=4, default=Decimal("0"))
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(subtotal_amount__gte=0),
                name="invoice_subtotal_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(total_amount=Round(F("subtotal_amount") + F("tax_amount"), 4)),
                name="invoice_total_equals_subtotal_plus_tax",
            ),
        ]

    def __str__(self):
        return f"Invoice {self.invoice_number} - {self.total} ({self.status})"

    @property
    def total(self) -> Money:
        return Money(self.total_amount, self.currency)


class InvoiceLineItem(models.Model):
    """Line item on an invoice, copied verbatim from its source."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name="line_items",
    )
    description = models.TextField()
    quantity = models.DecimalField(max_digits=10, decimal_places=2)
    unit_price_amount = models.DecimalField(max_digits=12, decimal_places=2)
    line_total_amount = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        help_text="quantity * unit_price",
    )
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="invoicelineitem_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(unit_price_amount__gte=0),
                name="invoicelineitem_unit_price_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(line_total_amount=Round(F("quantity") * F("unit_price_amount"), 4)),
                name="invoicelineitem_total_equals_qty_times_price",
            ),
        ]

    def __str__(self):
        return f"{self.description} x{self.quantity} = {self.line_total_amount}"

