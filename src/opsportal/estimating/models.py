"""Models for estimating.

Estimate and EstimateLineItem. Totals on the estimate are derived from its
line items and tax rate (see totals.py) and are only written by services.
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.db.models.functions import Round

from opsportal.money import Money


class EstimateStatus(models.TextChoices):
    DRAFT = "draft", "Draft"
    SENT = "sent", "Sent"
    APPROVED = "approved", "Approved"
    REJECTED = "rejected", "Rejected"
    EXPIRED = "expired", "Expired"


class Estimate(models.Model):
    """A quoted, not-yet-billed proposal of line items for a client.

    Clients and projects live in the CRM side of the portal; they are
    referenced here by id only.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    estimate_number = models.CharField(
        max_length=50,
        unique=True,
        editable=False,
        help_text="Human-readable estimate number, immutable once assigned",
    )
    client_id = models.UUIDField(db_index=True)
    project_id = models.UUIDField(null=True, blank=True)

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=20,
        choices=EstimateStatus.choices,
        default=EstimateStatus.DRAFT,
        db_index=True,
    )

    currency = models.CharField(max_length=3, default="USD")
    subtotal_amount = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        default=Decimal("0"),
        help_text="Sum of line item totals",
    )
    tax_rate = models.DecimalField(
        max_digits=5,
        decimal_places=4,
        null=True,
        blank=True,
        help_text="Tax rate as decimal (0.08 = 8%)",
    )
    tax_amount = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        default=Decimal("0"),
    )
    total_amount = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        default=Decimal("0"),
        help_text="subtotal + tax",
    )
    valid_until = models.DateField(null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="estimates_created",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=Q(tax_rate__isnull=True) | Q(tax_rate__gte=0, tax_rate__lte=1),
                name="estimate_tax_rate_between_0_and_1",
            ),
            models.CheckConstraint(
                condition=Q(total_amount=Round(F("subtotal_amount") + F("tax_amount"), 4)),
                name="estimate_total_equals_subtotal_plus_tax",
            ),
        ]

    def __str__(self):
        return f"Estimate {self.estimate_number} - {self.title} ({self.status})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            stored = (
                Estimate.objects.filter(pk=self.pk)
                .values_list("estimate_number", flat=True)
                .first()
            )
            if stored is not None and stored != self.estimate_number:
                raise ValueError("Estimate numbers are immutable once assigned")
        super().save(*args, **kwargs)

    @property
    def total(self) -> Money:
        return Money(self.total_amount, self.currency)


class EstimateLineItem(models.Model):
    """One priced row of an estimate.

    line_total_amount is always quantity * unit_price_amount; it is derived
    on save and guarded by a check constraint.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    estimate = models.ForeignKey(
        Estimate,
        on_delete=models.CASCADE,
        related_name="line_items",
    )
    description = models.TextField()
    quantity = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("1"))
    unit_price_amount = models.DecimalField(max_digits=12, decimal_places=2)
    line_total_amount = models.DecimalField(
        max_digits=19,
        decimal_places=4,
        help_text="quantity * unit_price (derived)",
    )
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["sort_order"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="estimatelineitem_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(unit_price_amount__gte=0),
                name="estimatelineitem_unit_price_non_negative",
            ),
            models.CheckConstraint(
                condition=Q(line_total_amount=Round(F("quantity") * F("unit_price_amount"), 4)),
                name="estimatelineitem_total_equals_qty_times_price",
            ),
            models.UniqueConstraint(
                fields=["estimate", "sort_order"],
                name="estimatelineitem_unique_sort_order",
            ),
        ]

    def __str__(self):
        return f"{self.description} x{self.quantity} = {self.line_total_amount}"

    def save(self, *args, **kwargs):
        self.line_total_amount = self.quantity * self.unit_price_amount
        super().save(*args, **kwargs)
