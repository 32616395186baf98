import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models
from django.db.models import F, Q
from django.db.models.functions import Round


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("estimating", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("invoice_number", models.CharField(editable=False, help_text="Human-readable invoice number", max_length=50, unique=True)),
                ("client_id", models.UUIDField(db_index=True)),
                ("project_id", models.UUIDField(blank=True, null=True)),
                ("title", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("sent", "Sent"),
                            ("paid", "Paid"),
                            ("overdue", "Overdue"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("issue_date", models.DateField(default=django.utils.timezone.localdate)),
                ("due_date", models.DateField(db_index=True)),
                ("paid_date", models.DateField(blank=True, null=True)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("subtotal_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=19)),
                ("tax_rate", models.DecimalField(blank=True, decimal_places=4, max_digits=5, null=True)),
                ("tax_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=19)),
                ("total_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=19)),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="invoices_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "estimate",
                    models.ForeignKey(
                        blank=True,
                        help_text="Estimate this invoice was converted from (if any)",
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="invoices",
                        to="estimating.estimate",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=Q(subtotal_amount__gte=0),
                        name="invoice_subtotal_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=Q(total_amount=Round(F("subtotal_amount") + F("tax_amount"), 4)),
                        name="invoice_total_equals_subtotal_plus_tax",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoiceLineItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("description", models.TextField()),
                ("quantity", models.DecimalField(decimal_places=2, max_digits=10)),
                ("unit_price_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("line_total_amount", models.DecimalField(decimal_places=4, help_text="quantity * unit_price", max_digits=19)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="invoicing.invoice",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order"],
                "constraints": [
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
                ],
            },
        ),
    ]
