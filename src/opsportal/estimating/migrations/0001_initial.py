import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models
from django.db.models import F, Q
from django.db.models.functions import Round


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Estimate",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("estimate_number", models.CharField(editable=False, help_text="Human-readable estimate number, immutable once assigned", max_length=50, unique=True)),
                ("client_id", models.UUIDField(db_index=True)),
                ("project_id", models.UUIDField(blank=True, null=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("sent", "Sent"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("expired", "Expired"),
                        ],
                        db_index=True,
                        default="draft",
                        max_length=20,
                    ),
                ),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("subtotal_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), help_text="Sum of line item totals", max_digits=19)),
                ("tax_rate", models.DecimalField(blank=True, decimal_places=4, help_text="Tax rate as decimal (0.08 = 8%)", max_digits=5, null=True)),
                ("tax_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), max_digits=19)),
                ("total_amount", models.DecimalField(decimal_places=4, default=Decimal("0"), help_text="subtotal + tax", max_digits=19)),
                ("valid_until", models.DateField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="estimates_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=Q(tax_rate__isnull=True) | Q(tax_rate__gte=0, tax_rate__lte=1),
                        name="estimate_tax_rate_between_0_and_1",
                    ),
                    models.CheckConstraint(
                        condition=Q(total_amount=Round(F("subtotal_amount") + F("tax_amount"), 4)),
                        name="estimate_total_equals_subtotal_plus_tax",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="EstimateLineItem",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("description", models.TextField()),
                ("quantity", models.DecimalField(decimal_places=2, default=Decimal("1"), max_digits=10)),
                ("unit_price_amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("line_total_amount", models.DecimalField(decimal_places=4, help_text="quantity * unit_price (derived)", max_digits=19)),
                ("sort_order", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "estimate",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="line_items",
                        to="estimating.estimate",
                    ),
                ),
            ],
            options={
                "ordering": ["sort_order"],
                "constraints": [
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
                        fields=("estimate", "sort_order"),
                        name="estimatelineitem_unique_sort_order",
                    ),
                ],
            },
        ),
    ]
