"""Input validation for estimate operations.

Each clean_* function returns normalized Python values or raises
opsportal.exceptions.ValidationError with one entry per bad field.
"""

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_DOWN, Decimal, InvalidOperation

from django.utils.dateparse import parse_date

from opsportal.exceptions import ValidationError
from opsportal.money import AMOUNT_PLACES

from .models import EstimateStatus

MAX_TITLE_LENGTH = 255
# quantity and unit_price columns keep 2 decimal places
AMOUNT_INPUT_PLACES = 2
# line total, subtotal and total columns are DecimalField(max_digits=19, decimal_places=4)
STORED_AMOUNT_LIMIT = Decimal(10) ** (19 - AMOUNT_PLACES)


@dataclass(frozen=True)
class LineItemData:
    """A validated line item ready to be stored."""

    description: str
    quantity: Decimal
    unit_price: Decimal


def _to_decimal(value, field: str) -> Decimal:
    if isinstance(value, bool) or value is None:
        raise ValidationError.for_field(field, "Expected a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError.for_field(field, "Expected a number")
    if not number.is_finite():
        raise ValidationError.for_field(field, "Expected a finite number")
    return number


def _check_digits(number: Decimal, field: str, max_digits: int) -> None:
    if abs(number) >= Decimal(10) ** (max_digits - AMOUNT_INPUT_PLACES):
        raise ValidationError.for_field(field, "Value is too large")
    if number != number.quantize(Decimal(10) ** -AMOUNT_INPUT_PLACES, rounding=ROUND_DOWN):
        raise ValidationError.for_field(
            field, f"At most {AMOUNT_INPUT_PLACES} decimal places allowed"
        )


def clean_line_items(items, *, required: bool = True) -> list[LineItemData]:
    """Validate an ordered sequence of line items.

    Items may be LineItemData instances or mappings with description,
    quantity (default 1) and unit_price. Order is preserved.
    """
    if items is None or isinstance(items, (str, bytes, dict)):
        raise ValidationError.for_field("line_items", "Expected a list of line items")
    items = list(items)
    if required and not items:
        raise ValidationError.for_field("line_items", "At least one line item is required")

    cleaned = []
    errors = []
    for index, item in enumerate(items):
        if isinstance(item, LineItemData):
            item = {
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
            }
        if not isinstance(item, dict):
            errors.append({"field": f"line_items.{index}", "message": "Expected an object"})
            continue
        try:
            cleaned.append(_clean_line_item(item, f"line_items.{index}"))
        except ValidationError as e:
            errors.extend(e.details)

    if not errors:
        errors = _check_amounts_fit(cleaned)
    if errors:
        raise ValidationError(errors)
    return cleaned


def _check_amounts_fit(items: list[LineItemData]) -> list[dict]:
    errors = []
    subtotal = Decimal(0)
    for index, item in enumerate(items):
        line_total = item.quantity * item.unit_price
        if line_total >= STORED_AMOUNT_LIMIT:
            errors.append({"field": f"line_items.{index}", "message": "Line total is too large"})
        subtotal += line_total
    if not errors and subtotal >= STORED_AMOUNT_LIMIT:
        errors.append({"field": "line_items", "message": "Subtotal is too large"})
    return errors


def check_total_fits(total: Decimal) -> None:
    """Raise ValidationError if a computed total exceeds the stored precision."""
    if abs(total) >= STORED_AMOUNT_LIMIT:
        raise ValidationError.for_field("total", "Total is too large")


def _clean_line_item(item: dict, prefix: str) -> LineItemData:
    description = item.get("description")
    if not isinstance(description, str) or not description.strip():
        raise ValidationError.for_field(f"{prefix}.description", "Description is required")

    quantity = _to_decimal(item.get("quantity", 1), f"{prefix}.quantity")
    if quantity <= 0:
        raise ValidationError.for_field(f"{prefix}.quantity", "Quantity must be positive")
    _check_digits(quantity, f"{prefix}.quantity", max_digits=10)

    unit_price = _to_decimal(item.get("unit_price"), f"{prefix}.unit_price")
    if unit_price < 0:
        raise ValidationError.for_field(f"{prefix}.unit_price", "Unit price cannot be negative")
    _check_digits(unit_price, f"{prefix}.unit_price", max_digits=12)

    return LineItemData(description=description, quantity=quantity, unit_price=unit_price)


def clean_tax_rate(value):
    """None (no tax) or a Decimal in [0, 1]."""
    if value is None:
        return None
    rate = _to_decimal(value, "tax_rate")
    if rate < 0 or rate > 1:
        raise ValidationError.for_field("tax_rate", "Tax rate must be between 0 and 1")
    if rate != rate.quantize(Decimal("0.0001"), rounding=ROUND_DOWN):
        raise ValidationError.for_field("tax_rate", "At most 4 decimal places allowed")
    return rate


def clean_title(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError.for_field("title", "Title is required")
    if len(value) > MAX_TITLE_LENGTH:
        raise ValidationError.for_field(
            "title", f"Title must be at most {MAX_TITLE_LENGTH} characters"
        )
    return value


def clean_description(value) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError.for_field("description", "Expected a string")
    return value


def clean_uuid(value, field: str, *, required: bool = True):
    if value is None or value == "":
        if required:
            raise ValidationError.for_field(field, "This field is required")
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError.for_field(field, "Invalid UUID")


def clean_date(value, field: str):
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        parsed = parse_date(value) if isinstance(value, str) else None
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationError.for_field(field, "Expected an ISO date (YYYY-MM-DD)")
    return parsed


def clean_status(value) -> str:
    if value not in EstimateStatus.values:
        raise ValidationError.for_field(
            "status", f"Invalid status '{value}', expected one of {EstimateStatus.values}"
        )
    return value
