"""Estimate creation and lifecycle services.

Entry points used by the API views:
- create_estimate: new draft estimate with a fresh number
- revise_content: content edit, gated on draft/sent
- transition_status: status change
- update_estimate: combined patch (a patch carrying a status skips the gate)
- delete_estimate

Every mutation runs in one transaction together with its activity entry.
"""

import logging

from django.db import transaction

from opsportal.activity import record_activity
from opsportal.conf import get_setting
from opsportal.exceptions import ValidationError
from opsportal.numbering.services import next_estimate_number

from . import validators
from .lifecycle import INITIAL_STATUS, ensure_content_editable, ensure_transition_allowed
from .models import Estimate, EstimateLineItem
from .selectors import get_estimate, get_line_items
from .totals import calculate_totals
from .validators import LineItemData

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ("title", "description", "line_items", "tax_rate", "valid_until")
PATCH_FIELDS = CONTENT_FIELDS + ("status",)

_CLEANERS = {
    "title": validators.clean_title,
    "description": validators.clean_description,
    "line_items": lambda value: validators.clean_line_items(value, required=False),
    "tax_rate": validators.clean_tax_rate,
    "valid_until": lambda value: validators.clean_date(value, "valid_until"),
    "status": validators.clean_status,
}


def _store_line_items(estimate: Estimate, line_items: list[LineItemData]) -> None:
    for sort_order, item in enumerate(line_items):
        EstimateLineItem.objects.create(
            estimate=estimate,
            description=item.description,
            quantity=item.quantity,
            unit_price_amount=item.unit_price,
            sort_order=sort_order,
        )


def _apply_totals(estimate: Estimate, line_items: list[LineItemData]) -> None:
    totals = calculate_totals(line_items, estimate.tax_rate, estimate.currency).for_storage()
    validators.check_total_fits(totals.total.amount)
    estimate.subtotal_amount = totals.subtotal.amount
    estimate.tax_amount = totals.tax_amount.amount
    estimate.total_amount = totals.total.amount


def _clean_changes(changes: dict) -> dict:
    unknown = sorted(set(changes) - set(PATCH_FIELDS))
    if unknown:
        raise ValidationError(
            [{"field": field, "message": "Unknown field"} for field in unknown]
        )
    return {field: _CLEANERS[field](value) for field, value in changes.items()}


@transaction.atomic
def create_estimate(
    *,
    client_id,
    title: str,
    line_items,
    created_by=None,
    project_id=None,
    description: str = "",
    tax_rate=None,
    valid_until=None,
    currency: str = None,
) -> Estimate:
    """Create a draft estimate.

    Validates input, issues the estimate number, stores line items in the
    given order and computes totals. The number is drawn inside this
    transaction, so a failure anywhere leaves no estimate behind.

    Args:
        client_id: UUID of the client being quoted
        title: Estimate title (1..255 chars)
        line_items: Non-empty sequence of line items (mappings or LineItemData)
        created_by: User creating the estimate
        project_id: Optional project UUID
        description: Optional long description
        tax_rate: Optional tax rate as decimal (0.08 = 8%)
        valid_until: Optional date (or ISO string) the quote is valid until
        currency: ISO currency code (defaults to OPSPORTAL_DEFAULT_CURRENCY)

    Returns:
        The created Estimate

    Raises:
        ValidationError: If any input is invalid
        NumberingUnavailableError: If no estimate number can be issued
    """
    client_id = validators.clean_uuid(client_id, "client_id")
    project_id = validators.clean_uuid(project_id, "project_id", required=False)
    title = validators.clean_title(title)
    description = validators.clean_description(description)
    items = validators.clean_line_items(line_items)
    tax_rate = validators.clean_tax_rate(tax_rate)
    valid_until = validators.clean_date(valid_until, "valid_until")

    estimate = Estimate(
        estimate_number=next_estimate_number(),
        client_id=client_id,
        project_id=project_id,
        title=title,
        description=description,
        status=INITIAL_STATUS,
        currency=currency or get_setting("DEFAULT_CURRENCY"),
        tax_rate=tax_rate,
        valid_until=valid_until,
        created_by=created_by,
    )
    _apply_totals(estimate, items)
    estimate.save()
    _store_line_items(estimate, items)

    record_activity(
        action="created",
        entity=estimate,
        actor=created_by,
        description=f"Created estimate: {estimate.estimate_number}",
    )
    logger.info(
        "Created estimate %s for client %s (total %s)",
        estimate.estimate_number,
        client_id,
        estimate.total,
    )
    return estimate


def revise_content(estimate_id, *, actor=None, **changes) -> Estimate:
    """Edit title, description, line items, tax rate or validity date.

    Only draft and sent estimates can be revised.

    Raises:
        EstimateNotFoundError: If the estimate doesn't exist
        EstimateLockedError: If the estimate is approved, rejected or expired
        ValidationError: If a change is invalid or names an unknown field
    """
    if "status" in changes:
        raise ValidationError.for_field("status", "Use transition_status to change status")
    return _update(estimate_id, changes, actor)


def transition_status(estimate_id, new_status: str, *, actor=None) -> Estimate:
    """Move an estimate to ``new_status``.

    Allowed from any status unless OPSPORTAL_ESTIMATE_TRANSITIONS says
    otherwise.

    Raises:
        EstimateNotFoundError: If the estimate doesn't exist
        ValidationError: If new_status is not a known status
        InvalidTransitionError: If the configured transition table forbids it
    """
    return _update(estimate_id, {"status": new_status}, actor)


def update_estimate(estimate_id, *, actor=None, **changes) -> Estimate:
    """Apply a patch the way the estimate API does.

    A patch that carries ``status`` is a status change and may edit content
    in the same step regardless of the current status. A patch without
    ``status`` is a content revision and is gated on draft/sent.
    """
    return _update(estimate_id, changes, actor)


@transaction.atomic
def _update(estimate_id, changes: dict, actor) -> Estimate:
    cleaned = _clean_changes(changes)
    estimate = get_estimate(estimate_id, for_update=True)

    if "status" in cleaned:
        ensure_transition_allowed(estimate.status, cleaned["status"])
    else:
        ensure_content_editable(estimate)

    diff = {}
    for field in ("title", "description", "valid_until", "tax_rate", "status"):
        if field in cleaned and getattr(estimate, field) != cleaned[field]:
            diff[field] = {"old": getattr(estimate, field), "new": cleaned[field]}
            setattr(estimate, field, cleaned[field])

    if "line_items" in cleaned:
        items = cleaned["line_items"]
        if not items:
            raise ValidationError.for_field("line_items", "At least one line item is required")
        previous_count = estimate.line_items.count()
        estimate.line_items.all().delete()
        _store_line_items(estimate, items)
        diff["line_items"] = {"old": previous_count, "new": len(items)}
    else:
        items = [
            LineItemData(
                description=item.description,
                quantity=item.quantity,
                unit_price=item.unit_price_amount,
            )
            for item in get_line_items(estimate)
        ]

    if "line_items" in cleaned or "tax_rate" in diff:
        old_total = estimate.total_amount
        _apply_totals(estimate, items)
        if estimate.total_amount != old_total:
            diff["total"] = {"old": old_total, "new": estimate.total_amount}

    estimate.save()

    record_activity(
        action="updated",
        entity=estimate,
        actor=actor,
        description=f"Updated estimate: {estimate.estimate_number}",
        changes=diff,
    )
    if "status" in diff:
        logger.info(
            "Estimate %s status %s -> %s",
            estimate.estimate_number,
            diff["status"]["old"],
            diff["status"]["new"],
        )
    return estimate


@transaction.atomic
def delete_estimate(estimate_id, *, actor=None) -> None:
    """Delete an estimate and its line items.

    Invoices converted from it keep existing; their back-reference is
    cleared.

    Raises:
        EstimateNotFoundError: If the estimate doesn't exist
    """
    estimate = get_estimate(estimate_id, for_update=True)
    pk, number = estimate.pk, estimate.estimate_number
    estimate.delete()

    record_activity(
        action="deleted",
        entity_type="estimate",
        entity_id=pk,
        actor=actor,
        description=f"Deleted estimate: {number}",
    )
    logger.info("Deleted estimate %s", number)
