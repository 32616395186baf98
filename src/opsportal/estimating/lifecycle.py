"""Estimate lifecycle rules.

States: draft, sent, approved, rejected, expired. New estimates start in
draft. Content (line items, tax rate, title, description, validity) can only
be revised while the estimate is draft or sent. Status changes are always
allowed unless OPSPORTAL_ESTIMATE_TRANSITIONS restricts them; no state is
terminal by default, so e.g. expired -> draft is legal.
"""

from opsportal.conf import get_setting
from opsportal.exceptions import ValidationError

from .exceptions import EstimateLockedError, EstimateNotConvertibleError, InvalidTransitionError
from .models import Estimate, EstimateStatus


INITIAL_STATUS = EstimateStatus.DRAFT

EDITABLE_STATUSES = frozenset({EstimateStatus.DRAFT, EstimateStatus.SENT})

CONVERTIBLE_STATUS = EstimateStatus.APPROVED


def is_content_editable(status: str) -> bool:
    return status in EDITABLE_STATUSES


def ensure_content_editable(estimate: Estimate) -> None:
    """Raise EstimateLockedError unless content edits are allowed."""
    if not is_content_editable(estimate.status):
        raise EstimateLockedError(estimate.status)


def get_allowed_transitions(status: str) -> list[str]:
    """Statuses reachable from ``status``.

    Without a configured transition table every status is reachable.
    """
    table = get_setting("ESTIMATE_TRANSITIONS")
    if table is None:
        return list(EstimateStatus.values)
    return list(table.get(status, []))


def ensure_transition_allowed(from_status: str, to_status: str) -> None:
    """Validate a status change.

    Raises:
        ValidationError: If to_status is not a known status
        InvalidTransitionError: If a configured transition table forbids it
    """
    if to_status not in EstimateStatus.values:
        raise ValidationError.for_field(
            "status",
            f"Invalid status '{to_status}', expected one of {EstimateStatus.values}",
        )
    if to_status not in get_allowed_transitions(from_status):
        raise InvalidTransitionError(from_status, to_status)


def ensure_convertible(estimate: Estimate) -> None:
    """Only an estimate whose status is exactly approved can be converted."""
    if estimate.status != CONVERTIBLE_STATUS:
        raise EstimateNotConvertibleError(estimate.status)
