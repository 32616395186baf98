"""Estimate selectors for read-only queries."""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import Prefetch, Q, QuerySet

from .exceptions import EstimateNotFoundError
from .models import Estimate, EstimateLineItem


def get_estimate(estimate_id, *, for_update: bool = False) -> Estimate:
    """Fetch an estimate with its line items in sort order.

    Args:
        estimate_id: UUID (or UUID string) of the estimate
        for_update: Lock the estimate row (caller must be in a transaction)

    Raises:
        EstimateNotFoundError: If no estimate has this id
    """
    queryset = Estimate.objects.prefetch_related(
        Prefetch("line_items", queryset=EstimateLineItem.objects.order_by("sort_order"))
    )
    if for_update:
        queryset = queryset.select_for_update()
    try:
        return queryset.get(pk=estimate_id)
    except (Estimate.DoesNotExist, DjangoValidationError, ValueError):
        raise EstimateNotFoundError(estimate_id)


def list_estimates(status=None, client_id=None, search=None) -> QuerySet:
    """Estimates filtered by status, client and free-text search, newest first.

    ``search`` matches the estimate number or title, case-insensitively.
    """
    queryset = Estimate.objects.all()
    if status:
        queryset = queryset.filter(status=status)
    if client_id:
        queryset = queryset.filter(client_id=client_id)
    if search:
        queryset = queryset.filter(
            Q(estimate_number__icontains=search) | Q(title__icontains=search)
        )
    return queryset.order_by("-created_at")


def get_line_items(estimate: Estimate) -> list[EstimateLineItem]:
    """Line items of an estimate in display order."""
    return list(estimate.line_items.order_by("sort_order"))
