"""Dict representations of estimates for the JSON API (camelCase keys)."""

from .models import Estimate, EstimateLineItem


def serialize_line_item(item: EstimateLineItem) -> dict:
    return {
        "id": item.pk,
        "description": item.description,
        "quantity": item.quantity,
        "unitPrice": item.unit_price_amount,
        "lineTotal": item.line_total_amount,
        "sortOrder": item.sort_order,
    }


def serialize_estimate(estimate: Estimate, *, include_line_items: bool = False) -> dict:
    data = {
        "id": estimate.pk,
        "estimateNumber": estimate.estimate_number,
        "clientId": estimate.client_id,
        "projectId": estimate.project_id,
        "title": estimate.title,
        "description": estimate.description,
        "status": estimate.status,
        "currency": estimate.currency,
        "subtotal": estimate.subtotal_amount,
        "taxRate": estimate.tax_rate,
        "taxAmount": estimate.tax_amount,
        "total": estimate.total_amount,
        "validUntil": estimate.valid_until,
        "createdBy": estimate.created_by_id,
        "createdAt": estimate.created_at,
        "updatedAt": estimate.updated_at,
    }
    if include_line_items:
        data["lineItems"] = [
            serialize_line_item(item) for item in estimate.line_items.order_by("sort_order")
        ]
    return data
