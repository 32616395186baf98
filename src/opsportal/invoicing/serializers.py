"""Dict representations of invoices for the JSON API (camelCase keys)."""

from .models import Invoice, InvoiceLineItem


def serialize_line_item(item: InvoiceLineItem) -> dict:
    return {
        "id": item.pk,
        "description": item.description,
        "quantity": item.quantity,
        "unitPrice": item.unit_price_amount,
        "lineTotal": item.line_total_amount,
        "sortOrder": item.sort_order,
    }


def serialize_invoice(invoice: Invoice, *, include_line_items: bool = False) -> dict:
    data = {
        "id": invoice.pk,
        "invoiceNumber": invoice.invoice_number,
        "clientId": invoice.client_id,
        "projectId": invoice.project_id,
        "estimateId": invoice.estimate_id,
        "title": invoice.title,
        "description": invoice.description,
        "status": invoice.status,
        "issueDate": invoice.issue_date,
        "dueDate": invoice.due_date,
        "paidDate": invoice.paid_date,
        "currency": invoice.currency,
        "subtotal": invoice.subtotal_amount,
        "taxRate": invoice.tax_rate,
        "taxAmount": invoice.tax_amount,
        "total": invoice.total_amount,
        "notes": invoice.notes,
        "createdBy": invoice.created_by_id,
        "createdAt": invoice.created_at,
        "updatedAt": invoice.updated_at,
    }
    if include_line_items:
        data["lineItems"] = [serialize_line_item(item) for item in invoice.line_items.all()]
    return data
