"""JSON API views for invoices (read-only)."""

from uuid import UUID

from opsportal.estimating.validators import clean_uuid
from opsportal.http import api_view, paginate, success

from .selectors import get_invoice, list_invoices
from .serializers import serialize_invoice


@api_view("GET")
def invoice_collection(request):
    queryset = list_invoices(
        status=request.GET.get("status"),
        client_id=clean_uuid(request.GET.get("clientId"), "clientId", required=False),
        estimate_id=clean_uuid(request.GET.get("estimateId"), "estimateId", required=False),
    )
    invoices, meta = paginate(request, queryset)
    return success([serialize_invoice(i) for i in invoices], meta=meta)


@api_view("GET")
def invoice_detail(request, invoice_id: UUID):
    invoice = get_invoice(invoice_id)
    return success(serialize_invoice(invoice, include_line_items=True))
