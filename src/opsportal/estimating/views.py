"""JSON API views for estimates."""

from uuid import UUID

from opsportal.http import api_view, paginate, parse_json_body, success
from opsportal.invoicing.services import convert_estimate_to_invoice

from . import services
from .selectors import get_estimate, list_estimates
from .serializers import serialize_estimate
from .validators import clean_uuid

# camelCase API field -> service keyword
PAYLOAD_FIELDS = {
    "clientId": "client_id",
    "projectId": "project_id",
    "title": "title",
    "description": "description",
    "status": "status",
    "lineItems": "line_items",
    "taxRate": "tax_rate",
    "validUntil": "valid_until",
}


def _line_items_from_payload(items):
    if not isinstance(items, list):
        return items
    return [
        {
            "description": item.get("description"),
            "quantity": item.get("quantity", 1),
            "unit_price": item.get("unitPrice"),
        }
        if isinstance(item, dict)
        else item
        for item in items
    ]


def _payload_to_kwargs(body: dict) -> dict:
    kwargs = {}
    for key, value in body.items():
        name = PAYLOAD_FIELDS.get(key, key)
        if name == "line_items":
            value = _line_items_from_payload(value)
        kwargs[name] = value
    return kwargs


@api_view("GET", "POST")
def estimate_collection(request):
    """GET: list estimates. POST: create a draft estimate."""
    if request.method == "POST":
        body = _payload_to_kwargs(parse_json_body(request))
        estimate = services.create_estimate(
            client_id=body.get("client_id"),
            title=body.get("title"),
            line_items=body.get("line_items"),
            project_id=body.get("project_id"),
            description=body.get("description", ""),
            tax_rate=body.get("tax_rate"),
            valid_until=body.get("valid_until"),
            created_by=request.user,
        )
        return success(serialize_estimate(estimate, include_line_items=True), status=201)

    queryset = list_estimates(
        status=request.GET.get("status"),
        client_id=clean_uuid(request.GET.get("clientId"), "clientId", required=False),
        search=request.GET.get("search"),
    )
    estimates, meta = paginate(request, queryset)
    return success([serialize_estimate(e) for e in estimates], meta=meta)


@api_view("GET", "PATCH", "DELETE")
def estimate_detail(request, estimate_id: UUID):
    """GET: estimate with line items. PATCH: update. DELETE: delete."""
    if request.method == "PATCH":
        changes = _payload_to_kwargs(parse_json_body(request))
        estimate = services.update_estimate(estimate_id, actor=request.user, **changes)
        return success(serialize_estimate(estimate, include_line_items=True))

    if request.method == "DELETE":
        services.delete_estimate(estimate_id, actor=request.user)
        return success({"message": "Estimate deleted successfully"})

    estimate = get_estimate(estimate_id)
    return success(serialize_estimate(estimate, include_line_items=True))


@api_view("POST")
def estimate_convert_to_invoice(request, estimate_id: UUID):
    """Convert an approved estimate into a draft invoice."""
    result = convert_estimate_to_invoice(estimate_id, actor=request.user)
    return success(
        {
            "invoiceId": result.invoice_id,
            "invoiceNumber": result.invoice_number,
            "message": "Estimate converted to invoice successfully",
        },
        status=201,
    )
