"""JSON API plumbing shared by the estimating and invoicing views.

Responses use one envelope:
    {"success": true, "data": ...}
    {"success": false, "error": {"code": ..., "message": ..., "details": ...}}

Decimals, dates and UUIDs are encoded as strings by DjangoJSONEncoder.
"""

import json
import logging
from decimal import Decimal
from functools import wraps

from django.conf import settings
from django.core.paginator import EmptyPage, Paginator
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError, IntegrityError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt

from opsportal.exceptions import PortalError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200

# PostgreSQL SQLSTATE and SQLite message prefix per constraint kind
INTEGRITY_KINDS = {
    "unique": ("23505", "UNIQUE constraint failed"),
    "foreign_key": ("23503", "FOREIGN KEY constraint failed"),
    "not_null": ("23502", "NOT NULL constraint failed"),
    "check": ("23514", "CHECK constraint failed"),
}

INTEGRITY_RESPONSES = {
    "unique": ("DUPLICATE_ENTRY", "A record with this value already exists", 409),
    "foreign_key": ("INVALID_REFERENCE", "Referenced record does not exist", 400),
    "not_null": ("MISSING_REQUIRED", "Required field is missing", 400),
}


def success(data, status: int = 200, meta: dict = None) -> JsonResponse:
    body = {"success": True, "data": data}
    if meta is not None:
        body["meta"] = meta
    return JsonResponse(body, status=status, encoder=DjangoJSONEncoder)


def error(code: str, message: str, status: int, details=None) -> JsonResponse:
    payload = {"code": code, "message": message}
    if details is not None:
        payload["details"] = details
    return JsonResponse({"success": False, "error": payload}, status=status, encoder=DjangoJSONEncoder)


def integrity_error_kind(exc: IntegrityError):
    """Classify an IntegrityError as unique, foreign_key, not_null or check.

    Returns None when the backend gives no recognizable code.
    """
    sqlstate = getattr(exc.__cause__, "sqlstate", None)
    message = str(exc)
    for kind, (code, prefix) in INTEGRITY_KINDS.items():
        if sqlstate == code or message.startswith(prefix):
            return kind
    return None


def parse_json_body(request) -> dict:
    """Decode a JSON object body; numbers with a fraction become Decimal."""
    if not request.body:
        return {}
    try:
        body = json.loads(request.body, parse_float=Decimal)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError.for_field("body", "Malformed JSON")
    if not isinstance(body, dict):
        raise ValidationError.for_field("body", "Expected a JSON object")
    return body


def paginate(request, queryset):
    """Slice a queryset by ?page= and ?limit=.

    Returns:
        (items, meta) where meta is {page, limit, total, totalPages}
    """
    try:
        page_number = max(int(request.GET.get("page", 1)), 1)
        limit = min(max(int(request.GET.get("limit", DEFAULT_PAGE_SIZE)), 1), MAX_PAGE_SIZE)
    except ValueError:
        raise ValidationError.for_field("page", "page and limit must be integers")

    paginator = Paginator(queryset, limit)
    try:
        items = list(paginator.page(page_number).object_list)
    except EmptyPage:
        items = []

    meta = {
        "page": page_number,
        "limit": limit,
        "total": paginator.count,
        "totalPages": paginator.num_pages if paginator.count else 0,
    }
    return items, meta


def api_view(*methods):
    """Decorate a JSON API view.

    - rejects methods not in ``methods`` with 405
    - requires an authenticated request.user (identity comes from the
      authentication middleware) with 401
    - turns PortalError and DatabaseError into error envelopes; nothing is
      retried
    - maps unique, foreign key and not-null IntegrityErrors to 409/400;
      any other constraint failure is logged and returned as 500
    """
    allowed = [method.upper() for method in methods]

    def decorator(view):
        @csrf_exempt
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                response = error(
                    "METHOD_NOT_ALLOWED",
                    f"Method {request.method} not allowed",
                    status=405,
                )
                response["Allow"] = ", ".join(allowed)
                return response

            user = getattr(request, "user", None)
            if user is None or not user.is_authenticated:
                return error("UNAUTHORIZED", "Authentication required", status=401)

            try:
                return view(request, *args, **kwargs)
            except PortalError as e:
                if e.status_code >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, e)
                return error(e.code, e.message, status=e.status_code, details=e.details)
            except IntegrityError as e:
                kind = integrity_error_kind(e)
                if kind in INTEGRITY_RESPONSES:
                    logger.warning("%s %s hit a %s constraint", request.method, request.path, kind)
                    return error(*INTEGRITY_RESPONSES[kind])
                logger.exception("%s %s violated a data constraint", request.method, request.path)
                return error("INTERNAL_ERROR", "An unexpected error occurred", status=500)
            except DatabaseError as e:
                logger.exception("%s %s database error", request.method, request.path)
                message = str(e) if settings.DEBUG else "An unexpected error occurred"
                return error("INTERNAL_ERROR", message, status=500)

        return wrapper

    return decorator
