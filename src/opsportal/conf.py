"""Configuration helpers for opsportal.

Application settings live in Django settings under the ``OPSPORTAL_`` prefix
and are read at call time so ``override_settings`` works in tests.
"""

from django.conf import settings


DEFAULTS = {
    "ESTIMATE_NUMBER_PREFIX": "EST-",
    "INVOICE_NUMBER_PREFIX": "INV-",
    "DOCUMENT_NUMBER_START": 1000,
    "INVOICE_DUE_DAYS": 30,
    "DEFAULT_CURRENCY": "USD",
    # {from_status: [to_status, ...]}; None leaves every transition open
    "ESTIMATE_TRANSITIONS": None,
    "ALLOW_REPEAT_CONVERSION": False,
}


def get_setting(name: str, default=None):
    """Get a setting with OPSPORTAL_ prefix, falling back to DEFAULTS."""
    if default is None:
        default = DEFAULTS.get(name)
    return getattr(settings, f"OPSPORTAL_{name}", default)
