"""Append-only activity log for estimates and invoices."""


def record_activity(*args, **kwargs):
    """Append an activity entry for an entity."""
    from .api import record_activity as _record_activity
    return _record_activity(*args, **kwargs)


__all__ = ["record_activity"]
