"""Atomic document number issuance."""

import logging

from django.db import DatabaseError, transaction

from opsportal.conf import get_setting
from opsportal.numbering.exceptions import NumberingUnavailableError, SequenceNotFoundError
from opsportal.numbering.models import DocumentSequence

logger = logging.getLogger(__name__)

ESTIMATE_SCOPE = 'estimate'
INVOICE_SCOPE = 'invoice'


def next_number(
    scope: str,
    prefix: str = '',
    start: int = 1,
    pad_width: int = 0,
    include_year: bool = False,
    auto_create: bool = True,
) -> str:
    """
    Issue the next number for ``scope``.

    The sequence row is locked with select_for_update() so concurrent
    callers are serialized and never receive the same value. When called
    inside an outer transaction (document creation) the increment commits
    or rolls back together with the document.

    Args:
        scope: Document type, one counter per scope
        prefix: Prefix used when the sequence is auto-created
        start: First value issued by an auto-created sequence
        pad_width: Zero-padding used when auto-creating
        include_year: Year segment used when auto-creating
        auto_create: Create the sequence if it doesn't exist

    Returns:
        The formatted number, e.g. "EST-1000"

    Raises:
        SequenceNotFoundError: If the sequence is missing and auto_create is False
        NumberingUnavailableError: If the counter store fails
    """
    try:
        with transaction.atomic():
            if auto_create:
                # get_or_create retries the lookup if a concurrent caller
                # inserted the row first
                seq, created = DocumentSequence.objects.get_or_create(
                    scope=scope,
                    defaults={
                        'prefix': prefix,
                        'current_value': max(start - 1, 0),
                        'pad_width': pad_width,
                        'include_year': include_year,
                    },
                )
                if created:
                    logger.info("Created document sequence %r starting at %s", scope, start)
            try:
                seq = DocumentSequence.objects.select_for_update().get(scope=scope)
            except DocumentSequence.DoesNotExist:
                raise SequenceNotFoundError(scope)

            seq.current_value += 1
            seq.save(update_fields=['current_value', 'updated_at'])
            return seq.formatted_value
    except DatabaseError as e:
        logger.error("Document sequence %r unavailable: %s", scope, e)
        raise NumberingUnavailableError(scope, str(e)) from e


def next_estimate_number() -> str:
    """Issue the next estimate number, e.g. "EST-1000"."""
    return next_number(
        ESTIMATE_SCOPE,
        prefix=get_setting('ESTIMATE_NUMBER_PREFIX'),
        start=get_setting('DOCUMENT_NUMBER_START'),
    )


def next_invoice_number() -> str:
    """Issue the next invoice number, e.g. "INV-1000"."""
    return next_number(
        INVOICE_SCOPE,
        prefix=get_setting('INVOICE_NUMBER_PREFIX'),
        start=get_setting('DOCUMENT_NUMBER_START'),
    )
