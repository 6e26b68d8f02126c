"""
Document numbering — ORC-000001 for quotes, OS-000001 for orders.
"""

from tradesman.conf import tradesman_settings
from tradesman.models import DocumentSequence, SequenceKind


def _prefix(kind: str) -> str:
    if kind == SequenceKind.QUOTE:
        return tradesman_settings.QUOTE_NUMBER_PREFIX
    return tradesman_settings.ORDER_NUMBER_PREFIX


def next_number(company, kind: str) -> str:
    """
    Allocate the next number of a company's series.

    The series row is created on first use with the configured prefix and
    width. Must run inside the caller's transaction so the row lock taken by
    allocate() lasts until the document itself is committed.
    """
    sequence, _ = DocumentSequence.objects.get_or_create(
        company=company,
        kind=kind,
        defaults={
            'prefix': _prefix(kind),
            'width': tradesman_settings.NUMBER_WIDTH,
        },
    )
    return sequence.allocate()
