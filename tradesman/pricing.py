"""
Pricing — line and document totals for quotes and orders.

Pure functions over Decimal. The same functions run when a document is
written (to store totals) and when it is read back (``quote_totals``), so the
stored values and the recomputed values are always identical.

    line subtotal   = quantity x unit_price
    line discount   = subtotal x discount / 100   (PERCENTAGE)
                    = discount                    (FIXED)
    line total      = subtotal - line discount

    doc subtotal    = sum(line subtotal)
    doc discount    = doc subtotal x discount / 100 (PERCENTAGE) or discount
    doc total       = doc subtotal - sum(line discount) - doc discount

Every amount is rounded to cents (ROUND_HALF_UP) as soon as it is computed.
Percentages above 100 are rejected by the services before reaching here;
nothing is clamped.

Example:
    >>> doc = compute_document(
    ...     [Line(Decimal('2'), Decimal('100'), Decimal('10'), 'PERCENTAGE')],
    ...     discount=Decimal('5'), discount_type='FIXED',
    ... )
    >>> doc.total
    Decimal('175.00')
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from tradesman.models.enums import DiscountType

CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def to_money(value) -> Decimal:
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def discount_amount(base: Decimal, discount: Decimal, discount_type: str) -> Decimal:
    """Discount value over base, fixed or percentage."""
    if discount_type == DiscountType.PERCENTAGE:
        return to_money(base * Decimal(discount) / Decimal('100'))
    return to_money(discount)


@dataclass(frozen=True)
class Line:
    quantity: Decimal
    unit_price: Decimal
    discount: Decimal = Decimal('0')
    discount_type: str = DiscountType.FIXED


@dataclass(frozen=True)
class LineTotals:
    subtotal: Decimal
    discount_value: Decimal
    total: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    items_discount: Decimal
    discount_value: Decimal
    total: Decimal
    lines: tuple[LineTotals, ...] = field(default_factory=tuple)

    def as_dict(self) -> dict[str, str]:
        return {
            'subtotal': str(self.subtotal),
            'items_discount': str(self.items_discount),
            'discount_value': str(self.discount_value),
            'total': str(self.total),
        }


def compute_line(line: Line) -> LineTotals:
    subtotal = to_money(Decimal(line.quantity) * Decimal(line.unit_price))
    discount_value = discount_amount(subtotal, line.discount, line.discount_type)
    return LineTotals(
        subtotal=subtotal,
        discount_value=discount_value,
        total=subtotal - discount_value,
    )


def compute_document(
    lines: Iterable[Line],
    discount: Decimal = Decimal('0'),
    discount_type: str = DiscountType.FIXED,
) -> DocumentTotals:
    """
    Totals for a collection of lines plus a document-level discount.

    The document discount is taken over the summed line subtotals, not over
    the already-discounted line totals.
    """
    line_totals = tuple(compute_line(line) for line in lines)

    subtotal = sum((lt.subtotal for lt in line_totals), ZERO)
    items_discount = sum((lt.discount_value for lt in line_totals), ZERO)
    discount_value = discount_amount(subtotal, discount, discount_type)

    return DocumentTotals(
        subtotal=subtotal,
        items_discount=items_discount,
        discount_value=discount_value,
        total=subtotal - items_discount - discount_value,
        lines=line_totals,
    )
