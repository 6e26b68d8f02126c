"""
Line validation and persistence shared by quotes and orders.

Items come in as dicts:

    {
        'product': product,          # instance or pk
        'quantity': Decimal('2'),
        'unit_price': Decimal('100'),
        'discount': Decimal('10'),   # optional
        'discount_type': 'PERCENTAGE',  # optional, per-document default
        'observations': '',          # optional
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from django.db.models import Avg, Count, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import Customer, DiscountType, Product
from tradesman.pricing import DocumentTotals, Line, compute_document, to_money
from tradesman.services.base import as_decimal, as_quantity, pk_of


@dataclass(frozen=True)
class ValidLine:
    product: Product
    line: Line
    observations: str = ''


def check_discount(discount, discount_type) -> Decimal:
    """discount >= 0, and <= 100 when it is a percentage."""
    discount = as_decimal(discount if discount is not None else 0, 'INVALID_DISCOUNT')
    if discount_type not in DiscountType.values:
        raise ValidationError('INVALID_DISCOUNT', discount_type=discount_type)
    if discount < 0:
        raise ValidationError('INVALID_DISCOUNT', discount=discount)
    if discount_type == DiscountType.PERCENTAGE and discount > 100:
        raise ValidationError('INVALID_DISCOUNT', discount=discount, discount_type=discount_type)
    return discount


def get_customer(company, customer, allow_blocked: bool = False) -> Customer:
    found = Customer.objects.for_company(company).alive().filter(pk=pk_of(customer)).first()
    if found is None:
        raise NotFoundError('CUSTOMER_NOT_FOUND', customer_id=pk_of(customer))
    if found.is_blocked and not allow_blocked:
        raise ValidationError('CUSTOMER_BLOCKED', customer_id=found.pk)
    return found


def validate_lines(company, items: Iterable[dict[str, Any]], default_discount_type: str) -> list[ValidLine]:
    """
    Check every line, in order, and return them priced-ready.

    Raises:
        ValidationError('ITEMS_REQUIRED'): No items
        NotFoundError('PRODUCT_NOT_FOUND'): Product missing or deleted
        ValidationError('PRODUCT_INACTIVE')
        ValidationError('INVALID_QUANTITY' | 'INVALID_PRICE' | 'INVALID_DISCOUNT')
    """
    items = list(items or [])
    if not items:
        raise ValidationError('ITEMS_REQUIRED')

    products = Product.objects.for_company(company).alive().in_bulk(
        [pk_of(item.get('product')) for item in items]
    )

    lines = []
    for index, item in enumerate(items):
        product = products.get(pk_of(item.get('product')))
        if product is None:
            raise NotFoundError('PRODUCT_NOT_FOUND', product_id=pk_of(item.get('product')), line=index)
        if not product.is_active:
            raise ValidationError('PRODUCT_INACTIVE', product_id=product.pk, line=index)

        quantity = as_quantity(item.get('quantity'))
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', requested=quantity, line=index)

        unit_price = as_decimal(item.get('unit_price'), 'INVALID_PRICE')
        if unit_price < 0:
            raise ValidationError('INVALID_PRICE', unit_price=unit_price, line=index)

        discount_type = item.get('discount_type') or default_discount_type
        discount = check_discount(item.get('discount'), discount_type)

        lines.append(ValidLine(
            product=product,
            line=Line(
                quantity,
                to_money(unit_price),
                to_money(discount),
                discount_type,
            ),
            observations=(item.get('observations') or '').strip(),
        ))
    return lines


def write_lines(document, line_model, parent_field: str, lines: list[ValidLine],
                discount: Decimal, discount_type: str) -> DocumentTotals:
    """
    Replace the document's lines and store line and document totals.

    The document must already be saved. Returns the totals written.
    """
    totals = compute_document([vl.line for vl in lines], discount, discount_type)

    line_model.objects.filter(**{parent_field: document}).delete()
    rows = []
    for order, (vl, lt) in enumerate(zip(lines, totals.lines)):
        row = line_model(
            product=vl.product,
            quantity=vl.line.quantity,
            unit_price=vl.line.unit_price,
            discount=vl.line.discount,
            discount_type=vl.line.discount_type,
            observations=vl.observations,
            sort_order=order,
            **{parent_field: document},
        )
        row.apply_totals(lt)
        rows.append(row)
    line_model.objects.bulk_create(rows)

    document.discount = discount
    document.discount_type = discount_type
    document.apply_totals(totals)
    return totals


def persisted_totals(document) -> DocumentTotals:
    """Recompute totals from the stored lines (read-time pricing)."""
    return compute_document(
        [row.as_line() for row in document.items.all()],
        document.discount,
        document.discount_type,
    )


def document_stats(qs, statuses) -> dict:
    """
    Counts and totals over live documents.

    Every status appears in by_status, zero when unused. this_month counts
    documents created since the first day of the current local month.
    """
    start_of_month = timezone.localtime().replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    counts = dict.fromkeys(statuses, 0)
    for row in qs.values('status').annotate(n=Count('id')).order_by():
        counts[row['status']] = row['n']

    overall = qs.aggregate(
        value=Coalesce(Sum('total'), Decimal('0')),
        average=Coalesce(Avg('total'), Decimal('0')),
    )
    month = qs.filter(created_at__gte=start_of_month).aggregate(
        count=Count('id'),
        value=Coalesce(Sum('total'), Decimal('0')),
    )

    return {
        'total': sum(counts.values()),
        'by_status': counts,
        'total_value': to_money(overall['value']),
        'average_value': to_money(overall['average']),
        'this_month': {'count': month['count'], 'value': to_money(month['value'])},
    }
