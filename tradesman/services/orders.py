"""
Orders — create, edit, status lifecycle and read.
"""

from __future__ import annotations

import logging

from django.db.models import Count, Q
from django.utils import timezone

from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import (
    DiscountType,
    Order,
    OrderItem,
    OrderPriority,
    OrderStatus,
    SequenceKind,
)
from tradesman.pricing import to_money
from tradesman.protocols.permissions import (
    ORDERS_CREATE,
    ORDERS_DELETE,
    ORDERS_READ,
    ORDERS_UPDATE,
)
from tradesman.services.base import TradeService, pk_of
from tradesman.services.documents import (
    ValidLine,
    check_discount,
    document_stats,
    get_customer,
    persisted_totals,
    validate_lines,
    write_lines,
)
from tradesman.services.ledger import user_or_none
from tradesman.services.numbering import next_number
from tradesman.services.pagination import Page, paginate

logger = logging.getLogger('tradesman')

ORDER_TRANSITIONS: dict[str, tuple[str, ...]] = {
    OrderStatus.PENDING: (OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED),
    OrderStatus.IN_PROGRESS: (OrderStatus.PAUSED, OrderStatus.COMPLETED, OrderStatus.CANCELLED),
    OrderStatus.PAUSED: (OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED),
    OrderStatus.COMPLETED: (),
    OrderStatus.CANCELLED: (OrderStatus.PENDING,),
}

EDITABLE_FIELDS = {
    'customer', 'title', 'description', 'priority', 'expected_start_date',
    'expected_end_date', 'payment_terms', 'observations', 'discount',
    'discount_type', 'items',
}


def can_transition(current: str, target: str) -> bool:
    return target in ORDER_TRANSITIONS.get(current, ())


def check_dates(start, end) -> None:
    if start is not None and end is not None and end <= start:
        raise ValidationError('INVALID_DATES', start=str(start), end=str(end))


def check_priority(priority) -> str:
    if priority not in OrderPriority.values:
        raise ValidationError('INVALID_PRIORITY', priority=priority)
    return priority


class OrderService(TradeService):
    """Order lifecycle."""

    def _get(self, company, order, lock: bool = False) -> Order:
        qs = Order.objects.for_company(company).alive()
        if lock:
            qs = qs.select_for_update()
        found = qs.filter(pk=pk_of(order)).first()
        if found is None:
            raise NotFoundError('ORDER_NOT_FOUND', order_id=pk_of(order))
        return found

    def insert(self, company, user, customer, title: str, lines: list[ValidLine],
               discount, discount_type: str, quote=None, **fields) -> Order:
        """
        Write a PENDING order with an OS- number and its priced lines.

        No permission check and no transaction: callers (create and the
        conversion workflow) hold both.
        """
        order = Order.objects.create(
            company=company,
            number=next_number(company, SequenceKind.ORDER),
            customer=customer,
            quote=quote,
            title=title,
            status=OrderStatus.PENDING,
            discount=discount,
            discount_type=discount_type,
            created_by=user_or_none(user),
            **fields,
        )
        totals = write_lines(order, OrderItem, 'order', lines, discount, discount_type)
        order.save()

        logger.info(
            "order.created",
            extra={
                "company_id": company.pk,
                "order_id": order.pk,
                "number": order.number,
                "quote_id": pk_of(quote),
                "total": str(totals.total),
            },
        )
        return order

    # ══════════════════════════════════════════════════════════════
    # WRITE
    # ══════════════════════════════════════════════════════════════

    def create(self, company, user, customer, title: str, items,
               discount=0, discount_type: str = DiscountType.FIXED,
               priority: str = OrderPriority.MEDIUM,
               expected_start_date=None, expected_end_date=None,
               description: str = '', payment_terms: str = '',
               observations: str = '') -> Order:
        """
        Create an order directly (without a quote).

        Raises:
            ForbiddenError: Without orders:create
            NotFoundError: Customer or a product missing
            ValidationError: Bad line, bad discount, end not after start
        """
        self._require(user, ORDERS_CREATE)

        title = (title or '').strip()
        if not title or len(title) > 255:
            raise ValidationError('TITLE_REQUIRED', title=title)

        with self.uow.atomic():
            customer = get_customer(company, customer, allow_blocked=True)
            lines = validate_lines(company, items, DiscountType.FIXED)
            check_dates(expected_start_date, expected_end_date)
            discount = to_money(check_discount(discount, discount_type))

            return self.insert(
                company, user, customer, title, lines, discount, discount_type,
                priority=check_priority(priority),
                expected_start_date=expected_start_date,
                expected_end_date=expected_end_date,
                description=(description or '').strip(),
                payment_terms=(payment_terms or '').strip(),
                observations=(observations or '').strip(),
            )

    def update(self, company, user, order, **changes) -> Order:
        """
        Edit an open order.

        Raises:
            ValidationError('ORDER_LOCKED'): COMPLETED or CANCELLED
        """
        self._require(user, ORDERS_UPDATE)

        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError('INVALID_FIELDS', fields=sorted(unknown))

        with self.uow.atomic():
            order = self._get(company, order, lock=True)
            if order.is_closed:
                raise ValidationError('ORDER_LOCKED', order_id=order.pk, status=order.status)

            if 'customer' in changes:
                order.customer = get_customer(company, changes['customer'], allow_blocked=True)
            if 'title' in changes:
                title = (changes['title'] or '').strip()
                if not title:
                    raise ValidationError('TITLE_REQUIRED')
                order.title = title
            if 'priority' in changes:
                order.priority = check_priority(changes['priority'])
            for field in ('description', 'payment_terms', 'observations'):
                if field in changes:
                    setattr(order, field, (changes[field] or '').strip())
            for field in ('expected_start_date', 'expected_end_date'):
                if field in changes:
                    setattr(order, field, changes[field])
            check_dates(order.expected_start_date, order.expected_end_date)

            discount_type = changes.get('discount_type', order.discount_type)
            discount = to_money(check_discount(changes.get('discount', order.discount), discount_type))

            if changes.get('items') is not None:
                lines = validate_lines(company, changes['items'], DiscountType.FIXED)
                write_lines(order, OrderItem, 'order', lines, discount, discount_type)
            elif 'discount' in changes or 'discount_type' in changes:
                order.discount = discount
                order.discount_type = discount_type
                order.apply_totals(persisted_totals(order))

            order.save()
            logger.info(
                "order.updated",
                extra={"order_id": order.pk, "fields": sorted(changes)},
            )
            return order

    def delete(self, company, user, order) -> None:
        """
        Soft-delete an order.

        Raises:
            ValidationError('ORDER_NOT_DELETABLE'): Order IN_PROGRESS
        """
        self._require(user, ORDERS_DELETE)

        with self.uow.atomic():
            order = self._get(company, order, lock=True)
            if order.status == OrderStatus.IN_PROGRESS:
                raise ValidationError('ORDER_NOT_DELETABLE', order_id=order.pk)
            order.soft_delete()
            logger.info("order.deleted", extra={"order_id": order.pk})

    def restore(self, company, user, order) -> Order:
        """
        Undo a soft delete. A live order is returned unchanged.

        Raises:
            ForbiddenError: Without orders:update
            NotFoundError('ORDER_NOT_FOUND'): No such order in the tenant
            ValidationError('QUOTE_ALREADY_CONVERTED'): Its quote was converted
                again while the order was deleted
        """
        self._require(user, ORDERS_UPDATE)

        with self.uow.atomic():
            found = (
                Order.objects.for_company(company)
                .select_for_update()
                .filter(pk=pk_of(order))
                .first()
            )
            if found is None:
                raise NotFoundError('ORDER_NOT_FOUND', order_id=pk_of(order))
            if not found.is_deleted:
                return found

            # One live order per quote
            if found.quote_id is not None and (
                Order.objects.for_company(company).alive().filter(quote_id=found.quote_id).exists()
            ):
                raise ValidationError('QUOTE_ALREADY_CONVERTED', quote_id=found.quote_id)

            found.restore()
            logger.info("order.restored", extra={"order_id": found.pk})
            return found

    def update_status(self, company, user, order, status: str) -> Order:
        """
        Move an order along its lifecycle.

        Entering IN_PROGRESS stamps actual_start_date when empty; entering
        COMPLETED stamps actual_end_date.

        Raises:
            ValidationError('INVALID_STATUS_TRANSITION')
        """
        self._require(user, ORDERS_UPDATE)

        with self.uow.atomic():
            order = self._get(company, order, lock=True)
            current = order.status

            if not can_transition(current, status):
                raise ValidationError('INVALID_STATUS_TRANSITION', current=current, target=status)

            now = timezone.now()
            order.status = status
            if status == OrderStatus.IN_PROGRESS and order.actual_start_date is None:
                order.actual_start_date = now
            if status == OrderStatus.COMPLETED:
                order.actual_end_date = now
            order.save()

            logger.info(
                "order.status_changed",
                extra={"order_id": order.pk, "from": current, "to": status},
            )
            return order

    # ══════════════════════════════════════════════════════════════
    # READ
    # ══════════════════════════════════════════════════════════════

    def get(self, company, user, order) -> Order:
        self._require(user, ORDERS_READ)
        return self._get(company, order)

    def list(self, company, user, status=None, customer=None, priority=None,
             search: str | None = None,
             page: int = 1, limit: int | None = None) -> Page[Order]:
        self._require(user, ORDERS_READ)
        qs = Order.objects.for_company(company).alive().select_related('customer', 'quote')
        if status:
            qs = qs.filter(status=status)
        if customer is not None:
            qs = qs.filter(customer_id=pk_of(customer))
        if priority:
            qs = qs.filter(priority=priority)
        if search:
            qs = qs.filter(Q(title__icontains=search) | Q(number__icontains=search))
        return paginate(qs.order_by('-created_at', '-id'), page, limit)

    def stats(self, company, user) -> dict:
        """
        Dashboard numbers over live orders.

        Returns:
            dict with total, by_status, by_priority, total_value,
            average_value, this_month and overdue (open orders past their
            expected end)
        """
        self._require(user, ORDERS_READ)
        qs = Order.objects.for_company(company).alive()

        result = document_stats(qs, OrderStatus.values)

        by_priority = dict.fromkeys(OrderPriority.values, 0)
        for row in qs.values('priority').annotate(n=Count('id')).order_by():
            by_priority[row['priority']] = row['n']
        result['by_priority'] = by_priority

        result['overdue'] = (
            qs.filter(expected_end_date__lt=timezone.now())
            .exclude(status__in=[OrderStatus.COMPLETED, OrderStatus.CANCELLED])
            .count()
        )
        return result
