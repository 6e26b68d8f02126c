"""
Quote → Order conversion.

The only path that sets a quote to CONVERTED. Does not reserve or move
stock; fulfillment of the resulting order is a separate flow.
"""

from __future__ import annotations

import logging

from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import Order, OrderPriority, Quote, QuoteStatus
from tradesman.protocols.permissions import ORDERS_CREATE, QUOTES_UPDATE
from tradesman.services.base import TradeService, pk_of
from tradesman.services.documents import ValidLine
from tradesman.services.orders import OrderService, check_dates, check_priority

logger = logging.getLogger('tradesman')


class QuoteConversion(TradeService):

    def __init__(self, gate=None, uow=None, orders: OrderService | None = None):
        super().__init__(gate=gate, uow=uow)
        self.orders = orders or OrderService(gate=self.gate, uow=self.uow)

    def convert_to_order(self, company, user, quote, priority: str = OrderPriority.MEDIUM,
                         expected_start_date=None, expected_end_date=None) -> Order:
        """
        Materialize an order from an approved quote.

        Checks, in order, each with its own error:
            1. quote exists                  NotFoundError('QUOTE_NOT_FOUND')
            2. quote is APPROVED             ValidationError('QUOTE_NOT_APPROVED')
            3. no order references the quote ValidationError('QUOTE_ALREADY_CONVERTED')

        Then, in the same transaction: allocate an OS- number, create the
        order with lines re-priced from the quote's inputs, and set the quote
        to CONVERTED.

        Raises:
            ForbiddenError: Without quotes:update and orders:create
        """
        self._require(user, QUOTES_UPDATE, ORDERS_CREATE)

        priority = check_priority(priority)
        check_dates(expected_start_date, expected_end_date)

        with self.uow.atomic():
            locked = (
                Quote.objects.for_company(company).alive()
                .select_for_update()
                .filter(pk=pk_of(quote))
                .first()
            )
            if locked is None:
                raise NotFoundError('QUOTE_NOT_FOUND', quote_id=pk_of(quote))

            if locked.status != QuoteStatus.APPROVED:
                raise ValidationError('QUOTE_NOT_APPROVED', quote_id=locked.pk, status=locked.status)

            # Independent of status: a prior run may have created the order
            # and failed before updating the quote.
            if Order.objects.for_company(company).alive().filter(quote=locked).exists():
                raise ValidationError('QUOTE_ALREADY_CONVERTED', quote_id=locked.pk)

            lines = [
                ValidLine(product=row.product, line=row.as_line(), observations=row.observations)
                for row in locked.items.select_related('product')
            ]

            order = self.orders.insert(
                company, user, locked.customer, locked.title, lines,
                locked.discount, locked.discount_type,
                quote=locked,
                priority=priority,
                expected_start_date=expected_start_date,
                expected_end_date=expected_end_date,
                description=locked.description,
                payment_terms=locked.payment_terms,
                observations=locked.observations,
            )

            locked.stamp_status(QuoteStatus.CONVERTED)
            locked.save()

            logger.info(
                "quote.converted",
                extra={
                    "quote_id": locked.pk,
                    "order_id": order.pk,
                    "order_number": order.number,
                },
            )
            return order
