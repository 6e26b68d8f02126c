"""
Tests for quote to order conversion.
"""

from decimal import Decimal

import pytest

from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import Order, OrderItem, OrderPriority, OrderStatus, Quote, QuoteStatus


pytestmark = pytest.mark.django_db


@pytest.fixture
def quote(trade, company, user, customer, next_month, items):
    quote = trade.quotes.create(
        company, user, customer, 'Reforma', next_month, items,
        discount=Decimal('5'), discount_type='FIXED',
        payment_terms='30 dias', description='Reforma completa',
    )
    return quote


@pytest.fixture
def approved(trade, company, user, quote):
    trade.quotes.update_status(company, user, quote, QuoteStatus.SENT)
    return trade.quotes.update_status(company, user, quote, QuoteStatus.APPROVED)


class TestConvert:

    def test_creates_order_and_closes_quote(self, trade, company, user, approved):
        order = trade.convert_to_order(company, user, approved, priority=OrderPriority.HIGH)

        assert order.number == 'OS-000001'
        assert order.status == OrderStatus.PENDING
        assert order.priority == OrderPriority.HIGH
        assert order.quote == approved
        assert order.customer == approved.customer
        assert order.title == 'Reforma'
        assert order.payment_terms == '30 dias'

        approved.refresh_from_db()
        assert approved.status == QuoteStatus.CONVERTED
        assert approved.converted_at is not None

    def test_totals_are_carried_over(self, trade, company, user, approved):
        order = trade.convert_to_order(company, user, approved)

        assert order.subtotal == approved.subtotal
        assert order.items_discount == approved.items_discount
        assert order.discount_value == approved.discount_value
        assert order.total == Decimal('175.00')

        line = OrderItem.objects.get(order=order)
        assert line.discount_type == 'PERCENTAGE'
        assert line.total == Decimal('180.00')

    def test_draft_is_refused(self, trade, company, user, quote):
        with pytest.raises(ValidationError) as exc:
            trade.convert_to_order(company, user, quote)

        assert exc.value.code == 'QUOTE_NOT_APPROVED'
        assert not Order.objects.exists()

    def test_second_conversion_is_refused(self, trade, company, user, approved):
        trade.convert_to_order(company, user, approved)

        with pytest.raises(ValidationError) as exc:
            trade.convert_to_order(company, user, approved)

        # Status is checked before the existing order
        assert exc.value.code == 'QUOTE_NOT_APPROVED'
        assert Order.objects.count() == 1

    def test_existing_order_blocks_approved_quote(self, trade, company, user, approved):
        trade.convert_to_order(company, user, approved)
        Quote.objects.filter(pk=approved.pk).update(status=QuoteStatus.APPROVED)

        with pytest.raises(ValidationError) as exc:
            trade.convert_to_order(company, user, approved)

        assert exc.value.code == 'QUOTE_ALREADY_CONVERTED'
        assert Order.objects.count() == 1

    def test_deleted_order_does_not_block(self, trade, company, user, approved):
        first = trade.convert_to_order(company, user, approved)
        trade.orders.delete(company, user, first)
        Quote.objects.filter(pk=approved.pk).update(status=QuoteStatus.APPROVED)

        second = trade.convert_to_order(company, user, approved)

        assert second.pk != first.pk
        assert second.number == 'OS-000002'
        approved.refresh_from_db()
        assert approved.status == QuoteStatus.CONVERTED

    def test_restoring_superseded_order(self, trade, company, user, approved):
        first = trade.convert_to_order(company, user, approved)
        trade.orders.delete(company, user, first)
        Quote.objects.filter(pk=approved.pk).update(status=QuoteStatus.APPROVED)
        trade.convert_to_order(company, user, approved)

        with pytest.raises(ValidationError) as exc:
            trade.orders.restore(company, user, first)

        assert exc.value.code == 'QUOTE_ALREADY_CONVERTED'
        assert Order.objects.alive().filter(quote=approved).count() == 1

    def test_missing_quote(self, trade, company, other_company, user, approved):
        with pytest.raises(NotFoundError) as exc:
            trade.convert_to_order(other_company, user, approved)

        assert exc.value.code == 'QUOTE_NOT_FOUND'

    def test_failure_leaves_quote_approved(self, trade, company, user, approved, monkeypatch):
        def boom(*args, **kwargs):
            raise RuntimeError('numbering down')

        monkeypatch.setattr(trade.orders, 'insert', boom)

        with pytest.raises(RuntimeError):
            trade.convert_to_order(company, user, approved)

        approved.refresh_from_db()
        assert approved.status == QuoteStatus.APPROVED
        assert not Order.objects.exists()

    def test_converted_quote_is_locked(self, trade, company, user, approved):
        trade.convert_to_order(company, user, approved)

        with pytest.raises(ValidationError) as exc:
            trade.quotes.update(company, user, approved, title='Mudança')

        assert exc.value.code == 'QUOTE_LOCKED'

    def test_order_numbering_is_shared_with_direct_orders(self, trade, company, user, approved, customer, items):
        trade.orders.create(company, user, customer, 'Direta', items)

        order = trade.convert_to_order(company, user, approved)

        assert order.number == 'OS-000002'
