"""
Tests for quotes: creation, pricing, lifecycle, duplication.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from tradesman.exceptions import NotFoundError, ValidationError
from tradesman.models import Customer, Product, Quote, QuoteItem, QuoteStatus


pytestmark = pytest.mark.django_db


@pytest.fixture
def quote(trade, company, user, customer, next_month, items):
    return trade.quotes.create(company, user, customer, 'Troca de peças', next_month, items)


def move_to(trade, company, user, quote, *statuses):
    for status in statuses:
        quote = trade.quotes.update_status(company, user, quote, status)
    return quote


class TestCreate:

    def test_draft_with_number_and_totals(self, quote, user):
        assert quote.status == QuoteStatus.DRAFT
        assert quote.number == 'ORC-000001'
        assert quote.subtotal == Decimal('200.00')
        assert quote.items_discount == Decimal('20.00')
        assert quote.total == Decimal('180.00')
        assert quote.created_by == user
        assert quote.items.count() == 1

    def test_document_discount(self, trade, company, user, customer, next_month, items):
        quote = trade.quotes.create(
            company, user, customer, 'Com desconto', next_month, items,
            discount=Decimal('5'), discount_type='FIXED',
        )

        assert quote.discount_value == Decimal('5.00')
        assert quote.total == Decimal('175.00')

    def test_numbers_are_sequential_per_company(self, trade, company, other_company, user, quote, next_month, items):
        second = trade.quotes.create(company, user, quote.customer, 'Outro', next_month, items)
        assert second.number == 'ORC-000002'

        foreign_customer = Customer.objects.create(company=other_company, name='Outro cliente')
        foreign_product = Product.objects.create(company=other_company, name='P', code='P')
        foreign = trade.quotes.create(
            other_company, user, foreign_customer, 'Outra empresa', next_month,
            [{'product': foreign_product, 'quantity': 1, 'unit_price': 10}],
        )
        assert foreign.number == 'ORC-000001'

    def test_blocked_customer(self, trade, company, user, blocked_customer, next_month, items):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(company, user, blocked_customer, 'Bloqueado', next_month, items)

        assert exc.value.code == 'CUSTOMER_BLOCKED'

    def test_inactive_product(self, trade, company, user, customer, inactive_product, next_month):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(
                company, user, customer, 'Inativo', next_month,
                [{'product': inactive_product, 'quantity': 1, 'unit_price': 10}],
            )

        assert exc.value.code == 'PRODUCT_INACTIVE'

    def test_items_required(self, trade, company, user, customer, next_month):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(company, user, customer, 'Vazio', next_month, [])

        assert exc.value.code == 'ITEMS_REQUIRED'

    @pytest.mark.parametrize('quantity', [Decimal('0.0004'), 'NaN', 'Infinity'])
    def test_line_quantity_must_survive_storage(self, trade, company, user, customer, product, next_month, quantity):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(
                company, user, customer, 'Quantidade', next_month,
                [{'product': product, 'quantity': quantity, 'unit_price': 10}],
            )

        assert exc.value.code == 'INVALID_QUANTITY'
        assert not Quote.objects.exists()

    def test_validity_in_the_past(self, trade, company, user, customer, today, items):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(company, user, customer, 'Antigo', today - timedelta(days=1), items)

        assert exc.value.code == 'INVALID_VALIDITY'

    def test_percentage_over_100(self, trade, company, user, customer, next_month, items):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.create(company, user, customer, 'Demais', next_month, items, discount=Decimal('101'))

        assert exc.value.code == 'INVALID_DISCOUNT'

    def test_failed_create_keeps_no_number(self, trade, company, user, customer, next_month, items):
        with pytest.raises(ValidationError):
            trade.quotes.create(company, user, customer, 'Falha', next_month, [])

        quote = trade.quotes.create(company, user, customer, 'Ok', next_month, items)
        assert quote.number == 'ORC-000001'


class TestUpdate:

    def test_replacing_items_recomputes(self, trade, company, user, quote, product):
        updated = trade.quotes.update(company, user, quote, items=[
            {'product': product, 'quantity': 1, 'unit_price': Decimal('50')},
        ])

        assert updated.total == Decimal('50.00')
        assert QuoteItem.objects.filter(quote=quote).count() == 1

    def test_discount_change_recomputes(self, trade, company, user, quote):
        updated = trade.quotes.update(company, user, quote, discount=Decimal('10'))

        assert updated.discount_value == Decimal('20.00')
        assert updated.total == Decimal('160.00')

    def test_unknown_field(self, trade, company, user, quote):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.update(company, user, quote, number='X')

        assert exc.value.code == 'INVALID_FIELDS'

    def test_converted_is_locked(self, trade, company, user, quote):
        Quote.objects.filter(pk=quote.pk).update(status=QuoteStatus.CONVERTED)

        with pytest.raises(ValidationError) as exc:
            trade.quotes.update(company, user, quote, title='Novo título')

        assert exc.value.code == 'QUOTE_LOCKED'


class TestStatus:

    def test_happy_path_stamps_dates(self, trade, company, user, quote):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT, QuoteStatus.APPROVED)

        assert quote.status == QuoteStatus.APPROVED
        assert quote.sent_at is not None
        assert quote.approved_at is not None

    def test_draft_cannot_be_approved(self, trade, company, user, quote):
        with pytest.raises(ValidationError) as exc:
            trade.quotes.update_status(company, user, quote, QuoteStatus.APPROVED)

        assert exc.value.code == 'INVALID_STATUS_TRANSITION'

    def test_converted_only_through_conversion(self, trade, company, user, quote):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT, QuoteStatus.APPROVED)

        with pytest.raises(ValidationError) as exc:
            trade.quotes.update_status(company, user, quote, QuoteStatus.CONVERTED)

        assert exc.value.code == 'INVALID_STATUS_TRANSITION'
        quote.refresh_from_db()
        assert quote.status == QuoteStatus.APPROVED

    def test_cannot_approve_past_validity(self, trade, company, user, quote, today):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT)
        Quote.objects.filter(pk=quote.pk).update(valid_until=today - timedelta(days=1))

        with pytest.raises(ValidationError) as exc:
            trade.quotes.update_status(company, user, quote, QuoteStatus.APPROVED)

        assert exc.value.code == 'QUOTE_EXPIRED'

    def test_rejected_can_be_sent_again(self, trade, company, user, quote):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT, QuoteStatus.REJECTED, QuoteStatus.SENT)

        assert quote.status == QuoteStatus.SENT
        assert quote.rejected_at is not None


class TestDelete:

    def test_soft_deletes_draft(self, trade, company, user, quote):
        trade.quotes.delete(company, user, quote)

        assert Quote.objects.filter(pk=quote.pk).exists()
        with pytest.raises(NotFoundError):
            trade.quotes.get(company, user, quote)

    def test_approved_is_kept(self, trade, company, user, quote):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT, QuoteStatus.APPROVED)

        with pytest.raises(ValidationError) as exc:
            trade.quotes.delete(company, user, quote)

        assert exc.value.code == 'QUOTE_NOT_DELETABLE'

    def test_restore_brings_it_back(self, trade, company, user, quote):
        trade.quotes.delete(company, user, quote)

        restored = trade.quotes.restore(company, user, quote)

        assert restored.deleted_at is None
        assert trade.quotes.get(company, user, quote).number == quote.number
        assert trade.quotes.list(company, user).total == 1

    def test_restore_live_quote_is_harmless(self, trade, company, user, quote):
        assert trade.quotes.restore(company, user, quote).pk == quote.pk

    def test_restore_other_company(self, trade, other_company, company, user, quote):
        trade.quotes.delete(company, user, quote)

        with pytest.raises(NotFoundError) as exc:
            trade.quotes.restore(other_company, user, quote)

        assert exc.value.code == 'QUOTE_NOT_FOUND'


class TestDuplicate:

    def test_copy_is_a_new_draft(self, trade, company, user, quote):
        quote = move_to(trade, company, user, quote, QuoteStatus.SENT)

        copy = trade.quotes.duplicate(company, user, quote)

        assert copy.pk != quote.pk
        assert copy.number == 'ORC-000002'
        assert copy.title == 'Troca de peças (Cópia)'
        assert copy.status == QuoteStatus.DRAFT
        assert copy.total == quote.total
        assert copy.items.count() == quote.items.count()

    def test_custom_title(self, trade, company, user, quote):
        copy = trade.quotes.duplicate(company, user, quote, title='Revisão')

        assert copy.title == 'Revisão'


class TestRead:

    def test_totals_match_stored(self, trade, company, user, quote):
        totals = trade.quotes.totals(company, user, quote)

        assert totals.total == quote.total
        assert totals.subtotal == quote.subtotal

    def test_list_and_search(self, trade, company, user, quote, customer, next_month, items):
        trade.quotes.create(company, user, customer, 'Instalação elétrica', next_month, items)

        page = trade.quotes.list(company, user, search='elétrica')
        assert page.total == 1
        assert page.items[0].title == 'Instalação elétrica'

        page = trade.quotes.list(company, user, status=QuoteStatus.DRAFT, limit=1)
        assert page.total == 2
        assert page.total_pages == 2
        assert len(page.items) == 1

    def test_other_company_sees_nothing(self, trade, other_company, user, quote):
        assert trade.quotes.list(other_company, user).total == 0
        with pytest.raises(NotFoundError):
            trade.quotes.get(other_company, user, quote)


class TestStats:

    def test_counts_and_values(self, trade, company, user, customer, quote, next_month, items):
        second = trade.quotes.create(company, user, customer, 'Segundo', next_month, items)
        third = trade.quotes.create(company, user, customer, 'Terceiro', next_month, items)
        move_to(trade, company, user, second, QuoteStatus.SENT, QuoteStatus.APPROVED)
        move_to(trade, company, user, third, QuoteStatus.SENT, QuoteStatus.REJECTED)
        deleted = trade.quotes.create(company, user, customer, 'Excluído', next_month, items)
        trade.quotes.delete(company, user, deleted)

        stats = trade.quotes.stats(company, user)

        assert stats['total'] == 3
        assert stats['by_status'][QuoteStatus.DRAFT] == 1
        assert stats['by_status'][QuoteStatus.APPROVED] == 1
        assert stats['by_status'][QuoteStatus.REJECTED] == 1
        assert stats['by_status'][QuoteStatus.CONVERTED] == 0
        assert stats['total_value'] == Decimal('540.00')
        assert stats['average_value'] == Decimal('180.00')
        assert stats['approved_value'] == Decimal('180.00')
        assert stats['this_month'] == {'count': 3, 'value': Decimal('540.00')}
        assert stats['conversion_rate'] == Decimal('50.00')

    def test_empty_company(self, trade, other_company, user):
        stats = trade.quotes.stats(other_company, user)

        assert stats['total'] == 0
        assert stats['total_value'] == Decimal('0.00')
        assert stats['conversion_rate'] == Decimal('0')
