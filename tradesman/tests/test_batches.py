"""
Tests for lot bookkeeping: merge on entry, FIFO and explicit consumption.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from tradesman.models import StockBatch
from tradesman.services.batches import weighted_cost


pytestmark = pytest.mark.django_db


def lot(number):
    return StockBatch.objects.get(batch_number=number)


class TestWeightedCost:

    def test_blends_by_quantity(self):
        assert weighted_cost(Decimal('2'), Decimal('10'), Decimal('4'), Decimal('10')) == Decimal('3.0000')

    def test_rounds_to_four_places(self):
        assert weighted_cost(Decimal('1'), Decimal('2'), Decimal('2'), Decimal('1')) == Decimal('1.3333')

    def test_empty_lot_takes_new_cost(self):
        assert weighted_cost(Decimal('9'), Decimal('0'), Decimal('4'), Decimal('0')) == Decimal('4')


class TestReceive:

    def test_same_batch_number_merges(self, trade, company, user, product, location_a):
        trade.ledger.stock_in(company, user, product, Decimal('10'), location=location_a,
                              unit_cost=Decimal('2'), batch_number='L1')
        trade.ledger.stock_in(company, user, product, Decimal('10'), location=location_a,
                              unit_cost=Decimal('4'), batch_number='L1')

        assert StockBatch.objects.count() == 1
        assert lot('L1').quantity == Decimal('20')
        assert lot('L1').unit_cost == Decimal('3')

    def test_merge_keeps_first_expiration(self, trade, company, user, product, location_a, today):
        first = today + timedelta(days=5)
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_a,
                              batch_number='L1', expiration_date=first)
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_a,
                              batch_number='L1', expiration_date=today + timedelta(days=50))

        assert lot('L1').expiration_date == first

    def test_same_number_at_two_locations_is_two_lots(self, trade, company, user, product, location_a, location_b):
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_a, batch_number='L1')
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_b, batch_number='L1')

        assert StockBatch.objects.filter(batch_number='L1').count() == 2

    def test_missing_cost_counts_as_zero(self, trade, company, user, product, location_a):
        trade.ledger.stock_in(company, user, product, Decimal('10'), location=location_a,
                              unit_cost=Decimal('4'), batch_number='L1')
        trade.ledger.stock_in(company, user, product, Decimal('10'), location=location_a, batch_number='L1')

        assert lot('L1').unit_cost == Decimal('2')


class TestConsumeFifo:

    @pytest.fixture
    def lots(self, trade, company, user, product, location_a, today):
        trade.ledger.stock_in(company, user, product, Decimal('5'), location=location_a,
                              batch_number='LATE', expiration_date=today + timedelta(days=10))
        trade.ledger.stock_in(company, user, product, Decimal('3'), location=location_a,
                              batch_number='SOON', expiration_date=today + timedelta(days=5))
        trade.ledger.stock_in(company, user, product, Decimal('4'), location=location_a,
                              batch_number='NEVER')

    def test_soonest_expiry_first(self, trade, company, user, product, location_a, lots):
        movement = trade.ledger.stock_out(company, user, product, Decimal('6'), location=location_a)

        assert lot('SOON').quantity == Decimal('0')
        assert lot('LATE').quantity == Decimal('2')
        assert lot('NEVER').quantity == Decimal('4')
        assert [d['batch_number'] for d in movement.metadata['batches']] == ['SOON', 'LATE']

    def test_lots_without_expiry_go_last(self, trade, company, user, product, location_a, lots):
        trade.ledger.stock_out(company, user, product, Decimal('10'), location=location_a)

        assert lot('NEVER').quantity == Decimal('2')

    def test_age_breaks_ties(self, trade, company, user, product, location_b, today):
        expiry = today + timedelta(days=3)
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_b,
                              batch_number='OLD', expiration_date=expiry)
        trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_b,
                              batch_number='NEW', expiration_date=expiry)

        trade.ledger.stock_out(company, user, product, Decimal('1'), location=location_b)

        assert lot('OLD').quantity == Decimal('0')
        assert lot('NEW').quantity == Decimal('1')

    def test_shortfall_is_logged_not_raised(self, trade, company, user, product, location_a, caplog):
        trade.ledger.stock_in(company, user, product, Decimal('2'), location=location_a, batch_number='L1')
        trade.ledger.stock_in(company, user, product, Decimal('3'), location=location_a)

        with caplog.at_level('WARNING', logger='tradesman'):
            trade.ledger.stock_out(company, user, product, Decimal('4'), location=location_a)

        assert lot('L1').quantity == Decimal('0')
        assert 'stock.batch.fifo_shortfall' in caplog.messages

    def test_products_without_lots_are_quiet(self, trade, company, user, stocked, location_a, caplog):
        with caplog.at_level('WARNING', logger='tradesman'):
            trade.ledger.stock_out(company, user, stocked, Decimal('4'), location=location_a)

        assert 'stock.batch.fifo_shortfall' not in caplog.messages


class TestConsumeExplicit:

    def test_named_lot_is_drawn(self, trade, company, user, product, location_a, today):
        trade.ledger.stock_in(company, user, product, Decimal('3'), location=location_a,
                              batch_number='SOON', expiration_date=today + timedelta(days=1))
        trade.ledger.stock_in(company, user, product, Decimal('3'), location=location_a, batch_number='CHOSEN')

        trade.ledger.stock_out(company, user, product, Decimal('2'), location=location_a, batch_number='CHOSEN')

        assert lot('CHOSEN').quantity == Decimal('1')
        assert lot('SOON').quantity == Decimal('3')

    def test_floors_at_zero(self, trade, company, user, product, location_a):
        trade.ledger.stock_in(company, user, product, Decimal('5'), location=location_a, batch_number='L1')
        trade.ledger.stock_in(company, user, product, Decimal('5'), location=location_a)

        movement = trade.ledger.stock_out(company, user, product, Decimal('7'), location=location_a, batch_number='L1')

        assert lot('L1').quantity == Decimal('0')
        assert Decimal(movement.metadata['batches'][0]['quantity']) == Decimal('5')

    def test_unknown_batch_still_moves_stock(self, trade, company, user, stocked, location_a):
        movement = trade.ledger.stock_out(company, user, stocked, Decimal('1'), location=location_a, batch_number='NOPE')

        assert movement.metadata['batches'] == []
        assert movement.batch_number == 'NOPE'
