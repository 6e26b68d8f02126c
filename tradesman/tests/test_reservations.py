"""
Tests for reservations: create, cancel and expiry.
"""

from datetime import timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command
from django.utils import timezone

from tradesman.exceptions import InsufficientStockError, NotFoundError, ValidationError
from tradesman.models import ReservationStatus, StockItem, StockReservation


pytestmark = pytest.mark.django_db


def reserved(company, product, location):
    return StockItem.objects.for_company(company).filter(product=product).at_location(location).get().reserved_quantity


class TestCreate:

    def test_reserves_quantity(self, trade, company, user, stocked, location_a):
        reservation = trade.reservations.create(
            company, user, stocked, Decimal('4'), location=location_a,
            reference_type='QUOTE', reference_id=42,
        )

        assert reservation.status == ReservationStatus.ACTIVE
        assert reservation.reference_id == '42'
        assert reserved(company, stocked, location_a) == Decimal('4')

    def test_second_reservation_sees_only_the_rest(self, trade, company, user, stocked, location_a):
        trade.reservations.create(company, user, stocked, Decimal('7'), location=location_a)

        with pytest.raises(InsufficientStockError) as exc:
            trade.reservations.create(company, user, stocked, Decimal('4'), location=location_a)

        assert exc.value.available == Decimal('3')
        assert StockReservation.objects.count() == 1

    def test_without_stock_item(self, trade, company, user, product, location_a):
        with pytest.raises(NotFoundError) as exc:
            trade.reservations.create(company, user, product, Decimal('1'), location=location_a)

        assert exc.value.code == 'STOCK_ITEM_NOT_FOUND'

    @pytest.mark.parametrize('quantity', [Decimal('0.0004'), 'NaN'])
    def test_quantity_must_survive_storage(self, trade, company, user, stocked, location_a, quantity):
        with pytest.raises(ValidationError) as exc:
            trade.reservations.create(company, user, stocked, quantity, location=location_a)

        assert exc.value.code == 'INVALID_QUANTITY'
        assert reserved(company, stocked, location_a) == Decimal('0')

    def test_invalid_quantity(self, trade, company, user, stocked, location_a):
        with pytest.raises(ValidationError):
            trade.reservations.create(company, user, stocked, Decimal('0'), location=location_a)


class TestCancel:

    def test_returns_quantity(self, trade, company, user, stocked, location_a):
        reservation = trade.reservations.create(company, user, stocked, Decimal('4'), location=location_a)

        cancelled = trade.reservations.cancel(company, user, reservation, reason='Cliente desistiu')

        assert cancelled.status == ReservationStatus.CANCELLED
        assert cancelled.notes == 'Cliente desistiu'
        assert reserved(company, stocked, location_a) == Decimal('0')

    def test_twice(self, trade, company, user, stocked, location_a):
        reservation = trade.reservations.create(company, user, stocked, Decimal('4'), location=location_a)
        trade.reservations.cancel(company, user, reservation)

        with pytest.raises(ValidationError) as exc:
            trade.reservations.cancel(company, user, reservation)

        assert exc.value.code == 'RESERVATION_NOT_ACTIVE'
        assert reserved(company, stocked, location_a) == Decimal('0')

    def test_other_company(self, trade, company, other_company, user, stocked, location_a):
        reservation = trade.reservations.create(company, user, stocked, Decimal('1'), location=location_a)

        with pytest.raises(NotFoundError) as exc:
            trade.reservations.cancel(other_company, user, reservation)

        assert exc.value.code == 'RESERVATION_NOT_FOUND'


class TestExpire:

    def test_expires_only_past_due(self, trade, company, user, stocked, location_a):
        now = timezone.now()
        old = trade.reservations.create(company, user, stocked, Decimal('2'), location=location_a,
                                        expires_at=now - timedelta(minutes=1))
        fresh = trade.reservations.create(company, user, stocked, Decimal('3'), location=location_a,
                                          expires_at=now + timedelta(hours=1))
        forever = trade.reservations.create(company, user, stocked, Decimal('1'), location=location_a)

        assert trade.expire_reservations(now=now) == 1

        old.refresh_from_db()
        fresh.refresh_from_db()
        forever.refresh_from_db()
        assert old.status == ReservationStatus.EXPIRED
        assert fresh.status == ReservationStatus.ACTIVE
        assert forever.status == ReservationStatus.ACTIVE
        assert reserved(company, stocked, location_a) == Decimal('4')

    def test_nothing_to_expire(self, trade):
        assert trade.expire_reservations() == 0

    def test_give_back_floors_at_zero(self, trade, company, user, stocked, location_a):
        reservation = trade.reservations.create(company, user, stocked, Decimal('4'), location=location_a)
        StockItem.objects.filter(location=location_a).update(reserved_quantity=Decimal('1'))

        trade.reservations.cancel(company, user, reservation)

        assert reserved(company, stocked, location_a) == Decimal('0')

    def test_command(self, trade, company, user, stocked, location_a):
        trade.reservations.create(company, user, stocked, Decimal('2'), location=location_a,
                                  expires_at=timezone.now() - timedelta(minutes=5))

        out = StringIO()
        call_command('expire_reservations', '--dry-run', stdout=out)
        assert '1 reserva(s) seria(m) expirada(s)' in out.getvalue()
        assert StockReservation.objects.active().count() == 1

        out = StringIO()
        call_command('expire_reservations', stdout=out)
        assert '1 reserva(s) expirada(s)' in out.getvalue()
        assert StockReservation.objects.active().count() == 0
