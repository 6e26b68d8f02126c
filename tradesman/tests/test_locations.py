"""
Tests for stock location management.
"""

from decimal import Decimal

import pytest

from tradesman.exceptions import ConflictError, NotFoundError, ValidationError
from tradesman.models import StockLocation


pytestmark = pytest.mark.django_db


class TestLocations:

    def test_create(self, trade, company, user):
        location = trade.locations.create(company, user, ' DEP-02 ', 'Depósito 2')

        assert location.code == 'DEP-02'
        assert location.is_active

    def test_code_unique_per_company(self, trade, company, other_company, user, location_a):
        with pytest.raises(ConflictError) as exc:
            trade.locations.create(company, user, location_a.code, 'Outro')

        assert exc.value.code == 'LOCATION_CODE_TAKEN'
        assert trade.locations.create(other_company, user, location_a.code, 'Outro').pk

    def test_code_and_name_required(self, trade, company, user):
        with pytest.raises(ValidationError) as exc:
            trade.locations.create(company, user, '', 'Sem código')

        assert exc.value.code == 'INVALID_LOCATION'

    def test_update(self, trade, company, user, location_a):
        updated = trade.locations.update(company, user, location_a, name='Depósito Central', is_active=False)

        assert updated.name == 'Depósito Central'
        assert trade.locations.list(company, user, active_only=True) == []

    def test_update_to_taken_code(self, trade, company, user, location_a, location_b):
        with pytest.raises(ConflictError):
            trade.locations.update(company, user, location_b, code=location_a.code)

    def test_delete_empty_location(self, trade, company, user, location_a):
        trade.locations.delete(company, user, location_a)

        assert StockLocation.objects.filter(pk=location_a.pk, deleted_at__isnull=False).exists()
        with pytest.raises(NotFoundError):
            trade.locations.get(company, user, location_a)

    def test_code_reusable_after_delete(self, trade, company, user, location_a):
        trade.locations.delete(company, user, location_a)

        assert trade.locations.create(company, user, location_a.code, 'Novo').pk != location_a.pk

    def test_delete_with_stock(self, trade, company, user, stocked, location_a):
        with pytest.raises(ValidationError) as exc:
            trade.locations.delete(company, user, location_a)

        assert exc.value.code == 'LOCATION_NOT_EMPTY'

    def test_delete_after_emptying(self, trade, company, user, stocked, location_a):
        trade.ledger.stock_out(company, user, stocked, Decimal('10'), location=location_a)

        trade.locations.delete(company, user, location_a)

    def test_deleted_location_rejects_movements(self, trade, company, user, product, location_a):
        trade.locations.delete(company, user, location_a)

        with pytest.raises(NotFoundError):
            trade.ledger.stock_in(company, user, product, Decimal('1'), location=location_a)

    def test_list_is_ordered_by_code(self, trade, company, user, location_a, location_b):
        assert [loc.code for loc in trade.locations.list(company, user)] == ['DEP-01', 'VIT']
