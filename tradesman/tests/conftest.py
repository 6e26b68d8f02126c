"""
Pytest fixtures for Tradesman tests.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from tradesman.adapters.noop import AllowAllGate
from tradesman.adapters.permissions import reset_permission_gate
from tradesman.models import Company, Customer, CustomerStatus, Product, ProductStatus, StockLocation
from tradesman.service import Tradesman


User = get_user_model()


@pytest.fixture(autouse=True)
def _fresh_gate():
    """Gate is cached per process; tests that change settings need a reload."""
    reset_permission_gate()
    yield
    reset_permission_gate()


@pytest.fixture
def company(db):
    return Company.objects.create(name='Oficina Central')


@pytest.fixture
def other_company(db):
    return Company.objects.create(name='Oficina Concorrente')


@pytest.fixture
def user(db):
    """Create a test user."""
    return User.objects.create_user(
        username='testuser',
        password='testpass123'
    )


@pytest.fixture
def superuser(db):
    return User.objects.create_superuser(
        username='admin',
        email='admin@example.com',
        password='adminpass123'
    )


@pytest.fixture
def product(company):
    """Create a test product."""
    return Product.objects.create(company=company, name='Parafuso', code='PAR-001')


@pytest.fixture
def other_product(company):
    return Product.objects.create(company=company, name='Porca', code='POR-001')


@pytest.fixture
def inactive_product(company):
    return Product.objects.create(
        company=company,
        name='Arruela antiga',
        code='ARR-000',
        status=ProductStatus.INACTIVE,
    )


@pytest.fixture
def location_a(company):
    return StockLocation.objects.create(company=company, code='DEP-01', name='Depósito')


@pytest.fixture
def location_b(company):
    return StockLocation.objects.create(company=company, code='VIT', name='Vitrine')


@pytest.fixture
def customer(company):
    return Customer.objects.create(company=company, name='Maria Souza')


@pytest.fixture
def blocked_customer(company):
    return Customer.objects.create(
        company=company,
        name='João Devedor',
        status=CustomerStatus.BLOCKED,
    )


@pytest.fixture
def trade(db):
    """Facade with every capability granted."""
    return Tradesman(gate=AllowAllGate())


@pytest.fixture
def stocked(trade, company, user, product, location_a):
    """10 units of product at location_a, cost 5."""
    trade.ledger.stock_in(company, user, product, Decimal('10'), location=location_a, unit_cost=Decimal('5'))
    return product


@pytest.fixture
def today():
    return timezone.localdate()


@pytest.fixture
def next_month(today):
    return today + timedelta(days=30)


@pytest.fixture
def items(product):
    """One line: 2 x 100.00 with 10% off."""
    return [{
        'product': product,
        'quantity': Decimal('2'),
        'unit_price': Decimal('100'),
        'discount': Decimal('10'),
        'discount_type': 'PERCENTAGE',
    }]
