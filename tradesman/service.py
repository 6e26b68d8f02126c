"""
Tradesman facade — one object bundling every service over shared collaborators.

Usage:
    from tradesman import trade

    trade.ledger.stock_in(company, user, product, Decimal('10'), unit_cost=Decimal('5'))
    trade.reservations.create(company, user, product, Decimal('5'))
    order = trade.conversion.convert_to_order(company, user, quote)

Tests build their own with injected fakes:
    Tradesman(gate=AllowAllGate())
"""

from __future__ import annotations

from tradesman.protocols.permissions import PermissionGate
from tradesman.protocols.unit_of_work import UnitOfWork
from tradesman.services.base import TradeService
from tradesman.services.batches import BatchAllocator
from tradesman.services.conversion import QuoteConversion
from tradesman.services.ledger import StockLedger
from tradesman.services.locations import StockLocations
from tradesman.services.orders import OrderService
from tradesman.services.queries import StockQueries
from tradesman.services.quotes import QuoteService
from tradesman.services.reservations import StockReservations


class Tradesman(TradeService):
    """
    Single entry point for stock and sales operations.

    Attributes:
        ledger: stock_in, stock_out, adjust, transfer
        reservations: create, cancel, expire
        locations: create, update, delete, get, list
        queries: stock items, movements, reservations, batches, stats
        quotes: create, update, delete, restore, update_status, duplicate, totals, stats
        orders: create, update, delete, restore, update_status, get, list, stats
        conversion: convert_to_order
    """

    def __init__(self, gate: PermissionGate | None = None, uow: UnitOfWork | None = None):
        super().__init__(gate=gate, uow=uow)
        shared = {'gate': self.gate, 'uow': self.uow}

        self.batches = BatchAllocator()
        self.ledger = StockLedger(batches=self.batches, **shared)
        self.reservations = StockReservations(**shared)
        self.locations = StockLocations(**shared)
        self.queries = StockQueries(**shared)
        self.quotes = QuoteService(**shared)
        self.orders = OrderService(**shared)
        self.conversion = QuoteConversion(orders=self.orders, **shared)

    def convert_to_order(self, company, user, quote, **kwargs):
        return self.conversion.convert_to_order(company, user, quote, **kwargs)

    def expire_reservations(self, now=None, company=None) -> int:
        return self.reservations.expire(now=now, company=company)
