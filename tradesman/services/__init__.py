"""
Tradesman services — modular organization of stock and sales operations.

    from tradesman.services import StockLedger, StockReservations, QuoteService
"""

from tradesman.services.batches import BatchAllocator
from tradesman.services.conversion import QuoteConversion
from tradesman.services.ledger import StockLedger
from tradesman.services.locations import StockLocations
from tradesman.services.orders import OrderService
from tradesman.services.pagination import Page
from tradesman.services.queries import StockQueries
from tradesman.services.quotes import QuoteService
from tradesman.services.reservations import StockReservations

__all__ = [
    'BatchAllocator',
    'Page',
    'StockLedger',
    'StockReservations',
    'StockLocations',
    'StockQueries',
    'QuoteService',
    'OrderService',
    'QuoteConversion',
]
