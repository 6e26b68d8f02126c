"""
Tradesman Models.

Core models for stock and sales documents:
- Company: Tenant
- Product, Customer: Reference data
- StockLocation: Where stock exists
- StockItem: Quantity/reservation state per product x location
- StockMovement: Immutable ledger of changes
- StockBatch: Lot tracking with cost and expiry
- StockReservation: Soft holds on available quantity
- Quote, Order: Priced sales documents
- DocumentSequence: Per-tenant document numbering
"""

from tradesman.models.batch import StockBatch
from tradesman.models.catalog import Customer, Product
from tradesman.models.company import Company, TenantQuerySet
from tradesman.models.enums import (
    CustomerStatus,
    DiscountType,
    MovementType,
    OrderPriority,
    OrderStatus,
    ProductStatus,
    QuoteStatus,
    ReferenceType,
    ReservationStatus,
    SequenceKind,
)
from tradesman.models.location import StockLocation
from tradesman.models.movement import StockMovement
from tradesman.models.order import Order, OrderItem
from tradesman.models.quote import Quote, QuoteItem
from tradesman.models.reservation import StockReservation
from tradesman.models.sequence import DocumentSequence
from tradesman.models.stock_item import StockItem

__all__ = [
    'MovementType',
    'ReservationStatus',
    'ReferenceType',
    'DiscountType',
    'QuoteStatus',
    'OrderStatus',
    'OrderPriority',
    'ProductStatus',
    'CustomerStatus',
    'SequenceKind',
    'TenantQuerySet',
    'Company',
    'Product',
    'Customer',
    'StockLocation',
    'StockItem',
    'StockMovement',
    'StockBatch',
    'StockReservation',
    'Quote',
    'QuoteItem',
    'Order',
    'OrderItem',
    'DocumentSequence',
]
