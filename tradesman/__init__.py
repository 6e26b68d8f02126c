"""
Django Tradesman — Estoque, orçamentos e ordens de serviço.

Uso:
    from tradesman import trade, TradeError

    trade.ledger.stock_in(empresa, usuario, parafuso, Decimal('10'), unit_cost=Decimal('5'))
    trade.reservations.create(empresa, usuario, parafuso, Decimal('5'))
    trade.conversion.convert_to_order(empresa, usuario, orcamento)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'trade':
        from tradesman.service import Tradesman
        return Tradesman()
    elif name == 'Tradesman':
        from tradesman.service import Tradesman
        return Tradesman
    elif name == 'TradeError':
        from tradesman.exceptions import TradeError
        return TradeError
    elif name == 'StockItem':
        from tradesman.models.stock_item import StockItem
        return StockItem
    elif name == 'StockMovement':
        from tradesman.models.movement import StockMovement
        return StockMovement
    elif name == 'StockReservation':
        from tradesman.models.reservation import StockReservation
        return StockReservation
    elif name == 'Quote':
        from tradesman.models.quote import Quote
        return Quote
    elif name == 'Order':
        from tradesman.models.order import Order
        return Order
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'trade',
    'Tradesman',
    'TradeError',
    'StockItem',
    'StockMovement',
    'StockReservation',
    'Quote',
    'Order',
]

__version__ = '0.1.0'
