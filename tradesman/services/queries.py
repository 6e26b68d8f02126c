"""
Stock queries — read-only operations.

No locking. Every query starts from ``for_company(company)``.
"""

from __future__ import annotations

from decimal import Decimal

from django.db.models import DecimalField, ExpressionWrapper, F, Sum
from django.db.models.functions import Coalesce

from tradesman.models import (
    ReservationStatus,
    StockBatch,
    StockItem,
    StockMovement,
    StockReservation,
)
from tradesman.protocols.permissions import STOCK_READ
from tradesman.services.base import TradeService, pk_of
from tradesman.services.pagination import Page, paginate


class StockQueries(TradeService):
    """Read-only stock query methods."""

    def get_stock_item(self, company, user, product, location=None) -> StockItem | None:
        """StockItem for the pair, or None when nothing was ever received."""
        self._require(user, STOCK_READ)
        qs = StockItem.objects.for_company(company).filter(product_id=pk_of(product))
        if location is None:
            qs = qs.filter(location__isnull=True)
        else:
            qs = qs.filter(location_id=pk_of(location))
        return qs.select_related('product', 'location').first()

    def available(self, company, user, product, location=None) -> Decimal:
        """
        Available quantity.

        With a location: that item only. Without: summed over every location
        of the product, unlocated bucket included.
        """
        self._require(user, STOCK_READ)
        qs = StockItem.objects.for_company(company).filter(product_id=pk_of(product))
        if location is not None:
            qs = qs.filter(location_id=pk_of(location))
        totals = qs.aggregate(
            qty=Coalesce(Sum('quantity'), Decimal('0')),
            reserved=Coalesce(Sum('reserved_quantity'), Decimal('0')),
        )
        return totals['qty'] - totals['reserved']

    def list_stock_items(self, company, user, product=None, location=None,
                         low_stock: bool = False, out_of_stock: bool = False,
                         page: int = 1, limit: int | None = None) -> Page[StockItem]:
        self._require(user, STOCK_READ)
        qs = StockItem.objects.for_company(company).select_related('product', 'location')
        if product is not None:
            qs = qs.filter(product_id=pk_of(product))
        if location is not None:
            qs = qs.filter(location_id=pk_of(location))
        if low_stock:
            qs = qs.low_stock()
        if out_of_stock:
            qs = qs.out_of_stock()
        return paginate(qs.order_by('product__name', 'location__code', 'id'), page, limit)

    def list_movements(self, company, user, product=None, location=None, type=None,
                       start=None, end=None,
                       page: int = 1, limit: int | None = None) -> Page[StockMovement]:
        """Movements newest first. start/end bound created_at (inclusive)."""
        self._require(user, STOCK_READ)
        qs = StockMovement.objects.for_company(company).select_related(
            'product', 'location', 'destination_location',
        )
        if product is not None:
            qs = qs.filter(product_id=pk_of(product))
        if location is not None:
            qs = qs.filter(location_id=pk_of(location))
        if type:
            qs = qs.filter(type=type)
        if start is not None:
            qs = qs.filter(created_at__gte=start)
        if end is not None:
            qs = qs.filter(created_at__lte=end)
        return paginate(qs.order_by('-created_at', '-id'), page, limit)

    def list_reservations(self, company, user, product=None, status=None,
                          reference_type=None, reference_id=None, location=None,
                          page: int = 1, limit: int | None = None) -> Page[StockReservation]:
        self._require(user, STOCK_READ)
        qs = StockReservation.objects.for_company(company).select_related('product', 'location')
        if product is not None:
            qs = qs.filter(product_id=pk_of(product))
        if status:
            qs = qs.filter(status=status)
        if reference_type:
            qs = qs.filter(reference_type=reference_type)
        if reference_id:
            qs = qs.filter(reference_id=str(reference_id))
        if location is not None:
            qs = qs.filter(location_id=pk_of(location))
        return paginate(qs.order_by('-created_at', '-id'), page, limit)

    def list_batches(self, company, user, product=None, location=None,
                     include_empty: bool = False) -> list[StockBatch]:
        """Lots in FIFO consumption order."""
        self._require(user, STOCK_READ)
        qs = StockBatch.objects.for_company(company)
        if product is not None:
            qs = qs.filter(product_id=pk_of(product))
        if location is not None:
            qs = qs.filter(location_id=pk_of(location))
        if not include_empty:
            qs = qs.with_stock()
        return list(qs.fifo())

    def stock_stats(self, company, user) -> dict:
        """
        Dashboard numbers for the tenant.

        Returns:
            dict with total_items, total_value, low_stock_items,
            out_of_stock_items, total_movements, active_reservations
        """
        self._require(user, STOCK_READ)
        items = StockItem.objects.for_company(company)

        value = ExpressionWrapper(
            F('quantity') * F('unit_cost'),
            output_field=DecimalField(max_digits=28, decimal_places=7),
        )
        total_value = items.aggregate(t=Coalesce(Sum(value), Decimal('0')))['t']

        return {
            'total_items': items.count(),
            'total_value': Decimal(total_value).quantize(Decimal('0.01')),
            'low_stock_items': items.low_stock().count(),
            'out_of_stock_items': items.out_of_stock().count(),
            'total_movements': StockMovement.objects.for_company(company).count(),
            'active_reservations': (
                StockReservation.objects.for_company(company)
                .filter(status=ReservationStatus.ACTIVE).count()
            ),
        }
