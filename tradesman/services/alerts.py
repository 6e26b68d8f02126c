"""
Stock alerts — items at or below their minimum stock.

Usage:
    from tradesman.services.alerts import low_stock_items

    # Run periodically (cron, celery beat) or after stock changes
    for item, available in low_stock_items(company):
        ...
"""

import logging
from decimal import Decimal

from tradesman.models import StockItem

logger = logging.getLogger('tradesman')


def low_stock_items(company, product=None) -> list[tuple[StockItem, Decimal]]:
    """
    Items whose quantity dropped to min_stock or below.

    Items with min_stock = 0 are only reported once they are empty.

    Returns:
        List of (item, available_quantity) tuples.
    """
    qs = StockItem.objects.for_company(company).low_stock().select_related('product', 'location')
    if product is not None:
        qs = qs.filter(product_id=getattr(product, 'pk', product))

    triggered = []
    for item in qs.order_by('product__name', 'id'):
        available = item.available_quantity
        triggered.append((item, available))
        logger.info(
            "stock.alert.triggered",
            extra={
                "company_id": item.company_id,
                "product_id": item.product_id,
                "location_id": item.location_id,
                "quantity": str(item.quantity),
                "min_stock": str(item.min_stock),
                "available": str(available),
            },
        )
    return triggered
