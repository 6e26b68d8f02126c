"""
Batch allocation — lot merge on entry, explicit or FIFO consumption on exit.

Called by the ledger inside its own transaction; it never opens one, never
checks permissions, and never touches StockItem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from tradesman.models import StockBatch

logger = logging.getLogger('tradesman')

COST_PLACES = Decimal('0.0001')


def weighted_cost(old_cost: Decimal, old_qty: Decimal, new_cost: Decimal, new_qty: Decimal) -> Decimal:
    """(old_cost x old_qty + new_cost x new_qty) / (old_qty + new_qty)"""
    total_qty = old_qty + new_qty
    if total_qty <= 0:
        return new_cost
    value = (old_cost * old_qty + new_cost * new_qty) / total_qty
    return value.quantize(COST_PLACES, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class BatchDraw:
    """Quantity taken from one lot by a consumption."""

    batch_id: int
    batch_number: str
    quantity: Decimal


class BatchAllocator:
    """Lot bookkeeping for one (company, product, location) at a time."""

    def _lots(self, company, product, location):
        return (
            StockBatch.objects.for_company(company)
            .filter(product=product)
            .at_location(location)
        )

    def receive(self, company, product, location, batch_number: str,
                quantity: Decimal, unit_cost: Decimal | None = None,
                expiration_date=None) -> StockBatch:
        """
        Merge into the lot with the same key or create it.

        Merging keeps the lot's expiration date and blends the cost with
        weighted_cost(). A missing cost counts as zero.
        """
        cost = unit_cost if unit_cost is not None else Decimal('0')

        batch = (
            self._lots(company, product, location)
            .select_for_update()
            .filter(batch_number=batch_number)
            .first()
        )
        if batch is None:
            batch = StockBatch.objects.create(
                company=company,
                product=product,
                location=location,
                batch_number=batch_number,
                quantity=quantity,
                unit_cost=cost,
                expiration_date=expiration_date,
            )
            logger.debug(
                "stock.batch.created",
                extra={"batch_id": batch.pk, "batch_number": batch_number, "qty": str(quantity)},
            )
            return batch

        batch.unit_cost = weighted_cost(batch.unit_cost or Decimal('0'), batch.quantity, cost, quantity)
        batch.quantity = batch.quantity + quantity
        batch.save(update_fields=['quantity', 'unit_cost', 'updated_at'])
        return batch

    def consume_explicit(self, company, product, location, batch_number: str,
                         quantity: Decimal) -> list[BatchDraw]:
        """
        Take quantity from one named lot, flooring it at zero.

        An unknown batch number draws nothing.
        """
        batch = (
            self._lots(company, product, location)
            .select_for_update()
            .filter(batch_number=batch_number)
            .first()
        )
        if batch is None:
            logger.warning(
                "stock.batch.unknown",
                extra={"product_id": product.pk, "batch_number": batch_number},
            )
            return []

        taken = min(batch.quantity, quantity)
        batch.quantity = max(Decimal('0'), batch.quantity - quantity)
        batch.save(update_fields=['quantity', 'updated_at'])
        return [BatchDraw(batch.pk, batch.batch_number, taken)]

    def consume_fifo(self, company, product, location, quantity: Decimal) -> list[BatchDraw]:
        """
        Deplete lots in expiry-then-age order until quantity is exhausted.

        Lots are locked before reading their quantities. When the lots run
        out first, the remainder is left unaccounted at lot level and
        reported as ``stock.batch.fifo_shortfall``.
        """
        remaining = quantity
        draws = []

        lots = self._lots(company, product, location).with_stock().fifo().select_for_update()
        for batch in lots:
            if remaining <= 0:
                break

            take = min(batch.quantity, remaining)
            batch.quantity = batch.quantity - take
            batch.save(update_fields=['quantity', 'updated_at'])

            draws.append(BatchDraw(batch.pk, batch.batch_number, take))
            remaining -= take

        # Products never received with a batch number have no lots to reconcile
        if remaining > 0 and (draws or self._lots(company, product, location).exists()):
            logger.warning(
                "stock.batch.fifo_shortfall",
                extra={
                    "product_id": product.pk,
                    "location_id": getattr(location, 'pk', None),
                    "requested": str(quantity),
                    "missing": str(remaining),
                },
            )
        return draws
