"""
Stock ledger — state-changing operations (stock in, stock out, adjust, transfer).

Every operation runs inside one unit of work: permission check first, then
the StockItem row lock, the precondition checks against the locked row, the
movement insert, the item update and any lot bookkeeping. Any failure rolls
all of it back.
"""

from __future__ import annotations

import logging
from typing import Any

from django.db import IntegrityError, transaction
from django.utils import timezone

from tradesman.exceptions import InsufficientStockError, NotFoundError, TransientError, ValidationError
from tradesman.models import MovementType, StockItem, StockMovement
from tradesman.protocols.permissions import (
    STOCK_ADJUST,
    STOCK_TRANSFER,
    STOCK_WRITE,
)
from tradesman.services.base import TradeService, as_decimal, as_quantity, pk_of
from tradesman.services.batches import BatchAllocator

logger = logging.getLogger('tradesman')


def user_or_none(user: Any):
    """Users without a primary key (anonymous, None) are not stored."""
    return user if getattr(user, 'pk', None) is not None else None


class StockLedger(TradeService):
    """Stock movements for one tenant per call."""

    def __init__(self, gate=None, uow=None, batches: BatchAllocator | None = None):
        super().__init__(gate=gate, uow=uow)
        self.batches = batches or BatchAllocator()

    # ══════════════════════════════════════════════════════════════
    # ITEM LOCKING
    # ══════════════════════════════════════════════════════════════

    def _lock_item(self, company, product, location) -> StockItem | None:
        """Lock and return the StockItem, or None if the pair has none yet."""
        return (
            StockItem.objects.for_company(company)
            .select_for_update()
            .filter(product=product)
            .at_location(location)
            .first()
        )

    def _lock_or_create_item(self, company, product, location) -> StockItem:
        """
        Lock the StockItem, creating it on the first entry for the pair.

        Two first entries can both find nothing to lock; the loser's insert
        hits the unique constraint inside its savepoint and it locks the
        winner's row instead.
        """
        item = self._lock_item(company, product, location)
        if item is not None:
            return item
        try:
            with transaction.atomic():
                return StockItem.objects.create(company=company, product=product, location=location)
        except IntegrityError:
            logger.info(
                "stock.item.create_race",
                extra={"company_id": company.pk, "product_id": pk_of(product), "location_id": pk_of(location)},
            )
        item = self._lock_item(company, product, location)
        if item is None:
            raise TransientError('TRANSIENT_FAILURE', product_id=pk_of(product), location_id=pk_of(location))
        return item

    def _touch(self, item: StockItem, movement_type: str, now=None) -> None:
        item.last_movement_at = now or timezone.now()
        item.last_movement_type = movement_type
        item.save()

    # ══════════════════════════════════════════════════════════════
    # OPERATIONS
    # ══════════════════════════════════════════════════════════════

    def stock_in(self, company, user, product, quantity, location=None,
                 unit_cost=None, batch_number: str = '', expiration_date=None,
                 reason: str = '', reference: str = '', notes: str = '') -> StockMovement:
        """
        Stock entry.

        Creates the StockItem on the first entry for the (product, location)
        pair. The item's unit_cost becomes the supplied cost (last cost); a
        batch number merges into the matching lot with weighted-average cost.

        Raises:
            ForbiddenError: Without stock:write
            ValidationError('INVALID_QUANTITY'): quantity <= 0
            ValidationError('INVALID_COST'): unit_cost < 0
            NotFoundError: Product or location missing in the tenant
        """
        self._require(user, STOCK_WRITE)

        quantity = as_quantity(quantity)
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', requested=quantity)
        if unit_cost is not None:
            unit_cost = as_decimal(unit_cost, 'INVALID_COST')
            if unit_cost < 0:
                raise ValidationError('INVALID_COST', unit_cost=unit_cost)

        with self.uow.atomic():
            product = self._get_product(company, product)
            location = self._get_location(company, location)

            item = self._lock_or_create_item(company, product, location)

            movement = StockMovement.objects.create(
                company=company,
                product=product,
                type=MovementType.IN,
                quantity=quantity,
                unit_cost=unit_cost,
                location=location,
                batch_number=batch_number or '',
                expiration_date=expiration_date,
                reason=reason,
                reference=reference,
                notes=notes,
                user=user_or_none(user),
            )

            item.quantity = item.quantity + quantity
            if unit_cost is not None:
                item.unit_cost = unit_cost
            self._touch(item, MovementType.IN, movement.created_at)

            if batch_number:
                self.batches.receive(
                    company, product, location, batch_number,
                    quantity, unit_cost, expiration_date,
                )

            logger.info(
                "stock.in",
                extra={
                    "company_id": company.pk,
                    "product_id": product.pk,
                    "location_id": pk_of(location),
                    "qty": str(quantity),
                    "batch_number": batch_number,
                    "movement_id": movement.pk,
                },
            )
            return movement

    def stock_out(self, company, user, product, quantity, location=None,
                  batch_number: str = '', unit_cost=None,
                  reason: str = '', reference: str = '', notes: str = '') -> StockMovement:
        """
        Stock exit.

        Only available (non-reserved) quantity may leave. With a batch number
        that lot is drawn (floored at zero); otherwise lots are drawn FIFO.

        Raises:
            ForbiddenError: Without stock:write
            ValidationError('INVALID_QUANTITY'): quantity <= 0
            NotFoundError('STOCK_ITEM_NOT_FOUND'): No stock for the pair
            InsufficientStockError: available_quantity < quantity

        Concurrency:
            - select_for_update() on the StockItem
            - Availability verified after the lock
        """
        self._require(user, STOCK_WRITE)

        quantity = as_quantity(quantity)
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', requested=quantity)
        if unit_cost is not None:
            unit_cost = as_decimal(unit_cost, 'INVALID_COST')
            if unit_cost < 0:
                raise ValidationError('INVALID_COST', unit_cost=unit_cost)

        with self.uow.atomic():
            product = self._get_product(company, product)
            location = self._get_location(company, location)

            item = self._lock_item(company, product, location)
            if item is None:
                raise NotFoundError('STOCK_ITEM_NOT_FOUND', product_id=product.pk, location_id=pk_of(location))

            if item.available_quantity < quantity:
                raise InsufficientStockError(
                    'INSUFFICIENT_STOCK',
                    available=item.available_quantity,
                    requested=quantity,
                )

            if batch_number:
                draws = self.batches.consume_explicit(company, product, location, batch_number, quantity)
            else:
                draws = self.batches.consume_fifo(company, product, location, quantity)

            movement = StockMovement.objects.create(
                company=company,
                product=product,
                type=MovementType.OUT,
                quantity=quantity,
                unit_cost=unit_cost,
                location=location,
                batch_number=batch_number or '',
                reason=reason,
                reference=reference,
                notes=notes,
                user=user_or_none(user),
                metadata={
                    'batches': [
                        {'batch_number': d.batch_number, 'quantity': str(d.quantity)}
                        for d in draws
                    ],
                },
            )

            item.quantity = item.quantity - quantity
            self._touch(item, MovementType.OUT, movement.created_at)

            logger.info(
                "stock.out",
                extra={
                    "company_id": company.pk,
                    "product_id": product.pk,
                    "location_id": pk_of(location),
                    "qty": str(quantity),
                    "batches": len(draws),
                    "movement_id": movement.pk,
                },
            )
            return movement

    def adjust(self, company, user, product, new_quantity, reason: str,
               location=None, notes: str = '') -> StockMovement:
        """
        Inventory adjustment to an absolute quantity.

        delta = new_quantity - current quantity (0 when the pair has no
        StockItem yet). The movement records |delta|; the signed delta and
        the previous quantity go to its metadata.

        Raises:
            ForbiddenError: Without stock:adjust
            ValidationError('INVALID_QUANTITY'): new_quantity < 0
            ValidationError('NO_OP_ADJUSTMENT'): delta == 0
            ValidationError('ADJUSTMENT_BELOW_RESERVED'): new_quantity < reserved
        """
        self._require(user, STOCK_ADJUST)

        new_quantity = as_quantity(new_quantity)
        if new_quantity < 0:
            raise ValidationError('INVALID_QUANTITY', requested=new_quantity)

        with self.uow.atomic():
            product = self._get_product(company, product)
            location = self._get_location(company, location)

            # A new item starts at zero and is rolled back if the adjust fails
            item = self._lock_or_create_item(company, product, location)
            current = item.quantity
            delta = new_quantity - current

            if delta == 0:
                raise ValidationError('NO_OP_ADJUSTMENT', quantity=current)
            if new_quantity < item.reserved_quantity:
                raise ValidationError(
                    'ADJUSTMENT_BELOW_RESERVED',
                    reserved=item.reserved_quantity,
                    requested=new_quantity,
                )

            movement = StockMovement.objects.create(
                company=company,
                product=product,
                type=MovementType.ADJUSTMENT,
                quantity=abs(delta),
                location=location,
                reason=reason,
                notes=notes,
                user=user_or_none(user),
                metadata={'delta': str(delta), 'previous': str(current)},
            )

            item.quantity = new_quantity
            self._touch(item, MovementType.ADJUSTMENT, movement.created_at)

            logger.info(
                "stock.adjust",
                extra={
                    "company_id": company.pk,
                    "product_id": product.pk,
                    "location_id": pk_of(location),
                    "delta": str(delta),
                    "reason": reason,
                    "movement_id": movement.pk,
                },
            )
            return movement

    def transfer(self, company, user, product, from_location, to_location, quantity,
                 reason: str = '', reference: str = '', notes: str = '') -> StockMovement:
        """
        Move quantity between two locations.

        One TRANSFER movement is recorded against the source with the
        destination set. The destination item takes the source's unit cost.
        Lots stay where they are.

        Raises:
            ForbiddenError: Without stock:transfer
            ValidationError('SAME_LOCATION'): Source equals destination
            NotFoundError: A location is missing, or the source has no stock
            InsufficientStockError: Source available_quantity < quantity

        Concurrency:
            Both items are locked in location order so two opposite
            transfers cannot deadlock.
        """
        self._require(user, STOCK_TRANSFER)

        quantity = as_quantity(quantity)
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', requested=quantity)
        if from_location is None or to_location is None:
            raise ValidationError('LOCATION_REQUIRED')
        if pk_of(from_location) == pk_of(to_location):
            raise ValidationError('SAME_LOCATION', location_id=pk_of(from_location))

        with self.uow.atomic():
            product = self._get_product(company, product)
            source = self._get_location(company, from_location)
            destination = self._get_location(company, to_location)

            locked = {
                item.location_id: item
                for item in (
                    StockItem.objects.for_company(company)
                    .select_for_update()
                    .filter(product=product, location__in=[source, destination])
                    .order_by('location_id')
                )
            }

            src_item = locked.get(source.pk)
            if src_item is None:
                raise NotFoundError('STOCK_ITEM_NOT_FOUND', product_id=product.pk, location_id=source.pk)
            if src_item.available_quantity < quantity:
                raise InsufficientStockError(
                    'INSUFFICIENT_STOCK',
                    available=src_item.available_quantity,
                    requested=quantity,
                )

            dst_item = locked.get(destination.pk)
            if dst_item is None:
                dst_item = self._lock_or_create_item(company, product, destination)

            movement = StockMovement.objects.create(
                company=company,
                product=product,
                type=MovementType.TRANSFER,
                quantity=quantity,
                unit_cost=src_item.unit_cost,
                location=source,
                destination_location=destination,
                reason=reason,
                reference=reference,
                notes=notes,
                user=user_or_none(user),
            )

            src_item.quantity = src_item.quantity - quantity
            self._touch(src_item, MovementType.TRANSFER, movement.created_at)

            dst_item.quantity = dst_item.quantity + quantity
            dst_item.unit_cost = src_item.unit_cost
            self._touch(dst_item, MovementType.TRANSFER, movement.created_at)

            logger.info(
                "stock.transfer",
                extra={
                    "company_id": company.pk,
                    "product_id": product.pk,
                    "from_location_id": source.pk,
                    "to_location_id": destination.pk,
                    "qty": str(quantity),
                    "movement_id": movement.pk,
                },
            )
            return movement
