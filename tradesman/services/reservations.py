"""
Stock reservations — soft holds on available quantity (create, cancel, expire).

While a reservation is ACTIVE its quantity counts in the StockItem's
reserved_quantity, so stock_out, transfer and new reservations only see
what is left.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.utils import timezone

from tradesman.conf import tradesman_settings
from tradesman.exceptions import InsufficientStockError, NotFoundError, ValidationError
from tradesman.models import ReservationStatus, StockItem, StockReservation
from tradesman.protocols.permissions import STOCK_RESERVE
from tradesman.services.base import TradeService, as_quantity, pk_of
from tradesman.services.ledger import user_or_none

logger = logging.getLogger('tradesman')


class StockReservations(TradeService):
    """Reservation lifecycle."""

    def _lock_item(self, company, product_id, location_id) -> StockItem | None:
        qs = StockItem.objects.for_company(company).select_for_update().filter(product_id=product_id)
        if location_id is None:
            qs = qs.filter(location__isnull=True)
        else:
            qs = qs.filter(location_id=location_id)
        return qs.first()

    def _give_back(self, reservation: StockReservation) -> None:
        """Return the reserved quantity to the item, floored at zero."""
        item = self._lock_item(reservation.company_id, reservation.product_id, reservation.location_id)
        if item is None:
            return
        item.reserved_quantity = max(Decimal('0'), item.reserved_quantity - reservation.quantity)
        item.save(update_fields=['reserved_quantity', 'updated_at'])

    def create(self, company, user, product, quantity, location=None,
               reference_id: str = '', reference_type: str = '',
               expires_at=None, reason: str = '', notes: str = '') -> StockReservation:
        """
        Reserve quantity for a document.

        Raises:
            ForbiddenError: Without stock:reserve
            ValidationError('INVALID_QUANTITY'): quantity <= 0
            NotFoundError('STOCK_ITEM_NOT_FOUND'): No stock for the pair
            InsufficientStockError: available_quantity < quantity

        Concurrency:
            The availability check reads the StockItem under
            select_for_update(), so two reservations cannot both pass it.
        """
        self._require(user, STOCK_RESERVE)

        quantity = as_quantity(quantity)
        if quantity <= 0:
            raise ValidationError('INVALID_QUANTITY', requested=quantity)

        with self.uow.atomic():
            product = self._get_product(company, product)
            location = self._get_location(company, location)

            item = self._lock_item(company, product.pk, pk_of(location))
            if item is None:
                raise NotFoundError('STOCK_ITEM_NOT_FOUND', product_id=product.pk, location_id=pk_of(location))

            if item.available_quantity < quantity:
                raise InsufficientStockError(
                    'INSUFFICIENT_STOCK',
                    available=item.available_quantity,
                    requested=quantity,
                )

            reservation = StockReservation.objects.create(
                company=company,
                product=product,
                location=location,
                quantity=quantity,
                status=ReservationStatus.ACTIVE,
                reference_id=str(reference_id or ''),
                reference_type=reference_type or '',
                expires_at=expires_at,
                reason=reason,
                notes=notes,
                user=user_or_none(user),
            )

            item.reserved_quantity = item.reserved_quantity + quantity
            item.save(update_fields=['reserved_quantity', 'updated_at'])

            logger.info(
                "stock.reservation.created",
                extra={
                    "company_id": company.pk,
                    "product_id": product.pk,
                    "qty": str(quantity),
                    "reservation_id": reservation.pk,
                    "reference": f"{reference_type}:{reference_id}",
                },
            )
            return reservation

    def cancel(self, company, user, reservation, reason: str = '') -> StockReservation:
        """
        Cancel an ACTIVE reservation.

        Transition: ACTIVE -> CANCELLED

        Raises:
            NotFoundError('RESERVATION_NOT_FOUND')
            ValidationError('RESERVATION_NOT_ACTIVE')
        """
        self._require(user, STOCK_RESERVE)

        with self.uow.atomic():
            locked = (
                StockReservation.objects.for_company(company)
                .select_for_update()
                .filter(pk=pk_of(reservation))
                .first()
            )
            if locked is None:
                raise NotFoundError('RESERVATION_NOT_FOUND', reservation_id=pk_of(reservation))

            if locked.status != ReservationStatus.ACTIVE:
                raise ValidationError(
                    'RESERVATION_NOT_ACTIVE',
                    current=locked.status,
                    expected=ReservationStatus.ACTIVE,
                )

            locked.status = ReservationStatus.CANCELLED
            if reason:
                locked.notes = reason
            locked.save(update_fields=['status', 'notes', 'updated_at'])
            self._give_back(locked)

            logger.info(
                "stock.reservation.cancelled",
                extra={"reservation_id": locked.pk, "reason": reason},
            )
            return locked

    def expire(self, now=None, company=None) -> int:
        """
        Expire ACTIVE reservations past their expires_at, in batches.

        Returns:
            Number of reservations expired

        Concurrency:
            - Each batch runs in its own unit of work
            - select_for_update(skip_locked=True), safe for several workers
        """
        now = now or timezone.now()
        total = 0
        batch_size = tradesman_settings.EXPIRED_BATCH_SIZE

        while True:
            with self.uow.atomic():
                qs = StockReservation.objects.all()
                if company is not None:
                    qs = qs.for_company(company)
                batch = list(
                    qs.past_due(now)
                    .select_for_update(skip_locked=True)
                    .order_by('pk')[:batch_size]
                )
                if not batch:
                    break

                for reservation in batch:
                    reservation.status = ReservationStatus.EXPIRED
                    reservation.save(update_fields=['status', 'updated_at'])
                    self._give_back(reservation)
                total += len(batch)

        if total:
            logger.info(
                "stock.reservations.expired",
                extra={"expired": total},
            )
        return total
