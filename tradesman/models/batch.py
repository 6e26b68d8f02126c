"""
StockBatch model — lot tracking with its own cost and expiry.

A lot is identified by (product, location, batch_number): the same batch
number at two locations is two distinct lots.

Usage:
    trade.ledger.stock_in(
        company, user, product, Decimal('50'),
        location=deposito, unit_cost=Decimal('2.50'),
        batch_number='LOT-2026-0223-A', expiration_date=date(2026, 3, 1),
    )
"""

from datetime import date

from django.db import models
from django.db.models import F
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import TenantQuerySet


class StockBatchQuerySet(TenantQuerySet):
    """QuerySet for StockBatch with convenience filters."""

    def with_stock(self):
        """Batches with remaining quantity."""
        return self.filter(quantity__gt=0)

    def at_location(self, location):
        if location is None:
            return self.filter(location__isnull=True)
        return self.filter(location=location)

    def fifo(self):
        """Consumption order: expiry ascending (no expiry last), then age."""
        return self.order_by(
            F('expiration_date').asc(nulls_last=True),
            'created_at',
            'id',
        )

    def expiring_before(self, day):
        return self.filter(expiration_date__lte=day, expiration_date__isnull=False)


class StockBatch(models.Model):
    """
    Lot of a product at a location.

    quantity is what remains in the lot and never goes below zero.
    unit_cost is the lot's own weighted-average cost, distinct from the
    StockItem's cost.
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='stock_batches',
        verbose_name=_('Empresa'),
    )
    product = models.ForeignKey(
        'tradesman.Product',
        on_delete=models.PROTECT,
        related_name='stock_batches',
        verbose_name=_('Produto'),
    )
    location = models.ForeignKey(
        'tradesman.StockLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='batches',
        verbose_name=_('Localização'),
    )
    batch_number = models.CharField(
        max_length=50,
        verbose_name=_('Código do Lote'),
    )
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    unit_cost = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        null=True,
        blank=True,
        verbose_name=_('Custo unitário'),
    )
    expiration_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Data de Validade'),
        help_text=_('Último dia em que o lote pode ser vendido/utilizado'),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Criado em'))
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockBatchQuerySet.as_manager()

    class Meta:
        verbose_name = _('Lote')
        verbose_name_plural = _('Lotes')
        ordering = ['expiration_date', 'created_at']
        indexes = [
            models.Index(fields=['company', 'product', 'location'], name='batch_coordinate_idx'),
            models.Index(fields=['company', 'batch_number'], name='batch_number_idx'),
        ]

    @property
    def is_expired(self) -> bool:
        if self.expiration_date is None:
            return False
        return date.today() > self.expiration_date

    def __str__(self) -> str:
        expiry = f" (val:{self.expiration_date})" if self.expiration_date else ""
        return f"Lote {self.batch_number}{expiry}"
