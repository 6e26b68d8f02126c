"""
StockItem model — quantity and reservation state of a product at a location.
"""

from decimal import Decimal

from django.db import models
from django.db.models import F, Q, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import TenantQuerySet
from tradesman.models.enums import MovementType


class StockItemQuerySet(TenantQuerySet):
    """QuerySet with helper filters for StockItem."""

    def at_location(self, location):
        """Filter by location (None is the unlocated bucket)."""
        if location is None:
            return self.filter(location__isnull=True)
        return self.filter(location=location)

    def low_stock(self):
        """Items at or below their minimum stock."""
        return self.filter(quantity__lte=F('min_stock'))

    def out_of_stock(self):
        return self.filter(quantity__lte=0)


class StockItem(models.Model):
    """
    Quantity of a product at one location.

    Coordinates:
    - product: WHAT
    - location: WHERE, null means "unlocated"

    Invariant after every mutation, enforced by the ledger and reservation
    services under a row lock:

        0 <= reserved_quantity <= quantity

    Rows are created on the first inbound movement and never hard-deleted.
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='stock_items',
        verbose_name=_('Empresa'),
    )
    product = models.ForeignKey(
        'tradesman.Product',
        on_delete=models.PROTECT,
        related_name='stock_items',
        verbose_name=_('Produto'),
    )
    location = models.ForeignKey(
        'tradesman.StockLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='stock_items',
        verbose_name=_('Localização'),
    )

    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade'),
    )
    reserved_quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Quantidade reservada'),
    )
    unit_cost = models.DecimalField(
        max_digits=14,
        decimal_places=4,
        default=Decimal('0'),
        verbose_name=_('Custo unitário'),
    )
    min_stock = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        default=Decimal('0'),
        verbose_name=_('Estoque mínimo'),
    )
    max_stock = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        null=True,
        blank=True,
        verbose_name=_('Estoque máximo'),
    )

    last_movement_at = models.DateTimeField(
        null=True,
        blank=True,
        verbose_name=_('Última movimentação'),
    )
    last_movement_type = models.CharField(
        max_length=20,
        choices=MovementType.choices,
        blank=True,
        default='',
        verbose_name=_('Tipo da última movimentação'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockItemQuerySet.as_manager()

    class Meta:
        verbose_name = _('Item de estoque')
        verbose_name_plural = _('Itens de estoque')
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'product', 'location'],
                name='unique_stock_item_coordinate',
            ),
            # NULL locations are distinct in a plain unique index
            models.UniqueConstraint(
                fields=['company', 'product'],
                condition=Q(location__isnull=True),
                name='unique_unlocated_stock_item',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'product'], name='stock_item_product_idx'),
            models.Index(fields=['company', 'location'], name='stock_item_location_idx'),
        ]
        permissions = [
            ('stock_read', 'Consultar estoque'),
            ('stock_write', 'Movimentar estoque'),
            ('stock_adjust', 'Ajustar estoque'),
            ('stock_transfer', 'Transferir estoque'),
            ('stock_reserve', 'Reservar estoque'),
            ('stock_manage_locations', 'Gerenciar localizações'),
        ]

    # ══════════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════════

    @property
    def available_quantity(self) -> Decimal:
        """Available for outbound movements and new reservations."""
        return self.quantity - self.reserved_quantity

    @property
    def total_value(self) -> Decimal:
        return self.quantity * self.unit_cost

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock

    # ══════════════════════════════════════════════════════════════
    # METHODS
    # ══════════════════════════════════════════════════════════════

    def recalculate(self) -> Decimal:
        """
        Recompute quantity from the movement log.

        IN adds, OUT subtracts, TRANSFER subtracts at the source and adds at
        the destination. ADJUSTMENT rows only hold a magnitude, so the
        direction is read from the ``metadata['delta']`` the ledger stores.
        Does not write; callers compare against ``quantity`` for audit.
        """
        from tradesman.models.movement import StockMovement

        moves = StockMovement.objects.for_company(self.company_id).filter(product_id=self.product_id)

        def total(qs):
            return qs.aggregate(t=Coalesce(Sum('quantity'), Decimal('0')))['t']

        here = moves.filter(location_id=self.location_id) if self.location_id else moves.filter(location__isnull=True)
        incoming = moves.filter(
            type=MovementType.TRANSFER,
            destination_location_id=self.location_id,
        ) if self.location_id else moves.none()

        result = (
            total(here.filter(type=MovementType.IN))
            - total(here.filter(type=MovementType.OUT))
            - total(here.filter(type=MovementType.TRANSFER))
            + total(incoming)
        )
        for delta in here.filter(type=MovementType.ADJUSTMENT).values_list('metadata', flat=True):
            result += Decimal(str(delta.get('delta', '0')))
        return result

    def __str__(self) -> str:
        loc = self.location.code if self.location_id else '?'
        return f"{self.product} [{loc}]: {self.quantity}"
