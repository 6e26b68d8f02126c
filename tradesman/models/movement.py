"""
StockMovement model — Immutable ledger of quantity changes.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import TenantQuerySet
from tradesman.models.enums import MovementType


class StockMovement(models.Model):
    """
    Immutable record of a stock-affecting event.

    Rules:
    - NEVER update() or delete()
    - Corrections are new movements (an ADJUSTMENT)
    - quantity is always a positive magnitude; the type gives the direction
      (ADJUSTMENT keeps its signed delta in metadata)

    One row per ledger operation. TRANSFER rows are recorded against the
    source location with destination_location set.
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='stock_movements',
        verbose_name=_('Empresa'),
    )
    product = models.ForeignKey(
        'tradesman.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('Produto'),
    )
    type = models.CharField(
        max_length=20,
        choices=MovementType.choices,
        db_index=True,
        verbose_name=_('Tipo'),
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
    total_cost = models.DecimalField(
        max_digits=16,
        decimal_places=4,
        null=True,
        blank=True,
        verbose_name=_('Custo total'),
    )

    location = models.ForeignKey(
        'tradesman.StockLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Localização'),
    )
    destination_location = models.ForeignKey(
        'tradesman.StockLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='incoming_movements',
        verbose_name=_('Localização de destino'),
    )
    batch_number = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Lote'),
    )
    expiration_date = models.DateField(
        null=True,
        blank=True,
        verbose_name=_('Data de validade'),
    )

    reason = models.CharField(
        max_length=255,
        blank=True,
        default='',
        verbose_name=_('Motivo'),
    )
    reference = models.CharField(
        max_length=100,
        blank=True,
        default='',
        verbose_name=_('Referência'),
        help_text=_('Ex: número da nota fiscal, pedido de compra'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))
    metadata = models.JSONField(default=dict, blank=True, verbose_name=_('Metadados'))

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data/Hora'))

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movimentação')
        verbose_name_plural = _('Movimentações')
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['company', 'product', 'created_at'], name='movement_product_idx'),
            models.Index(fields=['company', 'type'], name='movement_type_idx'),
        ]

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValueError(
                "Movimentações são imutáveis. "
                "Para corrigir, registre um ajuste."
            )
        if self.unit_cost is not None:
            self.total_cost = self.quantity * self.unit_cost
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError(
            "Movimentações são imutáveis. "
            "Para estornar, registre um ajuste."
        )

    def __str__(self) -> str:
        return f"{self.type} {self.quantity} | {self.product_id}"
