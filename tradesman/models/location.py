"""
StockLocation model — Where stock exists.
"""

from django.db import models
from django.db.models import Q
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import SoftDeleteMixin, TenantQuerySet


class StockLocation(SoftDeleteMixin, models.Model):
    """
    Where stock exists (warehouse, shelf, vehicle...).

    Flat structure, no hierarchy. A StockItem with location=None is the
    "unlocated" bucket of a product and needs no StockLocation row.

    Examples:
        StockLocation.objects.create(company=c, code='DEP-01', name='Depósito')
        StockLocation.objects.create(company=c, code='VIT', name='Vitrine')
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='stock_locations',
        verbose_name=_('Empresa'),
    )
    code = models.CharField(
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Identificador único na empresa (ex: DEP-01)'),
    )
    name = models.CharField(
        max_length=100,
        verbose_name=_('Nome'),
    )
    description = models.TextField(
        blank=True,
        default='',
        verbose_name=_('Descrição'),
    )
    is_active = models.BooleanField(
        default=True,
        verbose_name=_('Ativa'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Localização')
        verbose_name_plural = _('Localizações')
        ordering = ['code']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'code'],
                condition=Q(deleted_at__isnull=True),
                name='unique_live_location_code',
            )
        ]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"
