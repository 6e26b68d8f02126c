"""
Abstract bases shared by Quote and Order, and their line items.

Both documents store the totals computed by ``tradesman.pricing`` at write
time; ``pricing.compute_document`` over the persisted lines reproduces them.
"""

from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from tradesman.models.enums import DiscountType

MONEY = dict(max_digits=14, decimal_places=2, default=Decimal('0'))


class SalesDocument(models.Model):
    """Header fields common to quotes and orders."""

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('Empresa'),
    )
    number = models.CharField(max_length=30, verbose_name=_('Número'))
    customer = models.ForeignKey(
        'tradesman.Customer',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Cliente'),
    )
    title = models.CharField(max_length=255, verbose_name=_('Título'))
    description = models.TextField(blank=True, default='', verbose_name=_('Descrição'))
    payment_terms = models.TextField(blank=True, default='', verbose_name=_('Condições de pagamento'))
    observations = models.TextField(blank=True, default='', verbose_name=_('Observações'))

    discount = models.DecimalField(verbose_name=_('Desconto'), **MONEY)
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        verbose_name=_('Tipo de desconto'),
    )

    subtotal = models.DecimalField(verbose_name=_('Subtotal'), **MONEY)
    items_discount = models.DecimalField(verbose_name=_('Descontos dos itens'), **MONEY)
    discount_value = models.DecimalField(verbose_name=_('Valor do desconto'), **MONEY)
    total = models.DecimalField(verbose_name=_('Total'), **MONEY)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Criado por'),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    def apply_totals(self, totals) -> None:
        """Copy a pricing.DocumentTotals onto the header fields."""
        self.subtotal = totals.subtotal
        self.items_discount = totals.items_discount
        self.discount_value = totals.discount_value
        self.total = totals.total

    def __str__(self) -> str:
        return f"{self.number} - {self.title}"


class DocumentLine(models.Model):
    """A priced line. subtotal, discount_value and total are derived."""

    product = models.ForeignKey(
        'tradesman.Product',
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('Produto'),
    )
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    unit_price = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        verbose_name=_('Preço unitário'),
    )
    discount = models.DecimalField(verbose_name=_('Desconto'), **MONEY)
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        verbose_name=_('Tipo de desconto'),
    )

    subtotal = models.DecimalField(verbose_name=_('Subtotal'), **MONEY)
    discount_value = models.DecimalField(verbose_name=_('Valor do desconto'), **MONEY)
    total = models.DecimalField(verbose_name=_('Total'), **MONEY)

    observations = models.TextField(blank=True, default='', verbose_name=_('Observações'))
    sort_order = models.PositiveIntegerField(default=0, verbose_name=_('Ordem'))

    class Meta:
        abstract = True
        ordering = ['sort_order', 'id']

    def apply_totals(self, totals) -> None:
        """Copy a pricing.LineTotals onto the derived fields."""
        self.subtotal = totals.subtotal
        self.discount_value = totals.discount_value
        self.total = totals.total

    def as_line(self):
        from tradesman.pricing import Line

        return Line(
            quantity=self.quantity,
            unit_price=self.unit_price,
            discount=self.discount,
            discount_type=self.discount_type,
        )
