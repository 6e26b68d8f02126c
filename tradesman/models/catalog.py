"""
Catalog models — the products and customers stock and sales documents point at.

Only the fields the stock and sales core reads are kept here.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import SoftDeleteMixin, TenantQuerySet
from tradesman.models.enums import CustomerStatus, ProductStatus


class Product(SoftDeleteMixin, models.Model):

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='products',
        verbose_name=_('Empresa'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    code = models.CharField(max_length=50, verbose_name=_('Código'))
    status = models.CharField(
        max_length=20,
        choices=ProductStatus.choices,
        default=ProductStatus.ACTIVE,
        verbose_name=_('Status'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        ordering = ['name']
        indexes = [
            models.Index(fields=['company', 'code'], name='product_code_idx'),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == ProductStatus.ACTIVE

    def __str__(self) -> str:
        return f"{self.code} {self.name}"


class Customer(SoftDeleteMixin, models.Model):

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='customers',
        verbose_name=_('Empresa'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    document = models.CharField(
        max_length=30,
        blank=True,
        default='',
        verbose_name=_('Documento'),
    )
    status = models.CharField(
        max_length=20,
        choices=CustomerStatus.choices,
        default=CustomerStatus.ACTIVE,
        verbose_name=_('Status'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Cliente')
        verbose_name_plural = _('Clientes')
        ordering = ['name']

    @property
    def is_blocked(self) -> bool:
        return self.status == CustomerStatus.BLOCKED

    def __str__(self) -> str:
        return self.name
