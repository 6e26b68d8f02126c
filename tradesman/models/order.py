"""
Order model — service order, created directly or converted from a Quote.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import SoftDeleteMixin, TenantQuerySet
from tradesman.models.document import DocumentLine, SalesDocument
from tradesman.models.enums import DiscountType, OrderPriority, OrderStatus


class Order(SoftDeleteMixin, SalesDocument):
    """
    Service order.

    LIFECYCLE (see services.orders.ORDER_TRANSITIONS):

        PENDING → IN_PROGRESS | CANCELLED
        IN_PROGRESS → PAUSED | COMPLETED | CANCELLED
        PAUSED → IN_PROGRESS | CANCELLED
        CANCELLED → PENDING
        COMPLETED is terminal
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='orders',
        verbose_name=_('Empresa'),
    )
    customer = models.ForeignKey(
        'tradesman.Customer',
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name=_('Cliente'),
    )
    quote = models.ForeignKey(
        'tradesman.Quote',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='orders',
        verbose_name=_('Orçamento de origem'),
    )
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
        verbose_name=_('Status'),
    )
    priority = models.CharField(
        max_length=10,
        choices=OrderPriority.choices,
        default=OrderPriority.MEDIUM,
        verbose_name=_('Prioridade'),
    )
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.FIXED,
        verbose_name=_('Tipo de desconto'),
    )

    expected_start_date = models.DateTimeField(null=True, blank=True, verbose_name=_('Início previsto'))
    expected_end_date = models.DateTimeField(null=True, blank=True, verbose_name=_('Fim previsto'))
    actual_start_date = models.DateTimeField(null=True, blank=True, verbose_name=_('Início real'))
    actual_end_date = models.DateTimeField(null=True, blank=True, verbose_name=_('Fim real'))

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Ordem de Serviço')
        verbose_name_plural = _('Ordens de Serviço')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'number'],
                name='unique_order_number',
            )
        ]
        permissions = [
            ('orders_create', 'Criar ordens de serviço'),
            ('orders_read', 'Consultar ordens de serviço'),
            ('orders_update', 'Editar ordens de serviço'),
            ('orders_delete', 'Excluir ordens de serviço'),
        ]

    @property
    def is_closed(self) -> bool:
        return self.status in (OrderStatus.COMPLETED, OrderStatus.CANCELLED)


class OrderItem(DocumentLine):
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Ordem de Serviço'),
    )
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.FIXED,
        verbose_name=_('Tipo de desconto'),
    )

    class Meta(DocumentLine.Meta):
        verbose_name = _('Item da ordem')
        verbose_name_plural = _('Itens da ordem')
