"""
Quote model — priced proposal to a customer.
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import SoftDeleteMixin, TenantQuerySet
from tradesman.models.document import DocumentLine, SalesDocument
from tradesman.models.enums import DiscountType, QuoteStatus


class Quote(SoftDeleteMixin, SalesDocument):
    """
    Quote with lines and document-level discount.

    LIFECYCLE (see services.quotes.QUOTE_TRANSITIONS):

        DRAFT → SENT → APPROVED | REJECTED | EXPIRED
        APPROVED → CONVERTED (only through the conversion workflow)
        REJECTED | EXPIRED → SENT
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='quotes',
        verbose_name=_('Empresa'),
    )
    customer = models.ForeignKey(
        'tradesman.Customer',
        on_delete=models.PROTECT,
        related_name='quotes',
        verbose_name=_('Cliente'),
    )
    status = models.CharField(
        max_length=20,
        choices=QuoteStatus.choices,
        default=QuoteStatus.DRAFT,
        db_index=True,
        verbose_name=_('Status'),
    )
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE,
        verbose_name=_('Tipo de desconto'),
    )
    valid_until = models.DateField(verbose_name=_('Válido até'))
    delivery_terms = models.TextField(blank=True, default='', verbose_name=_('Condições de entrega'))

    sent_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Enviado em'))
    approved_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Aprovado em'))
    rejected_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Rejeitado em'))
    converted_at = models.DateTimeField(null=True, blank=True, verbose_name=_('Convertido em'))

    objects = TenantQuerySet.as_manager()

    class Meta:
        verbose_name = _('Orçamento')
        verbose_name_plural = _('Orçamentos')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'number'],
                name='unique_quote_number',
            )
        ]
        permissions = [
            ('quotes_create', 'Criar orçamentos'),
            ('quotes_read', 'Consultar orçamentos'),
            ('quotes_update', 'Editar orçamentos'),
            ('quotes_delete', 'Excluir orçamentos'),
        ]

    @property
    def is_past_validity(self) -> bool:
        return self.valid_until < timezone.localdate()

    def stamp_status(self, status, now=None) -> None:
        """Set status and the matching timestamp field."""
        now = now or timezone.now()
        self.status = status
        stamp = {
            QuoteStatus.SENT: 'sent_at',
            QuoteStatus.APPROVED: 'approved_at',
            QuoteStatus.REJECTED: 'rejected_at',
            QuoteStatus.CONVERTED: 'converted_at',
        }.get(status)
        if stamp:
            setattr(self, stamp, now)


class QuoteItem(DocumentLine):
    quote = models.ForeignKey(
        Quote,
        on_delete=models.CASCADE,
        related_name='items',
        verbose_name=_('Orçamento'),
    )
    discount_type = models.CharField(
        max_length=20,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE,
        verbose_name=_('Tipo de desconto'),
    )

    class Meta(DocumentLine.Meta):
        verbose_name = _('Item do orçamento')
        verbose_name_plural = _('Itens do orçamento')
