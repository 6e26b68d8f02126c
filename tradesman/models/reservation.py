"""
StockReservation model — soft hold on available quantity.
"""

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from tradesman.models.company import TenantQuerySet
from tradesman.models.enums import ReferenceType, ReservationStatus


class StockReservationQuerySet(TenantQuerySet):

    def active(self):
        return self.filter(status=ReservationStatus.ACTIVE)

    def past_due(self, now=None):
        """ACTIVE reservations whose expires_at already passed."""
        now = now or timezone.now()
        return self.active().filter(expires_at__isnull=False, expires_at__lt=now)


class StockReservation(models.Model):
    """
    Quantity reserved for a quote, order or other demand.

    LIFECYCLE:

        ┌────────┐  cancel()        ┌───────────┐
        │ ACTIVE │ ───────────────► │ CANCELLED │
        └────────┘                  └───────────┘
            │  expire_reservations  ┌───────────┐
            ├─────────────────────► │  EXPIRED  │
            │                       └───────────┘
            │  fulfillment          ┌───────────┐
            └─────────────────────► │ FULFILLED │
                                    └───────────┘

    While ACTIVE its quantity is counted in StockItem.reserved_quantity.
    Leaving ACTIVE gives the quantity back (floored at zero).
    """

    company = models.ForeignKey(
        'tradesman.Company',
        on_delete=models.CASCADE,
        related_name='stock_reservations',
        verbose_name=_('Empresa'),
    )
    product = models.ForeignKey(
        'tradesman.Product',
        on_delete=models.PROTECT,
        related_name='stock_reservations',
        verbose_name=_('Produto'),
    )
    location = models.ForeignKey(
        'tradesman.StockLocation',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='reservations',
        verbose_name=_('Localização'),
    )
    quantity = models.DecimalField(
        max_digits=14,
        decimal_places=3,
        verbose_name=_('Quantidade'),
    )
    status = models.CharField(
        max_length=20,
        choices=ReservationStatus.choices,
        default=ReservationStatus.ACTIVE,
        db_index=True,
        verbose_name=_('Status'),
    )

    reference_type = models.CharField(
        max_length=20,
        choices=ReferenceType.choices,
        blank=True,
        default='',
        verbose_name=_('Tipo de Referência'),
    )
    reference_id = models.CharField(
        max_length=64,
        blank=True,
        default='',
        verbose_name=_('ID da Referência'),
    )

    reason = models.CharField(max_length=255, blank=True, default='', verbose_name=_('Motivo'))
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))

    expires_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Expira em'),
        help_text=_('Se não atendida até esta data, será liberada automaticamente'),
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        verbose_name=_('Usuário'),
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = StockReservationQuerySet.as_manager()

    class Meta:
        verbose_name = _('Reserva')
        verbose_name_plural = _('Reservas')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'expires_at'], name='reservation_expiry_idx'),
            models.Index(fields=['company', 'product', 'status'], name='reservation_product_idx'),
            models.Index(fields=['reference_type', 'reference_id'], name='reservation_reference_idx'),
        ]

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return timezone.now() > self.expires_at

    def __str__(self) -> str:
        return f"{self.quantity}x {self.product_id} ({self.get_status_display()})"
