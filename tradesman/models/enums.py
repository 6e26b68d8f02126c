"""
Enums for Tradesman models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """Kind of ledger-affecting event."""
    IN = 'IN', _('Entrada')
    OUT = 'OUT', _('Saída')
    ADJUSTMENT = 'ADJUSTMENT', _('Ajuste')
    TRANSFER = 'TRANSFER', _('Transferência')


class ReservationStatus(models.TextChoices):
    """Reservation lifecycle status."""
    ACTIVE = 'ACTIVE', _('Ativa')           # Holding quantity
    EXPIRED = 'EXPIRED', _('Expirada')      # Released by expiry
    CANCELLED = 'CANCELLED', _('Cancelada') # Released by user
    FULFILLED = 'FULFILLED', _('Atendida')  # Consumed by fulfillment


class ReferenceType(models.TextChoices):
    """Document demanding a reservation."""
    QUOTE = 'QUOTE', _('Orçamento')
    ORDER = 'ORDER', _('Ordem de Serviço')
    OTHER = 'OTHER', _('Outro')


class DiscountType(models.TextChoices):
    FIXED = 'FIXED', _('Valor fixo')
    PERCENTAGE = 'PERCENTAGE', _('Percentual')


class QuoteStatus(models.TextChoices):
    """
    Quote lifecycle status.

    DRAFT → SENT → APPROVED | REJECTED | EXPIRED → CONVERTED
    """
    DRAFT = 'DRAFT', _('Rascunho')
    SENT = 'SENT', _('Enviado')
    APPROVED = 'APPROVED', _('Aprovado')
    REJECTED = 'REJECTED', _('Rejeitado')
    EXPIRED = 'EXPIRED', _('Expirado')
    CONVERTED = 'CONVERTED', _('Convertido')


class OrderStatus(models.TextChoices):
    """
    Order lifecycle status.

    PENDING → IN_PROGRESS → PAUSED | COMPLETED | CANCELLED, CANCELLED → PENDING
    """
    PENDING = 'PENDING', _('Pendente')
    IN_PROGRESS = 'IN_PROGRESS', _('Em andamento')
    PAUSED = 'PAUSED', _('Pausada')
    COMPLETED = 'COMPLETED', _('Concluída')
    CANCELLED = 'CANCELLED', _('Cancelada')


class OrderPriority(models.TextChoices):
    LOW = 'LOW', _('Baixa')
    MEDIUM = 'MEDIUM', _('Média')
    HIGH = 'HIGH', _('Alta')
    URGENT = 'URGENT', _('Urgente')


class ProductStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', _('Ativo')
    INACTIVE = 'INACTIVE', _('Inativo')


class CustomerStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', _('Ativo')
    BLOCKED = 'BLOCKED', _('Bloqueado')


class SequenceKind(models.TextChoices):
    """Document families with their own number series."""
    QUOTE = 'quote', _('Orçamento')
    ORDER = 'order', _('Ordem de Serviço')
