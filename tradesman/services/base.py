"""
Shared plumbing for Tradesman services: injected collaborators, capability
checks and tenant-scoped lookups.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from tradesman.exceptions import ForbiddenError, NotFoundError, ValidationError
from tradesman.models import Product, StockLocation
from tradesman.protocols.permissions import Capability, PermissionGate
from tradesman.protocols.unit_of_work import UnitOfWork

logger = logging.getLogger('tradesman')

QTY_PLACES = Decimal('0.001')


def pk_of(obj: Any):
    """Accept a model instance or a primary key."""
    return getattr(obj, 'pk', obj)


def as_decimal(value: Any, code: str = 'INVALID_QUANTITY') -> Decimal:
    """Finite Decimal, or ValidationError(code). NaN and Infinity are refused."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, TypeError, ValueError) as e:
            raise ValidationError(code, value=value) from e
    if not result.is_finite():
        raise ValidationError(code, value=str(value))
    return result


def as_quantity(value: Any, code: str = 'INVALID_QUANTITY') -> Decimal:
    """Quantity at the 3 places the database keeps."""
    return as_decimal(value, code).quantize(QTY_PLACES, rounding=ROUND_HALF_UP)


class TradeService:
    """
    Base for services that take their collaborators explicitly.

    Args:
        gate: PermissionGate; defaults to the configured one
        uow: UnitOfWork; defaults to DjangoUnitOfWork()
    """

    def __init__(self, gate: PermissionGate | None = None, uow: UnitOfWork | None = None):
        if gate is None:
            from tradesman.adapters.permissions import get_permission_gate
            gate = get_permission_gate()
        if uow is None:
            from tradesman.adapters.unit_of_work import DjangoUnitOfWork
            uow = DjangoUnitOfWork()
        self.gate = gate
        self.uow = uow

    def _require(self, user: Any, *capabilities: Capability) -> None:
        for capability in capabilities:
            if not self.gate.allows(user, capability):
                logger.warning(
                    "permission.denied",
                    extra={
                        "user": getattr(user, 'pk', None),
                        "capability": str(capability),
                    },
                )
                raise ForbiddenError('PERMISSION_DENIED', capability=str(capability))

    # ══════════════════════════════════════════════════════════════
    # TENANT-SCOPED LOOKUPS
    # ══════════════════════════════════════════════════════════════

    def _get_product(self, company, product) -> Product:
        found = (
            Product.objects.for_company(company).alive()
            .filter(pk=pk_of(product)).first()
        )
        if found is None:
            raise NotFoundError('PRODUCT_NOT_FOUND', product_id=pk_of(product))
        return found

    def _get_location(self, company, location) -> StockLocation | None:
        """None stays None (the unlocated bucket)."""
        if location is None:
            return None
        found = (
            StockLocation.objects.for_company(company).alive()
            .filter(pk=pk_of(location)).first()
        )
        if found is None:
            raise NotFoundError('LOCATION_NOT_FOUND', location_id=pk_of(location))
        return found
