"""
Stock locations — create, update and soft-delete.
"""

from __future__ import annotations

import logging

from tradesman.exceptions import ConflictError, ValidationError
from tradesman.models import StockItem, StockLocation
from tradesman.protocols.permissions import STOCK_MANAGE_LOCATIONS, STOCK_READ
from tradesman.services.base import TradeService, pk_of

logger = logging.getLogger('tradesman')


class StockLocations(TradeService):

    def _code_taken(self, company, code: str, exclude=None) -> bool:
        qs = StockLocation.objects.for_company(company).alive().filter(code=code)
        if exclude is not None:
            qs = qs.exclude(pk=pk_of(exclude))
        return qs.exists()

    def create(self, company, user, code: str, name: str,
               description: str = '', is_active: bool = True) -> StockLocation:
        """
        Raises:
            ConflictError('LOCATION_CODE_TAKEN'): Code used by a live location
        """
        self._require(user, STOCK_MANAGE_LOCATIONS)

        code = (code or '').strip()
        name = (name or '').strip()
        if not code or not name:
            raise ValidationError('INVALID_LOCATION', code=code, name=name)

        with self.uow.atomic():
            if self._code_taken(company, code):
                raise ConflictError('LOCATION_CODE_TAKEN', code=code)

            location = StockLocation.objects.create(
                company=company,
                code=code,
                name=name,
                description=(description or '').strip(),
                is_active=is_active,
            )
            logger.info(
                "stock.location.created",
                extra={"company_id": company.pk, "location_id": location.pk, "code": code},
            )
            return location

    def update(self, company, user, location, **changes) -> StockLocation:
        """
        Update code, name, description or is_active.

        Raises:
            NotFoundError('LOCATION_NOT_FOUND')
            ConflictError('LOCATION_CODE_TAKEN')
        """
        self._require(user, STOCK_MANAGE_LOCATIONS)

        allowed = {'code', 'name', 'description', 'is_active'}
        unknown = set(changes) - allowed
        if unknown:
            raise ValidationError('INVALID_LOCATION', fields=sorted(unknown))

        with self.uow.atomic():
            location = self._get_location(company, location)

            for field in ('code', 'name', 'description'):
                if field in changes and changes[field] is not None:
                    changes[field] = changes[field].strip()

            if changes.get('code') == '' or changes.get('name') == '':
                raise ValidationError('INVALID_LOCATION', **changes)

            new_code = changes.get('code')
            if new_code and new_code != location.code and self._code_taken(company, new_code, exclude=location):
                raise ConflictError('LOCATION_CODE_TAKEN', code=new_code)

            for field, value in changes.items():
                setattr(location, field, value)
            location.save()

            logger.info(
                "stock.location.updated",
                extra={"location_id": location.pk, "fields": sorted(changes)},
            )
            return location

    def delete(self, company, user, location) -> None:
        """
        Soft-delete a location.

        Raises:
            ValidationError('LOCATION_NOT_EMPTY'): Some item there has quantity > 0
        """
        self._require(user, STOCK_MANAGE_LOCATIONS)

        with self.uow.atomic():
            location = self._get_location(company, location)

            if StockItem.objects.for_company(company).filter(location=location, quantity__gt=0).exists():
                raise ValidationError('LOCATION_NOT_EMPTY', location_id=location.pk)

            location.soft_delete()
            logger.info(
                "stock.location.deleted",
                extra={"location_id": location.pk},
            )

    def get(self, company, user, location) -> StockLocation:
        self._require(user, STOCK_READ)
        return self._get_location(company, location)

    def list(self, company, user, active_only: bool = False) -> list[StockLocation]:
        self._require(user, STOCK_READ)
        qs = StockLocation.objects.for_company(company).alive()
        if active_only:
            qs = qs.filter(is_active=True)
        return list(qs.order_by('code'))
