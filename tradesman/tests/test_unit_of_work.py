"""
Tests for storage error translation and document numbering.
"""

import pytest
from django.db import DatabaseError, IntegrityError, OperationalError

from tradesman.adapters.unit_of_work import DjangoUnitOfWork
from tradesman.exceptions import (
    ConflictError,
    InternalError,
    NotFoundError,
    TradeError,
    TransientError,
)
from tradesman.models import Company, DocumentSequence, SequenceKind
from tradesman.services.numbering import next_number


pytestmark = pytest.mark.django_db


class TestDjangoUnitOfWork:

    @pytest.mark.parametrize('raised, expected, code', [
        (IntegrityError('dup'), ConflictError, 'INTEGRITY_CONFLICT'),
        (OperationalError('database is locked'), TransientError, 'TRANSIENT_FAILURE'),
        (OperationalError(1213, 'Deadlock found when trying to get lock'), TransientError, 'TRANSIENT_FAILURE'),
        (OperationalError('no such table: tradesman_company'), InternalError, 'INTERNAL_ERROR'),
        (OperationalError('could not connect to server'), InternalError, 'INTERNAL_ERROR'),
        (DatabaseError('weird'), InternalError, 'INTERNAL_ERROR'),
    ])
    def test_translates_database_errors(self, raised, expected, code):
        with pytest.raises(expected) as exc:
            with DjangoUnitOfWork().atomic():
                raise raised

        assert exc.value.code == code
        assert exc.value.__cause__ is raised

    @pytest.mark.parametrize('sqlstate', ['40001', '40P01'])
    def test_postgres_serialization_and_deadlock_are_transient(self, sqlstate):
        class DriverError(Exception):
            pgcode = sqlstate

        raised = OperationalError('could not serialize access')
        raised.__cause__ = DriverError()

        with pytest.raises(TransientError):
            with DjangoUnitOfWork().atomic():
                raise raised

    def test_trade_errors_pass_through(self):
        with pytest.raises(NotFoundError):
            with DjangoUnitOfWork().atomic():
                raise NotFoundError('PRODUCT_NOT_FOUND')

    def test_rolls_back(self):
        with pytest.raises(ConflictError):
            with DjangoUnitOfWork().atomic():
                Company.objects.create(name='Temporária')
                raise IntegrityError('dup')

        assert not Company.objects.filter(name='Temporária').exists()

    def test_real_constraint_violation(self, company):
        DocumentSequence.objects.create(company=company, kind=SequenceKind.QUOTE)

        with pytest.raises(ConflictError):
            with DjangoUnitOfWork().atomic():
                DocumentSequence.objects.create(company=company, kind=SequenceKind.QUOTE)


class TestErrors:

    def test_as_dict(self):
        error = NotFoundError('PRODUCT_NOT_FOUND', product_id=3)

        assert error.as_dict() == {
            'code': 'PRODUCT_NOT_FOUND',
            'message': 'Produto não encontrado',
            'data': {'product_id': 3},
        }
        assert error.http_status == 404
        assert isinstance(error, TradeError)

    def test_unknown_code_uses_code_as_message(self):
        assert TradeError('SOMETHING').message == 'SOMETHING'


class TestNumbering:

    def test_sequential_per_kind(self, company):
        assert next_number(company, SequenceKind.QUOTE) == 'ORC-000001'
        assert next_number(company, SequenceKind.QUOTE) == 'ORC-000002'
        assert next_number(company, SequenceKind.ORDER) == 'OS-000001'

    def test_prefix_from_settings(self, company, settings):
        settings.TRADESMAN = {'QUOTE_NUMBER_PREFIX': 'Q', 'NUMBER_WIDTH': 3}

        assert next_number(company, SequenceKind.QUOTE) == 'Q001'
