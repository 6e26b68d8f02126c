"""
Django Unit of Work — transaction.atomic() with storage error translation.

Typed TradeErrors raised inside the block pass through unchanged. Errors
coming from the database are mapped onto the Tradesman taxonomy so callers
never see driver exceptions:

    IntegrityError                  -> ConflictError('INTEGRITY_CONFLICT')
    deadlock, serialization failure,
    lock wait timeout               -> TransientError('TRANSIENT_FAILURE')
    any other DatabaseError         -> InternalError('INTERNAL_ERROR'), logged in full

Other OperationalErrors (missing table, refused connection) are permanent
and retrying them does not help, so they are reported as internal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.db import DatabaseError, IntegrityError, OperationalError, transaction

from tradesman.exceptions import ConflictError, InternalError, TransientError

logger = logging.getLogger('tradesman')

# PostgreSQL: serialization_failure, deadlock_detected, lock_not_available
TRANSIENT_SQLSTATES = frozenset({'40001', '40P01', '55P03'})

# MySQL: lock wait timeout, deadlock
TRANSIENT_MYSQL_CODES = frozenset({1205, 1213})

# SQLite reports lock contention only through the message
TRANSIENT_MESSAGES = ('database is locked', 'database table is locked', 'deadlock')


def is_transient(error: OperationalError) -> bool:
    """True when retrying the whole transaction may succeed."""
    cause = error.__cause__
    sqlstate = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    if sqlstate in TRANSIENT_SQLSTATES:
        return True
    args = getattr(cause, 'args', None) or error.args
    if args and args[0] in TRANSIENT_MYSQL_CODES:
        return True
    message = str(error).lower()
    return any(fragment in message for fragment in TRANSIENT_MESSAGES)


class DjangoUnitOfWork:
    """UnitOfWork over a Django database alias."""

    def __init__(self, using: str = 'default'):
        self.using = using

    @contextmanager
    def atomic(self) -> Iterator[None]:
        try:
            with transaction.atomic(using=self.using):
                yield
        except IntegrityError as e:
            logger.warning(
                "db.integrity_conflict",
                extra={"using": self.using, "error": str(e)},
            )
            raise ConflictError('INTEGRITY_CONFLICT') from e
        except OperationalError as e:
            if not is_transient(e):
                logger.exception(
                    "db.operational_error",
                    extra={"using": self.using},
                )
                raise InternalError('INTERNAL_ERROR') from e
            logger.warning(
                "db.transient_failure",
                extra={"using": self.using, "error": str(e)},
            )
            raise TransientError('TRANSIENT_FAILURE') from e
        except DatabaseError as e:
            logger.exception(
                "db.unexpected_error",
                extra={"using": self.using},
            )
            raise InternalError('INTERNAL_ERROR') from e
