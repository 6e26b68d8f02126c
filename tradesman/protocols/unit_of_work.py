"""
Unit of Work Protocol — scoped transaction handed to services.

Every ledger, reservation and document operation runs its reads, checks and
writes inside one ``uow.atomic()`` block. Leaving the block with an exception
rolls back every write made inside it; leaving it normally commits.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable


@runtime_checkable
class UnitOfWork(Protocol):
    """
    Protocol for transactional scopes.

    Implementations:
        - DjangoUnitOfWork: transaction.atomic() with storage error translation
    """

    def atomic(self) -> AbstractContextManager:
        """
        Open a transactional scope.

        Nested scopes are allowed and behave as savepoints.
        """
        ...
