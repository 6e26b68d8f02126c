"""
Permission Gate Protocol — Interface for capability checks.

Tradesman defines this protocol; the host project (or the bundled Django
adapter) implements it. Every operation asks the gate before touching data.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class Capability:
    """A resource + action pair, e.g. stock:write."""

    resource: str
    action: str

    @classmethod
    def parse(cls, value: str) -> Capability:
        resource, _, action = value.partition(':')
        if not resource or not action:
            raise ValueError(f"Capability must look like 'resource:action', got {value!r}")
        return cls(resource, action)

    def __str__(self) -> str:
        return f"{self.resource}:{self.action}"


# Capabilities used by the core
STOCK_READ = Capability('stock', 'read')
STOCK_WRITE = Capability('stock', 'write')
STOCK_ADJUST = Capability('stock', 'adjust')
STOCK_TRANSFER = Capability('stock', 'transfer')
STOCK_RESERVE = Capability('stock', 'reserve')
STOCK_MANAGE_LOCATIONS = Capability('stock', 'manage_locations')

QUOTES_CREATE = Capability('quotes', 'create')
QUOTES_READ = Capability('quotes', 'read')
QUOTES_UPDATE = Capability('quotes', 'update')
QUOTES_DELETE = Capability('quotes', 'delete')

ORDERS_CREATE = Capability('orders', 'create')
ORDERS_READ = Capability('orders', 'read')
ORDERS_UPDATE = Capability('orders', 'update')
ORDERS_DELETE = Capability('orders', 'delete')


@runtime_checkable
class PermissionGate(Protocol):
    """
    Protocol for capability checks.

    Implementations:
        - DjangoPermissionGate: user.has_perm('tradesman.<resource>_<action>')
        - AllowAllGate: development and tests
    """

    def allows(self, user: Any, capability: Capability) -> bool:
        """
        Is the user allowed to exercise the capability?

        Args:
            user: Current user (opaque to Tradesman)
            capability: Required resource + action

        Returns:
            True to allow, False to deny
        """
        ...
