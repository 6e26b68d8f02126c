"""
Tradesman Adapters.

Implementations of protocols for the host project.
"""

from tradesman.adapters.noop import AllowAllGate
from tradesman.adapters.permissions import (
    DjangoPermissionGate,
    get_permission_gate,
    reset_permission_gate,
)
from tradesman.adapters.unit_of_work import DjangoUnitOfWork

__all__ = [
    "AllowAllGate",
    "DjangoPermissionGate",
    "DjangoUnitOfWork",
    "get_permission_gate",
    "reset_permission_gate",
]
