"""
Tradesman Protocols.

Defines interfaces for the collaborators services receive.
"""

from tradesman.protocols.permissions import Capability, PermissionGate
from tradesman.protocols.unit_of_work import UnitOfWork

__all__ = [
    "Capability",
    "PermissionGate",
    "UnitOfWork",
]
