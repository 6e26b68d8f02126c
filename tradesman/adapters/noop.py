"""
Noop Permission Gate — Stub adapter for development and testing.

Usage in settings.py:
    TRADESMAN = {
        "PERMISSION_GATE": "tradesman.adapters.noop.AllowAllGate",
    }

WARNING: Do NOT use in production. Every capability is granted to everyone,
including anonymous users.
"""

from __future__ import annotations

from typing import Any

from tradesman.protocols.permissions import Capability


class AllowAllGate:
    """
    No-operation permission gate.

    Implements the ``PermissionGate`` protocol without looking at the user,
    making it suitable for local development, unit tests and CI pipelines
    where no permission rows are seeded.
    """

    def allows(self, user: Any, capability: Capability) -> bool:
        return True
