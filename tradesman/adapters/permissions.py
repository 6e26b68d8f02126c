"""
Tradesman Permission Adapter — capability checks via django.contrib.auth.

This module provides the default PermissionGate and loads the configured one.

Usage:
    from tradesman.adapters import get_permission_gate

    gate = get_permission_gate()
    gate.allows(request.user, STOCK_WRITE)

Settings:
    TRADESMAN = {
        "PERMISSION_GATE": "tradesman.adapters.permissions.DjangoPermissionGate",
    }

Capability 'stock:write' maps to the Django permission 'tradesman.stock_write'.
The permissions are declared on the models' Meta so they are created by
migrate like any other permission.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

from tradesman.conf import tradesman_settings
from tradesman.protocols.permissions import Capability, PermissionGate

logger = logging.getLogger(__name__)


class DjangoPermissionGate:
    """PermissionGate backed by ``user.has_perm()``."""

    app_label = 'tradesman'

    def codename(self, capability: Capability) -> str:
        return f"{capability.resource}_{capability.action}"

    def allows(self, user: Any, capability: Capability) -> bool:
        if user is None or not getattr(user, 'is_active', False):
            return False
        return user.has_perm(f"{self.app_label}.{self.codename(capability)}")


# Cached gate instance
_lock = threading.Lock()
_permission_gate: PermissionGate | None = None


def get_permission_gate() -> PermissionGate:
    """
    Return the configured permission gate.

    Raises:
        ImproperlyConfigured: If PERMISSION_GATE is empty or import fails
    """
    global _permission_gate

    if _permission_gate is None:
        with _lock:
            if _permission_gate is None:  # double-checked
                gate_path = tradesman_settings.PERMISSION_GATE

                if not gate_path:
                    raise ImproperlyConfigured(
                        "TRADESMAN['PERMISSION_GATE'] must be configured. "
                        "Example: 'tradesman.adapters.permissions.DjangoPermissionGate'"
                    )

                try:
                    gate_class = import_string(gate_path)
                    _permission_gate = gate_class()
                    logger.debug("Loaded permission gate: %s", gate_path)
                except ImportError as e:
                    raise ImproperlyConfigured(
                        f"Failed to import permission gate '{gate_path}': {e}"
                    ) from e

    return _permission_gate


def reset_permission_gate() -> None:
    """Reset the cached gate. Useful for testing."""
    global _permission_gate
    _permission_gate = None
