"""
Tradesman configuration.

Usage in settings.py:
    TRADESMAN = {
        "PERMISSION_GATE": "tradesman.adapters.permissions.DjangoPermissionGate",
        "QUOTE_NUMBER_PREFIX": "ORC-",
        "ORDER_NUMBER_PREFIX": "OS-",
        "MAX_PAGE_SIZE": 100,
    }
"""

from dataclasses import dataclass
from typing import Any

from django.conf import settings


@dataclass
class TradesmanSettings:
    """Tradesman configuration settings."""

    # Permission gate backend (dotted path)
    PERMISSION_GATE: str = "tradesman.adapters.permissions.DjangoPermissionGate"

    # Document numbering
    QUOTE_NUMBER_PREFIX: str = "ORC-"
    ORDER_NUMBER_PREFIX: str = "OS-"
    NUMBER_WIDTH: int = 6

    # Pagination
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Validity of duplicated quotes, in days
    QUOTE_VALIDITY_DAYS: int = 30

    # Batch size for expire_reservations processing
    EXPIRED_BATCH_SIZE: int = 200


def get_tradesman_settings() -> TradesmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "TRADESMAN", {})
    return TradesmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in TradesmanSettings.__dataclass_fields__
    })


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_tradesman_settings(), name)


tradesman_settings = _LazySettings()
