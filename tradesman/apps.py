"""Django app configuration for Tradesman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class TradesmanConfig(AppConfig):
    """Configuration for Tradesman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "tradesman"
    verbose_name = _("Estoque e Vendas")
