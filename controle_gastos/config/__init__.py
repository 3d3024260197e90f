"""Configuration package."""

from controle_gastos.config.settings import (
    AppSettings,
    GastosApiSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "GastosApiSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
