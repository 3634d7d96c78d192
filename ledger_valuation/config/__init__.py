"""Configuration package."""

from ledger_valuation.config.settings import (
    AppSettings,
    LoggingSettings,
    Settings,
    ValuationSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LoggingSettings",
    "Settings",
    "ValuationSettings",
    "get_settings",
    "validate_all_settings",
]
