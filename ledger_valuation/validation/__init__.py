"""Configuration validation package."""

from ledger_valuation.validation.validator import ItemConfigValidator

__all__ = ["ItemConfigValidator"]
