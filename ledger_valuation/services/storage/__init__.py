"""
Storage Services Package

Provides abstract interfaces and an in-memory implementation for the
host-owned balance sheet configuration and the audit trail.
"""

from ledger_valuation.services.storage.interface import (
    AuditStorageInterface,
    BalanceSheetStoreInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from ledger_valuation.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryBalanceSheetStore,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "BalanceSheetStoreInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryBalanceSheetStore",
]
