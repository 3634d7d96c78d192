"""Services package."""

from ledger_valuation.services.storage import (
    AuditStorageInterface,
    BalanceSheetStoreInterface,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryBalanceSheetStore,
    NotFoundError,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "BalanceSheetStoreInterface",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryBalanceSheetStore",
    "NotFoundError",
    "StorageError",
]
