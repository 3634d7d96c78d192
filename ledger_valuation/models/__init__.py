"""
Data Models Package

This package contains all Pydantic models used in Ledger Valuation.
All data flowing into and out of the valuation engine conforms to these schemas.
"""

from ledger_valuation.models.ledger import (
    Transaction,
    TransactionType,
)
from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    BalanceSheetReport,
    CategoryLink,
    ConfigValidationResult,
    GovernancePeriod,
    ItemCategory,
    ItemType,
    ItemValuation,
    LinkedCategoryEntry,
    NormalizedLink,
    ValidationIssue,
    link_name,
)
from ledger_valuation.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Transaction",
    "TransactionType",
    # Balance sheet models
    "BalanceSheetItem",
    "BalanceSheetReport",
    "CategoryLink",
    "ConfigValidationResult",
    "GovernancePeriod",
    "ItemCategory",
    "ItemType",
    "ItemValuation",
    "LinkedCategoryEntry",
    "NormalizedLink",
    "ValidationIssue",
    "link_name",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
