"""
Main Orchestrator for Ledger Valuation

Ties the pure valuation engine to host-owned state:
1. Compute (store → items/snapshot/starting balance → engine → report)
2. Configure (item edit → validate → save)

DESIGN DECISION: The orchestrator owns the "recompute on input change"
contract. Every compute() is a full recomputation from the three inputs
(items, ledger, snapshot); nothing is cached between calls.
"""

from collections.abc import Iterable
from decimal import Decimal
from typing import Optional
from uuid import UUID

from ledger_valuation.audit import AuditLogger, create_correlation_id
from ledger_valuation.config import get_settings
from ledger_valuation.models.balance_sheet import (
    BalanceSheetItem,
    BalanceSheetReport,
    ConfigValidationResult,
)
from ledger_valuation.models.ledger import Transaction
from ledger_valuation.services.storage import (
    BalanceSheetStoreInterface,
    InMemoryAuditStorage,
    InMemoryBalanceSheetStore,
    StorageError,
)
from ledger_valuation.validation import ItemConfigValidator
from ledger_valuation.valuation.engine import SnapshotSelection, resolve_cutoff
from ledger_valuation.valuation.summary import build_report


class BalanceSheetFlow:
    """
    Orchestrates balance sheet computation and item configuration.

    The ledger is always passed in by the caller; only item configuration,
    the selected snapshot and the starting cash balance live in the store.
    """

    def __init__(
        self,
        store: BalanceSheetStoreInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ItemConfigValidator] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger
        self._validator = validator or ItemConfigValidator()

    async def compute(
        self,
        transactions: Iterable[Transaction],
        snapshot: SnapshotSelection = None,
        correlation_id: Optional[UUID] = None,
    ) -> BalanceSheetReport:
        """
        Compute the full balance sheet.

        Args:
            transactions: The complete ledger
            snapshot: Overrides the stored snapshot selection if given

        Returns:
            BalanceSheetReport with per-item values and totals
        """
        correlation_id = correlation_id or create_correlation_id()
        transactions = list(transactions)

        items = await self._store.list_items()
        starting_balance = await self._store.get_starting_balance()
        if snapshot is None:
            snapshot = await self._store.get_snapshot()

        report = build_report(
            items,
            transactions,
            snapshot=snapshot,
            starting_balance=starting_balance,
            correlation_id=correlation_id,
        )

        if self._audit_logger:
            await self._audit_logger.log_valuation_computed(
                snapshot=report.snapshot,
                item_count=len(items),
                transaction_count=len(transactions),
                net_worth=report.net_worth,
                correlation_id=correlation_id,
            )

        return report

    async def select_snapshot(
        self,
        snapshot: SnapshotSelection,
        correlation_id: Optional[UUID] = None,
    ) -> Optional[str]:
        """
        Store a new snapshot selection.

        Returns:
            The cutoff date it resolves to (None = no limit)
        """
        correlation_id = correlation_id or create_correlation_id()

        cutoff = resolve_cutoff(snapshot)
        label = "today" if cutoff is None else str(snapshot)
        await self._store.set_snapshot(label)

        if self._audit_logger:
            await self._audit_logger.log_snapshot_selected(
                snapshot=label,
                cutoff=cutoff,
                correlation_id=correlation_id,
            )

        return cutoff

    async def set_starting_balance(
        self,
        amount: Decimal,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        correlation_id = correlation_id or create_correlation_id()
        amount = Decimal(str(amount))

        await self._store.set_starting_balance(amount)

        if self._audit_logger:
            await self._audit_logger.log_starting_balance_updated(
                amount=amount,
                correlation_id=correlation_id,
            )

    async def save_item(
        self,
        item: BalanceSheetItem,
        transactions: Optional[Iterable[Transaction]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[ConfigValidationResult, bool]:
        """
        Validate and save an item (add if new, update otherwise).

        Items with error-level issues are NOT saved.

        Returns:
            (validation_result, saved)
        """
        correlation_id = correlation_id or create_correlation_id()

        existing = await self._store.list_items()
        others = [other for other in existing if other.id != item.id]
        is_new = len(others) == len(existing)

        full = self._validator.validate([*others, item], transactions)
        item_issues = full.issues_for(item.id)
        result = ConfigValidationResult(
            item_count=1,
            is_valid=not any(i.severity == "error" for i in item_issues),
            issues=item_issues,
            warnings=[i.message for i in item_issues if i.severity == "warning"],
        )

        if not result.is_valid:
            if self._audit_logger:
                await self._audit_logger.log_config_validation_failed(
                    item_id=item.id,
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in item_issues
                    ],
                    correlation_id=correlation_id,
                )
            return result, False

        try:
            if is_new:
                await self._store.add_item(item)
            else:
                await self._store.update_item(item)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="save_item",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            await self._audit_logger.log_item_saved(
                item_id=item.id,
                name=item.name,
                created=is_new,
                correlation_id=correlation_id,
            )

        return result, True

    async def remove_item(
        self,
        item_id: str,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Remove an item. Returns False if it did not exist."""
        correlation_id = correlation_id or create_correlation_id()

        removed = await self._store.delete_item(item_id)

        if removed and self._audit_logger:
            await self._audit_logger.log_item_removed(
                item_id=item_id,
                correlation_id=correlation_id,
            )

        return removed

    async def restore_items(
        self,
        items: Iterable[BalanceSheetItem],
        transactions: Optional[Iterable[Transaction]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> tuple[ConfigValidationResult, bool]:
        """
        Replace the whole item list, e.g. with a previously saved sheet.

        The list is validated as a unit; any error-level issue leaves the
        stored items untouched.

        Returns:
            (validation_result, restored)
        """
        correlation_id = correlation_id or create_correlation_id()
        items = list(items)

        result = self._validator.validate(items, transactions)
        if not result.is_valid:
            if self._audit_logger:
                for item_id in sorted({
                    i.item_id for i in result.issues
                    if i.severity == "error" and i.item_id is not None
                }):
                    await self._audit_logger.log_config_validation_failed(
                        item_id=item_id,
                        issues=[
                            {"field": i.field, "type": i.issue_type, "message": i.message}
                            for i in result.issues_for(item_id)
                        ],
                        correlation_id=correlation_id,
                    )
            return result, False

        try:
            await self._store.replace_items(items)
        except StorageError as e:
            if self._audit_logger:
                await self._audit_logger.log_storage_error(
                    operation="restore_items",
                    error_message=str(e),
                    correlation_id=correlation_id,
                )
            raise

        if self._audit_logger:
            for item in items:
                await self._audit_logger.log_item_saved(
                    item_id=item.id,
                    name=item.name,
                    created=True,
                    correlation_id=correlation_id,
                )

        return result, True


def create_app_components(
    seed_defaults: bool = True,
) -> tuple[BalanceSheetFlow, InMemoryBalanceSheetStore]:
    """
    Factory function to create all application components.

    Args:
        seed_defaults: Start with the default capital-governance items.
                       Set to False for an empty balance sheet.

    Returns:
        (balance_sheet_flow, store)
    """
    settings = get_settings().valuation

    store = InMemoryBalanceSheetStore(
        items=None if seed_defaults else [],
        snapshot=settings.default_snapshot,
    )
    audit_logger = AuditLogger(InMemoryAuditStorage())

    flow = BalanceSheetFlow(
        store=store,
        audit_logger=audit_logger,
    )

    return flow, store
